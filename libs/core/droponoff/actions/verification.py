"""Convergence checks over snapshots and the bounded retry that applies them."""

import time
from typing import Callable

from droponoff.errors import VerificationFailure
from droponoff.models.launchctl import ServiceState
from droponoff.models.status import SystemSnapshot
from droponoff_logging import get_logger

logger = get_logger("verification")

# A check returns the unsatisfied conditions; an empty list means converged
Check = Callable[[SystemSnapshot], list[str]]


def off_problems(snapshot: SystemSnapshot) -> list[str]:
    """Conditions keeping the snapshot from being fully OFF."""
    problems = []

    if snapshot.processes:
        problems.append(f"Still running: {len(snapshot.processes)} process(es)")

    if snapshot.service_state is not ServiceState.DISABLED:
        problems.append(f"LaunchAgent state: {snapshot.service_state.value}")

    enabled = snapshot.enabled_extensions()
    if enabled:
        problems.append(f"Extensions still enabled: {', '.join(enabled)}")

    return problems


def on_problems(snapshot: SystemSnapshot, exempt: frozenset[str] = frozenset()) -> list[str]:
    """Conditions keeping the snapshot from being fully ON.

    Identifiers in ``exempt`` are not required to be enabled. The OFF
    check has no such exemption.
    """
    problems = []

    if not snapshot.processes:
        problems.append("No processes running yet")

    if snapshot.service_state is not ServiceState.ENABLED:
        problems.append(f"LaunchAgent state: {snapshot.service_state.value}")

    disabled = snapshot.disabled_extensions(exempt)
    if disabled:
        problems.append(f"Extensions still disabled: {', '.join(disabled)}")

    return problems


def aggregate_mode(snapshot: SystemSnapshot, exempt: frozenset[str] = frozenset()) -> str:
    """Derive "on", "off" or "partial" for display."""
    if not off_problems(snapshot):
        return "off"
    if not on_problems(snapshot, exempt):
        return "on"
    return "partial"


def verify_with_retry(
    snapshot_fn: Callable[[], SystemSnapshot],
    check: Check,
    max_attempts: int = 5,
    delay: float = 0.5,
    sleep: Callable[[float], None] = time.sleep,
) -> SystemSnapshot:
    """Take snapshots until ``check`` passes or the attempts run out.

    Only observes: each attempt takes a fresh snapshot and evaluates the
    check, sleeping between attempts but not after the last one.

    Args:
        snapshot_fn: Produces a fresh snapshot
        check: Returns the unsatisfied conditions of a snapshot
        max_attempts: Number of snapshots to evaluate at most
        delay: Seconds to wait between attempts
        sleep: Sleep function

    Returns:
        The first snapshot that satisfied the check

    Raises:
        VerificationFailure: If no attempt satisfied the check
        ValueError: If max_attempts is not positive
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    problems: list[str] = []
    for attempt in range(1, max_attempts + 1):
        snapshot = snapshot_fn()
        problems = check(snapshot)

        if not problems:
            return snapshot

        for problem in problems:
            logger.warning(f"  {problem}", attempt=attempt)

        if attempt < max_attempts:
            sleep(delay)

    raise VerificationFailure(max_attempts, problems)
