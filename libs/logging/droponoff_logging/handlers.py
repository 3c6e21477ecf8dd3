"""Log handlers for droponoff."""

import logging
import logging.handlers
import sys
from pathlib import Path


def create_file_handler(
    log_file: Path,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    formatter: logging.Formatter | None = None
) -> logging.Handler:
    """Create a rotating file handler.

    Args:
        log_file: Path to log file
        max_bytes: Maximum file size before rotation
        backup_count: Number of backup files to keep
        formatter: Log formatter to use

    Returns:
        Configured file handler
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )

    if formatter:
        handler.setFormatter(formatter)

    return handler


class StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever sys.stderr is at emit time."""

    def __init__(self):
        super().__init__(None)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def create_console_handler(
    formatter: logging.Formatter | None = None,
    stream=None
) -> logging.Handler:
    """Create a console handler.

    Args:
        formatter: Log formatter to use
        stream: Stream to write to (defaults to the current stderr)

    Returns:
        Configured console handler
    """
    handler = logging.StreamHandler(stream) if stream else StderrHandler()

    if formatter:
        handler.setFormatter(formatter)

    return handler


def create_syslog_handler(
    address: str | tuple = '/var/run/syslog',
    facility: int = logging.handlers.SysLogHandler.LOG_USER,
    formatter: logging.Formatter | None = None
) -> logging.Handler | None:
    """Create a syslog handler.

    Args:
        address: Syslog address (path or (host, port) tuple)
        facility: Syslog facility
        formatter: Log formatter to use

    Returns:
        Configured syslog handler or None if syslog not available
    """
    if isinstance(address, str) and not Path(address).exists():
        for candidate in ('/var/run/syslog', '/dev/log'):
            if Path(candidate).exists():
                address = candidate
                break
        else:
            return None

    try:
        handler = logging.handlers.SysLogHandler(
            address=address,
            facility=facility
        )
    except OSError:
        return None

    if formatter:
        handler.setFormatter(formatter)

    return handler
