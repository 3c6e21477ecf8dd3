"""droponoff centralized logger."""

import logging
import os
from pathlib import Path
from typing import Any

from droponoff_logging.formatters import LogfmtFormatter, StepFormatter
from droponoff_logging.handlers import (
    create_console_handler,
    create_file_handler,
    create_syslog_handler,
)


def _default_log_dir() -> Path:
    env_dir = os.getenv('DROPONOFF_LOG_DIR')
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / '.droponoff' / 'logs'


class DroponoffLogger:
    """Centralized logger for droponoff components.

    Every record goes to a rotating logfmt file. Console output uses the
    step formatter so the same calls double as the user-facing progress
    report of a CLI run.
    """

    def __init__(
        self,
        name: str,
        log_dir: Path | None = None,
        level: str = "INFO",
        max_file_size: int = 10 * 1024 * 1024,
        backup_count: int = 5,
        enable_syslog: bool = False,
        enable_console: bool = True
    ):
        """Initialize the logger.

        Args:
            name: Logger name (will be prefixed with 'droponoff.')
            log_dir: Directory for log files
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            max_file_size: Maximum log file size before rotation
            backup_count: Number of backup files to keep
            enable_syslog: Whether to enable syslog handler
            enable_console: Whether to enable console handler
        """
        self.name = f'droponoff.{name}'
        self.logger = logging.getLogger(self.name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.propagate = False

        self.log_dir = log_dir or _default_log_dir()
        self.formatter = LogfmtFormatter()

        self.logger.handlers.clear()

        self._setup_file_handler(max_file_size, backup_count)

        if enable_console:
            self._setup_console_handler()

        if enable_syslog:
            self._setup_syslog_handler()

    def _setup_file_handler(self, max_bytes: int, backup_count: int):
        """Setup rotating file handler."""
        log_file = self.log_dir / f'{self.name}.log'
        handler = create_file_handler(
            log_file,
            max_bytes=max_bytes,
            backup_count=backup_count,
            formatter=self.formatter
        )
        self.logger.addHandler(handler)

    def _setup_console_handler(self):
        """Setup console handler."""
        handler = create_console_handler(formatter=StepFormatter())
        self.logger.addHandler(handler)

    def _setup_syslog_handler(self):
        """Setup syslog handler if available."""
        handler = create_syslog_handler(formatter=self.formatter)
        if handler:
            self.logger.addHandler(handler)

    def set_level(self, level: str):
        """Change the threshold of an existing logger."""
        self.logger.setLevel(getattr(logging, level.upper()))

    def _log(self, level: int, msg: str, **kwargs):
        """Log a message with extra context.

        Args:
            level: Log level
            msg: Log message
            **kwargs: Extra context to include in log
        """
        self.logger.log(level, msg, extra=dict(kwargs), stacklevel=3)

    def debug(self, msg: str, **kwargs):
        """Log debug message."""
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        """Log info message."""
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        """Log warning message."""
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs):
        """Log error message."""
        self._log(logging.ERROR, msg, **kwargs)

    def critical(self, msg: str, **kwargs):
        """Log critical message."""
        self._log(logging.CRITICAL, msg, **kwargs)

    def exception(self, msg: str, **kwargs):
        """Log exception with traceback."""
        self.logger.exception(msg, extra=kwargs, stacklevel=2)


# Global logger cache
_loggers: dict[str, DroponoffLogger] = {}

# Defaults applied to loggers created after configure()
_defaults: dict[str, Any] = {
    'log_dir': None,
    'level': 'INFO',
    'enable_console': True,
    'enable_syslog': False,
}


def get_logger(
    name: str,
    log_dir: Path | None = None,
    level: str | None = None,
    **kwargs
) -> DroponoffLogger:
    """Get or create a droponoff logger.

    Args:
        name: Logger name
        log_dir: Log directory (defaults to the configured one)
        level: Log level (defaults to the configured one)
        **kwargs: Additional logger arguments

    Returns:
        Logger instance
    """
    if name not in _loggers:
        options = {
            'enable_console': _defaults['enable_console'],
            'enable_syslog': _defaults['enable_syslog'],
            **kwargs,
        }
        _loggers[name] = DroponoffLogger(
            name,
            log_dir=log_dir or _defaults['log_dir'],
            level=level or _defaults['level'],
            **options
        )
    return _loggers[name]


def configure(
    level: str | None = None,
    log_dir: Path | None = None,
    enable_console: bool | None = None,
    enable_syslog: bool | None = None,
):
    """Set logging defaults and rebuild any loggers already handed out.

    Modules create their loggers at import time, before the CLI has read
    its configuration, so existing loggers are re-initialized in place.

    Args:
        level: Log level name
        log_dir: Directory for log files
        enable_console: Whether loggers write to stderr
        enable_syslog: Whether loggers write to syslog
    """
    if level is not None:
        _defaults['level'] = level
    if log_dir is not None:
        _defaults['log_dir'] = Path(log_dir).expanduser()
    if enable_console is not None:
        _defaults['enable_console'] = enable_console
    if enable_syslog is not None:
        _defaults['enable_syslog'] = enable_syslog

    for name, existing in list(_loggers.items()):
        for handler in existing.logger.handlers:
            handler.close()
        _loggers[name] = DroponoffLogger(
            name,
            log_dir=_defaults['log_dir'],
            level=_defaults['level'],
            enable_console=_defaults['enable_console'],
            enable_syslog=_defaults['enable_syslog'],
        )


def configure_from_config(config: Any):
    """Configure logging from a droponoff config object.

    Args:
        config: Config object with a ``logging`` section
    """
    if not hasattr(config, 'logging'):
        return

    log_config = config.logging
    configure(
        level=log_config.level,
        log_dir=Path(log_config.log_dir) if log_config.log_dir else None,
        enable_console=log_config.console,
        enable_syslog=log_config.syslog,
    )
