"""droponoff centralized logging: logfmt to file, step lines to the console."""

from droponoff_logging.logger import (
    DroponoffLogger,
    configure,
    configure_from_config,
    get_logger,
)
from droponoff_logging.formatters import LogfmtFormatter, StepFormatter
from droponoff_logging.handlers import (
    StderrHandler,
    create_file_handler,
    create_console_handler,
    create_syslog_handler
)

__all__ = [
    "DroponoffLogger",
    "get_logger",
    "configure",
    "configure_from_config",
    "LogfmtFormatter",
    "StepFormatter",
    "StderrHandler",
    "create_file_handler",
    "create_console_handler",
    "create_syslog_handler",
]
