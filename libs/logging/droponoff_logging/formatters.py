"""Log formatters for droponoff."""

import logging
from datetime import datetime

# Attributes every LogRecord carries; anything else came in through extra=
_RESERVED_KEYS = {
    'name', 'msg', 'args', 'created', 'filename', 'funcName',
    'levelname', 'levelno', 'lineno', 'module', 'msecs',
    'message', 'pathname', 'process', 'processName',
    'relativeCreated', 'thread', 'threadName', 'exc_info',
    'exc_text', 'stack_info', 'taskName'
}


def _quote(value: str) -> str:
    if ' ' in value or '"' in value:
        return '"' + value.replace('"', '\\"') + '"'
    return value


class LogfmtFormatter(logging.Formatter):
    """Logfmt formatter: level=INFO ts=2025-01-01T12:00:00 msg="message" key=value"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as logfmt key=value pairs.

        Args:
            record: Log record to format

        Returns:
            Formatted log string
        """
        parts = [
            f'level={record.levelname}',
            f'ts={datetime.fromtimestamp(record.created).isoformat()}',
            f'component={record.name}',
            f'msg={_quote(record.getMessage().strip())}',
        ]

        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            if exc_text:
                exc_text = exc_text.replace('\n', '\\n').replace('"', '\\"')
                parts.append(f'error="{exc_text}"')

        for key, value in record.__dict__.items():
            if key in _RESERVED_KEYS or key.startswith('_'):
                continue
            if isinstance(value, str):
                parts.append(f'{key}={_quote(value)}')
            else:
                parts.append(f'{key}={value}')

        return ' '.join(parts)


class StepFormatter(logging.Formatter):
    """Human-facing console formatter for step-by-step progress output.

    Messages are printed bare, with a prefix picked from their content
    and level:

    - a ``✓`` success mark is rendered as ``✅``
    - a leading ``→`` step arrow is rendered as ``ℹ️``
    - warnings get ``⚠️`` and errors get ``❌``
    """

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()

        if '✓' in message:
            return message.replace('✓', '✅')

        if message.startswith('→'):
            return message.replace('→', 'ℹ️', 1)

        if record.levelno >= logging.ERROR:
            return f'❌ {message}'
        if record.levelno >= logging.WARNING:
            return f'⚠️  {message}'

        return message
