"""
Structured logging configuration for spanset.

Provides:
- JSON-formatted logs (machine-readable)
- Human-readable logs for development
- Level and format driven by settings when not given explicitly

The library never configures logging on import. Applications opt in:

The engine logs at DEBUG only, one record per event, with the event's numbers
as extra fields:

- "Merging out-of-order chunks" (normalizer): ``chunks``, ``bounds``
- "Fast path taken" (dispatch): ``operation``
- "Transform elided or coalesced spans" (shift/scale): ``elided``

Usage:
    import spanset
    from spanset.logging import setup_logging

    setup_logging(level="DEBUG")
    spanset.union([0, 1], [5, 6])
    # ... DEBUG    [spanset.core.dispatch] Fast path taken operation=union
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

LIBRARY_LOGGER = "spanset"

# Standard LogRecord attributes, never treated as extra fields
_SKIP_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "taskName", "message",
})


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _SKIP_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record. Extra fields sit next to the fixed keys;
    values JSON can't encode are written with ``str()``.

    A normalize call on unsorted input gives:
    {"timestamp": "2024-01-15T10:30:00.123456+00:00", "level": "DEBUG",
     "logger": "spanset.core.normalizer", "message": "Merging out-of-order chunks",
     "chunks": 2, "bounds": 8}

    WARNING and above also carry a ``source`` object (file, line, function).
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.levelno >= logging.WARNING:
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in _extra_fields(record).items():
            try:
                json.dumps(value)
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """
    One line per record, extra fields appended as ``key=value``.

    A shift that drops a collapsed span gives:
    2024-01-15 10:30:00 DEBUG    [spanset.core.affine] Transform elided or coalesced spans elided=1
    """

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname

        if self.use_colors:
            color = self.COLORS.get(level, "")
            level = f"{color}{level}{self.RESET}"

        extra_str = " ".join(f"{k}={v}" for k, v in _extra_fields(record).items())
        if extra_str:
            extra_str = " " + extra_str

        message = f"{timestamp} {level:8} [{record.name}] {record.getMessage()}{extra_str}"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


def setup_logging(
    level: str | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """
    Configure the ``spanset`` logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to settings.
        json_format: Use JSON formatting. Defaults to settings.
        log_file: Optional file path to write logs. Defaults to settings.
    """
    from spanset.config import get_settings

    settings = get_settings().logging
    if level is None:
        level = settings.level
    if json_format is None:
        json_format = settings.json_format
    if log_file is None:
        log_file = settings.file

    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = DevelopmentFormatter(use_colors=sys.stderr.isatty())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        # File logs are always JSON
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
