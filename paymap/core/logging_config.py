# paymap/core/logging_config.py
"""
Logging configuration for paymap.

The engine itself only emits records through module loggers; hosts that
embed it call setup_logging() once at startup to get structured output
(JSON with file rotation in production, colored console in development).
"""

import json
import logging
import logging.handlers
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path

#: LogContext instances active in the current thread or task, outermost first.
_active_contexts: ContextVar[tuple["LogContext", ...]] = ContextVar("paymap_log_context", default=())


def is_production() -> bool:
    """True when the PRODUCTION environment variable is set to "true"."""
    return os.getenv("PRODUCTION", "false").lower() == "true"


def get_log_dir() -> Path:
    return Path(os.getenv("LOG_DIR", "logs"))


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per record for log aggregation tools.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        # Computation context set through LogContext
        for attr in ("year", "month", "date", "shift_id"):
            if hasattr(record, attr):
                log_data[attr] = getattr(record, attr)

        return json.dumps(log_data, ensure_ascii=False)


class ColoredFormatter(logging.Formatter):
    """
    Colored formatter for console output in development.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging() -> None:
    """
    Configure logging for a host application.

    In production:
    - JSON format
    - Logs to rotating files under LOG_DIR
    - INFO level, separate error log file

    In development:
    - Colored console output
    - DEBUG level
    """
    production = is_production()

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO if production else logging.DEBUG)
    root_logger.handlers.clear()
    context_filter = ContextFilter()

    if production:
        log_dir = get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)

        app_handler = logging.handlers.RotatingFileHandler(
            log_dir / "paymap.log",
            maxBytes=10_000_000,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        app_handler.setLevel(logging.INFO)
        app_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(app_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            log_dir / "error.log",
            maxBytes=10_000_000,  # 10MB
            backupCount=10,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(error_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(console_handler)
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(
            ColoredFormatter(
                fmt="%(levelname)-8s %(asctime)s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(console_handler)

    for handler in root_logger.handlers:
        handler.addFilter(context_filter)

    logger = logging.getLogger(__name__)
    logger.info(
        "Logging configured (production=%s)",
        production,
        extra={"extra_fields": {"production": production}},
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class ContextFilter(logging.Filter):
    """Copy the fields of every active LogContext onto the record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for context in _active_contexts.get():
            for key, value in context.extra_fields.items():
                setattr(record, key, value)
        return True


class LogContext:
    """
    Context manager for adding extra fields to log records.

    The active contexts live in a ContextVar, so each thread or task sees
    only its own, and leaving one context removes exactly its fields.
    Fields reach records through ContextFilter, which setup_logging()
    attaches to every handler.

    Usage:
        with LogContext(year=2024, month=9):
            logger.info("Computing month")
    """

    def __init__(self, **kwargs):
        self.extra_fields = kwargs

    def __enter__(self):
        _active_contexts.set(_active_contexts.get() + (self,))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _active_contexts.set(tuple(c for c in _active_contexts.get() if c is not self))
