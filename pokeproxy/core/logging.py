import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Optional

from pokeproxy.core.config import Settings, get_settings

# Context variable for request tracking
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "correlation_id"}


class ContextFilter(logging.Filter):
    """Stamp the current correlation ID onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id.get()
        return True


class StructuredLogFormatter(logging.Formatter):
    """
    Custom formatter for structured JSON logs.

    Creates a JSON-formatted log entry with standardized fields like
    timestamp, log level, message, correlation ID, etc.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add correlation ID if available
        corr_id = getattr(record, "correlation_id", "") or correlation_id.get()
        if corr_id:
            log_data["correlation_id"] = corr_id

        # Add exception info if available
        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        # Add extra data passed through `extra=`
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        return json.dumps(log_data, default=str)


CONSOLE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] [%(correlation_id)s] - %(message)s"

# Per-request access lines come from our middleware; upstream calls are
# logged by the PokeAPI client
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def configure_logging(settings: Optional[Settings] = None) -> logging.Handler:
    """
    Install a single stdout handler on the root logger.

    JSON lines when ENABLE_STRUCTURED_LOGGING is set, a bracketed console
    format otherwise. Returns the installed handler.
    """
    settings = settings or get_settings()
    root_logger = logging.getLogger()

    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ContextFilter())
    if settings.ENABLE_STRUCTURED_LOGGING:
        handler.setFormatter(StructuredLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name, typically the module name

    Returns:
        logging.Logger: Logger instance
    """
    return logging.getLogger(name)


def set_correlation_id(corr_id: Optional[str] = None) -> str:
    """
    Set the correlation ID for the current context.

    Args:
        corr_id: Correlation ID to set. If None, a new UUID is generated.

    Returns:
        str: The correlation ID that was set
    """
    corr_id = corr_id or str(uuid.uuid4())
    correlation_id.set(corr_id)
    return corr_id


def get_correlation_id() -> str:
    return correlation_id.get()
