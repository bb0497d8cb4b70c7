import json
import logging
import sys
from typing import Dict, Any, Optional

from chat_relay.config import get_settings

settings = get_settings()

# Attributes every LogRecord carries; anything else was passed through `extra`.
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class CustomJsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as a JSON string.

        Args:
            record: The log record to format

        Returns:
            str: JSON formatted log string
        """
        log_object = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "service": settings.SERVICE_NAME,
            "environment": settings.ENVIRONMENT,
        }

        # Add extra attributes
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_object[key] = value

        # Add exception info if available
        if record.exc_info:
            log_object["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_object, default=str)


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure global logging settings."""
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if (log_format or settings.LOG_FORMAT) == "json":
        handler.setFormatter(CustomJsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )

    logging.basicConfig(
        level=log_level,
        handlers=[handler],
        force=True
    )

    # Set levels for third-party loggers to reduce noise
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
    logging.getLogger("fastapi").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Name for the logger

    Returns:
        logging.Logger: Configured logger instance
    """
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """
    Adapter for adding connection and request context to logs.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Process the log message to add context data."""
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_connection_logger(name: str, connection_id: str) -> LoggerAdapter:
    """
    Get a logger bound to a single websocket connection.

    Args:
        name: Logger name
        connection_id: Identifier of the live connection

    Returns:
        LoggerAdapter: Logger adapter that tags every record with the connection id
    """
    return LoggerAdapter(get_logger(name), {"connection_id": connection_id})


def get_request_logger(name: str, correlation_id: Optional[str] = None) -> LoggerAdapter:
    """
    Get a logger configured with HTTP request context.

    Args:
        name: Logger name
        correlation_id: Request correlation ID for tracing

    Returns:
        LoggerAdapter: Configured logger adapter
    """
    extra = {}
    if correlation_id:
        extra["correlation_id"] = correlation_id
    return LoggerAdapter(get_logger(name), extra)
