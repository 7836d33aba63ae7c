"""
Logging setup.

Every record carries the request id and, once authenticated, the user id.
Output is JSON or plain text, to stdout and optionally a rotating file.
structlog shares the same handlers and is used for the access log.
"""

import logging
import logging.handlers
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from pythonjsonlogger import jsonlogger

from hostelhub.config.settings import settings

SERVICE_NAME = "hostelhub"

request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
user_id: ContextVar[Optional[str]] = ContextVar("user_id", default=None)

# Booking payloads carry bank account numbers
SENSITIVE_KEYS = ("password", "token", "secret", "authorization", "account")

_configured = False


def _redact(event: Dict[str, Any]) -> None:
    for key in list(event.keys()):
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            event[key] = "[REDACTED]"
        elif isinstance(event[key], dict):
            _redact(event[key])


class RequestContextProcessor:
    """Add the request context to structlog events"""

    def __call__(self, logger, method_name, event_dict):
        event_dict.setdefault("request_id", request_id.get())
        uid = user_id.get()
        if uid:
            event_dict["user_id"] = uid
        event_dict["service"] = SERVICE_NAME
        event_dict["environment"] = settings.ENVIRONMENT
        return event_dict


class RedactionProcessor:
    def __call__(self, logger, method_name, event_dict):
        _redact(event_dict)
        return event_dict


class RequestContextFilter(logging.Filter):
    """Copy the request context onto stdlib records and mask sensitive extras"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id.get()
        record.user_id = user_id.get()
        for key in list(vars(record)):
            if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
                setattr(record, key, "[REDACTED]")
        return True


class HostelHubJsonFormatter(jsonlogger.JsonFormatter):

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = SERVICE_NAME
        log_record["location"] = f"{record.module}.{record.funcName}:{record.lineno}"


class LoggingConfig:
    """Process-wide logging configuration"""

    @staticmethod
    def configure_structured_logging():
        processors = [
            structlog.stdlib.filter_by_level,
            RequestContextProcessor(),
            RedactionProcessor(),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
        ]
        if settings.LOG_FORMAT == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"]))

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def configure_standard_logging():
        level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        if settings.LOG_FORMAT == "json":
            formatter = HostelHubJsonFormatter("%(asctime)s %(levelname)s %(message)s")
        else:
            formatter = logging.Formatter(
                "%(asctime)s %(levelname)-7s %(name)s [%(request_id)s] %(message)s"
            )

        handlers = [logging.StreamHandler(sys.stdout)]
        if settings.LOG_FILE:
            log_path = Path(settings.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                logging.handlers.RotatingFileHandler(log_path, maxBytes=10 * 1024 * 1024, backupCount=5)
            )

        context_filter = RequestContextFilter()
        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            handler.addFilter(context_filter)
            root_logger.addHandler(handler)

        # Library chatter
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.DB_ECHO else logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("cloudinary").setLevel(logging.WARNING)


class LoggerAdapter:
    """Thin wrapper so modules log through ``get_logger`` with ``extra`` fields"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def debug(self, message: str, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self.logger.error(message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        self.logger.critical(message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    return LoggerAdapter(logging.getLogger(name or SERVICE_NAME))


def setup_logging(force: bool = False) -> None:
    """Configure logging once per process; ``force`` re-applies settings"""
    global _configured
    if _configured and not force:
        return

    if settings.ENABLE_STRUCTURED_LOGGING:
        LoggingConfig.configure_structured_logging()
    LoggingConfig.configure_standard_logging()
    _configured = True

    get_logger(__name__).info(
        "Logging configured",
        extra={"log_level": settings.LOG_LEVEL, "log_format": settings.LOG_FORMAT},
    )


__all__ = [
    "LoggerAdapter",
    "LoggingConfig",
    "get_logger",
    "request_id",
    "setup_logging",
    "user_id",
]
