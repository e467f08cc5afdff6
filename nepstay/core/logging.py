"""
Logging setup for the NepStay API.

Application code logs through the standard library. The console handler
renders JSON with python-json-logger, or key=value text through structlog.
In text mode every record runs the structlog processors that attach the
request id, the signed-in admin and security markers. JSON output applies
the same helpers in its formatter. Secrets are masked before rendering.
"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, Optional

import structlog
from pythonjsonlogger import jsonlogger

from nepstay.config.settings import settings

SERVICE_NAME = "nepstay-api"

request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
admin_id: ContextVar[Optional[str]] = ContextVar("admin_id", default=None)

SENSITIVE_KEYS = ("password", "token", "secret", "cookie", "authorization", "session")
SECURITY_KEYWORDS = ("login", "logout", "locked", "token", "rate limit", "not authorized")

# seconds
SLOW_REQUEST = 2.0
MODERATE_REQUEST = 0.5

_console_handler: Optional[logging.Handler] = None


def redact(values: Dict[str, Any]) -> Dict[str, Any]:
    """Mask sensitive keys in place, recursing into nested dicts"""
    for key, value in list(values.items()):
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            values[key] = "[REDACTED]"
        elif isinstance(value, dict):
            redact(value)
    return values


def _bind_context(target: MutableMapping[str, Any]) -> None:
    req_id = request_id.get()
    if req_id and "request_id" not in target:
        target["request_id"] = req_id

    current_admin = admin_id.get()
    if current_admin and "admin_id" not in target:
        target["admin_id"] = current_admin


# ---------------------------------------------------------------------------
# structlog processors
# ---------------------------------------------------------------------------

def add_service_context(logger, method_name, event_dict):
    _bind_context(event_dict)
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    event_dict["service"] = SERVICE_NAME
    event_dict["environment"] = settings.ENVIRONMENT
    return event_dict


def tag_security_events(logger, method_name, event_dict):
    event = str(event_dict.get("event", "")).lower()
    if any(keyword in event for keyword in SECURITY_KEYWORDS):
        event_dict["security_event"] = True
    return redact(event_dict)


def categorize_latency(logger, method_name, event_dict):
    elapsed = event_dict.get("execution_time")
    if isinstance(elapsed, (int, float)):
        if elapsed >= SLOW_REQUEST:
            event_dict["latency"] = "slow"
        elif elapsed >= MODERATE_REQUEST:
            event_dict["latency"] = "moderate"
        else:
            event_dict["latency"] = "fast"
    return event_dict


class NepStayJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record, with request context and redaction."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = SERVICE_NAME
        log_record["location"] = f"{record.module}:{record.funcName}:{record.lineno}"
        _bind_context(log_record)

        message = record.getMessage().lower()
        if any(keyword in message for keyword in SECURITY_KEYWORDS):
            log_record["security_event"] = True
        redact(log_record)
        categorize_latency(None, record.levelname, log_record)


def _shared_processors() -> list:
    return [
        add_service_context,
        tag_security_events,
        categorize_latency,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]


def console_formatter(log_format: str, structured: bool = True) -> logging.Formatter:
    """
    Formatter for the console handler.

    Text output goes through structlog's ``ProcessorFormatter``, so stdlib
    records and their ``extra`` fields pass the same processors as structlog
    events before rendering.
    """
    if log_format == "json":
        return NepStayJsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    if not structured:
        return logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[structlog.stdlib.ExtraAdder()] + _shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"]),
        ],
    )


def _configure_structlog() -> None:
    structlog.configure(
        processors=[structlog.stdlib.filter_by_level]
        + _shared_processors()
        + [
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def _configure_handlers() -> None:
    level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(console_formatter(settings.LOG_FORMAT, settings.ENABLE_STRUCTURED_LOGGING))

    global _console_handler
    root = logging.getLogger()
    root.setLevel(level)
    if _console_handler is not None:
        root.removeHandler(_console_handler)
    root.addHandler(handler)
    _console_handler = handler

    for noisy, noisy_level in (
        ("uvicorn.access", logging.WARNING),
        ("pymongo", logging.WARNING),
        ("httpx", logging.WARNING),
        ("urllib3", logging.WARNING),
    ):
        logging.getLogger(noisy).setLevel(noisy_level)


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter carrying fixed context fields.

    Per-call ``extra`` values win over the bound context.
    """

    def __init__(self, logger: logging.Logger, context: Optional[Dict[str, Any]] = None):
        super().__init__(logger, dict(context or {}))

    def add_context(self, **fields: Any) -> "ContextLogger":
        self.extra.update(fields)
        return self

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(name: Optional[str] = None) -> ContextLogger:
    return ContextLogger(logging.getLogger(name or "nepstay"))


def setup_logging() -> None:
    """Configure structlog and the root handler from settings; safe to call again."""
    if settings.ENABLE_STRUCTURED_LOGGING:
        _configure_structlog()
    _configure_handlers()

    get_logger(__name__).info(
        "Logging configured",
        extra={
            "log_level": settings.LOG_LEVEL,
            "log_format": settings.LOG_FORMAT,
            "structured": settings.ENABLE_STRUCTURED_LOGGING,
        },
    )


__all__ = [
    "ContextLogger",
    "console_formatter",
    "admin_id",
    "get_logger",
    "redact",
    "request_id",
    "setup_logging",
]
