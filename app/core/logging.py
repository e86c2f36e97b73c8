"""Match notifications structured logging module."""

import logging
import inspect
import sys
import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional
import structlog
from structlog.stdlib import BoundLogger
from .config import settings

REDACTED = "***REDACTED***"

# Credentials that must never reach the logs
SECRET_KEYS = frozenset(
    {
        "access_token",
        "authorization",
        "private_key",
        "service_role_key",
        "webhook_secret",
        "secret",
    }
)

# Device tokens are only ever logged as a short prefix
DEVICE_TOKEN_KEYS = frozenset({"token", "fcm_token"})
DEVICE_TOKEN_PREFIX_LENGTH = 10


def mask_sensitive_fields(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Redact credentials and shorten device tokens in a log entry."""
    for key, value in event_dict.items():
        if value is None:
            continue
        key_lower = key.lower()
        if key_lower in SECRET_KEYS:
            event_dict[key] = REDACTED
        elif key_lower in DEVICE_TOKEN_KEYS and isinstance(value, str):
            event_dict[key] = value[:DEVICE_TOKEN_PREFIX_LENGTH]
    return event_dict


def add_service_info(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    event_dict.setdefault("service", "match-notifications")
    event_dict.setdefault("git_sha", settings.GIT_SHA)
    return event_dict


def _is_test_environment() -> bool:
    """Detect if running in a test environment."""
    return "pytest" in sys.modules


def _configure_silent_logging() -> BoundLogger:
    logging.root.setLevel(logging.CRITICAL + 1)

    # Processors are still needed to avoid errors, but nothing is emitted
    # because the root logger level is above CRITICAL
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            mask_sensitive_fields,
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=logging.CRITICAL + 1,
        force=True,
    )
    return structlog.stdlib.get_logger()


def configure_logging() -> BoundLogger:
    """Configure structured logging for the application.

    Production (empty PREFIX) renders JSON lines, any other environment renders
    for the console. Output is silenced under pytest.
    """
    if _is_test_environment():
        return _configure_silent_logging()

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_info,
        mask_sensitive_fields,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.is_production:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    )

    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with full path context."""
    current_frame = inspect.currentframe()
    if current_frame is None:
        return logger

    frame = current_frame.f_back
    module = inspect.getmodule(frame)

    if module:
        module_name = module.__name__

        parts = module_name.split(".")

        context = {
            "component": parts[-1],
            "module_path": module_name,
        }

        return logger.bind(**context)

    return logger.bind(component="unknown")


@contextmanager
def bind_event_context(
    correlation_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind event-scoped context to all logs within the context manager.

    Every log entry emitted while handling one change event carries the same
    correlation id, so the classification, resolution and per-token delivery
    lines of a single invocation can be grouped together.

    Args:
        correlation_id: Unique invocation identifier. Generated if not provided.
        **extra_context: Additional key-value pairs to include in logs.
            Values of None are skipped.

    Yields:
        The correlation id bound for this block.

    Example:
        with bind_event_context(event_kind="reminder", match_id="42"):
            logger.info("processing_change_event")
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}
    context.update({k: v for k, v in extra_context.items() if v is not None})

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())
