"""
Logging configuration for the contact relay.

- Structured JSON logging in production, console rendering elsewhere
- trace_id from the request context injected into every record
- Log level from LOG_LEVEL or a per-environment default
"""

import logging
import os

import structlog

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CorrelationIdFilter(logging.Filter):
    """Copy the structlog trace_id onto stdlib records (uvicorn, smtplib, ...)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = structlog.contextvars.get_contextvars().get("trace_id", "")
        return True


def configure_structlog(environment: str) -> None:
    """
    Configure structlog through the stdlib integration so
    logger.info("event", key=val) works for both structlog and plain loggers.
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if environment == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]


def get_log_level(environment: str, log_level: str = "") -> str:
    """
    Resolve the log level: an explicit valid level wins, otherwise the
    environment default applies.
    """
    log_level = (log_level or os.getenv("LOG_LEVEL", "")).upper()
    if log_level in _VALID_LEVELS:
        return log_level

    defaults = {
        "production": "INFO",
        "staging": "INFO",
        "development": "DEBUG",
        "test": "WARNING",
    }
    return defaults.get(environment, "INFO")


def configure_logging(environment: str = "development", log_level: str = "") -> None:
    """
    Initialize logging for the application. Call once at startup.
    """
    configure_structlog(environment)
    logging.getLogger().setLevel(get_log_level(environment, log_level))

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
