"""
structlog wiring for EventHub.

Both structlog loggers and plain stdlib loggers end up on one stdout handler.
Every record is stamped with the service name and environment. ``LOG_FORMAT``
picks JSON lines or console text; "auto" means JSON only in production.
"""

from __future__ import annotations

import logging
import sys

import structlog

from eventhub.core.config import Settings, get_settings

HANDLER_NAME = "eventhub"

# Third-party loggers that are too chatty at INFO.
NOISY_LOGGERS = ("uvicorn.access", "httpx", "openai")


def _service_context(settings: Settings):
    def add_service(logger, method_name, event_dict):
        event_dict.setdefault("service", settings.APP_NAME)
        event_dict.setdefault("env", settings.ENVIRONMENT)
        return event_dict

    return add_service


def _pre_chain(settings: Settings) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        _service_context(settings),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if settings.log_as_json:
        processors.append(structlog.processors.dict_tracebacks)
    return processors


def _renderer(settings: Settings):
    if settings.log_as_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def setup_logging(settings: Settings | None = None) -> logging.Handler:
    """Configure structlog and attach the EventHub handler to the root logger.

    Calling this again swaps the previous EventHub handler for a new one and
    leaves any other root handlers alone. Returns the installed handler.
    """
    settings = settings or get_settings()
    pre_chain = _pre_chain(settings)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=settings.ENVIRONMENT == "production",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            # foreign_pre_chain stamps records from stdlib loggers as well
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(settings),
            ],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
