"""Structured logging configuration using structlog.

persevere logs through ``structlog.get_logger`` and never configures logging
on import. Applications that do not already configure structlog can call
``configure_logging`` once at startup. Level and output format default to
``PERSEVERE_LOG_LEVEL`` and ``PERSEVERE_ENVIRONMENT``:
``production`` renders JSON lines, anything else renders console output.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from persevere.config import settings


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add library context to all log events."""
    event_dict.setdefault("app", "persevere")
    return event_dict


def _shared_processors(is_production: bool) -> list[Processor]:
    """Processors run for structlog events and for foreign stdlib records."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
    ]
    if is_production:
        # Retry warnings carry exc_info; JSON needs it as a string field.
        processors.append(structlog.processors.format_exc_info)
    return processors


def _renderer(is_production: bool) -> Processor:
    if is_production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_level: str | None = None, environment: str | None = None) -> None:
    """Route structlog through the stdlib root logger.

    Args:
        log_level: Logging level name. Defaults to ``settings.LOG_LEVEL``.
        environment: ``production`` for JSON output. Defaults to
            ``settings.ENVIRONMENT``.
    """
    log_level = log_level or settings.LOG_LEVEL
    environment = environment or settings.ENVIRONMENT
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    is_production = environment.lower() == "production"

    shared = _shared_processors(is_production)
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=_renderer(is_production), foreign_pre_chain=shared)
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=logging.getLevelName(level),
        environment=environment,
        renderer="json" if is_production else "console",
    )
