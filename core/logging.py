"""
Structured Logging

structlog configuration shared by the scoring engines, the recalculation
pipeline and the CLI. Events are snake_case names carrying their context
as key/value pairs, e.g. `visit_added leg_id=12 player_id=3`.

While a recalculation run is active its id is held in a context
variable, so every event emitted during the replay carries
`correlation_id` without the rules having to know about runs.
"""

import logging
import sys
from contextvars import ContextVar, Token
from typing import Any, Optional

import structlog

from core.settings import Settings


correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    return correlation_id_var.get()


def set_correlation_id(cid: str) -> Token:
    """Tag the current context with `cid`. Keep the token to restore the previous id."""
    return correlation_id_var.set(cid)


def reset_correlation_id(token: Token) -> None:
    correlation_id_var.reset(token)


def add_correlation_id(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding the active run's correlation ID."""
    cid = correlation_id_var.get()
    if cid:
        event_dict.setdefault("correlation_id", cid)
    return event_dict


def add_service_info(service_name: str) -> structlog.typing.Processor:
    """Create a processor that stamps every event with the service name."""

    def processor(
        logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["service"] = service_name
        return event_dict

    return processor


def setup_logging(
    log_level: str = "INFO",
    json_format: bool = True,
    service_name: str = "darts-scoring",
) -> None:
    """
    Configure structlog for the process.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: JSON lines when True, coloured console output otherwise
        service_name: Value of the `service` key on every event
    """
    level = getattr(logging, log_level.upper())
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_info(service_name),
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: Settings) -> None:
    """Configure logging from the `log_*` and `service_name` settings."""
    setup_logging(
        log_level=settings.log_level,
        json_format=settings.log_format == "json",
        service_name=settings.service_name,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Get a logger, optionally named after the component using it.

    Example:
        log = get_logger("leg_service").bind(leg_id=12)
        log.info("visit_added", player_id=3, darts="1-20 1-20 3-20")
    """
    return structlog.get_logger(name)
