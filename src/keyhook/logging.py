"""Logging configuration with structlog for JSON output in production."""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

SECRET_KEYS = {"api_key", "authorization", "x-api-key", "credential"}


def _mask_secrets(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    for key in list(event_dict):
        if str(key).lower() in SECRET_KEYS and event_dict[key]:
            event_dict[key] = "[REDACTED]"
    return event_dict


def configure_logging(level: str, *, app_env: str = "dev", json_output: bool | None = None) -> None:
    """Route stdlib and structlog records through one stderr handler.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR).
        app_env: Deployment environment; ``prod`` selects the JSON renderer.
        json_output: Force JSON output regardless of ``app_env``.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if json_output is None:
        json_output = app_env == "prod"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _mask_secrets,
    ]

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Records from logging.getLogger() callers get the same enrichment.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[structlog.stdlib.ExtraAdder(), *shared_processors],
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)


EVENT_CONTEXT_KEYS = ("event_type", "realm_id")


def bind_event_context(**kwargs: object) -> None:
    """Bind per-event fields (event type, realm) for the current dispatch."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_event_context() -> None:
    # Only our keys; the host may have bound its own context.
    structlog.contextvars.unbind_contextvars(*EVENT_CONTEXT_KEYS)
