"""Structured logging setup and the event hook used by the detection phases."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import structlog

from fvg_engine.config import get_settings

#: Callback receiving ``(event, **fields)``, e.g. a structlog bound logger method.
EventHook = Callable[..., Any]


def configure_logging(level: str | None = None, json: bool | None = None) -> None:
    """Configure structlog for console (default) or JSON line output.

    Unset arguments come from ``FVG_LOG_LEVEL`` and ``FVG_LOG_JSON``.
    """
    settings = get_settings()
    level = level or settings.log_level
    json = settings.log_json if json is None else json
    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
    )


def resolve_hook(hook: EventHook | None, logger: Any) -> EventHook:
    """Return *hook*, or the logger's debug method when no hook is injected."""
    return hook if hook is not None else logger.debug
