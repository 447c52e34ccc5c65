"""Structured logging for jsoncomb's parse/decode boundary.

Decoders never log. Only the boundary helpers (``parse`` and
``decode_or_raise``) emit debug events, under loggers named ``jsoncomb.*``.
``configure_logging`` routes structlog and stdlib records through one
ProcessorFormatter so host applications get a single output format.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]

type LogHook = Callable[[dict[str, Any]], None]

_log_hooks: list[LogHook] = []


def _run_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Processor handing a copy of every event to the registered hooks."""
    for hook in _log_hooks:
        try:
            hook(event_dict.copy())
        except Exception:  # noqa: S110
            pass  # a failing hook must not break logging
    return event_dict


def _shared_processors() -> list[Any]:
    """Processors applied to structlog events and foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
        _run_hooks,
    ]


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
) -> None:
    """Configure structlog with ProcessorFormatter for unified output.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, emit JSON lines. If False, use colored console output.
    """
    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger, e.g. ``get_logger(__name__)``."""
    return structlog.get_logger(name)


def add_log_hook(hook: LogHook) -> None:
    """Register a hook called with a copy of each log event dict.

    Hooks only see events once ``configure_logging`` has installed the
    processor chain.
    """
    _log_hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    """Remove a previously registered log hook."""
    if hook in _log_hooks:
        _log_hooks.remove(hook)


def clear_log_hooks() -> None:
    """Remove all registered log hooks."""
    _log_hooks.clear()
