"""Library configuration: CodecConfig and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from jsoncomb._logging import configure_logging

__all__ = [
    'CodecConfig',
    'get_config',
    'init',
    'reset',
]

DEFAULT_INDENT = 2


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for jsoncomb.

    Attributes:
        indent: Spaces per nesting level when printing in PRETTY mode.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
    """

    indent: int = DEFAULT_INDENT
    log_level: str | None = None


# Active configuration (set by init()) and the environment defaults used before it
_config: CodecConfig | None = None
_defaults: CodecConfig | None = None


def _detect_indent() -> int:
    """Read the pretty-print indent from JSONCOMB_INDENT, falling back to the default."""
    raw = os.environ.get('JSONCOMB_INDENT', '').strip()
    if not raw:
        return DEFAULT_INDENT
    try:
        indent = int(raw)
    except ValueError:
        logging.warning("Unknown JSONCOMB_INDENT value '%s', defaulting to %d", raw, DEFAULT_INDENT)
        return DEFAULT_INDENT
    if indent < 0:
        logging.warning("Negative JSONCOMB_INDENT value '%s', defaulting to %d", raw, DEFAULT_INDENT)
        return DEFAULT_INDENT
    return indent


def init(
    indent: int | None = None,
    log_level: str | None = None,
) -> CodecConfig:
    """Initialize jsoncomb with the given configuration.

    Args:
        indent: Pretty-print indent. Read from JSONCOMB_INDENT if None.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.

    Returns:
        The CodecConfig that was set.

    Example:
        ```python
        from jsoncomb import init

        init(indent=4, log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    resolved_indent = _detect_indent() if indent is None else max(0, indent)

    _config = CodecConfig(indent=resolved_indent, log_level=log_level)

    if log_level is not None:
        configure_logging(log_level)

    return _config


def get_config() -> CodecConfig:
    """Get the active configuration.

    Returns the defaults (with JSONCOMB_INDENT applied) when init() has not
    been called, so printing works without any setup. The defaults are
    resolved once and kept until reset().
    """
    global _defaults  # noqa: PLW0603
    if _config is not None:
        return _config
    if _defaults is None:
        _defaults = CodecConfig(indent=_detect_indent())
    return _defaults


def reset() -> None:
    """Forget any configuration set by init() and the cached defaults."""
    global _config, _defaults  # noqa: PLW0603
    _config = None
    _defaults = None
