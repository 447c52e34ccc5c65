"""@result decorator for catching Propagate exceptions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

import wrapt

from jsoncomb.propagate import Propagate
from jsoncomb.result import Err, Ok

__all__ = ['result']

P = ParamSpec('P')
T = TypeVar('T')
E = TypeVar('E')


def result(func: Callable[P, Ok[T] | Err[E]]) -> Callable[P, Ok[T] | Err[E]]:
    """Decorator that catches Propagate exceptions for .bail() support.

    When a function decorated with @result calls .bail() on an Err,
    the Propagate exception is caught and the Err is returned.

    Args:
        func: The function to wrap. Must return a Result type.

    Returns:
        A wrapped function that catches Propagate and returns the contained Err.

    Example:
        ```python
        @result
        def decode_point(value: JsonValue) -> Result[Point, DecodeError]:
            x = get('x', int_)(value).bail()
            y = get('y', int_)(value).bail()
            return Ok(Point(x, y))
        ```
    """

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[P, Ok[T] | Err[E]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Ok[T] | Err[E]:
        try:
            return wrapped(*args, **kwargs)
        except Propagate as p:
            return p.value  # type: ignore[return-value]

    return wrapper(func)  # type: ignore[return-value]
