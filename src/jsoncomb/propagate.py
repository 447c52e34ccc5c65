"""Propagate exception for .bail() mechanism."""

from typing import Any


class Propagate(Exception):  # noqa: N818
    """Exception raised by .bail() to carry an Err up the call stack.

    Caught by the @result decorator, which returns the contained Err.
    Never escapes a decoder.
    """

    __slots__ = ('_value',)

    def __init__(self, value: Any) -> None:
        self._value = value
        super().__init__(f'Propagate({value!r})')

    @property
    def value(self) -> Any:
        """The Err being propagated."""
        return self._value
