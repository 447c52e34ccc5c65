"""Error types: dual struct+exception for Result and raise-based code.

Decoders return the struct variants inside ``Err``. The exception variants
are only raised by the ``*_or_raise`` helpers at the outermost boundary.
"""

from __future__ import annotations

import msgspec

__all__ = [
    'DecodeError',
    'DecodeException',
    'ParseError',
    'ParseException',
]


# --- Decode Errors ---


class DecodeError(msgspec.Struct, frozen=True, gc=False):
    """Well-formed JSON of the wrong shape - struct variant for Result[T, DecodeError]."""

    message: str

    def __str__(self) -> str:
        return self.message

    def to_exception(self) -> DecodeException:
        """Convert to exception for raise-based code."""
        return DecodeException(self.message)


class DecodeException(Exception):
    """Well-formed JSON of the wrong shape - exception variant."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_struct(self) -> DecodeError:
        """Convert to struct for Result-based code."""
        return DecodeError(self.message)


# --- Parse Errors ---


class ParseError(msgspec.Struct, frozen=True, gc=False):
    """Malformed JSON text - struct variant for Result[T, ParseError]."""

    message: str
    position: int | None = None

    def __str__(self) -> str:
        return self.message

    def to_exception(self) -> ParseException:
        """Convert to exception for raise-based code."""
        return ParseException(self.message, self.position)


class ParseException(Exception):
    """Malformed JSON text - exception variant."""

    def __init__(self, message: str, position: int | None = None) -> None:
        self.message = message
        self.position = position
        super().__init__(message)

    def to_struct(self) -> ParseError:
        """Convert to struct for Result-based code."""
        return ParseError(self.message, self.position)
