"""Result type: Ok[T] | Err[E], the propagation substrate for every decoder."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import NoReturn, TypeIs

import msgspec

from jsoncomb.propagate import Propagate

__all__ = ['Err', 'Ok', 'Result', 'collect']


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> ok = Ok(42)
        >>> ok.unwrap()
        42
        >>> ok.map(lambda x: x * 2)
        Ok(value=84)
    """

    value: T

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True if the result is Ok."""
        return True

    def is_err(self) -> TypeIs[Err[object]]:
        """Return False since this is Ok."""
        return False

    def unwrap(self) -> T:
        """Return the contained Ok value."""
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the fallback function."""
        return self.value

    def expect(self, _msg: str) -> T:
        """Return the contained Ok value, ignoring the message."""
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying f to the value.
        """
        return Ok(f(self.value))

    def map_err[F](self, _f: Callable[[object], F]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def and_then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Apply a function that returns a Result to the contained value.

        Also known as flatmap or bind.

        Args:
            f: Function that takes T and returns Result[U, E].

        Returns:
            The Result returned by f.
        """
        return f(self.value)

    def or_else[F](self, _f: Callable[[object], Ok[T] | Err[F]]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def bail(self) -> T:
        """Return the contained value (no-op for Ok).

        For Err, this raises Propagate, which @result turns back into
        the Err.
        """
        return self.value


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result containing an error of type E.

    Examples:
        >>> err = Err('something went wrong')
        >>> err.is_err()
        True
        >>> err.unwrap_or(0)
        0
    """

    error: E

    def is_ok(self) -> TypeIs[Ok[object]]:
        """Return False since this is Err."""
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Return True if the result is Err."""
        return True

    def unwrap(self) -> NoReturn:
        """Raise an exception since this is Err.

        Raises:
            RuntimeError: Always, since Err has no Ok value to unwrap.
        """
        raise RuntimeError(f'Called unwrap on Err: {self.error!r}')

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Err."""
        return f()

    def expect(self, msg: str) -> NoReturn:
        """Raise an exception with a custom message.

        Raises:
            RuntimeError: Always, with the custom message.
        """
        raise RuntimeError(f'{msg}: {self.error!r}')

    def map[T, U](self, _f: Callable[[T], U]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error value.

        Returns:
            Err containing the transformed error.
        """
        return Err(f(self.error))

    def and_then[T, U](self, _f: Callable[[T], Ok[U] | Err[E]]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def or_else[T, F](self, f: Callable[[E], Ok[T] | Err[F]]) -> Ok[T] | Err[F]:
        """Apply a recovery function to the error.

        Args:
            f: Function that takes the error and returns a new Result.

        Returns:
            The Result returned by f.
        """
        return f(self.error)

    def bail(self) -> NoReturn:
        """Raise Propagate so the enclosing @result function returns this Err.

        Raises:
            Propagate: Always, containing this Err.
        """
        raise Propagate(self)


type Result[T, E = Exception] = Ok[T] | Err[E]


def collect[T, E](results: Iterable[Ok[T] | Err[E]]) -> Ok[list[T]] | Err[E]:
    """Collect an iterable of Results into a Result of list.

    Short-circuits on the first Err encountered. When ``results`` is a
    generator, nothing after the first Err is evaluated.

    Examples:
        >>> collect([Ok(1), Ok(2), Ok(3)])
        Ok(value=[1, 2, 3])
        >>> collect([Ok(1), Err('fail'), Ok(3)])
        Err(error='fail')
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)
