"""Decoder combinators: turn an untyped JsonValue into typed Python values.

A ``Decoder[T]`` wraps a function ``JsonValue -> Result[T, DecodeError]``.
Decoders hold no mutable state, so one decoder can be reused for any number
of inputs and shared between threads. Small decoders combine into large ones:

    >>> from jsoncomb import decoder as D
    >>> user = D.map_(User, D.get('id', D.int_), D.get(['profile', 'name'], D.string))
    >>> D.decode('{"id": 1, "profile": {"name": "dan"}}', user)
    Ok(value=User(id=1, name='dan'))

Decoders never raise. Failures come back as ``Err(DecodeError(...))``, and
every combinator returns the first failure it sees unchanged, except where
its docstring says otherwise.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Callable, Sequence
from typing import Any, overload

from jsoncomb._logging import get_logger
from jsoncomb.codec import parse
from jsoncomb.decorators import result
from jsoncomb.errors import DecodeError, DecodeException
from jsoncomb.result import Err, Ok, Result, collect
from jsoncomb.value import (
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    kind_name,
)

__all__ = [
    'Decoder',
    'array_of',
    'bool_',
    'decode',
    'decode_or_raise',
    'double',
    'fail',
    'float_',
    'get',
    'get_or_missing',
    'index',
    'int_',
    'key_value_pairs',
    'lazy',
    'list_of',
    'long',
    'map_',
    'map_of',
    'nullable',
    'one_of',
    'pair_of',
    'singleton_of',
    'string',
    'succeed',
    'triple_of',
    'when_null',
]

logger = get_logger(__name__)


class Decoder[T, E = DecodeError]:
    """A reusable function from JsonValue to Result[T, E].

    Decoders can be applied like functions:

        >>> int_(JsonNumber(42))
        Ok(value=42)
    """

    __slots__ = ('_run',)

    def __init__(self, run: Callable[[JsonValue], Result[T, E]]) -> None:
        self._run = run

    def __call__(self, value: JsonValue) -> Result[T, E]:
        return self._run(value)

    def decode(self, value: JsonValue) -> Result[T, E]:
        """Apply this decoder to an already parsed value."""
        return self._run(value)

    def map[U](self, f: Callable[[T], U]) -> Decoder[U, E]:
        """Apply ``f`` to the decoded value. ``f`` is not called on failure."""
        run = self._run
        return Decoder(lambda value: run(value).map(f))

    def map_err[F](self, f: Callable[[E], F]) -> Decoder[T, F]:
        """Transform the error on failure. Successes pass through untouched."""
        run = self._run
        return Decoder(lambda value: run(value).map_err(f))

    def and_then[U](self, f: Callable[[T], Decoder[U, E]]) -> Decoder[U, E]:
        """Pick the next decoder based on the value this one produced.

        The decoder returned by ``f`` runs against the same input this
        decoder saw, not against the decoded value. This is what lets a
        discriminator field select how the rest of the document decodes:

            >>> by_version = get('version', int_).and_then(
            ...     lambda v: get('data', string) if v == 1 else fail(f'unsupported version {v}')
            ... )
        """
        run = self._run
        return Decoder(lambda value: run(value).and_then(lambda decoded: f(decoded)(value)))

    flat_map = and_then

    def __repr__(self) -> str:
        return f'Decoder({self._run!r})'


def _mismatch(expected: str, value: JsonValue) -> Err[DecodeError]:
    return Err(DecodeError(f'Expected {expected} but got {kind_name(value)}'))


# --- Primitives ---


def _decode_string(value: JsonValue) -> Result[str, DecodeError]:
    match value:
        case JsonString(value=s):
            return Ok(s)
        case _:
            return _mismatch('String', value)


def _decode_bool(value: JsonValue) -> Result[bool, DecodeError]:
    match value:
        case JsonBool(value=b):
            return Ok(b)
        case _:
            return _mismatch('Bool', value)


def _integer(expected: str, bits: int) -> Decoder[int]:
    low, high = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1

    def run(value: JsonValue) -> Result[int, DecodeError]:
        match value:
            case JsonNumber(value=n):
                if isinstance(n, float) and not math.isfinite(n):
                    return Err(DecodeError(f'Expected {expected} but got non-finite Number: {n}'))
                truncated = int(n)
                if not low <= truncated <= high:
                    return Err(DecodeError(f'Expected {expected} but got Number out of range: {n}'))
                return Ok(truncated)
            case _:
                return _mismatch(expected, value)

    return Decoder(run)


def _decode_float(value: JsonValue) -> Result[float, DecodeError]:
    match value:
        case JsonNumber(value=n):
            try:
                return Ok(struct.unpack('f', struct.pack('f', n))[0])
            except OverflowError:
                return Err(DecodeError(f'Expected Float but got Number out of range: {n}'))
        case _:
            return _mismatch('Float', value)


def _decode_double(value: JsonValue) -> Result[float, DecodeError]:
    match value:
        case JsonNumber(value=n):
            try:
                return Ok(float(n))
            except OverflowError:
                return Err(DecodeError(f'Expected Double but got Number out of range: {n}'))
        case _:
            return _mismatch('Double', value)


string: Decoder[str] = Decoder(_decode_string)
"""Decode a JSON string."""

int_: Decoder[int] = _integer('Int', 32)
"""Decode a JSON number as a signed 32-bit integer, truncating toward zero."""

long: Decoder[int] = _integer('Long', 64)
"""Decode a JSON number as a signed 64-bit integer, truncating toward zero."""

float_: Decoder[float] = Decoder(_decode_float)
"""Decode a JSON number rounded to single precision."""

double: Decoder[float] = Decoder(_decode_double)
"""Decode a JSON number as a Python float (double precision)."""

bool_: Decoder[bool] = Decoder(_decode_bool)
"""Decode a JSON boolean."""


# --- Constants ---


def succeed[T](value: T) -> Decoder[T]:
    """A decoder that ignores its input and always succeeds with ``value``."""
    return Decoder(lambda _: Ok(value))


def fail(message: str) -> Decoder[Any]:
    """A decoder that ignores its input and always fails with ``message``."""
    error = DecodeError(message)
    return Decoder(lambda _: Err(error))


# --- Objects ---


def _field[T](key: str, decoder: Decoder[T], *, missing: Callable[[], Result[T, DecodeError]]) -> Decoder[T]:
    def run(value: JsonValue) -> Result[T, DecodeError]:
        match value:
            case JsonObject():
                member = value.get(key)
                if member is None:
                    return missing()
                return decoder(member)
            case _:
                return _mismatch('Object', value)

    return Decoder(run)


def _missing_field(key: str) -> Callable[[], Err[DecodeError]]:
    error = DecodeError(f'Expected field "{key}" but it was missing')
    return lambda: Err(error)


def get[T](key: str | Sequence[str], decoder: Decoder[T]) -> Decoder[T]:
    """Decode the member stored under ``key`` with ``decoder``.

    ``key`` may also be a path of keys, in which case ``get(['a', 'b'], d)``
    is ``get('a', get('b', d))``. An empty path applies ``decoder`` to the
    value itself.

    Fails if the value is not an object or the key is missing.
    """
    if isinstance(key, str):
        return _field(key, decoder, missing=_missing_field(key))
    for k in reversed(key):
        decoder = get(k, decoder)
    return decoder


def get_or_missing[T](key: str | Sequence[str], fallback: T, decoder: Decoder[T]) -> Decoder[T]:
    """Like ``get``, but a missing key succeeds with ``fallback``.

    With a path, a key missing at any level yields ``fallback``. A member
    that is present but does not decode still fails.

    Example:
        >>> flag = get_or_missing('enabled', False, bool_)
    """
    if isinstance(key, str):
        found = Ok(fallback)
        return _field(key, decoder, missing=lambda: found)
    for k in reversed(key):
        decoder = get_or_missing(k, fallback, decoder)
    return decoder


def key_value_pairs(first: Decoder[Any], second: Decoder[Any] | None = None) -> Decoder[list[tuple[Any, Any]]]:
    """Decode every member of an object into a list of ``(key, value)`` pairs.

    Called as ``key_value_pairs(value_decoder)`` keys stay strings. Called as
    ``key_value_pairs(key_decoder, value_decoder)`` each key is wrapped in a
    JsonString and decoded with ``key_decoder`` first.

    Members are visited once each, in object order, stopping at the first
    failure.
    """
    if second is None:
        key_decoder, value_decoder = None, first
    else:
        key_decoder, value_decoder = first, second

    def pair(name: str, member: JsonValue) -> Result[tuple[Any, Any], Any]:
        if key_decoder is None:
            return value_decoder(member).map(lambda decoded: (name, decoded))
        return key_decoder(JsonString(name)).and_then(
            lambda k: value_decoder(member).map(lambda decoded: (k, decoded))
        )

    def run(value: JsonValue) -> Result[list[tuple[Any, Any]], Any]:
        match value:
            case JsonObject(members=members):
                return collect(pair(name, member) for name, member in members)
            case _:
                return _mismatch('Object', value)

    return Decoder(run)


def map_of(first: Decoder[Any], second: Decoder[Any] | None = None) -> Decoder[dict[Any, Any]]:
    """``key_value_pairs`` collected into a dict."""
    return key_value_pairs(first, second).map(dict)


# --- Arrays ---


def _array_with[T](expected: str, run_items: Callable[[tuple[JsonValue, ...]], Result[T, Any]]) -> Decoder[T]:
    def run(value: JsonValue) -> Result[T, Any]:
        match value:
            case JsonArray(items=items):
                return run_items(items)
            case _:
                return _mismatch(expected, value)

    return Decoder(run)


def list_of[T](decoder: Decoder[T]) -> Decoder[list[T]]:
    """Decode every element of an array, in order.

    Stops at the first element that fails and returns its error; elements
    after it are never decoded.
    """
    return _array_with('Array', lambda items: collect(decoder(item) for item in items))


def array_of[T](decoder: Decoder[T]) -> Decoder[tuple[T, ...]]:
    """Same as ``list_of`` but produces a tuple."""
    return list_of(decoder).map(tuple)


def index[T](i: int, decoder: Decoder[T]) -> Decoder[T]:
    """Decode the element at position ``i`` of an array."""

    def run_items(items: tuple[JsonValue, ...]) -> Result[T, Any]:
        if 0 <= i < len(items):
            return decoder(items[i])
        return Err(DecodeError(f'Expected index {i} to be in bounds of array'))

    return _array_with('Array', run_items)


def _exact[T](expected: str, decoders: tuple[Decoder[Any], ...], build: Callable[..., T]) -> Decoder[T]:
    arity = len(decoders)

    @result
    def run_items(items: tuple[JsonValue, ...]) -> Result[T, Any]:
        if len(items) != arity:
            return Err(DecodeError(f'Expected {expected} but got array with {len(items)} items'))
        values = [d(item).bail() for d, item in zip(decoders, items, strict=True)]
        return Ok(build(*values))

    return _array_with(expected, run_items)


def singleton_of[T](decoder: Decoder[T]) -> Decoder[T]:
    """Decode an array of exactly one element."""
    return _exact('Singleton', (decoder,), lambda a: a)


def pair_of[A, B](first: Decoder[A], second: Decoder[B]) -> Decoder[tuple[A, B]]:
    """Decode a two-element array positionally into a tuple."""
    return _exact('Pair', (first, second), lambda a, b: (a, b))


def triple_of[A, B, C](first: Decoder[A], second: Decoder[B], third: Decoder[C]) -> Decoder[tuple[A, B, C]]:
    """Decode a three-element array positionally into a tuple."""
    return _exact('Triple', (first, second, third), lambda a, b, c: (a, b, c))


# --- Combining decoders ---


def map_[U](f: Callable[..., U], *decoders: Decoder[Any]) -> Decoder[U]:
    """Run each decoder against the same value and pass the results to ``f``.

    Decoders run left to right and stop at the first failure, so later
    decoders are not evaluated once one fails. Any number of decoders is
    accepted:

        >>> point = map_(Point, get('x', double), get('y', double))
    """
    return Decoder(lambda value: collect(d(value) for d in decoders).map(lambda values: f(*values)))


_NO_MATCH = DecodeError('None of the decoders matched')


def one_of[T](*decoders: Decoder[T]) -> Decoder[T]:
    """Try each decoder in order and keep the first success.

    Individual errors are discarded: when nothing matches the failure is
    always ``None of the decoders matched``. Use ``map_err`` on the branches
    or on the result when a more specific message matters.
    """

    def run(value: JsonValue) -> Result[T, Any]:
        for d in decoders:
            outcome = d(value)
            if outcome.is_ok():
                return outcome
        return Err(_NO_MATCH)

    return Decoder(run)


def lazy[T](supplier: Callable[[], Decoder[T]]) -> Decoder[T]:
    """Defer building a decoder until it is applied.

    ``supplier`` is called on every invocation, never when ``lazy`` itself
    runs, which lets a decoder refer to itself:

        >>> def tree() -> Decoder[Node]:
        ...     return map_(Node, get('value', int_), get('children', list_of(lazy(tree))))
    """
    return Decoder(lambda value: supplier()(value))


def nullable[T](decoder: Decoder[T]) -> Decoder[T | None]:
    """Succeed with None on ``null``; otherwise use ``decoder``."""

    def run(value: JsonValue) -> Result[T | None, Any]:
        match value:
            case JsonNull():
                return Ok(None)
            case _:
                return decoder(value)

    return Decoder(run)


def when_null[T](default: T) -> Decoder[T]:
    """Succeed with ``default`` on ``null`` and fail on anything else.

    Meant for ``one_of``: ``one_of(int_, when_null(-1))``.
    """
    found = Ok(default)

    def run(value: JsonValue) -> Result[T, DecodeError]:
        match value:
            case JsonNull():
                return found
            case _:
                return _mismatch('null', value)

    return Decoder(run)


# --- Boundary ---


def decode[T](text: str | bytes, decoder: Decoder[T, Any]) -> Result[T, Any]:
    """Parse ``text`` and decode it.

    Returns:
        Ok(value), Err(ParseError) if the text is not valid JSON, or the
        decoder's own Err (a DecodeError unless remapped with ``map_err``).
    """
    return parse(text).and_then(decoder)


def decode_or_raise[T](text: str | bytes, decoder: Decoder[T, Any]) -> T:
    """Parse and decode ``text``, raising instead of returning Err.

    Raises:
        ParseException: If the text is not valid JSON.
        DecodeException: If the JSON does not have the expected shape.
    """
    match decode(text, decoder):
        case Ok(value=value):
            return value
        case Err(error=error):
            logger.debug('json_decode_failed', error=str(error))
            to_exception = getattr(error, 'to_exception', None)
            if callable(to_exception):
                raise to_exception()
            raise DecodeException(str(error))
