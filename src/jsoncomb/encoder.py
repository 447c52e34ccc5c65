"""Produce JsonValues from Python values.

Encoding is total: every function here accepts any well-typed input and
never fails.

    >>> from jsoncomb import encoder as E
    >>> E.obj({'id': E.num(42), 'tags': E.array([E.str_('a'), E.str_('b')])}).to_string()
    '{"id":42,"tags":["a","b"]}'
"""

from __future__ import annotations

import numbers
from collections.abc import Iterable, Mapping

from jsoncomb.value import (
    NULL,
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
)

__all__ = [
    'array',
    'bool_',
    'null',
    'num',
    'obj',
    'str_',
]


def str_(value: str) -> JsonString:
    return JsonString(value)


def num(value: numbers.Real | float) -> JsonNumber:
    """Encode any real number.

    Integral inputs (including bool and numpy integers) become ``int``,
    everything else becomes ``float``. JSON has no NaN or infinity, so a
    non-finite float is kept here but prints as ``null``.
    """
    if isinstance(value, numbers.Integral):
        return JsonNumber(int(value))
    return JsonNumber(float(value))


def bool_(value: bool) -> JsonBool:
    return JsonBool(bool(value))


null: JsonNull = NULL


def obj(members: Mapping[str, JsonValue] | Iterable[tuple[str, JsonValue]] = (), /) -> JsonObject:
    """Encode an object from a mapping or an iterable of ``(key, value)`` pairs.

    A key given more than once keeps its first position and its last value.
    """
    return JsonObject.from_pairs(members)


def array(values: Iterable[JsonValue] = (), /) -> JsonArray:
    """Encode an array from any iterable of JsonValues."""
    return JsonArray(tuple(values))
