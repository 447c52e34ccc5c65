"""JsonValue: an immutable tagged union over the six JSON shapes.

Values are produced by the parser (``jsoncomb.codec.parse``) or the encoder
(``jsoncomb.encoder``) and are only ever read afterwards. Every variant is a
frozen msgspec Struct, so equality is structural and values are hashable:

    >>> JsonArray((JsonNumber(1), NULL)) == JsonArray((JsonNumber(1), JsonNull()))
    True

Decoders inspect a value with a single ``match`` over the variants.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from functools import cached_property

import msgspec

__all__ = [
    'NULL',
    'JsonArray',
    'JsonBool',
    'JsonNull',
    'JsonNumber',
    'JsonObject',
    'JsonString',
    'JsonValue',
    'PrintMode',
    'kind_name',
]


class PrintMode(Enum):
    """Layout used when printing a JsonValue back to text."""

    MINIMAL = 'minimal'
    PRETTY = 'pretty'


class _JsonNode(msgspec.Struct, frozen=True, gc=False):
    """Behaviour shared by every JsonValue variant."""

    def to_string(self, mode: PrintMode = PrintMode.MINIMAL) -> str:
        """Print this value as JSON text."""
        from jsoncomb.codec import to_string

        return to_string(self, mode)  # type: ignore[arg-type]

    def to_pretty_string(self) -> str:
        """Print this value as indented, multi-line JSON text."""
        return self.to_string(PrintMode.PRETTY)

    def __str__(self) -> str:
        return self.to_string()


class JsonNull(_JsonNode, frozen=True, gc=False):
    """The JSON ``null`` literal. Use the ``NULL`` singleton."""


class JsonBool(_JsonNode, frozen=True, gc=False):
    """A JSON ``true`` or ``false``."""

    value: bool


class JsonNumber(_JsonNode, frozen=True, gc=False):
    """A JSON number. Integers stay ``int``; everything else is ``float``."""

    value: int | float


class JsonString(_JsonNode, frozen=True, gc=False):
    """A JSON string."""

    value: str


class JsonArray(_JsonNode, frozen=True, gc=False):
    """An ordered sequence of JsonValues."""

    items: tuple[JsonValue, ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self.items)

    def __getitem__(self, i: int) -> JsonValue:
        return self.items[i]


class JsonObject(_JsonNode, frozen=True, gc=False, dict=True):
    """An ordered collection of ``(key, value)`` members with unique keys.

    Duplicate keys collapse on construction: the last value written for a
    key wins and the key keeps the position of its first occurrence.

        >>> JsonObject((('a', JsonNumber(1)), ('a', JsonNumber(2)))).members
        (('a', JsonNumber(value=2)),)
    """

    members: tuple[tuple[str, JsonValue], ...] = ()

    def __post_init__(self) -> None:
        if len(self._index) != len(self.members):
            msgspec.structs.force_setattr(self, 'members', tuple(self._index.items()))

    @cached_property
    def _index(self) -> dict[str, JsonValue]:
        return dict(self.members)

    @classmethod
    def from_pairs(
        cls,
        pairs: Mapping[str, JsonValue] | Iterable[tuple[str, JsonValue]] = (),
    ) -> JsonObject:
        """Build an object from a mapping or an iterable of pairs."""
        if isinstance(pairs, Mapping):
            return cls(tuple(pairs.items()))
        return cls(tuple(pairs))

    def get(self, key: str) -> JsonValue | None:
        """Return the member stored under ``key``, or None if absent.

        Lookup is an exact, case-sensitive match.
        """
        return self._index.get(key)

    def keys(self) -> list[str]:
        return [k for k, _ in self.members]

    def items(self) -> tuple[tuple[str, JsonValue], ...]:
        return self.members

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __len__(self) -> int:
        return len(self.members)


NULL = JsonNull()

type JsonValue = JsonNull | JsonBool | JsonNumber | JsonString | JsonArray | JsonObject


def kind_name(value: JsonValue) -> str:
    """Name of the variant, as used in decode error messages."""
    match value:
        case JsonNull():
            return 'Null'
        case JsonBool():
            return 'Bool'
        case JsonNumber():
            return 'Number'
        case JsonString():
            return 'String'
        case JsonArray():
            return 'Array'
        case JsonObject():
            return 'Object'
        case _:
            return type(value).__name__
