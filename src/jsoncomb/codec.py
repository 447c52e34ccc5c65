"""Text <-> JsonValue conversion backed by msgspec.json.

msgspec does the tokenizing and formatting; this module only converts between
the Python builtins msgspec produces/consumes and the JsonValue tree.

Thread Safety:
    - Encoders are NOT thread-safe -> use thread-local instances
    - Decoders ARE thread-safe (reentrant) -> can share
    - CodecPool handles this automatically

Usage:
    >>> from jsoncomb.codec import parse, to_string
    >>> value = parse('{"a": [1, 2.5, null]}').unwrap()
    >>> to_string(value)
    '{"a":[1,2.5,null]}'
"""

from __future__ import annotations

import re
import threading
from collections.abc import Mapping
from typing import Any

import msgspec

from jsoncomb._config import get_config
from jsoncomb._logging import get_logger
from jsoncomb.errors import ParseError
from jsoncomb.result import Err, Ok, Result
from jsoncomb.value import (
    NULL,
    JsonArray,
    JsonBool,
    JsonNull,
    JsonNumber,
    JsonObject,
    JsonString,
    JsonValue,
    PrintMode,
)

__all__ = [
    'CodecPool',
    'from_builtins',
    'get_codec_pool',
    'parse',
    'parse_or_raise',
    'to_builtins',
    'to_string',
]

logger = get_logger(__name__)

_BYTE_POSITION = re.compile(r'\(byte (\d+)\)')


class CodecPool:
    """Thread-safe pool for JSON encoding and decoding.

    Uses thread-local storage for encoders (not thread-safe) and a shared
    decoder (thread-safe/reentrant).

    Attributes:
        _local: Thread-local storage for per-thread encoders.
        _decoder: Shared untyped JSON decoder (thread-safe).
    """

    __slots__ = ('_decoder', '_local')

    def __init__(self) -> None:
        self._local = threading.local()
        self._decoder: msgspec.json.Decoder[Any] = msgspec.json.Decoder()

    @property
    def _encoder(self) -> msgspec.json.Encoder:
        """Get or create the thread-local encoder."""
        encoder = getattr(self._local, 'encoder', None)
        if encoder is None:
            encoder = msgspec.json.Encoder()
            self._local.encoder = encoder
        return encoder

    def encode(self, obj: Any) -> bytes:
        """Encode Python builtins to compact JSON bytes."""
        return self._encoder.encode(obj)

    def decode(self, buf: str | bytes | bytearray | memoryview) -> Any:
        """Decode JSON text to Python builtins.

        Raises:
            msgspec.DecodeError: If the text is malformed.
        """
        return self._decoder.decode(buf)


_codec_pool: CodecPool | None = None
_codec_pool_lock = threading.Lock()


def get_codec_pool() -> CodecPool:
    """Get the global codec pool, creating it on first use."""
    global _codec_pool  # noqa: PLW0603
    if _codec_pool is None:
        with _codec_pool_lock:
            if _codec_pool is None:
                _codec_pool = CodecPool()
    return _codec_pool


# -----------------------------------------------------------------------------
# Builtins conversion
# -----------------------------------------------------------------------------


def _leaf(obj: Any) -> JsonValue | None:
    """Convert a scalar; None means obj is a container still to be walked."""
    match obj:
        case None:
            return NULL
        case bool():
            return JsonBool(obj)
        case int() | float():
            return JsonNumber(obj)
        case str():
            return JsonString(obj)
        case list() | tuple() | Mapping():
            return None
        case _:
            msg = f'Cannot convert {type(obj).__name__} to a JSON value'
            raise TypeError(msg)


class _Pending:
    """A list or mapping whose children are being converted."""

    __slots__ = ('children', 'converted', 'keys')

    def __init__(self, container: Any) -> None:
        self.keys: list[str] | None = None
        if isinstance(container, Mapping):
            self.keys = list(container)
            for key in self.keys:
                if not isinstance(key, str):
                    msg = f'JSON object keys must be str, got {type(key).__name__}'
                    raise TypeError(msg)
            self.children = iter(container.values())
        else:
            self.children = iter(container)
        self.converted: list[JsonValue] = []

    def finish(self) -> JsonValue:
        if self.keys is None:
            return JsonArray(tuple(self.converted))
        return JsonObject.from_pairs(zip(self.keys, self.converted, strict=True))


_EXHAUSTED = object()


def from_builtins(obj: Any) -> JsonValue:
    """Convert dict/list/str/int/float/bool/None into a JsonValue tree.

    Tuples are accepted as arrays. Mapping keys must be strings. Nesting
    depth is not limited by the interpreter's recursion limit.

    Raises:
        TypeError: If obj (or anything inside it) has no JSON counterpart.
    """
    leaf = _leaf(obj)
    if leaf is not None:
        return leaf
    stack = [_Pending(obj)]
    while True:
        top = stack[-1]
        child = next(top.children, _EXHAUSTED)
        if child is _EXHAUSTED:
            stack.pop()
            built = top.finish()
            if not stack:
                return built
            stack[-1].converted.append(built)
            continue
        leaf = _leaf(child)
        if leaf is None:
            stack.append(_Pending(child))
        else:
            top.converted.append(leaf)


def _shell(value: JsonValue) -> Any:
    """Builtin for value, with containers left empty for the caller to fill."""
    match value:
        case JsonNull():
            return None
        case JsonBool(value=b):
            return b
        case JsonNumber(value=n):
            return n
        case JsonString(value=s):
            return s
        case JsonArray():
            return []
        case JsonObject():
            return {}
        case _:
            msg = f'Not a JSON value: {type(value).__name__}'
            raise TypeError(msg)


def to_builtins(value: JsonValue) -> Any:
    """Convert a JsonValue tree into dict/list/str/int/float/bool/None."""
    root = _shell(value)
    stack: list[tuple[JsonValue, Any]] = [(value, root)]
    while stack:
        source, target = stack.pop()
        match source:
            case JsonArray(items=items):
                for item in items:
                    converted = _shell(item)
                    target.append(converted)
                    if isinstance(item, JsonArray | JsonObject):
                        stack.append((item, converted))
            case JsonObject(members=members):
                for key, item in members:
                    converted = _shell(item)
                    target[key] = converted
                    if isinstance(item, JsonArray | JsonObject):
                        stack.append((item, converted))
    return root


# -----------------------------------------------------------------------------
# Parse / print
# -----------------------------------------------------------------------------


def _parse_error(exc: msgspec.DecodeError) -> ParseError:
    message = str(exc)
    found = _BYTE_POSITION.search(message)
    position = int(found.group(1)) if found else None
    return ParseError(message, position)


def parse(text: str | bytes) -> Result[JsonValue, ParseError]:
    """Parse JSON text into a JsonValue.

    Returns:
        Ok(JsonValue) on success, Err(ParseError) if the text is malformed
        or nested deeper than the parser supports.

    Example:
        >>> parse('[1, true]')
        Ok(value=JsonArray(items=(JsonNumber(value=1), JsonBool(value=True))))
        >>> parse('[1,').is_err()
        True
    """
    try:
        raw = get_codec_pool().decode(text)
    except msgspec.DecodeError as exc:
        error = _parse_error(exc)
    except RecursionError:
        error = ParseError('JSON nested too deeply', None)
    else:
        return Ok(from_builtins(raw))
    logger.debug('json_parse_failed', error=error.message, position=error.position)
    return Err(error)


def parse_or_raise(text: str | bytes) -> JsonValue:
    """Parse JSON text, raising ParseException on malformed input."""
    match parse(text):
        case Ok(value=value):
            return value
        case Err(error=error):
            raise error.to_exception()


def to_string(value: JsonValue, mode: PrintMode = PrintMode.MINIMAL) -> str:
    """Print a JsonValue as JSON text.

    MINIMAL emits no whitespace between tokens; PRETTY indents nested
    values by the configured indent (see ``jsoncomb.init``). NaN and
    infinite numbers print as ``null``.
    """
    payload = get_codec_pool().encode(to_builtins(value))
    if mode is PrintMode.PRETTY:
        payload = msgspec.json.format(payload, indent=get_config().indent)
    return payload.decode('utf-8')
