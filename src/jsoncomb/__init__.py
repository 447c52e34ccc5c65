"""jsoncomb: composable JSON decoders and encoders for Python 3.13+.

Flat imports (preferred):
    from jsoncomb import Decoder, decode, Ok, Err, JsonValue
    from jsoncomb import decoder as D, encoder as E

Submodule imports (for organization):
    from jsoncomb.decoder import get, list_of, map_, one_of
    from jsoncomb.encoder import obj, array, num, str_
    from jsoncomb.codec import parse, to_string

Example:
    ```python
    from jsoncomb import decoder as D

    point = D.map_(lambda x, y: (x, y), D.get('x', D.int_), D.get('y', D.int_))
    D.decode('{"x": 1, "y": 2}', point)  # Ok(value=(1, 2))
    ```
"""

from jsoncomb import decoder, encoder
from jsoncomb._config import CodecConfig, get_config, init
from jsoncomb._logging import configure_logging, get_logger
from jsoncomb.codec import from_builtins, parse, parse_or_raise, to_builtins, to_string
from jsoncomb.decoder import Decoder, decode, decode_or_raise
from jsoncomb.decorators import result
from jsoncomb.errors import DecodeError, DecodeException, ParseError, ParseException
from jsoncomb.propagate import Propagate
from jsoncomb.result import Err, Ok, Result, collect
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
    kind_name,
)

__all__ = [
    # Config
    'CodecConfig',
    # Decoding
    'DecodeError',
    'DecodeException',
    'Decoder',
    # Result types
    'Err',
    # JSON values
    'JsonArray',
    'JsonBool',
    'JsonNull',
    'JsonNumber',
    'JsonObject',
    'JsonString',
    'JsonValue',
    'NULL',
    'Ok',
    # Parsing
    'ParseError',
    'ParseException',
    'PrintMode',
    'Propagate',
    'Result',
    'collect',
    # Logging
    'configure_logging',
    'decode',
    'decode_or_raise',
    'decoder',
    'encoder',
    'from_builtins',
    'get_config',
    'get_logger',
    'init',
    'kind_name',
    'parse',
    'parse_or_raise',
    'result',
    'to_builtins',
    'to_string',
]
