"""Tests for verifying import styles work correctly."""


class TestFlatImports:
    """Verify flat imports from jsoncomb work."""

    def test_result_types(self) -> None:
        from jsoncomb import Err, Ok, Result, collect

        assert Ok(42).unwrap() == 42
        assert Err('error').is_err()
        outcome: Result[int, str] = Ok(1)
        assert outcome.is_ok()
        assert collect([Ok(1), Ok(2)]).unwrap() == [1, 2]

    def test_decoding(self) -> None:
        from jsoncomb import Decoder, decode, decode_or_raise, decoder

        assert isinstance(decoder.int_, Decoder)
        assert decode('1', decoder.int_).unwrap() == 1
        assert decode_or_raise('"a"', decoder.string) == 'a'

    def test_encoding(self) -> None:
        from jsoncomb import NULL, encoder, to_string

        assert encoder.null is NULL
        assert to_string(encoder.array([encoder.num(1)])) == '[1]'

    def test_errors(self) -> None:
        from jsoncomb import DecodeError, DecodeException, ParseError, ParseException

        assert isinstance(DecodeError('x').to_exception(), DecodeException)
        assert DecodeException('x').to_struct() == DecodeError('x')
        assert isinstance(ParseError('x', 3).to_exception(), ParseException)
        assert ParseException('x', 3).to_struct() == ParseError('x', 3)


class TestSubmoduleImports:
    """Verify submodule imports work."""

    def test_submodules(self) -> None:
        from jsoncomb.codec import parse
        from jsoncomb.decoder import get, list_of, map_, one_of
        from jsoncomb.encoder import array, obj
        from jsoncomb.value import JsonValue, PrintMode

        assert all(callable(f) for f in (parse, get, list_of, map_, one_of, array, obj))
        assert JsonValue is not None
        assert PrintMode.PRETTY.value == 'pretty'
