"""Tests for Result type (Ok and Err) and the @result decorator."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from jsoncomb import Err, Ok, Propagate, collect, result
from jsoncomb.errors import DecodeError


class TestResultBasics:
    """Creation, equality and querying."""

    def test_ok_is_frozen(self):
        """Ok instances are immutable."""
        ok = Ok(42)
        with pytest.raises(AttributeError):
            ok.value = 100  # type: ignore[misc]

    def test_equality(self):
        """Results compare structurally."""
        assert Ok(42) == Ok(42)
        assert Err(DecodeError('x')) == Err(DecodeError('x'))
        assert Err(DecodeError('x')) != Err(DecodeError('y'))
        assert Ok(42) != Err(42)

    def test_querying(self):
        assert Ok(1).is_ok() is True
        assert Ok(1).is_err() is False
        assert Err('e').is_ok() is False
        assert Err('e').is_err() is True


class TestResultUnwrap:
    """Tests for unwrap, unwrap_or, unwrap_or_else, expect."""

    def test_ok_unwrap(self):
        assert Ok(42).unwrap() == 42

    def test_err_unwrap_raises(self):
        with pytest.raises(RuntimeError, match='Called unwrap on Err'):
            Err('error').unwrap()

    def test_unwrap_or(self):
        assert Ok(42).unwrap_or(0) == 42
        assert Err('error').unwrap_or(0) == 0

    def test_unwrap_or_else(self):
        assert Ok(42).unwrap_or_else(lambda: 0) == 42
        assert Err('error').unwrap_or_else(lambda: 7) == 7

    def test_expect(self):
        assert Ok(1).expect('never') == 1
        with pytest.raises(RuntimeError, match='needed a value'):
            Err('error').expect('needed a value')


class TestResultTransform:
    """Tests for map, map_err, and_then, or_else."""

    def test_map(self):
        assert Ok(2).map(lambda x: x * 2) == Ok(4)
        assert Err('e').map(lambda x: x * 2) == Err('e')

    def test_map_err(self):
        assert Ok(2).map_err(str.upper) == Ok(2)
        assert Err('e').map_err(str.upper) == Err('E')

    def test_and_then_short_circuits(self):
        error = Err(DecodeError('original'))
        called = []
        assert error.and_then(lambda x: called.append(x) or Ok(x)) is error
        assert called == []
        assert Ok(2).and_then(lambda x: Ok(x + 1)) == Ok(3)

    def test_or_else(self):
        assert Err('e').or_else(lambda e: Ok(len(e))) == Ok(1)
        assert Ok(3).or_else(lambda e: Ok(0)) == Ok(3)

    @given(st.integers())
    def test_map_identity(self, n):
        assert Ok(n).map(lambda x: x) == Ok(n)


class TestCollect:
    def test_all_ok(self):
        assert collect([Ok(1), Ok(2)]) == Ok([1, 2])

    def test_first_err(self):
        assert collect([Ok(1), Err('a'), Err('b')]) == Err('a')

    def test_lazy_generator(self):
        seen = []

        def produce():
            for item in (Ok(1), Err('stop'), Ok(3)):
                seen.append(item)
                yield item

        assert collect(produce()) == Err('stop')
        assert len(seen) == 2


class TestResultDecorator:
    def test_bail_returns_err(self):
        @result
        def add(a, b):
            return Ok(a.bail() + b.bail())

        assert add(Ok(1), Ok(2)) == Ok(3)
        assert add(Err('left'), Ok(2)) == Err('left')
        assert add(Ok(1), Err('right')) == Err('right')

    def test_propagate_carries_value(self):
        with pytest.raises(Propagate) as info:
            Err('x').bail()
        assert info.value.value == Err('x')
