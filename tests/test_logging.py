"""Tests for logging configuration, hooks and boundary diagnostics."""

from __future__ import annotations

from typing import Any

import pytest

from jsoncomb import decoder as D
from jsoncomb._logging import (
    add_log_hook,
    configure_logging,
    get_logger,
    remove_log_hook,
)
from jsoncomb.codec import parse
from jsoncomb.errors import DecodeException

pytestmark = pytest.mark.usefixtures('clean_state')


@pytest.fixture
def captured() -> list[dict[str, Any]]:
    """Configure debug logging and collect every event dict."""
    received: list[dict[str, Any]] = []
    configure_logging(level='DEBUG', json_output=True)
    add_log_hook(received.append)
    return received


class TestLogHooks:
    """Tests for logging hooks functionality."""

    def test_hook_receives_log_events(self, captured: list[dict[str, Any]]) -> None:
        logger = get_logger('test')
        logger.info('Test message', extra_field='extra_value')

        test_entries = [e for e in captured if e.get('event') == 'Test message']
        assert len(test_entries) == 1
        assert test_entries[0]['extra_field'] == 'extra_value'

    def test_remove_hook(self) -> None:
        calls: list[str] = []

        def hook(event_dict: dict[str, Any]) -> None:
            calls.append('called')

        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(hook)

        logger = get_logger('test')
        logger.info('First')
        assert len(calls) == 1

        remove_log_hook(hook)
        logger.info('Second')
        assert len(calls) == 1

    def test_failing_hook_does_not_break_logging(self, captured: list[dict[str, Any]]) -> None:
        def broken(event_dict: dict[str, Any]) -> None:
            raise ValueError('boom')

        add_log_hook(broken)
        get_logger('test').info('still logged')
        assert any(e.get('event') == 'still logged' for e in captured)


class TestBoundaryLogging:
    """Parse and decode failures are reported at debug level."""

    def test_parse_failure_logged(self, captured: list[dict[str, Any]]) -> None:
        assert parse('{"a" 1}').is_err()

        entries = [e for e in captured if e.get('event') == 'json_parse_failed']
        assert len(entries) == 1
        assert entries[0]['level'] == 'debug'
        assert 'error' in entries[0]
        assert 'position' in entries[0]

    def test_decode_failure_logged_before_raise(self, captured: list[dict[str, Any]]) -> None:
        with pytest.raises(DecodeException):
            D.decode_or_raise('"x"', D.int_)

        entries = [e for e in captured if e.get('event') == 'json_decode_failed']
        assert entries[0]['error'] == 'Expected Int but got String'

    def test_successful_decode_is_silent(self, captured: list[dict[str, Any]]) -> None:
        assert D.decode_or_raise('[1]', D.list_of(D.int_)) == [1]
        assert not [e for e in captured if str(e.get('event', '')).startswith('json_')]
