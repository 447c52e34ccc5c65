"""Pytest configuration and shared fixtures for jsoncomb tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from jsoncomb import _config
from jsoncomb._logging import clear_log_hooks


@pytest.fixture
def clean_state() -> Iterator[None]:
    """Reset configuration and log hooks around a test."""
    _config.reset()
    clear_log_hooks()
    yield
    _config.reset()
    clear_log_hooks()


@pytest.fixture
def nested_doc() -> str:
    """Three levels of nested objects ending in an int."""
    return '{"a":{"b":{"c":42}}}'


@pytest.fixture
def user_doc() -> str:
    """A document mixing every JSON shape."""
    return (
        '{"ok":true,"error":null,"user":{"id":42,"username":"dan",'
        '"luckyNumbers":[3,9,27],"favoriteColors":["orange","black"]}}'
    )
