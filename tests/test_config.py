"""Tests for library configuration and initialization."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from jsoncomb._config import CodecConfig, _detect_indent, get_config, init, reset
from jsoncomb.encoder import num, obj

pytestmark = pytest.mark.usefixtures('clean_state')


class TestCodecConfig:
    """Tests for the CodecConfig dataclass."""

    def test_default_values(self) -> None:
        config = CodecConfig()
        assert config.indent == 2
        assert config.log_level is None

    def test_config_is_frozen(self) -> None:
        config = CodecConfig()
        with pytest.raises(AttributeError):
            config.indent = 8  # type: ignore[misc]


class TestDetectIndent:
    """Tests for _detect_indent()."""

    def test_unset(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert _detect_indent() == 2

    def test_env_value(self) -> None:
        with patch.dict(os.environ, {'JSONCOMB_INDENT': '4'}):
            assert _detect_indent() == 4

    def test_env_invalid_falls_back(self) -> None:
        with patch.dict(os.environ, {'JSONCOMB_INDENT': 'wide'}):
            assert _detect_indent() == 2

    def test_env_negative_falls_back(self) -> None:
        with patch.dict(os.environ, {'JSONCOMB_INDENT': '-3'}):
            assert _detect_indent() == 2


class TestInit:
    """Tests for init() and get_config()."""

    def test_get_config_without_init_returns_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert get_config() == CodecConfig()

    def test_defaults_read_env(self) -> None:
        with patch.dict(os.environ, {'JSONCOMB_INDENT': '4'}):
            assert get_config().indent == 4
            assert obj({'a': num(1)}).to_pretty_string() == '{\n    "a": 1\n}'

    def test_defaults_resolved_once(self) -> None:
        with (
            patch.dict(os.environ, {'JSONCOMB_INDENT': 'wide'}),
            patch('jsoncomb._config.logging.warning') as warning,
        ):
            first = get_config()
            for _ in range(3):
                assert obj({'a': num(1)}).to_pretty_string() == '{\n  "a": 1\n}'
            assert get_config() is first
        warning.assert_called_once()

    def test_reset_rereads_env(self) -> None:
        with patch.dict(os.environ, {'JSONCOMB_INDENT': '1'}):
            assert get_config().indent == 1
        reset()
        with patch.dict(os.environ, {'JSONCOMB_INDENT': '3'}):
            assert get_config().indent == 3

    def test_init_explicit(self) -> None:
        config = init(indent=4)
        assert config.indent == 4
        assert get_config() is config

    def test_init_reads_env(self) -> None:
        with patch.dict(os.environ, {'JSONCOMB_INDENT': '3'}):
            assert init().indent == 3

    def test_init_clamps_negative(self) -> None:
        assert init(indent=-1).indent == 0

    def test_init_with_log_level(self) -> None:
        with patch('jsoncomb._config.configure_logging') as configure:
            config = init(log_level='DEBUG')
        configure.assert_called_once_with('DEBUG')
        assert config.log_level == 'DEBUG'

    def test_indent_applies_to_pretty_printing(self) -> None:
        init(indent=4)
        assert obj({'a': num(1)}).to_pretty_string() == '{\n    "a": 1\n}'
