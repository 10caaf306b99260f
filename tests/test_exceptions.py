"""Tests for kvstart exception hierarchy."""

import pytest

from kvstart.exceptions import (
    KvstartError,
    ConfigError,
    ValidationError,
    TemplateError,
)


class TestKvstartError:
    """Tests for base KvstartError class."""

    def test_message_attribute(self):
        """KvstartError stores message as attribute."""
        err = KvstartError("test message")
        assert err.message == "test message"

    def test_default_exit_code(self):
        """KvstartError has default exit code of 1."""
        err = KvstartError("test")
        assert err.exit_code == 1

    def test_custom_exit_code(self):
        """KvstartError accepts custom exit code."""
        err = KvstartError("test", exit_code=2)
        assert err.exit_code == 2

    def test_str_representation(self):
        """KvstartError string representation is the message."""
        err = KvstartError("test message")
        assert str(err) == "test message"


class TestSubclasses:
    """Tests for KvstartError subclasses."""

    @pytest.mark.parametrize("cls", [ConfigError, ValidationError, TemplateError])
    def test_inherits_from_kvstart_error(self, cls):
        """Every error kind can be caught as KvstartError."""
        with pytest.raises(KvstartError) as exc_info:
            raise cls("boom")
        assert exc_info.value.message == "boom"

    def test_template_error_is_not_config_error(self):
        """TemplateError is its own kind."""
        assert not isinstance(TemplateError("x"), ConfigError)
