"""Unit tests for tail session options."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from edgeship_core.errors import ValidationError
from edgeship_core.tail import TailFormat, TailOptions, parse_header_filter, parse_ip_address


class TestParseIpAddress:
    """Tests for parse_ip_address()."""

    @pytest.mark.parametrize("value", ["self", "127.0.0.1", "2001:db8::1"])
    def test_valid(self, value: str) -> None:
        """self and literal addresses are returned unchanged."""
        assert parse_ip_address(value) == value

    @pytest.mark.parametrize("value", ["me", "256.0.0.1", "example.com", ""])
    def test_invalid(self, value: str) -> None:
        """The error message ends with the offending input."""
        with pytest.raises(ValidationError) as exc_info:
            parse_ip_address(value)
        assert exc_info.value.user_message.endswith(f": {value}")


class TestParseHeaderFilter:
    """Tests for parse_header_filter()."""

    def test_key_only(self) -> None:
        assert parse_header_filter("X-Canary") == {"key": "X-Canary"}

    def test_key_and_query(self) -> None:
        """Only the first colon splits key from query."""
        assert parse_header_filter("X-Trace: a:b") == {"key": "X-Trace", "query": "a:b"}

    def test_empty_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_header_filter(":value")


class TestTailOptions:
    """Tests for TailOptions validation and filters()."""

    def test_defaults_have_no_filters(self) -> None:
        """A bare tail session registers no filters."""
        options = TailOptions(script_name="chat")
        assert options.format is TailFormat.JSON
        assert not options.once
        assert options.filters() == []

    def test_all_filters(self) -> None:
        """Every filter is projected in a stable order."""
        options = TailOptions(
            script_name="chat",
            sampling_rate=0.25,
            status=["ok", "canceled"],
            method=["get", "POST"],
            header=["X-Canary:on"],
            ip_address=["self", "10.0.0.1"],
            search="timeout",
        )

        assert options.filters() == [
            {"outcome": ["ok", "canceled"]},
            {"method": ["GET", "POST"]},
            {"header": {"key": "X-Canary", "query": "on"}},
            {"client_ip": ["self", "10.0.0.1"]},
            {"query": "timeout"},
            {"sampling_rate": 0.25},
        ]

    def test_error_status_expands_to_platform_outcomes(self) -> None:
        """error covers every failed outcome."""
        options = TailOptions(script_name="chat", status=["error"])
        assert options.filters() == [
            {"outcome": ["exception", "exceededCpu", "exceededMemory", "unknown"]}
        ]

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            TailOptions(script_name="chat", status=["timeout"])  # type: ignore[list-item]

    def test_invalid_ip_rejected(self) -> None:
        with pytest.raises(PydanticValidationError, match="not-an-ip"):
            TailOptions(script_name="chat", ip_address=["not-an-ip"])

    def test_invalid_header_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            TailOptions(script_name="chat", header=[":on"])

    @pytest.mark.parametrize("rate", [0.0, -0.5, 1.5])
    def test_sampling_rate_bounds(self, rate: float) -> None:
        """Sampling rate must be in (0, 1]."""
        with pytest.raises(PydanticValidationError):
            TailOptions(script_name="chat", sampling_rate=rate)
