"""Unit tests for Protocol."""

from __future__ import annotations

import pytest

from edgeship_core.errors import ValidationError
from edgeship_core.server_config import Protocol


class TestProtocol:
    """Tests for Protocol parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("http", Protocol.HTTP), ("https", Protocol.HTTPS)],
    )
    def test_parse_valid(self, value: str, expected: Protocol) -> None:
        """http and https parse to their members."""
        assert Protocol.parse(value) is expected

    @pytest.mark.parametrize("value", ["ftp", "HTTP", "", "https://"])
    def test_parse_invalid(self, value: str) -> None:
        """Anything else is rejected."""
        with pytest.raises(ValidationError, match="Invalid protocol, must be http or https"):
            Protocol.parse(value)

    def test_is_secure(self) -> None:
        """Only https is secure."""
        assert Protocol.HTTPS.is_secure
        assert not Protocol.HTTP.is_secure

    def test_str(self) -> None:
        """str() is the bare protocol name."""
        assert str(Protocol.HTTPS) == "https"
