"""Unit tests for ServerConfig resolution."""

from __future__ import annotations

import socket
from collections.abc import Iterator

import pytest

from edgeship_core.errors import ServerConfigError, ValidationError
from edgeship_core.server_config import (
    DEFAULT_HTTP_HOST,
    DEFAULT_HTTPS_HOST,
    Protocol,
    ServerConfig,
    format_address,
)


@pytest.fixture
def occupied_port() -> Iterator[int]:
    """Hold a listening socket on 127.0.0.1 and yield its port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen()
    try:
        yield sock.getsockname()[1]
    finally:
        sock.close()


class TestServerConfigResolve:
    """Tests for ServerConfig.resolve()."""

    def test_default_host_https(self) -> None:
        """No host and https upstream picks the https preview host."""
        config = ServerConfig.resolve(port=0, upstream_protocol=Protocol.HTTPS)

        assert config.host.url == DEFAULT_HTTPS_HOST
        assert config.host.is_default

    def test_default_host_http(self) -> None:
        """No host and http upstream picks the http preview host."""
        config = ServerConfig.resolve(port=0, upstream_protocol=Protocol.HTTP)

        assert config.host.url == DEFAULT_HTTP_HOST
        assert config.host.is_default

    def test_explicit_host(self) -> None:
        """An explicit host wins over the default and is not flagged default."""
        config = ServerConfig.resolve(host="example.com", port=0, upstream_protocol=Protocol.HTTP)

        assert config.host.url == "https://example.com"
        assert not config.host.is_default

    def test_default_ip_and_bound_port(self) -> None:
        """The default IP is loopback and port 0 resolves to a real port."""
        config = ServerConfig.resolve(port=0)

        assert config.listening_ip == "127.0.0.1"
        assert config.listening_port > 0
        assert config.listening_address == f"127.0.0.1:{config.listening_port}"

    def test_occupied_address_is_fatal(self, occupied_port: int) -> None:
        """Binding an address in use names that exact address."""
        with pytest.raises(ServerConfigError) as exc_info:
            ServerConfig.resolve(ip="127.0.0.1", port=occupied_port)

        assert exc_info.value.address == f"127.0.0.1:{occupied_port}"
        assert exc_info.value.user_message.startswith(f"127.0.0.1:{occupied_port} is unavailable")

    def test_socket_creation_failure_is_fatal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A host without IPv6 support reports the address, not a raw OSError."""

        def no_ipv6(*args: object, **kwargs: object) -> socket.socket:
            raise OSError(97, "Address family not supported by protocol")

        monkeypatch.setattr(socket, "socket", no_ipv6)

        with pytest.raises(ServerConfigError) as exc_info:
            ServerConfig.resolve(ip="::1", port=8787)

        assert exc_info.value.address == "[::1]:8787"
        assert exc_info.value.user_message.startswith("[::1]:8787 is unavailable")

    def test_bind_socket_released(self) -> None:
        """The probed port can be bound again after resolution."""
        config = ServerConfig.resolve(port=0)

        again = ServerConfig.resolve(port=config.listening_port)
        assert again.listening_port == config.listening_port

    def test_invalid_ip_rejected(self) -> None:
        """A non-IP string is a validation error, not a bind error."""
        with pytest.raises(ValidationError, match="Invalid IP address"):
            ServerConfig.resolve(ip="localhost", port=0)

    def test_invalid_host_rejected(self) -> None:
        """Host validation errors propagate."""
        with pytest.raises(ValidationError):
            ServerConfig.resolve(host="ftp://example.com", port=0)


class TestFormatAddress:
    """Tests for format_address()."""

    def test_ipv4(self) -> None:
        assert format_address("127.0.0.1", 8787) == "127.0.0.1:8787"

    def test_ipv6_bracketed(self) -> None:
        assert format_address("::1", 8787) == "[::1]:8787"
