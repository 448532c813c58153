"""Listening address and upstream resolution for ``edgeship dev``.

ServerConfig.resolve() probes the requested address by binding a listening
socket once. A failed bind is fatal and is not retried.
"""

from __future__ import annotations

import ipaddress
import logging
import socket

from pydantic import BaseModel, ConfigDict, Field

from edgeship_core.errors import ServerConfigError, ValidationError
from edgeship_core.server_config.host import Host
from edgeship_core.server_config.protocol import Protocol

logger = logging.getLogger(__name__)

DEFAULT_IP = "127.0.0.1"
DEFAULT_PORT = 8787
DEFAULT_HTTP_HOST = "http://tutorial.cloudflareworkers.com"
DEFAULT_HTTPS_HOST = "https://tutorial.cloudflareworkers.com"


def format_address(ip: str, port: int) -> str:
    """Format an ip/port pair, bracketing IPv6 addresses."""
    if ":" in ip:
        return f"[{ip}]:{port}"
    return f"{ip}:{port}"


def default_host(upstream_protocol: Protocol) -> Host:
    """Return the built-in preview host for the upstream protocol."""
    url = DEFAULT_HTTPS_HOST if upstream_protocol is Protocol.HTTPS else DEFAULT_HTTP_HOST
    return Host.parse(url, is_default=True)


class ServerConfig(BaseModel):
    """Resolved configuration for the local development server.

    Attributes:
        host: Upstream host requests are forwarded to.
        listening_ip: IP address the server listens on.
        listening_port: Port the server listens on.

    Example:
        >>> config = ServerConfig.resolve(port=0)
        >>> config.host.url
        'https://tutorial.cloudflareworkers.com'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    host: Host = Field(..., description="Upstream host")
    listening_ip: str = Field(..., description="Bound IP address")
    listening_port: int = Field(..., ge=0, le=65535, description="Bound port")

    @property
    def listening_address(self) -> str:
        """Bound address as ``ip:port``."""
        return format_address(self.listening_ip, self.listening_port)

    @classmethod
    def resolve(
        cls,
        host: str | None = None,
        ip: str | None = None,
        port: int | None = None,
        upstream_protocol: Protocol = Protocol.HTTPS,
    ) -> ServerConfig:
        """Resolve the listening address and upstream host.

        Args:
            host: Explicit upstream host. Defaults to the preview host for
                ``upstream_protocol``.
            ip: IP to listen on. Defaults to 127.0.0.1.
            port: Port to listen on. Defaults to 8787.
            upstream_protocol: Protocol used to reach the default host.

        Returns:
            ServerConfig with the address the probe socket actually bound.

        Raises:
            ValidationError: If ``ip`` or ``host`` is malformed.
            ServerConfigError: If the address cannot be bound.
        """
        ip = ip or DEFAULT_IP
        port = DEFAULT_PORT if port is None else port
        address = format_address(ip, port)

        try:
            family = socket.AF_INET6 if ipaddress.ip_address(ip).version == 6 else socket.AF_INET
        except ValueError:
            raise ValidationError(f"Invalid IP address: {ip}") from None

        bound_ip, bound_port = _probe_bind(family, ip, port, address)
        logger.debug("Dev server address %s is available", format_address(bound_ip, bound_port))

        resolved_host = Host.parse(host) if host else default_host(upstream_protocol)

        return cls(host=resolved_host, listening_ip=bound_ip, listening_port=bound_port)


def _probe_bind(family: socket.AddressFamily, ip: str, port: int, address: str) -> tuple[str, int]:
    """Bind and release a listening socket, returning the bound ip and port."""
    try:
        with socket.socket(family, socket.SOCK_STREAM) as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((ip, port))
            sock.listen()
            bound = sock.getsockname()
    except OSError as e:
        raise ServerConfigError(address, internal_details=f"bind({address}) failed: {e}") from e
    return bound[0], bound[1]
