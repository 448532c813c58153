"""Local development server configuration for edgeship.

This package provides:
- Protocol: http/https selection
- Host: normalized upstream host
- ServerConfig: bound listening address plus upstream host
"""

from __future__ import annotations

from edgeship_core.server_config.host import Host
from edgeship_core.server_config.protocol import Protocol
from edgeship_core.server_config.server_config import (
    DEFAULT_HTTP_HOST,
    DEFAULT_HTTPS_HOST,
    DEFAULT_IP,
    DEFAULT_PORT,
    ServerConfig,
    default_host,
    format_address,
)

__all__ = [
    "DEFAULT_HTTP_HOST",
    "DEFAULT_HTTPS_HOST",
    "DEFAULT_IP",
    "DEFAULT_PORT",
    "Host",
    "Protocol",
    "ServerConfig",
    "default_host",
    "format_address",
]
