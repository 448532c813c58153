"""Upstream host for the local development server.

Accepted formats are ``example.com``, ``http://example.com`` and
``https://example.com``. A bare hostname is treated as https, and anything
after the hostname (port, path, query) is dropped.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field

from edgeship_core.errors import ValidationError

ALLOWED_SCHEMES = ("http", "https")
INVALID_HOST_MESSAGE = (
    "Invalid host, accepted formats are example.com, http://example.com, or https://example.com"
)


class Host(BaseModel):
    """Upstream host requests are forwarded to.

    Attributes:
        url: Normalized ``scheme://hostname`` URL.
        is_default: True when the host was picked by edgeship rather than
            supplied by the user.

    Example:
        >>> Host.parse("example.com/some/path").url
        'https://example.com'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = Field(..., description="Normalized scheme://hostname URL")
    is_default: bool = Field(default=False, description="True for the built-in preview host")

    @classmethod
    def parse(cls, host: str, is_default: bool = False) -> Host:
        """Parse and normalize a host string.

        Args:
            host: Hostname, optionally prefixed with http:// or https://.
            is_default: Whether this is the built-in default host.

        Returns:
            Host with a normalized URL.

        Raises:
            ValidationError: If the scheme is not http/https or no hostname
                can be extracted.
        """
        parts = urlsplit(host)
        if not parts.scheme:
            parts = urlsplit(f"https://{host}")

        if parts.scheme not in ALLOWED_SCHEMES:
            raise ValidationError("Your host scheme must be either http or https")

        hostname = parts.hostname
        if not hostname:
            raise ValidationError(INVALID_HOST_MESSAGE)

        if ":" in hostname:
            hostname = f"[{hostname}]"

        return cls(url=f"{parts.scheme}://{hostname}", is_default=is_default)

    @property
    def scheme(self) -> str:
        """URL scheme, either http or https."""
        return urlsplit(self.url).scheme

    @property
    def hostname(self) -> str:
        """Hostname without scheme."""
        return urlsplit(self.url).hostname or ""

    @property
    def is_https(self) -> bool:
        """True when requests are forwarded over https."""
        return self.scheme == "https"

    def __str__(self) -> str:
        return self.url
