"""Protocol selection for the local development server."""

from __future__ import annotations

from enum import Enum

from edgeship_core.errors import ValidationError


class Protocol(str, Enum):
    """Protocols the dev server listens on or forwards with.

    Values:
        HTTP: Plain HTTP.
        HTTPS: HTTP over TLS.
    """

    HTTP = "http"
    HTTPS = "https"

    @classmethod
    def parse(cls, value: str) -> Protocol:
        """Parse a protocol name.

        Args:
            value: "http" or "https".

        Returns:
            Matching Protocol member.

        Raises:
            ValidationError: If the value is not a supported protocol.
        """
        try:
            return cls(value)
        except ValueError:
            raise ValidationError("Invalid protocol, must be http or https") from None

    @property
    def is_secure(self) -> bool:
        """True for HTTPS."""
        return self is Protocol.HTTPS

    def __str__(self) -> str:
        return self.value
