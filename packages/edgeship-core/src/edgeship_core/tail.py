"""Tail session options for edgeship.

TailOptions validates the ``tail`` command's inputs and projects them into
the filter list a tail session registers with the platform. Streaming the
logs is handled by the tail websocket client, outside this package.
"""

from __future__ import annotations

import ipaddress
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from edgeship_core.errors import ValidationError

SELF_IP_ADDRESS = "self"
"""Filter value that matches the caller's own IP address."""

OUTCOME_FILTERS: dict[str, tuple[str, ...]] = {
    "ok": ("ok",),
    "error": ("exception", "exceededCpu", "exceededMemory", "unknown"),
    "canceled": ("canceled",),
}
"""Platform outcomes matched by each --status value."""


class TailFormat(str, Enum):
    """Output format for tailed log messages."""

    JSON = "json"
    PRETTY = "pretty"


def parse_ip_address(value: str) -> str:
    """Validate an ``--ip-address`` filter value.

    Args:
        value: "self" or an IPv4/IPv6 address.

    Returns:
        The value unchanged.

    Raises:
        ValidationError: If the value is neither "self" nor a valid address.

    Example:
        >>> parse_ip_address("self")
        'self'
        >>> parse_ip_address("2001:db8::1")
        '2001:db8::1'
    """
    if value == SELF_IP_ADDRESS:
        return value
    try:
        ipaddress.ip_address(value)
    except ValueError as e:
        raise ValidationError(f"{e}: {value}") from None
    return value


def parse_header_filter(value: str) -> dict[str, str]:
    """Split a ``--header`` filter into its key and optional query.

    ``X-Canary`` matches any value of the header; ``X-Canary:on`` matches
    only requests where the header contains ``on``.

    Raises:
        ValidationError: If the header name is empty.
    """
    key, sep, query = value.partition(":")
    key = key.strip()
    if not key:
        raise ValidationError(f"Invalid header filter, expected NAME or NAME:VALUE: {value}")
    header: dict[str, str] = {"key": key}
    if sep:
        header["query"] = query.strip()
    return header


class TailOptions(BaseModel):
    """Inputs of one tail session.

    Attributes:
        script_name: Worker to tail.
        format: Output format for log messages.
        once: Stop after the first log message.
        sampling_rate: Fraction of events to receive (0.01 for 1%).
        status: Invocation outcomes to keep.
        method: HTTP methods to keep.
        header: Header filters (NAME or NAME:VALUE).
        ip_address: Client IPs to keep, or "self".
        search: Text to match in console.log messages.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    script_name: str = Field(..., min_length=1, description="Worker to tail")
    format: TailFormat = Field(default=TailFormat.JSON, description="Log output format")
    once: bool = Field(default=False, description="Stop after the first log message")
    sampling_rate: float = Field(
        default=1.0,
        gt=0.0,
        le=1.0,
        description="Fraction of events to receive",
    )
    status: list[Literal["ok", "error", "canceled"]] = Field(
        default_factory=list,
        description="Invocation outcomes to keep",
    )
    method: list[str] = Field(default_factory=list, description="HTTP methods to keep")
    header: list[str] = Field(default_factory=list, description="Header filters")
    ip_address: list[str] = Field(default_factory=list, description="Client IP filters")
    search: str | None = Field(default=None, description="console.log text match")

    @field_validator("ip_address")
    @classmethod
    def validate_ip_addresses(cls, v: list[str]) -> list[str]:
        """Reject entries that are neither "self" nor an IP address."""
        for address in v:
            try:
                parse_ip_address(address)
            except ValidationError as e:
                raise ValueError(e.user_message) from None
        return v

    @field_validator("header")
    @classmethod
    def validate_headers(cls, v: list[str]) -> list[str]:
        """Reject header filters without a header name."""
        for header in v:
            try:
                parse_header_filter(header)
            except ValidationError as e:
                raise ValueError(e.user_message) from None
        return v

    @field_validator("method")
    @classmethod
    def normalize_methods(cls, v: list[str]) -> list[str]:
        """Upper-case HTTP methods."""
        return [m.upper() for m in v]

    def filters(self) -> list[dict[str, Any]]:
        """Build the tail filter payload.

        Each filter is a single-key object. Unset filters are omitted, and
        the sampling rate is only sent when it is below 1.

        Returns:
            List of filter objects in a stable order.
        """
        filters: list[dict[str, Any]] = []
        if self.status:
            outcomes: list[str] = []
            for status in self.status:
                outcomes.extend(o for o in OUTCOME_FILTERS[status] if o not in outcomes)
            filters.append({"outcome": outcomes})
        if self.method:
            filters.append({"method": list(self.method)})
        for header in self.header:
            filters.append({"header": parse_header_filter(header)})
        if self.ip_address:
            filters.append({"client_ip": list(self.ip_address)})
        if self.search:
            filters.append({"query": self.search})
        if self.sampling_rate < 1.0:
            filters.append({"sampling_rate": self.sampling_rate})
        return filters
