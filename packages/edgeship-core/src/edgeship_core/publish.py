"""Publish request model for edgeship.

PublishRequest is the hand-off point between the migration compiler and the
publish API client. It projects a compiled descriptor into the metadata part
of the deployment upload; uploading itself lives outside this package.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from edgeship_core.migrations import AdhocMigrations

SCRIPT_NAME_PATTERN = r"^[a-zA-Z0-9][a-zA-Z0-9_-]*$"
"""Valid script name pattern (alphanumeric with hyphens/underscores)."""

SCRIPT_BODY_PART = "script"
"""Multipart field that carries the script body."""


class PublishRequest(BaseModel):
    """Deployment request for a single script.

    Attributes:
        script_name: Name of the script being published.
        migrations: Compiled migration descriptor, or None when this publish
            carries no migration.

    Example:
        >>> request = PublishRequest(script_name="chat", migrations=None)
        >>> request.to_metadata()
        {'body_part': 'script'}
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    script_name: str = Field(
        ...,
        min_length=1,
        max_length=63,
        pattern=SCRIPT_NAME_PATTERN,
        description="Script name on the platform",
    )
    migrations: AdhocMigrations | None = Field(
        default=None,
        description="Migration descriptor sent with this publish",
    )

    def to_metadata(self) -> dict[str, Any]:
        """Build the metadata object of the deployment upload.

        The ``migrations`` key is omitted entirely when there is no
        descriptor.

        Returns:
            Metadata dictionary ready for JSON encoding.
        """
        metadata: dict[str, Any] = {"body_part": SCRIPT_BODY_PART}
        if self.migrations is not None:
            metadata["migrations"] = self.migrations.api_migration()
        return metadata
