"""Durable object migration models for edgeship.

This module defines the descriptor that accompanies a publish when durable
object classes change shape between deployments:

- RenameClass / TransferClass: one structural change to a class
- DurableObjectsMigration: every class change carried by one publish
- Migration: wrapper for one category of structural change
- MigrationTag: closed variant of a known or unknown script migration tag
- AdhocMigrations: the compiled descriptor for flag-driven migrations

Field names that collide with Python keywords (``from``) are exposed under
``from_class`` / ``to_class`` and dumped with their wire names when
``by_alias=True``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field


class RenameClass(BaseModel):
    """Rename of a durable object class within the same script.

    Attributes:
        from_class: Current class name (wire name ``from``).
        to_class: New class name (wire name ``to``).

    Example:
        >>> RenameClass(from_class="Counter", to_class="RateCounter")
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    from_class: str = Field(
        ...,
        alias="from",
        description="Class being renamed",
    )
    to_class: str = Field(
        ...,
        alias="to",
        description="Name the class is renamed to",
    )


class TransferClass(BaseModel):
    """Transfer of a class's objects from another deployed script.

    Attributes:
        from_script: Script that currently owns the objects.
        from_class: Class in ``from_script`` (wire name ``from``).
        to_class: Class in this script that takes ownership (wire name ``to``).
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    from_script: str = Field(
        ...,
        description="Script the objects are transferred from",
    )
    from_class: str = Field(
        ...,
        alias="from",
        description="Class in the source script",
    )
    to_class: str = Field(
        ...,
        alias="to",
        description="Class in this script receiving the objects",
    )


class DurableObjectsMigration(BaseModel):
    """Set of durable object class changes carried by one deployment.

    Attributes:
        new_classes: Classes that may now create durable objects.
        deleted_classes: Classes whose durable objects are all deleted.
        renamed_classes: Class renames, in the order supplied.
        transferred_classes: Cross-script transfers, in the order supplied.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    new_classes: list[str] = Field(
        default_factory=list,
        description="Classes allowed to create durable objects",
    )
    deleted_classes: list[str] = Field(
        default_factory=list,
        description="Classes whose durable objects are deleted",
    )
    renamed_classes: list[RenameClass] = Field(
        default_factory=list,
        description="Class renames in input order",
    )
    transferred_classes: list[TransferClass] = Field(
        default_factory=list,
        description="Class transfers in input order",
    )

    @property
    def is_empty(self) -> bool:
        """True when none of the four change lists holds an entry."""
        return not (
            self.new_classes
            or self.deleted_classes
            or self.renamed_classes
            or self.transferred_classes
        )


class Migration(BaseModel):
    """One category of structural change applied at publish time.

    Only durable objects migrate today.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    durable_objects: DurableObjectsMigration = Field(
        ...,
        description="Durable object class changes",
    )


class UnknownMigrationTag(BaseModel):
    """The client does not know the script's current server-side tag."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["unknown"] = Field(
        default="unknown",
        description="Migration tag discriminator",
    )


class KnownMigrationTag(BaseModel):
    """The script's current server-side tag, as reported by the platform.

    Attributes:
        tag: Opaque tag string.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["known"] = Field(
        default="known",
        description="Migration tag discriminator",
    )
    tag: str = Field(
        ...,
        description="Current migration tag of the script",
    )


# Union type with discriminator on "type" field
MigrationTag = Annotated[
    UnknownMigrationTag | KnownMigrationTag,
    Discriminator("type"),
]
"""Script migration tag: either known or explicitly unknown."""

UNKNOWN_MIGRATION_TAG = UnknownMigrationTag()
"""Shared sentinel for an unknown script tag."""


class AdhocMigrations(BaseModel):
    """Migration descriptor compiled from command-line flags.

    Attributes:
        type: Descriptor discriminator, always "adhoc".
        script_tag: Tag the script currently carries on the platform.
        provided_old_tag: Tag the caller asserts the script currently has.
        new_tag: Tag the script should carry after this publish.
        migration: Structural changes, or None for a tag-only publish.

    Example:
        >>> AdhocMigrations(
        ...     provided_old_tag="v1",
        ...     new_tag="v2",
        ...     migration=Migration(
        ...         durable_objects=DurableObjectsMigration(new_classes=["Counter"])
        ...     ),
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["adhoc"] = Field(
        default="adhoc",
        description="Migrations descriptor discriminator",
    )
    script_tag: MigrationTag = Field(
        default=UNKNOWN_MIGRATION_TAG,
        description="Tag the script currently carries on the platform",
    )
    provided_old_tag: str | None = Field(
        default=None,
        description="Existing migration tag supplied by the caller",
    )
    new_tag: str | None = Field(
        default=None,
        description="Migration tag to record after publishing",
    )
    migration: Migration | None = Field(
        default=None,
        description="Structural class changes (absent for tag-only publishes)",
    )

    @property
    def old_tag(self) -> str | None:
        """Tag sent as the script's current tag.

        A tag known from the platform wins over the caller's assertion.
        """
        if isinstance(self.script_tag, KnownMigrationTag):
            return self.script_tag.tag
        return self.provided_old_tag

    def api_migration(self) -> dict[str, Any]:
        """Project the descriptor into the publish API's migrations object.

        Returns:
            Dictionary with optional ``old_tag``/``new_tag`` and a ``steps``
            list holding the durable object changes with wire field names.
        """
        payload: dict[str, Any] = {}
        if self.old_tag is not None:
            payload["old_tag"] = self.old_tag
        if self.new_tag is not None:
            payload["new_tag"] = self.new_tag

        steps: list[dict[str, Any]] = []
        if self.migration is not None:
            steps.append(self.migration.durable_objects.model_dump(by_alias=True))
        payload["steps"] = steps
        return payload
