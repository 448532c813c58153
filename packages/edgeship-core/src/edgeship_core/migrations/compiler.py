"""Adhoc migration compiler for edgeship.

Turns the class changes requested on the ``publish`` command line into an
AdhocMigrations descriptor, or None when the publish carries no migration.

The compiler is a pure function: it performs no I/O and keeps no state
between calls, so compiling the same ClassChangeSet twice yields equal
descriptors.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from edgeship_core.errors import MigrationArityError
from edgeship_core.migrations.models import (
    UNKNOWN_MIGRATION_TAG,
    AdhocMigrations,
    DurableObjectsMigration,
    Migration,
    RenameClass,
    TransferClass,
)

logger = logging.getLogger(__name__)

RENAME_ARITY = 2
"""Values per --rename-class occurrence: from class, to class."""

TRANSFER_ARITY = 3
"""Values per --transfer-class occurrence: from script, from class, to class."""


class ClassChangeSet(BaseModel):
    """Class changes requested for one publish, grouped per flag occurrence.

    Renames and transfers are stored as fixed-size tuples so a partial
    group cannot be represented.

    Attributes:
        new_classes: Classes to allow durable object creation for.
        deleted_classes: Classes whose durable objects are deleted.
        renamed: (from class, to class) pairs.
        transferred: (from script, from class, to class) triples.
        old_tag: Existing migration tag asserted by the caller.
        new_tag: Migration tag to record after this publish.

    Example:
        >>> changes = ClassChangeSet(
        ...     new_classes=["Counter"],
        ...     renamed=[("Room", "ChatRoom")],
        ...     new_tag="v2",
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    new_classes: list[str] = Field(default_factory=list)
    deleted_classes: list[str] = Field(default_factory=list)
    renamed: list[tuple[str, str]] = Field(default_factory=list)
    transferred: list[tuple[str, str, str]] = Field(default_factory=list)
    old_tag: str | None = None
    new_tag: str | None = None

    @classmethod
    def from_flat(
        cls,
        *,
        new_classes: Sequence[str] = (),
        deleted_classes: Sequence[str] = (),
        renamed_pairs: Sequence[str] = (),
        transferred_triples: Sequence[str] = (),
        old_tag: str | None = None,
        new_tag: str | None = None,
    ) -> ClassChangeSet:
        """Build a ClassChangeSet from flattened repeated-flag values.

        Args:
            new_classes: Class names, one per occurrence.
            deleted_classes: Class names, one per occurrence.
            renamed_pairs: Rename values flattened with stride 2.
            transferred_triples: Transfer values flattened with stride 3.
            old_tag: Existing migration tag.
            new_tag: New migration tag.

        Returns:
            ClassChangeSet with renames and transfers grouped in input order.

        Raises:
            MigrationArityError: If a flattened list does not split evenly.
        """
        return cls(
            new_classes=list(new_classes),
            deleted_classes=list(deleted_classes),
            renamed=_chunk_exact(renamed_pairs, RENAME_ARITY, "renamed_pairs"),
            transferred=_chunk_exact(transferred_triples, TRANSFER_ARITY, "transferred_triples"),
            old_tag=old_tag,
            new_tag=new_tag,
        )


def _chunk_exact(values: Sequence[str], size: int, field_name: str) -> list[tuple[str, ...]]:
    """Split values into consecutive groups of exactly ``size`` items."""
    if len(values) % size:
        raise MigrationArityError(field_name, size, len(values))
    return [tuple(values[i : i + size]) for i in range(0, len(values), size)]


def compile_adhoc_migration(changes: ClassChangeSet) -> AdhocMigrations | None:
    """Compile requested class changes into an adhoc migration descriptor.

    Args:
        changes: Class changes and tags from the publish command line.

    Returns:
        AdhocMigrations when there are structural changes or either tag is
        set, otherwise None. The descriptor's ``migration`` is None for a
        tag-only publish.

    Example:
        >>> descriptor = compile_adhoc_migration(
        ...     ClassChangeSet(new_classes=["A", "B"], renamed=[("X", "Y")])
        ... )
        >>> descriptor.migration.durable_objects.new_classes
        ['A', 'B']
    """
    durable_objects = DurableObjectsMigration(
        new_classes=list(changes.new_classes),
        deleted_classes=list(changes.deleted_classes),
        renamed_classes=[
            RenameClass(from_class=from_class, to_class=to_class)
            for from_class, to_class in changes.renamed
        ],
        transferred_classes=[
            TransferClass(from_script=from_script, from_class=from_class, to_class=to_class)
            for from_script, from_class, to_class in changes.transferred
        ],
    )

    migration = None if durable_objects.is_empty else Migration(durable_objects=durable_objects)

    if migration is None and changes.old_tag is None and changes.new_tag is None:
        logger.debug("No adhoc migration requested")
        return None

    logger.debug(
        "Compiled adhoc migration: %d new, %d deleted, %d renamed, %d transferred, "
        "old_tag=%s, new_tag=%s",
        len(durable_objects.new_classes),
        len(durable_objects.deleted_classes),
        len(durable_objects.renamed_classes),
        len(durable_objects.transferred_classes),
        changes.old_tag,
        changes.new_tag,
    )

    return AdhocMigrations(
        script_tag=UNKNOWN_MIGRATION_TAG,
        provided_old_tag=changes.old_tag,
        new_tag=changes.new_tag,
        migration=migration,
    )
