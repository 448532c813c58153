"""Durable object migration descriptors for edgeship.

This package provides:
- ClassChangeSet: class changes requested on the publish command line
- compile_adhoc_migration: ClassChangeSet -> AdhocMigrations | None
- Descriptor models (AdhocMigrations, Migration, DurableObjectsMigration, ...)
"""

from __future__ import annotations

from edgeship_core.migrations.compiler import (
    RENAME_ARITY,
    TRANSFER_ARITY,
    ClassChangeSet,
    compile_adhoc_migration,
)
from edgeship_core.migrations.models import (
    UNKNOWN_MIGRATION_TAG,
    AdhocMigrations,
    DurableObjectsMigration,
    KnownMigrationTag,
    Migration,
    MigrationTag,
    RenameClass,
    TransferClass,
    UnknownMigrationTag,
)

__all__ = [
    # Compiler
    "ClassChangeSet",
    "compile_adhoc_migration",
    "RENAME_ARITY",
    "TRANSFER_ARITY",
    # Models
    "AdhocMigrations",
    "DurableObjectsMigration",
    "KnownMigrationTag",
    "Migration",
    "MigrationTag",
    "RenameClass",
    "TransferClass",
    "UNKNOWN_MIGRATION_TAG",
    "UnknownMigrationTag",
]
