"""edgeship-core: deployment descriptors for the edgeship CLI.

This package provides:
- ClassChangeSet / compile_adhoc_migration: adhoc migration descriptor compiler
- PublishRequest: metadata projection handed to the publish API client
- ServerConfig: local dev server address and upstream host resolution
- TailOptions: tail session filter model
- ProjectSettings: edgeship.yaml loading
"""

from __future__ import annotations

__version__ = "0.1.0"

# Error types
from edgeship_core.errors import (
    CompilationError,
    ConfigurationError,
    EdgeshipError,
    MigrationArityError,
    ServerConfigError,
    ValidationError,
)

# Migration compiler and descriptor models
from edgeship_core.migrations import (
    AdhocMigrations,
    ClassChangeSet,
    DurableObjectsMigration,
    KnownMigrationTag,
    Migration,
    MigrationTag,
    RenameClass,
    TransferClass,
    UnknownMigrationTag,
    compile_adhoc_migration,
)
from edgeship_core.observability import configure_logging
from edgeship_core.publish import PublishRequest
from edgeship_core.server_config import Host, Protocol, ServerConfig
from edgeship_core.settings import DevSettings, ProjectSettings, get_environment
from edgeship_core.tail import TailFormat, TailOptions, parse_ip_address

__all__ = [
    "__version__",
    # Errors
    "CompilationError",
    "ConfigurationError",
    "EdgeshipError",
    "MigrationArityError",
    "ServerConfigError",
    "ValidationError",
    # Migrations
    "AdhocMigrations",
    "ClassChangeSet",
    "DurableObjectsMigration",
    "KnownMigrationTag",
    "Migration",
    "MigrationTag",
    "RenameClass",
    "TransferClass",
    "UnknownMigrationTag",
    "compile_adhoc_migration",
    # Publish
    "PublishRequest",
    # Dev server
    "Host",
    "Protocol",
    "ServerConfig",
    # Tail
    "TailFormat",
    "TailOptions",
    "parse_ip_address",
    # Settings and logging
    "DevSettings",
    "ProjectSettings",
    "configure_logging",
    "get_environment",
]
