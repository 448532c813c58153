"""CLI command modules.

Subcommands are registered lazily in edgeship_cli.main.LAZY_COMMANDS.
"""

from __future__ import annotations

__all__: list[str] = []
