"""Shared command context for edgeship-cli.

The root ``edgeship`` group stores a CliContext on ``ctx.obj``; subcommands
use it to load edgeship.yaml for the selected environment.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
import yaml
from pydantic import ValidationError as PydanticValidationError

from edgeship_cli.errors import (
    handle_edgeship_error,
    handle_file_not_found,
    handle_validation_error,
    handle_yaml_error,
)
from edgeship_core.errors import EdgeshipError
from edgeship_core.settings import SETTINGS_FILE_NAME, ProjectSettings, get_environment


@dataclass
class CliContext:
    """Global options shared by every subcommand."""

    config_path: Path = Path(SETTINGS_FILE_NAME)
    config_required: bool = False
    environment: str | None = None
    verbose: bool = False

    def load_settings(self) -> ProjectSettings:
        """Load edgeship.yaml and apply the selected environment.

        A missing file yields defaults unless --config named it explicitly.

        Returns:
            ProjectSettings for the selected environment.

        Raises:
            CLIError: If an explicit --config file is missing, or if the
                file is unparsable or invalid or names an unknown environment.
        """
        file_path = str(self.config_path)
        try:
            settings = ProjectSettings.load(
                self.config_path, missing_ok=not self.config_required
            )
            return settings.for_environment(
                get_environment(self.environment), file_path=file_path
            )
        except FileNotFoundError:
            handle_file_not_found(file_path)
        except yaml.YAMLError as e:
            handle_yaml_error(e, file_path)
        except PydanticValidationError as e:
            handle_validation_error(e, file_path)
        except EdgeshipError as e:
            handle_edgeship_error(e)


def get_cli_context() -> CliContext:
    """Return the CliContext of the running command.

    Commands invoked outside the root group (e.g. directly in tests) get
    a default context.
    """
    ctx = click.get_current_context()
    obj = ctx.find_object(CliContext)
    if obj is None:
        obj = CliContext()
    return obj
