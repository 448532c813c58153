"""Project settings for edgeship.

This module loads edgeship.yaml:
- ProjectSettings: script name, account and ``dev`` defaults
- Named environments under ``env`` that override top-level values
- Environment selection from --env or the EDGESHIP_ENV variable

Example edgeship.yaml::

    name: chat
    account_id: 0123456789abcdef
    dev:
      port: 8788
      upstream_protocol: http
    env:
      staging:
        name: chat-staging
        dev:
          host: staging.example.com
"""

from __future__ import annotations

import ipaddress
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from edgeship_core.errors import ConfigurationError
from edgeship_core.publish import SCRIPT_NAME_PATTERN
from edgeship_core.server_config import Protocol

logger = logging.getLogger(__name__)

# Environment variable for environment selection
ENVIRONMENT_ENV_VAR = "EDGESHIP_ENV"

# Default settings file name
SETTINGS_FILE_NAME = "edgeship.yaml"

# Script name used when no settings file is present
DEFAULT_SCRIPT_NAME = "worker"


def get_environment(explicit: str | None = None) -> str | None:
    """Resolve the selected environment.

    Args:
        explicit: Environment passed with --env, if any.

    Returns:
        The explicit environment, else EDGESHIP_ENV, else None (top level).
    """
    if explicit:
        return explicit
    return os.environ.get(ENVIRONMENT_ENV_VAR) or None


class DevSettings(BaseModel):
    """Defaults for ``edgeship dev``; command-line flags take precedence.

    Attributes:
        ip: IP to listen on.
        port: Port to listen on.
        host: Upstream host to forward requests to.
        local_protocol: Protocol the dev server listens with.
        upstream_protocol: Protocol used to reach the upstream host.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ip: str | None = Field(default=None, description="IP to listen on")
    port: int | None = Field(default=None, ge=0, le=65535, description="Port to listen on")
    host: str | None = Field(default=None, description="Upstream host")
    local_protocol: Protocol | None = Field(default=None, description="Listening protocol")
    upstream_protocol: Protocol | None = Field(default=None, description="Upstream protocol")

    @field_validator("ip")
    @classmethod
    def validate_ip(cls, v: str | None) -> str | None:
        """Require a literal IPv4 or IPv6 address."""
        if v is not None:
            ipaddress.ip_address(v)
        return v

    def merged(self, override: DevSettings | None) -> DevSettings:
        """Return these settings with the fields set in ``override`` applied."""
        if override is None:
            return self
        return self.model_copy(update=override.model_dump(exclude_unset=True))


class EnvironmentSettings(BaseModel):
    """Overrides for one named environment."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str | None = Field(default=None, pattern=SCRIPT_NAME_PATTERN)
    account_id: str | None = Field(default=None, min_length=1)
    dev: DevSettings | None = None


class ProjectSettings(BaseModel):
    """Root model for edgeship.yaml.

    Attributes:
        name: Script name on the platform.
        account_id: Account the script belongs to.
        dev: Defaults for the dev command.
        env: Named environment overrides.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        default=DEFAULT_SCRIPT_NAME,
        min_length=1,
        max_length=63,
        pattern=SCRIPT_NAME_PATTERN,
        description="Script name on the platform",
    )
    account_id: str | None = Field(default=None, min_length=1, description="Account identifier")
    dev: DevSettings = Field(default_factory=DevSettings, description="Dev server defaults")
    env: dict[str, EnvironmentSettings] = Field(
        default_factory=dict,
        description="Named environment overrides",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> ProjectSettings:
        """Load and validate ProjectSettings from a YAML file.

        Args:
            path: Path to edgeship.yaml.

        Returns:
            Validated ProjectSettings instance.

        Raises:
            FileNotFoundError: If file doesn't exist.
            yaml.YAMLError: If YAML syntax is invalid.
            pydantic.ValidationError: If schema validation fails.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("r") as f:
            data: dict[str, Any] | None = yaml.safe_load(f)

        logger.debug("Loaded settings from %s", path)
        return cls.model_validate(data or {})

    @classmethod
    def load(cls, path: str | Path, *, missing_ok: bool = True) -> ProjectSettings:
        """Load settings, falling back to defaults when the file is absent.

        Args:
            path: Path to edgeship.yaml.
            missing_ok: If True, a missing file yields default settings.

        Returns:
            ProjectSettings instance.
        """
        path = Path(path)
        if missing_ok and not path.exists():
            logger.debug("No settings file at %s, using defaults", path)
            return cls()
        return cls.from_yaml(path)

    def for_environment(self, env: str | None, *, file_path: str | None = None) -> ProjectSettings:
        """Apply a named environment's overrides.

        Args:
            env: Environment name, or None for top-level settings.
            file_path: Settings file path, used in error messages.

        Returns:
            ProjectSettings with the environment merged in and ``env`` cleared.

        Raises:
            ConfigurationError: If the environment is not defined.
        """
        if env is None:
            return self

        overrides = self.env.get(env)
        if overrides is None:
            available = ", ".join(sorted(self.env)) or "none"
            raise ConfigurationError(
                f"Environment '{env}' not found. Available: {available}",
                file_path=file_path,
                field_path="env",
            )

        return self.model_copy(
            update={
                "name": overrides.name or self.name,
                "account_id": overrides.account_id or self.account_id,
                "dev": self.dev.merged(overrides.dev),
                "env": {},
            }
        )
