"""Shared test fixtures for edgeship-cli tests.

Provides CliRunner fixtures and settings file helpers for testing CLI
commands.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
import structlog
from click.testing import CliRunner

if TYPE_CHECKING:
    from collections.abc import Callable

SETTINGS_FILENAME = "edgeship.yaml"

VALID_SETTINGS = """\
name: chat
account_id: 0123456789abcdef
dev:
  upstream_protocol: http
env:
  staging:
    name: chat-staging
    dev:
      host: staging.example.com
"""


@pytest.fixture(autouse=True)
def clear_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's EDGESHIP_ENV out of the tests."""
    monkeypatch.delenv("EDGESHIP_ENV", raising=False)


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Undo the global logging setup performed by the root group."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner inside a temporary working directory.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """Write a valid edgeship.yaml to tmp_path.

    Returns:
        Path to the settings file.
    """
    path = tmp_path / SETTINGS_FILENAME
    path.write_text(VALID_SETTINGS)
    return path


@pytest.fixture
def create_settings(tmp_path: Path) -> Callable[[str], Path]:
    """Factory fixture to create settings files with custom content."""

    def _create(content: str, filename: str = SETTINGS_FILENAME) -> Path:
        path = tmp_path / filename
        path.write_text(content)
        return path

    return _create
