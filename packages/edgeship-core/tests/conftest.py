"""Shared pytest fixtures for edgeship-core tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
import structlog


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture.

    Without this, structlog may use different processors depending on
    test execution order.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def sample_settings_yaml() -> dict[str, Any]:
    """Return an edgeship.yaml with dev defaults and two environments."""
    return {
        "name": "chat",
        "account_id": "0123456789abcdef",
        "dev": {
            "port": 8788,
            "upstream_protocol": "http",
        },
        "env": {
            "staging": {
                "name": "chat-staging",
                "dev": {"host": "staging.example.com"},
            },
            "production": {
                "account_id": "fedcba9876543210",
            },
        },
    }


@pytest.fixture
def settings_file(tmp_path: Path, sample_settings_yaml: dict[str, Any]) -> Path:
    """Write the sample settings to edgeship.yaml in tmp_path."""
    import yaml

    path = tmp_path / "edgeship.yaml"
    path.write_text(yaml.dump(sample_settings_yaml))
    return path
