"""Unit tests for the edgeship-core exception hierarchy."""

from __future__ import annotations

import pytest

from edgeship_core.errors import (
    CompilationError,
    ConfigurationError,
    EdgeshipError,
    MigrationArityError,
    ServerConfigError,
    ValidationError,
)


class TestEdgeshipError:
    """Tests for the base EdgeshipError exception."""

    def test_stores_user_message(self) -> None:
        """EdgeshipError should store and expose user_message."""
        error = EdgeshipError("Something went wrong")
        assert error.user_message == "Something went wrong"
        assert str(error) == "Something went wrong"

    def test_logs_internal_details(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Internal details go to the log, not the message."""
        error = EdgeshipError("User sees this", internal_details="socket errno 98")

        assert "socket errno 98" not in str(error)
        captured = capsys.readouterr()
        assert "socket errno 98" in captured.out
        assert "User sees this" in captured.out
        assert "debug" in captured.out

    def test_no_log_without_internal_details(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Nothing is logged when there are no internal details."""
        EdgeshipError("Just a user message")
        assert "edgeship_error" not in capsys.readouterr().out

    @pytest.mark.parametrize(
        "error_class",
        [ValidationError, ConfigurationError, CompilationError, ServerConfigError],
    )
    def test_subclasses_inherit_base(self, error_class: type[EdgeshipError]) -> None:
        """All edgeship errors can be caught as EdgeshipError."""
        assert issubclass(error_class, EdgeshipError)


class TestConfigurationError:
    """Tests for ConfigurationError context."""

    def test_message_includes_context(self) -> None:
        """File and field paths are appended to the message."""
        error = ConfigurationError(
            "Environment 'qa' not found",
            file_path="edgeship.yaml",
            field_path="env",
        )
        assert error.user_message == "Environment 'qa' not found (in edgeship.yaml, field 'env')"
        assert error.file_path == "edgeship.yaml"
        assert error.field_path == "env"

    def test_message_without_context(self) -> None:
        """No parentheses when no context is given."""
        assert ConfigurationError("Broken").user_message == "Broken"


class TestMigrationArityError:
    """Tests for MigrationArityError."""

    def test_message_names_field_and_stride(self) -> None:
        """The message says which list was misaligned."""
        error = MigrationArityError("renamed_pairs", 2, 5)
        assert "renamed_pairs" in error.user_message
        assert "2" in error.user_message
        assert isinstance(error, CompilationError)


class TestServerConfigError:
    """Tests for ServerConfigError."""

    def test_message_names_address_and_remedy(self) -> None:
        """The user sees the exact address and how to fix it."""
        error = ServerConfigError("127.0.0.1:8787")
        assert error.address == "127.0.0.1:8787"
        assert error.user_message.startswith("127.0.0.1:8787 is unavailable")
        assert "--port" in error.user_message
        assert "--ip" in error.user_message
