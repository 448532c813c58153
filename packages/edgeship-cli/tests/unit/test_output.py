"""Unit tests for edgeship_cli.output."""

from __future__ import annotations

import json
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from edgeship_cli import output


@pytest.fixture
def plain_console() -> Iterator[None]:
    """Swap in a colorless console and restore the original afterwards."""
    original = output.console
    output.console = output.create_console(no_color=True)
    try:
        yield
    finally:
        output.console = original


class TestCreateConsole:
    """Tests for create_console."""

    def test_no_color(self) -> None:
        assert output.create_console(no_color=True).no_color is True

    def test_no_color_env_var(self) -> None:
        with patch.object(output, "_force_no_color", True):
            assert output.create_console().no_color is True


@pytest.mark.usefixtures("plain_console")
class TestMessages:
    """Tests for the message helpers."""

    def test_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.success("Published chat")
        captured = capsys.readouterr()
        assert "✓" in captured.out
        assert "Published chat" in captured.out

    def test_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.error("127.0.0.1:8787 is unavailable")
        captured = capsys.readouterr()
        assert "✗" in captured.out
        assert "127.0.0.1:8787 is unavailable" in captured.out

    def test_warning(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.warning("--release is deprecated")
        assert "⚠" in capsys.readouterr().out

    def test_print_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.print_json({"script": "chat", "filters": []})
        assert json.loads(capsys.readouterr().out) == {"script": "chat", "filters": []}

    def test_print_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.print_summary("Dev server", [("Listening on", "127.0.0.1:8787")])
        captured = capsys.readouterr().out
        assert "Dev server" in captured
        assert "Listening on" in captured
        assert "127.0.0.1:8787" in captured


class TestSetNoColor:
    """Tests for set_no_color."""

    def test_replaces_console(self) -> None:
        original = output.console
        try:
            output.set_no_color(True)
            assert output.console is not original
            assert output.console.no_color is True
        finally:
            output.console = original
