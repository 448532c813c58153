"""CLI error handling for edgeship-cli.

Wraps edgeship-core exceptions, YAML errors and pydantic validation errors
into user-friendly messages with appropriate exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError
from rich.markup import escape

from edgeship_cli.output import error
from edgeship_core.errors import EdgeshipError, ServerConfigError

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error (validation, bad flag values)
EXIT_SYSTEM_ERROR = 2  # System error (missing file, address in use)


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(escape(self.format_message()))


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format a pydantic validation error into a user-friendly message.

    Args:
        err: Pydantic ValidationError instance.

    Returns:
        Formatted error message with field paths and issues.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - dev.port: Input should be less than or equal to 65535"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        msg = e["msg"]
        lines.append(f"  - {loc}: {msg}" if loc else f"  - {msg}")

    return "\n".join(lines)


def handle_yaml_error(err: Exception, file_path: str) -> NoReturn:
    """Raise a CLIError for a YAML parsing error, with line information.

    Args:
        err: YAML parsing exception.
        file_path: Path to the file being parsed.

    Raises:
        CLIError: Always.
    """
    error_msg = str(err)
    mark = getattr(err, "problem_mark", None)
    if mark is not None:
        error_msg = (
            f"YAML syntax error at line {mark.line + 1}, column {mark.column + 1}: "
            f"{getattr(err, 'problem', err)}"
        )

    raise CLIError(f"Invalid YAML in {file_path}: {error_msg}")


def handle_validation_error(err: PydanticValidationError, file_path: str) -> NoReturn:
    """Raise a CLIError for an invalid settings file.

    Args:
        err: Pydantic ValidationError instance.
        file_path: Path to the file being validated.

    Raises:
        CLIError: Always.
    """
    formatted = format_pydantic_error(err)
    raise CLIError(f"Invalid configuration in {file_path}:\n{formatted}")


def handle_file_not_found(file_path: str) -> NoReturn:
    """Raise a CLIError for a missing settings file.

    Args:
        file_path: Path to the missing file.

    Raises:
        CLIError: Always, with the system error exit code.
    """
    raise CLIError(
        f"File not found: {file_path}\n\n"
        "Create an edgeship.yaml, or use --config to specify a path.",
        exit_code=EXIT_SYSTEM_ERROR,
    )


def handle_edgeship_error(err: EdgeshipError) -> NoReturn:
    """Raise a CLIError carrying an edgeship-core error's user message.

    Bind failures exit with the system error code; everything else is a
    user error.

    Args:
        err: edgeship-core exception.

    Raises:
        CLIError: Always.
    """
    exit_code = EXIT_USER_ERROR
    if isinstance(err, ServerConfigError):
        exit_code = EXIT_SYSTEM_ERROR
    raise CLIError(err.user_message, exit_code=exit_code) from err
