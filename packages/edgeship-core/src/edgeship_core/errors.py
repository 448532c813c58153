"""Custom exception hierarchy for edgeship-core.

This module defines the exception classes used throughout edgeship:
- EdgeshipError: Base exception for all edgeship errors
- ValidationError: Raised when a user-supplied value is rejected
- ConfigurationError: Raised when edgeship.yaml cannot be loaded
- CompilationError: Raised when a deployment descriptor cannot be built
- MigrationArityError: Raised when flattened class-change lists are misaligned
- ServerConfigError: Raised when the local dev server cannot bind

User-facing messages are safe to display. Technical details are logged at
debug level via structlog and only reach stderr with --verbose.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class EdgeshipError(Exception):
    """Base exception for edgeship.

    All edgeship exceptions inherit from this class. User-facing messages
    are safe to display; technical details are logged internally.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but NEVER exposed to the user.

    Example:
        >>> raise EdgeshipError(
        ...     "Publish aborted",
        ...     internal_details="metadata projection failed for script 'api'"
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize EdgeshipError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.debug(
                "edgeship_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ValidationError(EdgeshipError):
    """Raised when a user-supplied value fails validation.

    Use this exception when:
    - A protocol is neither http nor https
    - A dev upstream host cannot be parsed
    - A tail filter value (IP address, header, sampling rate) is malformed

    Example:
        >>> raise ValidationError("Invalid protocol, must be http or https")
    """

    pass


class ConfigurationError(EdgeshipError):
    """Raised when edgeship.yaml parsing or validation fails.

    Provides file path and field context for actionable error messages.

    Attributes:
        file_path: Path to the configuration file (if known).
        field_path: Dot-separated path to the invalid field (e.g., "dev.port").

    Example:
        >>> raise ConfigurationError(
        ...     "Unknown environment 'staging'",
        ...     file_path="edgeship.yaml",
        ...     field_path="env",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ConfigurationError with context.

        Args:
            user_message: Safe message to display to the user.
            file_path: Path to the configuration file (optional).
            field_path: Dot-separated path to the field (optional).
            internal_details: Technical details for internal logging only.
        """
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path


class CompilationError(EdgeshipError):
    """Raised when a deployment descriptor cannot be built."""

    pass


class MigrationArityError(CompilationError):
    """Raised when a flattened rename/transfer list does not split evenly.

    The command line enforces 2 values per ``--rename-class`` and 3 per
    ``--transfer-class``, so this only fires on an internal-consistency
    fault. A partial group is never dropped: doing so would produce a
    migration nobody asked for.

    Attributes:
        field_name: Name of the flattened list (e.g., "renamed_pairs").
        stride: Expected group size.
        length: Actual number of values supplied.
    """

    def __init__(self, field_name: str, stride: int, length: int) -> None:
        """Initialize MigrationArityError.

        Args:
            field_name: Name of the flattened list.
            stride: Expected group size.
            length: Actual number of values supplied.
        """
        super().__init__(
            f"{field_name} must contain groups of exactly {stride} values, got {length} values",
            internal_details=f"{field_name}: len={length} % {stride} = {length % stride}",
        )
        self.field_name = field_name
        self.stride = stride
        self.length = length


class ServerConfigError(EdgeshipError):
    """Raised when the local development server address cannot be bound.

    Attributes:
        address: The exact ``ip:port`` that was attempted.

    Example:
        >>> raise ServerConfigError("127.0.0.1:8787")
        # User sees: "127.0.0.1:8787 is unavailable, try binding to another
        #            address with the --port and --ip flags, or stop other
        #            `edgeship dev` processes."
    """

    def __init__(self, address: str, *, internal_details: str | None = None) -> None:
        """Initialize ServerConfigError with the attempted address.

        Args:
            address: The ``ip:port`` the bind was attempted on.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(
            f"{address} is unavailable, try binding to another address with the "
            "--port and --ip flags, or stop other `edgeship dev` processes.",
            internal_details=internal_details,
        )
        self.address = address
