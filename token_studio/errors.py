"""Structured error types with recovery suggestions.

Validation failures abort an operation before any state is mutated and
surface a user-facing message. Not-found conditions are not errors: store
and registry lookups return ``None`` or ``False`` instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of errors for organization and handling."""

    VALIDATION = "validation"  # Empty fields, malformed hex, duplicates
    NOT_FOUND = "not_found"  # Unknown token, theme or collection
    HOST = "host"  # Malformed or failed host round-trips
    CONFIGURATION = "configuration"  # Invalid config file
    RUNTIME = "runtime"  # Unexpected errors


@dataclass
class TokenStudioError(Exception):
    """Base class for structured errors with recovery suggestions.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error terminates the CLI.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format(use_color=False)


class ValidationError(TokenStudioError):
    """Invalid user input; the operation was aborted."""

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=message,
            suggestion=suggestion,
            details=details,
            exit_code=2,
        )


class InvalidHexError(ValidationError):
    """A color string is not a 3- or 6-digit hex value."""

    def __init__(self, value: str):
        super().__init__(
            message=f"Invalid hex color: {value!r}",
            suggestion="Use #RGB or #RRGGBB, e.g. #3B82F6",
            details={"value": value},
        )


class TypeMismatchError(ValidationError):
    """A token value does not have the shape its type requires."""

    def __init__(self, token_type: str, value: Any):
        super().__init__(
            message=f"Value {value!r} does not match token type {token_type}",
            details={"type": token_type},
        )


class DuplicateThemeError(ValidationError):
    """A theme with the same name already exists."""

    def __init__(self, name: str):
        super().__init__(
            message=f"Theme already exists: {name}",
            suggestion="Choose a different theme name",
            details={"name": name},
        )


class SystemThemeError(ValidationError):
    """System themes cannot be deleted or have their id changed."""

    def __init__(self, theme_id: str, action: str):
        super().__init__(
            message=f"Cannot {action} system theme '{theme_id}'",
            details={"theme": theme_id},
        )


class MissingPrerequisiteError(ValidationError):
    """A generation step needs tokens that do not exist yet."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(message=message, suggestion=suggestion)


class HostPayloadError(TokenStudioError):
    """A message received from the host does not match its contract."""

    def __init__(self, message_type: str, reason: str):
        super().__init__(
            category=ErrorCategory.HOST,
            message=f"Malformed '{message_type}' message from host: {reason}",
            details={"type": message_type},
        )


class ConfigurationError(TokenStudioError):
    """Error in the configuration file."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion
            or "Check your configuration file syntax and field values",
            details={"config_file": config_file} if config_file else None,
            exit_code=1,
        )


def handle_exception(
    error: Exception,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Convert any exception to formatted output and exit code.

    Args:
        error: The exception to handle.
        use_color: Whether to use color in output.
        verbose: Whether to include the full traceback.

    Returns:
        Tuple of (formatted_message, exit_code).
    """
    import traceback

    if isinstance(error, TokenStudioError):
        message = error.format(use_color=use_color)
        exit_code = error.exit_code
    else:
        red = "\033[91m" if use_color else ""
        reset = "\033[0m" if use_color else ""
        message = f"{red}Error:{reset} {error}"
        exit_code = 1

    if verbose:
        message += "\n\nTraceback:\n" + traceback.format_exc()

    return message, exit_code
