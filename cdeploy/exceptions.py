"""
cdeploy Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
"""

from typing import Optional


class CDeployError(Exception):
    """Base exception for all cdeploy errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ValidationError(CDeployError):
    """Raised when command parameters are missing or invalid."""

    pass


class ConfigurationError(CDeployError):
    """Raised when an input file is missing or malformed."""

    pass


class CommandError(CDeployError):
    """Raised when an external command exits with a non-zero code."""

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message, context=stderr.strip() or None)


class ResourceNotFoundError(CDeployError):
    """Raised when a cluster or service cannot be located."""

    pass


class AmbiguousMatchError(CDeployError):
    """Raised by the strict match policy when several candidates match."""

    def __init__(self, needle: str, matches: list[str]):
        self.needle = needle
        self.matches = matches
        message = f"'{needle}' matches {len(matches)} candidates"
        context = f"Matches: {', '.join(matches)}"
        super().__init__(message, context)
