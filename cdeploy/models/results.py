"""
Result Models

Dataclass models for command outputs and derived image references.
"""

from dataclasses import dataclass


@dataclass
class ExecutionResult:
    """Result of an external command execution."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    command: str = ""

    @property
    def is_failure(self) -> bool:
        """Check if execution failed."""
        return self.returncode != 0

    def __repr__(self) -> str:
        return f"ExecutionResult(returncode={self.returncode}, command='{self.command[:50]}...')"


@dataclass(frozen=True)
class DeployTags:
    """Revision-specific and latest references of one image."""

    specific: str
    latest: str

    def __iter__(self):
        return iter((self.specific, self.latest))
