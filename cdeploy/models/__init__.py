"""
cdeploy Domain Models

Dataclass-based models for type-safe data handling.
"""

from .results import (
    ExecutionResult,
    DeployTags,
)

__all__ = [
    "ExecutionResult",
    "DeployTags",
]
