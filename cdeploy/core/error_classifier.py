"""
Error classification for external command failures.

Some CLI failures are expected outcomes (an image tag that does not exist yet,
an immutable tag that was already pushed). They are recognized by substrings
of the tool's error text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from cdeploy.constants import (
    IMAGE_NOT_FOUND_MARKER,
    IMMUTABLE_TAG_MARKER,
    OP_DESCRIBE_IMAGES,
    OP_PUSH,
)


class ErrorVerdict(Enum):
    """Outcome of classifying an error."""

    ACCEPTABLE = "acceptable"
    FATAL = "fatal"


@dataclass(frozen=True)
class ClassifierRule:
    """Marks errors of one operation containing `marker` as acceptable."""

    operation: str
    marker: str

    def matches(self, operation: str, error_text: str) -> bool:
        return operation == self.operation and self.marker in error_text


DEFAULT_RULES = (
    ClassifierRule(OP_DESCRIBE_IMAGES, IMAGE_NOT_FOUND_MARKER),
    ClassifierRule(OP_PUSH, IMMUTABLE_TAG_MARKER),
)


class ErrorClassifier:
    """Maps (operation, raw error) to ACCEPTABLE or FATAL."""

    def __init__(self, rules: Optional[Iterable[ClassifierRule]] = None):
        self.rules: List[ClassifierRule] = list(DEFAULT_RULES if rules is None else rules)

    def add_rule(self, operation: str, marker: str) -> None:
        self.rules.append(ClassifierRule(operation, marker))

    def classify(self, operation: str, error: BaseException) -> ErrorVerdict:
        error_text = str(error)
        if any(rule.matches(operation, error_text) for rule in self.rules):
            return ErrorVerdict.ACCEPTABLE
        return ErrorVerdict.FATAL

    def is_acceptable(self, operation: str, error: BaseException) -> bool:
        return self.classify(operation, error) is ErrorVerdict.ACCEPTABLE
