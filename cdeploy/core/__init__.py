"""
cdeploy Core

Environment loading, error classification and name matching.
"""

from .env_loader import EnvLoader
from .error_classifier import ClassifierRule, ErrorClassifier, ErrorVerdict
from .matching import FirstMatchPolicy, MatchPolicy, StrictMatchPolicy, find_matches

__all__ = [
    "EnvLoader",
    "ClassifierRule",
    "ErrorClassifier",
    "ErrorVerdict",
    "FirstMatchPolicy",
    "MatchPolicy",
    "StrictMatchPolicy",
    "find_matches",
]
