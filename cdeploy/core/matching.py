"""
Name matching policies for resource lookup.

Clusters and services are found by substring match on their names. The
policy decides which candidate wins when several match.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

from cdeploy.exceptions import AmbiguousMatchError


def find_matches(
    needle: str, candidates: Sequence[str], key: Callable[[str], str] = lambda c: c
) -> List[str]:
    """Return every candidate whose key contains `needle`, in input order."""
    return [candidate for candidate in candidates if needle in key(candidate)]


class MatchPolicy(ABC):
    """Selects one candidate from the match set."""

    @abstractmethod
    def select(self, needle: str, matches: List[str]) -> Optional[str]:
        """Return the chosen match, or None when there is none."""
        pass


class FirstMatchPolicy(MatchPolicy):
    """First substring match wins."""

    def select(self, needle: str, matches: List[str]) -> Optional[str]:
        return matches[0] if matches else None


class StrictMatchPolicy(MatchPolicy):
    """Exactly one candidate may match."""

    def select(self, needle: str, matches: List[str]) -> Optional[str]:
        if len(matches) > 1:
            raise AmbiguousMatchError(needle, matches)
        return matches[0] if matches else None
