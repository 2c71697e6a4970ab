"""
Result models for value unification.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class KeyGroup:
    """Distinct raw values sharing one normalized key, in first-seen order."""
    key: str
    originals: list[str] = field(default_factory=list)
    _seen: set[str] = field(default_factory=set, repr=False, compare=False)

    @property
    def first_original(self) -> str:
        return self.originals[0] if self.originals else ""

    def add(self, original: str) -> None:
        if original not in self._seen:
            self._seen.add(original)
            self.originals.append(original)


@dataclass
class ValueCluster:
    """
    One final cluster, expressed in original-form values.

    ``representative`` is None when the cluster was below the minimum size
    and its members were left unchanged.
    """
    representative: Optional[str]
    members: list[str]
    keys: list[str]

    @property
    def size(self) -> int:
        return len(self.keys)


@dataclass
class UnificationResult:
    """Output of one unification call."""
    values: list[str]
    clusters: list[ValueCluster] = field(default_factory=list)

    # Distinct non-empty normalized keys
    distinct_keys: int = 0

    # Inputs that normalized to the empty key
    empty_count: int = 0
