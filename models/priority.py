"""Priority tiers and the editable keyword configuration behind them."""

from enum import Enum
from typing import Dict, List, Optional


class Priority(Enum):
    """Priority tiers. Lower value = more urgent."""

    P1 = 1
    P2 = 2
    P3 = 3


DEFAULT_KEYWORDS = {
    Priority.P1: ["visibilite", "visibilité", "freins"],
    Priority.P2: ["electrique", "électrique"],
    Priority.P3: ["confort"],
}


def split_keywords(text: str) -> List[str]:
    """Split comma-separated keywords, dropping blank entries."""
    return [k.strip() for k in text.split(",") if k.strip()]


class PriorityConfig:
    """Ordered keyword lists for each priority tier."""

    def __init__(
        self,
        p1: Optional[List[str]] = None,
        p2: Optional[List[str]] = None,
        p3: Optional[List[str]] = None,
    ):
        self.keywords: Dict[Priority, List[str]] = {
            Priority.P1: list(p1 or []),
            Priority.P2: list(p2 or []),
            Priority.P3: list(p3 or []),
        }

    @classmethod
    def default(cls) -> "PriorityConfig":
        return cls(
            DEFAULT_KEYWORDS[Priority.P1],
            DEFAULT_KEYWORDS[Priority.P2],
            DEFAULT_KEYWORDS[Priority.P3],
        )

    def for_tier(self, priority: Priority) -> List[str]:
        return self.keywords[priority]

    def with_tier(self, priority: Priority, text: str) -> "PriorityConfig":
        """Copy of this config with one tier replaced from comma-separated text."""
        tiers = {p: list(k) for p, k in self.keywords.items()}
        tiers[priority] = split_keywords(text)
        return PriorityConfig(tiers[Priority.P1], tiers[Priority.P2], tiers[Priority.P3])

    def to_dict(self) -> Dict[str, List[str]]:
        return {p.name: list(k) for p, k in self.keywords.items()}

    @classmethod
    def from_dict(cls, dct: Dict[str, List[str]]) -> "PriorityConfig":
        return cls(dct.get("P1"), dct.get("P2"), dct.get("P3"))

    def __eq__(self, other) -> bool:
        if not isinstance(other, PriorityConfig):
            return NotImplemented
        return self.keywords == other.keywords

    def __repr__(self) -> str:
        return f"PriorityConfig({self.to_dict()!r})"
