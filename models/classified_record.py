"""ClassifiedRecord dataclass for a ready record after classification."""

from dataclasses import dataclass, field
from typing import Dict, List

from .priority import Priority


@dataclass
class ClassifiedRecord:
    """A ready record with its category, owner, and priority."""

    record: Dict[str, str]
    category: str
    owner: str
    priority: Priority
    reasons: List[str] = field(default_factory=list)
