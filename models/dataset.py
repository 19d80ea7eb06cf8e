"""Dataset class - the imported maintenance log and its plan."""

from datetime import datetime
from typing import Dict, List, Optional

from dateutil import parser as date_parser

from .category_rule import CategoryRule, CATEGORY_RULES
from .classified_record import ClassifiedRecord
from .field_mapping import FieldMapping
from .matching import is_ready
from .plan import build_plan_text, build_ready_list
from .priority import Priority, PriorityConfig


class Dataset:
    """Imported log rows together with their confirmed column mapping."""

    def __init__(
        self,
        dataset_id: str,
        imported_at: str,
        headers: List[str],
        rows: List[Dict[str, str]],
        mapping: Optional[FieldMapping] = None,
    ):
        self.id = dataset_id
        self.imported_at = imported_at
        self.headers = headers
        self.rows = rows
        self.mapping = mapping or FieldMapping()

    @property
    def imported_at_datetime(self) -> Optional[datetime]:
        """Import timestamp parsed from its ISO-8601 form."""
        if not self.imported_at:
            return None
        return date_parser.isoparse(self.imported_at)

    @property
    def imported_at_display(self) -> str:
        """Import timestamp for display (e.g., '2024-01-05 14:30')."""
        parsed = self.imported_at_datetime
        return parsed.strftime("%Y-%m-%d %H:%M") if parsed else "-"

    @property
    def ready_count(self) -> int:
        return sum(1 for row in self.rows if is_ready(row, self.mapping))

    def build_ready_list(
        self,
        config: PriorityConfig,
        rules: Optional[List[CategoryRule]] = None,
    ) -> List[ClassifiedRecord]:
        """Ready records of this dataset, classified and ordered by priority."""
        return build_ready_list(
            self.rows,
            self.mapping,
            CATEGORY_RULES if rules is None else rules,
            config,
        )

    def build_plan_text(self, config: PriorityConfig) -> str:
        return build_plan_text(self.build_ready_list(config), self.mapping)

    def priority_counts(self, config: PriorityConfig) -> Dict[Priority, int]:
        """Number of ready records per priority tier."""
        counts = {p: 0 for p in Priority}
        for item in self.build_ready_list(config):
            counts[item.priority] += 1
        return counts
