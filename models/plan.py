"""Ready list ordering and plan text rendering."""

from typing import Dict, List

from .category_rule import CategoryRule
from .classified_record import ClassifiedRecord
from .field_mapping import FieldMapping, field_value, PART_REQUIRED, UNIT
from .matching import classify, is_ready
from .priority import PriorityConfig

NO_READY_TASKS = "Aucune tâche PRÊT À FAIRE trouvée."
PLAN_HEADER = "Plan PRÊT À FAIRE"
NOT_AVAILABLE = "N/A"


def build_ready_list(
    records: List[Dict[str, str]],
    mapping: FieldMapping,
    rules: List[CategoryRule],
    config: PriorityConfig,
) -> List[ClassifiedRecord]:
    """
    Filter ready records, classify them, and order by priority.

    The sort is stable: records sharing a priority keep their input order.
    """
    classified = [
        classify(record, mapping, rules, config)
        for record in records
        if is_ready(record, mapping)
    ]
    return sorted(classified, key=lambda item: item.priority.value)


def format_plan_line(index: int, item: ClassifiedRecord, mapping: FieldMapping) -> str:
    """Format one numbered plan line (index is 1-based)."""
    unit = field_value(item.record, mapping, UNIT) or NOT_AVAILABLE
    part = field_value(item.record, mapping, PART_REQUIRED) or NOT_AVAILABLE
    return (
        f"{index}. [{item.priority.name}] Unité {unit} - {part}"
        f" | {item.category} ({item.owner})"
    )


def build_plan_text(items: List[ClassifiedRecord], mapping: FieldMapping) -> str:
    """Render the plan: header then one line per item, no trailing newline."""
    if not items:
        return NO_READY_TASKS
    lines = [PLAN_HEADER]
    lines.extend(
        format_plan_line(index, item, mapping)
        for index, item in enumerate(items, start=1)
    )
    return "\n".join(lines)
