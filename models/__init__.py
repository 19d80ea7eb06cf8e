"""
Maintenance log planning models.

This package turns an exported maintenance log into a ready-to-do plan:
- FieldMapping: Logical field to column header binding
- Priority / PriorityConfig: Urgency tiers and their keywords
- CategoryRule: Fixed category/owner table
- ClassifiedRecord: A ready record with category, owner, priority
- Dataset: Imported rows and their mapping
- csv_parser / store: CSV input and YAML persistence
"""

from .field_mapping import (
    FieldMapping,
    IncompleteMappingError,
    FIELDS,
    FIELD_LABELS,
    detect_mapping,
    field_value,
    require_complete,
    resolve_header,
)
from .priority import Priority, PriorityConfig
from .category_rule import CategoryRule, CATEGORY_RULES, OTHER_CATEGORY, UNASSIGNED_OWNER
from .classified_record import ClassifiedRecord
from .matching import (
    FALSE_TOKENS,
    classify,
    combined_text,
    deduce_priority,
    includes_keyword,
    is_ready,
    match_category,
    normalize,
)
from .plan import NO_READY_TASKS, PLAN_HEADER, build_plan_text, build_ready_list
from .dataset import Dataset
from .csv_parser import CsvParseError, load_csv_file, parse_csv_text
from .store import (
    load_dataset,
    load_mapping,
    load_priority_config,
    new_dataset,
    save_dataset,
    save_mapping,
    save_priority_config,
)

__all__ = [
    "FieldMapping",
    "IncompleteMappingError",
    "FIELDS",
    "FIELD_LABELS",
    "detect_mapping",
    "field_value",
    "require_complete",
    "resolve_header",
    "Priority",
    "PriorityConfig",
    "CategoryRule",
    "CATEGORY_RULES",
    "OTHER_CATEGORY",
    "UNASSIGNED_OWNER",
    "ClassifiedRecord",
    "FALSE_TOKENS",
    "classify",
    "combined_text",
    "deduce_priority",
    "includes_keyword",
    "is_ready",
    "match_category",
    "normalize",
    "NO_READY_TASKS",
    "PLAN_HEADER",
    "build_plan_text",
    "build_ready_list",
    "Dataset",
    "CsvParseError",
    "load_csv_file",
    "parse_csv_text",
    "load_dataset",
    "load_mapping",
    "load_priority_config",
    "new_dataset",
    "save_dataset",
    "save_mapping",
    "save_priority_config",
]
