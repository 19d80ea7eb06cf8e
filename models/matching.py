"""Helper functions for readiness, category, and priority matching."""

from typing import Dict, List, Tuple

from .category_rule import CategoryRule, OTHER_CATEGORY, UNASSIGNED_OWNER
from .classified_record import ClassifiedRecord
from .field_mapping import (
    FieldMapping,
    field_value,
    COMMENTS,
    PART_RECEIVED,
    PART_REQUIRED,
    PARTS_INSTALLED,
)
from .priority import Priority, PriorityConfig

# Exact values of the installed column meaning "not installed yet"
FALSE_TOKENS = {"faux", "false", "non", "no", "0"}


def normalize(value: str) -> str:
    """Lowercase and strip surrounding whitespace."""
    return value.lower().strip()


def includes_keyword(text: str, keyword: str) -> bool:
    """Case-insensitive substring test (not whole-word)."""
    return normalize(keyword) in normalize(text)


def is_ready(record: Dict[str, str], mapping: FieldMapping) -> bool:
    """
    Check if a record is ready to perform.

    Ready = part received (non-blank) AND installed value is a false token.
    Anything else in the installed column, blank included, is not ready.
    """
    received = field_value(record, mapping, PART_RECEIVED)
    installed = field_value(record, mapping, PARTS_INSTALLED)
    return bool(received.strip()) and normalize(installed) in FALSE_TOKENS


def combined_text(record: Dict[str, str], mapping: FieldMapping) -> str:
    """Required part and comments joined into one search string."""
    part = field_value(record, mapping, PART_REQUIRED)
    comments = field_value(record, mapping, COMMENTS)
    return f"{part} {comments}".strip()


def match_category(text: str, rules: List[CategoryRule]) -> Tuple[str, str, List[str]]:
    """
    Find the first rule with a keyword in `text`.

    Returns (category, owner, reasons) where reasons are all of the winning
    rule's matching keywords, in the rule's order.
    """
    for rule in rules:
        reasons = [k for k in rule.keywords if includes_keyword(text, k)]
        if reasons:
            return rule.category, rule.owner, reasons
    return OTHER_CATEGORY, UNASSIGNED_OWNER, []


def deduce_priority(text: str, config: PriorityConfig) -> Priority:
    """P1 if any P1 keyword matches, else P2 if any P2 keyword matches, else P3."""
    for priority in (Priority.P1, Priority.P2):
        if any(includes_keyword(text, k) for k in config.for_tier(priority)):
            return priority
    return Priority.P3


def classify(
    record: Dict[str, str],
    mapping: FieldMapping,
    rules: List[CategoryRule],
    config: PriorityConfig,
) -> ClassifiedRecord:
    """Classify a ready record. The caller's record is copied, never modified."""
    text = combined_text(record, mapping)
    category, owner, reasons = match_category(text, rules)
    return ClassifiedRecord(
        record=dict(record),
        category=category,
        owner=owner,
        priority=deduce_priority(text, config),
        reasons=reasons,
    )
