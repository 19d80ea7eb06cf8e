#!/usr/bin/env python3
"""
Unified CLI for the ready-to-do maintenance planner.

Commands:
  import      - Import a maintenance log CSV and detect its column mapping
  mapping     - Show or change the column mapping
  priorities  - Show or change the P1/P2/P3 keywords
  rules       - List category rules and owners
  ready       - Show the ready-to-do list
  plan        - Render the numbered action plan
"""

import argparse
import logging
import sys
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from models import (
    CATEGORY_RULES,
    FIELD_LABELS,
    FIELDS,
    ClassifiedRecord,
    CsvParseError,
    FieldMapping,
    IncompleteMappingError,
    Priority,
    PriorityConfig,
    build_plan_text,
    build_ready_list,
    detect_mapping,
    field_value,
    load_csv_file,
    load_dataset,
    load_mapping,
    load_priority_config,
    new_dataset,
    require_complete,
    save_dataset,
    save_mapping,
    save_priority_config,
)
from models.field_mapping import (
    COMMENTS,
    PART_RECEIVED,
    PART_REQUIRED,
    PARTS_INSTALLED,
    UNIT,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_value(value: Optional[str]) -> str:
    """Format a cell value for display."""
    return value if value else "-"


def format_keywords(keywords: List[str]) -> str:
    """Format a keyword list for display."""
    return ", ".join(keywords) if keywords else "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if not text:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def print_mapping(mapping: FieldMapping) -> None:
    rows = [[FIELD_LABELS[f], format_value(mapping.header_for(f))] for f in FIELDS]
    print(tabulate(rows, headers=["Field", "Column"], tablefmt="simple"))


# =============================================================================
# Import command
# =============================================================================


def cmd_import(args):
    """Import a maintenance log CSV."""
    if not args.csv_file.exists():
        print(f"Error: File not found: {args.csv_file}")
        return 1

    try:
        headers, rows = load_csv_file(args.csv_file, args.delimiter)
    except CsvParseError as e:
        print(f"Error: CSV import failed: {e}")
        return 1

    mapping = detect_mapping(headers, load_mapping(args.store_file))
    dataset = new_dataset(headers, rows, mapping)

    print(f"Imported: {args.csv_file.name}")
    print(f"Columns: {len(headers)}")
    print(f"Rows: {len(rows)}")
    print()
    print_mapping(mapping)
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_dataset(args.store_file, dataset)
    if mapping.is_complete:
        save_mapping(args.store_file, mapping)
        print("Dataset and mapping saved.")
    else:
        labels = ", ".join(FIELD_LABELS[f] for f in mapping.missing_fields())
        print(f"Dataset saved. Complete the mapping before planning: {labels}")

    return 0


# =============================================================================
# Mapping command
# =============================================================================


def cmd_mapping(args):
    """Show or change the column mapping."""
    dataset = load_dataset(args.store_file)
    if dataset is None:
        print("Error: No dataset imported")
        return 1

    updates = {
        UNIT: args.unit,
        PART_REQUIRED: args.part_required,
        PART_RECEIVED: args.part_received,
        PARTS_INSTALLED: args.parts_installed,
        COMMENTS: args.comments,
    }
    if all(v is None for v in updates.values()):
        print_mapping(dataset.mapping)
        print()
        print(f"Available columns: {', '.join(dataset.headers)}")
        return 0

    mapping = dataset.mapping.with_updates(**updates)
    try:
        require_complete(mapping, dataset.headers)
    except IncompleteMappingError as e:
        print(f"Error: {e}")
        print(f"\nAvailable columns: {', '.join(dataset.headers)}")
        return 1

    dataset.mapping = mapping
    save_dataset(args.store_file, dataset)
    save_mapping(args.store_file, mapping)
    print_mapping(mapping)
    print()
    print("Mapping saved.")
    return 0


# =============================================================================
# Priorities command
# =============================================================================


def cmd_priorities(args):
    """Show or change the priority keywords."""
    config = load_priority_config(args.store_file)

    changed = False
    if args.reset:
        config = PriorityConfig.default()
        changed = True
    for priority, text in (
        (Priority.P1, args.p1),
        (Priority.P2, args.p2),
        (Priority.P3, args.p3),
    ):
        if text is not None:
            config = config.with_tier(priority, text)
            changed = True

    rows = [[p.name, format_keywords(config.for_tier(p))] for p in Priority]
    print(tabulate(rows, headers=["Priority", "Keywords"], tablefmt="simple"))

    if changed:
        save_priority_config(args.store_file, config)
        print()
        print("Priorities saved.")
    return 0


# =============================================================================
# Rules command
# =============================================================================


def cmd_rules(args):
    """List category rules and owners."""
    rows = [
        [i, rule.display_name, format_keywords(rule.keywords)]
        for i, rule in enumerate(CATEGORY_RULES, start=1)
    ]
    headers = ["#", "Category (Owner)", "Keywords"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Ready command
# =============================================================================


def make_ready_table(items: List[ClassifiedRecord], mapping: FieldMapping) -> List[List[str]]:
    """Convert classified records to table rows."""
    rows = []
    for item in items:
        rows.append(
            [
                item.priority.name,
                format_value(field_value(item.record, mapping, UNIT)),
                truncate(field_value(item.record, mapping, PART_REQUIRED)),
                item.category,
                item.owner,
                truncate(field_value(item.record, mapping, COMMENTS)),
                format_keywords(item.reasons),
            ]
        )
    return rows


def _load_planning_inputs(args):
    """Load the stored dataset and check its mapping before planning."""
    dataset = load_dataset(args.store_file)
    if dataset is None:
        print("Error: No dataset imported", file=sys.stderr)
        return None
    try:
        require_complete(dataset.mapping, dataset.headers)
    except IncompleteMappingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None
    return dataset


def cmd_ready(args):
    """Show the ready-to-do list."""
    dataset = _load_planning_inputs(args)
    if dataset is None:
        return 1
    config = load_priority_config(args.store_file)
    items = dataset.build_ready_list(config)

    print(f"Imported: {dataset.imported_at_display}")
    print(f"Rows: {len(dataset.rows)}")
    print(f"Ready: {dataset.ready_count}")
    counts = dataset.priority_counts(config)
    print("By priority: " + ", ".join(f"{p.name} {counts[p]}" for p in Priority))
    print()

    if not items:
        print("No ready tasks found.")
        return 0

    headers = ["Priority", "Unit", "Part", "Category", "Owner", "Comments", "Reasons"]
    print(tabulate(make_ready_table(items, dataset.mapping), headers=headers, tablefmt="simple"))
    return 0


# =============================================================================
# Plan command
# =============================================================================


def cmd_plan(args):
    """Render the numbered action plan."""
    config = load_priority_config(args.store_file)

    if args.input:
        if not args.input.exists():
            print(f"Error: File not found: {args.input}", file=sys.stderr)
            return 1
        try:
            headers, rows = load_csv_file(args.input, args.delimiter)
        except CsvParseError as e:
            print(f"Error: CSV import failed: {e}", file=sys.stderr)
            return 1
        mapping = detect_mapping(headers, load_mapping(args.store_file))
        try:
            require_complete(mapping, headers)
        except IncompleteMappingError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        text = build_plan_text(build_ready_list(rows, mapping, CATEGORY_RULES, config), mapping)
    else:
        dataset = _load_planning_inputs(args)
        if dataset is None:
            return 1
        text = dataset.build_plan_text(config)

    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"Plan written to {args.output}")
    else:
        print(text)
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Ready-to-do maintenance planner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s planner.yaml import journal.csv
  %(prog)s planner.yaml mapping --comments "NOTES"
  %(prog)s planner.yaml priorities --p1 "freins, visibilité"
  %(prog)s planner.yaml ready
  %(prog)s planner.yaml plan --output plan.txt
  %(prog)s planner.yaml plan --input journal.csv
""",
    )
    parser.add_argument(
        "store_file",
        type=Path,
        help="Path to planner YAML store (created on first save)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log parsing and storage details",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Import subcommand
    import_parser = subparsers.add_parser(
        "import", help="Import a maintenance log CSV and detect its column mapping"
    )
    import_parser.add_argument("csv_file", type=Path, help="CSV file to import")
    import_parser.add_argument(
        "--delimiter",
        type=str,
        help="Field delimiter (default: detected from the header line)",
    )
    import_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be imported without saving",
    )

    # Mapping subcommand
    mapping_parser = subparsers.add_parser("mapping", help="Show or change the column mapping")
    mapping_parser.add_argument("--unit", type=str, help="Column for UNITÉ")
    mapping_parser.add_argument("--part-required", type=str, help="Column for PIÈCE REQUISE")
    mapping_parser.add_argument("--part-received", type=str, help="Column for PIÈCE REÇUE")
    mapping_parser.add_argument(
        "--parts-installed", type=str, help="Column for PIÈCES INSTALLÉES"
    )
    mapping_parser.add_argument("--comments", type=str, help="Column for COMMENTAIRES")

    # Priorities subcommand
    priorities_parser = subparsers.add_parser(
        "priorities", help="Show or change the P1/P2/P3 keywords"
    )
    priorities_parser.add_argument("--p1", type=str, help="Comma-separated P1 keywords")
    priorities_parser.add_argument("--p2", type=str, help="Comma-separated P2 keywords")
    priorities_parser.add_argument("--p3", type=str, help="Comma-separated P3 keywords")
    priorities_parser.add_argument(
        "--reset",
        action="store_true",
        help="Restore the default keywords before applying changes",
    )

    # Rules subcommand
    subparsers.add_parser("rules", help="List category rules and owners")

    # Ready subcommand
    subparsers.add_parser("ready", help="Show the ready-to-do list")

    # Plan subcommand
    plan_parser = subparsers.add_parser("plan", help="Render the numbered action plan")
    plan_parser.add_argument(
        "--input",
        type=Path,
        help="Plan straight from a CSV file instead of the stored dataset",
    )
    plan_parser.add_argument(
        "--delimiter",
        type=str,
        help="Field delimiter for --input (default: detected)",
    )
    plan_parser.add_argument("--output", type=Path, help="Write the plan to this file")

    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Dispatch to command handler
    if args.command == "import":
        return cmd_import(args)
    elif args.command == "mapping":
        return cmd_mapping(args)
    elif args.command == "priorities":
        return cmd_priorities(args)
    elif args.command == "rules":
        return cmd_rules(args)
    elif args.command == "ready":
        return cmd_ready(args)
    elif args.command == "plan":
        return cmd_plan(args)

    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
