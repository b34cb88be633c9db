"""CSV loader — reads routing configuration exports."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from helpdesk_dispatch.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_bool,
    parse_conditions,
)

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect] | csv.Dialect:
    """Detect the delimiter (comma/semicolon/tab) from the header line."""
    # Spreadsheet exports in some locales use ';'
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    counts = {d: first_line.count(d) for d in (";", ",", "\t")}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect
    return csv.excel


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Args:
        file_path: path to the CSV file.
        encoding: file encoding (utf-8-sig strips BOM automatically).

    Returns:
        List of dicts with normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = []
        for raw_row in reader:
            row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            rows.append(row)

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def load_groups(file_path: Path) -> list[dict]:
    """Load the groups CSV.

    Columns: id (optional), name, supervisor_id, assign_tasks_first, is_active
    """
    groups = []
    for row in _read_csv(file_path):
        name = row.get("name") or row.get("group_name")
        if not name:
            logger.warning("Group row without a name, skipping: %r", row)
            continue
        groups.append({
            "id": row.get("id"),
            "name": name,
            "supervisor_id": row.get("supervisor_id") or row.get("supervisor"),
            "assign_tasks_first": parse_bool(row.get("assign_tasks_first")),
            "is_active": parse_bool(row.get("is_active"), default=True),
        })
    logger.info("Parsed %d groups", len(groups))
    return groups


def load_group_members(file_path: Path) -> list[dict]:
    """Load the group membership CSV.

    Columns: group (id or name), user_id, is_active. Row order is the
    enumeration order used for least-loaded tie-breaks.
    """
    members = []
    for row in _read_csv(file_path):
        group_ref = row.get("group") or row.get("group_id") or row.get("group_name")
        user_id = row.get("user_id") or row.get("agent_id")
        if not group_ref or not user_id:
            logger.warning("Membership row missing group or user, skipping: %r", row)
            continue
        members.append({
            "group_ref": group_ref,
            "user_id": user_id,
            "is_active": parse_bool(row.get("is_active"), default=True),
        })
    logger.info("Parsed %d group memberships", len(members))
    return members


def load_categories(file_path: Path) -> list[dict]:
    """Load the categories CSV.

    Columns: id, name, parent (id), default_group (id or name),
    assignment_strategy
    """
    categories = []
    for row in _read_csv(file_path):
        if not row.get("id") or not row.get("name"):
            logger.warning("Category row missing id or name, skipping: %r", row)
            continue
        categories.append({
            "id": row["id"],
            "name": row["name"],
            "parent_id": row.get("parent_id") or row.get("parent"),
            "default_group_ref": row.get("default_group_id") or row.get("default_group"),
            "assignment_strategy": (row.get("assignment_strategy") or "manual").lower(),
        })
    logger.info("Parsed %d categories", len(categories))
    return categories


def load_rules(file_path: Path) -> list[dict]:
    """Load the auto-assignment rules CSV.

    Columns: name, description, priority, assign_to_type, assign_to
    (group id/name or agent id), conditions (JSON), is_active
    """
    rules = []
    for row in _read_csv(file_path):
        if not row.get("name") or not row.get("assign_to_type"):
            logger.warning("Rule row missing name or assign_to_type, skipping: %r", row)
            continue
        rules.append({
            "name": row["name"],
            "description": row.get("description"),
            "priority": _parse_int(row.get("priority"), default=1),
            "assign_to_type": row["assign_to_type"].lower(),
            "assign_to_ref": row.get("assign_to_id") or row.get("assign_to"),
            "conditions": parse_conditions(row.get("conditions")),
            "is_active": parse_bool(row.get("is_active"), default=True),
        })
    logger.info("Parsed %d rules", len(rules))
    return rules


def _parse_int(value: str | None, default: int = 0) -> int:
    if not value:
        return default
    try:
        # handle "4", "4.0"
        return int(float(value.replace(",", ".").strip()))
    except ValueError:
        return default
