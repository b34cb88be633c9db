"""Value normalization for CSV headers, booleans and rule conditions."""

from __future__ import annotations

import json
import logging
import re

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "y", "on", "active"}
_FALSE_VALUES = {"0", "false", "no", "n", "off", "inactive"}


def normalize_column_name(name: str) -> str:
    """Normalize a CSV header: strip BOM/whitespace, lowercase, snake_case.

    "Assign To Type" -> "assign_to_type", "\\ufeffName " -> "name".
    """
    name = name.replace("\ufeff", "").strip().lower()
    name = re.sub(r"[\s\u00a0\-]+", "_", name)
    return re.sub(r"[^\w]", "", name, flags=re.UNICODE)


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_bool(raw: str | None, default: bool = False) -> bool:
    if raw is None or not raw.strip():
        return default
    key = raw.strip().lower()
    if key in _TRUE_VALUES:
        return True
    if key in _FALSE_VALUES:
        return False
    logger.warning("Unrecognized boolean %r, using %s", raw, default)
    return default


def parse_conditions(raw: str | None) -> list[dict]:
    """Parse a rule's conditions cell.

    Accepts a JSON list of ``{"field", "operator", "value"}`` objects.
    Anything else yields an empty list, and a rule without conditions
    never matches.
    """
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Invalid conditions JSON: %s", raw)
        return []
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        logger.warning("Conditions must be a list, got %s", type(data).__name__)
        return []

    conditions = []
    for item in data:
        if not isinstance(item, dict) or not item.get("field") or not item.get("operator"):
            logger.warning("Skipping malformed condition: %r", item)
            continue
        value = item.get("value", "")
        conditions.append({
            "field": str(item["field"]).strip().lower(),
            "operator": str(item["operator"]).strip().lower(),
            "value": [str(v) for v in value] if isinstance(value, list) else str(value),
        })
    return conditions
