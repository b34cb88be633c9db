"""Tests for CSV normalizer functions."""

from helpdesk_dispatch.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_bool,
    parse_conditions,
)

# ─── normalize_column_name ───────────────────────────────────────────


def test_strip_trailing_spaces():
    assert normalize_column_name("  Name  ") == "name"


def test_remove_bom():
    assert normalize_column_name("\ufeffPriority") == "priority"


def test_replace_spaces_with_underscore():
    assert normalize_column_name("Assign To Type") == "assign_to_type"


def test_non_breaking_space_and_hyphen():
    assert normalize_column_name("Default\u00a0Group-Id") == "default_group_id"


def test_bom_plus_trailing_space():
    """Combined BOM + trailing spaces (common in spreadsheet exports)."""
    assert normalize_column_name("\ufeff  Conditions  ") == "conditions"


# ─── clean_string ────────────────────────────────────────────────────


def test_clean_string_none():
    assert clean_string(None) is None


def test_clean_string_blank_is_none():
    assert clean_string("   ") is None


def test_clean_string_strips():
    assert clean_string("  Network  ") == "Network"


# ─── parse_bool ──────────────────────────────────────────────────────


def test_parse_bool_truthy():
    for raw in ("1", "TRUE", "yes", " Active "):
        assert parse_bool(raw) is True


def test_parse_bool_falsy():
    for raw in ("0", "false", "No", "inactive"):
        assert parse_bool(raw, default=True) is False


def test_parse_bool_empty_uses_default():
    assert parse_bool(None, default=True) is True
    assert parse_bool("", default=False) is False


def test_parse_bool_unknown_uses_default():
    assert parse_bool("maybe", default=True) is True


# ─── parse_conditions ────────────────────────────────────────────────


def test_parse_conditions_list():
    raw = '[{"field": "Priority", "operator": "EQUALS", "value": "urgent"}]'
    assert parse_conditions(raw) == [
        {"field": "priority", "operator": "equals", "value": "urgent"}
    ]


def test_parse_conditions_single_object():
    raw = '{"field": "category", "operator": "in", "value": ["network", "vpn"]}'
    assert parse_conditions(raw) == [
        {"field": "category", "operator": "in", "value": ["network", "vpn"]}
    ]


def test_parse_conditions_invalid_json():
    assert parse_conditions("priority=urgent") == []


def test_parse_conditions_skips_malformed_items():
    raw = '[{"field": "priority"}, "junk", {"field": "source", "operator": "equals", "value": "email"}]'
    assert parse_conditions(raw) == [
        {"field": "source", "operator": "equals", "value": "email"}
    ]


def test_parse_conditions_non_list():
    assert parse_conditions("42") == []
