"""Tests for CSV loader functions."""

import csv
import json
import tempfile
from pathlib import Path

from helpdesk_dispatch.adapters.csv_loader.loader import (
    load_categories,
    load_group_members,
    load_groups,
    load_rules,
)


def _write_csv(rows: list[dict], path: Path, encoding: str = "utf-8-sig", delimiter: str = ",") -> None:
    """Helper to write a test CSV file."""
    if not rows:
        return
    with open(path, "w", encoding=encoding, newline="") as f:
        writer = csv.DictWriter(f, fieldnames=rows[0].keys(), delimiter=delimiter)
        writer.writeheader()
        writer.writerows(rows)


def test_load_groups_basic():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "groups.csv"
        _write_csv([
            {"Name": "Network Ops", "Supervisor ID": "u-boss", "Assign Tasks First": "yes", "Is Active": ""},
            {"Name": "Endpoint Support", "Supervisor ID": "", "Assign Tasks First": "", "Is Active": "no"},
        ], csv_path)

        groups = load_groups(csv_path)
        assert len(groups) == 2
        assert groups[0]["name"] == "Network Ops"
        assert groups[0]["supervisor_id"] == "u-boss"
        assert groups[0]["assign_tasks_first"] is True
        assert groups[0]["is_active"] is True
        assert groups[0]["id"] is None
        assert groups[1]["supervisor_id"] is None
        assert groups[1]["is_active"] is False


def test_load_groups_skips_nameless_rows():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "groups.csv"
        _write_csv([{"name": ""}, {"name": "Ops"}], csv_path)
        assert [g["name"] for g in load_groups(csv_path)] == ["Ops"]


def test_load_group_members_keeps_file_order():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "group_members.csv"
        _write_csv([
            {"group": "Network Ops", "user_id": "u-2", "is_active": "1"},
            {"group": "Network Ops", "user_id": "u-1", "is_active": "0"},
            {"group": "", "user_id": "u-3", "is_active": "1"},
        ], csv_path)

        members = load_group_members(csv_path)
        assert [m["user_id"] for m in members] == ["u-2", "u-1"]
        assert members[0]["group_ref"] == "Network Ops"
        assert members[1]["is_active"] is False


def test_load_categories_defaults_to_manual():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "categories.csv"
        _write_csv([
            {"id": "net", "name": "Network", "parent": "", "default_group": "Network Ops", "assignment_strategy": "Round_Robin"},
            {"id": "wifi", "name": "Wi-Fi", "parent": "net", "default_group": "", "assignment_strategy": ""},
        ], csv_path)

        categories = load_categories(csv_path)
        assert categories[0]["parent_id"] is None
        assert categories[0]["default_group_ref"] == "Network Ops"
        assert categories[0]["assignment_strategy"] == "round_robin"
        assert categories[1]["parent_id"] == "net"
        assert categories[1]["default_group_ref"] is None
        assert categories[1]["assignment_strategy"] == "manual"


def test_load_rules_semicolon_delimited():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "rules.csv"
        conditions = json.dumps([{"field": "priority", "operator": "equals", "value": "urgent"}])
        _write_csv([
            {"Name": "Urgent to ops", "Priority": "2.0", "Assign To Type": "Group",
             "Assign To": "Network Ops", "Conditions": conditions, "Is Active": "true"},
            {"Name": "", "Priority": "1", "Assign To Type": "agent",
             "Assign To": "u-1", "Conditions": "", "Is Active": "true"},
        ], csv_path, delimiter=";")

        rules = load_rules(csv_path)
        assert len(rules) == 1
        rule = rules[0]
        assert rule["name"] == "Urgent to ops"
        assert rule["priority"] == 2
        assert rule["assign_to_type"] == "group"
        assert rule["assign_to_ref"] == "Network Ops"
        assert rule["conditions"] == [{"field": "priority", "operator": "equals", "value": "urgent"}]
        assert rule["description"] is None


def test_load_rules_bad_priority_defaults_to_one():
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(tmpdir) / "rules.csv"
        _write_csv([
            {"name": "Catch-all", "priority": "high", "assign_to_type": "round_robin",
             "assign_to": "G1", "conditions": "", "is_active": ""},
        ], csv_path)

        rule = load_rules(csv_path)[0]
        assert rule["priority"] == 1
        assert rule["conditions"] == []
        assert rule["is_active"] is True
