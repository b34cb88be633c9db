"""Tests for domain entities."""

import dataclasses

import pytest

from helpdesk_dispatch.domain.entities.category import Category
from helpdesk_dispatch.domain.entities.decision import AssignmentDecision
from helpdesk_dispatch.domain.entities.group import Group, GroupMember
from helpdesk_dispatch.domain.entities.rule import AssignmentRule, Condition
from helpdesk_dispatch.domain.entities.ticket import TicketSnapshot
from helpdesk_dispatch.domain.value_objects.enums import AssignToType, DecisionSource


def test_ticket_snapshot_is_immutable():
    t = TicketSnapshot(priority="urgent")
    with pytest.raises(dataclasses.FrozenInstanceError):
        t.priority = "low"


def test_group_active_members_keep_order():
    g = Group(id="g1", name="Network", members=[
        GroupMember("c"), GroupMember("a", is_active=False), GroupMember("b"),
    ])
    assert g.active_member_ids() == ["c", "b"]


def test_group_routes_to_supervisor():
    assert Group(id="g1", name="N", supervisor_id="s1", assign_tasks_first=True).routes_to_supervisor()
    assert not Group(id="g1", name="N", supervisor_id="s1").routes_to_supervisor()
    assert not Group(id="g1", name="N", assign_tasks_first=True).routes_to_supervisor()


def test_rule_has_conditions():
    rule = AssignmentRule(id="r", name="r", assign_to_type=AssignToType.GROUP,
                          assign_to_id="g", priority=1)
    assert rule.has_conditions() is False
    rule.conditions.append(Condition(field="priority", operator="equals", value="high"))
    assert rule.has_conditions() is True


def test_category_default_group():
    assert Category(id="c", name="Net", default_group_id="g").has_default_group()
    assert not Category(id="c", name="Net").has_default_group()
    assert not Category(id="c", name="Net", default_group_id="  ").has_default_group()


def test_decision_defaults_to_unassigned():
    d = AssignmentDecision()
    assert d.assigned is False
    assert d.is_routed() is False
    assert d.to_dict()["source"] is None


def test_decision_to_dict():
    d = AssignmentDecision(assigned=True, group_id="G1", source=DecisionSource.RULE,
                           rule_id="r1", rule_name="Urgent")
    assert d.to_dict() == {
        "assigned": True, "group_id": "G1", "agent_id": None, "source": "rule",
        "rule_id": "r1", "rule_name": "Urgent", "reason": None,
    }
