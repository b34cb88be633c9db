"""Tests for domain enums."""

from helpdesk_dispatch.domain.value_objects.enums import (
    AssignmentStrategy,
    AssignToType,
    ConditionField,
    ConditionOperator,
    DecisionSource,
)


def test_condition_fields():
    assert {f.value for f in ConditionField} == {
        "category", "priority", "department", "user_type",
        "subject", "source", "ticket_type",
    }


def test_condition_operators():
    assert {o.value for o in ConditionOperator} == {"equals", "not_equals", "contains", "in"}


def test_assign_to_types():
    assert AssignToType("round_robin") == AssignToType.ROUND_ROBIN
    assert len(AssignToType) == 3


def test_decision_sources():
    assert DecisionSource.RULE.value == "rule"
    assert DecisionSource.CATEGORY_FALLBACK.value == "category_fallback"
    assert DecisionSource.HARDCODED_DEFAULT.value == "hardcoded_default"


def test_strategy_parse():
    assert AssignmentStrategy.parse("round_robin") == AssignmentStrategy.ROUND_ROBIN
    assert AssignmentStrategy.parse(" Manual ") == AssignmentStrategy.MANUAL
    assert AssignmentStrategy.parse(None) == AssignmentStrategy.MANUAL
    assert AssignmentStrategy.parse("") == AssignmentStrategy.MANUAL
    assert AssignmentStrategy.parse("skills_based") == AssignmentStrategy.OTHER
