"""Domain enums (pure Python, no external dependencies)."""

from enum import Enum


class ConditionField(str, Enum):
    CATEGORY = "category"
    PRIORITY = "priority"
    DEPARTMENT = "department"
    USER_TYPE = "user_type"
    SUBJECT = "subject"
    SOURCE = "source"
    TICKET_TYPE = "ticket_type"


class ConditionOperator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    IN = "in"


class AssignToType(str, Enum):
    GROUP = "group"
    AGENT = "agent"
    ROUND_ROBIN = "round_robin"


class AssignmentStrategy(str, Enum):
    ROUND_ROBIN = "round_robin"
    MANUAL = "manual"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: str | None) -> "AssignmentStrategy":
        """Unknown or empty strategies behave like manual routing."""
        if not raw:
            return cls.MANUAL
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.OTHER


class DecisionSource(str, Enum):
    RULE = "rule"
    CATEGORY_FALLBACK = "category_fallback"
    HARDCODED_DEFAULT = "hardcoded_default"


class IssueBucket(str, Enum):
    SOFTWARE = "software"
    ENDPOINT = "endpoint"
