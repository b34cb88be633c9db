"""Pytest configuration, in-memory fake repositories and shared fixtures."""

from __future__ import annotations

from datetime import datetime

import pytest

from helpdesk_dispatch.application.ports.category_repo import CategoryRepository
from helpdesk_dispatch.application.ports.group_repo import GroupRepository
from helpdesk_dispatch.application.ports.rule_repo import RuleRepository
from helpdesk_dispatch.application.ports.workload_repo import WorkloadRepository
from helpdesk_dispatch.domain.entities.category import Category
from helpdesk_dispatch.domain.entities.group import Group
from helpdesk_dispatch.domain.entities.rule import AssignmentRule

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeRuleRepo(RuleRepository):
    def __init__(self, rules: list[AssignmentRule] | None = None):
        self.rules = list(rules or [])
        self.fail_on_load = False
        self.fail_on_increment = False
        self.increments: list[str] = []

    async def get_active_ordered(self):
        if self.fail_on_load:
            raise ConnectionError("rule store unavailable")
        return sorted((r for r in self.rules if r.is_active), key=lambda r: r.priority)

    async def get_all(self):
        return sorted(self.rules, key=lambda r: r.priority)

    async def increment_tickets_routed(self, rule_id):
        if self.fail_on_increment:
            raise ConnectionError("write failed")
        self.increments.append(rule_id)
        for r in self.rules:
            if r.id == rule_id:
                r.tickets_routed += 1


class FakeGroupRepo(GroupRepository):
    def __init__(self, groups: list[Group] | None = None):
        self.groups = {g.id: g for g in (groups or [])}
        self.fail = False

    def add(self, group: Group) -> Group:
        self.groups[group.id] = group
        return group

    async def get_by_id(self, group_id):
        if self.fail:
            raise ConnectionError("group store unavailable")
        return self.groups.get(group_id)

    async def get_active_member_ids(self, group_id):
        if self.fail:
            raise ConnectionError("group store unavailable")
        group = self.groups.get(group_id)
        return group.active_member_ids() if group else []

    async def find_active_id_by_name(self, name):
        """Mirrors the SQL lookup: case-insensitive substring over active
        groups, exact name first, then ordered by name."""
        if self.fail:
            raise ConnectionError("group store unavailable")
        wanted = name.strip().lower()
        if not wanted:
            return None
        hits = [
            g for g in self.groups.values()
            if g.is_active and wanted in g.name.lower()
        ]
        hits.sort(key=lambda g: (g.name.strip().lower() != wanted, g.name))
        return hits[0].id if hits else None


class FakeCategoryRepo(CategoryRepository):
    def __init__(self, categories: list[Category] | None = None):
        self.categories = {c.id: c for c in (categories or [])}
        self.lookups = 0
        self.fail = False

    def add(self, category: Category) -> Category:
        self.categories[category.id] = category
        return category

    async def get_by_id(self, category_id):
        self.lookups += 1
        if self.fail:
            raise ConnectionError("category store unavailable")
        return self.categories.get(category_id)

    async def get_by_name(self, name):
        self.lookups += 1
        if self.fail:
            raise ConnectionError("category store unavailable")
        wanted = name.strip().lower()
        return next(
            (c for c in self.categories.values() if c.name.lower() == wanted), None
        )


class FakeWorkloadRepo(WorkloadRepository):
    """Counts are fixed for the whole test: nothing is reserved on read."""

    def __init__(self, counts: dict[str, int] | None = None):
        self.counts = dict(counts or {})
        self.fail = False
        self.calls: list[tuple[list[str], datetime]] = []

    async def count_assigned_since(self, agent_ids, since):
        self.calls.append((list(agent_ids), since))
        if self.fail:
            raise ConnectionError("ticket store unavailable")
        return {a: c for a, c in self.counts.items() if a in agent_ids and c}


# ─── Fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def rule_repo():
    return FakeRuleRepo()


@pytest.fixture
def group_repo():
    return FakeGroupRepo()


@pytest.fixture
def category_repo():
    return FakeCategoryRepo()


@pytest.fixture
def workload_repo():
    return FakeWorkloadRepo()
