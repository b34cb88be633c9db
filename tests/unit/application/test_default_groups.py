"""Tests for start-up resolution of the default group mapping."""

import pytest

from helpdesk_dispatch.application.use_cases.default_groups import (
    DefaultGroups,
    resolve_default_groups,
)
from helpdesk_dispatch.domain.entities.group import Group
from helpdesk_dispatch.domain.entities.ticket import TicketSnapshot
from helpdesk_dispatch.domain.policies.issue_bucket import DEFAULT_SOFTWARE_ISSUE_TYPES
from helpdesk_dispatch.domain.value_objects.enums import IssueBucket

NAMES = {
    IssueBucket.SOFTWARE: "Application Support",
    IssueBucket.ENDPOINT: "Endpoint Support",
}


@pytest.mark.asyncio
async def test_resolves_groups_by_name(group_repo):
    group_repo.add(Group(id="g-app", name="Application Support Team"))
    group_repo.add(Group(id="g-end", name="endpoint support"))
    defaults = await resolve_default_groups(group_repo, NAMES, {"Software", " application "})
    assert defaults.groups == {IssueBucket.SOFTWARE: "g-app", IssueBucket.ENDPOINT: "g-end"}
    assert defaults.software_types == frozenset({"software", "application"})


@pytest.mark.asyncio
async def test_inactive_or_missing_groups_left_out(group_repo):
    group_repo.add(Group(id="g-app", name="Application Support", is_active=False))
    defaults = await resolve_default_groups(group_repo, NAMES, {"software"})
    assert defaults.groups == {}


@pytest.mark.asyncio
async def test_lookup_failure_gives_empty_mapping(group_repo):
    group_repo.fail = True
    defaults = await resolve_default_groups(group_repo, NAMES, {"software"})
    assert defaults.groups == {}


def test_group_for_ticket():
    defaults = DefaultGroups(
        groups={IssueBucket.SOFTWARE: "g-app", IssueBucket.ENDPOINT: "g-end"},
        software_types=frozenset({"software"}),
    )
    assert defaults.group_for(TicketSnapshot(issue_type="software")) == "g-app"
    assert defaults.group_for(TicketSnapshot(issue_type="hardware")) == "g-end"
    assert defaults.group_for(TicketSnapshot()) == "g-end"


def test_empty_mapping_routes_nowhere():
    assert DefaultGroups().group_for(TicketSnapshot(issue_type="software")) is None


def test_default_software_types_include_application():
    defaults = DefaultGroups(groups={IssueBucket.SOFTWARE: "g-app", IssueBucket.ENDPOINT: "g-end"})
    assert defaults.group_for(TicketSnapshot(issue_type="application")) == "g-app"
    assert defaults.software_types == frozenset(DEFAULT_SOFTWARE_ISSUE_TYPES)


@pytest.mark.asyncio
async def test_exact_name_wins_over_earlier_substring(group_repo):
    group_repo.add(Group(id="g-l1", name="Endpoint Support L1"))
    group_repo.add(Group(id="g-end", name="Endpoint Support"))
    group_repo.add(Group(id="g-app", name="Application Support Team"))
    defaults = await resolve_default_groups(group_repo, NAMES, {"software"})
    assert defaults.groups[IssueBucket.ENDPOINT] == "g-end"
    assert defaults.groups[IssueBucket.SOFTWARE] == "g-app"


@pytest.mark.asyncio
async def test_substring_match_picks_first_by_name(group_repo):
    group_repo.add(Group(id="g-l2", name="Endpoint Support L2"))
    group_repo.add(Group(id="g-l1", name="Endpoint Support L1"))
    defaults = await resolve_default_groups(group_repo, NAMES, {"software"})
    assert defaults.groups == {IssueBucket.ENDPOINT: "g-l1"}
