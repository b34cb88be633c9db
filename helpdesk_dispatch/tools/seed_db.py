"""Seed routing configuration from CSV files.

Usage:
    python -m helpdesk_dispatch.tools.seed_db
    python -m helpdesk_dispatch.tools.seed_db --data-dir data
    python -m helpdesk_dispatch.tools.seed_db --drop  # drop existing config first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk_dispatch.adapters.csv_loader.loader import (
    load_categories,
    load_group_members,
    load_groups,
    load_rules,
)
from helpdesk_dispatch.adapters.persistence.database import async_session_factory
from helpdesk_dispatch.adapters.persistence.models import (
    AssignmentRuleModel,
    CategoryModel,
    GroupMemberModel,
    GroupModel,
)
from helpdesk_dispatch.domain.policies.issue_bucket import match_group_name
from helpdesk_dispatch.domain.value_objects.enums import AssignToType

logger = logging.getLogger(__name__)


async def _drop_data(session: AsyncSession) -> None:
    """Delete routing config in FK order. Tickets are left alone."""
    for model in [AssignmentRuleModel, CategoryModel, GroupMemberModel, GroupModel]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped existing routing configuration")


def _resolve_group(ref: str | None, group_ids: set[str], by_name: dict[str, str]) -> str | None:
    """A group reference in the CSVs is either an id or a (partial) name."""
    if not ref:
        return None
    if ref in group_ids:
        return ref
    return match_group_name(ref, by_name)


async def seed(data_dir: Path, drop: bool = False) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records."""
    counts = {"groups": 0, "members": 0, "categories": 0, "rules": 0}

    group_csv = _find_csv(data_dir, ["groups", "teams"])
    member_csv = _find_csv(data_dir, ["group_members", "members"])
    category_csv = _find_csv(data_dir, ["categories", "category"])
    rule_csv = _find_csv(data_dir, ["rules", "auto_assignment"])

    if not group_csv:
        raise FileNotFoundError(f"No groups CSV found in {data_dir}. Expected groups.csv")

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        # 1. Groups
        for gd in load_groups(group_csv):
            existing = await session.execute(select(GroupModel).where(GroupModel.name == gd["name"]))
            if existing.scalar_one_or_none():
                logger.debug("Group '%s' already exists, skipping", gd["name"])
                continue
            kwargs = {k: v for k, v in gd.items() if v is not None}
            session.add(GroupModel(**kwargs))
            counts["groups"] += 1
        await session.commit()

        all_groups = (await session.execute(select(GroupModel))).scalars().all()
        group_ids = {g.id for g in all_groups}
        by_name = {g.name: g.id for g in all_groups}
        logger.info("Group map: %d groups", len(by_name))

        # 2. Memberships (CSV order = enumeration order)
        if member_csv:
            for md in load_group_members(member_csv):
                group_id = _resolve_group(md["group_ref"], group_ids, by_name)
                if group_id is None:
                    logger.warning("Member '%s': group '%s' not found, skipping", md["user_id"], md["group_ref"])
                    continue
                existing = await session.execute(
                    select(GroupMemberModel).where(
                        GroupMemberModel.group_id == group_id,
                        GroupMemberModel.user_id == md["user_id"],
                    )
                )
                if existing.scalar_one_or_none():
                    continue
                session.add(GroupMemberModel(group_id=group_id, user_id=md["user_id"], is_active=md["is_active"]))
                counts["members"] += 1
            await session.commit()

        # 3. Categories
        if category_csv:
            for cd in load_categories(category_csv):
                if await session.get(CategoryModel, cd["id"]):
                    logger.debug("Category '%s' already exists, skipping", cd["id"])
                    continue
                default_group_id = _resolve_group(cd["default_group_ref"], group_ids, by_name)
                if cd["default_group_ref"] and default_group_id is None:
                    logger.warning(
                        "Category '%s': default group '%s' not found, leaving unset",
                        cd["name"], cd["default_group_ref"],
                    )
                session.add(CategoryModel(
                    id=cd["id"],
                    name=cd["name"],
                    parent_id=cd["parent_id"],
                    default_group_id=default_group_id,
                    assignment_strategy=cd["assignment_strategy"],
                ))
                counts["categories"] += 1
            await session.commit()

        # 4. Rules
        if rule_csv:
            for rd in load_rules(rule_csv):
                existing = await session.execute(
                    select(AssignmentRuleModel).where(AssignmentRuleModel.name == rd["name"])
                )
                if existing.scalar_one_or_none():
                    logger.debug("Rule '%s' already exists, skipping", rd["name"])
                    continue
                try:
                    assign_to_type = AssignToType(rd["assign_to_type"])
                except ValueError:
                    logger.warning("Rule '%s': unknown assign_to_type '%s', skipping", rd["name"], rd["assign_to_type"])
                    continue
                target = rd["assign_to_ref"]
                if assign_to_type != AssignToType.AGENT:
                    target = _resolve_group(target, group_ids, by_name)
                    if target is None:
                        logger.warning("Rule '%s': group '%s' not found", rd["name"], rd["assign_to_ref"])
                if not rd["conditions"]:
                    logger.warning("Rule '%s' has no conditions and will never match", rd["name"])
                session.add(AssignmentRuleModel(
                    name=rd["name"],
                    description=rd["description"],
                    conditions=rd["conditions"],
                    assign_to_type=assign_to_type.value,
                    assign_to_id=target,
                    priority=rd["priority"],
                    is_active=rd["is_active"],
                ))
                counts["rules"] += 1
            await session.commit()

    logger.info(
        "Seed complete: %d groups, %d members, %d categories, %d rules",
        counts["groups"], counts["members"], counts["categories"], counts["rules"],
    )
    return counts


def _find_csv(data_dir: Path, name_hints: list[str]) -> Path | None:
    """Find a CSV file matching any of the name hints (first hint wins)."""
    files = sorted(data_dir.glob("*.csv"))
    for hint in name_hints:
        for f in files:
            if f.stem.lower() == hint:
                return f
    for hint in name_hints:
        for f in files:
            if hint in f.stem.lower():
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


async def _verify_data() -> None:
    """Print sanity checks after seeding."""
    async with async_session_factory() as session:
        groups = (await session.execute(select(GroupModel))).scalars().all()
        members = (await session.execute(select(GroupMemberModel))).scalars().all()
        categories = (await session.execute(select(CategoryModel))).scalars().all()
        rules = (await session.execute(select(AssignmentRuleModel))).scalars().all()

        print(f"\n{'='*50}")
        print("SEED VERIFICATION")
        print(f"{'='*50}")
        print(f"Groups:     {len(groups)}")
        print(f"Members:    {len(members)} ({sum(1 for m in members if m.is_active)} active)")
        print(f"Categories: {len(categories)}")
        print(f"Rules:      {len(rules)} ({sum(1 for r in rules if r.is_active)} active)")

        with_default = sum(1 for c in categories if c.default_group_id)
        print(f"Categories with default group: {with_default}/{len(categories)}")

        no_conditions = [r.name for r in rules if not r.conditions]
        if no_conditions:
            print(f"Rules that can never match (no conditions): {no_conditions}")

        populated = {m.group_id for m in members if m.is_active}
        empty = [g.name for g in groups if g.id not in populated]
        if empty:
            print(f"Groups without active members: {empty}")
        print(f"{'='*50}\n")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
    parser = argparse.ArgumentParser(description="Seed helpdesk routing configuration from CSV files")
    parser.add_argument(
        "--data-dir", type=str, default="data",
        help="Directory containing CSV files (default: data)",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing routing configuration before seeding",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    if not args.verify_only and not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    if args.verify_only:
        asyncio.run(_verify_data())
    else:
        async def run_all():
            await seed(data_dir, drop=args.drop)
            await _verify_data()
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
