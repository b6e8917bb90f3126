"""
RelationshipResolver tests
"""
from dataclasses import FrozenInstanceError

import pytest

from services.relationship_service import EntitySummary, RelationshipResolver


async def test_feature_summary(services):
    summary = await services.resolver.get_entity_summary("FEATURE", "2")

    assert summary == EntitySummary(id="2", name="Billing Integration", type="FEATURE")
    assert summary.to_dict() == {"id": "2", "name": "Billing Integration", "type": "FEATURE"}


async def test_goal_summary_uses_title(services):
    summary = await services.resolver.get_entity_summary("goal", 1)

    assert summary.name == "Reach $1M ARR"
    assert summary.type == "GOAL"


async def test_idea_summary_after_add(services):
    await services.ideas.add({"id": "i1", "title": "AI bookkeeping"})

    summary = await services.resolver.get_entity_summary("IDEA", "i1")
    assert summary.name == "AI bookkeeping"


async def test_seeded_collections_resolve_without_prior_reads(services, store):
    # Nothing has touched the store yet; the lookup seeds through the service
    assert await store.keys() == []

    summary = await services.resolver.get_entity_summary("FEATURE", "5")

    assert summary.name == "API Rate Limiting"


async def test_missing_lookups_return_none(services):
    assert await services.resolver.get_entity_summary("FEATURE", "404") is None
    assert await services.resolver.get_entity_summary("CAMPAIGN", "1") is None
    assert await services.resolver.get_entity_summary("FEATURE", None) is None
    assert await services.resolver.get_entity_summary("FEATURE", "") is None


async def test_available_entities(services):
    goals = await services.resolver.get_available_entities("GOAL")

    assert [g.name for g in goals] == ["Reach $1M ARR", "Launch Mobile App"]
    assert await services.resolver.get_available_entities("UNKNOWN") == []


async def test_register_new_type(services):
    resolver = RelationshipResolver()
    resolver.register("ticket", services.tickets, "subject")

    summary = await resolver.get_entity_summary("TICKET", 103)

    assert resolver.types == ["TICKET"]
    assert summary.name == "Billing question"


def test_summary_is_read_only():
    summary = EntitySummary(id="1", name="x", type="GOAL")

    with pytest.raises(FrozenInstanceError):
        summary.name = "y"
