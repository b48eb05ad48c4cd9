"""Tests for personalities, the built-in roster, and JSON roster loading."""

import json
import random

import pytest

from worldim import (
    DEFAULT_TEMPLATES,
    Personality,
    RosterLoader,
    TemplateSet,
    build_agents,
    create_default_agents,
    create_default_personalities,
)
from worldim.config import Config


def test_default_roster_has_four_distinct_inhabitants():
    personalities = create_default_personalities()
    assert [p.name for p in personalities] == ["Vera", "Marsh", "Kael", "Lumen"]

    for personality in personalities:
        assert personality.interests
        assert 0.0 <= personality.engagement <= 1.0
        assert personality.templates.overridden()


def test_default_agents_get_unique_ids():
    agents = create_default_agents(rng=random.Random(3))
    assert len({agent.id for agent in agents}) == 4


def test_build_agents_shares_one_random_source():
    rng = random.Random(5)
    agents = build_agents(create_default_personalities(), rng=rng)
    assert all(agent.rng is rng for agent in agents)


def test_template_pool_falls_back_per_category():
    templates = TemplateSet(question=("Only this.",))
    assert templates.pool("question") == ("Only this.",)
    assert templates.pool("perspective") == DEFAULT_TEMPLATES["perspective"]
    assert templates.overridden() == ["question"]

    with pytest.raises(KeyError):
        templates.pool("gossip")


def test_loads_bundled_salon_roster():
    roster = RosterLoader().load("salon")

    assert roster.name == "Salon"
    assert roster.kickstart
    assert [p.name for p in roster.personalities] == ["Orrin", "Sable"]
    orrin = roster.personalities[0]
    assert orrin.engagement == pytest.approx(0.55)
    assert orrin.templates.overridden() == ["question", "interest"]
    assert RosterLoader().rosters_dir == Config.ROSTERS_DIR


def _write(tmp_path, name, data):
    (tmp_path / f"{name}.json").write_text(json.dumps(data))
    return RosterLoader(tmp_path)


def test_missing_roster_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        RosterLoader(tmp_path).load("nowhere")


def test_roster_requires_agents(tmp_path):
    loader = _write(tmp_path, "empty", {"name": "Empty", "agents": []})
    with pytest.raises(ValueError, match="at least one agent"):
        loader.load("empty")

    loader = _write(tmp_path, "nameless", {"agents": [{"name": "A"}]})
    with pytest.raises(ValueError, match="missing required fields"):
        loader.load("nameless")


def test_roster_rejects_unknown_template_category(tmp_path):
    loader = _write(
        tmp_path,
        "odd",
        {"name": "Odd", "agents": [{"name": "A", "templates": {"gossip": ["psst"]}}]},
    )
    with pytest.raises(ValueError, match="gossip"):
        loader.load("odd")


def test_roster_rejects_out_of_range_engagement(tmp_path):
    loader = _write(
        tmp_path,
        "eager",
        {"name": "Eager", "agents": [{"name": "A", "engagement": 1.5}]},
    )
    with pytest.raises(ValueError, match="Invalid personality"):
        loader.load("eager")


def test_parse_fills_defaults():
    roster = RosterLoader().parse({"name": "Tiny", "agents": [{"name": "Solo"}]})

    solo = roster.personalities[0]
    assert isinstance(solo, Personality)
    assert solo.engagement == 0.5
    assert solo.mood == "neutral"
    assert solo.templates == TemplateSet()
    assert roster.kickstart is None
