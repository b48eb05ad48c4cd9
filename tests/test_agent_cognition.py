"""Tests for evaluation, model-of-other updates, and lossy memory."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from conftest import make_message
from worldim import Agent, HumanInhabitant, Personality, World
from worldim.agent import EVALUATION_CACHE_LIMIT
from worldim.cognition import infer_style


def test_evaluation_components(scholar):
    assert scholar.evaluate(make_message(to="scholar", content="hi")) == pytest.approx(0.6)
    assert scholar.evaluate(make_message(to="world", content="hi")) == pytest.approx(0.2)
    assert scholar.evaluate(make_message(to="someone-else", content="hi")) == 0.0
    # Interest counts once even when two keywords match
    assert scholar.evaluate(
        make_message(to="world", content="Biology needs EVIDENCE")
    ) == pytest.approx(0.5)
    assert scholar.evaluate(make_message(to="world", content="why?")) == pytest.approx(0.35)


def test_evaluation_clamps_to_one_for_everything_at_once(scholar):
    friend = "friend"
    # Two contacts lift trust above 0.5 (0.5 -> 0.52 -> 0.54)
    scholar.update_model(friend, make_message(sender=friend, content="hello there"))
    scholar.update_model(friend, make_message(sender=friend, content="hello again"))

    message = make_message(sender=friend, to="scholar", content="What about biology?")
    weight = scholar.evaluate(message)

    assert weight == 1.0
    assert scholar.evaluations[message.id] == 1.0


def test_evaluation_stays_in_bounds_for_odd_input(scholar):
    for content in (None, "", "?" * 500, "biology " * 100):
        for to in ("scholar", "world", "nobody"):
            weight = scholar.evaluate(make_message(to=to, content=content))
            assert -1.0 <= weight <= 1.0


def test_model_of_other_is_created_lazily_and_accumulates(scholar):
    assert scholar.get_model_of("kai") is None

    model = scholar.update_model("kai", make_message(sender="kai", sender_name="Kai", content="Short"))
    assert model.name == "Kai"
    assert model.trust == pytest.approx(0.52)
    assert model.message_count == 1
    assert model.style == "terse"
    assert model.last_seen is not None
    assert model.their_model_of_me.interest == 0.5

    scholar.update_model("kai", make_message(sender="kai", to="scholar", content="Are you there?"))
    assert model.style == "inquisitive"
    assert model.message_count == 2
    assert model.their_model_of_me.interest == pytest.approx(0.6)
    assert model.their_model_of_me.trust == 0.5


def test_trust_saturates_and_never_drops(scholar):
    for _ in range(40):
        model = scholar.update_model("kai", make_message(sender="kai", content="x" * 50))
    assert model.trust == 1.0


def test_style_inference_priority():
    assert infer_style("a" * 250 + "?") == "inquisitive"
    assert infer_style("a" * 250) == "verbose"
    assert infer_style("brief") == "terse"
    assert infer_style("a" * 100) is None
    assert infer_style(None) == "terse"


def test_own_messages_do_not_build_a_self_model(scholar):
    scholar.decide_and_respond(make_message(sender="scholar", content="talking to myself"), None)
    assert scholar.get_model_of("scholar") is None


def test_only_salient_messages_are_remembered(scholar):
    kept = scholar.integrate_experience(make_message(content="remember this"), 0.31)
    dropped = scholar.integrate_experience(make_message(content="forget this"), 0.3)

    assert kept is not None and kept.summary == "remember this"
    assert dropped is None
    assert len(scholar.experience_log) == 1


def test_memory_compaction_keeps_formative_and_recent(scholar):
    for index in range(1, 102):
        scholar.integrate_experience(
            make_message(content=f"entry {index}", sequence=index), 0.9
        )

    kept = [record.sequence for record in scholar.experience_log]
    assert kept == list(range(1, 11)) + list(range(22, 102))
    assert len(kept) == 90


def test_memory_summary_is_truncated(scholar):
    record = scholar.integrate_experience(make_message(content="y" * 200), 0.9)
    assert len(record.summary) == 80
    assert record.summary.endswith("...")


def test_conversation_topics_roll_independently_of_salience(scholar):
    for index in range(25):
        scholar.integrate_experience(make_message(content=f"subject{index:02d} words"), 0.0)

    assert scholar.experience_log == []
    assert len(scholar.conversation_topics) == 20
    assert scholar.conversation_topics[0] == "subject05"
    assert scholar.recent_topics(2) == ["subject23", "subject24"]


def test_personality_is_not_mutated_by_the_agent(scholar_personality):
    agent = Agent(scholar_personality)
    agent.mood = "irritated"
    agent.engagement = 3.0

    assert scholar_personality.mood == "curious"
    assert agent.engagement == 1.0
    with pytest.raises(ValidationError):
        scholar_personality.mood = "changed"


def test_agent_identity_and_summary(scholar_personality):
    first = Agent(scholar_personality)
    second = Agent(scholar_personality)

    assert first.id != second.id
    assert first.kind == "agent"
    assert first.to_summary().name == "Scholar"
    profile = first.to_dict()
    assert profile["interests"] == ["biology", "evidence"]
    assert profile["engagement"] == 0.8
    assert "models" not in profile


def test_personality_validates_engagement():
    with pytest.raises(ValidationError):
        Personality(name="Broken", engagement=1.5)


def test_last_seen_follows_the_message_timestamp(scholar):
    sent_at = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)
    message = make_message(sender="kai", content="morning").model_copy(update={"timestamp": sent_at})

    model = scholar.update_model("kai", message)

    assert model.last_seen == sent_at


def test_world_clock_reaches_the_model_of_other(scholar):
    fixed = datetime(2024, 1, 1, tzinfo=timezone.utc)
    world = World(clock=lambda: fixed)
    kai = HumanInhabitant(id="kai", name="Kai")
    world.enter(kai)
    world.enter(scholar)

    message = world.process_message({"from": "kai", "to": "world", "content": "plain words"})
    scholar.decide_and_respond(message, world.get_state())

    assert scholar.get_model_of("kai").last_seen == fixed


def test_evaluation_cache_keeps_only_recent_messages(scholar):
    messages = [make_message(content=f"note {index}") for index in range(EVALUATION_CACHE_LIMIT + 50)]
    for message in messages:
        scholar.evaluate(message)

    assert len(scholar.evaluations) == EVALUATION_CACHE_LIMIT
    assert messages[0].id not in scholar.evaluations
    assert messages[49].id not in scholar.evaluations
    assert messages[50].id in scholar.evaluations
    assert scholar.evaluations[messages[-1].id] == pytest.approx(0.2)
