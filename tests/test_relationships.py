"""Tests for the directed relationship graph."""

import pytest

from worldim import HumanInhabitant, World


@pytest.fixture
def pair():
    world = World()
    a = HumanInhabitant(id="a", name="A")
    b = HumanInhabitant(id="b", name="B")
    world.enter(a)
    world.enter(b)
    return world, a, b


def test_enter_creates_default_edges_both_ways(pair):
    world, a, b = pair

    forward = world.get_relationship(a.id, b.id)
    backward = world.get_relationship(b.id, a.id)
    for edge in (forward, backward):
        assert edge.model == "default"
        assert edge.entanglement == 0
        assert edge.interactions == 0
        assert edge.last_interaction is None


def test_direct_messages_entangle_asymmetrically(pair):
    world, a, b = pair

    world.process_message({"from": a.id, "to": b.id, "content": "first"})
    second = world.process_message({"from": a.id, "to": b.id, "content": "second"})

    ab = world.get_relationship(a.id, b.id)
    ba = world.get_relationship(b.id, a.id)
    assert ab.entanglement == pytest.approx(0.2)
    assert ba.entanglement == pytest.approx(0.1)
    assert ab.interactions == 2 and ba.interactions == 2
    assert ab.model == "non-default"
    assert ba.model == "non-default"
    assert ab.last_interaction == second.sequence


def test_single_direct_message_stays_default(pair):
    world, a, b = pair
    world.process_message({"from": a.id, "to": b.id, "content": "once"})

    assert world.get_relationship(a.id, b.id).model == "default"
    assert world.get_relationship(b.id, a.id).model == "default"


def test_broadcast_promotion_threshold(pair):
    world, a, b = pair

    world.process_message({"from": a.id, "to": "world", "content": "one"})
    world.process_message({"from": a.id, "to": "world", "content": "two"})
    assert world.get_relationship(a.id, b.id).model == "default"

    world.process_message({"from": a.id, "to": "world", "content": "three"})
    edge = world.get_relationship(a.id, b.id)
    assert edge.model == "non-default"
    assert edge.interactions == 3
    assert edge.entanglement == 0


def test_broadcast_is_not_reciprocal(pair):
    world, a, b = pair
    for _ in range(4):
        world.process_message({"from": a.id, "to": "world", "content": "listen"})

    reverse = world.get_relationship(b.id, a.id)
    assert reverse.interactions == 0
    assert reverse.model == "default"


def test_entanglement_saturates_at_one(pair):
    world, a, b = pair
    for _ in range(15):
        world.process_message({"from": a.id, "to": b.id, "content": "again"})

    assert world.get_relationship(a.id, b.id).entanglement == 1.0
    assert world.get_relationship(b.id, a.id).entanglement == pytest.approx(0.75)


def test_edges_survive_departure_and_are_not_created_lazily(pair):
    world, a, b = pair
    world.process_message({"from": a.id, "to": b.id, "content": "before leaving"})
    world.leave(b.id)

    assert world.get_relationship(a.id, b.id).interactions == 1

    late = HumanInhabitant(id="c", name="C")
    world.enter(late)
    # c never co-existed with b: no edge either way, even when addressed.
    world.process_message({"from": late.id, "to": b.id, "content": "hello b?"})
    assert world.get_relationship(late.id, b.id) is None
    assert world.get_relationship(b.id, late.id) is None


def test_broadcast_only_touches_active_audience(pair):
    world, a, b = pair
    world.leave(b.id)
    world.process_message({"from": a.id, "to": "world", "content": "anyone"})

    assert world.get_relationship(a.id, b.id).interactions == 0


def test_relationship_copies_do_not_leak(pair):
    world, a, b = pair
    edges = world.get_relationships(a.id)
    edges[b.id].interactions = 99

    assert world.get_relationship(a.id, b.id).interactions == 0


def test_reentry_reinitializes_edges(pair):
    world, a, b = pair
    world.process_message({"from": a.id, "to": b.id, "content": "x"})
    world.process_message({"from": a.id, "to": b.id, "content": "y"})
    world.leave(a.id)
    world.enter(a)

    assert world.get_relationship(a.id, b.id).interactions == 0
    assert world.get_relationship(b.id, a.id).model == "default"
