"""Tests for the event bus, logging tags, and configuration."""

from __future__ import annotations

import contextlib
import io

import pytest

from conftest import FixedRandom
from worldim import EVENT_ENTER, EventBus, InhabitantEntered, Orchestrator, World
from worldim.config import Config
from worldim.logging_utils import LOG_TAG_ERROR, LOG_TAG_WORLD, Color, colored, colors_enabled


def test_handlers_run_in_registration_order():
    bus = EventBus()
    calls = []
    bus.on("ping", lambda payload: calls.append(("a", payload)))
    bus.on("ping", lambda payload: calls.append(("b", payload)))

    assert bus.emit("ping", 1) == 2
    assert calls == [("a", 1), ("b", 1)]
    assert bus.emit("unheard", 1) == 0


def test_handler_added_during_emit_waits_for_next_emission():
    bus = EventBus()
    late = []

    def register(payload):
        bus.on("ping", late.append)

    bus.on("ping", register)
    bus.emit("ping", "first")
    assert late == []

    bus.emit("ping", "second")
    assert late == ["second"]


def test_off_removes_one_registration():
    bus = EventBus()
    handler = bus.on("ping", lambda payload: None)

    assert bus.off("ping", handler) is True
    assert bus.off("ping", handler) is False
    assert bus.handler_count("ping") == 0


def test_handler_exceptions_reach_the_caller():
    world = World()

    def explode(payload):
        raise RuntimeError("listener failed")

    world.on(EVENT_ENTER, explode)
    with pytest.raises(RuntimeError):
        world.enter(_Guest("g1"))

    # The event was committed before subscribers ran
    assert world.sequence_counter == 1
    assert world.is_present("g1")


class _Guest:
    kind = "human"

    def __init__(self, inhabitant_id):
        self.id = inhabitant_id
        self.name = inhabitant_id.upper()


def test_enter_payload_carries_inhabitant():
    world = World()
    seen = []
    world.on(EVENT_ENTER, seen.append)
    guest = _Guest("g1")
    world.enter(guest)

    assert isinstance(seen[0], InhabitantEntered)
    assert seen[0].inhabitant is guest
    assert seen[0].event.sequence == 1


def test_world_debug_logging_uses_world_tags(monkeypatch):
    monkeypatch.setenv("DEBUG_WORLD", "1")
    monkeypatch.setenv("WORLDIM_NO_COLOR", "1")
    world = World()
    buffer = io.StringIO()

    with contextlib.redirect_stdout(buffer):
        world.enter(_Guest("g1"))
        world.process_message({"from": "ghost", "to": "world", "content": "boo"})

    output = buffer.getvalue()
    assert f"{LOG_TAG_WORLD} [World #1] G1 entered (human)" in output
    assert LOG_TAG_ERROR in output and "ghost" in output


def test_world_is_quiet_without_debug_flag(monkeypatch):
    monkeypatch.delenv("DEBUG_WORLD", raising=False)
    buffer = io.StringIO()
    with contextlib.redirect_stdout(buffer):
        World().enter(_Guest("g1"))
    assert buffer.getvalue() == ""


def test_verbose_orchestrator_prints_messages(monkeypatch, scholar):
    monkeypatch.setenv("WORLDIM_NO_COLOR", "1")
    world = World()
    orchestrator = Orchestrator(world, [scholar], rng=FixedRandom(0.0), verbose=True)
    buffer = io.StringIO()

    with contextlib.redirect_stdout(buffer):
        orchestrator.start()
        world.process_message({"from": "scholar", "to": "world", "content": "Hello biology"})

    output = buffer.getvalue()
    assert "1 agents inhabit the world: Scholar" in output
    assert "Scholar -> world: Hello biology" in output


def test_colored_respects_no_color(monkeypatch):
    monkeypatch.delenv("WORLDIM_NO_COLOR", raising=False)
    assert colors_enabled()
    assert colored("x", Color.RED) == f"{Color.RED.value}x{Color.RESET.value}"

    monkeypatch.setenv("WORLDIM_NO_COLOR", "1")
    assert not colors_enabled()
    assert colored("x", Color.RED, bold=True) == "x"


def test_config_defaults_validate():
    Config.validate()
    assert Config.RESPONSE_DELAY_MIN <= Config.RESPONSE_DELAY_MAX
    assert "Response delay" in Config.display()
    # Verbosity comes from the WORLDIM_VERBOSE and DEBUG_WORLD toggles
    assert not hasattr(Config, "LOG_LEVEL")


def test_config_rejects_inverted_windows(monkeypatch):
    monkeypatch.setattr(Config, "RESPONSE_DELAY_MIN", 9.0)
    monkeypatch.setattr(Config, "RESPONSE_DELAY_MAX", 1.0)
    with pytest.raises(ValueError, match="RESPONSE_DELAY_MIN"):
        Config.validate()
