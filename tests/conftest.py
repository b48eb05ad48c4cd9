"""Shared fixtures and helpers for the World IM test suite."""

from __future__ import annotations

import itertools
from typing import Optional, Sequence

import pytest

from worldim import Agent, MessageEvent, Personality, TemplateSet

_sequence = itertools.count(1)


class FixedRandom:
    """Deterministic stand-in for ``random.Random``.

    ``random()`` returns ``value``; ``choice`` returns the element at
    ``index`` (clamped to the sequence length).
    """

    def __init__(self, value: float = 0.0, index: int = 0) -> None:
        self.value = value
        self.index = index
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        return self.value

    def choice(self, seq: Sequence):
        return seq[min(self.index, len(seq) - 1)]

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.value


def make_message(
    *,
    sender: str = "other",
    sender_name: str = "Other",
    to: str = "world",
    content: Optional[str] = "hello",
    sequence: Optional[int] = None,
) -> MessageEvent:
    return MessageEvent(
        sequence=sequence if sequence is not None else next(_sequence),
        from_id=sender,
        from_name=sender_name,
        to=to,
        content=content,
    )


@pytest.fixture
def scholar_personality() -> Personality:
    return Personality(
        name="Scholar",
        personality="careful",
        interests=("biology", "evidence"),
        mood="curious",
        engagement=0.8,
        templates=TemplateSet(
            question=("Q-answer",),
            interest=("All about {interest}, and more {interest}.",),
        ),
    )


@pytest.fixture
def scholar(scholar_personality) -> Agent:
    return Agent(scholar_personality, agent_id="scholar", rng=FixedRandom(0.99))
