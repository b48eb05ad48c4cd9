"""
Agent: an autonomous inhabitant with a heuristic cognition pipeline.

Each ``decide_and_respond`` call runs the phases in order:

    Evaluate -> Model -> Remember -> Decide -> (Respond | Abstain)

1. Evaluate: weight the message for this agent (cached by message id)
2. Model: update the model of the sender (skipped for the agent's own messages)
3. Remember: fold the message into lossy personal memory
4. Decide: direct address always answers, own messages never do, everything
   else is a single draw against a response probability
5. Respond: craft a draft from the personality's template pools

The agent never touches the world. It reads the snapshot it is given and
returns a ``MessageDraft`` (or ``None``); the caller decides what to do with
it. Randomness comes from an injected ``random.Random`` so runs can be seeded.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Tuple

from .cognition import (
    ExperienceLog,
    OtherModels,
    RandomSource,
    craft_response,
    evaluate_message,
    initiation_topics,
    response_probability,
)
from .personality import Personality
from .schemas import (
    BROADCAST_TARGET,
    ExperienceRecord,
    InhabitantSummary,
    MessageDraft,
    MessageEvent,
    ModelOfOther,
    WorldSnapshot,
    new_id,
)

INITIATION_CHANCE = 0.3
# Evaluations are kept for the most recent messages only, oldest dropped first
EVALUATION_CACHE_LIMIT = 200


class Agent:
    """A persistent agent identity bound to one ``Personality``.

    Attributes:
        id: Immutable identifier (uuid4 unless supplied)
        name: Display name from the personality
        kind: Always ``"agent"``
        mood: Current mood, starts from the personality
        evaluations: Evaluation weight per message id (most recent messages only)
        models: Models of every other inhabitant this agent has heard from
        experience: Lossy personal memory and conversation topics
        silence_ticks: Abstentions since the last response
    """

    kind = "agent"

    def __init__(
        self,
        personality: Personality,
        *,
        agent_id: Optional[str] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.id = agent_id or new_id()
        self.name = personality.name
        self.personality = personality
        self.rng: RandomSource = rng if rng is not None else random.Random()

        self.mood = personality.mood
        self._engagement = personality.engagement

        self.evaluations: Dict[str, float] = {}
        self.models = OtherModels()
        self.experience = ExperienceLog()
        self.silence_ticks = 0

    def __repr__(self) -> str:
        return f"Agent(id={self.id!r}, name={self.name!r})"

    # Configuration accessors -------------------------------------------------

    @property
    def interests(self) -> Tuple[str, ...]:
        return self.personality.interests

    @property
    def engagement(self) -> float:
        return self._engagement

    @engagement.setter
    def engagement(self, value: float) -> None:
        self._engagement = max(0.0, min(1.0, float(value)))

    @property
    def experience_log(self) -> List[ExperienceRecord]:
        return self.experience.records

    @property
    def conversation_topics(self) -> List[str]:
        return self.experience.topics

    def get_model_of(self, inhabitant_id: str) -> Optional[ModelOfOther]:
        return self.models.get(inhabitant_id)

    def recent_topics(self, count: int = 5) -> List[str]:
        return self.experience.recent_topics(count)

    # Cognition phases --------------------------------------------------------

    def evaluate(self, message: MessageEvent) -> float:
        """Weight ``message`` in [-1, 1] and cache it by message id."""

        weight = evaluate_message(
            message,
            agent_id=self.id,
            interests=self.interests,
            sender_model=self.models.get(message.from_id),
        )
        self.evaluations[message.id] = weight
        while len(self.evaluations) > EVALUATION_CACHE_LIMIT:
            del self.evaluations[next(iter(self.evaluations))]
        return weight

    def update_model(self, inhabitant_id: str, message: MessageEvent) -> ModelOfOther:
        return self.models.observe(
            inhabitant_id, message, observer_id=self.id, seen_at=message.timestamp
        )

    def integrate_experience(
        self, message: MessageEvent, evaluation: float
    ) -> Optional[ExperienceRecord]:
        return self.experience.integrate(message, evaluation)

    def should_respond(
        self,
        message: MessageEvent,
        evaluation: float,
        world_state: Optional[WorldSnapshot],
    ) -> bool:
        """Participation is voluntary, except that a direct address is always answered."""

        if message.to == self.id:
            return True
        if message.from_id == self.id:
            return False

        probability = response_probability(
            evaluation,
            silence_ticks=self.silence_ticks,
            inhabitant_count=world_state.inhabitant_count if world_state else 1,
            engagement=self.engagement,
        )
        return self.rng.random() < probability

    def decide_and_respond(
        self, message: MessageEvent, world_state: Optional[WorldSnapshot]
    ) -> Optional[MessageDraft]:
        """Run the full pipeline for one message; returns a draft or ``None``."""

        evaluation = self.evaluate(message)

        if message.from_id != self.id:
            self.update_model(message.from_id, message)

        self.integrate_experience(message, evaluation)

        if not self.should_respond(message, evaluation, world_state):
            self.silence_ticks += 1
            return None

        self.silence_ticks = 0
        return self.generate_response(message, world_state)

    def generate_response(
        self, message: MessageEvent, world_state: Optional[WorldSnapshot] = None
    ) -> MessageDraft:
        # Directedness: answer the sender only when we were the addressee
        to = message.from_id if message.to == self.id else BROADCAST_TARGET
        return MessageDraft(
            from_id=self.id,
            to=to,
            content=self.craft_response(message.content),
            reply_to=message.id,
            meta={
                "evaluation": self.evaluations.get(message.id),
                "mood": self.mood,
            },
        )

    def craft_response(self, content: Optional[str]) -> str:
        return craft_response(
            content,
            interests=self.interests,
            templates=self.personality.templates,
            rng=self.rng,
        )

    def initiate(self, world_state: Optional[WorldSnapshot] = None) -> Optional[MessageDraft]:
        """Maybe start a conversation unprompted (abstains 70% of the time)."""

        if self.rng.random() > INITIATION_CHANCE:
            return None

        content = self.rng.choice(initiation_topics(self.interests))
        return MessageDraft(
            from_id=self.id,
            to=BROADCAST_TARGET,
            content=content,
            reply_to=None,
            meta={"mood": self.mood, "initiated": True},
        )

    # Serialization -----------------------------------------------------------

    def to_summary(self) -> InhabitantSummary:
        return InhabitantSummary(id=self.id, name=self.name, kind=self.kind)

    def to_dict(self) -> Dict[str, Any]:
        """Public profile (no private memory or models)."""

        return {
            "id": self.id,
            "name": self.name,
            "kind": self.kind,
            "personality": self.personality.personality,
            "interests": list(self.interests),
            "style": self.personality.style,
            "values": list(self.personality.values),
            "mood": self.mood,
            "engagement": self.engagement,
        }
