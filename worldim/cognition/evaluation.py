"""Evaluation: differential weight an agent assigns to an incoming message."""

from __future__ import annotations

from typing import Iterable, Optional

from worldim.schemas import BROADCAST_TARGET, MessageEvent, ModelOfOther

DIRECT_ADDRESS_WEIGHT = 0.6
BROADCAST_WEIGHT = 0.2
INTEREST_WEIGHT = 0.3
TRUSTED_SENDER_WEIGHT = 0.15
TRUSTED_SENDER_THRESHOLD = 0.5
QUESTION_WEIGHT = 0.15


def clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def evaluate_message(
    message: MessageEvent,
    *,
    agent_id: str,
    interests: Iterable[str],
    sender_model: Optional[ModelOfOther],
) -> float:
    """Score ``message`` for one agent, clamped to [-1, 1].

    Direct address dominates; broadcast earns a little. Interest matching
    counts at most once however many keywords hit.
    """

    weight = 0.0

    if message.to == agent_id:
        weight += DIRECT_ADDRESS_WEIGHT
    elif message.to == BROADCAST_TARGET:
        weight += BROADCAST_WEIGHT

    content = (message.content or "").lower()
    for interest in interests:
        if interest.lower() in content:
            weight += INTEREST_WEIGHT
            break

    if sender_model is not None and sender_model.trust > TRUSTED_SENDER_THRESHOLD:
        weight += TRUSTED_SENDER_WEIGHT

    if "?" in content:
        weight += QUESTION_WEIGHT

    return clamp(weight)
