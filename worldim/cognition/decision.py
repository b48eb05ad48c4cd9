"""Response probability for messages that do not force a reply."""

from __future__ import annotations

import math

RESPONSE_EVALUATION_FACTOR = 0.5
SILENCE_STEP = 0.05
SILENCE_CAP = 0.3


def response_probability(
    evaluation: float,
    *,
    silence_ticks: int,
    inhabitant_count: int,
    engagement: float,
) -> float:
    """Chance of speaking up, in [0, 1].

    Half the evaluation, plus a bonus for staying quiet (0.05 per abstention,
    capped at 0.3), dampened by ``log2(population + 1)`` so crowded rooms stay
    quieter, scaled by engagement.
    """

    probability = evaluation * RESPONSE_EVALUATION_FACTOR
    probability += min(SILENCE_CAP, max(0, silence_ticks) * SILENCE_STEP)

    population = inhabitant_count if inhabitant_count > 0 else 1
    probability /= math.log2(population + 1)

    probability *= max(0.0, min(1.0, engagement))
    return max(0.0, min(1.0, probability))
