"""Model of Other: per-agent beliefs about every inhabitant it has heard from.

Models are owned by exactly one agent and never shared or merged. They are
built only from what the other inhabitant sends, so they are never verified.
Depth-2 recursion (``their_model_of_me``) is updated only when the other
inhabitant addresses the owning agent directly.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterator, Optional

from worldim.schemas import CommunicationStyle, MessageEvent, ModelOfOther, utcnow

INITIAL_TRUST = 0.5
EXPOSURE_TRUST_STEP = 0.02
ADDRESSED_INTEREST_STEP = 0.1
VERBOSE_LENGTH = 200
TERSE_LENGTH = 30


def infer_style(content: Optional[str]) -> Optional[CommunicationStyle]:
    """Style suggested by one message, or ``None`` if it says nothing.

    A question mark wins over length; very long reads verbose, very short
    reads terse.
    """

    text = content or ""
    if "?" in text:
        return "inquisitive"
    if len(text) > VERBOSE_LENGTH:
        return "verbose"
    if len(text) < TERSE_LENGTH:
        return "terse"
    return None


class OtherModels:
    """Registry of ``ModelOfOther`` keyed by inhabitant id."""

    def __init__(self) -> None:
        self._models: Dict[str, ModelOfOther] = {}

    def get(self, inhabitant_id: str) -> Optional[ModelOfOther]:
        return self._models.get(inhabitant_id)

    def __contains__(self, inhabitant_id: object) -> bool:
        return inhabitant_id in self._models

    def __iter__(self) -> Iterator[str]:
        return iter(self._models)

    def __len__(self) -> int:
        return len(self._models)

    def observe(
        self,
        inhabitant_id: str,
        message: MessageEvent,
        *,
        observer_id: str,
        seen_at: Optional[datetime] = None,
    ) -> ModelOfOther:
        """Fold one message from ``inhabitant_id`` into its model."""

        model = self._models.get(inhabitant_id)
        if model is None:
            model = ModelOfOther(name=message.from_name, trust=INITIAL_TRUST)
            self._models[inhabitant_id] = model

        model.message_count += 1
        model.last_seen = seen_at or utcnow()

        style = infer_style(message.content)
        if style is not None:
            model.style = style

        # Mere exposure
        model.trust = min(1.0, model.trust + EXPOSURE_TRUST_STEP)

        if message.to == observer_id:
            mirror = model.their_model_of_me
            mirror.interest = min(1.0, mirror.interest + ADDRESSED_INTEREST_STEP)

        return model

    def snapshot(self) -> Dict[str, ModelOfOther]:
        return {k: v.model_copy(deep=True) for k, v in self._models.items()}
