"""
Personality configuration for agents.

A ``Personality`` is static, read-only construction input: description,
interest keywords, style tag, values, starting mood, engagement scalar, and a
``TemplateSet`` of five response pools keyed by inbound message category.
Agents never mutate it; an empty pool falls back to the engine default pool
for that category.
"""

from typing import Dict, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field

TemplateCategory = Literal["question", "agreement", "disagreement", "interest", "perspective"]

TEMPLATE_CATEGORIES: Tuple[TemplateCategory, ...] = (
    "question",
    "agreement",
    "disagreement",
    "interest",
    "perspective",
)

INTEREST_PLACEHOLDER = "{interest}"

DEFAULT_TEMPLATES: Dict[str, Tuple[str, ...]] = {
    "question": (
        "That's a question I've been turning over. My sense is that it depends on what we value most here.",
        "I think the answer isn't singular. There are layers to consider.",
        "From where I stand, the question itself might be more revealing than any answer.",
    ),
    "agreement": (
        "There's something to that. Let me build on it a bit.",
        "I see that alignment, though I'd frame the implication differently.",
        "Agreed on the surface, but I wonder if we're agreeing for different reasons.",
    ),
    "disagreement": (
        "I hear the objection. Let me offer a different angle.",
        "That tension is real. I'm not sure it resolves easily.",
        "Interesting pushback. I think the friction here is productive.",
    ),
    "interest": (
        "Ah, {interest}. That's precisely what I've been thinking about.",
        "This touches on {interest} in a way that matters, I think.",
        "The connection to {interest} here is worth dwelling on.",
    ),
    "perspective": (
        "Something here strikes me. The pattern isn't quite what it first appears.",
        "I notice we're circling something important without naming it directly.",
        "Let me offer this: the constraint we're not discussing might be the one that matters most.",
    ),
}


class TemplateSet(BaseModel):
    """Five named response pools. Empty pools defer to ``DEFAULT_TEMPLATES``."""

    model_config = ConfigDict(frozen=True)

    question: Tuple[str, ...] = ()
    agreement: Tuple[str, ...] = ()
    disagreement: Tuple[str, ...] = ()
    interest: Tuple[str, ...] = ()
    perspective: Tuple[str, ...] = ()

    def pool(self, category: TemplateCategory) -> Tuple[str, ...]:
        """Templates for ``category``, falling back to the engine default pool."""

        if category not in TEMPLATE_CATEGORIES:
            raise KeyError(f"Unknown template category '{category}'")
        configured = getattr(self, category)
        return configured or DEFAULT_TEMPLATES[category]

    def overridden(self) -> List[str]:
        """Categories that carry their own pool."""
        return [c for c in TEMPLATE_CATEGORIES if getattr(self, c)]


class Personality(BaseModel):
    """Named configuration bundle for one agent."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Agent display name")
    personality: str = Field("curious and thoughtful", description="Free-form character description")
    interests: Tuple[str, ...] = Field((), description="Interest keywords (substring-matched)")
    style: str = Field("conversational", description="Communication style tag")
    values: Tuple[str, ...] = Field((), description="What the agent values")
    mood: str = Field("neutral", description="Starting mood")
    engagement: float = Field(0.5, ge=0.0, le=1.0, description="Engagement scalar")
    templates: TemplateSet = Field(default_factory=TemplateSet)
