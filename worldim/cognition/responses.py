"""
Response crafting from personality template pools.

Inbound content is sorted into one category by inspection, checked in order:

1. question      -- contains "?"
2. agreement     -- contains "agree", "yes" or "right"
3. disagreement  -- contains "disagree", "no,", "wrong" or "don't think"
4. interest      -- contains one of the agent's interest keywords
                    (the first configured one that matches)
5. perspective   -- anything else

The order matters: "I disagree" contains "agree" and therefore lands in the
agreement pool. A template is then drawn uniformly from the matching pool.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, Tuple, TypeVar

from worldim.personality import INTEREST_PLACEHOLDER, TemplateCategory, TemplateSet

T = TypeVar("T")

AGREEMENT_MARKERS = ("agree", "yes", "right")
DISAGREEMENT_MARKERS = ("disagree", "no,", "wrong", "don't think")

DEFAULT_INITIATION_SUBJECT = "this world"
INITIATION_TEMPLATES = (
    "I've been thinking about something.",
    "There's something about {subject} that keeps drawing my attention.",
    "Does anyone else notice how the silence here has its own texture?",
    "I want to name something I've been observing.",
)


class RandomSource(Protocol):
    """The subset of ``random.Random`` the cognition engine relies on."""

    def random(self) -> float: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def classify_inbound(
    content: Optional[str], interests: Sequence[str]
) -> Tuple[TemplateCategory, Optional[str]]:
    """Return the template category and, for ``interest``, the matched keyword."""

    text = (content or "").lower()

    if "?" in text:
        return "question", None
    if any(marker in text for marker in AGREEMENT_MARKERS):
        return "agreement", None
    if any(marker in text for marker in DISAGREEMENT_MARKERS):
        return "disagreement", None
    for interest in interests:
        if interest.lower() in text:
            return "interest", interest
    return "perspective", None


def craft_response(
    content: Optional[str],
    *,
    interests: Sequence[str],
    templates: TemplateSet,
    rng: RandomSource,
) -> str:
    category, interest = classify_inbound(content, interests)
    response = rng.choice(templates.pool(category))
    if interest is not None:
        response = response.replace(INTEREST_PLACEHOLDER, interest)
    return response


def initiation_topics(interests: Sequence[str]) -> Tuple[str, ...]:
    subject = interests[0] if interests else DEFAULT_INITIATION_SUBJECT
    return tuple(t.format(subject=subject) for t in INITIATION_TEMPLATES)
