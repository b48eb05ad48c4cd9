"""Crude topic and summary extraction shared by the world and the agents.

The world and the agents use different length thresholds: a
token must be longer than 4 characters to count as a world topic (fork
classification) and longer than 5 to count as an agent conversation topic.
"""

from typing import Optional

WORLD_TOPIC_MIN_EXCLUSIVE = 4
AGENT_TOPIC_MIN_EXCLUSIVE = 5

SUMMARY_LIMIT = 80
_ELLIPSIS = "..."


def extract_topic(content: Optional[str], *, longer_than: int) -> Optional[str]:
    """Return the first lowercase whitespace token longer than ``longer_than``.

    Punctuation is kept as part of the token. Empty or missing content yields
    ``None``.
    """

    if not content:
        return None
    for word in content.lower().split():
        if len(word) > longer_than:
            return word
    return None


def world_topic(content: Optional[str]) -> Optional[str]:
    return extract_topic(content, longer_than=WORLD_TOPIC_MIN_EXCLUSIVE)


def agent_topic(content: Optional[str]) -> Optional[str]:
    return extract_topic(content, longer_than=AGENT_TOPIC_MIN_EXCLUSIVE)


def summarize(content: Optional[str], limit: int = SUMMARY_LIMIT) -> str:
    """Truncate content for lossy memory, ellipsis-suffixed when cut."""

    if not content:
        return ""
    if len(content) <= limit:
        return content
    return content[: limit - len(_ELLIPSIS)] + _ELLIPSIS
