"""
Temporal integration: an agent's lossy personal memory.

Unlike world memory, this log is bounded and forgets on purpose:
- Only salient messages (evaluation above 0.3) become experiences
- Past 100 entries the log is compacted to the first 10 (formative) plus the
  80 most recent; the middle is discarded irreversibly
- A rolling window keeps the 20 most recent conversation topics, fed by every
  integrated message whether or not it was retained as an experience
"""

from __future__ import annotations

from typing import List, Optional

from worldim.schemas import ExperienceRecord, MessageEvent
from worldim.topics import agent_topic, summarize

SALIENCE_THRESHOLD = 0.3
MAX_EXPERIENCES = 100
FORMATIVE_KEEP = 10
RECENT_KEEP = 80
TOPIC_WINDOW = 20


class ExperienceLog:
    """Bounded experience records plus the rolling conversation-topic window."""

    def __init__(self) -> None:
        self.records: List[ExperienceRecord] = []
        self.topics: List[str] = []

    def __len__(self) -> int:
        return len(self.records)

    def integrate(self, message: MessageEvent, evaluation: float) -> Optional[ExperienceRecord]:
        """Fold ``message`` into memory; returns the stored record, if any."""

        record: Optional[ExperienceRecord] = None
        if evaluation > SALIENCE_THRESHOLD:
            record = ExperienceRecord(
                sequence=message.sequence,
                from_id=message.from_id,
                from_name=message.from_name,
                summary=summarize(message.content),
                evaluation=evaluation,
                timestamp=message.timestamp,
            )
            self.records.append(record)

        self._compact()

        topic = agent_topic(message.content)
        if topic:
            self.topics.append(topic)
            if len(self.topics) > TOPIC_WINDOW:
                self.topics = self.topics[-TOPIC_WINDOW:]

        return record

    def _compact(self) -> None:
        if len(self.records) > MAX_EXPERIENCES:
            self.records = self.records[:FORMATIVE_KEEP] + self.records[-RECENT_KEEP:]

    def recent_topics(self, count: int = 5) -> List[str]:
        if count <= 0:
            return []
        return self.topics[-count:]
