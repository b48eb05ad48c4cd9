"""
World engine: the canonical event log and relationship graph.

The world enforces three laws:
- Sequential ordering: every event gets the next world-scoped sequence number
- Voluntary participation: presence is tracked, never compelled
- Directedness: every message has exactly one target (an id or ``"world"``)

World memory (``World.memory``) is the persistent, non-lossy record. Agents
keep their own lossy memories; the world never calls into them and treats
every inhabitant as an opaque ``(id, name, kind)`` holder.

Failure is signaled by returning ``None`` with no side effects: a malformed
draft, an unknown sender, or an unknown leaver leaves the log, the graph and
the sequence counter untouched.

Usage:
    world = World()
    world.on("message", lambda event: print(event.content))
    world.enter(alice)
    world.enter(bob)
    world.process_message({"from": alice.id, "to": bob.id, "content": "Hello"})
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from .events import (
    EVENT_ENTER,
    EVENT_LEAVE,
    EVENT_MESSAGE,
    EventBus,
    Handler,
    InhabitantEntered,
    InhabitantLeft,
)
from .logging_utils import LOG_TAG_ERROR, LOG_TAG_WORLD, env_flag, log_error, log_world
from .relationships import RelationshipGraph
from .schemas import (
    BROADCAST_TARGET,
    Classification,
    EnterEvent,
    InhabitantLike,
    InhabitantSummary,
    LeaveEvent,
    MessageDraft,
    MessageEvent,
    RelationshipEdge,
    WorldEvent,
    WorldSnapshot,
    utcnow,
)
from .topics import world_topic

CLASSIFICATION_WINDOW = 20
"""Number of preceding messages a new message's topic is compared against."""

DEFAULT_RECENT_MESSAGES = 50

E = TypeVar("E", bound=WorldEvent)


def _summary(inhabitant: InhabitantLike) -> InhabitantSummary:
    return InhabitantSummary(id=inhabitant.id, name=inhabitant.name, kind=inhabitant.kind)


class World:
    """The closed world every inhabitant shares.

    Single-threaded and synchronous: no method yields, so each operation
    either fully commits (exactly one event appended, exactly the specified
    edges updated) or has no effect. Subscribers run inside ``emit``; a
    subscriber that calls ``process_message`` re-enters the engine and its
    event receives the next sequence number before the outer emission
    continues.
    """

    def __init__(
        self,
        *,
        bus: Optional[EventBus] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Create an empty world.

        Args:
            bus: Optional publish/subscribe registry (a fresh one by default)
            clock: Optional timestamp source, useful for deterministic tests
        """
        self.memory: List[WorldEvent] = []
        self.sequence_counter = 0
        self.inhabitants: Dict[str, InhabitantLike] = {}
        self.relationships = RelationshipGraph()
        self.bus = bus or EventBus()
        self._clock = clock or utcnow
        self._message_count = 0

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def on(self, event_name: str, handler: Handler) -> Handler:
        """Register a listener for ``inhabitant:enter``, ``inhabitant:leave`` or ``message``."""
        return self.bus.on(event_name, handler)

    def off(self, event_name: str, handler: Handler) -> bool:
        return self.bus.off(event_name, handler)

    def emit(self, event_name: str, payload: Any) -> int:
        return self.bus.emit(event_name, payload)

    # ------------------------------------------------------------------
    # Presence
    # ------------------------------------------------------------------

    def enter(self, inhabitant: InhabitantLike) -> EnterEvent:
        """An inhabitant enters the world.

        Entry re-initializes the entrant's outgoing edges and creates default
        edges in both directions with every other active inhabitant. Entering
        twice with the same id resets those edges; callers avoid double entry.
        """

        self.inhabitants[inhabitant.id] = inhabitant
        self.relationships.reset_outgoing(inhabitant.id)
        for other_id in self.inhabitants:
            if other_id != inhabitant.id:
                self.relationships.connect(inhabitant.id, other_id)

        event = self._record(
            EnterEvent,
            inhabitant_id=inhabitant.id,
            inhabitant_name=inhabitant.name,
            inhabitant_kind=inhabitant.kind,
        )
        if env_flag("DEBUG_WORLD"):
            log_world(f"  {LOG_TAG_WORLD} [World #{event.sequence}] {inhabitant.name} entered ({inhabitant.kind})")

        self.emit(EVENT_ENTER, InhabitantEntered(inhabitant=inhabitant, event=event))
        return event

    def leave(self, inhabitant_id: str) -> Optional[LeaveEvent]:
        """An inhabitant leaves. Unknown or already-departed ids return ``None``.

        Relationship edges are retained; the id stays valid in historical events.
        """

        inhabitant = self.inhabitants.get(inhabitant_id)
        if inhabitant is None:
            return None

        event = self._record(
            LeaveEvent,
            inhabitant_id=inhabitant_id,
            inhabitant_name=inhabitant.name,
        )
        del self.inhabitants[inhabitant_id]
        if env_flag("DEBUG_WORLD"):
            log_world(f"  {LOG_TAG_WORLD} [World #{event.sequence}] {inhabitant.name} left")

        self.emit(EVENT_LEAVE, InhabitantLeft(inhabitant_id=inhabitant_id, event=event))
        return event

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def process_message(
        self, draft: Union[MessageDraft, Mapping[str, Any]]
    ) -> Optional[MessageEvent]:
        """Record, relate, classify and broadcast a message.

        Args:
            draft: ``MessageDraft`` or a mapping with ``from``/``to``/``content``
                and optional ``replyTo``/``meta`` (python names also accepted)

        Returns:
            The recorded ``MessageEvent``, or ``None`` when the draft is
            malformed or the sender is not an active inhabitant (nothing
            recorded)
        """

        if not isinstance(draft, MessageDraft):
            try:
                draft = MessageDraft.model_validate(draft)
            except ValidationError as exc:
                if env_flag("DEBUG_WORLD"):
                    fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
                    log_error(f"  {LOG_TAG_ERROR} [World] Rejected malformed message ({fields})")
                return None

        sender = self.inhabitants.get(draft.from_id)
        if sender is None:
            if env_flag("DEBUG_WORLD"):
                log_error(f"  {LOG_TAG_ERROR} [World] Rejected message from unknown sender {draft.from_id}")
            return None

        message = self._record(
            MessageEvent,
            from_id=draft.from_id,
            from_name=sender.name,
            to=draft.to,
            content=draft.content,
            reply_to=draft.reply_to,
            meta=dict(draft.meta),
        )
        self._message_count += 1

        self._update_relationships(message)
        message.classification = self.classify_exchange(message)

        if env_flag("DEBUG_WORLD"):
            log_world(
                f"  {LOG_TAG_WORLD} [World #{message.sequence}] {sender.name} -> "
                f"{self._target_label(message.to)} ({message.classification})"
            )

        self.emit(EVENT_MESSAGE, message)
        return message

    def _record(self, event_cls: Type[E], **payload: Any) -> E:
        # Counter and log are committed together, after the event validates.
        event = event_cls(
            sequence=self.sequence_counter + 1,
            timestamp=self._clock(),
            **payload,
        )
        self.sequence_counter = event.sequence
        self.memory.append(event)
        return event

    def _update_relationships(self, message: MessageEvent) -> None:
        if message.to == BROADCAST_TARGET:
            self.relationships.record_broadcast(
                message.from_id, list(self.inhabitants), message.sequence
            )
            return
        self.relationships.record_direct(message.from_id, message.to, message.sequence)

    def classify_exchange(self, message: MessageEvent) -> Classification:
        """Fork if the message's topic is absent from the preceding 20 messages.

        Messages without an extractable topic are always perturbations.
        """

        current_topic = world_topic(message.content)
        if not current_topic:
            return "perturbation"

        recent_topics = {
            topic
            for topic in (
                world_topic(m.content)
                for m in self._messages_before(message.sequence, CLASSIFICATION_WINDOW)
            )
            if topic
        }
        if current_topic not in recent_topics:
            return "fork"
        return "perturbation"

    def _messages_before(self, sequence: int, count: int) -> List[MessageEvent]:
        found: List[MessageEvent] = []
        for event in reversed(self.memory):
            if len(found) >= count:
                break
            if isinstance(event, MessageEvent) and event.sequence < sequence:
                found.append(event)
        found.reverse()
        return found

    def _target_label(self, target: str) -> str:
        if target == BROADCAST_TARGET:
            return BROADCAST_TARGET
        inhabitant = self.inhabitants.get(target)
        return inhabitant.name if inhabitant else target

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_recent_messages(self, count: int = DEFAULT_RECENT_MESSAGES) -> List[MessageEvent]:
        """The last ``count`` message events in sequence order."""

        if count <= 0:
            return []
        messages = [e for e in self.memory if isinstance(e, MessageEvent)]
        return messages[-count:]

    def get_memory(self) -> List[WorldEvent]:
        """Copy of the full world log."""
        return list(self.memory)

    def get_inhabitants(self) -> List[InhabitantLike]:
        return list(self.inhabitants.values())

    def get_inhabitant(self, inhabitant_id: str) -> Optional[InhabitantLike]:
        return self.inhabitants.get(inhabitant_id)

    def is_present(self, inhabitant_id: str) -> bool:
        return inhabitant_id in self.inhabitants

    def get_relationships(self, inhabitant_id: str) -> Dict[str, RelationshipEdge]:
        """Copies of ``inhabitant_id``'s outgoing edges (``{}`` if unknown)."""
        return self.relationships.outgoing(inhabitant_id)

    def get_relationship(self, from_id: str, to_id: str) -> Optional[RelationshipEdge]:
        edge = self.relationships.edge(from_id, to_id)
        return edge.model_copy() if edge is not None else None

    def get_state(self) -> WorldSnapshot:
        """Pure projection of the current engine state."""

        return WorldSnapshot(
            inhabitant_count=len(self.inhabitants),
            message_count=self._message_count,
            total_events=len(self.memory),
            inhabitants=[_summary(i) for i in self.inhabitants.values()],
        )
