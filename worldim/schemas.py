"""
Pydantic schemas for the World IM engine.

All records that cross a module boundary are defined here: inhabitant
summaries, the event log entries, inbound message drafts, relationship edges,
and the per-agent belief/memory records.

Design Philosophy:
- Events are append-only records; the world log is the only non-lossy history
- Python field names are snake_case, the wire shape keeps the camelCase aliases
  (``from``, ``fromName``, ``replyTo``) so transports can serialize directly
- Numeric accumulators carry their bounds in the schema (trust, entanglement)
- Metadata bags allow transports and scenarios to attach data without schema changes
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Protocol, runtime_checkable
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


BROADCAST_TARGET = "world"
"""Sentinel recipient meaning "everyone currently in the world"."""

EventType = Literal["enter", "leave", "message"]
Classification = Literal["fork", "perturbation"]
ModelTier = Literal["default", "non-default"]
CommunicationStyle = Literal["unknown", "inquisitive", "verbose", "terse"]


def utcnow() -> datetime:
    """Wall-clock timestamp used for events and model bookkeeping."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


# ============================================================================
# Inhabitant Schemas
# ============================================================================


@runtime_checkable
class InhabitantLike(Protocol):
    """Anything the world can hold: it only ever reads id, name and kind."""

    id: str
    name: str
    kind: str


class InhabitantSummary(BaseModel):
    """Public projection of an inhabitant (used in snapshots and rosters)."""

    id: str = Field(..., description="Unique inhabitant identifier")
    name: str = Field(..., description="Display name")
    kind: str = Field(..., description="Inhabitant variant (agent, human)")


class HumanInhabitant(BaseModel):
    """A human participant.

    Humans bring out-of-distribution input: the engine never decides on their
    behalf, it only records what they send. ``socket_id`` is an opaque handle
    for whatever transport delivers their messages.
    """

    id: str = Field(default_factory=new_id, description="Unique inhabitant identifier")
    name: str = Field("Anonymous", description="Display name")
    kind: Literal["human"] = "human"
    socket_id: Optional[str] = Field(None, description="Opaque transport handle")

    def to_summary(self) -> InhabitantSummary:
        return InhabitantSummary(id=self.id, name=self.name, kind=self.kind)


# ============================================================================
# Event Schemas
# ============================================================================


class WorldEvent(BaseModel):
    """An entry in world memory.

    Every event carries a world-scoped sequence number. Sequence numbers start
    at 1, strictly increase in recording order, and are never reused. The
    world assigns them; callers never construct events for the log directly.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id, description="Unique event identifier")
    sequence: int = Field(..., ge=1, description="World-scoped position in the total order")
    timestamp: datetime = Field(default_factory=utcnow, description="Wall-clock time of recording")
    type: EventType = Field(..., description="Event type tag")

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the transmitted/persisted shape (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)


class EnterEvent(WorldEvent):
    """An inhabitant entered the world."""

    type: Literal["enter"] = "enter"
    inhabitant_id: str = Field(..., alias="inhabitantId")
    inhabitant_name: str = Field(..., alias="inhabitantName")
    inhabitant_kind: str = Field(..., alias="inhabitantKind")


class LeaveEvent(WorldEvent):
    """An inhabitant left the world. Leaving is unmarked beyond this record."""

    type: Literal["leave"] = "leave"
    inhabitant_id: str = Field(..., alias="inhabitantId")
    inhabitant_name: str = Field(..., alias="inhabitantName")


class MessageEvent(WorldEvent):
    """A recorded message.

    Wire shape: ``{id, sequence, timestamp, type, from, fromName, to, content,
    replyTo, meta, classification}``. ``classification`` is derived by the
    world right after recording and is ``None`` only for the instant between
    recording and classification.
    """

    type: Literal["message"] = "message"
    from_id: str = Field(..., alias="from", description="Sender inhabitant id")
    from_name: str = Field(..., alias="fromName", description="Sender display name at send time")
    # Exactly one target: an inhabitant id or the broadcast sentinel
    to: str = Field(..., description="Recipient inhabitant id or 'world'")
    content: Optional[str] = Field("", description="Message text")
    reply_to: Optional[str] = Field(None, alias="replyTo", description="Event id being answered")
    meta: Dict[str, Any] = Field(default_factory=dict, description="Opaque metadata bag")
    classification: Optional[Classification] = Field(
        None, description="fork (novel topic) or perturbation (continuing topic)"
    )

    @property
    def is_broadcast(self) -> bool:
        return self.to == BROADCAST_TARGET


class MessageDraft(BaseModel):
    """Inbound request to ``World.process_message``.

    Accepts either python field names or the wire aliases, so a transport can
    pass ``{"from": ..., "to": ..., "content": ...}`` straight through.
    Non-text content is stringified and a null ``meta`` becomes ``{}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    from_id: str = Field(..., alias="from")
    to: str = Field(..., description="Recipient inhabitant id or 'world'")
    content: Optional[str] = ""
    reply_to: Optional[str] = Field(None, alias="replyTo")
    meta: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("content", mode="before")
    @classmethod
    def _content_as_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("meta", mode="before")
    @classmethod
    def _meta_or_empty(cls, value: Any) -> Any:
        return {} if value is None else value


# ============================================================================
# Relationship Schemas
# ============================================================================


class RelationshipEdge(BaseModel):
    """Directed relationship ``relationships[a][b]``.

    ``model`` starts categorical (``default``) and becomes individuated
    (``non-default``) once enough interactions accumulate; it never reverts.
    Entanglement only grows through direct messages and saturates at 1.
    """

    model: ModelTier = Field("default", description="default or non-default model tier")
    entanglement: float = Field(0.0, ge=0.0, le=1.0, description="Shaping through direct interaction")
    interactions: int = Field(0, ge=0, description="Interaction count")
    last_interaction: Optional[int] = Field(
        None, description="Sequence number of the last interaction"
    )


# ============================================================================
# Agent Belief and Memory Schemas
# ============================================================================


class TheirModelOfMe(BaseModel):
    """Depth-2 belief: what the agent thinks the other thinks about it."""

    trust: float = Field(0.5, ge=0.0, le=1.0)
    interest: float = Field(0.5, ge=0.0, le=1.0)


class ModelOfOther(BaseModel):
    """An agent's private, never-verified model of another inhabitant."""

    name: Optional[str] = Field(None, description="Name the other was last seen under")
    beliefs: List[str] = Field(default_factory=list, description="Free-form beliefs")
    style: CommunicationStyle = Field("unknown", description="Inferred communication style")
    predicted_values: List[str] = Field(default_factory=list)
    # Mere exposure raises trust; nothing lowers it
    trust: float = Field(0.5, ge=0.0, le=1.0)
    message_count: int = Field(0, ge=0)
    last_seen: Optional[datetime] = None
    their_model_of_me: TheirModelOfMe = Field(default_factory=TheirModelOfMe)


class ExperienceRecord(BaseModel):
    """One salient entry in an agent's lossy personal memory."""

    sequence: int = Field(..., description="World sequence of the remembered message")
    from_id: str
    from_name: Optional[str] = None
    summary: str = Field("", max_length=80, description="Truncated content")
    evaluation: float = Field(..., ge=-1.0, le=1.0)
    timestamp: Optional[datetime] = None


# ============================================================================
# World Snapshot
# ============================================================================


class WorldSnapshot(BaseModel):
    """Side-effect-free projection of the world returned by ``get_state()``."""

    inhabitant_count: int = Field(..., ge=0)
    message_count: int = Field(..., ge=0, description="Cumulative recorded messages")
    total_events: int = Field(..., ge=0, description="Cumulative recorded events")
    inhabitants: List[InhabitantSummary] = Field(default_factory=list)
