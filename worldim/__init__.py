"""
World IM - a closed social world of sequenced messages and heuristic agents.

The world engine assigns every event a strict total order, derives directed
relationships from interaction history, and classifies each exchange as a
fork or a perturbation. Agents evaluate, model, remember, and decide for
themselves whether to speak.

No file I/O required. No network required. No global state.
All dependencies (random sources, clocks, rosters) injected by the user.
"""

__version__ = "0.1.0"

# Engines
from .world import World
from .agent import Agent
from .orchestrator import Orchestrator, ScheduledCallback, DEFAULT_KICKSTART

# Event bus
from .events import (
    EventBus,
    InhabitantEntered,
    InhabitantLeft,
    EVENT_ENTER,
    EVENT_LEAVE,
    EVENT_MESSAGE,
)

# Relationships
from .relationships import RelationshipGraph

# Personality configuration
from .personality import Personality, TemplateSet, DEFAULT_TEMPLATES
from .roster import create_default_agents, create_default_personalities, build_agents
from .scenario import Roster, RosterLoader

# Core schemas
from .schemas import (
    BROADCAST_TARGET,
    InhabitantLike,
    InhabitantSummary,
    HumanInhabitant,
    WorldEvent,
    EnterEvent,
    LeaveEvent,
    MessageEvent,
    MessageDraft,
    RelationshipEdge,
    ModelOfOther,
    TheirModelOfMe,
    ExperienceRecord,
    WorldSnapshot,
)

__all__ = [
    # Engines
    "World",
    "Agent",
    "Orchestrator",
    "ScheduledCallback",
    "DEFAULT_KICKSTART",
    # Event bus
    "EventBus",
    "InhabitantEntered",
    "InhabitantLeft",
    "EVENT_ENTER",
    "EVENT_LEAVE",
    "EVENT_MESSAGE",
    "RelationshipGraph",
    # Personality
    "Personality",
    "TemplateSet",
    "DEFAULT_TEMPLATES",
    "create_default_agents",
    "create_default_personalities",
    "build_agents",
    "Roster",
    "RosterLoader",
    # Schemas
    "BROADCAST_TARGET",
    "InhabitantLike",
    "InhabitantSummary",
    "HumanInhabitant",
    "WorldEvent",
    "EnterEvent",
    "LeaveEvent",
    "MessageEvent",
    "MessageDraft",
    "RelationshipEdge",
    "ModelOfOther",
    "TheirModelOfMe",
    "ExperienceRecord",
    "WorldSnapshot",
]
