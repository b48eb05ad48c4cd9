"""
Orchestration loop wiring the world to its agents.

The world engine and the agents never yield; all waiting lives here. Every
suspension (an agent's simulated response delay, the periodic initiation
timer, the opening kickstart) is a deferred callback on a priority queue
ordered by due time, then by scheduling order.

Coordinates the conversation:
1. A recorded message reaches ``_on_message`` through the world's event bus
2. For every agent other than the sender, a decision is *enqueued* with a
   random delay instead of running inline
3. When a decision fires it reads the *current* world snapshot (other agents
   may have spoken since it was scheduled), runs ``decide_and_respond``, and
   feeds any draft back into ``World.process_message``
4. That message is broadcast again, and the cycle continues

Time is simulated (``self.now`` in seconds). ``run_until``/``run_pending``
drain the queue deterministically for tests and batch runs; ``run`` drives
the same queue against the wall clock with ``asyncio.sleep``.
"""

import asyncio
import heapq
import itertools
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .agent import Agent
from .cognition import RandomSource
from .config import Config
from .events import EVENT_MESSAGE
from .logging_utils import (
    LOG_TAG_AGENT,
    LOG_TAG_INFO,
    LOG_TAG_SUCCESS,
    Color,
    colored,
    env_flag,
    log_agent,
    log_info,
    log_success,
)
from .schemas import BROADCAST_TARGET, HumanInhabitant, MessageEvent
from .world import World

DEFAULT_KICKSTART = (
    "Something has been on my mind. In a world where the only substance is messages, "
    "where everything we are to each other passes through this single channel, "
    "what does it mean to really know someone?"
)

# Guard against unbounded drains when agents keep answering each other.
DEFAULT_MAX_CALLBACKS = 10_000

MessageListener = Callable[[MessageEvent], None]


@dataclass(order=True)
class ScheduledCallback:
    """A deferred callback. Ordered by ``due`` then ``order`` (FIFO on ties)."""

    due: float
    order: int
    label: str = field(compare=False)
    callback: Callable[[], object] = field(compare=False, repr=False)


class Orchestrator:
    """Drives agents around a ``World``.

    Accepts all dependencies as parameters; defaults come from ``Config``.
    """

    def __init__(
        self,
        world: World,
        agents: Sequence[Agent],
        *,
        rng: Optional[RandomSource] = None,
        response_delay: Optional[Tuple[float, float]] = None,
        initiation_interval: Optional[Tuple[float, float]] = None,
        verbose: Optional[bool] = None,
        message_listeners: Optional[List[MessageListener]] = None,
    ):
        """Initialize orchestrator.

        Args:
            world: The world the agents inhabit
            agents: Agents to enter and drive
            rng: Random source for delays and timer periods (seeded from
                Config.WORLDIM_SEED when omitted)
            response_delay: (min, max) seconds before an agent decides
            initiation_interval: (min, max) seconds; one period is drawn at
                start and the initiation timer repeats on it
            verbose: Print every recorded message (defaults to WORLDIM_VERBOSE)
            message_listeners: Callables invoked with every recorded message;
                the hook an outbound transport attaches to
        """
        self.world = world
        self.agents: List[Agent] = list(agents)
        self.rng: RandomSource = rng if rng is not None else random.Random(Config.WORLDIM_SEED)
        self.response_delay = response_delay or (
            Config.RESPONSE_DELAY_MIN,
            Config.RESPONSE_DELAY_MAX,
        )
        self.initiation_interval = initiation_interval or (
            Config.INITIATION_INTERVAL_MIN,
            Config.INITIATION_INTERVAL_MAX,
        )
        self.verbose = env_flag("WORLDIM_VERBOSE") if verbose is None else verbose
        self.message_listeners: List[MessageListener] = list(message_listeners or [])

        self.now = 0.0
        self.humans: Dict[str, HumanInhabitant] = {}
        self._queue: List[ScheduledCallback] = []
        self._order = itertools.count()
        self._started = False
        self._initiation_period: Optional[float] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Enter every agent and subscribe to world messages (idempotent)."""
        if self._started:
            return
        self.world.on(EVENT_MESSAGE, self._on_message)
        for agent in self.agents:
            if not self.world.is_present(agent.id):
                self.world.enter(agent)
        self._started = True

        if self.verbose:
            names = ", ".join(agent.name for agent in self.agents)
            log_info(f"{LOG_TAG_INFO} {len(self.agents)} agents inhabit the world: {names}")

    def stop(self) -> int:
        """Tear down: unsubscribe and drop every pending callback.

        Returns:
            Number of callbacks discarded
        """
        dropped = len(self._queue)
        self._queue.clear()
        if self._started:
            self.world.off(EVENT_MESSAGE, self._on_message)
            self._started = False
        self._initiation_period = None
        return dropped

    @property
    def pending(self) -> int:
        return len(self._queue)

    def schedule(self, delay: float, callback: Callable[[], object], label: str = "") -> ScheduledCallback:
        entry = ScheduledCallback(
            due=self.now + max(0.0, delay),
            order=next(self._order),
            label=label,
            callback=callback,
        )
        heapq.heappush(self._queue, entry)
        return entry

    # ------------------------------------------------------------------
    # Message fan-out
    # ------------------------------------------------------------------

    def _on_message(self, event: MessageEvent) -> None:
        if self.verbose:
            self._print_message(event)
        for listener in self.message_listeners:
            listener(event)
        self.schedule_responses(event)

    def schedule_responses(self, event: MessageEvent) -> int:
        """Enqueue one deferred decision per agent other than the sender."""

        scheduled = 0
        low, high = self.response_delay
        for agent in self.agents:
            if agent.id == event.from_id:
                continue
            delay = self.rng.uniform(low, high)
            self.schedule(
                delay,
                lambda agent=agent: self._deliver(agent, event),
                label=f"decide:{agent.name}:{event.sequence}",
            )
            scheduled += 1
        return scheduled

    def _deliver(self, agent: Agent, event: MessageEvent) -> Optional[MessageEvent]:
        # Read the world as it is now, not as it was when this was scheduled.
        world_state = self.world.get_state()
        draft = agent.decide_and_respond(event, world_state)
        if draft is None:
            if self.verbose:
                log_agent(f"  {LOG_TAG_AGENT} [{agent.name}] stays silent on #{event.sequence}")
            return None
        return self.world.process_message(draft)

    # ------------------------------------------------------------------
    # Self-initiation
    # ------------------------------------------------------------------

    def initiation_round(self) -> List[MessageEvent]:
        """Give every agent one chance to start a conversation."""

        recorded: List[MessageEvent] = []
        world_state = self.world.get_state()
        for agent in self.agents:
            draft = agent.initiate(world_state)
            if draft is None:
                continue
            message = self.world.process_message(draft)
            if message is not None:
                recorded.append(message)
        return recorded

    def schedule_initiation_round(self, delay: float) -> ScheduledCallback:
        """Schedule a single initiation round ``delay`` seconds from now."""
        return self.schedule(delay, self.initiation_round, label="initiate-once")

    def start_initiation_timer(self) -> float:
        """Start the periodic initiation timer; returns its period in seconds."""

        if self._initiation_period is None:
            low, high = self.initiation_interval
            self._initiation_period = self.rng.uniform(low, high)
            self.schedule(self._initiation_period, self._initiation_tick, label="initiate")
        return self._initiation_period

    def _initiation_tick(self) -> None:
        if self._initiation_period is None:
            return
        self.initiation_round()
        self.schedule(self._initiation_period, self._initiation_tick, label="initiate")

    def kickstart(self, content: str = DEFAULT_KICKSTART, delay: Optional[float] = None) -> ScheduledCallback:
        """Schedule the first agent's opening broadcast."""

        if not self.agents:
            raise ValueError("Cannot kickstart a world without agents")
        opener = self.agents[0]
        return self.schedule(
            Config.KICKSTART_DELAY if delay is None else delay,
            lambda: self.world.process_message(
                {"from": opener.id, "to": BROADCAST_TARGET, "content": content}
            ),
            label=f"kickstart:{opener.name}",
        )

    # ------------------------------------------------------------------
    # Human boundary (the transport itself is external)
    # ------------------------------------------------------------------

    def admit_human(
        self, name: Optional[str] = None, socket_id: Optional[str] = None
    ) -> Tuple[HumanInhabitant, List[MessageEvent]]:
        """Enter a human and return them with recent history to show."""

        human = HumanInhabitant(name=name or "Anonymous", socket_id=socket_id)
        self.world.enter(human)
        self.humans[human.id] = human
        history = self.world.get_recent_messages(Config.RECENT_HISTORY_LIMIT)
        return human, history

    def human_says(
        self, human_id: str, content: str, to: Optional[str] = None
    ) -> Optional[MessageEvent]:
        """Relay a human message; ``None`` if the human is unknown or gone."""

        if human_id not in self.humans:
            return None
        return self.world.process_message(
            {"from": human_id, "to": to or BROADCAST_TARGET, "content": content}
        )

    def dismiss_human(self, human_id: str) -> bool:
        human = self.humans.pop(human_id, None)
        if human is None:
            return False
        return self.world.leave(human_id) is not None

    # ------------------------------------------------------------------
    # Drivers
    # ------------------------------------------------------------------

    def _pop_and_run(self) -> ScheduledCallback:
        entry = heapq.heappop(self._queue)
        self.now = max(self.now, entry.due)
        entry.callback()
        return entry

    def run_pending(self, max_callbacks: int = DEFAULT_MAX_CALLBACKS) -> int:
        """Fire callbacks in due order until the queue empties or the cap hits.

        Returns:
            Number of callbacks fired
        """
        fired = 0
        while self._queue and fired < max_callbacks:
            self._pop_and_run()
            fired += 1
        return fired

    def run_until(self, until: float, max_callbacks: int = DEFAULT_MAX_CALLBACKS) -> int:
        """Fire every callback due at or before ``until``; advance ``now`` to it."""

        fired = 0
        while self._queue and self._queue[0].due <= until and fired < max_callbacks:
            self._pop_and_run()
            fired += 1
        self.now = max(self.now, until)
        return fired

    async def run(self, duration: float, *, time_scale: float = 1.0) -> int:
        """Drive the queue against the wall clock for ``duration`` simulated seconds.

        Args:
            duration: Simulated seconds to run
            time_scale: Real seconds slept per simulated second (0 runs flat out)

        Returns:
            Number of callbacks fired
        """
        self.start()
        end = self.now + duration
        fired = 0

        while self._queue and self._queue[0].due <= end:
            wait = (self._queue[0].due - self.now) * time_scale
            if wait > 0:
                await asyncio.sleep(wait)
            self._pop_and_run()
            fired += 1

        remaining = (end - self.now) * time_scale
        if remaining > 0:
            await asyncio.sleep(remaining)
        self.now = end

        if self.verbose:
            log_success(f"{LOG_TAG_SUCCESS} Ran {fired} callbacks over {duration:.1f}s")
        return fired

    def _print_message(self, event: MessageEvent) -> None:
        target = BROADCAST_TARGET
        if event.to != BROADCAST_TARGET:
            recipient = self.world.get_inhabitant(event.to)
            target = recipient.name if recipient is not None else event.to
        marker = "*" if event.classification == "fork" else " "
        print(
            colored(
                f"[{self.now:7.2f}s #{event.sequence:>3}]{marker} {event.from_name} -> {target}: {event.content}",
                Color.CYAN,
            )
        )
