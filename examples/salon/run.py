"""
Salon: agents talking among themselves, with an optional human voice.
=====================================================================

WHAT THIS SHOWS:
- Building agents from the built-in roster or a JSON roster
- Deferred responses on simulated time (deterministic with --seed)
- A human entering, speaking, and leaving through the orchestrator
- The relationship graph after the conversation

RUN:
    python -m examples.salon.run --seed 7 --duration 120
    python -m examples.salon.run --roster salon --say "Is trust earned or given?"
    python -m examples.salon.run --realtime --duration 30
"""

import argparse
import asyncio
import random

from worldim import (
    Orchestrator,
    RosterLoader,
    World,
    build_agents,
    create_default_personalities,
)
from worldim.config import Config
from worldim.orchestrator import DEFAULT_KICKSTART


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a World IM salon")
    parser.add_argument("--seed", type=int, default=Config.WORLDIM_SEED, help="Random seed for reproducibility")
    parser.add_argument("--duration", type=float, default=90.0, help="Simulated seconds to run")
    parser.add_argument("--roster", help="JSON roster name under examples/rosters (default: built-in four)")
    parser.add_argument("--human", default="Visitor", help="Name for the human participant")
    parser.add_argument("--say", action="append", default=[], help="Human message (repeatable)")
    parser.add_argument("--realtime", action="store_true", help="Sleep on the wall clock instead of simulating")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    Config.validate()

    rng = random.Random(args.seed) if args.seed is not None else random.Random()

    kickstart = DEFAULT_KICKSTART
    if args.roster:
        roster = RosterLoader().load(args.roster)
        personalities = roster.personalities
        kickstart = roster.kickstart or kickstart
    else:
        personalities = create_default_personalities()

    world = World()
    agents = build_agents(personalities, rng=rng)
    orchestrator = Orchestrator(world, agents, rng=rng, verbose=True)
    orchestrator.start()
    orchestrator.start_initiation_timer()
    orchestrator.kickstart(kickstart)

    human = None
    if args.say:
        human, _history = orchestrator.admit_human(args.human)
        for index, line in enumerate(args.say):
            orchestrator.schedule(
                10.0 * (index + 1),
                lambda line=line: orchestrator.human_says(human.id, line),
                label="human",
            )

    if args.realtime:
        asyncio.run(orchestrator.run(args.duration))
    else:
        orchestrator.run_until(args.duration)

    if human is not None:
        orchestrator.dismiss_human(human.id)
    orchestrator.stop()

    state = world.get_state()
    print()
    print(f"Messages: {state.message_count}, events: {state.total_events}")
    for agent in agents:
        edges = world.get_relationships(agent.id)
        individuated = [
            world.get_inhabitant(other).name if world.get_inhabitant(other) else other
            for other, edge in edges.items()
            if edge.model == "non-default"
        ]
        print(f"  {agent.name}: {len(agent.experience_log)} memories, knows well: {', '.join(individuated) or '-'}")


if __name__ == "__main__":
    main()
