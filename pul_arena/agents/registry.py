# pul_arena/agents/registry.py
"""Agent registry: maps command-line names to agent factories.

Each factory takes an integer seed and a `strict_jokers` flag. Deterministic
agents ignore the seed.
"""
from __future__ import annotations

import random
from typing import Callable, Dict, List

from .base import PulAgent
from .random_agent import RandomPulAgent
from .simple_agents import BasicAgent, SmallBidder

AgentFactory = Callable[[int, bool], PulAgent]

AGENT_REGISTRY: Dict[str, AgentFactory] = {
    "random": lambda seed, strict: RandomPulAgent(
        rng=random.Random(seed), strict_jokers=strict
    ),
    "basic": lambda seed, strict: BasicAgent(strict_jokers=strict),
    "small-bidder": lambda seed, strict: SmallBidder(strict_jokers=strict),
}


def available_agents() -> List[str]:
    return sorted(AGENT_REGISTRY)


def build_agent(name: str, seed: int = 0, strict_jokers: bool = False) -> PulAgent:
    try:
        factory = AGENT_REGISTRY[name]
    except KeyError:
        raise ValueError(
            f"Unknown agent {name!r}; choose from {', '.join(available_agents())}"
        ) from None
    return factory(seed, strict_jokers)
