# pul_arena/agents/__init__.py
from .base import PulAgent
from .random_agent import RandomPulAgent
from .registry import AGENT_REGISTRY, available_agents, build_agent
from .simple_agents import BasicAgent, SmallBidder

__all__ = [
    "PulAgent",
    "RandomPulAgent",
    "BasicAgent",
    "SmallBidder",
    "AGENT_REGISTRY",
    "available_agents",
    "build_agent",
]
