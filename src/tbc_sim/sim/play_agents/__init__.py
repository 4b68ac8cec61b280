"""Play agent implementations for headless match simulation.

Re-exports the base class and all concrete agent implementations so
consumers can do::

    from tbc_sim.sim.play_agents import HeuristicAgent, PlayAgent, RandomAgent
"""

from .base import PlayAgent
from .heuristic_agent import HeuristicAgent, choose_ai_move
from .random_agent import RandomAgent

__all__ = ["PlayAgent", "HeuristicAgent", "RandomAgent", "choose_ai_move"]
