"""Core simulation primitives for the turn-based combat engine."""

from tbc_sim.sim.core.battle_log import LOG_CAPACITY, BattleLog
from tbc_sim.sim.core.entities import Fighter, affordable_moves, can_afford, create_fighter
from tbc_sim.sim.core.game_state import (
    DEFAULT_MAX_TURNS,
    GauntletResult,
    GauntletState,
    MatchResult,
    MatchState,
    all_opponents_dead,
    cycle_target,
    first_living_opponent,
    new_match,
)
from tbc_sim.sim.core.rng import GameRNG, ScriptedRNG

__all__ = [
    # rng
    "GameRNG",
    "ScriptedRNG",
    # entities
    "Fighter",
    "create_fighter",
    "affordable_moves",
    "can_afford",
    # battle_log
    "LOG_CAPACITY",
    "BattleLog",
    # game_state
    "DEFAULT_MAX_TURNS",
    "MatchResult",
    "GauntletResult",
    "MatchState",
    "GauntletState",
    "new_match",
    "first_living_opponent",
    "all_opponents_dead",
    "cycle_target",
]
