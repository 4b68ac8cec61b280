"""Damage formulas and derived stats.

Implements the engine's numeric pipeline:
    effective stats -> base formula (floor 1) -> crit -> kind multiplier (floor 1)

All divisions are integer divisions on non-negative operands, so they
truncate toward zero.  Nothing here mutates a fighter; the resolvers own
every state change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tbc_sim.sim.content.classes import (
    DOT_TICK_BASE,
    BuffStat,
    FighterClass,
    get_class_definition,
)

if TYPE_CHECKING:
    from tbc_sim.sim.core.entities import Fighter
    from tbc_sim.sim.core.rng import GameRNG

BASE_DODGE_CHANCE = 5


# ---------------------------------------------------------------------------
# Effective stats
# ---------------------------------------------------------------------------

def _buff_bonus(fighter: Fighter, stat: BuffStat) -> int:
    if fighter.buff_active and fighter.buff_stat == stat:
        return fighter.buff_amount
    return 0


def effective_attack(fighter: Fighter) -> int:
    return fighter.base_attack + _buff_bonus(fighter, BuffStat.ATTACK)


def effective_speed(fighter: Fighter) -> int:
    return fighter.base_speed + _buff_bonus(fighter, BuffStat.SPEED)


def effective_defense(fighter: Fighter) -> int:
    """Base defense plus any defense buff, minus the permanent sunder.

    Never negative, however large the penalty grows.
    """
    defense = fighter.base_defense + _buff_bonus(fighter, BuffStat.DEFENSE)
    return max(0, defense - fighter.defense_penalty)


# ---------------------------------------------------------------------------
# Formulas
# ---------------------------------------------------------------------------

def calculate_damage(base: int, attack: int, defense: int) -> int:
    """``max(1, base + attack // 2 - defense // 3)``."""
    return max(1, base + attack // 2 - defense // 3)


def calculate_dot_tick(base: int, attack: int, defense: int) -> int:
    """``max(1, base + attack // 4 - defense // 4)``."""
    return max(1, base + attack // 4 - defense // 4)


def dot_tick_base(stacks: int) -> int:
    """Tick base for a target carrying *stacks* (1..3) DoT stacks."""
    return DOT_TICK_BASE[stacks]


def attack_base_damage(fighter_class: FighterClass) -> int:
    return get_class_definition(fighter_class).attack_damage


def ultimate_base_damage(fighter_class: FighterClass) -> int:
    return get_class_definition(fighter_class).ultimate_damage


def apply_multiplier(damage: int, multiplier: float) -> int:
    """Scale *damage* by *multiplier*, truncate, and floor the result at 1."""
    return max(1, int(damage * multiplier))


def apply_attack_crit(damage: int) -> int:
    """Critical ATTACK: x1.5, truncated."""
    return damage * 3 // 2


def apply_ultimate_crit(damage: int) -> int:
    """Critical ULTIMATE: x1.4 as ``* 7 // 5``."""
    return damage * 7 // 5


# ---------------------------------------------------------------------------
# Chance checks
# ---------------------------------------------------------------------------

def dodge_chance(defender: Fighter) -> int:
    """Percent chance that *defender* dodges an incoming ATTACK or DOT."""
    return BASE_DODGE_CHANCE + effective_speed(defender)


def roll_dodge(defender: Fighter, rng: GameRNG) -> bool:
    """Draw one roll and return True if *defender* dodges."""
    return rng.random_pct() < dodge_chance(defender)


def roll_crit(attacker: Fighter, rng: GameRNG) -> bool:
    """Draw one roll and return True if *attacker* lands a critical hit."""
    return rng.random_pct() < attacker.crit_chance
