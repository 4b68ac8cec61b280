"""Core combat mechanics for the turn-based combat engine.

Re-exports the primary functions from each mechanics module for convenience.

Usage::

    from tbc_sim.sim.mechanics import (
        effective_attack, effective_defense, effective_speed,
        calculate_damage, calculate_dot_tick, roll_dodge, roll_crit,
        activate_buff, tick_buff, apply_dot_stack, tick_dot, sunder_armor,
        settle_charge,
    )
"""

# -- damage ------------------------------------------------------------------
from .damage import (
    apply_attack_crit,
    apply_multiplier,
    apply_ultimate_crit,
    attack_base_damage,
    calculate_damage,
    calculate_dot_tick,
    dodge_chance,
    effective_attack,
    effective_defense,
    effective_speed,
    roll_crit,
    roll_dodge,
    ultimate_base_damage,
)

# -- status effects ----------------------------------------------------------
from .status_effects import (
    activate_buff,
    apply_dot_stack,
    sunder_armor,
    tick_buff,
    tick_dot,
)

# -- charge ------------------------------------------------------------------
from .charge import charge_delta, settle_charge

__all__ = [
    # damage
    "effective_attack",
    "effective_defense",
    "effective_speed",
    "calculate_damage",
    "calculate_dot_tick",
    "attack_base_damage",
    "ultimate_base_damage",
    "apply_multiplier",
    "apply_attack_crit",
    "apply_ultimate_crit",
    "dodge_chance",
    "roll_dodge",
    "roll_crit",
    # status effects
    "activate_buff",
    "tick_buff",
    "apply_dot_stack",
    "tick_dot",
    "sunder_armor",
    # charge
    "charge_delta",
    "settle_charge",
]
