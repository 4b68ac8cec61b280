"""Status effect lifecycle -- buffs, damage-over-time stacks, armor sunder.

Each helper mutates one fighter and returns what happened, leaving the
narration to the resolver that called it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tbc_sim.sim.content.classes import BUFF_DURATION, DOT_DURATION, MAX_DOT_STACKS
from tbc_sim.sim.mechanics.damage import (
    calculate_dot_tick,
    dot_tick_base,
    effective_attack,
    effective_defense,
)

if TYPE_CHECKING:
    from tbc_sim.sim.core.entities import Fighter

SUNDER_AMOUNT = 2


# ---------------------------------------------------------------------------
# Buff
# ---------------------------------------------------------------------------

def activate_buff(fighter: Fighter) -> None:
    """Switch on the fighter's class buff for :data:`BUFF_DURATION` turns.

    Re-activating a running buff refreshes its duration; it never stacks.
    """
    fighter.buff_active = True
    fighter.buff_turns = BUFF_DURATION


def tick_buff(fighter: Fighter) -> bool:
    """Count down an active buff by one turn.

    Returns True on the tick the buff expires; both ``buff_active`` and
    ``buff_turns`` are cleared in that same step.  An inactive buff is left
    untouched.
    """
    if not fighter.buff_active:
        return False
    fighter.buff_turns -= 1
    if fighter.buff_turns <= 0:
        fighter.buff_active = False
        fighter.buff_turns = 0
        return True
    return False


# ---------------------------------------------------------------------------
# Damage over time
# ---------------------------------------------------------------------------

def apply_dot_stack(fighter: Fighter) -> int:
    """Add one DoT stack (capped) and reset the duration.

    Returns the new stack count.
    """
    fighter.dot_stacks = min(MAX_DOT_STACKS, fighter.dot_stacks + 1)
    fighter.dot_turns = DOT_DURATION
    return fighter.dot_stacks


def tick_dot(fighter: Fighter, source: Fighter) -> int | None:
    """Apply one DoT tick to *fighter*; *source* is the attacker for the formula.

    Returns the damage dealt, or ``None`` if the fighter carries no active
    stack.  On the tick that brings ``dot_turns`` to 0 the stacks are
    cleared, so a further tick is a no-op.
    """
    if fighter.dot_stacks <= 0 or fighter.dot_turns <= 0:
        return None
    tick = calculate_dot_tick(
        dot_tick_base(fighter.dot_stacks),
        effective_attack(source),
        effective_defense(fighter),
    )
    fighter.take_damage(tick)
    fighter.dot_turns -= 1
    if fighter.dot_turns == 0:
        fighter.dot_stacks = 0
    return tick


# ---------------------------------------------------------------------------
# Armor sunder
# ---------------------------------------------------------------------------

def sunder_armor(fighter: Fighter, amount: int = SUNDER_AMOUNT) -> None:
    """Permanently lower the fighter's defense by *amount*."""
    fighter.defense_penalty += amount
