"""Charge economy -- the meter that gates the ultimate.

Rules:
    - Every move grants charge by kind: ATTACK +3, DEFEND +2, DOT +1,
      BUFF +1, ULTIMATE +0.
    - The move's cost is subtracted in the same settlement step.
    - The result is clamped to ``[0, MAX_CHARGE]``.
    - Charge persists across rounds but never across matches.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tbc_sim.sim.content.classes import CHARGE_GAIN, MAX_CHARGE

if TYPE_CHECKING:
    from tbc_sim.sim.content.classes import Move
    from tbc_sim.sim.core.entities import Fighter


def charge_delta(move: Move) -> int:
    """Net charge change for using *move* (gain for its kind minus its cost)."""
    return CHARGE_GAIN[move.kind] - move.cost


def settle_charge(fighter: Fighter, move: Move) -> int:
    """Apply the charge settlement for *move* to *fighter*.

    Returns the fighter's new charge.
    """
    fighter.charge = max(0, min(MAX_CHARGE, fighter.charge + charge_delta(move)))
    return fighter.charge
