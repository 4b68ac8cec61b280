"""Opponent decision policy -- a priority waterfall over move kinds.

Rules are evaluated in order and the first match wins.  Each rule that
needs luck draws its own fresh roll, and only after its non-random
conditions hold; a failed roll falls through to the next rule:

1. Full charge, 65 %              -> ULTIMATE
2. HP below 25 %, 60 %            -> DEFEND
3. Opponent buffed, one roll r:
   r < 45                         -> ATTACK
   r < 70 with charge >= 3        -> DOT
4. Opponent below max DoT stacks,
   charge >= 3, 35 %              -> DOT
5. Own buff down, charge >= 2,
   HP above 40 %, 40 %            -> BUFF
6. Charge in [7, 10), 25 %        -> DEFEND
7. Otherwise                      -> ATTACK

Every charge-gated kind checks its cost before it can be picked (ULTIMATE
needs a full meter, DOT >= 3, BUFF >= 2), so the policy never returns a move
its fighter cannot afford.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tbc_sim.sim.content.classes import MAX_CHARGE, MAX_DOT_STACKS, MOVE_COST, MoveKind, move_index
from tbc_sim.sim.core.rng import GameRNG
from tbc_sim.sim.play_agents.base import PlayAgent

if TYPE_CHECKING:
    from tbc_sim.sim.core.entities import Fighter

logger = logging.getLogger(__name__)

_ULTIMATE_CHANCE = 65
_LOW_HP_PERCENT = 25
_LOW_HP_DEFEND_CHANCE = 60
_PUNISH_BUFF_ATTACK_BELOW = 45
_PUNISH_BUFF_DOT_BELOW = 70
_DOT_CHANCE = 35
_BUFF_MIN_HP_PERCENT = 40
_BUFF_CHANCE = 40
_BANK_CHARGE_FLOOR = 7
_BANK_DEFEND_CHANCE = 25


def choose_ai_kind(me: Fighter, opponent: Fighter, rng: GameRNG) -> MoveKind:
    """Run the priority waterfall and return the chosen move kind."""
    if me.charge == MAX_CHARGE and rng.random_pct() < _ULTIMATE_CHANCE:
        return MoveKind.ULTIMATE

    hp_percent = me.hp_percent
    if hp_percent < _LOW_HP_PERCENT and rng.random_pct() < _LOW_HP_DEFEND_CHANCE:
        return MoveKind.DEFEND

    if opponent.buff_active:
        r = rng.random_pct()
        if r < _PUNISH_BUFF_ATTACK_BELOW:
            return MoveKind.ATTACK
        if r < _PUNISH_BUFF_DOT_BELOW and me.charge >= MOVE_COST[MoveKind.DOT]:
            return MoveKind.DOT

    if (
        opponent.dot_stacks < MAX_DOT_STACKS
        and me.charge >= MOVE_COST[MoveKind.DOT]
        and rng.random_pct() < _DOT_CHANCE
    ):
        return MoveKind.DOT

    if (
        not me.buff_active
        and me.charge >= MOVE_COST[MoveKind.BUFF]
        and hp_percent > _BUFF_MIN_HP_PERCENT
        and rng.random_pct() < _BUFF_CHANCE
    ):
        return MoveKind.BUFF

    if _BANK_CHARGE_FLOOR <= me.charge < MAX_CHARGE and rng.random_pct() < _BANK_DEFEND_CHANCE:
        return MoveKind.DEFEND

    return MoveKind.ATTACK


def choose_ai_move(me: Fighter, opponent: Fighter, rng: GameRNG) -> int:
    """Pick the move index *me* uses against *opponent* this round."""
    kind = choose_ai_kind(me, opponent, rng)
    logger.debug("%s (charge %d, %d%% HP) picks %s", me.name, me.charge, me.hp_percent, kind.value)
    return move_index(kind)


class HeuristicAgent(PlayAgent):
    """Agent that plays the opponent decision policy.

    Parameters
    ----------
    rng:
        Seeded RNG for the policy's rolls.  If ``None``, a default
        ``GameRNG(seed=0)`` is created.
    """

    def __init__(self, rng: GameRNG | None = None) -> None:
        self._rng = rng or GameRNG(seed=0)

    def choose_move(self, me: Fighter, opponent: Fighter) -> int:
        return choose_ai_move(me, opponent, self._rng)

    def choose_target(self, opponents: list[Fighter], current: int | None) -> int | None:
        """Focus the weakest living opponent; ties go to the lower index."""
        living = [i for i, f in enumerate(opponents) if not f.is_dead]
        if not living:
            return None
        return min(living, key=lambda i: opponents[i].hp)
