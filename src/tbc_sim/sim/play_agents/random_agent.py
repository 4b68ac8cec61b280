"""Random action agent -- picks affordable moves and targets uniformly at random.

The ``RandomAgent`` is the simplest possible play agent.  It is the
baseline for batch simulation runs: it lets us verify that the full match
loop works end-to-end and gives a floor to compare the heuristic policy
against.

Behaviour:
    - Picks uniformly among the moves the fighter can currently afford.
    - In a gauntlet it picks a random living opponent, and keeps the
      current target with probability ``stick_chance`` while it lives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tbc_sim.sim.core.entities import affordable_moves
from tbc_sim.sim.core.rng import GameRNG
from tbc_sim.sim.play_agents.base import PlayAgent

if TYPE_CHECKING:
    from tbc_sim.sim.core.entities import Fighter


class RandomAgent(PlayAgent):
    """Agent that plays a random affordable move each round.

    Parameters
    ----------
    rng:
        Seeded RNG for deterministic randomness.  If ``None``, a default
        ``GameRNG(seed=0)`` is created.
    stick_chance:
        Percent chance (0 -- 100) of keeping the current gauntlet target
        while it is still alive.  Default is 50.
    """

    def __init__(self, rng: GameRNG | None = None, stick_chance: int = 50) -> None:
        self._rng = rng or GameRNG(seed=0)
        self._stick_chance = stick_chance

    def choose_move(self, me: Fighter, opponent: Fighter) -> int:
        """ATTACK and DEFEND are free, so the choice is never empty."""
        return self._rng.random_choice(affordable_moves(me))

    def choose_target(self, opponents: list[Fighter], current: int | None) -> int | None:
        living = [i for i, f in enumerate(opponents) if not f.is_dead]
        if not living:
            return None
        if current in living and self._rng.random_pct() < self._stick_chance:
            return current
        return self._rng.random_choice(living)
