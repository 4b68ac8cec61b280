"""Base class for agents that pick moves in a match.

All play agents must subclass ``PlayAgent`` and implement the two abstract
methods.  The match runner calls these at decision points; both sides of a
1v1 match and the player side of a gauntlet are driven by an agent.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tbc_sim.sim.core.entities import Fighter


class PlayAgent(ABC):
    """Base class for move-choosing agents."""

    @abstractmethod
    def choose_move(self, me: Fighter, opponent: Fighter) -> int:
        """Choose the move index (0..4) *me* uses this round.

        Parameters
        ----------
        me:
            The acting fighter.
        opponent:
            The fighter being faced (in a gauntlet, the current target).

        Returns
        -------
        int
            Index into ``me.moves``.  Implementations must only return moves
            whose cost ``me`` can currently pay; the resolvers do not check.
        """

    @abstractmethod
    def choose_target(self, opponents: list[Fighter], current: int | None) -> int | None:
        """Choose which gauntlet opponent to act on.

        Parameters
        ----------
        opponents:
            All opponents in index order, dead ones included.
        current:
            The currently selected target index, or ``None``.

        Returns
        -------
        int | None
            Index of a living opponent, or ``None`` if none is alive.
        """
