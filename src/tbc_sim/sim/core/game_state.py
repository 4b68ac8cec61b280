"""Match state for 1v1 duels and the 1v3 gauntlet.

Houses the mutable state a match owns (its fighters, the shared log and
the turn counter) plus the outcome rules the caller applies after each
resolved round:

* 1v1: a knockout ends the match (both down is a draw); at the turn cap the
  higher HP wins, equal HP is a draw.
* Gauntlet: the player falling is a loss, clearing all opponents a win,
  and reaching the turn cap leaves the gauntlet unfinished.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from tbc_sim.sim.content.classes import FighterClass
from tbc_sim.sim.core.battle_log import BattleLog
from tbc_sim.sim.core.entities import Fighter, create_fighter

DEFAULT_MAX_TURNS = 25


class MatchResult(str, Enum):
    A_WINS = "A_WINS"
    B_WINS = "B_WINS"
    DRAW = "DRAW"


class GauntletResult(str, Enum):
    CLEARED = "CLEARED"
    DEFEATED = "DEFEATED"
    TIMEOUT = "TIMEOUT"


def _check_max_turns(value: int) -> int:
    if value < 1:
        raise ValueError(f"max_turns must be >= 1, got {value}")
    return value


# ---------------------------------------------------------------------------
# Target helpers
# ---------------------------------------------------------------------------

def first_living_opponent(opponents: list[Fighter]) -> int | None:
    """Index of the first opponent still standing, or ``None``."""
    for i, opponent in enumerate(opponents):
        if not opponent.is_dead:
            return i
    return None


def all_opponents_dead(opponents: list[Fighter]) -> bool:
    return all(opponent.is_dead for opponent in opponents)


def cycle_target(opponents: list[Fighter], current: int, step: int = 1) -> int:
    """Move the target cursor by *step* (+1 right, -1 left), skipping the dead.

    Wraps around the opponent list.  If no other opponent is alive the
    cursor stays on *current*.
    """
    count = len(opponents)
    target = current
    for _ in range(count):
        target = (target + step) % count
        if not opponents[target].is_dead:
            return target
    return current


# ---------------------------------------------------------------------------
# MatchState
# ---------------------------------------------------------------------------

class MatchState(BaseModel):
    """Full mutable state of a 1v1 match."""

    model_config = {"arbitrary_types_allowed": True}

    fighter_a: Fighter
    fighter_b: Fighter
    log: BattleLog = Field(default_factory=BattleLog, exclude=True)
    """Narration for the current round.  Excluded from serialization."""

    turn: int = 1
    max_turns: int = DEFAULT_MAX_TURNS

    is_over: bool = False
    result: MatchResult | None = None
    decided_by_hp: bool = False
    """True when the turn cap, not a knockout, ended the match."""
    result_message: str = ""

    @field_validator("max_turns")
    @classmethod
    def validate_max_turns(cls, value: int) -> int:
        return _check_max_turns(value)

    # -- queries -------------------------------------------------------------

    @property
    def winner(self) -> Fighter | None:
        if self.result == MatchResult.A_WINS:
            return self.fighter_a
        if self.result == MatchResult.B_WINS:
            return self.fighter_b
        return None

    # -- lifecycle -----------------------------------------------------------

    def begin_round(self) -> None:
        """Clear the log so the round's narration starts fresh."""
        self.log.clear()

    def check_outcome(self) -> bool:
        """Apply the outcome rules after a resolved round.

        Returns True if the match is over.  Otherwise the turn counter
        advances.
        """
        a, b = self.fighter_a, self.fighter_b
        if a.is_dead or b.is_dead:
            if a.is_dead and b.is_dead:
                self._finish(MatchResult.DRAW, "DRAW! Both fell!")
            elif a.is_dead:
                self._finish(MatchResult.B_WINS, f"{b.name} WINS!")
            else:
                self._finish(MatchResult.A_WINS, f"{a.name} WINS!")
            return True

        if self.turn >= self.max_turns:
            self.decided_by_hp = True
            if a.hp > b.hp:
                self._finish(MatchResult.A_WINS, f"{a.name} WINS by HP!")
            elif b.hp > a.hp:
                self._finish(MatchResult.B_WINS, f"{b.name} WINS by HP!")
            else:
                self._finish(MatchResult.DRAW, "DRAW! Equal HP!")
            return True

        self.turn += 1
        return False

    def rematch(self) -> MatchState:
        """Fresh match with the same names and classes; nothing else carries over."""
        return new_match(
            self.fighter_a.name, self.fighter_a.fighter_class,
            self.fighter_b.name, self.fighter_b.fighter_class,
            max_turns=self.max_turns,
        )

    def _finish(self, result: MatchResult, message: str) -> None:
        self.is_over = True
        self.result = result
        self.result_message = message


def new_match(
    name_a: str,
    class_a: FighterClass,
    name_b: str,
    class_b: FighterClass,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> MatchState:
    """Create both fighters fresh and wrap them in a new match."""
    return MatchState(
        fighter_a=create_fighter(name_a, class_a),
        fighter_b=create_fighter(name_b, class_b),
        max_turns=max_turns,
    )


# ---------------------------------------------------------------------------
# GauntletState
# ---------------------------------------------------------------------------

class GauntletState(BaseModel):
    """Full mutable state of a 1v3 gauntlet run."""

    model_config = {"arbitrary_types_allowed": True}

    player: Fighter
    opponents: list[Fighter]
    log: BattleLog = Field(default_factory=BattleLog, exclude=True)
    turn: int = 1
    max_turns: int = DEFAULT_MAX_TURNS
    selected_target: int = 0

    is_over: bool = False
    result: GauntletResult | None = None
    result_message: str = ""

    @field_validator("max_turns")
    @classmethod
    def validate_max_turns(cls, value: int) -> int:
        return _check_max_turns(value)

    # -- queries -------------------------------------------------------------

    @property
    def living_opponents(self) -> list[Fighter]:
        return [o for o in self.opponents if not o.is_dead]

    @property
    def opponents_defeated(self) -> int:
        return sum(1 for o in self.opponents if o.is_dead)

    # -- lifecycle -----------------------------------------------------------

    def begin_round(self) -> None:
        self.log.clear()

    def check_outcome(self) -> bool:
        """Apply the gauntlet outcome rules after a resolved round.

        Returns True if the run is over.  Otherwise the turn advances and,
        if the selected target has fallen or is out of range, the cursor
        moves to the first living opponent.
        """
        if self.player.is_dead:
            self._finish(GauntletResult.DEFEATED, "You fell... the Gauntlet wins.")
            return True
        if all_opponents_dead(self.opponents):
            self._finish(GauntletResult.CLEARED, "GAUNTLET CLEARED! Champion stands alone!")
            return True
        if self.turn >= self.max_turns:
            self._finish(GauntletResult.TIMEOUT, "Time expired. The Gauntlet is unfinished.")
            return True

        self.turn += 1
        first = first_living_opponent(self.opponents)
        if first is not None and not self._target_alive():
            self.selected_target = first
        return False

    def _target_alive(self) -> bool:
        return (
            0 <= self.selected_target < len(self.opponents)
            and not self.opponents[self.selected_target].is_dead
        )

    def _finish(self, result: GauntletResult, message: str) -> None:
        self.is_over = True
        self.result = result
        self.result_message = message
