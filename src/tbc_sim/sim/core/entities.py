"""Fighter model for the turn-based combat engine.

All data classes use Pydantic v2 BaseModel for validation and
serialization.  A ``Fighter`` is owned by exactly one match state and is
mutated only by the resolvers while a round is being resolved.
"""

from __future__ import annotations

from pydantic import BaseModel

from tbc_sim.sim.content.classes import (
    CRIT_CHANCE,
    BuffStat,
    FighterClass,
    Move,
    get_class_definition,
    get_move_set,
)


# ---------------------------------------------------------------------------
# Fighter
# ---------------------------------------------------------------------------

class Fighter(BaseModel):
    """One combatant: vitals, fixed base stats, charge and status effects."""

    name: str
    fighter_class: FighterClass
    hp: int
    """Signed: may drop below 0 within a round before the caller checks it."""
    max_hp: int

    base_attack: int
    base_defense: int
    base_speed: int
    crit_chance: int = CRIT_CHANCE
    """Percent chance (0--100) of a critical hit."""

    charge: int = 0
    """Resource gating the ultimate, always within ``[0, MAX_CHARGE]``."""

    buff_active: bool = False
    buff_turns: int = 0
    buff_stat: BuffStat
    buff_amount: int = 4

    dot_stacks: int = 0
    """Damage-over-time stacks, within ``[0, MAX_DOT_STACKS]``."""
    dot_turns: int = 0

    defense_penalty: int = 0
    """Permanent armor sunder.  Only ever grows while the fighter exists."""

    # -- HP queries ----------------------------------------------------------

    @property
    def is_dead(self) -> bool:
        return self.hp <= 0

    @property
    def display_hp(self) -> int:
        """HP clamped at 0, as shown to the player and used for win checks."""
        return max(0, self.hp)

    @property
    def hp_percent(self) -> int:
        """Integer HP ratio in percent (``hp * 100 // max_hp``)."""
        return self.hp * 100 // self.max_hp

    # -- moves ---------------------------------------------------------------

    @property
    def moves(self) -> tuple[Move, ...]:
        return get_move_set(self.fighter_class)

    # -- damage / heal -------------------------------------------------------

    def take_damage(self, amount: int) -> None:
        """Subtract *amount* from HP.  HP is allowed to go negative."""
        self.hp -= amount

    def heal(self, amount: int) -> None:
        """Heal *amount* HP, capped at ``max_hp``."""
        if amount <= 0:
            return
        self.hp = min(self.max_hp, self.hp + amount)


# ---------------------------------------------------------------------------
# Construction and affordability
# ---------------------------------------------------------------------------

def create_fighter(name: str, fighter_class: FighterClass) -> Fighter:
    """Build a fresh fighter of *fighter_class*.

    Every mutable field starts at zero; stats, HP, crit chance and the buff
    are a pure function of the class.
    """
    defn = get_class_definition(fighter_class)
    return Fighter(
        name=name,
        fighter_class=fighter_class,
        hp=defn.max_hp,
        max_hp=defn.max_hp,
        base_attack=defn.attack,
        base_defense=defn.defense,
        base_speed=defn.speed,
        buff_stat=defn.buff_stat,
        buff_amount=defn.buff_amount,
    )


def can_afford(fighter: Fighter, index: int) -> bool:
    """Return True if *fighter* has the charge to use move *index*."""
    return fighter.charge >= fighter.moves[index].cost


def affordable_moves(fighter: Fighter) -> list[int]:
    """Return the indices of every move *fighter* can currently pay for.

    The resolvers trust their callers on affordability; menus and agents
    filter with this before submitting a move.
    """
    return [i for i, move in enumerate(fighter.moves) if fighter.charge >= move.cost]
