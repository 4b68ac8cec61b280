"""Fighter class and move tables -- the fixed content of the combat engine.

Every class has the same shape: five moves (one per :class:`MoveKind`, in
index order ATTACK, DEFEND, DOT, BUFF, ULTIMATE), fixed base stats, a buff
that boosts one stat by a fixed amount, and per-class attack/ultimate damage
constants.  The kind of a move -- never its name -- drives the mechanics.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


MAX_CHARGE = 10
MAX_DOT_STACKS = 3
DOT_DURATION = 3
BUFF_DURATION = 3
CRIT_CHANCE = 12

# Tick base by current stack count (1, 2, 3 stacks).
DOT_TICK_BASE: dict[int, int] = {1: 5, 2: 8, 3: 12}


class FighterClass(str, Enum):
    """The three playable classes."""

    KNIGHT = "KNIGHT"
    """Melee: sturdy, its ultimate sunders armor permanently."""
    MAGICIAN = "MAGICIAN"
    """Caster: fast, its ultimate ignores half of the target's defense."""
    ALCHEMIST = "ALCHEMIST"
    """Hybrid: its ultimate re-splits the pooled HP of both fighters."""


class MoveKind(str, Enum):
    """The five move categories.  Kinds drive every interaction rule."""

    ATTACK = "ATTACK"
    DEFEND = "DEFEND"
    DOT = "DOT"
    BUFF = "BUFF"
    ULTIMATE = "ULTIMATE"


class BuffStat(str, Enum):
    """Which stat a class's buff boosts."""

    DEFENSE = "DEFENSE"
    SPEED = "SPEED"
    ATTACK = "ATTACK"

    @property
    def short_label(self) -> str:
        return _BUFF_STAT_LABELS[self]


_BUFF_STAT_LABELS = {
    BuffStat.DEFENSE: "DEF",
    BuffStat.SPEED: "SPD",
    BuffStat.ATTACK: "ATK",
}

MOVE_COST: dict[MoveKind, int] = {
    MoveKind.ATTACK: 0,
    MoveKind.DEFEND: 0,
    MoveKind.DOT: 3,
    MoveKind.BUFF: 2,
    MoveKind.ULTIMATE: MAX_CHARGE,
}

CHARGE_GAIN: dict[MoveKind, int] = {
    MoveKind.ATTACK: 3,
    MoveKind.DEFEND: 2,
    MoveKind.DOT: 1,
    MoveKind.BUFF: 1,
    MoveKind.ULTIMATE: 0,
}

MOVE_ORDER: tuple[MoveKind, ...] = (
    MoveKind.ATTACK,
    MoveKind.DEFEND,
    MoveKind.DOT,
    MoveKind.BUFF,
    MoveKind.ULTIMATE,
)


class Move(BaseModel):
    """A named, per-class action."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: MoveKind
    cost: int


class ClassDefinition(BaseModel):
    """Creation-time constants for one fighter class."""

    model_config = ConfigDict(frozen=True)

    fighter_class: FighterClass
    max_hp: int
    attack: int
    defense: int
    speed: int
    buff_stat: BuffStat
    buff_amount: int = 4
    attack_damage: int
    """Base damage of the class's ATTACK move."""
    ultimate_damage: int
    """Base damage of the class's ULTIMATE move."""
    move_names: tuple[str, str, str, str, str]
    """Display names in :data:`MOVE_ORDER`."""

    @property
    def moves(self) -> tuple[Move, ...]:
        return tuple(
            Move(name=name, kind=kind, cost=MOVE_COST[kind])
            for name, kind in zip(self.move_names, MOVE_ORDER)
        )


CLASS_DEFINITIONS: dict[FighterClass, ClassDefinition] = {
    FighterClass.KNIGHT: ClassDefinition(
        fighter_class=FighterClass.KNIGHT,
        max_hp=115, attack=10, defense=12, speed=9,
        buff_stat=BuffStat.DEFENSE,
        attack_damage=15, ultimate_damage=28,
        move_names=(
            "Steady Blade",
            "Aegis Wall",
            "Mortal Wounds",
            "Indomitable Spirit",
            "Executioner's Verdict",
        ),
    ),
    FighterClass.MAGICIAN: ClassDefinition(
        fighter_class=FighterClass.MAGICIAN,
        max_hp=105, attack=10, defense=10, speed=12,
        buff_stat=BuffStat.SPEED,
        attack_damage=13, ultimate_damage=26,
        move_names=(
            "Elemental Spark",
            "Mana Barrier",
            "Flesh Embers",
            "Runic Overclock",
            "Arcane Overload",
        ),
    ),
    FighterClass.ALCHEMIST: ClassDefinition(
        fighter_class=FighterClass.ALCHEMIST,
        max_hp=110, attack=12, defense=10, speed=10,
        buff_stat=BuffStat.ATTACK,
        attack_damage=14, ultimate_damage=22,
        move_names=(
            "Primed Flask",
            "Pact of Attrition",
            "Vial of Corrosion",
            "Adrenal Mixture",
            "Grand Transmutation",
        ),
    ),
}

_MOVE_SETS: dict[FighterClass, tuple[Move, ...]] = {
    fc: defn.moves for fc, defn in CLASS_DEFINITIONS.items()
}


def get_class_definition(fighter_class: FighterClass) -> ClassDefinition:
    """Return the creation-time constants for *fighter_class*."""
    return CLASS_DEFINITIONS[fighter_class]


def get_move_set(fighter_class: FighterClass) -> tuple[Move, ...]:
    """Return the five moves of *fighter_class* in :data:`MOVE_ORDER`."""
    return _MOVE_SETS[fighter_class]


def move_index(kind: MoveKind) -> int:
    """Return the move-table index of *kind* (the same for every class)."""
    return MOVE_ORDER.index(kind)
