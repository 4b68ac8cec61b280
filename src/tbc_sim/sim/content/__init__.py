"""Static content: fighter classes, move tables and rule constants."""

from tbc_sim.sim.content.classes import (
    CHARGE_GAIN,
    CLASS_DEFINITIONS,
    MAX_CHARGE,
    MAX_DOT_STACKS,
    MOVE_COST,
    MOVE_ORDER,
    BuffStat,
    ClassDefinition,
    FighterClass,
    Move,
    MoveKind,
    get_class_definition,
    get_move_set,
    move_index,
)

__all__ = [
    "MAX_CHARGE",
    "MAX_DOT_STACKS",
    "MOVE_COST",
    "CHARGE_GAIN",
    "MOVE_ORDER",
    "CLASS_DEFINITIONS",
    "FighterClass",
    "MoveKind",
    "BuffStat",
    "Move",
    "ClassDefinition",
    "get_class_definition",
    "get_move_set",
    "move_index",
]
