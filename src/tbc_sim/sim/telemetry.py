"""Telemetry data models for per-match and per-gauntlet statistics.

These lightweight dataclasses capture everything needed to evaluate class
balance without storing the round-by-round history:

- **MatchTelemetry**: classes, outcome, turns, HP left, damage dealt and
  moves used for one 1v1 match.
- **GauntletTelemetry**: outcome, turns, HP left and opponents defeated for
  one gauntlet run.

Both classes are plain ``dataclass`` instances (not Pydantic models) to
keep telemetry collection as cheap as possible during batch runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class MatchTelemetry:
    """Stats from a single 1v1 match.

    Attributes
    ----------
    seed:
        Seed the match RNG was forked from.
    class_a, class_b:
        Fighter classes (``FighterClass`` values) of side A and side B.
    result:
        ``"A_WINS"``, ``"B_WINS"`` or ``"DRAW"``.
    turns:
        Number of rounds played.
    decided_by_hp:
        True if the turn cap ended the match instead of a knockout.
    hp_end_a, hp_end_b:
        HP left at the end, clamped at 0.
    damage_dealt_a, damage_dealt_b:
        Total HP the side took off its opponent, DoT ticks included.
    moves_a, moves_b:
        Breakdown of moves used: ``MoveKind`` value -> count.
    """

    seed: int
    class_a: str
    class_b: str
    result: str
    turns: int
    decided_by_hp: bool
    hp_end_a: int
    hp_end_b: int
    damage_dealt_a: int = 0
    damage_dealt_b: int = 0
    moves_a: dict[str, int] = field(default_factory=dict)
    moves_b: dict[str, int] = field(default_factory=dict)


@dataclass
class GauntletTelemetry:
    """Stats from a single gauntlet run.

    Attributes
    ----------
    seed:
        Seed the run RNG was forked from.
    player_class:
        ``FighterClass`` value of the player.
    result:
        ``"CLEARED"``, ``"DEFEATED"`` or ``"TIMEOUT"``.
    turns:
        Number of rounds played.
    player_hp_start, player_hp_end:
        Scaled starting HP and HP left (clamped at 0).
    opponents_defeated:
        How many opponents fell.
    """

    seed: int
    player_class: str
    result: str
    turns: int
    player_hp_start: int
    player_hp_end: int
    opponents_defeated: int
    moves: dict[str, int] = field(default_factory=dict)
