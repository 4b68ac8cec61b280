"""Pydantic v2 models for class-balance baseline data.

These models define the structured output of balance analysis:
per-pairing matchup metrics, per-class aggregates and the global
baseline.  All are serializable to/from JSON.
"""

from __future__ import annotations

from pydantic import BaseModel


class MatchupMetrics(BaseModel):
    """Outcome rates for one ordered pairing (side A class vs side B class)."""

    class_a: str
    class_b: str
    matches: int
    a_wins: int
    b_wins: int
    draws: int
    a_win_rate: float
    """a_wins / matches."""
    avg_turns: float
    hp_decision_rate: float
    """Share of matches ended by the turn cap rather than a knockout."""


class ClassMetrics(BaseModel):
    """Aggregate performance of one class across every pairing it played."""

    fighter_class: str
    matches: int
    wins: int
    losses: int
    draws: int
    win_rate: float
    avg_damage_dealt: float
    move_share: dict[str, float]
    """MoveKind value -> share of this class's moves."""


class GauntletMetrics(BaseModel):
    """Gauntlet outcome rates for one player class."""

    player_class: str
    runs: int
    cleared: int
    defeated: int
    timeouts: int
    clear_rate: float
    avg_opponents_defeated: float
    avg_hp_left: float


class BalanceBaseline(BaseModel):
    """Complete balance baseline -- the top-level output."""

    version: str = "1.0"
    agent: str
    runs_per_pairing: int
    base_seed: int
    max_turns: int
    generated_at: str
    matchups: list[MatchupMetrics]
    classes: list[ClassMetrics]
    gauntlets: list[GauntletMetrics] = []
