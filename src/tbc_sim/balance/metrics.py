"""Pure metric computation functions for balance analysis.

All functions take lists of telemetry records and return structured
metrics.  No side effects, no I/O.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import TYPE_CHECKING

from tbc_sim.balance.models import ClassMetrics, GauntletMetrics, MatchupMetrics

if TYPE_CHECKING:
    from tbc_sim.sim.telemetry import GauntletTelemetry, MatchTelemetry


def compute_matchup_metrics(matches: list[MatchTelemetry]) -> list[MatchupMetrics]:
    """Group matches by ordered class pairing and compute outcome rates.

    Pairings are returned sorted by ``(class_a, class_b)``.
    """
    groups: dict[tuple[str, str], list[MatchTelemetry]] = defaultdict(list)
    for m in matches:
        groups[(m.class_a, m.class_b)].append(m)

    results: list[MatchupMetrics] = []
    for (class_a, class_b), group in sorted(groups.items()):
        total = len(group)
        a_wins = sum(1 for m in group if m.result == "A_WINS")
        b_wins = sum(1 for m in group if m.result == "B_WINS")
        results.append(MatchupMetrics(
            class_a=class_a,
            class_b=class_b,
            matches=total,
            a_wins=a_wins,
            b_wins=b_wins,
            draws=total - a_wins - b_wins,
            a_win_rate=a_wins / total,
            avg_turns=sum(m.turns for m in group) / total,
            hp_decision_rate=sum(1 for m in group if m.decided_by_hp) / total,
        ))
    return results


def compute_class_metrics(matches: list[MatchTelemetry]) -> list[ClassMetrics]:
    """Aggregate each class's results over both sides of every match.

    Mirror matches count once for each side, so a mirror always adds one
    win and one loss (or two draws) to that class.
    """
    played: Counter[str] = Counter()
    wins: Counter[str] = Counter()
    losses: Counter[str] = Counter()
    damage: Counter[str] = Counter()
    moves: dict[str, Counter[str]] = defaultdict(Counter)

    for m in matches:
        sides = (
            (m.class_a, "A_WINS", "B_WINS", m.damage_dealt_a, m.moves_a),
            (m.class_b, "B_WINS", "A_WINS", m.damage_dealt_b, m.moves_b),
        )
        for fighter_class, win, loss, dealt, used in sides:
            played[fighter_class] += 1
            damage[fighter_class] += dealt
            moves[fighter_class].update(used)
            if m.result == win:
                wins[fighter_class] += 1
            elif m.result == loss:
                losses[fighter_class] += 1

    results: list[ClassMetrics] = []
    for fighter_class in sorted(played):
        total = played[fighter_class]
        used = moves[fighter_class]
        total_moves = sum(used.values())
        results.append(ClassMetrics(
            fighter_class=fighter_class,
            matches=total,
            wins=wins[fighter_class],
            losses=losses[fighter_class],
            draws=total - wins[fighter_class] - losses[fighter_class],
            win_rate=wins[fighter_class] / total,
            avg_damage_dealt=damage[fighter_class] / total,
            move_share={
                kind: count / total_moves for kind, count in sorted(used.items())
            } if total_moves else {},
        ))
    return results


def compute_gauntlet_metrics(runs: list[GauntletTelemetry]) -> list[GauntletMetrics]:
    """Group gauntlet runs by player class and compute clear rates."""
    groups: dict[str, list[GauntletTelemetry]] = defaultdict(list)
    for r in runs:
        groups[r.player_class].append(r)

    results: list[GauntletMetrics] = []
    for player_class, group in sorted(groups.items()):
        total = len(group)
        cleared = sum(1 for r in group if r.result == "CLEARED")
        defeated = sum(1 for r in group if r.result == "DEFEATED")
        results.append(GauntletMetrics(
            player_class=player_class,
            runs=total,
            cleared=cleared,
            defeated=defeated,
            timeouts=total - cleared - defeated,
            clear_rate=cleared / total,
            avg_opponents_defeated=sum(r.opponents_defeated for r in group) / total,
            avg_hp_left=sum(r.player_hp_end for r in group) / total,
        ))
    return results
