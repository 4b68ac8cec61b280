"""Report generation for balance baselines.

Produces a human-readable text summary for terminal/markdown output.
"""

from __future__ import annotations

from tbc_sim.balance.models import BalanceBaseline


def generate_text_report(baseline: BalanceBaseline) -> str:
    """Generate a human-readable summary of the baseline."""
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append(f"Class Balance Report - {baseline.agent} agent")
    lines.append(
        f"Runs per pairing: {baseline.runs_per_pairing:,} | "
        f"Turn cap: {baseline.max_turns} | Generated: {baseline.generated_at}"
    )
    lines.append("=" * 60)

    # Class overview, strongest first
    lines.append("")
    lines.append("## Classes")
    for c in sorted(baseline.classes, key=lambda c: c.win_rate, reverse=True):
        lines.append(
            f"  {c.fighter_class:10s}  win={c.win_rate:.1%}"
            f"  ({c.wins}W/{c.losses}L/{c.draws}D)"
            f"  avg_dmg={c.avg_damage_dealt:.1f}"
        )
        if c.move_share:
            share = "  ".join(f"{k}={v:.0%}" for k, v in c.move_share.items())
            lines.append(f"    moves: {share}")

    lines.append("")
    lines.append("## Matchups (side A vs side B)")
    for m in baseline.matchups:
        lines.append(
            f"  {m.class_a:10s} vs {m.class_b:10s}  a_win={m.a_win_rate:.1%}"
            f"  draws={m.draws}  turns={m.avg_turns:.1f}"
            f"  by_hp={m.hp_decision_rate:.1%}"
        )

    if baseline.gauntlets:
        lines.append("")
        lines.append("## Gauntlet")
        for g in baseline.gauntlets:
            lines.append(
                f"  {g.player_class:10s}  clear={g.clear_rate:.1%}"
                f"  ({g.cleared}/{g.runs})  timeouts={g.timeouts}"
                f"  avg_kills={g.avg_opponents_defeated:.2f}"
                f"  avg_hp_left={g.avg_hp_left:.0f}"
            )

    lines.append("")
    return "\n".join(lines)
