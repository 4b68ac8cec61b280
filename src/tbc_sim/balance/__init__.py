"""Balance analysis: class matchup baselines, metrics, and reports."""

from tbc_sim.balance.baselines import generate_baseline, load_baseline, save_baseline
from tbc_sim.balance.metrics import (
    compute_class_metrics,
    compute_gauntlet_metrics,
    compute_matchup_metrics,
)
from tbc_sim.balance.models import (
    BalanceBaseline,
    ClassMetrics,
    GauntletMetrics,
    MatchupMetrics,
)
from tbc_sim.balance.report import generate_text_report

__all__ = [
    "BalanceBaseline",
    "ClassMetrics",
    "GauntletMetrics",
    "MatchupMetrics",
    "compute_class_metrics",
    "compute_gauntlet_metrics",
    "compute_matchup_metrics",
    "generate_baseline",
    "generate_text_report",
    "load_baseline",
    "save_baseline",
]
