"""Baseline generation: run sims, compute metrics, save/load JSON.

Orchestrates BatchRunner -> metric computation -> BalanceBaseline model.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from tbc_sim.balance.metrics import (
    compute_class_metrics,
    compute_gauntlet_metrics,
    compute_matchup_metrics,
)
from tbc_sim.balance.models import BalanceBaseline
from tbc_sim.sim.content.classes import FighterClass
from tbc_sim.sim.core.game_state import DEFAULT_MAX_TURNS
from tbc_sim.sim.play_agents.base import PlayAgent
from tbc_sim.sim.play_agents.heuristic_agent import HeuristicAgent
from tbc_sim.sim.runner import BatchRunner


def generate_baseline(
    num_runs: int = 1_000,
    base_seed: int = 42,
    classes: Sequence[FighterClass] = tuple(FighterClass),
    agent_class: type[PlayAgent] = HeuristicAgent,
    max_turns: int = DEFAULT_MAX_TURNS,
    gauntlet_runs: int = 0,
    parallel: bool = False,
) -> BalanceBaseline:
    """Run batch simulations and compute a full balance baseline.

    Parameters
    ----------
    num_runs:
        Matches to simulate per ordered class pairing.
    base_seed:
        Starting seed for reproducible runs.
    classes:
        Classes to pair against each other (mirrors included).
    agent_class:
        Agent driving both sides of every match and the gauntlet player.
    max_turns:
        Turn cap per match.
    gauntlet_runs:
        Gauntlet runs per class; ``0`` skips the gauntlet section.
    parallel:
        Fan matches out over a process pool.
    """
    runner = BatchRunner(agent_class=agent_class, max_turns=max_turns)
    matches = runner.run_matchups(
        num_runs, classes=classes, base_seed=base_seed, parallel=parallel,
    )

    gauntlet_results = []
    if gauntlet_runs > 0:
        for fighter_class in classes:
            gauntlet_results.extend(
                runner.run_gauntlets(gauntlet_runs, fighter_class, base_seed=base_seed)
            )

    return BalanceBaseline(
        agent=agent_class.__name__,
        runs_per_pairing=num_runs,
        base_seed=base_seed,
        max_turns=max_turns,
        generated_at=datetime.now(timezone.utc).isoformat(),
        matchups=compute_matchup_metrics(matches),
        classes=compute_class_metrics(matches),
        gauntlets=compute_gauntlet_metrics(gauntlet_results),
    )


def save_baseline(baseline: BalanceBaseline, path: Path) -> None:
    """Save a baseline to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(baseline.model_dump(), indent=2) + "\n",
        encoding="utf-8",
    )


def load_baseline(path: Path) -> BalanceBaseline:
    """Load a baseline from a JSON file."""
    data = json.loads(path.read_text(encoding="utf-8"))
    return BalanceBaseline.model_validate(data)
