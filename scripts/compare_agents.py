"""Compare HeuristicAgent vs RandomAgent win rates for every class.

Each class is played by a HeuristicAgent on side A against a RandomAgent
on side B (and the other way round), over every opposing class.

Usage:
    python scripts/compare_agents.py [--runs N]
"""

from __future__ import annotations

import argparse
import time

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from tbc_sim.sim.content.classes import FighterClass
from tbc_sim.sim.core.game_state import new_match
from tbc_sim.sim.core.rng import GameRNG
from tbc_sim.sim.play_agents.base import PlayAgent
from tbc_sim.sim.play_agents.heuristic_agent import HeuristicAgent
from tbc_sim.sim.play_agents.random_agent import RandomAgent
from tbc_sim.sim.runner import BatchRunner, MatchSimulator
from tbc_sim.sim.telemetry import MatchTelemetry

COLORS = {"HeuristicAgent": "#2ecc71", "RandomAgent": "#e74c3c"}


def _play(
    seed: int,
    class_a: FighterClass,
    class_b: FighterClass,
    agent_a: type[PlayAgent],
    agent_b: type[PlayAgent],
) -> MatchTelemetry:
    rng = GameRNG(seed)
    state = new_match("A", class_a, "B", class_b)
    sim = MatchSimulator(agent_a(rng=rng.fork("agent_a")), agent_b(rng=rng.fork("agent_b")))  # type: ignore[call-arg]
    return sim.run_match(state, rng.fork("match"), seed=seed)


def run_comparison(n_runs: int = 300) -> None:
    classes = list(FighterClass)
    heuristic_wins = np.zeros((len(classes), len(classes)))
    draws = 0
    total = 0

    t0 = time.time()
    for i, class_h in enumerate(classes):
        for j, class_r in enumerate(classes):
            for seed in range(n_runs):
                # Heuristic on side A, then on side B with the same seed.
                t = _play(seed, class_h, class_r, HeuristicAgent, RandomAgent)
                heuristic_wins[i, j] += t.result == "A_WINS"
                draws += t.result == "DRAW"
                t = _play(seed, class_r, class_h, RandomAgent, HeuristicAgent)
                heuristic_wins[i, j] += t.result == "B_WINS"
                draws += t.result == "DRAW"
                total += 2
    elapsed = time.time() - t0
    win_rate = heuristic_wins / (2 * n_runs) * 100

    print(f"Played {total:,} matches in {elapsed:.1f}s ({draws} draws)")
    print(f"Heuristic win rate overall: {win_rate.mean():.1f}%")
    for i, c in enumerate(classes):
        print(f"  {c.value:10s} {win_rate[i].mean():5.1f}%")

    # Baseline: each agent against itself, for per-class win rates.
    self_play = {}
    for label, agent_class in [("RandomAgent", RandomAgent), ("HeuristicAgent", HeuristicAgent)]:
        telemetry = BatchRunner(agent_class=agent_class).run_matchups(n_runs, base_seed=0)
        rates = []
        for c in classes:
            played = [t for t in telemetry if c.value in (t.class_a, t.class_b)]
            wins = sum(
                (t.class_a == c.value and t.result == "A_WINS")
                + (t.class_b == c.value and t.result == "B_WINS")
                for t in played
            )
            sides = sum((t.class_a == c.value) + (t.class_b == c.value) for t in played)
            rates.append(wins / sides * 100)
        self_play[label] = {
            "rates": rates,
            "turns": [t.turns for t in telemetry],
        }

    generate_charts(classes, win_rate, self_play, n_runs)


def generate_charts(
    classes: list[FighterClass],
    win_rate: np.ndarray,
    self_play: dict,
    n_runs: int,
) -> None:
    fig, axes = plt.subplots(1, 3, figsize=(18, 6))
    fig.suptitle(f"HeuristicAgent vs RandomAgent - {n_runs} runs per pairing",
                 fontsize=16, fontweight="bold")
    names = [c.value.title() for c in classes]

    # --- Chart 1: Heuristic win rate heat map ---
    ax = axes[0]
    im = ax.imshow(win_rate, cmap="RdYlGn", vmin=0, vmax=100)
    ax.set_xticks(range(len(names)), labels=names)
    ax.set_yticks(range(len(names)), labels=names)
    ax.set_xlabel("RandomAgent class")
    ax.set_ylabel("HeuristicAgent class")
    ax.set_title("Heuristic Win Rate (%)")
    for i in range(len(names)):
        for j in range(len(names)):
            ax.text(j, i, f"{win_rate[i, j]:.0f}", ha="center", va="center", fontweight="bold")
    fig.colorbar(im, ax=ax, fraction=0.046)

    # --- Chart 2: Self-play class win rates ---
    ax = axes[1]
    x = np.arange(len(names))
    width = 0.35
    for k, (label, data) in enumerate(self_play.items()):
        ax.bar(x + (k - 0.5) * width, data["rates"], width, label=label,
               color=COLORS[label], edgecolor="black", linewidth=0.5)
    ax.axhline(50, color="gray", linestyle="--", linewidth=0.8)
    ax.set_xticks(x, labels=names)
    ax.set_ylabel("Win Rate (%)")
    ax.set_title("Self-play Class Win Rate")
    ax.legend()

    # --- Chart 3: Match length distribution ---
    ax = axes[2]
    max_turns = max(max(d["turns"]) for d in self_play.values())
    bins = np.arange(0.5, max_turns + 1.5, 1)
    for label, data in self_play.items():
        ax.hist(data["turns"], bins=bins, alpha=0.6,
                label=f'{label} (avg={np.mean(data["turns"]):.1f})',
                color=COLORS[label], edgecolor="black", linewidth=0.3)
    ax.set_xlabel("Turns")
    ax.set_ylabel("Count")
    ax.set_title("Match Length (self-play)")
    ax.legend()

    plt.tight_layout()
    out_path = "agent_comparison.png"
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    print(f"\nChart saved to {out_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--runs", type=int, default=300, help="Runs per class pairing")
    args = parser.parse_args()
    run_comparison(args.runs)
