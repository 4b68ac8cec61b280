"""Simulate every class pairing and save a balance baseline.

Usage:
    python scripts/simulate_matchups.py [--runs 1000] [--output data/baselines/]
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from tbc_sim.balance.baselines import generate_baseline, save_baseline
from tbc_sim.balance.report import generate_text_report
from tbc_sim.sim.core.game_state import DEFAULT_MAX_TURNS
from tbc_sim.sim.play_agents.heuristic_agent import HeuristicAgent
from tbc_sim.sim.play_agents.random_agent import RandomAgent

AGENTS = {"heuristic": HeuristicAgent, "random": RandomAgent}


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate class balance baselines")
    parser.add_argument("--runs", type=int, default=1_000, help="Matches per class pairing")
    parser.add_argument("--gauntlet-runs", type=int, default=200, help="Gauntlet runs per class")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--max-turns", type=int, default=DEFAULT_MAX_TURNS, help="Turn cap")
    parser.add_argument("--agent", choices=sorted(AGENTS), default="heuristic")
    parser.add_argument("--output", type=str, default="data/baselines/", help="Output directory")
    parser.add_argument("--parallel", action="store_true", help="Use a process pool")
    parser.add_argument("--verbose", action="store_true", help="Enable INFO logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    print(f"Simulating {args.runs:,} matches per pairing with the {args.agent} agent...")
    t0 = time.perf_counter()
    baseline = generate_baseline(
        num_runs=args.runs,
        base_seed=args.seed,
        agent_class=AGENTS[args.agent],
        max_turns=args.max_turns,
        gauntlet_runs=args.gauntlet_runs,
        parallel=args.parallel,
    )
    elapsed = time.perf_counter() - t0
    print(f"Done in {elapsed:.1f}s")

    json_path = Path(args.output) / f"{args.agent}_{args.runs}.json"
    save_baseline(baseline, json_path)
    print(f"Saved baseline to {json_path}")

    print()
    print(generate_text_report(baseline))


if __name__ == "__main__":
    main()
