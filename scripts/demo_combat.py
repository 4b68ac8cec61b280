"""Play one seeded AI-vs-AI match (or gauntlet run) and print every round.

Usage:
    python scripts/demo_combat.py [--seed 7] [--a KNIGHT] [--b ALCHEMIST]
    python scripts/demo_combat.py --gauntlet [--a MAGICIAN]
"""

from __future__ import annotations

import argparse
import logging

from tbc_sim.sim.content.classes import FighterClass
from tbc_sim.sim.core.entities import Fighter, create_fighter
from tbc_sim.sim.core.game_state import new_match
from tbc_sim.sim.core.rng import GameRNG
from tbc_sim.sim.gauntlet import start_gauntlet
from tbc_sim.sim.play_agents.heuristic_agent import HeuristicAgent
from tbc_sim.sim.runner import GauntletSimulator, MatchSimulator


def _status(f: Fighter) -> str:
    parts = [f"{f.name:10s} HP {f.display_hp:3d}/{f.max_hp}", f"charge {f.charge:2d}"]
    if f.buff_active:
        parts.append(f"+{f.buff_amount} {f.buff_stat.short_label} ({f.buff_turns}T)")
    if f.dot_stacks:
        parts.append(f"DoT x{f.dot_stacks} ({f.dot_turns}T)")
    if f.defense_penalty:
        parts.append(f"-{f.defense_penalty} DEF")
    return "  ".join(parts)


def _print_round(turn: int, lines: list[str], fighters: list[Fighter]) -> None:
    print(f"=== Turn {turn} ===")
    for line in lines:
        print(f"  {line}")
    for f in fighters:
        print(f"  | {_status(f)}")
    print()


def demo_match(seed: int, class_a: FighterClass, class_b: FighterClass) -> None:
    rng = GameRNG(seed)
    state = new_match(class_a.value.title(), class_a, class_b.value.title(), class_b)
    sim = MatchSimulator(
        HeuristicAgent(rng.fork("agent_a")), HeuristicAgent(rng.fork("agent_b")),
    )
    match_rng = rng.fork("match")
    while not state.is_over:
        sim.play_round(state, match_rng)
        _print_round(state.turn, state.log.lines, [state.fighter_a, state.fighter_b])
        state.check_outcome()
    print(state.result_message)


def demo_gauntlet(seed: int, player_class: FighterClass) -> None:
    rng = GameRNG(seed)
    state = start_gauntlet(create_fighter("Champion", player_class))
    sim = GauntletSimulator(HeuristicAgent(rng.fork("agent")))
    run_rng = rng.fork("gauntlet")
    while not state.is_over:
        sim.play_round(state, run_rng)
        _print_round(state.turn, state.log.lines, [state.player, *state.opponents])
        state.check_outcome()
    print(state.result_message)


def main() -> None:
    parser = argparse.ArgumentParser(description="Print a seeded demo match")
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--a", type=FighterClass, default=FighterClass.KNIGHT,
                        help="Class of side A (or the gauntlet player)")
    parser.add_argument("--b", type=FighterClass, default=FighterClass.ALCHEMIST,
                        help="Class of side B")
    parser.add_argument("--gauntlet", action="store_true", help="Play a 1v3 gauntlet run")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.gauntlet:
        demo_gauntlet(args.seed, args.a)
    else:
        demo_match(args.seed, args.a, args.b)


if __name__ == "__main__":
    main()
