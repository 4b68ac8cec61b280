"""Match simulation runner -- ties the resolvers, agents and telemetry together.

Provides three key classes:

- **MatchSimulator**: Plays a single 1v1 match to completion.
- **GauntletSimulator**: Plays a single 1v3 gauntlet run to completion.
- **BatchRunner**: Orchestrates many seeded runs (optionally in parallel).
"""

from __future__ import annotations

import itertools
import logging
import multiprocessing
from typing import Sequence

from tbc_sim.sim.content.classes import FighterClass
from tbc_sim.sim.core.entities import create_fighter
from tbc_sim.sim.core.game_state import DEFAULT_MAX_TURNS, GauntletState, MatchState, new_match
from tbc_sim.sim.core.rng import GameRNG
from tbc_sim.sim.gauntlet import DEFAULT_OPPONENT_CLASSES, resolve_gauntlet_turn, start_gauntlet
from tbc_sim.sim.play_agents.base import PlayAgent
from tbc_sim.sim.play_agents.heuristic_agent import HeuristicAgent
from tbc_sim.sim.resolver import resolve_turn
from tbc_sim.sim.telemetry import GauntletTelemetry, MatchTelemetry

logger = logging.getLogger(__name__)


def _count(counter: dict[str, int], key: str) -> None:
    counter[key] = counter.get(key, 0) + 1


# =====================================================================
# MatchSimulator
# =====================================================================

class MatchSimulator:
    """Plays a 1v1 match to completion with one agent per side."""

    def __init__(self, agent_a: PlayAgent, agent_b: PlayAgent) -> None:
        self.agent_a = agent_a
        self.agent_b = agent_b

    def play_round(self, state: MatchState, rng: GameRNG) -> tuple[int, int]:
        """Ask both agents for a move and resolve one round.

        Returns the two move indices that were played.
        """
        a, b = state.fighter_a, state.fighter_b
        move_a = self.agent_a.choose_move(a, b)
        move_b = self.agent_b.choose_move(b, a)
        state.begin_round()
        resolve_turn(a, b, move_a, move_b, state.log, rng)
        return move_a, move_b

    def run_match(self, state: MatchState, rng: GameRNG, seed: int = 0) -> MatchTelemetry:
        """Run rounds until the outcome rules end the match."""
        a, b = state.fighter_a, state.fighter_b
        damage_a = damage_b = 0
        moves_a: dict[str, int] = {}
        moves_b: dict[str, int] = {}

        while not state.is_over:
            hp_a, hp_b = a.hp, b.hp
            move_a, move_b = self.play_round(state, rng)
            damage_a += max(0, hp_b - b.hp)
            damage_b += max(0, hp_a - a.hp)
            _count(moves_a, a.moves[move_a].kind.value)
            _count(moves_b, b.moves[move_b].kind.value)
            state.check_outcome()

        logger.debug("Match over after %d turns: %s", state.turn, state.result_message)

        return MatchTelemetry(
            seed=seed,
            class_a=a.fighter_class.value,
            class_b=b.fighter_class.value,
            result=state.result.value,
            turns=state.turn,
            decided_by_hp=state.decided_by_hp,
            hp_end_a=a.display_hp,
            hp_end_b=b.display_hp,
            damage_dealt_a=damage_a,
            damage_dealt_b=damage_b,
            moves_a=moves_a,
            moves_b=moves_b,
        )


# =====================================================================
# GauntletSimulator
# =====================================================================

class GauntletSimulator:
    """Plays a gauntlet run with one agent driving the player."""

    def __init__(self, agent: PlayAgent) -> None:
        self.agent = agent

    def play_round(self, state: GauntletState, rng: GameRNG) -> int:
        """Let the agent pick a target and a move, then resolve one round.

        Returns the move index that was played.
        """
        target = self.agent.choose_target(state.opponents, state.selected_target)
        if target is not None:
            state.selected_target = target
        move = self.agent.choose_move(state.player, state.opponents[state.selected_target])
        state.begin_round()
        resolve_gauntlet_turn(
            state.player, state.opponents, move, state.selected_target, state.log, rng,
        )
        return move

    def run_gauntlet(self, state: GauntletState, rng: GameRNG, seed: int = 0) -> GauntletTelemetry:
        hp_start = state.player.hp
        moves: dict[str, int] = {}

        while not state.is_over:
            move = self.play_round(state, rng)
            _count(moves, state.player.moves[move].kind.value)
            state.check_outcome()

        logger.debug("Gauntlet over after %d turns: %s", state.turn, state.result_message)

        return GauntletTelemetry(
            seed=seed,
            player_class=state.player.fighter_class.value,
            result=state.result.value,
            turns=state.turn,
            player_hp_start=hp_start,
            player_hp_end=state.player.display_hp,
            opponents_defeated=state.opponents_defeated,
            moves=moves,
        )


# =====================================================================
# Single-run helpers (module level so worker processes can pickle them)
# =====================================================================

def run_single_match(
    seed: int,
    class_a: FighterClass,
    class_b: FighterClass,
    agent_class: type[PlayAgent] = HeuristicAgent,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> MatchTelemetry:
    """Play one AI-vs-AI match from *seed*.

    The agents and the resolver draw from separate forks of the seed.
    """
    master_rng = GameRNG(seed)
    state = new_match("A", class_a, "B", class_b, max_turns=max_turns)
    simulator = MatchSimulator(
        agent_class(rng=master_rng.fork("agent_a")),  # type: ignore[call-arg]
        agent_class(rng=master_rng.fork("agent_b")),  # type: ignore[call-arg]
    )
    return simulator.run_match(state, master_rng.fork("match"), seed=seed)


def run_single_gauntlet(
    seed: int,
    player_class: FighterClass,
    agent_class: type[PlayAgent] = HeuristicAgent,
    opponent_classes: Sequence[FighterClass] = DEFAULT_OPPONENT_CLASSES,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> GauntletTelemetry:
    """Play one gauntlet run from *seed* with *agent_class* driving the player."""
    master_rng = GameRNG(seed)
    player = create_fighter("Champion", player_class)
    state = start_gauntlet(player, opponent_classes, max_turns=max_turns)
    simulator = GauntletSimulator(agent_class(rng=master_rng.fork("agent")))  # type: ignore[call-arg]
    return simulator.run_gauntlet(state, master_rng.fork("gauntlet"), seed=seed)


def _worker_run_match(args: tuple) -> MatchTelemetry:
    """Top-level worker function for multiprocessing (must be picklable)."""
    seed, class_a, class_b, agent_class, max_turns = args
    return run_single_match(seed, class_a, class_b, agent_class, max_turns)


# =====================================================================
# BatchRunner
# =====================================================================

class BatchRunner:
    """Runs many seeded matches, optionally in parallel."""

    def __init__(
        self,
        agent_class: type[PlayAgent] = HeuristicAgent,
        max_turns: int = DEFAULT_MAX_TURNS,
    ) -> None:
        self.agent_class = agent_class
        self.max_turns = max_turns

    def run_matchups(
        self,
        n_runs: int,
        classes: Sequence[FighterClass] = tuple(FighterClass),
        base_seed: int = 42,
        parallel: bool = False,
    ) -> list[MatchTelemetry]:
        """Run *n_runs* matches for every ordered pairing of *classes*.

        Mirror matches are included.  Each run uses seed ``base_seed + i``,
        so pairing A-vs-B and B-vs-A see the same seeds.
        """
        work_items = [
            (base_seed + i, class_a, class_b, self.agent_class, self.max_turns)
            for class_a, class_b in itertools.product(classes, repeat=2)
            for i in range(n_runs)
        ]
        logger.info(
            "Running %d matches (%d per pairing, %s)",
            len(work_items), n_runs, "parallel" if parallel else "sequential",
        )

        if parallel and len(work_items) > 1:
            n_workers = min(len(work_items), multiprocessing.cpu_count() or 1)
            with multiprocessing.Pool(processes=n_workers) as pool:
                return pool.map(_worker_run_match, work_items)
        return [_worker_run_match(item) for item in work_items]

    def run_gauntlets(
        self,
        n_runs: int,
        player_class: FighterClass,
        base_seed: int = 42,
    ) -> list[GauntletTelemetry]:
        """Run *n_runs* gauntlets for *player_class* against the default line-up."""
        return [
            run_single_gauntlet(
                base_seed + i, player_class, self.agent_class, max_turns=self.max_turns,
            )
            for i in range(n_runs)
        ]
