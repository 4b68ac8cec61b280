"""Gauntlet mode -- one player fighter against up to three AI opponents.

The player's max HP is scaled to 1.5x the opponents' combined max HP.  Each
round:

1. The player acts on one chosen living opponent.  The single-direction
   rules of the 1v1 resolver apply without opposing-kind interactions:
   DOT cannot be interrupted, BUFF cannot be suppressed, DEFEND only
   braces.  A kill grants :data:`GAUNTLET_HEAL_REWARD` HP.
2. The player's charge settles and its buff counts down.
3. Every living opponent, in index order, picks a move with the decision
   policy and acts on the player.  Opponents never inflict DoT on the
   player, and their ATTACK/ULTIMATE is halved if the player chose DEFEND.
   Each opponent's charge and buff bookkeeping runs right after its action.
4. DoT ticks on the opponents (the player is the attacker for the formula);
   a DoT kill also grants the heal reward.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from tbc_sim.sim.content.classes import FighterClass, MoveKind
from tbc_sim.sim.core.entities import Fighter, create_fighter
from tbc_sim.sim.core.game_state import DEFAULT_MAX_TURNS, GauntletState, first_living_opponent
from tbc_sim.sim.mechanics.charge import settle_charge
from tbc_sim.sim.mechanics.damage import apply_multiplier, roll_dodge
from tbc_sim.sim.mechanics.status_effects import (
    activate_buff,
    apply_dot_stack,
    sunder_armor,
    tick_buff,
    tick_dot,
)
from tbc_sim.sim.play_agents.heuristic_agent import choose_ai_move
from tbc_sim.sim.resolver import (
    buff_message,
    roll_attack_damage,
    roll_ultimate_damage,
    ultimate_secondary,
)

if TYPE_CHECKING:
    from tbc_sim.sim.core.battle_log import BattleLog
    from tbc_sim.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

GAUNTLET_HEAL_REWARD = 20
MAX_OPPONENTS = 3

DEFAULT_OPPONENT_CLASSES: tuple[FighterClass, ...] = (
    FighterClass.KNIGHT,
    FighterClass.MAGICIAN,
    FighterClass.ALCHEMIST,
)

_DEFENDING_MULTIPLIER = 0.5


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

def init_gauntlet(
    opponent_classes: Sequence[FighterClass] = DEFAULT_OPPONENT_CLASSES,
) -> tuple[list[Fighter], int]:
    """Create the opponents and compute the player's scaled max HP.

    Opponents are named after their class.  The player's max HP is
    ``floor(1.5 * sum of opponent max HP)``; the default line-up sums to
    330, giving 495.
    """
    if not 1 <= len(opponent_classes) <= MAX_OPPONENTS:
        raise ValueError(
            f"A gauntlet needs 1..{MAX_OPPONENTS} opponents, got {len(opponent_classes)}"
        )
    opponents = [create_fighter(fc.value.title(), fc) for fc in opponent_classes]
    total_hp = sum(o.max_hp for o in opponents)
    return opponents, total_hp * 3 // 2


def start_gauntlet(
    player: Fighter,
    opponent_classes: Sequence[FighterClass] = DEFAULT_OPPONENT_CLASSES,
    max_turns: int = DEFAULT_MAX_TURNS,
) -> GauntletState:
    """Scale *player* to gauntlet HP (full health) and open a new run."""
    opponents, max_hp = init_gauntlet(opponent_classes)
    player.max_hp = max_hp
    player.hp = max_hp
    return GauntletState(player=player, opponents=opponents, max_turns=max_turns)


def restart_gauntlet(state: GauntletState) -> GauntletState:
    """Play again: a fresh player of the same name/class against a fresh line-up."""
    player = create_fighter(state.player.name, state.player.fighter_class)
    classes = [o.fighter_class for o in state.opponents]
    return start_gauntlet(player, classes, max_turns=state.max_turns)


# ---------------------------------------------------------------------------
# Round pieces
# ---------------------------------------------------------------------------

def _grant_kill_reward(player: Fighter, log: BattleLog, message: str) -> None:
    log.append(message)
    player.heal(GAUNTLET_HEAL_REWARD)


def _check_kill(player: Fighter, target: Fighter, log: BattleLog) -> None:
    if target.is_dead:
        _grant_kill_reward(player, log, f"{target.name} defeated! +{GAUNTLET_HEAL_REWARD} HP")


def _player_action(
    player: Fighter,
    target: Fighter,
    kind: MoveKind,
    log: BattleLog,
    rng: GameRNG,
) -> None:
    if kind == MoveKind.ATTACK:
        if roll_dodge(target, rng):
            log.append(f"{target.name} dodged!")
            return
        damage, crit = roll_attack_damage(player, target, rng)
        target.take_damage(damage)
        log.append(f"{'CRIT! ' if crit else ''}{player.name} -> {target.name}: {damage} dmg")
        _check_kill(player, target, log)

    elif kind == MoveKind.DOT:
        if roll_dodge(target, rng):
            log.append(f"{target.name} evaded DoT!")
            return
        stacks = apply_dot_stack(target)
        log.append(f"DoT on {target.name} (stack {stacks}/3)")

    elif kind == MoveKind.BUFF:
        activate_buff(player)
        log.append(buff_message(player))

    elif kind == MoveKind.DEFEND:
        log.append(f"{player.name} braces for impact!")

    elif kind == MoveKind.ULTIMATE:
        damage, crit = roll_ultimate_damage(player, target, rng)
        target.take_damage(damage)
        log.append(f"{'CRIT! ' if crit else ''}ULTIMATE -> {target.name}: {damage} dmg!")
        ultimate_secondary(player, target, log)
        _check_kill(player, target, log)


def _opponent_action(
    opponent: Fighter,
    player: Fighter,
    kind: MoveKind,
    player_defending: bool,
    log: BattleLog,
    rng: GameRNG,
) -> None:
    multiplier = _DEFENDING_MULTIPLIER if player_defending else 1.0

    if kind == MoveKind.ATTACK:
        if roll_dodge(player, rng):
            log.append(f"{player.name} dodged!")
            return
        damage, crit = roll_attack_damage(opponent, player, rng)
        damage = apply_multiplier(damage, multiplier)
        player.take_damage(damage)
        log.append(
            f"{'CRIT! ' if crit else ''}{opponent.name} deals {damage} to {player.name}"
            f"{' (blocked)' if player_defending else ''}"
        )

    elif kind == MoveKind.ULTIMATE:
        damage, crit = roll_ultimate_damage(opponent, player, rng)
        damage = apply_multiplier(damage, multiplier)
        player.take_damage(damage)
        log.append(f"{'CRIT! ' if crit else ''}{opponent.name} ULTIMATE: {damage} dmg!")
        if opponent.fighter_class == FighterClass.KNIGHT:
            sunder_armor(player)
            log.append(f"{player.name}'s armor sundered! -2 DEF")

    elif kind == MoveKind.BUFF:
        # Not narrated.
        activate_buff(opponent)

    # DEFEND only banks charge; opponents do not inflict DoT in this mode.


# ---------------------------------------------------------------------------
# Round
# ---------------------------------------------------------------------------

def _is_living_target(opponents: list[Fighter], target_index: int | None) -> bool:
    return (
        target_index is not None
        and 0 <= target_index < len(opponents)
        and not opponents[target_index].is_dead
    )


def resolve_gauntlet_turn(
    player: Fighter,
    opponents: list[Fighter],
    move_index: int,
    target_index: int | None,
    log: BattleLog,
    rng: GameRNG,
) -> None:
    """Resolve one gauntlet round.

    Parameters
    ----------
    player:
        The player fighter; mutated in place.
    opponents:
        Opponents in index order, dead ones included; mutated in place.
    move_index:
        The player's move (0..4).  Callers must only submit affordable moves.
    target_index:
        The opponent the player acts on.  A dead or out-of-range target
        turns the player's action into a no-op; the rest of the round
        still runs.
    log:
        Narration sink.
    rng:
        Source of every roll, including the opponents' policy rolls.
    """
    chosen = player.moves[move_index]

    log.append("--- YOUR TURN ---")
    log.append(f"{player.name} used {chosen.name}")

    if _is_living_target(opponents, target_index):
        _player_action(player, opponents[target_index], chosen.kind, log, rng)
    else:
        logger.debug("Ignoring %s: target %r is not a living opponent", chosen.name, target_index)

    settle_charge(player, chosen)
    if tick_buff(player):
        log.append(f"{player.name}'s buff expired.")

    log.append("--- ENEMIES TURN ---")
    player_defending = chosen.kind == MoveKind.DEFEND

    for opponent in opponents:
        if opponent.is_dead:
            continue
        opponent_move = opponent.moves[choose_ai_move(opponent, player, rng)]
        log.append(f"{opponent.name}: {opponent_move.name}")
        _opponent_action(opponent, player, opponent_move.kind, player_defending, log, rng)
        settle_charge(opponent, opponent_move)
        tick_buff(opponent)

    for opponent in opponents:
        if opponent.is_dead:
            continue
        tick = tick_dot(opponent, player)
        if tick is None:
            continue
        log.append(f"DoT: {opponent.name} takes {tick}")
        if opponent.dot_stacks == 0:
            log.append(f"{opponent.name} DoT faded")
        if opponent.is_dead:
            opponent.dot_stacks = 0
            _grant_kill_reward(
                player, log,
                f"{opponent.name} defeated by DoT! +{GAUNTLET_HEAL_REWARD} HP",
            )

    logger.debug(
        "Gauntlet round: %s HP %d, opponents HP %s, next target %s",
        player.name, player.hp, [o.hp for o in opponents], first_living_opponent(opponents),
    )
