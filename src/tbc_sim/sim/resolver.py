"""Turn resolver for 1v1 matches.

Both fighters commit a move, then one round resolves in five phases:

1. Announce both moves.
2. Action phase, A against B then B against A.  Interaction rules read the
   *other* fighter's chosen kind, never its post-action state, so the two
   moves are simultaneous; only HP mutation order differs.  B's action is
   applied in full even if A's hit already dropped B to 0 HP or below.
3. DoT ticks (A, then B).
4. Charge settlement.
5. Buff countdown.

Death is not checked here: the caller inspects HP after the round.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tbc_sim.sim.content.classes import FighterClass, MoveKind
from tbc_sim.sim.mechanics.charge import settle_charge
from tbc_sim.sim.mechanics.damage import (
    apply_attack_crit,
    apply_multiplier,
    apply_ultimate_crit,
    attack_base_damage,
    calculate_damage,
    effective_attack,
    effective_defense,
    roll_crit,
    roll_dodge,
    ultimate_base_damage,
)
from tbc_sim.sim.mechanics.status_effects import (
    activate_buff,
    apply_dot_stack,
    sunder_armor,
    tick_buff,
    tick_dot,
)

if TYPE_CHECKING:
    from tbc_sim.sim.core.battle_log import BattleLog
    from tbc_sim.sim.core.entities import Fighter
    from tbc_sim.sim.core.rng import GameRNG

logger = logging.getLogger(__name__)

# Damage multipliers keyed by the opposing fighter's chosen kind.
_ATTACK_MULTIPLIER: dict[MoveKind, float] = {MoveKind.DEFEND: 0.5, MoveKind.BUFF: 1.3}
_ULTIMATE_MULTIPLIER: dict[MoveKind, float] = {MoveKind.DEFEND: 0.25, MoveKind.BUFF: 1.25}

_ATTACK_TAG: dict[MoveKind, str] = {MoveKind.DEFEND: " (blocked)", MoveKind.BUFF: " (off-guard)"}
_ULTIMATE_TAG: dict[MoveKind, str] = {MoveKind.DEFEND: " (deflected)"}

_TRANSMUTE_ATTACKER_SHARE = 6  # tenths of the pooled HP


def _crit_prefix(crit: bool) -> str:
    return "CRIT! " if crit else ""


# ---------------------------------------------------------------------------
# Shared single-direction effects (also used by the gauntlet)
# ---------------------------------------------------------------------------

def ultimate_defense(attacker: Fighter, defender: Fighter) -> int:
    """Defense the ultimate formula sees: halved for a Magician attacker."""
    defense = effective_defense(defender)
    if attacker.fighter_class == FighterClass.MAGICIAN:
        return defense // 2
    return defense


def roll_attack_damage(attacker: Fighter, defender: Fighter, rng: GameRNG) -> tuple[int, bool]:
    """Draw the crit roll and return ``(damage, crit)`` before any multiplier."""
    crit = roll_crit(attacker, rng)
    damage = calculate_damage(
        attack_base_damage(attacker.fighter_class),
        effective_attack(attacker),
        effective_defense(defender),
    )
    if crit:
        damage = apply_attack_crit(damage)
    return damage, crit


def roll_ultimate_damage(attacker: Fighter, defender: Fighter, rng: GameRNG) -> tuple[int, bool]:
    """Draw the crit roll and return ``(damage, crit)`` before any multiplier."""
    crit = roll_crit(attacker, rng)
    damage = calculate_damage(
        ultimate_base_damage(attacker.fighter_class),
        effective_attack(attacker),
        ultimate_defense(attacker, defender),
    )
    if crit:
        damage = apply_ultimate_crit(damage)
    return damage, crit


def transmute(attacker: Fighter, defender: Fighter) -> None:
    """Alchemist ultimate: re-split the pooled HP 60/40 in the attacker's favour.

    The pool is clamped at 0.  The attacker's share is capped at its max HP;
    the defender keeps the pool minus the uncapped share, so any excess is
    lost rather than handed to the defender.
    """
    pool = max(0, attacker.hp + defender.hp)
    attacker_share = pool * _TRANSMUTE_ATTACKER_SHARE // 10
    defender.hp = pool - attacker_share
    attacker.hp = min(attacker_share, attacker.max_hp)


def ultimate_secondary(attacker: Fighter, defender: Fighter, log: BattleLog) -> None:
    """Apply the class-specific rider of an ultimate that just landed."""
    if attacker.fighter_class == FighterClass.KNIGHT:
        sunder_armor(defender)
        log.append(f"Armor sundered! {defender.name} -2 DEF permanently")
    elif attacker.fighter_class == FighterClass.ALCHEMIST and defender.hp > 0:
        transmute(attacker, defender)
        log.append(
            f"Transmutation! HP split: {attacker.name}={attacker.hp}, "
            f"{defender.name}={defender.hp}"
        )


def tick_dot_logged(fighter: Fighter, source: Fighter, log: BattleLog) -> int | None:
    """Tick *fighter*'s DoT and narrate it.  Returns the damage or ``None``."""
    tick = tick_dot(fighter, source)
    if tick is None:
        return None
    log.append(f"DoT: {fighter.name} burned {tick} ({fighter.dot_turns}T left)")
    if fighter.dot_stacks == 0:
        log.append(f"{fighter.name}'s DoT faded")
    return tick


def tick_buff_logged(fighter: Fighter, log: BattleLog) -> None:
    if tick_buff(fighter):
        log.append(f"{fighter.name}'s buff expired")


def buff_message(fighter: Fighter) -> str:
    return (
        f"{fighter.name} buffed! +{fighter.buff_amount} "
        f"{fighter.buff_stat.short_label} ({fighter.buff_turns}T)"
    )


# ---------------------------------------------------------------------------
# Action phase
# ---------------------------------------------------------------------------

def _resolve_action(
    attacker: Fighter,
    defender: Fighter,
    kind: MoveKind,
    opposing: MoveKind,
    log: BattleLog,
    rng: GameRNG,
) -> None:
    """Apply one fighter's action against the other."""
    if kind == MoveKind.ATTACK:
        if roll_dodge(defender, rng):
            log.append(f"{defender.name} dodged!")
            return
        damage, crit = roll_attack_damage(attacker, defender, rng)
        damage = apply_multiplier(damage, _ATTACK_MULTIPLIER.get(opposing, 1.0))
        defender.take_damage(damage)
        log.append(
            f"{_crit_prefix(crit)}{attacker.name} -> {defender.name}: "
            f"{damage} dmg{_ATTACK_TAG.get(opposing, '')}"
        )

    elif kind == MoveKind.DOT:
        if opposing == MoveKind.ATTACK:
            log.append(f"{attacker.name}'s DoT interrupted!")
            return
        if roll_dodge(defender, rng):
            log.append(f"{defender.name} evaded DoT!")
            return
        stacks = apply_dot_stack(defender)
        empowered = " EMPOWERED!" if opposing == MoveKind.BUFF else ""
        log.append(f"{defender.name}: DoT stack {stacks}/3{empowered}")

    elif kind == MoveKind.BUFF:
        if opposing == MoveKind.DEFEND:
            log.append(f"{attacker.name}'s buff suppressed!")
            return
        activate_buff(attacker)
        log.append(buff_message(attacker))

    elif kind == MoveKind.ULTIMATE:
        damage, crit = roll_ultimate_damage(attacker, defender, rng)
        damage = apply_multiplier(damage, _ULTIMATE_MULTIPLIER.get(opposing, 1.0))
        defender.take_damage(damage)
        log.append(
            f"{_crit_prefix(crit)}ULTIMATE! {attacker.name} -> {defender.name}: "
            f"{damage} dmg{_ULTIMATE_TAG.get(opposing, '')}"
        )
        ultimate_secondary(attacker, defender, log)

    # DEFEND has no action-phase effect; it pays off through the opposing
    # multipliers and the charge settlement.


# ---------------------------------------------------------------------------
# Round
# ---------------------------------------------------------------------------

def resolve_turn(
    fighter_a: Fighter,
    fighter_b: Fighter,
    move_a: int,
    move_b: int,
    log: BattleLog,
    rng: GameRNG,
) -> None:
    """Resolve one simultaneous round between two fighters.

    Parameters
    ----------
    fighter_a, fighter_b:
        The two fighters; both are mutated in place.
    move_a, move_b:
        Move indices (0..4).  Callers must only submit affordable moves.
    log:
        Narration sink; lines are appended in resolution order.
    rng:
        Source of every dodge and crit roll in the round.
    """
    chosen_a = fighter_a.moves[move_a]
    chosen_b = fighter_b.moves[move_b]

    log.append(f"{fighter_a.name} used {chosen_a.name}")
    log.append(f"{fighter_b.name} used {chosen_b.name}")

    _resolve_action(fighter_a, fighter_b, chosen_a.kind, chosen_b.kind, log, rng)
    _resolve_action(fighter_b, fighter_a, chosen_b.kind, chosen_a.kind, log, rng)

    tick_dot_logged(fighter_a, fighter_b, log)
    tick_dot_logged(fighter_b, fighter_a, log)

    settle_charge(fighter_a, chosen_a)
    settle_charge(fighter_b, chosen_b)

    tick_buff_logged(fighter_a, log)
    tick_buff_logged(fighter_b, log)

    logger.debug(
        "%s %s vs %s %s -> HP %d/%d, charge %d/%d",
        fighter_a.name, chosen_a.kind.value, fighter_b.name, chosen_b.kind.value,
        fighter_a.hp, fighter_b.hp, fighter_a.charge, fighter_b.charge,
    )
