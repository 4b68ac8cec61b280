"""Tests for gauntlet setup and round resolution."""

from __future__ import annotations

import pytest

from tbc_sim.sim.content.classes import FighterClass, MoveKind, move_index
from tbc_sim.sim.core.battle_log import BattleLog
from tbc_sim.sim.core.entities import create_fighter
from tbc_sim.sim.core.rng import ScriptedRNG
from tbc_sim.sim.gauntlet import (
    GAUNTLET_HEAL_REWARD,
    init_gauntlet,
    resolve_gauntlet_turn,
    restart_gauntlet,
    start_gauntlet,
)

ATTACK = move_index(MoveKind.ATTACK)
DEFEND = move_index(MoveKind.DEFEND)
DOT = move_index(MoveKind.DOT)
BUFF = move_index(MoveKind.BUFF)
ULTIMATE = move_index(MoveKind.ULTIMATE)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_player(hp: int = 495, fighter_class: FighterClass = FighterClass.KNIGHT):
    player = create_fighter("Hero", fighter_class)
    player.max_hp = 495
    player.hp = hp
    return player


def _make_opponent(fighter_class: FighterClass = FighterClass.KNIGHT, **kwargs):
    opponent = create_fighter(fighter_class.value.title(), fighter_class)
    for key, value in kwargs.items():
        setattr(opponent, key, value)
    return opponent


def _resolve(player, opponents, move, target=0, rolls=()):
    log = BattleLog()
    rng = ScriptedRNG(rolls)
    resolve_gauntlet_turn(player, opponents, move, target, log, rng)
    return log, rng


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

class TestInitGauntlet:
    def test_default_lineup(self):
        opponents, player_hp = init_gauntlet()
        assert [o.name for o in opponents] == ["Knight", "Magician", "Alchemist"]
        assert [o.max_hp for o in opponents] == [115, 105, 110]
        assert player_hp == 495

    def test_custom_lineup(self):
        opponents, player_hp = init_gauntlet([FighterClass.MAGICIAN])
        assert len(opponents) == 1
        assert player_hp == 157  # 105 * 3 // 2

    @pytest.mark.parametrize("count", [0, 4])
    def test_opponent_count_checked(self, count):
        with pytest.raises(ValueError):
            init_gauntlet([FighterClass.KNIGHT] * count)

    def test_start_scales_player(self):
        state = start_gauntlet(create_fighter("Hero", FighterClass.ALCHEMIST))
        assert state.player.max_hp == state.player.hp == 495
        assert state.selected_target == 0
        assert not state.is_over

    def test_restart_is_fresh(self):
        state = start_gauntlet(create_fighter("Hero", FighterClass.ALCHEMIST), max_turns=12)
        state.player.hp = 3
        state.opponents[0].hp = 0
        again = restart_gauntlet(state)
        assert again.player.hp == 495
        assert again.player.name == "Hero"
        assert all(o.hp == o.max_hp for o in again.opponents)
        assert again.max_turns == 12


# ---------------------------------------------------------------------------
# Player action
# ---------------------------------------------------------------------------

class TestPlayerAction:
    def test_kill_grants_heal(self):
        player = _make_player(hp=400)
        opponents = [_make_opponent(hp=1)]
        log, _ = _resolve(player, opponents, ATTACK)
        assert opponents[0].is_dead
        assert player.hp == 400 + GAUNTLET_HEAL_REWARD
        assert "Knight defeated! +20 HP" in log.lines

    def test_heal_capped_at_max(self):
        player = _make_player(hp=490)
        opponents = [_make_opponent(hp=1)]
        _resolve(player, opponents, ATTACK)
        assert player.hp == 495

    def test_dot_not_interruptible(self):
        player = _make_player()
        player.charge = 3
        opponents = [_make_opponent(FighterClass.MAGICIAN)]
        log, _ = _resolve(player, opponents, DOT)
        assert log.lines[2] == "DoT on Magician (stack 1/3)"
        # 5 + 10 // 4 - 10 // 4
        assert "DoT: Magician takes 5" in log.lines
        assert opponents[0].hp == 100
        assert player.charge == 1

    def test_dead_target_is_noop(self):
        player = _make_player()
        opponents = [_make_opponent(hp=0), _make_opponent(FighterClass.MAGICIAN)]
        log, _ = _resolve(player, opponents, ATTACK, target=0)
        assert opponents[1].hp == 105
        assert player.charge == 3
        assert "--- ENEMIES TURN ---" in log.lines
        assert not any(line.startswith("Hero ->") for line in log.lines)

    def test_out_of_range_target_is_noop(self):
        player = _make_player()
        opponents = [_make_opponent()]
        _resolve(player, opponents, ATTACK, target=7)
        assert opponents[0].hp == 115


# ---------------------------------------------------------------------------
# Player ULTIMATE and BUFF
# ---------------------------------------------------------------------------

class TestPlayerUltimate:
    def test_kill_grants_heal(self):
        player = _make_player(hp=100, fighter_class=FighterClass.ALCHEMIST)
        player.charge = 10
        opponents = [_make_opponent(FighterClass.MAGICIAN, hp=5)]
        log, _ = _resolve(player, opponents, ULTIMATE)
        # 22 + 12 // 2 - 10 // 3 = 25: lethal, so no transmutation
        assert opponents[0].hp == -20
        assert player.hp == 100 + GAUNTLET_HEAL_REWARD
        assert player.charge == 0
        assert log.lines[2:] == [
            "ULTIMATE -> Magician: 25 dmg!",
            "Magician defeated! +20 HP",
            "--- ENEMIES TURN ---",
        ]

    def test_alchemist_transmutes_target(self):
        player = _make_player(hp=100, fighter_class=FighterClass.ALCHEMIST)
        player.charge = 10
        opponents = [_make_opponent(FighterClass.MAGICIAN, hp=30)]
        log, _ = _resolve(player, opponents, ULTIMATE)
        # Target left at 5; pool 105 splits 63 / 42.  The Magician then
        # hits back for 13 + 10 // 2 - 10 // 3 = 15.
        assert "Transmutation! HP split: Hero=63, Magician=42" in log.lines
        assert opponents[0].hp == 42
        assert player.hp == 63 - 15

    def test_magician_halves_target_defense(self):
        player = _make_player(fighter_class=FighterClass.MAGICIAN)
        player.charge = 10
        opponents = [_make_opponent()]
        log, _ = _resolve(player, opponents, ULTIMATE)
        # 26 + 10 // 2 - (12 // 2) // 3 = 29
        assert "ULTIMATE -> Knight: 29 dmg!" in log.lines
        assert opponents[0].hp == 115 - 29

    def test_knight_sunders_target(self):
        player = _make_player()
        player.charge = 10
        opponents = [_make_opponent(FighterClass.MAGICIAN)]
        log, _ = _resolve(player, opponents, ULTIMATE, rolls=[99, 0])
        # 28 + 10 // 2 - 10 // 3 = 30; the Magician's attack is then dodged.
        assert opponents[0].hp == 105 - 30
        assert opponents[0].defense_penalty == 2
        assert "Armor sundered! Magician -2 DEF permanently" in log.lines
        assert "Hero dodged!" in log.lines


class TestPlayerBuff:
    def test_buff_applies_and_counts_down(self):
        player = _make_player()
        player.charge = 2
        opponents = [_make_opponent(FighterClass.MAGICIAN)]
        log, _ = _resolve(player, opponents, BUFF)
        assert log.lines[2] == "Hero buffed! +4 DEF (3T)"
        assert player.buff_active
        assert player.buff_turns == 2
        assert player.charge == 1
        # Still buffed in the enemy phase: 13 + 10 // 2 - 16 // 3 = 13
        assert player.hp == 495 - 13

    def test_buff_holds_when_target_defends(self):
        player = _make_player()
        player.charge = 2
        opponents = [_make_opponent(charge=8)]
        # Opponent: punish-buff, DOT and BUFF rolls fail, the bank roll picks DEFEND.
        log, _ = _resolve(player, opponents, BUFF, rolls=[99, 99, 99, 0])
        assert "Knight: Aegis Wall" in log.lines
        assert player.buff_active
        assert player.buff_turns == 2

    def test_expires_before_enemy_phase(self):
        player = _make_player()
        player.buff_active = True
        player.buff_turns = 1
        opponents = [_make_opponent()]
        log, _ = _resolve(player, opponents, DEFEND)
        assert log.lines.index("Hero's buff expired.") < log.lines.index("--- ENEMIES TURN ---")
        # Unbuffed defense 12: 15 + 10 // 2 - 12 // 3 = 16, halved
        assert player.hp == 495 - 8

    def test_active_buff_protects_in_enemy_phase(self):
        player = _make_player()
        player.buff_active = True
        player.buff_turns = 2
        opponents = [_make_opponent()]
        _resolve(player, opponents, DEFEND)
        # Buffed defense 16: 15 + 10 // 2 - 16 // 3 = 15, halved
        assert player.hp == 495 - 7
        assert player.buff_turns == 1


# ---------------------------------------------------------------------------
# Opponent actions
# ---------------------------------------------------------------------------

class TestOpponentAction:
    def test_enemy_attack_halved_by_defend(self):
        player = _make_player()
        opponents = [_make_opponent()]
        log, _ = _resolve(player, opponents, DEFEND)
        # 15 + 10 // 2 - 12 // 3 = 16, halved
        assert player.hp == 495 - 8
        assert log.lines == [
            "--- YOUR TURN ---",
            "Hero used Aegis Wall",
            "Hero braces for impact!",
            "--- ENEMIES TURN ---",
            "Knight: Steady Blade",
            "Knight deals 8 to Hero (blocked)",
        ]

    def test_knight_ultimate_sunders_player(self):
        player = _make_player()
        opponents = [_make_opponent(charge=10)]
        log, rng = _resolve(player, opponents, DEFEND, rolls=[0])
        # 28 + 10 // 2 - 12 // 3 = 29, halved
        assert player.hp == 495 - 14
        assert player.defense_penalty == 2
        assert opponents[0].charge == 0
        assert "Knight ULTIMATE: 14 dmg!" in log.lines
        assert "Hero's armor sundered! -2 DEF" in log.lines

    def test_enemy_buff_not_suppressed(self):
        player = _make_player()
        opponents = [_make_opponent(charge=2)]
        log, _ = _resolve(player, opponents, DEFEND, rolls=[0])
        assert opponents[0].buff_active
        assert opponents[0].buff_turns == 2
        assert log.lines[-2:] == ["--- ENEMIES TURN ---", "Knight: Indomitable Spirit"]

    def test_enemies_never_inflict_dot(self):
        player = _make_player()
        opponents = [_make_opponent(charge=3)]
        _resolve(player, opponents, DEFEND, rolls=[0])
        assert player.dot_stacks == 0
        assert opponents[0].charge == 1

    def test_dead_opponents_skip(self):
        player = _make_player()
        opponents = [_make_opponent(hp=0), _make_opponent(hp=-5)]
        log, rng = _resolve(player, opponents, DEFEND)
        assert player.hp == 495
        assert rng.consumed == 0
        assert log.lines[-1] == "--- ENEMIES TURN ---"


# ---------------------------------------------------------------------------
# DoT phase
# ---------------------------------------------------------------------------

class TestDotPhase:
    def test_dot_kill_grants_heal(self):
        player = _make_player(hp=400)
        opponents = [_make_opponent(hp=3, dot_stacks=1, dot_turns=2)]
        log, _ = _resolve(player, opponents, DEFEND)
        # Knight hits the defending player for 8, then the tick
        # (5 + 10 // 4 - 12 // 4 = 4) kills it.
        assert opponents[0].is_dead
        assert opponents[0].dot_stacks == 0
        assert player.hp == 400 - 8 + GAUNTLET_HEAL_REWARD
        assert log.lines[-2:] == ["DoT: Knight takes 4", "Knight defeated by DoT! +20 HP"]

    def test_dot_ticks_after_enemy_actions(self):
        player = _make_player()
        opponents = [_make_opponent(FighterClass.MAGICIAN, dot_stacks=1, dot_turns=1)]
        log, _ = _resolve(player, opponents, DEFEND)
        enemy_line = log.lines.index("Magician: Elemental Spark")
        tick_line = log.lines.index("DoT: Magician takes 5")
        assert enemy_line < tick_line
        assert log.lines[-1] == "Magician DoT faded"
