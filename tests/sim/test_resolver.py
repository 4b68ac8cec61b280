"""Tests for the 1v1 turn resolver.

Rolls are scripted: ``99`` fails every dodge/crit check, ``0`` passes it.
"""

from __future__ import annotations

import pytest

from tbc_sim.sim.content.classes import FighterClass, MoveKind, move_index
from tbc_sim.sim.core.battle_log import BattleLog
from tbc_sim.sim.core.entities import create_fighter
from tbc_sim.sim.core.rng import GameRNG, ScriptedRNG
from tbc_sim.sim.play_agents.heuristic_agent import choose_ai_move
from tbc_sim.sim.resolver import resolve_turn, transmute

ATTACK = move_index(MoveKind.ATTACK)
DEFEND = move_index(MoveKind.DEFEND)
DOT = move_index(MoveKind.DOT)
BUFF = move_index(MoveKind.BUFF)
ULTIMATE = move_index(MoveKind.ULTIMATE)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _resolve(a, b, move_a, move_b, rolls=(), fallback=99):
    log = BattleLog()
    rng = ScriptedRNG(rolls, fallback=fallback)
    resolve_turn(a, b, move_a, move_b, log, rng)
    return log, rng


# ---------------------------------------------------------------------------
# ATTACK
# ---------------------------------------------------------------------------

class TestAttack:
    def test_attack_exchange(self, knight, magician):
        log, rng = _resolve(knight, magician, ATTACK, ATTACK)
        assert magician.hp == 105 - 17
        # 13 + 10 // 2 - 12 // 3
        assert knight.hp == 115 - 14
        assert rng.consumed == 4  # dodge + crit per side
        assert log.lines[:4] == [
            "Knight used Steady Blade",
            "Magician used Elemental Spark",
            "Knight -> Magician: 17 dmg",
            "Magician -> Knight: 14 dmg",
        ]

    def test_attack_into_defend(self, knight, magician):
        log, rng = _resolve(knight, magician, ATTACK, DEFEND)
        assert magician.hp == 105 - 8
        assert knight.hp == 115
        assert "Knight -> Magician: 8 dmg (blocked)" in log.lines
        assert rng.consumed == 2

    def test_attack_into_buff(self, knight, magician):
        magician.charge = 2
        log, _ = _resolve(knight, magician, ATTACK, BUFF)
        assert magician.hp == 105 - 22
        assert "Knight -> Magician: 22 dmg (off-guard)" in log.lines
        assert "Magician buffed! +4 SPD (3T)" in log.lines

    def test_dodge(self, knight, magician):
        log, _ = _resolve(knight, magician, ATTACK, DEFEND, rolls=[16])
        assert magician.hp == 105
        assert "Magician dodged!" in log.lines

    def test_crit(self, knight, magician):
        log, _ = _resolve(knight, magician, ATTACK, DEFEND, rolls=[99, 0])
        # 17 * 3 // 2 = 25, then halved by DEFEND
        assert magician.hp == 105 - 12
        assert "CRIT! Knight -> Magician: 12 dmg (blocked)" in log.lines

    def test_second_action_applies_after_lethal_hit(self, knight, magician):
        magician.hp = 5
        _resolve(knight, magician, ATTACK, ATTACK)
        assert magician.hp < 0
        assert knight.hp == 115 - 14


# ---------------------------------------------------------------------------
# DOT
# ---------------------------------------------------------------------------

class TestDot:
    def test_interrupted_by_attack(self, knight, magician):
        knight.charge = 3
        log, rng = _resolve(knight, magician, DOT, ATTACK)
        assert "Knight's DoT interrupted!" in log.lines
        assert magician.dot_stacks == 0
        assert rng.consumed == 2  # only Magician's attack rolls
        assert knight.charge == 1

    def test_stack_and_first_tick(self, knight, magician):
        knight.charge = 3
        log, rng = _resolve(knight, magician, DOT, DEFEND)
        assert rng.consumed == 1
        assert magician.dot_stacks == 1
        assert magician.dot_turns == 2
        # 5 + 10 // 4 - 10 // 4
        assert magician.hp == 105 - 5
        assert log.lines[2:] == [
            "Magician: DoT stack 1/3",
            "DoT: Magician burned 5 (2T left)",
        ]

    def test_empowered_against_buff(self, knight, magician):
        knight.charge = 3
        magician.charge = 2
        log, _ = _resolve(knight, magician, DOT, BUFF)
        assert "Magician: DoT stack 1/3 EMPOWERED!" in log.lines

    def test_evaded(self, knight, magician):
        knight.charge = 3
        log, _ = _resolve(knight, magician, DOT, DEFEND, rolls=[0])
        assert "Magician evaded DoT!" in log.lines
        assert magician.dot_stacks == 0
        assert knight.charge == 1

    def test_dot_fades_on_last_tick(self, knight, magician):
        magician.dot_stacks = 2
        magician.dot_turns = 1
        log, _ = _resolve(knight, magician, DEFEND, DEFEND)
        assert magician.dot_stacks == 0
        assert log.lines[-2:] == [
            "DoT: Magician burned 8 (0T left)",
            "Magician's DoT faded",
        ]


# ---------------------------------------------------------------------------
# BUFF
# ---------------------------------------------------------------------------

class TestBuff:
    def test_suppressed_by_defend(self, knight, magician):
        knight.charge = 2
        log, _ = _resolve(knight, magician, BUFF, DEFEND)
        assert "Knight's buff suppressed!" in log.lines
        assert not knight.buff_active
        assert knight.charge == 1

    def test_buff_ticks_same_round(self, knight, magician):
        knight.charge = 2
        log, _ = _resolve(knight, magician, BUFF, ATTACK)
        assert "Knight buffed! +4 DEF (3T)" in log.lines
        assert knight.buff_active
        assert knight.buff_turns == 2

    def test_buff_expiry_logged(self, knight, magician):
        knight.buff_active = True
        knight.buff_turns = 1
        log, _ = _resolve(knight, magician, DEFEND, DEFEND)
        assert log.lines[-1] == "Knight's buff expired"
        assert not knight.buff_active


# ---------------------------------------------------------------------------
# ULTIMATE
# ---------------------------------------------------------------------------

class TestUltimate:
    def test_knight_sunders(self, knight, magician):
        knight.charge = 10
        log, rng = _resolve(knight, magician, ULTIMATE, DEFEND)
        # 28 + 10 // 2 - 10 // 3 = 30, x0.25
        assert magician.hp == 105 - 7
        assert magician.defense_penalty == 2
        assert knight.charge == 0
        assert rng.consumed == 1  # ultimate never rolls dodge
        assert "ULTIMATE! Knight -> Magician: 7 dmg (deflected)" in log.lines
        assert "Armor sundered! Magician -2 DEF permanently" in log.lines

    def test_ultimate_into_buff(self, knight, magician):
        knight.charge = 10
        magician.charge = 2
        _resolve(knight, magician, ULTIMATE, BUFF)
        assert magician.hp == 105 - 37

    def test_magician_halves_defense(self, knight, magician):
        magician.charge = 10
        _resolve(knight, magician, ATTACK, ULTIMATE)
        # 26 + 10 // 2 - (12 // 2) // 3 = 29
        assert knight.hp == 115 - 29

    def test_alchemist_crit_transmutes(self, alchemist, magician):
        alchemist.charge = 10
        alchemist.hp = 80
        magician.hp = 50
        log, _ = _resolve(alchemist, magician, ULTIMATE, ATTACK, rolls=[0])
        # 22 + 12 // 2 - 10 // 3 = 25, crit 25 * 7 // 5 = 35 -> Magician at 15.
        # Pool 80 + 15 = 95 -> 57 / 38, then Magician's attack hits for 15.
        assert "CRIT! ULTIMATE! Alchemist -> Magician: 35 dmg" in log.lines
        assert "Transmutation! HP split: Alchemist=57, Magician=38" in log.lines
        assert magician.hp == 38
        assert alchemist.hp == 57 - 15

    def test_no_transmute_on_lethal_ultimate(self, alchemist, magician):
        alchemist.charge = 10
        magician.hp = 10
        log, _ = _resolve(alchemist, magician, ULTIMATE, ATTACK, rolls=[0])
        assert magician.hp <= 0
        assert not any(line.startswith("Transmutation!") for line in log.lines)


class TestTransmute:
    def test_attacker_share_capped(self, alchemist, magician):
        alchemist.hp = 100
        magician.hp = 100
        transmute(alchemist, magician)
        # Pool 200: attacker share 120 capped to 110, defender keeps 80.
        assert alchemist.hp == 110
        assert magician.hp == 80

    def test_negative_pool_clamped(self, alchemist, magician):
        alchemist.hp = -10
        magician.hp = 5
        transmute(alchemist, magician)
        assert (alchemist.hp, magician.hp) == (0, 0)


# ---------------------------------------------------------------------------
# Round-level bounds
# ---------------------------------------------------------------------------

class TestBounds:
    @pytest.mark.parametrize("seed", range(10))
    def test_invariants_hold_over_random_rounds(self, seed):
        rng = GameRNG(seed)
        classes = list(FighterClass)
        a = create_fighter("A", rng.random_choice(classes))
        b = create_fighter("B", rng.random_choice(classes))
        log = BattleLog()
        for _ in range(25):
            if a.is_dead or b.is_dead:
                break
            penalty_a, penalty_b = a.defense_penalty, b.defense_penalty
            move_a = choose_ai_move(a, b, rng)
            move_b = choose_ai_move(b, a, rng)
            resolve_turn(a, b, move_a, move_b, log, rng)
            for f in (a, b):
                assert 0 <= f.charge <= 10
                assert 0 <= f.dot_stacks <= 3
                assert f.hp <= f.max_hp
                assert f.buff_active == (f.buff_turns > 0)
            assert a.defense_penalty >= penalty_a
            assert b.defense_penalty >= penalty_b
            assert len(log) <= 8
