"""Shared fixtures and helpers for simulation tests."""

from __future__ import annotations

import pytest

from tbc_sim.sim.content.classes import FighterClass
from tbc_sim.sim.core.battle_log import BattleLog
from tbc_sim.sim.core.entities import Fighter, create_fighter


@pytest.fixture
def knight() -> Fighter:
    return create_fighter("Knight", FighterClass.KNIGHT)


@pytest.fixture
def magician() -> Fighter:
    return create_fighter("Magician", FighterClass.MAGICIAN)


@pytest.fixture
def alchemist() -> Fighter:
    return create_fighter("Alchemist", FighterClass.ALCHEMIST)


@pytest.fixture
def log() -> BattleLog:
    return BattleLog()
