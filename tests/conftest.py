"""
Basic test fixtures for the robocombat test suite.

Provides seeded random sources, an event bus, the packaged catalog and
small factories for building robots without going through the catalog.
"""

import sys
import os
import pytest
from unittest.mock import Mock

import numpy as np

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from robocombat.core.data import FactionType, WeightClass
from robocombat.core.events import EventManager
from robocombat.game.entities import Robot, Weapon, load_catalog
from robocombat.game.session import Session


@pytest.fixture
def rng():
    """Create a seeded random generator for reproducible tests."""
    return np.random.default_rng(1234)


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture(scope="session")
def catalog():
    """Load the packaged catalog once for the whole run."""
    return load_catalog()


@pytest.fixture
def make_weapon():
    """Factory for weapons with sensible defaults."""
    def _make(weapon_id="testgun", damage="1d6", ammo_per_round=1, ammo=10,
              long_name=None, short_name=None, weapon_class=WeightClass.MEDIUM):
        return Weapon(
            weapon_id=weapon_id,
            long_name=long_name or weapon_id.title(),
            short_name=short_name or weapon_id.upper(),
            weapon_class=weapon_class,
            damage=damage,
            ammo_capacity=ammo,
            ammo_per_round=ammo_per_round,
            ammo=ammo,
        )
    return _make


@pytest.fixture
def make_robot(make_weapon):
    """Factory for robots with sensible defaults."""
    def _make(robot_id="bot", faction="Red", hitpoints=20, armor="", can_jump=False,
              arsenal=None, robot_class=WeightClass.MEDIUM):
        return Robot(
            robot_id=robot_id,
            model="testbot",
            long_name=robot_id.title(),
            faction=faction,
            robot_class=robot_class,
            hitpoints=hitpoints,
            max_hitpoints=hitpoints,
            armor=armor,
            can_jump=can_jump,
            arsenal=arsenal if arsenal is not None else [make_weapon()],
        )
    return _make


@pytest.fixture
def session(catalog, rng, event_manager):
    """Two-faction session with one human and one computer faction."""
    session = Session(catalog, rng=rng, event_manager=event_manager)
    session.add_faction("The Star Alliance", FactionType.HUMAN)
    session.add_faction("The Prime Edict", FactionType.AI)
    return session


@pytest.fixture
def scripted_rng():
    """Factory for random sources whose ``integers`` calls return the given values in order.

    Each value is one call's result; pass a list for multi-die tokens.
    """
    def _make(*values):
        generator = Mock(spec=np.random.Generator)
        generator.integers.side_effect = [np.atleast_1d(np.array(value)) for value in values]
        generator.random.return_value = 0.5
        return generator
    return _make
