"""
Integration tests for a complete battle.

Drives a session turn by turn with the attack selector choosing every
move, checking that the session, resolver, selector, event bus and log
manager agree with each other.
"""
import pytest

import numpy as np

from robocombat.core.data import FactionType, LogCategory
from robocombat.core.events import EventManager, EventType
from robocombat.game import LogManager, Session

HUMANS = "The Star Alliance"
MACHINES = "The Prime Edict"


def run_battle(catalog, seed, max_rounds=200):
    """Play a battle where every robot follows the attack selector."""
    event_manager = EventManager()
    log_manager = LogManager(event_manager, max_messages=5000)
    session = Session(catalog, rng=np.random.default_rng(seed), event_manager=event_manager)
    session.add_faction(HUMANS, FactionType.HUMAN)
    session.add_faction(MACHINES, FactionType.AI)
    for model in ("hermes", "scarab", "nomad"):
        session.add_robot(HUMANS, model)
    for model in ("kraken", "stormcrow"):
        session.add_robot(MACHINES, model)

    ended = []
    event_manager.subscribe(EventType.GAME_ENDED, ended.append)

    session.start_game()
    event_manager.process_events()

    for _ in range(max_rounds):
        acted = False
        for robot in session.robots(living_only=True):
            if not session.is_game_in_progress:
                break
            if not robot.is_alive:
                continue
            recommendation = session.choose_best_attack(robot.robot_id)
            if recommendation.is_empty:
                continue

            target = session.get_robot(recommendation.target_id)
            hitpoints_before = target.hitpoints
            report = session.fire(robot.robot_id, recommendation.target_id, recommendation.weapon_id)

            assert report.weapons_fired >= 1
            assert target.faction != robot.faction
            assert target.hitpoints == hitpoints_before - report.final_damage
            acted = True

            event_manager.process_events()
            event_manager.process_events()
        if not acted or not session.is_game_in_progress:
            break

    return session, log_manager, ended


@pytest.mark.integration
class TestBattleIntegration:
    """Test full battles driven by the attack selector."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_battle_invariants(self, catalog, seed):
        session, log_manager, ended = run_battle(catalog, seed)

        assert len(ended) <= 1
        winner = session.winning_faction()
        if ended:
            assert ended[0].winning_faction == winner
            assert session.living_factions() == [winner]
        for robot in session.robots():
            for weapon in robot.arsenal:
                assert 0 <= weapon.ammo <= weapon.ammo_capacity

        battle_log = log_manager.get_messages(categories={LogCategory.BATTLE})
        assert battle_log
        assert all("→" in entry.text or "destroyed" in entry.text for entry in battle_log)

    def test_seeded_battles_repeat(self, catalog):
        first = run_battle(catalog, 42)[1].get_formatted_messages()
        second = run_battle(catalog, 42)[1].get_formatted_messages()
        assert first == second

    def test_statistics_consistent(self, catalog):
        session, log_manager, ended = run_battle(catalog, 7)
        stats = session.event_manager.get_statistics()
        assert stats['subscriber_errors'] == 0
        assert stats['events_queued'] == 0
        assert stats['events_processed'] == stats['events_published']
