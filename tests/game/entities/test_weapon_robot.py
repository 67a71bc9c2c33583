"""
Unit tests for Weapon and Robot entities.
"""

import pytest

from robocombat.core.data import EvaluationMode


class TestWeapon:
    """Test weapon matching and ammunition."""

    def test_matches_any_name_case_insensitively(self, make_weapon):
        weapon = make_weapon("mediumlaser", long_name="Medium Laser", short_name="MD. LASER")
        assert weapon.matches("mediumlaser")
        assert weapon.matches("MEDIUMLASER")
        assert weapon.matches("md. laser")
        assert weapon.matches("Medium laser")
        assert not weapon.matches("medium")

    def test_can_fire_and_consume(self, make_weapon):
        weapon = make_weapon(ammo_per_round=7, ammo=14)
        assert weapon.can_fire()
        weapon.consume_ammo()
        weapon.consume_ammo()
        assert weapon.ammo == 0
        assert not weapon.can_fire()

    def test_partial_round_cannot_fire(self, make_weapon):
        weapon = make_weapon(ammo_per_round=10, ammo=9)
        assert not weapon.can_fire()

    def test_unlimited_ammo(self, make_weapon):
        weapon = make_weapon(ammo_per_round=0, ammo=1)
        assert weapon.has_unlimited_ammo
        for _ in range(50):
            weapon.consume_ammo()
        assert weapon.ammo == 1
        assert weapon.can_fire()
        assert weapon.ammo_display() == "--"

    def test_ammo_display(self, make_weapon):
        weapon = make_weapon(ammo_per_round=1, ammo=3)
        weapon.consume_ammo()
        assert weapon.ammo_display() == "2/3"

    def test_fire_rolls_and_spends(self, make_weapon, rng):
        weapon = make_weapon(damage="2d6", ammo_per_round=1, ammo=2)
        damage = weapon.fire(rng)
        assert 2 <= damage.damage <= 12
        assert len(damage.rolls) == 2
        assert weapon.ammo == 1

    def test_fire_when_empty(self, make_weapon, rng):
        weapon = make_weapon(ammo_per_round=1, ammo=0)
        damage = weapon.fire(rng)
        assert damage.damage == 0
        assert damage.rolls == ()


class TestRobot:
    """Test robot queries."""

    def test_is_alive(self, make_robot):
        robot = make_robot(hitpoints=1)
        assert robot.is_alive
        robot.take_damage(1)
        assert not robot.is_alive
        robot.take_damage(5)
        assert robot.hitpoints == -5

    def test_find_weapons_in_arsenal_order(self, make_robot, make_weapon):
        first = make_weapon("machinegun", ammo_per_round=10, ammo=200)
        second = make_weapon("machinegun", ammo_per_round=10, ammo=200)
        laser = make_weapon("laser", ammo_per_round=0, ammo=1)
        robot = make_robot(arsenal=[first, laser, second])

        assert robot.find_weapons("machinegun") == [first, second]
        assert robot.find_weapons("MACHINEGUN")[0] is first
        assert robot.find_weapons("rocket") == []

    def test_find_weapons_skips_empty(self, make_robot, make_weapon):
        full = make_weapon("gun", ammo=5)
        empty = make_weapon("gun", ammo=0)
        robot = make_robot(arsenal=[empty, full])
        assert robot.find_weapons("gun") == [full]

    def test_has_ammo(self, make_robot, make_weapon):
        robot = make_robot(arsenal=[make_weapon(ammo=0), make_weapon("other", ammo=0)])
        assert not robot.has_ammo()
        robot.arsenal.append(make_weapon("laser", ammo_per_round=0, ammo=0))
        assert robot.has_ammo()

    def test_weapon_ids_unique(self, make_robot, make_weapon):
        robot = make_robot(arsenal=[
            make_weapon("a"), make_weapon("b"), make_weapon("a"), make_weapon("c", ammo=0),
        ])
        assert robot.weapon_ids() == ["a", "b", "c"]
        assert robot.weapon_ids(usable_only=True) == ["a", "b"]
        assert robot.weapon_count("a") == 2

    def test_str(self, make_robot):
        assert str(make_robot("kraken-1")) == "Kraken-1 kraken-1"


class TestCatalogRobots:
    """Robots built from the packaged catalog."""

    def test_hermes(self, catalog):
        hermes = catalog.create_robot("hermes", "hermes-1", "Red")
        assert hermes.hitpoints == 15
        assert hermes.can_jump
        assert hermes.armor == ""
        assert [w.weapon_id for w in hermes.arsenal] == ["mediumpulse", "lightlaser", "lightlaser"]

    def test_arsenal_weapons_are_independent(self, catalog):
        scarab = catalog.create_robot("scarab", "s1", "Red")
        first, second = scarab.find_weapons("machinegun")
        first.consume_ammo()
        assert first.ammo == 190
        assert second.ammo == 200

    def test_lightlaser_is_unlimited(self, catalog):
        weapon = catalog.create_weapon("lightlaser")
        assert weapon.has_unlimited_ammo
        assert weapon.damage == "3"

    @pytest.mark.parametrize("weapon_id", ["heavymortar", "thermaldetonator", "railgun", "cluster"])
    def test_catalog_weapons_evaluate(self, catalog, weapon_id):
        from robocombat.core.dice import calculate_damage
        weapon = catalog.create_weapon(weapon_id)
        minimum = calculate_damage(weapon.damage, EvaluationMode.MINIMUM).damage
        maximum = calculate_damage(weapon.damage, EvaluationMode.MAXIMUM).damage
        assert 0 < minimum <= maximum
