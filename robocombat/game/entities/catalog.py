"""Weapon and robot catalog.

The catalog is loaded from YAML once and is read-only afterwards. Every
damage and armor expression is validated at load time so malformed data
fails fast instead of surfacing in the middle of a battle.
"""

import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

from ...core.data import WeightClass
from ...core.dice import validate_expression
from .robot import Robot
from .weapon import Weapon

DEFAULT_CATALOG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    "assets", "data", "catalog.yaml"
)

# Placeholder models that exist to exercise error paths, never drafted
PLACEHOLDER_MODELS = ("invalid", "invalid2")


class CatalogError(ValueError):
    """Catalog data is missing fields or references unknown entries."""


@dataclass(frozen=True)
class WeaponTemplate:
    """Immutable catalog entry for a weapon."""
    weapon_id: str
    long_name: str
    short_name: str
    weapon_class: WeightClass
    damage: str
    ammo_per_round: int
    ammo: int

    def create(self) -> Weapon:
        """Instantiate a fully loaded weapon."""
        return Weapon(
            weapon_id=self.weapon_id,
            long_name=self.long_name,
            short_name=self.short_name,
            weapon_class=self.weapon_class,
            damage=self.damage,
            ammo_capacity=self.ammo,
            ammo_per_round=self.ammo_per_round,
            ammo=self.ammo,
        )


@dataclass(frozen=True)
class RobotTemplate:
    """Immutable catalog entry for a robot model."""
    model: str
    long_name: str
    model_number: str
    robot_class: WeightClass
    arsenal: tuple[str, ...]
    hitpoints: int
    armor: str
    can_jump: bool
    speed: int
    score: int


class Catalog:
    """Read-only lookup of weapon and robot templates."""

    def __init__(self, weapons: Mapping[str, WeaponTemplate], robots: Mapping[str, RobotTemplate]):
        self._weapons = MappingProxyType(dict(weapons))
        self._robots = MappingProxyType(dict(robots))

    @property
    def weapons(self) -> Mapping[str, WeaponTemplate]:
        return self._weapons

    @property
    def robots(self) -> Mapping[str, RobotTemplate]:
        return self._robots

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "<dict>") -> "Catalog":
        """Build and validate a catalog from parsed YAML data.

        Args:
            data: Mapping with ``weapons`` and ``robots`` sections
            source: Name used in error messages

        Returns:
            Validated catalog

        Raises:
            CatalogError: On missing fields, unknown classes, unknown weapon ids
                or a robot score below 1
            ExpressionError: On a malformed damage or armor expression
        """
        if not isinstance(data, dict):
            raise CatalogError(f"Catalog {source} must be a mapping")

        try:
            weapons = {
                weapon_id: _parse_weapon(weapon_id, entry)
                for weapon_id, entry in (data.get("weapons") or {}).items()
            }
            robots = {
                model: _parse_robot(model, entry)
                for model, entry in (data.get("robots") or {}).items()
            }
        except KeyError as e:
            raise CatalogError(f"Invalid catalog structure in {source}: missing field {e}") from e
        except (TypeError, AttributeError) as e:
            raise CatalogError(f"Invalid catalog structure in {source}: {e}") from e

        for template in robots.values():
            unknown = [weapon_id for weapon_id in template.arsenal if weapon_id not in weapons]
            if unknown:
                raise CatalogError(
                    f"Robot '{template.model}' in {source} mounts unknown weapons: {', '.join(unknown)}"
                )
            if template.score < 1:
                raise CatalogError(
                    f"Robot '{template.model}' in {source} must have a score of at least 1, got {template.score}"
                )

        for template in weapons.values():
            validate_expression(template.damage)
        for template in robots.values():
            validate_expression(template.armor)

        return cls(weapons, robots)

    def get_weapon(self, weapon_id: str) -> WeaponTemplate:
        """Get a weapon template.

        Raises:
            KeyError: If the weapon id is not in the catalog
        """
        if weapon_id not in self._weapons:
            raise KeyError(f"No weapon found with id: {weapon_id}")
        return self._weapons[weapon_id]

    def get_robot(self, model: str) -> RobotTemplate:
        """Get a robot template.

        Raises:
            KeyError: If the model is not in the catalog
        """
        if model not in self._robots:
            raise KeyError(f"No robot found with model: {model}")
        return self._robots[model]

    def create_weapon(self, weapon_id: str) -> Weapon:
        return self.get_weapon(weapon_id).create()

    def create_robot(self, model: str, robot_id: str, faction: str) -> Robot:
        """Build a robot with a fresh, fully loaded arsenal."""
        template = self.get_robot(model)
        return Robot(
            robot_id=robot_id,
            model=template.model,
            long_name=template.long_name,
            faction=faction,
            robot_class=template.robot_class,
            hitpoints=template.hitpoints,
            max_hitpoints=template.hitpoints,
            armor=template.armor,
            can_jump=template.can_jump,
            arsenal=[self.create_weapon(weapon_id) for weapon_id in template.arsenal],
            model_number=template.model_number,
            speed=template.speed,
            score=template.score,
        )

    def playable_models(self, excluded: tuple[str, ...] = PLACEHOLDER_MODELS) -> list[RobotTemplate]:
        return [template for model, template in self._robots.items() if model not in excluded]


def _weight_class(value: str, owner: str) -> WeightClass:
    try:
        return WeightClass(str(value).lower())
    except ValueError:
        raise CatalogError(f"Invalid class '{value}' for '{owner}'") from None


def _parse_weapon(weapon_id: str, entry: dict[str, Any]) -> WeaponTemplate:
    return WeaponTemplate(
        weapon_id=weapon_id,
        long_name=entry["long_name"],
        short_name=entry["short_name"],
        weapon_class=_weight_class(entry["class"], weapon_id),
        damage=str(entry["damage"]),
        ammo_per_round=int(entry["ammo_per_round"]),
        ammo=int(entry["ammo"]),
    )


def _parse_robot(model: str, entry: dict[str, Any]) -> RobotTemplate:
    return RobotTemplate(
        model=model,
        long_name=entry["long_name"],
        model_number=entry.get("model_number", ""),
        robot_class=_weight_class(entry["class"], model),
        arsenal=tuple(entry["arsenal"]),
        hitpoints=int(entry["hitpoints"]),
        armor=str(entry.get("armor") or ""),
        can_jump=bool(entry.get("can_jump", False)),
        speed=int(entry.get("speed", 0)),
        score=int(entry.get("score", 0)),
    )


def load_catalog(path: Optional[str] = None) -> Catalog:
    """Load a catalog from a YAML file.

    Args:
        path: YAML file to read; defaults to the packaged catalog

    Raises:
        FileNotFoundError: If the file does not exist
        CatalogError: If the data is structurally invalid
    """
    yaml_path = path or DEFAULT_CATALOG_PATH
    try:
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Catalog file not found: {yaml_path}")

    return Catalog.from_dict(data, source=yaml_path)
