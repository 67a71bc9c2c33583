"""Game entities: weapons, robots and the catalog they are built from."""

from .weapon import Weapon
from .robot import Robot
from .catalog import (
    Catalog,
    CatalogError,
    RobotTemplate,
    WeaponTemplate,
    load_catalog,
    DEFAULT_CATALOG_PATH,
    PLACEHOLDER_MODELS,
)

__all__ = [
    "Weapon",
    "Robot",
    "Catalog",
    "CatalogError",
    "RobotTemplate",
    "WeaponTemplate",
    "load_catalog",
    "DEFAULT_CATALOG_PATH",
    "PLACEHOLDER_MODELS",
]
