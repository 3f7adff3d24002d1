"""Domain model for Condottiere.

This package holds every game rule and operates purely in-memory:

* Enumerations for unit types, battle results and civilizations
  (see :mod:`enums`).
* The :class:`~condottiere.domain.models.Unit` entity and battle records.
* Rule configuration objects, including the unit catalog and civilization
  presets (see :mod:`rules_config`).
* The :class:`~condottiere.domain.army.Army` aggregate and the battle
  resolver.
"""

from . import army, battle, catalog, enums, errors, models, rules_config
from .army import Army, create_army
from .battle import BattleReport, resolve_battle
from .enums import BattleResult, Civilization, UnitType
from .models import BattleRecord, Unit

__all__ = [
    "Army",
    "BattleRecord",
    "BattleReport",
    "BattleResult",
    "Civilization",
    "Unit",
    "UnitType",
    "army",
    "battle",
    "catalog",
    "create_army",
    "enums",
    "errors",
    "models",
    "resolve_battle",
    "rules_config",
]
