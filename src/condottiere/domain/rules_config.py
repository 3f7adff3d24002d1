"""Declarative rule configuration for the Condottiere domain."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .enums import Civilization, UnitType


@dataclass(frozen=True, slots=True)
class UnitRules:
    """Catalog entry for a single unit type."""

    base_strength: int
    train_cost: int
    train_gain: int
    upgrade_target: UnitType | None = None
    upgrade_cost: int = 0


@dataclass(frozen=True, slots=True)
class PresetRules:
    """Starting roster of a civilization."""

    pikemen: int = 0
    archers: int = 0
    knights: int = 0

    def counts(self) -> tuple[tuple[UnitType, int], ...]:
        """Unit counts in the order they join the roster."""
        return (
            (UnitType.PIKEMAN, self.pikemen),
            (UnitType.ARCHER, self.archers),
            (UnitType.KNIGHT, self.knights),
        )


@dataclass(frozen=True, slots=True)
class EconomyRules:
    """Treasury constants."""

    starting_gold: int = 1000


@dataclass(frozen=True, slots=True)
class BattleRules:
    """Consequences of a battle."""

    victory_reward: int = 100
    units_lost_on_defeat: int = 2
    units_lost_on_tie: int = 1


UNIT_CATALOG: Mapping[UnitType, UnitRules] = MappingProxyType(
    {
        UnitType.PIKEMAN: UnitRules(
            base_strength=5,
            train_cost=10,
            train_gain=3,
            upgrade_target=UnitType.ARCHER,
            upgrade_cost=30,
        ),
        UnitType.ARCHER: UnitRules(
            base_strength=10,
            train_cost=20,
            train_gain=7,
            upgrade_target=UnitType.KNIGHT,
            upgrade_cost=40,
        ),
        UnitType.KNIGHT: UnitRules(base_strength=20, train_cost=30, train_gain=10),
    }
)

CIVILIZATION_PRESETS: Mapping[str, PresetRules] = MappingProxyType(
    {
        Civilization.CHINOS.value: PresetRules(pikemen=2, archers=25, knights=2),
        Civilization.INGLESES.value: PresetRules(pikemen=10, archers=10, knights=10),
        Civilization.BIZANTINOS.value: PresetRules(pikemen=5, archers=8, knights=15),
    }
)


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container."""

    units: Mapping[UnitType, UnitRules] = field(default_factory=lambda: UNIT_CATALOG)
    presets: Mapping[str, PresetRules] = field(default_factory=lambda: CIVILIZATION_PRESETS)
    economy: EconomyRules = EconomyRules()
    battle: BattleRules = BattleRules()


DEFAULT_RULES = RulesConfig()
