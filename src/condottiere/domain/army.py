"""Army aggregate: treasury, roster and battle history.

An :class:`Army` owns its gold, units and history and exposes the operations
a driver may invoke on them.  Paid operations go through
:meth:`Army.deduct_gold`; failures are logged and reported as ``False``
rather than raised.
"""

from __future__ import annotations

import logging

from . import catalog
from .battle import BattleReport, resolve_battle
from .enums import BattleResult, UnitType
from .errors import (
    ArmyOperationError,
    InsufficientFunds,
    InvalidUnitReference,
    UnitNotFoundInconsistency,
    UnknownUnitType,
)
from .models import BattleRecord, Unit
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)

_FAILURE_LEVELS: dict[type[ArmyOperationError], int] = {
    InvalidUnitReference: logging.WARNING,
    UnknownUnitType: logging.ERROR,
    UnitNotFoundInconsistency: logging.ERROR,
}


class Army:
    """A named force of units funded by a treasury."""

    def __init__(
        self,
        name: str,
        civilization: str,
        *,
        units: list[Unit] | None = None,
        gold: int | None = None,
        rules: RulesConfig = DEFAULT_RULES,
    ) -> None:
        self._name = name
        self._civilization = civilization
        self._rules = rules
        self._gold = rules.economy.starting_gold if gold is None else gold
        self._units: list[Unit] = list(units or [])
        self._history: list[BattleRecord] = []

    def __repr__(self) -> str:
        return (
            f"Army(name={self._name!r}, civilization={self._civilization!r}, "
            f"units={len(self._units)}, gold={self._gold})"
        )

    # --- Read accessors ---------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def civilization(self) -> str:
        return self._civilization

    @property
    def rules(self) -> RulesConfig:
        return self._rules

    @property
    def gold(self) -> int:
        return self._gold

    @property
    def units(self) -> list[Unit]:
        """Snapshot of the roster; changing the list leaves the army untouched."""
        return list(self._units)

    @property
    def battle_history(self) -> list[BattleRecord]:
        """Snapshot of the battle history, oldest first."""
        return list(self._history)

    @property
    def total_strength(self) -> int:
        return sum(unit.strength for unit in self._units)

    def find_units(self, unit_type: UnitType | str) -> list[Unit]:
        """Units of ``unit_type`` in roster order."""
        return [unit for unit in self._units if unit.type == unit_type]

    def get_unit(self, unit_id: int) -> Unit | None:
        """Look a unit up by its identifier."""
        return next((unit for unit in self._units if unit.id == unit_id), None)

    # --- Treasury ---------------------------------------------------------------

    def add_gold(self, amount: int) -> None:
        _check_amount(amount)
        self._gold += amount

    def deduct_gold(self, amount: int) -> bool:
        """Spend ``amount`` if the treasury can cover it; never goes negative.

        Raises:
            ValueError: if ``amount`` is negative.
        """
        _check_amount(amount)
        if self._gold >= amount:
            self._gold -= amount
            return True
        return False

    # --- Roster operations ------------------------------------------------------

    def train_unit(self, unit: Unit | None) -> bool:
        """Pay for one round of training and apply it to ``unit``."""
        try:
            _check_unit(unit)
            cost, gain = catalog.training_terms(unit.type, rules=self._rules)
            self._require_gold(cost)
        except ArmyOperationError as exc:
            self._report_failure("train", unit, exc)
            return False

        if not self.deduct_gold(cost):
            return False
        unit.train(gain)
        logger.info(
            "Army %s: trained a %s. Gold: %s, unit strength: %s",
            self._name,
            unit.type,
            self._gold,
            unit.strength,
            extra={
                "event": "unit_trained",
                "army": self._name,
                "unit_id": int(unit.id),
                "unit_type": str(unit.type),
                "cost": cost,
                "gold": self._gold,
                "strength": unit.strength,
            },
        )
        return True

    def transform_unit(self, unit: Unit | None) -> bool:
        """Upgrade ``unit`` to the next tier, keeping its accumulated training.

        The old unit is replaced by a new one of the target type that
        inherits its age.  The new strength is the target's base strength
        plus whatever the old unit had earned above its own base.
        """
        try:
            _check_unit(unit)
            target_type, cost = catalog.upgrade_terms(unit.type, rules=self._rules)
            self._require_gold(cost)
            accumulated = unit.strength - catalog.base_strength(unit.type, rules=self._rules)
        except ArmyOperationError as exc:
            self._report_failure("transform", unit, exc)
            return False

        if not self.deduct_gold(cost):
            return False

        index = self._index_of(unit)
        if index is None:
            self.add_gold(cost)
            self._report_failure(
                "transform",
                unit,
                UnitNotFoundInconsistency("unit not found for transformation; cost refunded"),
            )
            return False

        upgraded = catalog.create_unit(target_type, unit.age, rules=self._rules)
        upgraded.set_strength(upgraded.strength + accumulated)
        del self._units[index]
        self._units.append(upgraded)
        logger.info(
            "Army %s: transformed a %s into a %s. Gold: %s, new unit strength: %s",
            self._name,
            unit.type,
            upgraded.type,
            self._gold,
            upgraded.strength,
            extra={
                "event": "unit_transformed",
                "army": self._name,
                "unit_id": int(unit.id),
                "new_unit_id": int(upgraded.id),
                "unit_type": str(unit.type),
                "new_unit_type": str(upgraded.type),
                "cost": cost,
                "gold": self._gold,
                "strength": upgraded.strength,
            },
        )
        return True

    def lose_units(self, count: int) -> list[Unit]:
        """Remove the ``count`` strongest units and return them.

        Ties keep their roster order.  Asking for more units than the army
        has removes all of them.
        """
        self._units.sort(key=lambda unit: unit.strength, reverse=True)
        count = max(0, count)
        lost = self._units[:count]
        del self._units[:count]
        logger.info(
            "Army %s: lost %d units, %d remaining",
            self._name,
            len(lost),
            len(self._units),
            extra={
                "event": "units_lost",
                "army": self._name,
                "units_lost": len(lost),
                "units_remaining": len(self._units),
            },
        )
        return lost

    # --- Battle -----------------------------------------------------------------

    def attack(self, opponent: Army) -> BattleResult:
        """Fight ``opponent`` and return the outcome from this army's side."""
        return self.fight(opponent).result

    def fight(self, opponent: Army) -> BattleReport:
        """Like :meth:`attack` but return the full battle report."""
        return resolve_battle(self, opponent)

    def _record_battle(self, record: BattleRecord) -> None:
        self._history.append(record)

    # --- Helpers ----------------------------------------------------------------

    def _require_gold(self, cost: int) -> None:
        if self._gold < cost:
            raise InsufficientFunds(self._gold, cost)

    def _index_of(self, unit: Unit) -> int | None:
        for index, candidate in enumerate(self._units):
            if candidate is unit:
                return index
        return None

    def _report_failure(self, action: str, unit: object, exc: ArmyOperationError) -> None:
        unit_type = getattr(unit, "type", None)
        level = _FAILURE_LEVELS.get(type(exc), logging.INFO)
        logger.log(
            level,
            "Army %s: cannot %s %s: %s",
            self._name,
            action,
            unit_type if unit_type is not None else "unit",
            exc,
            extra={
                "event": f"{action}_failed",
                "army": self._name,
                "reason": type(exc).__name__,
                "gold": self._gold,
            },
        )


def _check_amount(amount: int) -> None:
    if amount < 0:
        raise ValueError(f"gold amount must be non-negative, got {amount}")


def _check_unit(unit: object) -> None:
    if unit is None:
        raise InvalidUnitReference("no unit found")
    if not isinstance(unit, Unit):
        raise UnknownUnitType(getattr(unit, "type", unit))


def create_army(
    civilization: str, name: str, *, rules: RulesConfig = DEFAULT_RULES
) -> Army:
    """Create an army with the starting roster of ``civilization``.

    Unknown civilizations are not an error: the army starts with no units and
    a warning is logged.
    """
    preset = rules.presets.get(civilization)
    if preset is None:
        logger.warning(
            'Army %s: unknown civilization "%s"; no units initialized',
            name,
            civilization,
            extra={"event": "unknown_civilization", "army": name, "civilization": civilization},
        )
        return Army(name, civilization, rules=rules)

    units = [
        catalog.create_unit(unit_type, rules=rules)
        for unit_type, count in preset.counts()
        for _ in range(count)
    ]
    army = Army(name, civilization, units=units, rules=rules)
    logger.info(
        "Army %s (%s) raised with %d units",
        name,
        civilization,
        len(units),
        extra={
            "event": "army_created",
            "army": name,
            "civilization": civilization,
            "units": len(units),
            "gold": army.gold,
        },
    )
    return army
