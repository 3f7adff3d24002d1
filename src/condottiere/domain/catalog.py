"""Unit catalog lookups and the unit factory."""

from __future__ import annotations

import itertools

from .enums import UnitType
from .errors import UnknownUnitType, UpgradeNotAvailable
from .models import Unit, UnitID
from .rules_config import DEFAULT_RULES, RulesConfig, UnitRules

_unit_ids = itertools.count(1)


def _normalize_type(unit_type: object) -> UnitType:
    if isinstance(unit_type, UnitType):
        return unit_type
    try:
        return UnitType(unit_type)
    except ValueError:
        raise UnknownUnitType(unit_type) from None


def lookup(unit_type: object, *, rules: RulesConfig = DEFAULT_RULES) -> UnitRules:
    """Return the catalog entry for ``unit_type``.

    Raises:
        UnknownUnitType: if the type is not part of the catalog.
    """
    normalized = _normalize_type(unit_type)
    entry = rules.units.get(normalized)
    if entry is None:
        raise UnknownUnitType(unit_type)
    return entry


def base_strength(unit_type: object, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    return lookup(unit_type, rules=rules).base_strength


def training_terms(unit_type: object, *, rules: RulesConfig = DEFAULT_RULES) -> tuple[int, int]:
    """Return ``(cost, gain)`` for one round of training."""
    entry = lookup(unit_type, rules=rules)
    return entry.train_cost, entry.train_gain


def upgrade_terms(
    unit_type: object, *, rules: RulesConfig = DEFAULT_RULES
) -> tuple[UnitType, int]:
    """Return ``(target_type, cost)`` for the next tier.

    Raises:
        UnknownUnitType: if the type is not part of the catalog.
        UpgradeNotAvailable: if the type is already the top tier.
    """
    entry = lookup(unit_type, rules=rules)
    if entry.upgrade_target is None:
        raise UpgradeNotAvailable(f"{unit_type}s cannot be transformed")
    return entry.upgrade_target, entry.upgrade_cost


def create_unit(
    unit_type: object, initial_age: int = 0, *, rules: RulesConfig = DEFAULT_RULES
) -> Unit:
    """Build a unit at the base strength of its type."""
    normalized = _normalize_type(unit_type)
    entry = lookup(normalized, rules=rules)
    return Unit(UnitID(next(_unit_ids)), normalized, entry.base_strength, initial_age)
