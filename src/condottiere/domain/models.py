"""In-memory entities of the Condottiere domain.

Units are the only mutable entity defined here; armies live in
:mod:`condottiere.domain.army`.  Battle records are frozen once created.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import NewType

from .enums import BattleResult, UnitType

# --- Strongly typed identifiers -------------------------------------------------

UnitID = NewType("UnitID", int)


# --- Core entities --------------------------------------------------------------


class Unit:
    """A single combatant.

    Units compare by identity: two pikemen with the same strength are still
    different soldiers.  Build them through
    :func:`condottiere.domain.catalog.create_unit` rather than directly.
    """

    __slots__ = ("_age", "_id", "_strength", "_type")

    def __init__(self, unit_id: UnitID, unit_type: UnitType, strength: int, age: int = 0) -> None:
        self._id = unit_id
        self._type = unit_type
        self._strength = strength
        self._age = age

    @property
    def id(self) -> UnitID:
        return self._id

    @property
    def type(self) -> UnitType:
        return self._type

    @property
    def strength(self) -> int:
        return self._strength

    @property
    def age(self) -> int:
        """Years of service, carried over when the unit is upgraded."""
        return self._age

    def train(self, gain: int) -> None:
        """Add training points to the unit's strength."""
        self._strength += gain

    def set_strength(self, value: int) -> None:
        """Overwrite the strength; only used when rebuilding a unit on upgrade."""
        self._strength = value

    def __repr__(self) -> str:
        return (
            f"Unit(id={int(self._id)}, type={self._type.value}, "
            f"strength={self._strength}, age={self._age})"
        )


@dataclass(frozen=True, slots=True)
class BattleRecord:
    """One battle as remembered by one of the two armies."""

    opponent_name: str
    result: BattleResult
    timestamp: datetime
    self_strength: int
    opponent_strength: int
    units_lost: int
