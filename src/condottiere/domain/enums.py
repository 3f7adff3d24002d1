"""Enumerations used across the Condottiere domain."""

from __future__ import annotations

from enum import StrEnum


class UnitType(StrEnum):
    """Unit classes, declared in tier order."""

    PIKEMAN = "Pikeman"
    ARCHER = "Archer"
    KNIGHT = "Knight"

    @property
    def tier(self) -> int:
        """Position in the upgrade chain (Pikeman is 0)."""
        return list(UnitType).index(self)


class BattleResult(StrEnum):
    """Outcome of a battle from one army's perspective."""

    WIN = "win"
    LOSS = "loss"
    TIE = "tie"

    def flipped(self) -> BattleResult:
        """Return the outcome as seen by the opponent."""
        if self is BattleResult.WIN:
            return BattleResult.LOSS
        if self is BattleResult.LOSS:
            return BattleResult.WIN
        return BattleResult.TIE


class Civilization(StrEnum):
    """Civilizations with a compiled-in starting roster."""

    CHINOS = "Chinos"
    INGLESES = "Ingleses"
    BIZANTINOS = "Bizantinos"
