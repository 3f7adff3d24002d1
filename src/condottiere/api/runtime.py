"""Runtime primitives backing the Condottiere HTTP harness."""

from __future__ import annotations

import asyncio
import logging

from condottiere.config import Settings, get_settings
from condottiere.domain import Army, BattleRecord, Unit, create_army
from condottiere.domain.rules_config import DEFAULT_RULES, RulesConfig
from condottiere.scenario import build_demo_armies

logger = logging.getLogger(__name__)


class ArmyRegistry:
    """In-memory armies keyed by name.

    Every mutating request must hold :attr:`lock`.  A battle touches two
    armies, so one lock for the whole registry keeps concurrent requests
    from interleaving without any lock ordering between armies.
    """

    def __init__(self, *, rules: RulesConfig = DEFAULT_RULES) -> None:
        self._rules = rules
        self._armies: dict[str, Army] = {}
        self.lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._armies)

    def list_armies(self) -> list[Army]:
        return list(self._armies.values())

    def get_army(self, name: str) -> Army:
        """Return the named army or raise ``KeyError``."""

        try:
            return self._armies[name]
        except KeyError:
            raise KeyError(f"army '{name}' not found") from None

    def create_army(self, civilization: str, name: str) -> Army:
        """Raise and register a new army; names must be unique."""

        if name in self._armies:
            raise ValueError(f"army '{name}' already exists")
        army = create_army(civilization, name, rules=self._rules)
        self._armies[name] = army
        return army

    def register_demo(self) -> list[Army]:
        """Register the demonstration armies, refusing any name clash."""

        armies = build_demo_armies(rules=self._rules)
        clashes = sorted(army.name for army in armies if army.name in self._armies)
        if clashes:
            raise ValueError(f"armies already exist: {', '.join(clashes)}")
        for army in armies:
            self._armies[army.name] = army
        return armies

    @staticmethod
    def get_unit(army: Army, unit_id: int) -> Unit:
        unit = army.get_unit(unit_id)
        if unit is None:
            raise KeyError(f"unit {unit_id} not found in army '{army.name}'")
        return unit

    def clear(self) -> None:
        self._armies.clear()

    @staticmethod
    def to_unit_dict(unit: Unit) -> dict[str, object]:
        return {
            "id": int(unit.id),
            "type": str(unit.type),
            "strength": unit.strength,
            "age": unit.age,
        }

    @staticmethod
    def to_record_dict(record: BattleRecord) -> dict[str, object]:
        return {
            "opponent_name": record.opponent_name,
            "result": str(record.result),
            "timestamp": record.timestamp.isoformat(),
            "self_strength": record.self_strength,
            "opponent_strength": record.opponent_strength,
            "units_lost": record.units_lost,
        }

    @staticmethod
    def to_summary_dict(army: Army) -> dict[str, object]:
        """Return a JSON-friendly overview of an army."""

        return {
            "name": army.name,
            "civilization": army.civilization,
            "gold": army.gold,
            "unit_count": len(army.units),
            "total_strength": army.total_strength,
            "battles_fought": len(army.battle_history),
        }

    @staticmethod
    def to_detail_dict(army: Army) -> dict[str, object]:
        """Return a richer representation including roster and history."""

        summary = ArmyRegistry.to_summary_dict(army)
        summary.update(
            {
                "units": [ArmyRegistry.to_unit_dict(unit) for unit in army.units],
                "history": [ArmyRegistry.to_record_dict(rec) for rec in army.battle_history],
            }
        )
        return summary


class ApiState:
    """Aggregated services shared by the FastAPI layer."""

    def __init__(
        self, *, settings: Settings | None = None, rules: RulesConfig = DEFAULT_RULES
    ) -> None:
        self.settings = settings or get_settings()
        self.rules = rules
        self.armies = ArmyRegistry(rules=rules)

    async def shutdown(self) -> None:
        async with self.armies.lock:
            logger.info("discarding %d armies on shutdown", len(self.armies))
            self.armies.clear()


def build_state() -> ApiState:
    """Factory used by the API to initialize state."""

    return ApiState()
