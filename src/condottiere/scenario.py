"""Demonstration scenario driving the domain through its public API.

Six armies, two per civilization, are raised fresh on every call; nothing
here is kept at module level besides the roster definition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from condottiere.domain import Army, BattleReport, UnitType, create_army
from condottiere.domain.enums import Civilization
from condottiere.domain.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)

DEMO_ROSTER: tuple[tuple[Civilization, str], ...] = (
    (Civilization.CHINOS, "The Iron Lotus"),
    (Civilization.CHINOS, "Jade Emperor's Guard"),
    (Civilization.INGLESES, "Saxon Shieldwall"),
    (Civilization.INGLESES, "Norman Conquerors"),
    (Civilization.BIZANTINOS, "Basilisk Sentinels"),
    (Civilization.BIZANTINOS, "Golden Gate Defenders"),
)


@dataclass(slots=True)
class DemoOutcome:
    """Armies and battle reports produced by :func:`run_demo`."""

    armies: list[Army]
    reports: list[BattleReport] = field(default_factory=list)

    def army(self, name: str) -> Army:
        for army in self.armies:
            if army.name == name:
                return army
        raise KeyError(name)


def build_demo_armies(*, rules: RulesConfig = DEFAULT_RULES) -> list[Army]:
    """Raise the six demonstration armies."""

    logger.info("--- Preparing Armies ---")
    return [create_army(civ.value, name, rules=rules) for civ, name in DEMO_ROSTER]


def run_demo(*, rules: RulesConfig = DEFAULT_RULES) -> DemoOutcome:
    """Play the scripted campaign.

    The Iron Lotus asks for a third pikeman it does not have, then drills and
    promotes its first one.  The Saxon Shieldwall drills an archer into a
    knight.  Finally each army attacks the next one in roster order.
    """

    armies = build_demo_armies(rules=rules)
    outcome = DemoOutcome(armies=armies)
    lotus, _, saxons, *_ = armies

    # Chinos field only two pikemen, so asking for the third one fails.
    pikemen = lotus.find_units(UnitType.PIKEMAN)
    lotus.train_unit(pikemen[2] if len(pikemen) > 2 else None)
    lotus.train_unit(pikemen[0])
    lotus.transform_unit(pikemen[0])

    archer = saxons.find_units(UnitType.ARCHER)[0]
    saxons.train_unit(archer)
    saxons.transform_unit(archer)

    logger.info("--- Battles ---")
    for index, army in enumerate(armies):
        opponent = armies[(index + 1) % len(armies)]
        outcome.reports.append(army.fight(opponent))
    return outcome
