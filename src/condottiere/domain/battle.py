"""Battle resolution rules.

Battles are deterministic: the side with the greater total strength wins,
collects the victory reward and strips the loser of its strongest units.
Equal totals are a tie and cost both sides their single strongest unit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from .enums import BattleResult
from .models import BattleRecord
from .rules_config import RulesConfig

if TYPE_CHECKING:
    from .army import Army

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BattleReport:
    """Summary of a resolved battle, seen from the attacker's side."""

    attacker_name: str
    defender_name: str
    result: BattleResult
    attacker_strength: int
    defender_strength: int
    attacker_units_lost: int
    defender_units_lost: int
    gold_reward: int
    timestamp: datetime


def compare_strengths(attacker_strength: int, defender_strength: int) -> BattleResult:
    """Outcome for the attacker given both totals."""
    if attacker_strength > defender_strength:
        return BattleResult.WIN
    if defender_strength > attacker_strength:
        return BattleResult.LOSS
    return BattleResult.TIE


def resolve_battle(
    attacker: Army,
    defender: Army,
    *,
    rules: RulesConfig | None = None,
    timestamp: datetime | None = None,
) -> BattleReport:
    """Fight ``attacker`` against ``defender`` and apply the consequences.

    Gold and casualties are applied first; both histories are written
    afterwards so each record matches the post-battle state.

    Raises:
        ValueError: if an army is asked to fight itself.
    """
    if attacker is defender:
        raise ValueError(f"army {attacker.name} cannot attack itself")

    rules = rules or attacker.rules
    battle_rules = rules.battle
    attacker_strength = attacker.total_strength
    defender_strength = defender.total_strength
    result = compare_strengths(attacker_strength, defender_strength)

    attacker_lost = 0
    defender_lost = 0
    reward = 0
    if result is BattleResult.WIN:
        reward = battle_rules.victory_reward
        attacker.add_gold(reward)
        defender_lost = len(defender.lose_units(battle_rules.units_lost_on_defeat))
        _log_victory(attacker, defender, reward, defender_lost)
    elif result is BattleResult.LOSS:
        reward = battle_rules.victory_reward
        defender.add_gold(reward)
        attacker_lost = len(attacker.lose_units(battle_rules.units_lost_on_defeat))
        _log_victory(defender, attacker, reward, attacker_lost)
    else:
        attacker_lost = len(attacker.lose_units(battle_rules.units_lost_on_tie))
        defender_lost = len(defender.lose_units(battle_rules.units_lost_on_tie))
        logger.info(
            "It's a TIE! %s loses %d units, %s loses %d units",
            attacker.name,
            attacker_lost,
            defender.name,
            defender_lost,
            extra={
                "event": "battle_tied",
                "army": attacker.name,
                "opponent": defender.name,
                "units_lost": attacker_lost,
                "opponent_units_lost": defender_lost,
            },
        )

    # Both records share one timestamp so the two histories line up.
    when = timestamp or datetime.now(UTC)
    attacker._record_battle(
        BattleRecord(
            opponent_name=defender.name,
            result=result,
            timestamp=when,
            self_strength=attacker_strength,
            opponent_strength=defender_strength,
            units_lost=attacker_lost,
        )
    )
    defender._record_battle(
        BattleRecord(
            opponent_name=attacker.name,
            result=result.flipped(),
            timestamp=when,
            self_strength=defender_strength,
            opponent_strength=attacker_strength,
            units_lost=defender_lost,
        )
    )

    logger.info(
        "After battle: %s units: %d, gold: %d. %s units: %d, gold: %d.",
        attacker.name,
        len(attacker.units),
        attacker.gold,
        defender.name,
        len(defender.units),
        defender.gold,
        extra={
            "event": "battle_resolved",
            "army": attacker.name,
            "opponent": defender.name,
            "result": str(result),
        },
    )
    return BattleReport(
        attacker_name=attacker.name,
        defender_name=defender.name,
        result=result,
        attacker_strength=attacker_strength,
        defender_strength=defender_strength,
        attacker_units_lost=attacker_lost,
        defender_units_lost=defender_lost,
        gold_reward=reward,
        timestamp=when,
    )


def _log_victory(winner: Army, loser: Army, reward: int, units_lost: int) -> None:
    logger.info(
        "%s WINS! Gains %d gold. %s loses %d units.",
        winner.name,
        reward,
        loser.name,
        units_lost,
        extra={
            "event": "battle_won",
            "army": winner.name,
            "opponent": loser.name,
            "reward": reward,
            "units_lost": units_lost,
        },
    )
