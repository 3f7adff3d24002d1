"""HTTP routes for the Condottiere harness."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field

from condottiere.api.runtime import ApiState, ArmyRegistry
from condottiere.domain import Army, BattleResult, Civilization

router = APIRouter()


def get_state(request: Request) -> ApiState:
    state = getattr(request.app.state, "api_state", None)
    if state is None:  # pragma: no cover - FastAPI should always initialise state
        raise RuntimeError("API state not initialised")
    return state


ApiStateDep = Annotated[ApiState, Depends(get_state)]


class UnitSummary(BaseModel):
    id: int
    type: str
    strength: int
    age: int


class BattleRecordSummary(BaseModel):
    opponent_name: str
    result: BattleResult
    timestamp: datetime
    self_strength: int
    opponent_strength: int
    units_lost: int


class ArmySummary(BaseModel):
    name: str
    civilization: str
    gold: int
    unit_count: int
    total_strength: int
    battles_fought: int


class ArmyDetail(ArmySummary):
    units: list[UnitSummary]
    history: list[BattleRecordSummary]


class CreateArmyRequest(BaseModel):
    name: str = Field(min_length=1)
    civilization: str = Field(min_length=1)


class UnitActionResponse(BaseModel):
    success: bool
    army: ArmyDetail


class AttackRequest(BaseModel):
    opponent: str = Field(min_length=1)


class AttackResponse(BaseModel):
    result: BattleResult
    attacker_strength: int
    defender_strength: int
    attacker_units_lost: int
    defender_units_lost: int
    gold_reward: int
    attacker: ArmySummary
    defender: ArmySummary


class LoseUnitsRequest(BaseModel):
    count: int = Field(ge=0)


class LoseUnitsResponse(BaseModel):
    lost: list[UnitSummary]
    army: ArmySummary


def _lookup_army(state: ApiState, name: str) -> Army:
    try:
        return state.armies.get_army(name)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.args[0]) from exc


def _detail(army: Army) -> ArmyDetail:
    return ArmyDetail.model_validate(ArmyRegistry.to_detail_dict(army))


def _summary(army: Army) -> ArmySummary:
    return ArmySummary.model_validate(ArmyRegistry.to_summary_dict(army))


@router.get("/health")
async def health(state: ApiStateDep) -> dict[str, object]:
    return {
        "status": "ok",
        "rules_version": state.settings.rules_version,
        "armies": len(state.armies),
    }


@router.get("/rules")
async def rules_overview(state: ApiStateDep) -> dict[str, object]:
    """Expose the unit catalog, presets and battle constants for clients."""

    rules = state.rules
    return {
        "units": {
            str(unit_type): {
                "base_strength": entry.base_strength,
                "train_cost": entry.train_cost,
                "train_gain": entry.train_gain,
                "upgrade_target": str(entry.upgrade_target) if entry.upgrade_target else None,
                "upgrade_cost": entry.upgrade_cost,
            }
            for unit_type, entry in rules.units.items()
        },
        "presets": {
            name: {"pikemen": preset.pikemen, "archers": preset.archers, "knights": preset.knights}
            for name, preset in rules.presets.items()
        },
        "starting_gold": rules.economy.starting_gold,
        "battle": {
            "victory_reward": rules.battle.victory_reward,
            "units_lost_on_defeat": rules.battle.units_lost_on_defeat,
            "units_lost_on_tie": rules.battle.units_lost_on_tie,
        },
        "civilizations": [str(civ) for civ in Civilization],
    }


@router.get("/armies", response_model=list[ArmySummary])
async def list_armies(state: ApiStateDep) -> list[ArmySummary]:
    return [_summary(army) for army in state.armies.list_armies()]


@router.post("/armies", response_model=ArmyDetail, status_code=status.HTTP_201_CREATED)
async def create_army(request: CreateArmyRequest, state: ApiStateDep) -> ArmyDetail:
    async with state.armies.lock:
        try:
            army = state.armies.create_army(request.civilization, request.name)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return _detail(army)


@router.get("/armies/{name}", response_model=ArmyDetail)
async def get_army(name: str, state: ApiStateDep) -> ArmyDetail:
    return _detail(_lookup_army(state, name))


@router.post("/armies/{name}/units/{unit_id}/train", response_model=UnitActionResponse)
async def train_unit(name: str, unit_id: int, state: ApiStateDep) -> UnitActionResponse:
    async with state.armies.lock:
        army = _lookup_army(state, name)
        try:
            unit = state.armies.get_unit(army, unit_id)
        except KeyError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=exc.args[0]
            ) from exc
        success = army.train_unit(unit)
        return UnitActionResponse(success=success, army=_detail(army))


@router.post("/armies/{name}/units/{unit_id}/transform", response_model=UnitActionResponse)
async def transform_unit(name: str, unit_id: int, state: ApiStateDep) -> UnitActionResponse:
    async with state.armies.lock:
        army = _lookup_army(state, name)
        try:
            unit = state.armies.get_unit(army, unit_id)
        except KeyError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=exc.args[0]
            ) from exc
        success = army.transform_unit(unit)
        return UnitActionResponse(success=success, army=_detail(army))


@router.post("/armies/{name}/attack", response_model=AttackResponse)
async def attack(name: str, request: AttackRequest, state: ApiStateDep) -> AttackResponse:
    async with state.armies.lock:
        attacker = _lookup_army(state, name)
        defender = _lookup_army(state, request.opponent)
        try:
            report = attacker.fight(defender)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
        return AttackResponse(
            result=report.result,
            attacker_strength=report.attacker_strength,
            defender_strength=report.defender_strength,
            attacker_units_lost=report.attacker_units_lost,
            defender_units_lost=report.defender_units_lost,
            gold_reward=report.gold_reward,
            attacker=_summary(attacker),
            defender=_summary(defender),
        )


@router.post("/armies/{name}/lose", response_model=LoseUnitsResponse)
async def lose_units(name: str, request: LoseUnitsRequest, state: ApiStateDep) -> LoseUnitsResponse:
    async with state.armies.lock:
        army = _lookup_army(state, name)
        lost = army.lose_units(request.count)
        return LoseUnitsResponse(
            lost=[UnitSummary.model_validate(ArmyRegistry.to_unit_dict(unit)) for unit in lost],
            army=_summary(army),
        )


@router.post(
    "/scenarios/demo", response_model=list[ArmySummary], status_code=status.HTTP_201_CREATED
)
async def load_demo(state: ApiStateDep) -> list[ArmySummary]:
    async with state.armies.lock:
        try:
            armies = state.armies.register_demo()
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return [_summary(army) for army in armies]
