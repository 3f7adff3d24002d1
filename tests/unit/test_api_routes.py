"""Integration tests for the FastAPI harness."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from condottiere.api.app import create_app
from condottiere.api.runtime import ApiState
from condottiere.config import Settings


def _make_app():
    def factory() -> ApiState:
        return ApiState(settings=Settings(_env_file=None, rules_version="test"))

    app = create_app(state_factory=factory)
    transport = ASGITransport(app=app)
    return app, transport


async def _create_army(client: AsyncClient, name: str, civilization: str) -> dict:
    response = await client.post("/armies", json={"name": name, "civilization": civilization})
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_army_lifecycle_via_api():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "rules_version": "test", "armies": 0}

        saxons = await _create_army(client, "Saxons", "Ingleses")
        assert saxons["gold"] == 1000
        assert saxons["total_strength"] == 350
        assert len(saxons["units"]) == 30

        response = await client.post(
            "/armies", json={"name": "Saxons", "civilization": "Chinos"}
        )
        assert response.status_code == 409

        pikeman = next(unit for unit in saxons["units"] if unit["type"] == "Pikeman")
        response = await client.post(f"/armies/Saxons/units/{pikeman['id']}/train")
        assert response.status_code == 200
        payload = response.json()
        assert payload["success"] is True
        assert payload["army"]["gold"] == 990
        trained = next(unit for unit in payload["army"]["units"] if unit["id"] == pikeman["id"])
        assert trained["strength"] == 8

        knight = next(unit for unit in saxons["units"] if unit["type"] == "Knight")
        response = await client.post(f"/armies/Saxons/units/{knight['id']}/transform")
        assert response.status_code == 200
        assert response.json()["success"] is False
        assert response.json()["army"]["gold"] == 990

        response = await client.post(f"/armies/Saxons/units/{pikeman['id']}/transform")
        assert response.json()["success"] is True
        assert response.json()["army"]["gold"] == 960

        response = await client.post("/armies/Saxons/units/999999/train")
        assert response.status_code == 404

        rebels = await _create_army(client, "Rebels", "Atlantes")
        assert rebels["units"] == []

        response = await client.post("/armies/Saxons/attack", json={"opponent": "Rebels"})
        assert response.status_code == 200
        battle = response.json()
        assert battle["result"] == "win"
        assert battle["gold_reward"] == 100
        assert battle["attacker"]["gold"] == 1060
        assert battle["defender_units_lost"] == 0

        response = await client.get("/armies/Rebels")
        history = response.json()["history"]
        assert history[0]["result"] == "loss"
        assert history[0]["opponent_name"] == "Saxons"

        response = await client.post("/armies/Saxons/lose", json={"count": 3})
        assert response.status_code == 200
        lost = response.json()["lost"]
        assert [unit["type"] for unit in lost] == ["Knight", "Knight", "Knight"]
        assert response.json()["army"]["unit_count"] == 27

        response = await client.get("/armies")
        assert [army["name"] for army in response.json()] == ["Saxons", "Rebels"]


@pytest.mark.asyncio
async def test_error_responses():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        await _create_army(client, "Basilisk", "Bizantinos")

        response = await client.get("/armies/Nobody")
        assert response.status_code == 404

        response = await client.post(
            "/armies/Basilisk/attack", json={"opponent": "Basilisk"}
        )
        assert response.status_code == 400

        response = await client.post("/armies/Basilisk/attack", json={"opponent": "Nobody"})
        assert response.status_code == 404

        response = await client.post("/armies/Basilisk/lose", json={"count": -1})
        assert response.status_code == 422


@pytest.mark.asyncio
async def test_demo_scenario_and_rules():
    app, transport = _make_app()

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.post("/scenarios/demo")
        assert response.status_code == 201
        assert len(response.json()) == 6

        response = await client.post("/scenarios/demo")
        assert response.status_code == 409

        response = await client.get("/rules")
        rules = response.json()
        assert rules["units"]["Pikeman"]["upgrade_target"] == "Archer"
        assert rules["units"]["Knight"]["upgrade_target"] is None
        assert rules["presets"]["Chinos"] == {"pikemen": 2, "archers": 25, "knights": 2}
        assert rules["starting_gold"] == 1000
        assert rules["battle"]["victory_reward"] == 100


@pytest.mark.asyncio
async def test_lifespan_installs_and_discards_state():
    built = []

    def factory() -> ApiState:
        built.append(ApiState(settings=Settings(_env_file=None, rules_version="test")))
        return built[-1]

    app = create_app(
        state_factory=factory,
        settings=Settings(_env_file=None, cors_origins=[]),
    )
    assert built == []

    async with app.router.lifespan_context(app):
        assert app.state.api_state is built[0]
        built[0].armies.register_demo()
        assert len(built[0].armies) == 6

    assert len(built[0].armies) == 0
    assert not hasattr(app.state, "api_state")
