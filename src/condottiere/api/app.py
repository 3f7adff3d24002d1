"""ASGI entry point for the Condottiere harness."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from condottiere import __version__
from condottiere.api import routes
from condottiere.api.runtime import ApiState, build_state
from condottiere.config import Settings, get_settings

logger = logging.getLogger(__name__)


def _allow_origins(app: FastAPI, origins: list[str]) -> None:
    if not origins:
        return
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )


def create_app(
    *,
    state_factory: Callable[[], ApiState] = build_state,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the harness; armies live on ``app.state.api_state`` while it runs."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.api_state = state = state_factory()
        logger.info(
            "harness started with rules %s",
            state.settings.rules_version,
            extra={"event": "harness_started", "rules_version": state.settings.rules_version},
        )
        try:
            yield
        finally:
            await state.shutdown()
            del app.state.api_state
            logger.info("harness stopped", extra={"event": "harness_stopped"})

    app = FastAPI(title="Condottiere", version=__version__, lifespan=lifespan)
    _allow_origins(app, settings.cors_origins)
    app.include_router(routes.router)
    return app


app = create_app()
