from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import redis.asyncio as aioredis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dm_dashboard.api.v1.routers import ai_config, dashboard, health, ws
from dm_dashboard.api.v1.schemas.dashboard import SnapshotResponse
from dm_dashboard.application.exceptions import StoreWriteError
from dm_dashboard.config import settings
from dm_dashboard.infrastructure.bus.redis_pubsub import RedisChangeChannel
from dm_dashboard.infrastructure.db.session import dispose_engine
from dm_dashboard.infrastructure.db.uow import open_uow
from dm_dashboard.infrastructure.ws.manager import ConnectionManager
from dm_dashboard.infrastructure.ws.reporter import WsErrorReporter
from dm_dashboard.services.data_access import StoreReader
from dm_dashboard.services.reconciliation import ReconciliationController
from dm_dashboard.services.view_state import ViewSnapshot, ViewStateStore

logger = logging.getLogger(__name__)


def _push_snapshot(manager: ConnectionManager):
    def listener(snapshot: ViewSnapshot) -> None:
        data = SnapshotResponse.from_snapshot(snapshot).model_dump(mode="json")
        manager.publish("snapshot.updated", data)

    return listener


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    app.state.redis = aioredis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
    )
    logger.info("Redis connection pool created")

    manager = ConnectionManager()
    store = ViewStateStore()
    remove_listener = store.add_listener(_push_snapshot(manager))
    app.state.ws_manager = manager

    try:
        async with ReconciliationController(
            store,
            StoreReader(open_uow),
            RedisChangeChannel(app.state.redis, settings.REDIS_CHANGES_PREFIX),
            WsErrorReporter(manager),
        ) as controller:
            app.state.controller = controller
            yield
    finally:
        remove_listener()
        await app.state.redis.aclose()
        logger.info("Redis connection pool closed")
        await dispose_engine()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Instagram DM AI Dashboard",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(dashboard.router)
    app.include_router(ai_config.router)
    app.include_router(ws.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StoreWriteError)
    async def _write_failed(_req: Request, exc: StoreWriteError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": exc.detail})
