from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from dm_dashboard.infrastructure.db.session import AsyncSessionLocal

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(request: Request) -> JSONResponse:
    """Store and broker reachability, plus which collections push live updates.

    Missing subscriptions do not fail readiness: the dashboard still serves
    data, it just stops refreshing on its own.
    """
    errors: list[str] = []

    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:  # noqa: BLE001
        errors.append(f"postgres: {exc}")

    try:
        await request.app.state.redis.ping()
    except Exception as exc:  # noqa: BLE001
        errors.append(f"redis: {exc}")

    live = [c.value for c in request.app.state.controller.subscribed()]
    if errors:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "errors": errors, "live_updates": live},
        )
    return JSONResponse(content={"status": "ready", "live_updates": live})
