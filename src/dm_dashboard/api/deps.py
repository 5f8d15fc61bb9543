"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends, Request

from dm_dashboard.infrastructure.db.uow import SqlAlchemyUoW, open_uow
from dm_dashboard.infrastructure.ws.manager import ConnectionManager
from dm_dashboard.services.reconciliation import ReconciliationController


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with open_uow() as uow:
        yield uow


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


def get_controller(request: Request) -> ReconciliationController:
    return request.app.state.controller


ControllerDep = Annotated[ReconciliationController, Depends(get_controller)]


def get_manager(request: Request) -> ConnectionManager:
    return request.app.state.ws_manager


ManagerDep = Annotated[ConnectionManager, Depends(get_manager)]
