"""API v1 router registration."""

from fastapi import APIRouter

from mess_ledger.api.routes import (
    archives,
    balances,
    calendar,
    entries,
    meals,
    members,
)

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(members.router)
v1_router.include_router(meals.router)
v1_router.include_router(entries.router)
v1_router.include_router(balances.router)
v1_router.include_router(calendar.router)
v1_router.include_router(archives.router)
