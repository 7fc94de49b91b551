"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import account, auth, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/account/token", tags=["auth"])
router.include_router(account.router, prefix="/account", tags=["account"])
