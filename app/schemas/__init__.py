"""Pydantic request/response schemas."""

from app.schemas.account import (
    LoginRequest,
    SubscriptionBindingResponse,
    TokenResponse,
    UserListItem,
    UsersListResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "SubscriptionBindingResponse",
    "TokenResponse",
    "UserListItem",
    "UsersListResponse",
]
