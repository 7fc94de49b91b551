"""Request/response schemas for account endpoints."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Account email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class TokenResponse(BaseModel):
    """JWT access token returned after signup, login, or a password reset."""

    token: str = Field(..., description="JWT access token")


class SubscriptionBindingResponse(BaseModel):
    """The user an account now acts as."""

    account_id: int
    subscription_id: int
    user_id: int


class UserListItem(BaseModel):
    """User entry with the capabilities of the viewing user (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str | None = None
    role: str
    created_at: datetime | None = None
    created_by_id: int | None = None
    user_can_edit: bool
    user_can_delete: bool
    user_can_see: bool
    self_link: str | None = Field(
        default=None,
        validation_alias=AliasChoices("self_link", "self"),
        serialization_alias="self",
        description="API path of this user",
    )


class UsersListResponse(BaseModel):
    """Response for GET /account/users."""

    users: list[UserListItem]
