"""Account endpoints: signup, password reset, subscription binding, subscription users."""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_auth_context, require_current_user
from app.core.config import get_settings
from app.core.context import AuthenticationContext
from app.core.database import get_db
from app.core.errors import FormValidationError, UserNotFoundError
from app.core.security import create_access_token
from app.managers.account import AccountManager
from app.managers.user import UserManager
from app.models.user import User
from app.schemas.account import (
    SubscriptionBindingResponse,
    TokenResponse,
    UserListItem,
    UsersListResponse,
)
from app.services.account_creation import AccountCreationHandler, build_creation_handler
from app.services.events import EventPublisher, OutboxEventPublisher
from app.services.password_reset import PasswordResetService
from app.services.subscription_binding import bind_active_user

router = APIRouter()

FORM_CONTENT_TYPES = frozenset({"application/x-www-form-urlencoded", "multipart/form-data"})


async def _get_submitted_data(request: Request) -> dict[str, Any]:
    """Read a JSON object or form body; an empty body is an empty submission."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise FormValidationError({"form": [f"Invalid JSON: {e!s}"]}) from e
    if not isinstance(data, dict):
        raise FormValidationError({"form": ["Body must be a JSON object."]})
    return data


def get_event_publisher(db: Annotated[Session, Depends(get_db)]) -> EventPublisher:
    return OutboxEventPublisher(db)


def get_account_manager(
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[AuthenticationContext, Depends(get_auth_context)],
) -> AccountManager:
    return AccountManager(db, auth)


def get_user_manager(
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[AuthenticationContext, Depends(get_auth_context)],
) -> UserManager:
    return UserManager(db, auth)


def get_password_reset_service(
    accounts: Annotated[AccountManager, Depends(get_account_manager)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
) -> PasswordResetService:
    return PasswordResetService(accounts, events, reset_time=get_settings().PASSWORD_RESET_TIME)


def get_creation_handler(
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[AuthenticationContext, Depends(get_auth_context)],
    events: Annotated[EventPublisher, Depends(get_event_publisher)],
) -> AccountCreationHandler:
    return build_creation_handler(get_settings(), db, auth, events)


@router.post("", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def post_account(
    request: Request,
    handler: Annotated[AccountCreationHandler, Depends(get_creation_handler)],
) -> TokenResponse:
    """Create an account from email and plainPassword; returns a JWT for it."""
    data = await _get_submitted_data(request)
    account = handler.create(data)
    return TokenResponse(token=create_access_token(account))


@router.delete("/password", status_code=status.HTTP_201_CREATED)
def delete_password(
    service: Annotated[PasswordResetService, Depends(get_password_reset_service)],
    email: str | None = Query(default=None),
) -> Response:
    """
    Request a password reset for the account registered with email.

    At most one confirmation token is issued per PASSWORD_RESET_TIME seconds;
    the token is delivered by the subscribers of the account.password_reset event.
    """
    service.request_reset(email)
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/password", response_model=TokenResponse)
async def post_password(
    request: Request,
    service: Annotated[PasswordResetService, Depends(get_password_reset_service)],
) -> TokenResponse:
    """Set a new password using the confirmationToken from a reset request."""
    data = await _get_submitted_data(request)
    account = service.confirm_reset(data.get("confirmationToken"), data)
    return TokenResponse(token=create_access_token(account))


@router.put("/subscription/{subscription_id}", response_model=SubscriptionBindingResponse)
def put_subscription(
    subscription_id: int,
    auth: Annotated[AuthenticationContext, Depends(get_auth_context)],
    accounts: Annotated[AccountManager, Depends(get_account_manager)],
    users: Annotated[UserManager, Depends(get_user_manager)],
) -> SubscriptionBindingResponse:
    """Act as the account's user in the given subscription."""
    user = bind_active_user(auth, accounts, users, subscription_id)
    return SubscriptionBindingResponse(
        account_id=user.account_id,
        subscription_id=user.subscription_id,
        user_id=user.id,
    )


@router.get("/users", response_model=UsersListResponse)
def list_users(
    current_user: Annotated[User, Depends(require_current_user)],
    users: Annotated[UserManager, Depends(get_user_manager)],
) -> UsersListResponse:
    """Users of the current subscription visible to the current user, with their capabilities."""
    items: list[UserListItem] = []
    for user in users.list_for_subscription(current_user.subscription_id):
        if not user.compute_capabilities(current_user).can_see:
            continue
        items.append(UserListItem.model_validate(user))
    return UsersListResponse(users=items)


@router.get("/users/{user_id}", response_model=UserListItem)
def get_user(
    user_id: int,
    current_user: Annotated[User, Depends(require_current_user)],
    users: Annotated[UserManager, Depends(get_user_manager)],
) -> UserListItem:
    """One user of the current subscription, with the current user's capabilities on it."""
    user = users.get_in_subscription(user_id, current_user.subscription_id)
    if user is None or not user.compute_capabilities(current_user).can_see:
        raise UserNotFoundError()
    return UserListItem.model_validate(user)
