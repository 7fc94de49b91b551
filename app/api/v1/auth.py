"""JWT login and auth dependencies (get_auth_context, require_current_user)."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.context import AuthenticationContext
from app.core.database import get_db
from app.core.errors import InvalidCredentialsError, UnauthenticatedError
from app.core.security import create_access_token, decode_access_token
from app.managers.account import AccountManager
from app.models.user import User
from app.schemas.account import LoginRequest, TokenResponse

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> AuthenticationContext:
    """
    Dependency: build the request's authentication context.

    No Authorization header gives an anonymous context; a bad or expired token,
    or one naming an unknown account, is rejected with 401.
    """
    if credentials is None:
        return AuthenticationContext.anonymous()
    token = credentials.credentials
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    try:
        account_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload")
    account = AccountManager(db, AuthenticationContext.anonymous()).get_by_id(account_id)
    if account is None:
        raise _unauthorized("Account not found")
    return AuthenticationContext.for_account(account, credentials=token)


def require_current_user(
    auth: Annotated[AuthenticationContext, Depends(get_auth_context)],
) -> User:
    """Dependency: require an authenticated account with a bound current user."""
    user = auth.current_user()
    if user is None:
        raise UnauthenticatedError()
    return user


@router.post("", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    account = AccountManager(db, AuthenticationContext.anonymous()).get_account_by_email(body.email)
    if account is None or not account.check_password(body.password):
        raise InvalidCredentialsError()
    return TokenResponse(token=create_access_token(account))
