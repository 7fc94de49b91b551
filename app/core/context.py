"""Resolve the current account, user, and subscription from an explicit security token."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.models.account import Account

if TYPE_CHECKING:
    from app.models.subscription import Subscription
    from app.models.user import User


@dataclass(frozen=True)
class SecurityToken:
    """Authenticated principal of a request; anything but an Account counts as anonymous."""

    principal: Any
    credentials: str | None = None


class AuthenticationContext:
    """
    Per-request view of who is calling.

    Every lookup short-circuits to None at the first missing link:
    token -> account -> current user -> subscription.
    """

    def __init__(self, token: SecurityToken | None = None) -> None:
        self._token = token

    @classmethod
    def anonymous(cls) -> "AuthenticationContext":
        return cls(None)

    @classmethod
    def for_account(cls, account: Account, credentials: str | None = None) -> "AuthenticationContext":
        return cls(SecurityToken(principal=account, credentials=credentials))

    @property
    def token(self) -> SecurityToken | None:
        return self._token

    def current_account(self) -> Account | None:
        if self._token is None:
            return None
        principal = self._token.principal
        if isinstance(principal, Account):
            return principal
        return None

    def current_user(self) -> "User | None":
        account = self.current_account()
        if account is None:
            return None
        return account.current_user

    def current_subscription(self) -> "Subscription | None":
        user = self.current_user()
        if user is None:
            return None
        return user.subscription
