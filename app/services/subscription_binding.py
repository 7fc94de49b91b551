"""Select which of its users an account acts as, by subscription."""

import logging

from app.core.context import AuthenticationContext
from app.core.errors import InvalidBindingError, UnauthenticatedError
from app.managers.account import AccountManager
from app.managers.user import UserManager
from app.models.user import User

logger = logging.getLogger(__name__)


def bind_active_user(
    auth: AuthenticationContext,
    accounts: AccountManager,
    users: UserManager,
    subscription_id: int,
) -> User:
    """
    Make the current account's user in subscription_id its current user.

    The user is looked up by subscription AND owning account, so a
    subscription the account has no user in is rejected before any change.
    """
    account = auth.current_account()
    if account is None:
        raise UnauthenticatedError()

    user = users.get_by_subscription_and_account(subscription_id, account)
    if user is None:
        raise InvalidBindingError(subscription_id=subscription_id)

    account.current_user = user
    accounts.update(account)
    logger.info(
        "Account bound to subscription user",
        extra={"account_id": account.id, "user_id": user.id, "subscription_id": subscription_id},
    )
    return user
