"""User creation and subscription-scoped lookups."""

from app.managers.base import BaseEntityManager
from app.models.account import Account
from app.models.subscription import Subscription
from app.models.user import ROLE_USER, User


class UserManager(BaseEntityManager[User]):
    model = User

    def create(
        self,
        subscription: Subscription,
        account: Account,
        username: str,
        role: str = ROLE_USER,
    ) -> User:
        """Return a new, unsaved user of subscription owned by account."""
        return User(
            subscription=subscription,
            account=account,
            username=username,
            email=account.email,
            role=role,
        )

    def get_by_subscription_and_account(self, subscription_id: int, account: Account) -> User | None:
        """The user of subscription_id that account owns, or None."""
        if account.id is None:
            return None
        return (
            self.query()
            .filter(User.subscription_id == subscription_id, User.account_id == account.id)
            .first()
        )

    def get_in_subscription(self, user_id: int, subscription_id: int | None) -> User | None:
        if subscription_id is None:
            return None
        return (
            self.query()
            .filter(User.id == user_id, User.subscription_id == subscription_id)
            .first()
        )

    def list_for_subscription(self, subscription_id: int | None) -> list[User]:
        if subscription_id is None:
            return []
        return (
            self.query()
            .filter(User.subscription_id == subscription_id)
            .order_by(User.id)
            .all()
        )
