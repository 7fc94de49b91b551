"""ORM model for subscription-scoped users."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.core.security import hash_password
from app.models.base import Base
from app.models.resource import ApiResource

ROLE_ADMIN = "admin"
ROLE_USER = "user"


class User(ApiResource, Base):
    """
    Actor inside one subscription, owned by one account.

    An account may own users in several subscriptions; Account.current_user
    selects the one it is acting as.

    role: 'admin' or 'user'
    """

    __tablename__ = "users"

    username = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=True)
    role = Column(String(32), nullable=False, default=ROLE_USER)
    account_id = Column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    account = relationship("Account", foreign_keys=[account_id], back_populates="users")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r}, subscription_id={self.subscription_id})>"

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def set_password(self, plain_password: str) -> None:
        self.password_hash = hash_password(plain_password)

    def _is(self, user: "User") -> bool:
        return user is self or (self.id is not None and user.id == self.id)

    def _same_subscription(self, user: "User") -> bool:
        return self.subscription_id is not None and user.subscription_id == self.subscription_id

    def check_user_can_create(self, user: "User") -> bool:
        return user.is_admin and self._same_subscription(user)

    def check_user_can_edit(self, user: "User") -> bool:
        return self._is(user) or (user.is_admin and self._same_subscription(user))

    def check_user_can_see(self, user: "User") -> bool:
        return self._is(user) or self._same_subscription(user)

    def check_user_can_delete(self, user: "User") -> bool:
        return not self._is(user) and user.is_admin and self._same_subscription(user)

    def api_path(self) -> str:
        return f"/account/users/{self.id}"
