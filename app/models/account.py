"""ORM model for tenant-level login accounts and their password reset state."""

from datetime import UTC, datetime
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from app.core.security import hash_password, verify_password
from app.models.base import Base


class ResetState(str, Enum):
    """Password reset state of an account."""

    NO_RESET_PENDING = "no_reset_pending"
    RESET_PENDING = "reset_pending"


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Account(Base):
    """
    Login identity of a tenant.

    confirmation_token and confirmation_requested_at are set together when a
    password reset is requested and cleared together when it is consumed.
    current_user is the user the account is acting as (None until bound).
    """

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=True)
    confirmation_token = Column(String(255), nullable=True, unique=True, index=True)
    confirmation_requested_at = Column(DateTime(timezone=True), nullable=True)
    current_user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL", use_alter=True, name="fk_accounts_current_user"),
        nullable=True,
    )
    subscription_id = Column(
        Integer,
        ForeignKey("subscriptions.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    current_user = relationship("User", foreign_keys=[current_user_id], post_update=True)
    subscription = relationship("Subscription", foreign_keys=[subscription_id])
    users = relationship("User", foreign_keys="User.account_id", back_populates="account")

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, email={self.email!r})>"

    @property
    def reset_state(self) -> ResetState:
        if self.confirmation_token is None:
            return ResetState.NO_RESET_PENDING
        return ResetState.RESET_PENDING

    def reset_requested_by(self, cutoff: datetime) -> bool:
        """True when no reset was requested yet or the last request happened at or before cutoff."""
        if self.confirmation_requested_at is None:
            return True
        return _as_utc(self.confirmation_requested_at) <= cutoff

    def issue_confirmation_token(self, token: str, now: datetime) -> None:
        self.confirmation_token = token
        self.confirmation_requested_at = now

    def apply_new_password(self, plain_password: str) -> None:
        """Store the new password and consume the pending confirmation token."""
        self.password_hash = hash_password(plain_password)
        self.confirmation_token = None
        self.confirmation_requested_at = None

    def check_password(self, plain_password: str) -> bool:
        return verify_password(plain_password, self.password_hash)
