"""SQLAlchemy ORM models."""

from app.models.account import Account, ResetState
from app.models.base import Base
from app.models.event import DomainEvent
from app.models.resource import ApiResource, AuditStampMixin, Capabilities, OwnershipPolicy
from app.models.subscription import Subscription
from app.models.user import User

__all__ = [
    "Account",
    "ApiResource",
    "AuditStampMixin",
    "Base",
    "Capabilities",
    "DomainEvent",
    "OwnershipPolicy",
    "ResetState",
    "Subscription",
    "User",
]
