"""ORM model for subscriptions (tenant plans grouping users)."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base
from app.models.resource import AuditStampMixin


class Subscription(AuditStampMixin, Base):
    """Tenant plan; owns the users created for it."""

    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Subscription(id={self.id}, name={self.name!r})>"
