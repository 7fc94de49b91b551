"""ORM model for the domain event outbox."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base


class DomainEvent(Base):
    """
    Event staged in the same transaction as the change it describes.

    dispatched_at stays NULL until the outbox relay has handed the event to
    its subscribers. attempts counts failed deliveries and last_failed_at
    records the latest one; the relay gives up on an event once attempts
    reaches OUTBOX_MAX_ATTEMPTS.
    """

    __tablename__ = "domain_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    payload = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=dict)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    dispatched_at = Column(DateTime(timezone=True), nullable=True, index=True)
    attempts = Column(Integer, nullable=False, default=0, server_default="0")
    last_failed_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<DomainEvent(id={self.id}, name={self.name!r})>"
