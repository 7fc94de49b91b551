"""
Domain events: staged in an outbox table and relayed to subscribers later.

Publishing only adds a row to the caller's session, so the event is committed
(or rolled back) together with the change that caused it. Request handlers
never wait for subscribers; the relay (python -m app.outbox) delivers them.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol

from sqlalchemy.orm import Session

from app.models.event import DomainEvent

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

ACCOUNT_CREATED = "account.created"
ACCOUNT_PASSWORD_RESET = "account.password_reset"
ACCOUNT_PASSWORD_UPDATED = "account.password_updated"

Subscriber = Callable[[DomainEvent], None]


class EventPublisher(Protocol):
    """Fire-and-forget outbound channel for domain events."""

    def publish(self, name: str, payload: dict[str, Any]) -> None: ...


class OutboxEventPublisher:
    """Stage events as DomainEvent rows in the given session (committed by the caller)."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def publish(self, name: str, payload: dict[str, Any]) -> None:
        self._session.add(DomainEvent(name=name, payload=payload))
        logger.debug("Domain event staged", extra={"event": name})


def log_subscriber(event: DomainEvent) -> None:
    """Default subscriber: record the event in the application log."""
    logger.info(
        "Domain event %s dispatched",
        event.name,
        extra={"event": event.name, "event_id": event.id},
    )


def relay_pending_events(
    session: Session,
    settings: "Settings",
    subscribers: Sequence[Subscriber] = (log_subscriber,),
) -> tuple[int, int]:
    """
    Hand one batch of undispatched events to every subscriber.

    Events with fewer failed attempts go first, oldest first within the same
    count, so a failing event falls behind newer ones instead of holding the
    head of the queue. Returns (dispatched, failed). A failed event stays
    pending until it has failed OUTBOX_MAX_ATTEMPTS times; after that it is
    left undispatched and skipped.
    """
    pending = (
        session.query(DomainEvent)
        .filter(
            DomainEvent.dispatched_at.is_(None),
            DomainEvent.attempts < settings.OUTBOX_MAX_ATTEMPTS,
        )
        .order_by(DomainEvent.attempts, DomainEvent.id)
        .limit(settings.OUTBOX_BATCH_SIZE)
        .all()
    )
    dispatched = 0
    failed = 0
    for event in pending:
        try:
            for subscriber in subscribers:
                subscriber(event)
        except Exception:
            event.attempts = (event.attempts or 0) + 1
            event.last_failed_at = datetime.now(UTC)
            logger.exception(
                "Subscriber failed for domain event %s",
                event.id,
                extra={"event": event.name, "event_id": event.id, "attempts": event.attempts},
            )
            if event.attempts >= settings.OUTBOX_MAX_ATTEMPTS:
                logger.error(
                    "Giving up on domain event %s after %s attempts",
                    event.id,
                    event.attempts,
                    extra={"event": event.name, "event_id": event.id},
                )
            failed += 1
            continue
        event.dispatched_at = datetime.now(UTC)
        dispatched += 1
    session.commit()

    if pending:
        logger.info(
            "Outbox relay run: dispatched=%s, failed=%s",
            dispatched,
            failed,
        )
    return dispatched, failed
