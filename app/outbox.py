"""
CLI entrypoint for the domain event relay. Run from cron, e.g.:

  python -m app.outbox

Or every minute: * * * * * cd /path/to/accounts && .venv/bin/python -m app.outbox
"""

import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.services.events import relay_pending_events

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Relay one batch of pending domain events to their subscribers."""
    settings = get_settings()
    db = SessionLocal()
    try:
        dispatched, failed = relay_pending_events(db, settings)
        logger.info("Outbox relay completed: dispatched=%s failed=%s", dispatched, failed)
        return 0 if failed == 0 else 1
    except Exception as e:
        logger.exception("Outbox relay failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
