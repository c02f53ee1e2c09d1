"""
Purge read notifications older than the retention window
Run periodically (cron / scheduler):  python cleanup_notifications.py [--dry-run]
"""
import argparse
import logging

from talenthub.core.config import settings
from talenthub.core.database import SessionLocal
from talenthub.core.logging import configure_logging
from talenthub.services.notification_service import notification_service

logger = logging.getLogger("cleanup_notifications")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dry-run", action="store_true", help="only report how many would be removed")
    args = parser.parse_args(argv)

    configure_logging(settings.LOG_LEVEL)
    db = SessionLocal()
    try:
        if args.dry_run:
            count = notification_service.count_old_notifications(db)
            logger.info("%d notifications would be removed", count)
            return count
        return notification_service.cleanup_old_notifications(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
