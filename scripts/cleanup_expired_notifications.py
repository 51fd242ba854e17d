"""Delete expired notifications; meant to be run periodically (cron, systemd timer)."""

from __future__ import annotations

import argparse
import logging

from notification_center.application.use_cases.notifications import NotificationManager
from notification_center.config import get_settings
from notification_center.domain import ExpirationPolicy, StoreError
from notification_center.infrastructure.database import SessionLocal
from notification_center.infrastructure.repositories import NotificationRepository


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the cleanup run."""

    parser = argparse.ArgumentParser(
        description="Remove every notification whose expiration date has passed.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level used while running the cleanup (default: INFO)",
    )
    return parser.parse_args()


def main() -> None:
    """Run one cleanup pass against the configured database."""

    args = parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session = SessionLocal()
    try:
        manager = NotificationManager(
            NotificationRepository(session),
            policy=ExpirationPolicy.from_settings(get_settings()),
        )
        manager.ensure_storage()
        deleted = manager.cleanup_expired_notifications()
    except StoreError as exc:
        raise SystemExit(f"Notification cleanup failed: {exc}") from exc
    else:
        print(f"Deleted {deleted} expired notification(s)")
    finally:
        session.close()


if __name__ == "__main__":
    main()
