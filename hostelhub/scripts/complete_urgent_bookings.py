"""
Complete urgent bookings whose leave date has arrived.

Meant to run daily from a scheduler, e.g. shortly after midnight UTC on the
1st of each month.
"""

import argparse
import sys
from datetime import date
from typing import List, Optional

from hostelhub.core.logging import get_logger, setup_logging
from hostelhub.db.session import SessionLocal
from hostelhub.services.booking import BookingService

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Complete due urgent bookings")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Treat this ISO date (YYYY-MM-DD) as today",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging()

    db = SessionLocal()
    try:
        result = BookingService(db).complete_due_urgent_bookings(args.date)
    finally:
        db.close()

    if not result.is_success:
        logger.error(f"Urgent booking completion failed: {result.error.message}")
        return 1

    logger.info(result.message)
    return 0


if __name__ == "__main__":
    sys.exit(main())
