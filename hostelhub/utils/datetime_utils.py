"""
Date and time utilities for the booking calendar and fee months.

All persisted timestamps are naive UTC datetimes.
"""

import re
from datetime import date, datetime, timezone
from typing import Callable, Tuple

from dateutil.relativedelta import relativedelta

MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Current UTC time as a naive datetime"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class DateRangeCalculator:
    """Calendar month calculations used by bookings and fees"""

    @staticmethod
    def month_start(moment: datetime) -> datetime:
        return datetime(moment.year, moment.month, 1)

    @staticmethod
    def next_month_start(moment: datetime) -> datetime:
        """Midnight on the 1st of the month after ``moment``"""
        return DateRangeCalculator.month_start(moment) + relativedelta(months=1)

    @staticmethod
    def month_window(month: str) -> Tuple[datetime, datetime]:
        """
        Half-open window ``[start, end)`` for a ``YYYY-MM`` month key.

        Raises:
            ValueError: If the key is malformed or the month is out of range
        """
        if not MONTH_PATTERN.match(month or ""):
            raise ValueError("Month must be in YYYY-MM format")
        year, month_num = (int(part) for part in month.split("-"))
        if not 1 <= month_num <= 12:
            raise ValueError("Month must be between 01 and 12")
        start = datetime(year, month_num, 1)
        return start, start + relativedelta(months=1)

    @staticmethod
    def month_key(moment: datetime) -> str:
        """``YYYY-MM`` key of the month containing ``moment``"""
        return f"{moment.year:04d}-{moment.month:02d}"

    @staticmethod
    def day_of_month(moment: datetime) -> int:
        return moment.day

    @staticmethod
    def to_date(moment: datetime) -> date:
        return moment.date()


__all__ = ["Clock", "DateRangeCalculator", "MONTH_PATTERN", "utcnow"]
