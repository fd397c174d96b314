"""
Week arithmetic relative to the rotation epoch.

All computations run on calendar dates, never on timezone-aware instants,
so daylight-saving transitions cannot shift a date into a neighbouring week.
"""

from datetime import date, datetime, timedelta
from typing import List

from .models import WeekRange

DEFAULT_EPOCH = date(2025, 12, 29)  # Monday of week 0


def as_date(day: "date | datetime") -> date:
    """Drop any time-of-day component."""
    if isinstance(day, datetime):
        return day.date()
    return day


class WeekIndexer:
    """Maps calendar dates to week indices counted from an epoch Monday."""

    def __init__(self, epoch: date = DEFAULT_EPOCH):
        """
        Initialize the indexer.

        Args:
            epoch: Monday on which week 0 starts

        Raises:
            ValueError: If the epoch is not a Monday
        """
        epoch = as_date(epoch)
        if epoch.weekday() != 0:
            raise ValueError(
                f"Rotation epoch must be a Monday, got {epoch} ({epoch.strftime('%A')})"
            )
        self.epoch = epoch

    def weeks_passed(self, day: "date | datetime") -> int:
        """
        Whole weeks between the epoch and a date.

        Uses floor division so dates before the epoch yield negative indices:
        the Sunday just before the epoch is week -1, not week 0.
        """
        return (as_date(day) - self.epoch).days // 7

    def week_range(self, day: "date | datetime") -> WeekRange:
        """Monday and Sunday (both inclusive) of the week containing a date."""
        day = as_date(day)
        monday = day - timedelta(days=day.weekday())
        return WeekRange(start=monday, end=monday + timedelta(days=6))

    def week_dates(self, day: "date | datetime") -> List[date]:
        """The 7 dates, Monday first, of the week containing a date."""
        monday = self.week_range(day).start
        return [monday + timedelta(days=k) for k in range(7)]

    def week_start(self, week_index: int) -> date:
        """Monday of a given week index."""
        return self.epoch + timedelta(weeks=week_index)

    def week_label(self, day: "date | datetime") -> int:
        """1-based week number shown to users."""
        return self.weeks_passed(day) + 1
