"""Value objects for Git domain."""

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class FileChangeType(str, Enum):
    """Type of file change in a commit."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"


class TimePeriod(str, Enum):
    """Length of the commit window starting at the filter's since date."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    PRESENT = "present"


@dataclass(frozen=True)
class FileChange:
    """Information about a file change in a commit."""

    file_path: str
    change_type: FileChangeType
    additions: int = 0
    deletions: int = 0
    old_path: str | None = None  # For renamed/copied files


def _add_months(value: datetime, months: int) -> datetime:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


@dataclass(frozen=True)
class CommitFilter:
    """Criteria used to select commits from a repository."""

    branch: str | None = None
    since_date: datetime | None = None
    period: TimePeriod = TimePeriod.PRESENT
    file_regex: str | None = None
    max_commits: int = 50

    def until_date(self) -> datetime | None:
        """
        Compute the end of the commit window.

        Returns:
            since_date advanced by the period, or None when there is no
            since date or the period is ``present``
        """
        if self.since_date is None:
            return None

        match self.period:
            case TimePeriod.DAY:
                return self.since_date + timedelta(days=1)
            case TimePeriod.WEEK:
                return self.since_date + timedelta(days=7)
            case TimePeriod.MONTH:
                return _add_months(self.since_date, 1)
            case TimePeriod.QUARTER:
                return _add_months(self.since_date, 3)
            case TimePeriod.YEAR:
                return _add_months(self.since_date, 12)
            case _:
                return None
