"""Period-over-period trend analysis for the dashboard."""

import logging
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional, TypeVar

from ..models.decision import Decision
from ..models.meeting import Meeting
from ..models.task import ProjectTask
from ..models.trend import TimeRange, Trend
from ..utils.datetime_utils import (
    add_months,
    add_years,
    is_same_day,
    is_same_month,
    is_same_week,
    is_same_year,
)
from .stats import overdue_count

logger = logging.getLogger(__name__)

T = TypeVar('T')


class TrendAnalyzer:
    """Compares record counts in the current period with the previous one.

    The period is the calendar day, week, month or year containing ``now``.
    The previous period is the one containing ``now`` shifted back by one
    unit of the same granularity.
    """

    def __init__(
        self,
        time_range: TimeRange = TimeRange.WEEK,
        now: Optional[datetime] = None,
        config: Optional[dict] = None,
    ):
        """Initialize analyzer for a reporting granularity."""
        self.time_range = time_range
        self.now = now or datetime.now()
        self.config = config or {}
        self.first_weekday = self.config.get('calendar', {}).get('first_weekday', 6)

    def previous_reference(self) -> datetime:
        """`now` moved back one day, week, month or year."""
        if self.time_range == TimeRange.DAY:
            return self.now - timedelta(days=1)
        elif self.time_range == TimeRange.WEEK:
            return self.now - timedelta(weeks=1)
        elif self.time_range == TimeRange.MONTH:
            return add_months(self.now, -1)
        return add_years(self.now, -1)

    def in_period(self, value: datetime, reference: datetime) -> bool:
        """Whether value falls in the same period as reference."""
        if self.time_range == TimeRange.DAY:
            return is_same_day(value, reference)
        elif self.time_range == TimeRange.WEEK:
            return is_same_week(value, reference, self.first_weekday)
        elif self.time_range == TimeRange.MONTH:
            return is_same_month(value, reference)
        return is_same_year(value, reference)

    def count_in_period(
        self,
        records: Iterable[T],
        date_of: Callable[[T], Optional[datetime]],
        reference: datetime,
    ) -> int:
        """Count records whose date falls in the period containing reference."""
        count = 0
        for record in records:
            value = date_of(record)
            if value is not None and self.in_period(value, reference):
                count += 1
        return count

    def period_trend(self, records: Iterable[T], date_of: Callable[[T], Optional[datetime]]) -> Trend:
        """Trend of the current period's count against the previous period's."""
        records = list(records)
        current = self.count_in_period(records, date_of, self.now)
        previous = self.count_in_period(records, date_of, self.previous_reference())
        logger.debug("%s trend: current=%d previous=%d", self.time_range.value, current, previous)
        return Trend.from_difference(current - previous)

    def meetings_trend(self, meetings: Iterable[Meeting]) -> Trend:
        """Meetings held this period against last."""
        return self.period_trend(meetings, lambda m: m.date)

    def decisions_trend(self, decisions: Iterable[Decision]) -> Trend:
        """Decisions made this period against last."""
        return self.period_trend(decisions, lambda d: d.date_made)

    def compliance_trend(self, tasks: Iterable[ProjectTask]) -> Trend:
        """Net compliance activity this period: tasks created minus tasks completed.

        Up means the outstanding load grew; down means completions outpaced
        new work.
        """
        tasks = list(tasks)
        created = self.count_in_period(tasks, lambda t: t.created_date, self.now)
        completed = self.count_in_period(tasks, lambda t: t.completed_date, self.now)
        return Trend.from_difference(created - completed)

    def completions_trend(self, tasks: Iterable[ProjectTask]) -> Trend:
        """Tasks completed this period against last."""
        return self.period_trend(tasks, lambda t: t.completed_date)

    def overdue_trend(self, tasks: Iterable[ProjectTask]) -> Trend:
        """Current overdue count against the count that was overdue a day ago.

        When the two are equal but overdue work exists, the result is
        ``up(current)`` rather than neutral so outstanding overdue load is
        always shown.
        """
        tasks = list(tasks)
        yesterday = self.now - timedelta(days=1)
        previous = sum(1 for t in tasks if t.due_date < yesterday and not t.is_completed)
        current = overdue_count(tasks, self.now)
        difference = current - previous
        if difference == 0 and current > 0:
            return Trend.up(current)
        return Trend.from_difference(difference)
