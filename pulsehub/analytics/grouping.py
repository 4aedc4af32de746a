"""Date-based bucketing of tasks and meetings for grouped list display."""

from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from ..filters.meetings import MeetingFilter
from ..filters.tasks import TaskFilter
from ..models.meeting import Meeting
from ..models.task import ProjectTask
from ..utils.datetime_utils import is_same_day, is_same_week, is_tomorrow

T = TypeVar('T')

OVERDUE = "Overdue"
THIS_WEEK = "This Week"
THIS_MONTH = "This Month"
LATER = "Later"
TASK_BUCKETS = [OVERDUE, THIS_WEEK, THIS_MONTH, LATER]

TODAY = "Today"
TOMORROW = "Tomorrow"
UPCOMING = "Upcoming"
PAST = "Past"
MEETING_BUCKETS = [TODAY, TOMORROW, THIS_WEEK, UPCOMING, PAST]


def _bucket(
    records: Iterable[T],
    classify: Callable[[T], str],
    order: Sequence[str],
    sort_key: Callable[[T], datetime],
) -> List[Tuple[str, List[T]]]:
    """Classify each record once, then emit non-empty buckets in order, sorted."""
    grouped: Dict[str, List[T]] = {}
    for record in records:
        grouped.setdefault(classify(record), []).append(record)
    return [
        (label, sorted(grouped[label], key=sort_key))
        for label in order
        if label in grouped
    ]


def classify_task(task: ProjectTask, now: datetime, config: Optional[dict] = None) -> str:
    """Bucket label for a task; the first matching rule wins."""
    grouping = (config or {}).get('grouping', {})
    week_days = grouping.get('this_week_days', 7)
    month_days = grouping.get('this_month_days', 30)

    if task.is_overdue(now):
        return OVERDUE
    days = task.days_to_due(now)
    if days <= week_days:
        return THIS_WEEK
    elif days <= month_days:
        return THIS_MONTH
    return LATER


def classify_meeting(meeting: Meeting, now: datetime, config: Optional[dict] = None) -> str:
    """Bucket label for a meeting; the first matching rule wins."""
    first_weekday = (config or {}).get('calendar', {}).get('first_weekday', 6)

    if is_same_day(meeting.date, now):
        return TODAY
    elif is_tomorrow(meeting.date, now):
        return TOMORROW
    elif is_same_week(meeting.date, now, first_weekday):
        return THIS_WEEK
    elif meeting.date > now:
        return UPCOMING
    return PAST


def group_tasks(
    tasks: Iterable[ProjectTask],
    now: Optional[datetime] = None,
    config: Optional[dict] = None,
) -> List[Tuple[str, List[ProjectTask]]]:
    """Partition tasks into Overdue / This Week / This Month / Later by due date."""
    now = now or datetime.now()
    return _bucket(
        tasks,
        lambda task: classify_task(task, now, config),
        TASK_BUCKETS,
        lambda task: task.due_date,
    )


def group_meetings(
    meetings: Iterable[Meeting],
    now: Optional[datetime] = None,
    config: Optional[dict] = None,
) -> List[Tuple[str, List[Meeting]]]:
    """Partition meetings into Today / Tomorrow / This Week / Upcoming / Past."""
    now = now or datetime.now()
    return _bucket(
        meetings,
        lambda meeting: classify_meeting(meeting, now, config),
        MEETING_BUCKETS,
        lambda meeting: meeting.date,
    )


def grouped_tasks(
    tasks: Iterable[ProjectTask],
    task_filter: Optional[TaskFilter] = None,
    now: Optional[datetime] = None,
    config: Optional[dict] = None,
) -> List[Tuple[str, List[ProjectTask]]]:
    """Filter, then group, as the task list screen shows them."""
    task_filter = task_filter or TaskFilter()
    return group_tasks(task_filter.apply(tasks), now, config)


def grouped_meetings(
    meetings: Iterable[Meeting],
    meeting_filter: Optional[MeetingFilter] = None,
    now: Optional[datetime] = None,
    config: Optional[dict] = None,
) -> List[Tuple[str, List[Meeting]]]:
    """Filter, then group, as the meeting list screen shows them."""
    meeting_filter = meeting_filter or MeetingFilter()
    return group_meetings(meeting_filter.apply(meetings), now, config)
