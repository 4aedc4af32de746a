"""Counts, rates and per-category breakdowns."""

from datetime import datetime
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from ..models.decision import Decision, Effectiveness, ImpactLevel
from ..models.meeting import Meeting
from ..models.observation import ClassroomWalkthrough, DanielsonScore
from ..models.task import ProjectTask, TaskStatus
from ..utils.datetime_utils import calendar_days_between, is_same_day


class StatusCounts(NamedTuple):
    pending: int
    in_progress: int
    completed: int
    overdue: int


class EffectivenessStats(NamedTuple):
    effective: int
    ineffective: int
    pending: int


def completion_rate(tasks: Sequence[ProjectTask]) -> float:
    """Share of tasks whose status is completed; 0 when there are none."""
    total = len(tasks)
    if total == 0:
        return 0.0
    completed = sum(1 for task in tasks if task.status == TaskStatus.COMPLETED)
    return completed / total


def overdue_count(tasks: Iterable[ProjectTask], now: Optional[datetime] = None) -> int:
    """Number of tasks past due and not completed."""
    now = now or datetime.now()
    return sum(1 for task in tasks if task.is_overdue(now))


def status_counts(tasks: Sequence[ProjectTask], now: Optional[datetime] = None) -> StatusCounts:
    """Pending, in-progress and completed by status; overdue by due date."""
    return StatusCounts(
        pending=sum(1 for t in tasks if t.status == TaskStatus.PENDING),
        in_progress=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
        completed=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
        overdue=overdue_count(tasks, now),
    )


def upcoming_tasks(
    tasks: Iterable[ProjectTask],
    now: Optional[datetime] = None,
    limit: int = 5,
) -> List[ProjectTask]:
    """First `limit` open tasks not yet past their due day, in input order."""
    now = now or datetime.now()
    upcoming = [t for t in tasks if not t.is_completed and t.days_to_due(now) >= 0]
    return upcoming[:limit]


def effectiveness_stats(decisions: Iterable[Decision]) -> EffectivenessStats:
    """Count decisions by review outcome."""
    decisions = list(decisions)
    return EffectivenessStats(
        effective=sum(1 for d in decisions if d.effectiveness == Effectiveness.EFFECTIVE),
        ineffective=sum(1 for d in decisions if d.effectiveness == Effectiveness.INEFFECTIVE),
        pending=sum(1 for d in decisions if d.effectiveness == Effectiveness.PENDING),
    )


def impact_breakdown(decisions: Iterable[Decision]) -> List[Tuple[ImpactLevel, int]]:
    """Count per impact level, every level present, in declaration order."""
    decisions = list(decisions)
    return [(level, sum(1 for d in decisions if d.impact == level)) for level in ImpactLevel]


def rating_breakdown(observations: Iterable[ClassroomWalkthrough]) -> List[Tuple[DanielsonScore, int]]:
    """Count per overall rating, every rating present, weakest first."""
    observations = list(observations)
    return [
        (score, sum(1 for o in observations if o.overall_rating == score))
        for score in DanielsonScore
    ]


def follow_ups_due(
    observations: Iterable[ClassroomWalkthrough],
    now: Optional[datetime] = None,
) -> List[ClassroomWalkthrough]:
    """Observations whose follow-up falls on or before today, earliest first."""
    now = now or datetime.now()
    due = [
        o for o in observations
        if o.follow_up_required
        and o.follow_up_date is not None
        and calendar_days_between(now, o.follow_up_date) <= 0
    ]
    return sorted(due, key=lambda o: o.follow_up_date)


# Today agenda

def meetings_on_day(meetings: Iterable[Meeting], day: datetime) -> List[Meeting]:
    """Meetings on the calendar day of `day`, earliest first."""
    return sorted((m for m in meetings if is_same_day(m.date, day)), key=lambda m: m.date)


def overdue_tasks(tasks: Iterable[ProjectTask], now: Optional[datetime] = None) -> List[ProjectTask]:
    """Overdue tasks, longest overdue first."""
    now = now or datetime.now()
    return sorted((t for t in tasks if t.is_overdue(now)), key=lambda t: t.due_date)


def due_today(tasks: Iterable[ProjectTask], now: Optional[datetime] = None) -> List[ProjectTask]:
    """Tasks due later today and not yet overdue, highest priority first."""
    now = now or datetime.now()
    due = [t for t in tasks if is_same_day(t.due_date, now) and not t.is_overdue(now)]
    return sorted(due, key=lambda t: t.priority.rank, reverse=True)


def pending_decisions(decisions: Iterable[Decision], limit: int = 3) -> List[Decision]:
    """Newest decisions still awaiting review."""
    pending = [d for d in decisions if not d.is_reviewed]
    return sorted(pending, key=lambda d: d.date_made, reverse=True)[:limit]


def observations_today(
    observations: Iterable[ClassroomWalkthrough],
    now: Optional[datetime] = None,
) -> List[ClassroomWalkthrough]:
    """Observations held today or with a follow-up due today."""
    now = now or datetime.now()
    return [
        o for o in observations
        if is_same_day(o.date, now)
        or (o.follow_up_required and o.follow_up_date is not None and is_same_day(o.follow_up_date, now))
    ]


def completed_today(tasks: Iterable[ProjectTask], now: Optional[datetime] = None) -> int:
    """Number of tasks completed on today's date."""
    now = now or datetime.now()
    return sum(1 for t in tasks if t.completed_date is not None and is_same_day(t.completed_date, now))
