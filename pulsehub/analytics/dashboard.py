"""Dashboard summary built from the store."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from ..engine.store import EntityStore
from ..models.decision import Decision, ImpactLevel
from ..models.meeting import Meeting
from ..models.observation import ClassroomWalkthrough
from ..models.task import ProjectTask
from ..models.trend import TimeRange, Trend
from .stats import (
    EffectivenessStats,
    completed_today,
    completion_rate,
    due_today,
    effectiveness_stats,
    impact_breakdown,
    meetings_on_day,
    observations_today,
    overdue_tasks,
    pending_decisions,
    upcoming_tasks,
)
from .trends import TrendAnalyzer


def greeting(now: Optional[datetime] = None) -> str:
    """Time-of-day greeting shown at the top of the dashboard."""
    hour = (now or datetime.now()).hour
    if hour < 12:
        return "Good Morning"
    elif hour < 17:
        return "Good Afternoon"
    return "Good Evening"


@dataclass
class DashboardSummary:
    """Everything the dashboard shows for one reporting period, plus today's agenda."""

    generated_at: datetime
    time_range: TimeRange
    greeting: str
    overdue: List[ProjectTask]
    completion_rate: float
    upcoming: List[ProjectTask]
    trends: Dict[str, Trend]
    effectiveness: EffectivenessStats
    impact: List[Tuple[ImpactLevel, int]] = field(default_factory=list)
    todays_meetings: List[Meeting] = field(default_factory=list)
    tomorrows_meetings: List[Meeting] = field(default_factory=list)
    due_today: List[ProjectTask] = field(default_factory=list)
    pending_decisions: List[Decision] = field(default_factory=list)
    todays_observations: List[ClassroomWalkthrough] = field(default_factory=list)
    completed_today: int = 0

    @property
    def meetings_today(self) -> int:
        """Number of meetings on today's date."""
        return len(self.todays_meetings)

    @property
    def overdue_tasks(self) -> int:
        """Number of overdue tasks."""
        return len(self.overdue)

    @property
    def items_today(self) -> int:
        """Overdue tasks, tasks due today and today's meetings."""
        return len(self.overdue) + len(self.due_today) + len(self.todays_meetings)

    @property
    def has_items_today(self) -> bool:
        """Whether today's agenda has anything on it."""
        return bool(
            self.items_today or self.pending_decisions or self.todays_observations
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert summary to dictionary for JSON export."""
        def task_entry(task):
            return {'id': task.id, 'title': task.title, 'due_text': task.due_text(self.generated_at)}

        def meeting_entry(meeting):
            return {'id': meeting.id, 'title': meeting.title, 'date': meeting.date.isoformat()}

        return {
            'generated_at': self.generated_at.isoformat(),
            'time_range': self.time_range.value,
            'greeting': self.greeting,
            'meetings_today': self.meetings_today,
            'overdue_tasks': self.overdue_tasks,
            'completion_rate': self.completion_rate,
            'upcoming': [task_entry(t) for t in self.upcoming],
            'trends': {name: trend.to_dict() for name, trend in self.trends.items()},
            'effectiveness': self.effectiveness._asdict(),
            'impact': {level.value: count for level, count in self.impact},
            'today': {
                'meetings': [meeting_entry(m) for m in self.todays_meetings],
                'tomorrow': [meeting_entry(m) for m in self.tomorrows_meetings],
                'overdue': [task_entry(t) for t in self.overdue],
                'due': [
                    dict(task_entry(t), priority=t.priority.value) for t in self.due_today
                ],
                'pending_decisions': [
                    {'id': d.id, 'title': d.title, 'date_made': d.date_made.isoformat()}
                    for d in self.pending_decisions
                ],
                'observations': [
                    {'id': o.id, 'teacher_name': o.teacher_name, 'subject': o.subject}
                    for o in self.todays_observations
                ],
                'completed': self.completed_today,
                'total': self.items_today,
            },
        }

    def to_human_readable(self) -> str:
        """Generate human-readable summary."""
        lines = [
            f"=== {self.greeting} ===",
            f"Period: {self.time_range.value}",
            f"Generated: {self.generated_at:%Y-%m-%d %H:%M}",
            "",
            f"Meetings today: {self.meetings_today}",
            f"Overdue tasks: {self.overdue_tasks}",
            f"Completion rate: {self.completion_rate:.0%}",
            f"Completed today: {self.completed_today} of {self.items_today}",
            "",
            "Today:",
        ]

        if not self.has_items_today:
            lines.append("  (all clear)")
        for meeting in self.todays_meetings:
            lines.append(f"  {meeting.date:%H:%M}  {meeting.title}")
        for task in self.overdue:
            lines.append(f"  ! {task.title} - {task.due_text(self.generated_at)}")
        for task in self.due_today:
            lines.append(f"  [{task.priority.value}] {task.title} - {task.due_text(self.generated_at)}")
        for decision in self.pending_decisions:
            lines.append(f"  Review: {decision.title}")
        for observation in self.todays_observations:
            lines.append(f"  Observation: {observation.teacher_name} ({observation.subject})")

        if self.tomorrows_meetings:
            lines.extend(["", "Tomorrow:"])
            for meeting in self.tomorrows_meetings:
                lines.append(f"  {meeting.date:%H:%M}  {meeting.title}")

        lines.extend(["", "Trends:"])
        for name, trend in self.trends.items():
            lines.append(f"  {name}: {trend.display_value}")

        lines.extend(["", "Upcoming:"])
        if not self.upcoming:
            lines.append("  (nothing due)")
        for task in self.upcoming:
            lines.append(f"  {task.title} - {task.due_text(self.generated_at)}")

        lines.extend([
            "",
            "Decision effectiveness:",
            f"  Effective: {self.effectiveness.effective}",
            f"  Ineffective: {self.effectiveness.ineffective}",
            f"  Pending review: {self.effectiveness.pending}",
            "",
            "Decision impact:",
        ])
        for level, count in self.impact:
            lines.append(f"  {level.value}: {count}")

        lines.append("=" * 50)

        return "\n".join(lines)


def build_dashboard(
    store: EntityStore,
    time_range: TimeRange = TimeRange.WEEK,
    now: Optional[datetime] = None,
    config: Optional[dict] = None,
) -> DashboardSummary:
    """Assemble the dashboard from the store's current contents."""
    now = now or datetime.now()
    config = config or {}
    dashboard_config = config.get('dashboard', {})
    limit = dashboard_config.get('upcoming_limit', 5)
    decision_limit = dashboard_config.get('pending_decision_limit', 3)

    tasks = store.all(ProjectTask)
    meetings = store.all(Meeting)
    decisions = store.all(Decision)
    observations = store.all(ClassroomWalkthrough)
    analyzer = TrendAnalyzer(time_range, now, config)

    return DashboardSummary(
        generated_at=now,
        time_range=time_range,
        greeting=greeting(now),
        overdue=overdue_tasks(tasks, now),
        completion_rate=completion_rate(tasks),
        upcoming=upcoming_tasks(sorted(tasks, key=lambda t: t.due_date), now, limit),
        trends={
            'meetings': analyzer.meetings_trend(meetings),
            'decisions': analyzer.decisions_trend(decisions),
            'compliance': analyzer.compliance_trend(tasks),
            'overdue': analyzer.overdue_trend(tasks),
        },
        effectiveness=effectiveness_stats(decisions),
        impact=impact_breakdown(decisions),
        todays_meetings=meetings_on_day(meetings, now),
        tomorrows_meetings=meetings_on_day(meetings, now + timedelta(days=1)),
        due_today=due_today(tasks, now),
        pending_decisions=pending_decisions(decisions, decision_limit),
        todays_observations=observations_today(observations, now),
        completed_today=completed_today(tasks, now),
    )
