"""
Tests for pulsehub/analytics/dashboard.py
"""

import json
from datetime import timedelta

import pytest

from pulsehub.analytics.dashboard import build_dashboard, greeting
from pulsehub.engine.store import EntityStore
from pulsehub.models import (
    ClassroomWalkthrough,
    Decision,
    Effectiveness,
    Meeting,
    Priority,
    TaskStatus,
    TimeRange,
    Trend,
)

from .conftest import NOW


@pytest.mark.parametrize("hour, expected", [
    (6, "Good Morning"),
    (11, "Good Morning"),
    (12, "Good Afternoon"),
    (16, "Good Afternoon"),
    (17, "Good Evening"),
])
def test_greeting(hour, expected):
    assert greeting(NOW.replace(hour=hour)) == expected


class TestBuildDashboard:
    def test_summary(self, populated_store, config):
        summary = build_dashboard(populated_store, TimeRange.WEEK, NOW, config)

        assert summary.greeting == "Good Afternoon"
        assert summary.meetings_today == 0
        assert summary.overdue_tasks == 1
        assert summary.completion_rate == pytest.approx(1 / 3)
        assert [t.title for t in summary.upcoming] == ["Fire Drill Documentation"]
        assert summary.effectiveness.effective == 1

    def test_trends(self, populated_store, config):
        trends = build_dashboard(populated_store, TimeRange.WEEK, NOW, config).trends
        assert trends == {
            'meetings': Trend.up(1),
            'decisions': Trend.up(1),
            'compliance': Trend.neutral(),
            'overdue': Trend.up(1),
        }

    def test_empty_store(self):
        summary = build_dashboard(EntityStore(), TimeRange.MONTH, NOW)
        assert summary.completion_rate == 0.0
        assert summary.upcoming == []
        assert all(trend == Trend.neutral() for trend in summary.trends.values())

    def test_to_dict_is_json_safe(self, populated_store):
        data = build_dashboard(populated_store, TimeRange.WEEK, NOW).to_dict()
        restored = json.loads(json.dumps(data))
        assert restored['trends']['overdue'] == {'direction': 'up', 'magnitude': 1}
        assert restored['impact']['Low'] == 1
        assert restored['upcoming'][0]['due_text'] == "Due in 3 days"

    def test_human_readable(self, populated_store):
        text = build_dashboard(populated_store, TimeRange.WEEK, NOW).to_human_readable()
        assert "=== Good Afternoon ===" in text
        assert "Fire Drill Documentation - Due in 3 days" in text
        assert "overdue: +1" in text


@pytest.fixture
def busy_store(make_task):
    store = EntityStore()
    store.extend([
        Meeting(title="Parent Conference", date=NOW.replace(hour=15)),
        Meeting(title="Leadership Huddle", date=NOW.replace(hour=8)),
        Meeting(title="Staff Meeting", date=NOW + timedelta(days=1)),
        make_task("Attendance Audit", due_date=NOW.replace(hour=17), priority=Priority.LOW),
        make_task("IEP Compliance Review", due_date=NOW.replace(hour=16), priority=Priority.CRITICAL),
        make_task("Fire Drill Documentation", days=-2),
        make_task("Visitor Log Review", days=5, status=TaskStatus.COMPLETED,
                  completed_date=NOW.replace(hour=9)),
        Decision(title="Pilot Advisory Period", date_made=NOW - timedelta(days=1)),
        Decision(title="Extend Library Hours", date_made=NOW, effectiveness=Effectiveness.EFFECTIVE),
        ClassroomWalkthrough(teacher_name="Mr. Lee", subject="Chemistry", date=NOW.replace(hour=10)),
    ])
    return store


class TestTodayAgenda:
    """Today's agenda carried by the summary."""

    def test_agenda(self, busy_store):
        summary = build_dashboard(busy_store, TimeRange.WEEK, NOW)

        assert [m.title for m in summary.todays_meetings] == ["Leadership Huddle", "Parent Conference"]
        assert [m.title for m in summary.tomorrows_meetings] == ["Staff Meeting"]
        assert [t.title for t in summary.due_today] == ["IEP Compliance Review", "Attendance Audit"]
        assert [t.title for t in summary.overdue] == ["Fire Drill Documentation"]
        assert [d.title for d in summary.pending_decisions] == ["Pilot Advisory Period"]
        assert [o.teacher_name for o in summary.todays_observations] == ["Mr. Lee"]
        assert summary.completed_today == 1
        assert summary.meetings_today == 2
        assert summary.items_today == 5
        assert summary.has_items_today

    def test_pending_decision_limit_from_config(self, busy_store, config):
        config['dashboard']['pending_decision_limit'] = 0
        assert build_dashboard(busy_store, TimeRange.WEEK, NOW, config).pending_decisions == []

    def test_agenda_in_dict(self, busy_store):
        today = json.loads(json.dumps(build_dashboard(busy_store, TimeRange.WEEK, NOW).to_dict()))['today']
        assert [m['title'] for m in today['meetings']] == ["Leadership Huddle", "Parent Conference"]
        assert today['due'][0] == {
            'id': today['due'][0]['id'],
            'title': "IEP Compliance Review",
            'due_text': "Due today",
            'priority': "Critical",
        }
        assert today['completed'] == 1
        assert today['total'] == 5

    def test_agenda_in_text(self, busy_store):
        text = build_dashboard(busy_store, TimeRange.WEEK, NOW).to_human_readable()
        assert "Completed today: 1 of 5" in text
        assert "  08:00  Leadership Huddle" in text
        assert "  [Critical] IEP Compliance Review - Due today" in text
        assert "  Review: Pilot Advisory Period" in text
        assert "  Observation: Mr. Lee (Chemistry)" in text
        assert "Tomorrow:\n  12:00  Staff Meeting" in text

    def test_empty_agenda(self):
        summary = build_dashboard(EntityStore(), TimeRange.WEEK, NOW)
        assert not summary.has_items_today
        assert "(all clear)" in summary.to_human_readable()
