"""
Pytest configuration and shared fixtures.

All time-dependent code is driven through NOW, a Wednesday at noon. With
the default Sunday week start the current week runs 11-17 October 2026.
"""

from datetime import datetime, timedelta

import pytest

from pulsehub.engine.store import EntityStore
from pulsehub.models import (
    Decision,
    Effectiveness,
    ImpactLevel,
    Meeting,
    MeetingType,
    Priority,
    ProjectTask,
    TaskStatus,
    TaskType,
)
from pulsehub.utils.config import get_default_config

NOW = datetime(2026, 10, 14, 12, 0)


@pytest.fixture
def now():
    """Fixed reference time."""
    return NOW


@pytest.fixture
def config():
    return get_default_config()


@pytest.fixture
def make_task():
    """Factory for tasks due a number of days from NOW."""
    def _make(title="Task", days=0, status=TaskStatus.PENDING, **kwargs):
        kwargs.setdefault('created_date', NOW - timedelta(days=30))
        return ProjectTask(
            title=title,
            due_date=kwargs.pop('due_date', NOW + timedelta(days=days)),
            status=status,
            **kwargs,
        )
    return _make


@pytest.fixture
def populated_store(make_task):
    """Store with a few records of each kind."""
    store = EntityStore()
    meeting = Meeting(
        title="Staff Meeting",
        date=NOW + timedelta(days=1),
        attendees=["Carol Lee", "David Brown"],
        meeting_type=MeetingType.STAFF,
    )
    store.insert(meeting)
    store.insert(make_task("Fire Drill Documentation", days=3, priority=Priority.HIGH,
                           task_type=TaskType.COMPLIANCE, meeting_id=meeting.id))
    store.insert(make_task("Annual Safety Training", days=-2, detail="All staff must attend"))
    store.insert(make_task("Visitor Log Review", days=40, status=TaskStatus.COMPLETED))
    store.insert(Decision(
        title="Extend Library Hours",
        rationale="Students asked for evening study space",
        date_made=NOW - timedelta(days=1),
        impact=ImpactLevel.LOW,
        effectiveness=Effectiveness.EFFECTIVE,
        meeting_id=meeting.id,
    ))
    return store
