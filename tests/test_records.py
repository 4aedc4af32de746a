"""
Tests for pulsehub/engine/records.py
"""

from datetime import timedelta

import pytest

from pulsehub.engine.exceptions import ValidationError
from pulsehub.engine.records import RecordService, is_valid
from pulsehub.engine.store import EntityStore
from pulsehub.models import (
    Category,
    DanielsonDomain,
    DanielsonScore,
    Decision,
    Effectiveness,
    ImpactLevel,
    ProjectTask,
    RubricComponent,
    TaskStatus,
    TaskType,
)

from .conftest import NOW


@pytest.fixture
def service():
    return RecordService(EntityStore())


class TestValidation:
    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_blank_is_invalid(self, text):
        assert not is_valid(text)

    def test_text_is_valid(self):
        assert is_valid("  Fire Drill ")

    def test_blank_title_rejected(self, service):
        with pytest.raises(ValidationError, match="Title is required"):
            service.create_task("   ", NOW)
        assert service.store.count(ProjectTask) == 0

    def test_decision_needs_rationale(self, service):
        with pytest.raises(ValidationError, match="Rationale"):
            service.create_decision("Extend Library Hours", rationale=" ")


class TestTasks:
    def test_create_task_trims_and_links(self, service):
        category = service.create_category("Safety")
        task = service.create_task(
            "  Fire Drill Documentation ",
            NOW + timedelta(days=3),
            detail="  ",
            task_type=TaskType.COMPLIANCE,
            category=category,
            now=NOW,
        )
        assert task.title == "Fire Drill Documentation"
        assert task.detail is None
        assert task.created_date == NOW
        assert service.store.tasks_in_category(category) == [task]

    def test_subtask_inherits_from_parent(self, service):
        parent = service.create_task("Audit", NOW + timedelta(days=5), task_type=TaskType.COMPLIANCE, now=NOW)
        subtask = service.add_subtask(parent, "Pull records", now=NOW)
        assert parent.subtasks == [subtask]
        assert subtask.due_date == parent.due_date
        assert subtask.task_type == TaskType.COMPLIANCE
        assert subtask.parent_id == parent.id

    def test_remove_subtask(self, service):
        parent = service.create_task("Audit", NOW, now=NOW)
        subtask = service.add_subtask(parent, "Pull records", now=NOW)
        service.remove_subtask(parent, subtask)
        assert parent.subtasks == []
        assert service.store.count(ProjectTask) == 1

    def test_remove_foreign_subtask_rejected(self, service):
        parent = service.create_task("Audit", NOW, now=NOW)
        other = service.create_task("Other", NOW, now=NOW)
        with pytest.raises(ValidationError):
            service.remove_subtask(parent, other)

    def test_completing_stamps_date(self, service):
        task = service.create_task("Audit", NOW, now=NOW)
        service.set_status(task, TaskStatus.COMPLETED, now=NOW)
        assert task.completed_date == NOW
        assert not task.is_overdue(NOW + timedelta(days=3))

    def test_reopening_clears_date(self, service):
        task = service.create_task("Audit", NOW, now=NOW)
        service.toggle_completed(task, now=NOW)
        service.toggle_completed(task, now=NOW)
        assert task.status == TaskStatus.PENDING
        assert task.completed_date is None


class TestCategories:
    def test_existing_name_reused_case_insensitively(self, service):
        first = service.create_category("Safety")
        again = service.create_category("  SAFETY ")
        assert again is first
        assert service.store.count(Category) == 1

    def test_new_name_creates(self, service):
        service.create_category("Safety")
        service.create_category("Testing")
        assert [c.title for c in service.store.all(Category)] == ["Safety", "Testing"]


class TestDecisions:
    def test_create_and_review(self, service):
        decision = service.create_decision(
            "Pilot Advisory Period",
            rationale="Students need a homeroom check-in",
            impact=ImpactLevel.HIGH,
            now=NOW,
        )
        assert decision.effectiveness == Effectiveness.PENDING

        service.review_decision(decision, Effectiveness.EFFECTIVE, reflection="Attendance improved")
        assert decision.is_reviewed
        assert service.store.get(Decision, decision.id).reflection == "Attendance improved"


class TestMeetings:
    def test_end_before_start_rejected(self, service):
        with pytest.raises(ValidationError):
            service.create_meeting("Staff Meeting", NOW, start_time=NOW, end_time=NOW - timedelta(minutes=5))

    def test_blank_attendees_dropped(self, service):
        meeting = service.create_meeting("Staff Meeting", NOW, attendees=[" Carol Lee ", "", "  "])
        assert meeting.attendees == ["Carol Lee"]


class TestObservations:
    def test_follow_up_date_only_kept_when_required(self, service):
        observation = service.create_observation(
            "Mr. Lee", "Chemistry", date=NOW, follow_up_date=NOW + timedelta(days=7)
        )
        assert observation.follow_up_date is None

    def test_negative_duration_rejected(self, service):
        with pytest.raises(ValidationError):
            service.create_observation("Mr. Lee", "Chemistry", date=NOW, duration=-5)

    def test_components_back_linked(self, service):
        observation = service.create_observation("Mr. Lee", "Chemistry", date=NOW)
        service.add_component(
            observation, DanielsonDomain.INSTRUCTION, "3c", "Engaging Students", DanielsonScore.EFFECTIVE
        )
        component = service.store.all(RubricComponent)[0]
        assert component.observation_id == observation.id
        assert observation.overall_average == 3.0

    def test_delete_cascades(self, service):
        observation = service.create_observation("Mr. Lee", "Chemistry", date=NOW)
        service.add_component(
            observation, DanielsonDomain.INSTRUCTION, "3c", "Engaging Students", DanielsonScore.EFFECTIVE
        )
        service.delete(observation)
        assert service.store.count(RubricComponent) == 0
