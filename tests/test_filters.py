"""
Tests for the record filters in pulsehub/filters/
"""

from datetime import timedelta

from pulsehub.filters import DecisionFilter, MeetingFilter, ObservationFilter, TaskFilter
from pulsehub.models import (
    ClassroomWalkthrough,
    DanielsonScore,
    Decision,
    Effectiveness,
    ImpactLevel,
    Meeting,
    MeetingType,
    ObservationType,
    Priority,
    TaskStatus,
    TaskType,
)

from .conftest import NOW


class TestTaskFilter:
    def test_default_passes_everything(self, make_task):
        tasks = [make_task("A"), make_task("B")]
        assert TaskFilter().apply(tasks) == tasks
        assert not TaskFilter().is_active

    def test_text_matches_title_or_detail(self, make_task):
        tasks = [
            make_task("Fire Drill"),
            make_task("Audit", detail="includes FIRE exits"),
            make_task("Visitor Log"),
        ]
        result = TaskFilter(search_text="fire").apply(tasks)
        assert [t.title for t in result] == ["Fire Drill", "Audit"]

    def test_missing_detail_never_matches(self, make_task):
        assert TaskFilter(search_text="x").apply([make_task("Audit", detail=None)]) == []

    def test_criteria_combine(self, make_task):
        tasks = [
            make_task("Fire Drill", priority=Priority.HIGH, task_type=TaskType.COMPLIANCE),
            make_task("Fire Extinguishers", priority=Priority.LOW, task_type=TaskType.COMPLIANCE),
            make_task("Fire Plan", priority=Priority.HIGH, status=TaskStatus.COMPLETED,
                      task_type=TaskType.COMPLIANCE),
            make_task("Fire Talk", priority=Priority.HIGH, task_type=TaskType.GENERAL),
        ]
        task_filter = TaskFilter(
            search_text="fire",
            status=TaskStatus.PENDING,
            priority=Priority.HIGH,
            task_type=TaskType.COMPLIANCE,
        )
        assert task_filter.is_active
        assert [t.title for t in task_filter.apply(tasks)] == ["Fire Drill"]

    def test_order_preserved(self, make_task):
        tasks = [make_task("b audit", days=5), make_task("a audit", days=1)]
        assert [t.title for t in TaskFilter(search_text="audit").apply(tasks)] == ["b audit", "a audit"]


class TestMeetingFilter:
    def test_matches_any_attendee(self):
        meetings = [
            Meeting(title="Budget", date=NOW, attendees=["Alice Johnson", "Bob Smith"]),
            Meeting(title="Scheduling", date=NOW, attendees=["Carol Lee"]),
        ]
        result = MeetingFilter(search_text="smith").apply(meetings)
        assert [m.title for m in result] == ["Budget"]

    def test_type(self):
        meetings = [
            Meeting(title="IEP", date=NOW, meeting_type=MeetingType.PARENT),
            Meeting(title="Leadership", date=NOW, meeting_type=MeetingType.ADMIN),
        ]
        result = MeetingFilter(meeting_type=MeetingType.PARENT).apply(meetings)
        assert [m.title for m in result] == ["IEP"]


class TestDecisionFilter:
    def test_text_searches_rationale(self):
        decisions = [
            Decision(title="Late Work", rationale="Grades inflated", date_made=NOW),
            Decision(title="Library", rationale="Study space", date_made=NOW),
        ]
        assert [d.title for d in DecisionFilter(search_text="grades").apply(decisions)] == ["Late Work"]

    def test_effectiveness_and_impact(self):
        decisions = [
            Decision(title="A", impact=ImpactLevel.HIGH, effectiveness=Effectiveness.EFFECTIVE, date_made=NOW),
            Decision(title="B", impact=ImpactLevel.LOW, effectiveness=Effectiveness.EFFECTIVE, date_made=NOW),
            Decision(title="C", impact=ImpactLevel.HIGH, date_made=NOW),
        ]
        decision_filter = DecisionFilter(effectiveness=Effectiveness.EFFECTIVE, impact=ImpactLevel.HIGH)
        assert [d.title for d in decision_filter.apply(decisions)] == ["A"]


class TestObservationFilter:
    def test_teacher_and_rating(self):
        observations = [
            ClassroomWalkthrough(teacher_name="Mr. Lee", subject="Chemistry", date=NOW,
                                 overall_rating=DanielsonScore.EFFECTIVE),
            ClassroomWalkthrough(teacher_name="Ms. Lee", subject="Biology", date=NOW - timedelta(days=1),
                                 overall_rating=DanielsonScore.DEVELOPING),
            ClassroomWalkthrough(teacher_name="Mr. Kim", subject="Lee Era History", date=NOW,
                                 overall_rating=DanielsonScore.EFFECTIVE,
                                 observation_type=ObservationType.FORMAL),
        ]
        observation_filter = ObservationFilter(search_text="lee", rating=DanielsonScore.EFFECTIVE)
        assert [o.teacher_name for o in observation_filter.apply(observations)] == ["Mr. Lee", "Mr. Kim"]

        typed = ObservationFilter(observation_type=ObservationType.FORMAL)
        assert [o.teacher_name for o in typed.apply(observations)] == ["Mr. Kim"]
