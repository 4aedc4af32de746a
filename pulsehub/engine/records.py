"""Create and update operations behind the entry forms."""

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from ..models.decision import Decision, Effectiveness, ImpactLevel
from ..models.meeting import Meeting, MeetingStatus, MeetingType
from ..models.observation import (
    ClassroomWalkthrough,
    DanielsonDomain,
    DanielsonScore,
    GradeLevel,
    ObservationType,
    RubricComponent,
)
from ..models.task import Category, Priority, ProjectTask, TaskStatus, TaskType
from .exceptions import ValidationError
from .store import EntityStore

logger = logging.getLogger(__name__)


def is_valid(text: Optional[str]) -> bool:
    """Check that text is non-empty once whitespace is trimmed."""
    return bool(text and text.strip())


def _optional_text(text: Optional[str]) -> Optional[str]:
    """Trimmed text, or None when blank."""
    if text is None:
        return None
    text = text.strip()
    return text or None


def _require(text: Optional[str], field_name: str) -> str:
    """Trimmed text, raising ValidationError when blank."""
    if not is_valid(text):
        raise ValidationError(f"{field_name} is required")
    return text.strip()


class RecordService:
    """Interactive create/update/delete paths.

    Every method validates its input and raises ``ValidationError`` rather
    than storing a half-filled record.
    """

    def __init__(self, store: EntityStore):
        """Initialize service over a store."""
        self.store = store

    # Tasks

    def create_task(
        self,
        title: str,
        due_date: datetime,
        detail: str = "",
        priority: Priority = Priority.MEDIUM,
        task_type: TaskType = TaskType.GENERAL,
        category: Optional[Category] = None,
        meeting: Optional[Meeting] = None,
        now: Optional[datetime] = None,
    ) -> ProjectTask:
        """Create a task, optionally filed under a category and a meeting."""
        task = ProjectTask(
            title=_require(title, "Title"),
            due_date=due_date,
            detail=_optional_text(detail),
            created_date=now or datetime.now(),
            priority=priority,
            task_type=task_type,
            category_id=category.id if category else None,
            meeting_id=meeting.id if meeting else None,
        )
        self.store.insert(task)
        logger.info("Created task %s (%s)", task.title, task.id)
        return task

    def add_subtask(
        self,
        parent: ProjectTask,
        title: str,
        due_date: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> ProjectTask:
        """Append a subtask; it inherits the parent's due date, type and category."""
        subtask = ProjectTask(
            title=_require(title, "Subtask title"),
            due_date=due_date or parent.due_date,
            created_date=now or datetime.now(),
            priority=parent.priority,
            task_type=parent.task_type,
            parent_id=parent.id,
            category_id=parent.category_id,
            meeting_id=parent.meeting_id,
        )
        parent.subtasks.append(subtask)
        self.store.insert(subtask)
        return subtask

    def remove_subtask(self, parent: ProjectTask, subtask: ProjectTask) -> None:
        """Delete a subtask from its parent and the store."""
        if all(s.id != subtask.id for s in parent.subtasks):
            raise ValidationError(f"{subtask.title!r} is not a subtask of {parent.title!r}")
        self.store.delete(subtask)

    def set_status(self, task: ProjectTask, status: TaskStatus, now: Optional[datetime] = None) -> None:
        """Change status, stamping or clearing the completion date."""
        if status == TaskStatus.COMPLETED and task.status != TaskStatus.COMPLETED:
            task.completed_date = now or datetime.now()
        elif status != TaskStatus.COMPLETED:
            task.completed_date = None
        task.status = status
        logger.debug("Task %s is now %s", task.id, status.value)

    def toggle_completed(self, task: ProjectTask, now: Optional[datetime] = None) -> None:
        """Flip between completed and pending."""
        if task.status == TaskStatus.COMPLETED:
            self.set_status(task, TaskStatus.PENDING, now)
        else:
            self.set_status(task, TaskStatus.COMPLETED, now)

    # Categories

    def create_category(self, name: str, existing: Optional[Iterable[Category]] = None) -> Category:
        """Return the category with this name (any case), creating it if needed."""
        name = _require(name, "Category name")
        if existing is None:
            existing = self.store.all(Category)
        for category in existing:
            if category.title.lower() == name.lower():
                return category
        category = Category(title=name)
        self.store.insert(category)
        return category

    # Decisions

    def create_decision(
        self,
        title: str,
        rationale: str,
        impact: ImpactLevel = ImpactLevel.MEDIUM,
        detail: Optional[str] = None,
        next_steps: Optional[str] = None,
        meeting: Optional[Meeting] = None,
        now: Optional[datetime] = None,
    ) -> Decision:
        """Record a decision; title and rationale are required."""
        decision = Decision(
            title=_require(title, "Title"),
            rationale=_require(rationale, "Rationale"),
            impact=impact,
            detail=_optional_text(detail),
            next_steps=_optional_text(next_steps),
            date_made=now or datetime.now(),
            meeting_id=meeting.id if meeting else None,
        )
        self.store.insert(decision)
        logger.info("Recorded decision %s (%s)", decision.title, decision.id)
        return decision

    def review_decision(
        self,
        decision: Decision,
        effectiveness: Effectiveness,
        reflection: Optional[str] = None,
    ) -> Decision:
        """Record the after-the-fact review of a decision."""
        decision.effectiveness = effectiveness
        decision.reflection = _optional_text(reflection)
        return decision

    # Meetings

    def create_meeting(
        self,
        title: str,
        date: datetime,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        attendees: Optional[List[str]] = None,
        meeting_type: MeetingType = MeetingType.ADMIN,
        status: MeetingStatus = MeetingStatus.SCHEDULED,
        notes: Optional[str] = None,
    ) -> Meeting:
        """Schedule a meeting; it may not end before it starts."""
        start_time = start_time or date
        end_time = end_time or start_time
        if end_time < start_time:
            raise ValidationError("Meeting cannot end before it starts")
        meeting = Meeting(
            title=_require(title, "Title"),
            date=date,
            start_time=start_time,
            end_time=end_time,
            attendees=[a.strip() for a in (attendees or []) if is_valid(a)],
            meeting_type=meeting_type,
            status=status,
            notes=_optional_text(notes),
        )
        self.store.insert(meeting)
        return meeting

    # Observations

    def create_observation(
        self,
        teacher_name: str,
        subject: str,
        components: Optional[List[RubricComponent]] = None,
        date: Optional[datetime] = None,
        grade_level: GradeLevel = GradeLevel.NINTH,
        observation_type: ObservationType = ObservationType.WALKTHROUGH,
        duration: int = 0,
        overall_rating: DanielsonScore = DanielsonScore.DEVELOPING,
        follow_up_required: bool = False,
        follow_up_date: Optional[datetime] = None,
        meeting: Optional[Meeting] = None,
    ) -> ClassroomWalkthrough:
        """Record a classroom observation with its rubric components."""
        if duration < 0:
            raise ValidationError("Duration cannot be negative")
        observation = ClassroomWalkthrough(
            teacher_name=_require(teacher_name, "Teacher name"),
            subject=_require(subject, "Subject"),
            date=date or datetime.now(),
            grade_level=grade_level,
            observation_type=observation_type,
            duration=duration,
            overall_rating=overall_rating,
            follow_up_required=follow_up_required,
            follow_up_date=follow_up_date if follow_up_required else None,
            components=list(components or []),
            meeting_id=meeting.id if meeting else None,
        )
        for component in observation.components:
            component.observation_id = observation.id
        self.store.insert(observation)
        logger.info("Recorded observation of %s (%s)", observation.teacher_name, observation.id)
        return observation

    def add_component(
        self,
        observation: ClassroomWalkthrough,
        domain: DanielsonDomain,
        component_number: str,
        detail: str,
        score: DanielsonScore,
        comments: Optional[str] = None,
    ) -> RubricComponent:
        """Score one more rubric component on an observation."""
        component = RubricComponent(
            domain=domain,
            component_number=_require(component_number, "Component number"),
            detail=detail.strip(),
            score=score,
            comments=_optional_text(comments),
            observation_id=observation.id,
        )
        observation.components.append(component)
        self.store.insert(component)
        return component

    def delete(self, record) -> None:
        """Delete a record, cascading to what it owns."""
        self.store.delete(record)
