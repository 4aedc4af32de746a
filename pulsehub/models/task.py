"""Task and category data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from ..utils.datetime_utils import calendar_days_between
from .common import format_datetime, new_id, parse_datetime, parse_enum, pluralize_days


class TaskStatus(Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"


class Priority(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        """Urgency order, 0 for low up to 3 for critical."""
        return list(Priority).index(self)


class TaskType(Enum):
    GENERAL = "General"
    COMPLIANCE = "Compliance"
    MEETING_FOLLOW_UP = "Meeting Follow-up"


@dataclass
class Category:
    """Named group of compliance tasks. Deleting it deletes its tasks."""

    title: str = "Category"
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict."""
        return {'id': self.id, 'title': self.title}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Category':
        """Build a category from to_dict() output."""
        return cls(title=data['title'], id=data['id'])


@dataclass
class ProjectTask:
    """A compliance, general or follow-up task with optional subtasks."""

    title: str
    due_date: datetime
    detail: Optional[str] = None
    created_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM
    task_type: TaskType = TaskType.GENERAL
    parent_id: Optional[str] = None
    subtasks: List['ProjectTask'] = field(default_factory=list)
    meeting_id: Optional[str] = None
    category_id: Optional[str] = None
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        """Initialize default created_date if not provided."""
        if self.created_date is None:
            self.created_date = datetime.now()

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        """Not completed and due before now."""
        now = now or datetime.now()
        return self.status != TaskStatus.COMPLETED and self.due_date < now

    def days_to_due(self, now: Optional[datetime] = None) -> int:
        """Calendar days until the due date (negative once past)."""
        return calendar_days_between(now or datetime.now(), self.due_date)

    def due_text(self, now: Optional[datetime] = None) -> str:
        """Short due-date label, e.g. ``Due in 3 days`` or ``Overdue by 1 day``."""
        now = now or datetime.now()
        days = self.days_to_due(now)
        if self.is_overdue(now):
            return f"Overdue by {pluralize_days(abs(days))}"
        elif days == 0:
            return "Due today"
        else:
            return f"Due in {pluralize_days(days)}"

    @property
    def is_completed(self) -> bool:
        """A parent is complete when every subtask is; a leaf when its status says so."""
        if not self.subtasks:
            return self.status == TaskStatus.COMPLETED
        return all(subtask.is_completed for subtask in self.subtasks)

    @property
    def remaining_task_count(self) -> int:
        """Number of subtasks not yet completed."""
        return sum(1 for subtask in self.subtasks if not subtask.is_completed)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict. Subtasks are stored by id."""
        return {
            'id': self.id,
            'title': self.title,
            'detail': self.detail,
            'created_date': format_datetime(self.created_date),
            'due_date': format_datetime(self.due_date),
            'completed_date': format_datetime(self.completed_date),
            'status': self.status.value,
            'priority': self.priority.value,
            'task_type': self.task_type.value,
            'parent_id': self.parent_id,
            'subtask_ids': [subtask.id for subtask in self.subtasks],
            'meeting_id': self.meeting_id,
            'category_id': self.category_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectTask':
        """Build a task from to_dict() output. Subtasks are re-linked by the store."""
        return cls(
            id=data['id'],
            title=data['title'],
            detail=data.get('detail'),
            created_date=parse_datetime(data.get('created_date')),
            due_date=parse_datetime(data['due_date']),
            completed_date=parse_datetime(data.get('completed_date')),
            status=parse_enum(TaskStatus, data.get('status', TaskStatus.PENDING.value)),
            priority=parse_enum(Priority, data.get('priority', Priority.MEDIUM.value)),
            task_type=parse_enum(TaskType, data.get('task_type', TaskType.GENERAL.value)),
            parent_id=data.get('parent_id'),
            meeting_id=data.get('meeting_id'),
            category_id=data.get('category_id'),
        )
