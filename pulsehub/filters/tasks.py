"""Filter for compliance and general tasks."""

from dataclasses import dataclass
from typing import Optional, Sequence

from ..models.task import Priority, ProjectTask, TaskStatus, TaskType
from .base import RecordFilter


@dataclass(frozen=True)
class TaskFilter(RecordFilter):
    """Search title and detail; narrow by status, priority and task type."""

    search_text: str = ""
    status: Optional[TaskStatus] = None
    priority: Optional[Priority] = None
    task_type: Optional[TaskType] = None

    def text_fields(self, record: ProjectTask) -> Sequence[Optional[str]]:
        return (record.title, record.detail)

    def matches_status(self, record: ProjectTask) -> bool:
        return self.status is None or record.status == self.status

    def matches_level(self, record: ProjectTask) -> bool:
        return self.priority is None or record.priority == self.priority

    def matches_type(self, record: ProjectTask) -> bool:
        return self.task_type is None or record.task_type == self.task_type
