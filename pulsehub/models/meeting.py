"""Meeting data model."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from .common import format_datetime, new_id, parse_datetime, parse_enum
from .task import TaskStatus


class MeetingStatus(Enum):
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    RESCHEDULED = "Rescheduled"

    def to_task_status(self) -> TaskStatus:
        """Status a follow-up task should take for this meeting status."""
        return {
            MeetingStatus.SCHEDULED: TaskStatus.PENDING,
            MeetingStatus.IN_PROGRESS: TaskStatus.IN_PROGRESS,
            MeetingStatus.COMPLETED: TaskStatus.COMPLETED,
            MeetingStatus.CANCELLED: TaskStatus.CANCELLED,
            MeetingStatus.RESCHEDULED: TaskStatus.PENDING,
        }[self]


class MeetingType(Enum):
    PARENT = "Parent Meeting"
    STUDENT = "Student Meeting"
    STAFF = "Staff Meeting"
    ADMIN = "Admin Meeting"
    PRE_OBSERVATION = "Pre-Observation Meeting"
    POST_OBSERVATION = "Post-Observation Meeting"


@dataclass
class Meeting:
    """A scheduled meeting.

    Decisions, tasks and observations point back at a meeting through their
    ``meeting_id``; the meeting itself holds no copies of them.
    """

    title: str
    date: datetime
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    attendees: List[str] = field(default_factory=list)
    status: MeetingStatus = MeetingStatus.SCHEDULED
    meeting_type: MeetingType = MeetingType.ADMIN
    notes: Optional[str] = None
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        """Default start to the meeting date and end to the start."""
        if self.start_time is None:
            self.start_time = self.date
        if self.end_time is None:
            self.end_time = self.start_time

    @property
    def duration(self) -> timedelta:
        """Time between start and end."""
        return self.end_time - self.start_time

    @property
    def formatted_duration(self) -> str:
        """Duration as hours and minutes, e.g. ``1h 30m``."""
        total_minutes = max(0, int(self.duration.total_seconds() // 60))
        hours, minutes = divmod(total_minutes, 60)
        if hours and minutes:
            return f"{hours}h {minutes}m"
        if hours:
            return f"{hours}h"
        return f"{minutes}m"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict."""
        return {
            'id': self.id,
            'title': self.title,
            'date': format_datetime(self.date),
            'start_time': format_datetime(self.start_time),
            'end_time': format_datetime(self.end_time),
            'attendees': list(self.attendees),
            'status': self.status.value,
            'meeting_type': self.meeting_type.value,
            'notes': self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Meeting':
        """Build a meeting from to_dict() output."""
        return cls(
            id=data['id'],
            title=data['title'],
            date=parse_datetime(data['date']),
            start_time=parse_datetime(data.get('start_time')),
            end_time=parse_datetime(data.get('end_time')),
            attendees=list(data.get('attendees', [])),
            status=parse_enum(MeetingStatus, data.get('status', MeetingStatus.SCHEDULED.value)),
            meeting_type=parse_enum(MeetingType, data.get('meeting_type', MeetingType.ADMIN.value)),
            notes=data.get('notes'),
        )
