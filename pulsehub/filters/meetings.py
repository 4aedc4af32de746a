"""Filter for meetings."""

from dataclasses import dataclass
from typing import Optional, Sequence

from ..models.meeting import Meeting, MeetingStatus, MeetingType
from .base import RecordFilter


@dataclass(frozen=True)
class MeetingFilter(RecordFilter):
    """Search title or any attendee name; narrow by status and meeting type."""

    search_text: str = ""
    status: Optional[MeetingStatus] = None
    meeting_type: Optional[MeetingType] = None

    def text_fields(self, record: Meeting) -> Sequence[Optional[str]]:
        return (record.title, *record.attendees)

    def matches_status(self, record: Meeting) -> bool:
        return self.status is None or record.status == self.status

    def matches_type(self, record: Meeting) -> bool:
        return self.meeting_type is None or record.meeting_type == self.meeting_type
