"""Filter for classroom observations."""

from dataclasses import dataclass
from typing import Optional, Sequence

from ..models.observation import ClassroomWalkthrough, DanielsonScore, ObservationType
from .base import RecordFilter


@dataclass(frozen=True)
class ObservationFilter(RecordFilter):
    search_text: str = ""
    rating: Optional[DanielsonScore] = None
    observation_type: Optional[ObservationType] = None

    def text_fields(self, record: ClassroomWalkthrough) -> Sequence[Optional[str]]:
        return (record.teacher_name, record.subject)

    def matches_level(self, record: ClassroomWalkthrough) -> bool:
        return self.rating is None or record.overall_rating == self.rating

    def matches_type(self, record: ClassroomWalkthrough) -> bool:
        return self.observation_type is None or record.observation_type == self.observation_type
