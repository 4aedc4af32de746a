"""Filter for decisions."""

from dataclasses import dataclass
from typing import Optional, Sequence

from ..models.decision import Decision, Effectiveness, ImpactLevel
from .base import RecordFilter


@dataclass(frozen=True)
class DecisionFilter(RecordFilter):
    """Search title, detail and rationale; narrow by effectiveness and impact."""

    search_text: str = ""
    effectiveness: Optional[Effectiveness] = None
    impact: Optional[ImpactLevel] = None

    def text_fields(self, record: Decision) -> Sequence[Optional[str]]:
        return (record.title, record.detail, record.rationale)

    def matches_level(self, record: Decision) -> bool:
        if self.effectiveness is not None and record.effectiveness != self.effectiveness:
            return False
        return self.impact is None or record.impact == self.impact
