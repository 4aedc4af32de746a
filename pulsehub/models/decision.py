"""Decision data model."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from .common import format_datetime, new_id, parse_datetime, parse_enum


class ImpactLevel(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def description(self) -> str:
        """One-line explanation of the impact level."""
        return {
            ImpactLevel.LOW: "Minor operational changes with limited scope",
            ImpactLevel.MEDIUM: "Moderate changes affecting multiple areas",
            ImpactLevel.HIGH: "Significant changes with broad implications",
            ImpactLevel.CRITICAL: "Major strategic decisions with organization-wide impact",
        }[self]


class Effectiveness(Enum):
    """Outcome of the post-decision review. PENDING until reviewed."""

    EFFECTIVE = "Effective"
    INEFFECTIVE = "Ineffective"
    PENDING = "Pending"


@dataclass
class Decision:
    """A recorded decision, reviewed for effectiveness after the fact."""

    title: str
    detail: Optional[str] = None
    date_made: Optional[datetime] = None
    next_steps: Optional[str] = None
    impact: ImpactLevel = ImpactLevel.MEDIUM
    rationale: str = ""
    effectiveness: Effectiveness = Effectiveness.PENDING
    reflection: Optional[str] = None
    meeting_id: Optional[str] = None
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        """Initialize default date_made if not provided."""
        if self.date_made is None:
            self.date_made = datetime.now()

    @property
    def is_reviewed(self) -> bool:
        """True once effectiveness has been recorded."""
        return self.effectiveness != Effectiveness.PENDING

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict."""
        return {
            'id': self.id,
            'title': self.title,
            'detail': self.detail,
            'date_made': format_datetime(self.date_made),
            'next_steps': self.next_steps,
            'impact': self.impact.value,
            'rationale': self.rationale,
            'effectiveness': self.effectiveness.value,
            'reflection': self.reflection,
            'meeting_id': self.meeting_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Decision':
        """Build a decision from to_dict() output."""
        return cls(
            id=data['id'],
            title=data['title'],
            detail=data.get('detail'),
            date_made=parse_datetime(data.get('date_made')),
            next_steps=data.get('next_steps'),
            impact=parse_enum(ImpactLevel, data.get('impact', ImpactLevel.MEDIUM.value)),
            rationale=data.get('rationale', ""),
            effectiveness=parse_enum(Effectiveness, data.get('effectiveness', Effectiveness.PENDING.value)),
            reflection=data.get('reflection'),
            meeting_id=data.get('meeting_id'),
        )
