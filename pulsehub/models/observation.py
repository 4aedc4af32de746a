"""Classroom walkthrough and rubric component models (Danielson framework)."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .common import format_datetime, new_id, parse_datetime, parse_enum


class DanielsonScore(Enum):
    INEFFECTIVE = "Ineffective"
    DEVELOPING = "Developing"
    EFFECTIVE = "Effective"
    HIGHLY_EFFECTIVE = "Highly Effective"

    @property
    def numeric_value(self) -> int:
        """Score on the 1-4 rubric scale."""
        return {
            DanielsonScore.INEFFECTIVE: 1,
            DanielsonScore.DEVELOPING: 2,
            DanielsonScore.EFFECTIVE: 3,
            DanielsonScore.HIGHLY_EFFECTIVE: 4,
        }[self]


class DanielsonDomain(Enum):
    PLANNING_PREPARATION = "Planning & Preparation"
    CLASSROOM_ENVIRONMENT = "Classroom Environment"
    INSTRUCTION = "Instruction"
    PROFESSIONAL_RESPONSIBILITIES = "Professional Responsibilities"

    @property
    def components(self) -> List[str]:
        """Rubric components usually scored under this domain."""
        return {
            DanielsonDomain.PLANNING_PREPARATION: [
                "1a. Demonstrating Knowledge of Content and Pedagogy",
                "1e. Designing Coherent Instruction",
            ],
            DanielsonDomain.CLASSROOM_ENVIRONMENT: [
                "2a. Creating an Environment of Respect and Rapport",
                "2d. Managing Student Behavior",
            ],
            DanielsonDomain.INSTRUCTION: [
                "3b. Using Questioning and Discussion Techniques",
                "3c. Engaging Students in Learning",
                "3d. Using Assessment in Instruction",
            ],
            DanielsonDomain.PROFESSIONAL_RESPONSIBILITIES: [
                "4e. Growing and Developing Professionally",
            ],
        }[self]


class GradeLevel(Enum):
    NINTH = "9th"
    TENTH = "10th"
    ELEVENTH = "11th"
    TWELFTH = "12th"


class ObservationType(Enum):
    FORMAL = "Formal"
    INFORMAL = "Informal"
    WALKTHROUGH = "Walkthrough"
    FOLLOW_UP = "Follow-up"


# Average score bands, lower bound inclusive.
RATING_BANDS = [
    (1.0, 2.0, DanielsonScore.INEFFECTIVE),
    (2.0, 3.0, DanielsonScore.DEVELOPING),
    (3.0, 4.0, DanielsonScore.EFFECTIVE),
    (4.0, 5.0, DanielsonScore.HIGHLY_EFFECTIVE),
]


@dataclass
class RubricComponent:
    """One scored component of an observation."""

    domain: DanielsonDomain
    component_number: str
    detail: str
    score: DanielsonScore
    comments: Optional[str] = None
    observation_id: Optional[str] = None
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict."""
        return {
            'id': self.id,
            'domain': self.domain.value,
            'component_number': self.component_number,
            'detail': self.detail,
            'score': self.score.value,
            'comments': self.comments,
            'observation_id': self.observation_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RubricComponent':
        """Build a component from to_dict() output."""
        return cls(
            id=data['id'],
            domain=parse_enum(DanielsonDomain, data['domain']),
            component_number=data.get('component_number', ""),
            detail=data.get('detail', ""),
            score=parse_enum(DanielsonScore, data['score']),
            comments=data.get('comments'),
            observation_id=data.get('observation_id'),
        )


@dataclass
class ClassroomWalkthrough:
    """A classroom observation of one teacher, scored by rubric components."""

    teacher_name: str
    date: Optional[datetime] = None
    subject: str = ""
    grade_level: GradeLevel = GradeLevel.NINTH
    observation_type: ObservationType = ObservationType.FOLLOW_UP
    duration: int = 0
    overall_rating: DanielsonScore = DanielsonScore.DEVELOPING
    follow_up_required: bool = False
    follow_up_date: Optional[datetime] = None
    components: List[RubricComponent] = field(default_factory=list)
    meeting_id: Optional[str] = None
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        """Initialize default observation date if not provided."""
        if self.date is None:
            self.date = datetime.now()

    @property
    def overall_average(self) -> float:
        """Mean component score on the 1-4 scale, 0 without components."""
        if not self.components:
            return 0.0
        total = sum(c.score.numeric_value for c in self.components)
        return total / len(self.components)

    @property
    def overall_band(self) -> DanielsonScore:
        """Rating band the average score falls in."""
        average = self.overall_average
        for low, high, score in RATING_BANDS:
            if low <= average < high:
                return score
        return DanielsonScore.INEFFECTIVE

    @property
    def overall_rating_description(self) -> str:
        """Label of the rating band."""
        return self.overall_band.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict with components nested."""
        return {
            'id': self.id,
            'teacher_name': self.teacher_name,
            'date': format_datetime(self.date),
            'subject': self.subject,
            'grade_level': self.grade_level.value,
            'observation_type': self.observation_type.value,
            'duration': self.duration,
            'overall_rating': self.overall_rating.value,
            'follow_up_required': self.follow_up_required,
            'follow_up_date': format_datetime(self.follow_up_date),
            'components': [c.to_dict() for c in self.components],
            'meeting_id': self.meeting_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClassroomWalkthrough':
        """Build an observation, and its components, from to_dict() output."""
        observation = cls(
            id=data['id'],
            teacher_name=data['teacher_name'],
            date=parse_datetime(data.get('date')),
            subject=data.get('subject', ""),
            grade_level=parse_enum(GradeLevel, data.get('grade_level', GradeLevel.NINTH.value)),
            observation_type=parse_enum(
                ObservationType, data.get('observation_type', ObservationType.FOLLOW_UP.value)
            ),
            duration=int(data.get('duration', 0)),
            overall_rating=parse_enum(
                DanielsonScore, data.get('overall_rating', DanielsonScore.DEVELOPING.value)
            ),
            follow_up_required=bool(data.get('follow_up_required', False)),
            follow_up_date=parse_datetime(data.get('follow_up_date')),
            meeting_id=data.get('meeting_id'),
        )
        for component_data in data.get('components', []):
            component = RubricComponent.from_dict(component_data)
            component.observation_id = observation.id
            observation.components.append(component)
        return observation
