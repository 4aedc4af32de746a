"""Domain record models."""

from .decision import Decision, Effectiveness, ImpactLevel
from .meeting import Meeting, MeetingStatus, MeetingType
from .observation import (
    ClassroomWalkthrough,
    DanielsonDomain,
    DanielsonScore,
    GradeLevel,
    ObservationType,
    RubricComponent,
)
from .task import Category, Priority, ProjectTask, TaskStatus, TaskType
from .trend import TimeRange, Trend, TrendDirection

__all__ = [
    'Category', 'ClassroomWalkthrough', 'DanielsonDomain', 'DanielsonScore',
    'Decision', 'Effectiveness', 'GradeLevel', 'ImpactLevel', 'Meeting',
    'MeetingStatus', 'MeetingType', 'ObservationType', 'Priority',
    'ProjectTask', 'RubricComponent', 'TaskStatus', 'TaskType', 'TimeRange',
    'Trend', 'TrendDirection',
]
