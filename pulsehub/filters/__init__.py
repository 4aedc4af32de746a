"""Feature-scoped record filters."""

from .base import RecordFilter
from .decisions import DecisionFilter
from .meetings import MeetingFilter
from .observations import ObservationFilter
from .tasks import TaskFilter

__all__ = ['RecordFilter', 'TaskFilter', 'MeetingFilter', 'DecisionFilter', 'ObservationFilter']
