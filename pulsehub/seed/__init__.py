"""Sample data."""

from .generator import (
    SAMPLE_DECISION_COUNTS,
    SampleDataGenerator,
    sample_meetings,
    sample_pending_decisions,
)

__all__ = ['SampleDataGenerator', 'SAMPLE_DECISION_COUNTS', 'sample_meetings', 'sample_pending_decisions']
