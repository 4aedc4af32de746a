"""Read-only access to a persisted store for glanceable views.

These readers open their own copy of the snapshot file and never write
back. A copy older than the interactive store is acceptable. Failures are
logged and answered with placeholder data instead of raised.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, TypeVar

from ..analytics.stats import effectiveness_stats, pending_decisions
from ..models.decision import Decision
from ..models.meeting import Meeting
from ..models.task import ProjectTask
from ..seed.generator import SAMPLE_DECISION_COUNTS, sample_meetings, sample_pending_decisions
from .exceptions import StoreError
from .store import EntityStore, SortDescriptor

logger = logging.getLogger(__name__)

T = TypeVar('T')


class DecisionStats(NamedTuple):
    """Review outcome counts with the newest decisions awaiting review."""

    effective: int
    ineffective: int
    pending: int
    recent: List[Decision]


class SnapshotReader:
    """Permissive reads over a JSON store snapshot."""

    def __init__(self, path: str, config: Optional[dict] = None):
        """Initialize reader for a snapshot path; nothing is read until queried."""
        self.path = Path(path)
        self.config = config or {}
        snapshot_config = self.config.get('snapshot', {})
        self.default_limit = snapshot_config.get('suggestion_limit', 5)
        self.fallback_to_samples = snapshot_config.get('fallback_to_samples', True)
        self.decision_limit = snapshot_config.get('recent_decision_limit', 3)
        self._store: Optional[EntityStore] = None

    def _open(self) -> EntityStore:
        """Load the snapshot on first use."""
        if self._store is None:
            self._store = EntityStore.load(self.path)
        return self._store

    def refresh(self) -> None:
        """Drop the cached copy so the next read reopens the file."""
        self._store = None

    def _read(self, query: Callable[[EntityStore], T], fallback: Callable[[], T], what: str) -> T:
        """Run a query, logging and falling back on store errors."""
        try:
            return query(self._open())
        except StoreError as e:
            logger.warning("Could not read %s from %s, using fallback: %s", what, self.path, e)
            return fallback()

    def _samples(self, factory: Callable[[], List[T]]) -> List[T]:
        """Sample records when fallbacks are enabled, otherwise nothing."""
        return factory() if self.fallback_to_samples else []

    def upcoming_meetings(self, limit: Optional[int] = None, now: Optional[datetime] = None) -> List[Meeting]:
        """Next meetings after now, soonest first; samples when none can be shown."""
        now = now or datetime.now()
        limit = self.default_limit if limit is None else limit
        meetings = self._read(
            lambda store: store.fetch(
                Meeting,
                predicate=lambda m: m.date > now,
                sort_by=[SortDescriptor('date')],
                limit=limit,
            ),
            lambda: self._samples(lambda: sample_meetings(now)),
            "upcoming meetings",
        )
        return meetings or self._samples(lambda: sample_meetings(now))

    def compliance_items(self) -> List[ProjectTask]:
        """All tasks by due date; empty when the snapshot is unreadable."""
        return self._read(
            lambda store: store.fetch(ProjectTask, sort_by=[SortDescriptor('due_date')]),
            list,
            "compliance items",
        )

    def recent_decisions(self, limit: Optional[int] = None, now: Optional[datetime] = None) -> List[Decision]:
        """Newest decisions still awaiting review; a sample one when unreadable."""
        limit = self.decision_limit if limit is None else limit
        return self._read(
            lambda store: store.fetch(
                Decision,
                predicate=lambda d: not d.is_reviewed,
                sort_by=[SortDescriptor('date_made', reverse=True)],
                limit=limit,
            ),
            lambda: self._samples(lambda: sample_pending_decisions(now)),
            "recent decisions",
        )

    def decision_stats(self, limit: Optional[int] = None, now: Optional[datetime] = None) -> DecisionStats:
        """Effectiveness counts and pending decisions; sample figures when unreadable."""
        limit = self.decision_limit if limit is None else limit

        def query(store: EntityStore) -> DecisionStats:
            decisions = store.all(Decision)
            counts = effectiveness_stats(decisions)
            return DecisionStats(*counts, recent=pending_decisions(decisions, limit))

        def fallback() -> DecisionStats:
            if not self.fallback_to_samples:
                return DecisionStats(0, 0, 0, [])
            return DecisionStats(*SAMPLE_DECISION_COUNTS, recent=sample_pending_decisions(now))

        return self._read(query, fallback, "decision stats")

    # Suggestions offered to system search

    def suggested_tasks(self, limit: Optional[int] = None) -> List[ProjectTask]:
        """Tasks by due date, latest first."""
        return self._suggest(ProjectTask, 'due_date', limit)

    def suggested_meetings(self, limit: Optional[int] = None) -> List[Meeting]:
        """Meetings by date, latest first."""
        return self._suggest(Meeting, 'date', limit)

    def suggested_decisions(self, limit: Optional[int] = None) -> List[Decision]:
        """Decisions by date made, latest first."""
        return self._suggest(Decision, 'date_made', limit)

    def _suggest(self, model: type, date_attribute: str, limit: Optional[int]) -> list:
        limit = self.default_limit if limit is None else limit
        return self._read(
            lambda store: store.fetch(
                model,
                sort_by=[SortDescriptor(date_attribute, reverse=True)],
                limit=limit,
            ),
            list,
            f"{model.__name__} suggestions",
        )

    def task_count(self, predicate: Optional[Callable[[ProjectTask], bool]] = None) -> int:
        """Count tasks; 0 when unreadable."""
        return self._read(lambda store: store.count(ProjectTask, predicate), lambda: 0, "task count")

    def meeting_count(self, predicate: Optional[Callable[[Meeting], bool]] = None) -> int:
        """Count meetings; 0 when unreadable."""
        return self._read(lambda store: store.count(Meeting, predicate), lambda: 0, "meeting count")

    def decision_count(self, predicate: Optional[Callable[[Decision], bool]] = None) -> int:
        """Count decisions; 0 when unreadable."""
        return self._read(lambda store: store.count(Decision, predicate), lambda: 0, "decision count")
