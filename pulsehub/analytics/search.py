"""Search across every record type."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, TypeVar

from ..engine.store import EntityStore
from ..filters.decisions import DecisionFilter
from ..filters.meetings import MeetingFilter
from ..filters.observations import ObservationFilter
from ..filters.tasks import TaskFilter
from ..models.decision import Decision
from ..models.meeting import Meeting
from ..models.observation import ClassroomWalkthrough
from ..models.task import ProjectTask

T = TypeVar('T')


class SearchCategory(Enum):
    ALL = "All"
    TASKS = "Tasks"
    MEETINGS = "Meetings"
    DECISIONS = "Decisions"
    OBSERVATIONS = "Observations"


class SortOrder(Enum):
    RELEVANCE = "Relevance"
    DATE_ASCENDING = "Date (Old to New)"
    DATE_DESCENDING = "Date (New to Old)"
    NAME = "Name"


@dataclass
class SearchResults:
    tasks: List[ProjectTask] = field(default_factory=list)
    meetings: List[Meeting] = field(default_factory=list)
    decisions: List[Decision] = field(default_factory=list)
    observations: List[ClassroomWalkthrough] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when nothing matched."""
        return self.total_count == 0

    @property
    def total_count(self) -> int:
        """Matches across every record type."""
        return len(self.tasks) + len(self.meetings) + len(self.decisions) + len(self.observations)


def _sorted(records: List[T], order: SortOrder, date_of: Callable, name_of: Callable) -> List[T]:
    """Order one result list; relevance keeps store order."""
    if order == SortOrder.DATE_ASCENDING:
        return sorted(records, key=date_of)
    elif order == SortOrder.DATE_DESCENDING:
        return sorted(records, key=date_of, reverse=True)
    elif order == SortOrder.NAME:
        return sorted(records, key=lambda r: name_of(r).casefold())
    return records


def search(
    store: EntityStore,
    query: str,
    category: SearchCategory = SearchCategory.ALL,
    sort_order: SortOrder = SortOrder.RELEVANCE,
) -> SearchResults:
    """Match query against every record type the category allows.

    Relevance keeps store order. A blank query returns nothing.
    """
    query = query.strip()
    if not query:
        return SearchResults()

    def wanted(kind: SearchCategory) -> bool:
        return category in (SearchCategory.ALL, kind)

    results = SearchResults()
    if wanted(SearchCategory.TASKS):
        results.tasks = _sorted(
            TaskFilter(search_text=query).apply(store.all(ProjectTask)),
            sort_order, lambda t: t.due_date, lambda t: t.title,
        )
    if wanted(SearchCategory.MEETINGS):
        results.meetings = _sorted(
            MeetingFilter(search_text=query).apply(store.all(Meeting)),
            sort_order, lambda m: m.date, lambda m: m.title,
        )
    if wanted(SearchCategory.DECISIONS):
        results.decisions = _sorted(
            DecisionFilter(search_text=query).apply(store.all(Decision)),
            sort_order, lambda d: d.date_made, lambda d: d.title,
        )
    if wanted(SearchCategory.OBSERVATIONS):
        results.observations = _sorted(
            ObservationFilter(search_text=query).apply(store.all(ClassroomWalkthrough)),
            sort_order, lambda o: o.date, lambda o: o.teacher_name,
        )
    return results
