"""
Tests for pulsehub/analytics/search.py
"""

import pytest

from pulsehub.analytics.search import SearchCategory, SortOrder, search
from pulsehub.engine.store import EntityStore

from .conftest import NOW


@pytest.fixture
def audit_store(make_task):
    store = EntityStore()
    store.extend([
        make_task("Beta audit", days=5),
        make_task("alpha audit", days=9),
        make_task("Gamma audit", days=1),
        make_task("Unrelated", days=2),
    ])
    return store


class TestSearch:
    def test_blank_query_returns_nothing(self, populated_store):
        results = search(populated_store, "   ")
        assert results.is_empty
        assert results.total_count == 0

    def test_all_categories(self, populated_store):
        results = search(populated_store, "staff")
        assert [t.title for t in results.tasks] == ["Annual Safety Training"]
        assert [m.title for m in results.meetings] == ["Staff Meeting"]
        assert results.decisions == []
        assert results.total_count == 2

    def test_single_category(self, populated_store):
        results = search(populated_store, "staff", SearchCategory.MEETINGS)
        assert results.tasks == []
        assert len(results.meetings) == 1

    def test_matches_attendees(self, populated_store):
        results = search(populated_store, "david")
        assert [m.title for m in results.meetings] == ["Staff Meeting"]

    def test_query_is_trimmed(self, populated_store):
        assert search(populated_store, "  library ").decisions[0].title == "Extend Library Hours"

    def test_no_match(self, populated_store):
        assert search(populated_store, "zzz").is_empty


class TestSortOrder:
    @pytest.mark.parametrize("order, expected", [
        (SortOrder.RELEVANCE, ["Beta audit", "alpha audit", "Gamma audit"]),
        (SortOrder.DATE_ASCENDING, ["Gamma audit", "Beta audit", "alpha audit"]),
        (SortOrder.DATE_DESCENDING, ["alpha audit", "Beta audit", "Gamma audit"]),
        (SortOrder.NAME, ["alpha audit", "Beta audit", "Gamma audit"]),
    ])
    def test_task_order(self, audit_store, order, expected):
        results = search(audit_store, "audit", SearchCategory.TASKS, order)
        assert [t.title for t in results.tasks] == expected
