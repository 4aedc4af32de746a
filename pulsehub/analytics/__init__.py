"""Grouping, statistics, trends and search over loaded records."""

from .dashboard import DashboardSummary, build_dashboard
from .grouping import group_meetings, group_tasks, grouped_meetings, grouped_tasks
from .search import SearchCategory, SearchResults, SortOrder, search
from .stats import (
    completed_today,
    completion_rate,
    due_today,
    effectiveness_stats,
    impact_breakdown,
    meetings_on_day,
    observations_today,
    overdue_count,
    overdue_tasks,
    pending_decisions,
    status_counts,
    upcoming_tasks,
)
from .trends import TrendAnalyzer

__all__ = [
    'DashboardSummary', 'build_dashboard',
    'group_meetings', 'group_tasks', 'grouped_meetings', 'grouped_tasks',
    'SearchCategory', 'SearchResults', 'SortOrder', 'search',
    'completion_rate', 'effectiveness_stats', 'impact_breakdown',
    'overdue_count', 'status_counts', 'upcoming_tasks',
    'completed_today', 'due_today', 'meetings_on_day', 'observations_today',
    'overdue_tasks', 'pending_decisions',
    'TrendAnalyzer',
]
