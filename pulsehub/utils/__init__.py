"""Utility functions."""

from .config import load_config, get_default_config
from .datetime_utils import (
    add_months,
    calendar_days_between,
    is_same_day,
    is_same_month,
    is_same_week,
    is_same_year,
    start_of_week,
)

__all__ = [
    'load_config',
    'get_default_config',
    'add_months',
    'calendar_days_between',
    'is_same_day',
    'is_same_month',
    'is_same_week',
    'is_same_year',
    'start_of_week',
]
