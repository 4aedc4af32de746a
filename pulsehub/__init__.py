"""PulseHub: records, queries and statistics for school administrators."""

__version__ = "0.1.0"
