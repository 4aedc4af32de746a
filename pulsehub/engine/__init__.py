"""Entity store and record operations."""

from .exceptions import (
    EntityNotFoundError,
    QueryError,
    StoreError,
    StoreLoadError,
    UnknownEntityError,
    ValidationError,
)
from .records import RecordService, is_valid
from .store import EntityStore, SortDescriptor

__all__ = [
    'EntityStore', 'SortDescriptor', 'RecordService', 'is_valid',
    'StoreError', 'EntityNotFoundError', 'QueryError', 'StoreLoadError',
    'UnknownEntityError', 'ValidationError',
]
