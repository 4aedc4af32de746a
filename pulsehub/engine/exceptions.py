"""Custom exceptions for store operations."""


class StoreError(Exception):
    """Base exception for store errors."""
    pass


class EntityNotFoundError(StoreError):
    """Requested record not found."""
    pass


class UnknownEntityError(StoreError):
    """Record type is not managed by the store."""
    pass


class QueryError(StoreError):
    """Predicate or sort failed while fetching."""
    pass


class StoreLoadError(StoreError):
    """Persisted snapshot missing or unreadable."""
    pass


class ValidationError(StoreError):
    """Form input rejected before reaching the store."""
    pass
