"""Base record filter interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, TypeVar

T = TypeVar('T')


def contains_text(value: Optional[str], needle: str) -> bool:
    """Case-insensitive substring match; None never matches."""
    return bool(value) and needle.casefold() in value.casefold()


class RecordFilter(ABC):
    """Abstract base class for feature-scoped filters.

    Subclasses are small immutable dataclasses, one per screen, so each
    feature owns its own criteria. ``apply`` always runs the same sequence:
    text search, status, level, type. An unset criterion passes every
    record through, and an empty search text means no text filter.
    """

    search_text: str = ""

    def apply(self, records: Iterable[T]) -> List[T]:
        """Filter records, preserving their order."""
        result = list(records)
        if self.search_text:
            result = [r for r in result if self.matches_text(r)]
        result = [r for r in result if self.matches_status(r)]
        result = [r for r in result if self.matches_level(r)]
        result = [r for r in result if self.matches_type(r)]
        return result

    def matches_text(self, record) -> bool:
        """Whether any searched field contains the search text."""
        return any(contains_text(value, self.search_text) for value in self.text_fields(record))

    @abstractmethod
    def text_fields(self, record) -> Sequence[Optional[str]]:
        """Return the fields searched by the free-text filter."""
        pass

    def matches_status(self, record) -> bool:
        """Status criterion; passes everything unless overridden."""
        return True

    def matches_level(self, record) -> bool:
        """Priority, impact or rating criterion."""
        return True

    def matches_type(self, record) -> bool:
        """Record type criterion."""
        return True

    @property
    def is_active(self) -> bool:
        """True when any criterion would narrow the result."""
        return any(
            getattr(self, name) not in (None, "")
            for name in self.__dataclass_fields__
        )
