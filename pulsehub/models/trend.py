"""Trend indicator and reporting period models."""

from dataclasses import dataclass
from enum import Enum


class TimeRange(Enum):
    DAY = "Day"
    WEEK = "Week"
    MONTH = "Month"
    YEAR = "Year"

    @classmethod
    def from_name(cls, name: str) -> 'TimeRange':
        """Accept either the member name or the label, case-insensitively."""
        key = name.strip().lower()
        for member in cls:
            if key in (member.name.lower(), member.value.lower()):
                return member
        if key == "today":
            return cls.DAY
        raise ValueError(f"Unknown time range: {name}")


class TrendDirection(Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class Trend:
    """Period-over-period change: up(n), down(n) or neutral."""

    direction: TrendDirection
    magnitude: int = 0

    def __post_init__(self):
        """Reject magnitudes that do not fit the direction."""
        if self.direction == TrendDirection.NEUTRAL and self.magnitude != 0:
            raise ValueError("A neutral trend has no magnitude")
        if self.direction != TrendDirection.NEUTRAL and self.magnitude <= 0:
            raise ValueError("An up or down trend needs a positive magnitude")

    @classmethod
    def up(cls, magnitude: int) -> 'Trend':
        """Increase by magnitude."""
        return cls(TrendDirection.UP, magnitude)

    @classmethod
    def down(cls, magnitude: int) -> 'Trend':
        """Decrease by magnitude."""
        return cls(TrendDirection.DOWN, magnitude)

    @classmethod
    def neutral(cls) -> 'Trend':
        """No change."""
        return cls(TrendDirection.NEUTRAL)

    @classmethod
    def from_difference(cls, difference: int) -> 'Trend':
        """Map a signed difference to up, down or neutral."""
        if difference > 0:
            return cls.up(difference)
        elif difference < 0:
            return cls.down(abs(difference))
        return cls.neutral()

    @property
    def display_value(self) -> str:
        """Signed text for display, e.g. ``+3``."""
        if self.direction == TrendDirection.UP:
            return f"+{self.magnitude}"
        elif self.direction == TrendDirection.DOWN:
            return f"-{self.magnitude}"
        return "0"

    def to_dict(self):
        """Convert to a JSON-safe dict."""
        return {'direction': self.direction.value, 'magnitude': self.magnitude}
