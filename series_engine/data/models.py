"""
Canonical data models for normalized observation series.

This module defines immutable data structures that represent clean, ordered
time series after normalization from the raw arrays returned by upstream
statistical and market data providers.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import Iterator, Optional, Sequence


@dataclass(frozen=True, order=True)
class CanonicalInstant:
    """Calendar instant used only for ordering and labeling observations."""
    year: int
    month: int          # 1-12
    day: int = 1

    @classmethod
    def from_date(cls, value: date) -> "CanonicalInstant":
        """Build an instant from a date or datetime (time of day is dropped)."""
        return cls(value.year, value.month, value.day)

    @property
    def month_ordinal(self) -> int:
        """Months elapsed since year 0, for whole-month arithmetic."""
        return self.year * 12 + (self.month - 1)

    @property
    def quarter(self) -> int:
        """Calendar quarter (1-4) containing this instant."""
        return (self.month - 1) // 3 + 1


# Legacy placement for unparseable keys when the "sentinel" policy is active
EPOCH_SENTINEL = CanonicalInstant(1970, 1, 1)


@dataclass(frozen=True)
class DateKeyParseResult:
    """Tagged result of parsing one date key: an instant or a parse error."""

    date_key: str
    instant: Optional[CanonicalInstant] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.instant is not None

    @classmethod
    def success(cls, date_key: str, instant: CanonicalInstant) -> "DateKeyParseResult":
        """Create successful result."""
        return cls(date_key=date_key, instant=instant)

    @classmethod
    def failure(cls, date_key: str, error: str) -> "DateKeyParseResult":
        """Create failed result."""
        return cls(date_key=date_key, error=error)

    def instant_or_sentinel(self) -> CanonicalInstant:
        """Parsed instant, or the 1970-01-01 epoch sentinel on failure."""
        return self.instant if self.instant is not None else EPOCH_SENTINEL


@dataclass(frozen=True)
class Observation:
    """One dated observation as handed over by a fetch collaborator."""
    date: str           # Raw date key, never re-derived from the parsed instant
    value: float


class Cadence(IntEnum):
    """Inferred sampling cadence, valued in months per step."""
    MONTHLY = 1
    QUARTERLY = 3
    ANNUAL = 12

    @property
    def months(self) -> int:
        return int(self.value)

    @property
    def periods_per_year(self) -> int:
        return max(1, 12 // self.value)

    @property
    def short_period_label(self) -> str:
        """Label of the period-over-period change for this cadence."""
        if self is Cadence.QUARTERLY:
            return "QoQ"
        if self is Cadence.ANNUAL:
            return "YoY"
        return "MoM"


@dataclass(frozen=True)
class Series:
    """
    Ordered sequence of observations.

    Invariant: instants are strictly ascending, so there is at most one
    observation per distinct instant. Build through SeriesNormalizer; a
    Series is never mutated, only rebuilt.
    """

    observations: tuple[Observation, ...] = ()
    instants: tuple[CanonicalInstant, ...] = ()

    def __post_init__(self):
        if len(self.observations) != len(self.instants):
            raise ValueError("observations and instants must have the same length")

    @classmethod
    def empty(cls) -> "Series":
        return cls()

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.observations)

    def __getitem__(self, index: int) -> Observation:
        return self.observations[index]

    def __bool__(self) -> bool:
        return bool(self.observations)

    @property
    def values(self) -> list[float]:
        """Observation values in chronological order (fresh list)."""
        return [obs.value for obs in self.observations]

    @property
    def dates(self) -> list[str]:
        """Raw date keys in chronological order (fresh list)."""
        return [obs.date for obs in self.observations]

    @property
    def latest(self) -> Optional[Observation]:
        """Most recent observation, None for an empty series."""
        return self.observations[-1] if self.observations else None

    def tail(self, count: int) -> "Series":
        """Series restricted to its most recent `count` observations."""
        if count <= 0:
            return Series.empty()
        return Series(self.observations[-count:], self.instants[-count:])


@dataclass(frozen=True)
class RejectedObservation:
    """An input observation excluded from a normalized series, and why."""
    date_key: object
    value: object
    reason: str


@dataclass(frozen=True)
class NormalizationResult:
    """Result of normalizing one raw observation array."""

    series: Series = field(default_factory=Series.empty)
    rejected: tuple[RejectedObservation, ...] = ()
    input_count: int = 0

    @property
    def success(self) -> bool:
        """True when at least one observation survived normalization."""
        return len(self.series) > 0

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)

    @classmethod
    def build(cls, series: Series, rejected: Sequence[RejectedObservation],
              input_count: int) -> "NormalizationResult":
        """Create a result from a finished series and its rejects."""
        return cls(series=series, rejected=tuple(rejected), input_count=input_count)
