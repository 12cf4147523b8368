"""
Series normalization pipeline for raw observation arrays.

This module provides the SeriesNormalizer class that turns an unordered,
possibly duplicated array of {date, value} observations into a Series with
strictly ascending canonical instants and one observation per instant.
"""

from collections.abc import Mapping
from datetime import date
from typing import Any, Iterable, Optional, Union

from ..config.defaults import INVALID_DATE_POLICIES, NormalizationParams
from ..errors import MalformedDataError, MalformedDateKeyError, MissingDataError
from ..logging.config import get_normalization_logger, log_rejected_observation
from .models import (
    EPOCH_SENTINEL,
    CanonicalInstant,
    NormalizationResult,
    Observation,
    RejectedObservation,
    Series,
)
from .parsers import ParseError, parse_date_key, parse_observation_value, parse_observations_payload

logger = get_normalization_logger(__name__)


class SeriesNormalizer:
    """
    Normalization pipeline for observation arrays.

    Deduplicates by canonical instant with last-write-wins (a later input
    occurrence of the same date replaces an earlier one), sorts ascending,
    and applies the configured policy to unparseable date keys:

    - "exclude": drop the observation and record it in the result
    - "sentinel": place it at 1970-01-01 (legacy behaviour); only the last
      such entry survives and the ones it displaces are recorded as rejects
    - "raise": raise MalformedDateKeyError
    """

    def __init__(self, params: Optional[NormalizationParams] = None):
        self.params = params or NormalizationParams()
        if self.params.invalid_date_policy not in INVALID_DATE_POLICIES:
            raise ValueError(f"Unknown invalid_date_policy: {self.params.invalid_date_policy!r}")

    @property
    def invalid_date_policy(self) -> str:
        return self.params.invalid_date_policy

    def normalize(self, raw: Iterable[Any], keep_last: Optional[int] = None) -> NormalizationResult:
        """
        Normalize a raw observation array.

        Args:
            raw: Observations as Observation objects, {"date", "value"} mappings
                or (date, value) pairs. Never modified.
            keep_last: Keep only the most recent N points (overrides params)

        Returns:
            NormalizationResult with the ascending, deduplicated series and
            the observations that were excluded
        """
        by_instant: dict[CanonicalInstant, Observation] = {}
        rejected: list[RejectedObservation] = []
        input_count = 0

        for entry in raw:
            input_count += 1
            try:
                date_key, raw_value = self._entry_fields(entry)
            except MissingDataError as e:
                raw_date = entry.get("date") if isinstance(entry, Mapping) else None
                self._reject(rejected, raw_date, entry, str(e))
                continue

            value = parse_observation_value(raw_value)
            if value is None:
                self._reject(rejected, date_key, raw_value, "missing or non-finite value")
                continue

            parsed = parse_date_key(date_key)
            if parsed.ok:
                instant = parsed.instant
            elif self.invalid_date_policy == "raise":
                raise MalformedDateKeyError(parsed.error, date_key=date_key)
            elif self.invalid_date_policy == "exclude":
                self._reject(rejected, date_key, raw_value, parsed.error)
                continue
            else:
                instant = EPOCH_SENTINEL
                displaced = by_instant.get(instant)
                if displaced is not None:
                    self._reject(rejected, displaced.date, displaced.value,
                                 "collides with epoch sentinel")

            # Last write wins for colliding instants
            by_instant[instant] = Observation(date=date_key, value=value)

        ordered = sorted(by_instant.items(), key=lambda item: item[0])
        series = Series(
            observations=tuple(obs for _, obs in ordered),
            instants=tuple(instant for instant, _ in ordered),
        )

        window = keep_last if keep_last is not None else self.params.keep_last
        if window is not None:
            series = series.tail(window)

        logger.debug(
            "Series normalized",
            input_count=input_count,
            output_count=len(series),
            rejected_count=len(rejected),
        )
        return NormalizationResult.build(series, rejected, input_count)

    def normalize_payload(self, raw_data: Union[str, bytes],
                          keep_last: Optional[int] = None) -> NormalizationResult:
        """
        Decode a raw JSON observations document and normalize it.

        Raises:
            MalformedDataError: If the document cannot be decoded
        """
        try:
            entries = parse_observations_payload(raw_data)
        except ParseError as e:
            preview = raw_data[:100] if isinstance(raw_data, str) else raw_data[:100].decode("utf-8", "replace")
            raise MalformedDataError(f"Parse error: {e}", raw_data=preview)
        return self.normalize(entries, keep_last=keep_last)

    def extract_price_series(self, bars: Iterable[Any], price_field: str = "close",
                             date_field: str = "date") -> list[float]:
        """
        Extract an ascending close-price array from dated bars.

        Bars are normalized like observations (deduplicated by date, sorted
        ascending) so a descending provider history comes out oldest-first.
        """
        observations = []
        for bar in bars:
            if isinstance(bar, Mapping):
                observations.append({"date": bar.get(date_field), "value": bar.get(price_field)})
        return self.normalize(observations).series.values

    def _entry_fields(self, entry: Any) -> tuple[str, Any]:
        """Pull (date key, raw value) out of one raw entry."""
        if isinstance(entry, Observation):
            return entry.date, entry.value

        if isinstance(entry, Mapping):
            if "date" not in entry or entry["date"] is None:
                raise MissingDataError("Observation missing 'date'", data_type="date")
            if "value" not in entry:
                raise MissingDataError("Observation missing 'value'", data_type="value")
            return self._date_key(entry["date"]), entry["value"]

        if isinstance(entry, (tuple, list)) and len(entry) == 2:
            if entry[0] is None:
                raise MissingDataError("Observation missing 'date'", data_type="date")
            return self._date_key(entry[0]), entry[1]

        raise MissingDataError(f"Unsupported observation shape: {type(entry).__name__}",
                               data_type="observation")

    @staticmethod
    def _date_key(raw_date: Any) -> str:
        if isinstance(raw_date, date):
            return raw_date.isoformat()
        return raw_date if isinstance(raw_date, str) else str(raw_date)

    def _reject(self, rejected: list[RejectedObservation], date_key: Any,
                value: Any, reason: str) -> None:
        rejected.append(RejectedObservation(date_key=date_key, value=value, reason=reason))
        log_rejected_observation(logger, date_key, reason, self.invalid_date_policy)


def normalize_observations(raw: Iterable[Any], keep_last: Optional[int] = None) -> Series:
    """Normalize with default parameters and return just the series."""
    return SeriesNormalizer().normalize(raw, keep_last=keep_last).series
