"""
Parsers for the raw shapes handed over by upstream data fetchers.

Date keys arrive in several spellings depending on the provider (monthly
statistical releases, quarterly national accounts, daily market history).
This module resolves them to CanonicalInstant values, coerces loosely typed
observation values, and decodes raw JSON observation payloads.
"""

import math
import re
from datetime import datetime
from typing import Any, Optional, Union

import orjson
from dateutil import parser as date_parser

from .models import CanonicalInstant, DateKeyParseResult


class ParseError(Exception):
    """Raised when parsing fails due to invalid data format."""
    pass


_QUARTER_RE = re.compile(r"^(\d{4})-[Qq]([1-4])$")
_PREFIXED_MONTH_RE = re.compile(r"^(\d{4})-M(0[1-9]|1[0-2])$")
_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")
_FULL_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_YEAR_RE = re.compile(r"^(\d{4})$")

# Compact national-accounts spellings ("2024Q1", "2024M01")
_COMPACT_QUARTER_RE = re.compile(r"^(\d{4})[Qq]([1-4])$")
_COMPACT_MONTH_RE = re.compile(r"^(\d{4})M(0[1-9]|1[0-2])$")

# Missing parts of a generic date (e.g. "March 2024") resolve to the 1st
_GENERIC_DEFAULT = datetime(1970, 1, 1)

# Generic keys must name their year; "10" or "March" alone would land near the epoch
_YEAR_TOKEN_RE = re.compile(r"(?<!\d)\d{4}(?!\d)")

_MISSING_VALUE_MARKERS = {"", ".", "-", "—", "n/a", "na", "nan", "null", "none"}


def _quarter_instant(year: str, quarter: str) -> CanonicalInstant:
    return CanonicalInstant(int(year), (int(quarter) - 1) * 3 + 1, 1)


def parse_date_key(date_key: str) -> DateKeyParseResult:
    """
    Parse a heterogeneous date key into a canonical instant.

    Shapes are tried in order, first match wins:
    YYYY-Qn, YYYY-Mnn, YYYY-MM, YYYY-MM-DD, YYYY, then the compact
    YYYYQn / YYYYMnn spellings, then a generic date parse.

    Args:
        date_key: Raw date key string

    Returns:
        DateKeyParseResult carrying either the instant or an error message.
        Never raises for bad input.
    """
    if not isinstance(date_key, str):
        return DateKeyParseResult.failure(str(date_key), f"Date key must be a string, got {type(date_key).__name__}")

    key = date_key.strip()
    if not key:
        return DateKeyParseResult.failure(date_key, "Empty date key")

    m = _QUARTER_RE.match(key)
    if m:
        return DateKeyParseResult.success(date_key, _quarter_instant(m.group(1), m.group(2)))

    m = _PREFIXED_MONTH_RE.match(key)
    if m:
        return DateKeyParseResult.success(date_key, CanonicalInstant(int(m.group(1)), int(m.group(2)), 1))

    m = _YEAR_MONTH_RE.match(key)
    if m:
        return DateKeyParseResult.success(date_key, CanonicalInstant(int(m.group(1)), int(m.group(2)), 1))

    m = _FULL_DATE_RE.match(key)
    if m:
        try:
            calendar_date = datetime(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError as e:
            return DateKeyParseResult.failure(date_key, f"Invalid calendar date '{key}': {e}")
        return DateKeyParseResult.success(date_key, CanonicalInstant.from_date(calendar_date))

    m = _YEAR_RE.match(key)
    if m:
        return DateKeyParseResult.success(date_key, CanonicalInstant(int(m.group(1)), 1, 1))

    m = _COMPACT_QUARTER_RE.match(key)
    if m:
        return DateKeyParseResult.success(date_key, _quarter_instant(m.group(1), m.group(2)))

    m = _COMPACT_MONTH_RE.match(key)
    if m:
        return DateKeyParseResult.success(date_key, CanonicalInstant(int(m.group(1)), int(m.group(2)), 1))

    return _parse_generic(date_key, key)


def _parse_generic(date_key: str, key: str) -> DateKeyParseResult:
    """Fallback for ISO timestamps and free-form dates ("Mar 2024", "2024-03-15T00:00:00Z")."""
    if not _YEAR_TOKEN_RE.search(key):
        return DateKeyParseResult.failure(date_key, f"Date key '{key}' has no four-digit year")
    try:
        parsed = datetime.fromisoformat(key)
    except ValueError:
        try:
            parsed = date_parser.parse(key, default=_GENERIC_DEFAULT)
        except (ValueError, OverflowError) as e:
            return DateKeyParseResult.failure(date_key, f"Unrecognized date key '{key}': {e}")
    return DateKeyParseResult.success(date_key, CanonicalInstant.from_date(parsed))


def parse_observation_value(raw_value: Any) -> Optional[float]:
    """
    Coerce a loosely typed observation value to a finite float.

    Providers send numbers, numeric strings with thousands separators
    ("1,234.5") or placeholder strings for missing data (".").

    Returns:
        The float value, or None if the value is missing or not finite
    """
    if raw_value is None or isinstance(raw_value, bool):
        return None

    if isinstance(raw_value, (int, float)):
        value = float(raw_value)
    elif isinstance(raw_value, str):
        text = raw_value.strip().replace(",", "")
        if text.lower() in _MISSING_VALUE_MARKERS:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    else:
        return None

    return value if math.isfinite(value) else None


def parse_json_payload(raw_data: Union[str, bytes]) -> Any:
    """
    Parse raw JSON text into Python objects.

    Raises:
        ParseError: If JSON parsing fails
    """
    try:
        return orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}")


def parse_observations_payload(raw_data: Union[str, bytes]) -> list[Any]:
    """
    Decode a raw observations document into a list of entries.

    Accepted shapes:
        [{"date": "2024-01", "value": 1.0}, ...]
        {"observations": [{"date": "2024-01-01", "value": "1.0"}, ...]}

    Raises:
        ParseError: If the document is not valid JSON or has no observation list
    """
    payload = parse_json_payload(raw_data)

    if isinstance(payload, list):
        return payload

    if not isinstance(payload, dict):
        raise ParseError("Payload must be a list or an object")

    if "observations" not in payload:
        raise ParseError("Missing 'observations' field in payload")

    observations = payload["observations"]
    if not isinstance(observations, list):
        raise ParseError("'observations' field must be a list")

    return observations
