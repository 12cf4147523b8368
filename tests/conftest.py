"""Pytest configuration and shared fixtures."""

import pytest

from series_engine.data.normalizer import normalize_observations


def _monthly_rows(count: int, start_year: int = 2020, base: float = 100.0) -> list[dict]:
    rows = []
    for i in range(count):
        year = start_year + i // 12
        month = i % 12 + 1
        rows.append({"date": f"{year}-{month:02d}-01", "value": base + i})
    return rows


@pytest.fixture
def monthly_rows() -> list[dict]:
    """24 monthly observations, oldest first."""
    return _monthly_rows(24)


@pytest.fixture
def monthly_series(monthly_rows):
    """Normalized 24-point monthly series."""
    return normalize_observations(monthly_rows)


@pytest.fixture
def quarterly_series():
    """Normalized 8-point quarterly series with YYYY-Qn keys."""
    rows = [{"date": f"{2022 + i // 4}-Q{i % 4 + 1}", "value": 200.0 + 5 * i} for i in range(8)]
    return normalize_observations(rows)


@pytest.fixture
def annual_series():
    """Normalized 5-point annual series."""
    rows = [{"date": str(2019 + i), "value": 1000.0 * (1.02 ** i)} for i in range(5)]
    return normalize_observations(rows)


@pytest.fixture
def drawdown_closes() -> list[float]:
    """Close prices peaking at 12 and bottoming at 9."""
    return [10.0, 11.0, 12.0, 11.0, 10.0, 9.0, 10.0]


@pytest.fixture
def trending_closes() -> list[float]:
    """60 closes with a steady uptrend and a regular pullback."""
    closes = []
    price = 100.0
    for i in range(60):
        price += 1.0 if i % 4 else -1.5
        closes.append(price)
    return closes
