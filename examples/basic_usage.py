#!/usr/bin/env python3
"""
Basic Usage Example - Series Analytics Engine

Shows how to:
- Normalize an unordered macro observation array and read its deltas
- Project it onto a chart and look up the point under a pointer
- Compute indicators and risk metrics for a close-price array

Run: python examples/basic_usage.py
"""

import math
import random

from series_engine.chart.projector import nearest_point
from series_engine.engine import SeriesAnalyticsEngine
from series_engine.logging import configure_logging
from series_engine.utils.formatting import format_fraction_pct, format_number, format_pct


def sample_mortgage_rates() -> list[dict]:
    """Monthly observations, newest first, with one duplicate and one bad row."""
    rows = []
    for i in range(36):
        year = 2022 + i // 12
        month = i % 12 + 1
        rows.append({"date": f"{year}-{month:02d}-01", "value": f"{3.2 + 0.1 * i:.2f}"})
    rows.append({"date": "2024-12-01", "value": "6.95"})   # Replaces the earlier December value
    rows.append({"date": "not-a-date", "value": "7.00"})
    rows.reverse()
    return rows


def sample_closes(count: int = 120, seed: int = 7) -> list[float]:
    rng = random.Random(seed)
    price = 100.0
    closes = []
    for _ in range(count):
        price *= math.exp(rng.gauss(0.0005, 0.02))
        closes.append(round(price, 2))
    return closes


def main():
    configure_logging(level="WARNING")
    engine = SeriesAnalyticsEngine()

    macro = engine.build_macro_view(sample_mortgage_rates(), series_id="MORTGAGE30US")
    snapshot = macro.snapshot
    print(f"Mortgage rate ({snapshot.cadence.name.lower()}, {snapshot.point_count} points)")
    print(f"  latest {snapshot.latest_label}: {format_number(snapshot.latest.value)}")
    print(f"  {snapshot.deltas.short_period_label}: {format_pct(snapshot.deltas.short_period_pct)}")
    print(f"  YoY: {format_pct(snapshot.deltas.yoy_pct)}")
    print(f"  rejected rows: {macro.normalization.rejected_count}")
    print(f"  ticks: {', '.join(macro.projection.tick_labels)}")

    hover = nearest_point(macro.projection, macro.series, x=300.0, cadence=snapshot.cadence)
    if hover:
        print(f"  hover at x=300 -> {hover.label}: {format_number(hover.value)}")

    closes = sample_closes()
    benchmark = sample_closes(seed=11)
    market = engine.build_market_view(closes, benchmark=benchmark, series_id="BTCUSD")
    risk = market.risk
    print("\nSynthetic instrument")
    print(f"  RSI(14): {format_number(market.indicators.latest_rsi)}")
    for window, value in risk.trailing_returns.items():
        print(f"  {window}-period return: {format_fraction_pct(value)}")
    print(f"  annualized volatility: {format_fraction_pct(risk.annualized_volatility)}")
    print(f"  max drawdown: {format_fraction_pct(risk.max_drawdown)}")
    print(f"  correlation vs benchmark: {format_number(risk.benchmark_correlation)}")


if __name__ == "__main__":
    main()
