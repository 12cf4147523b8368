"""
Series Engine - Time-Series Normalization and Analytics

Turns raw, heterogeneously-shaped observation arrays from economic and market
data providers into chronologically sound, derived, chart-ready structures:
normalized series, cadence-aware deltas, technical indicators, risk metrics
and chart projections.
"""

__version__ = "0.1.0"
__author__ = "Series Engine Team"
