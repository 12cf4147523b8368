"""
Result models.

Immutable snapshots produced by the metrics calculator and chart projector,
safe to serialize to any rendering layer.
"""
