"""Chart projection for series and indicator lines"""

from .projector import ChartProjector, nearest_point, tick_indices, value_domain

__all__ = ["ChartProjector", "nearest_point", "tick_indices", "value_domain"]
