"""Chart projection models"""

from dataclasses import dataclass
from typing import Optional

Point = tuple[float, float]


@dataclass(frozen=True)
class ChartProjection:
    """
    A series mapped onto a fixed drawing surface.

    Coordinates are in chart space (y grows downward). Scoped to one render
    call and not retained.
    """
    width: float
    height: float
    padding: float
    points: tuple[Point, ...] = ()
    point_path: str = ""
    area_path: Optional[str] = None
    tick_indices: tuple[int, ...] = ()
    tick_labels: tuple[str, ...] = ()
    tick_positions: tuple[float, ...] = ()      # x of each tick
    y_domain: tuple[float, float] = (0.0, 1.0)
    h_gridlines: tuple[float, ...] = ()         # y of each horizontal gridline
    v_gridlines: tuple[float, ...] = ()         # x of each vertical gridline

    @property
    def is_empty(self) -> bool:
        return not self.points


@dataclass(frozen=True)
class LineProjection:
    """An index-aligned indicator array projected with gaps at sentinels"""
    path: str
    segments: tuple[tuple[Point, ...], ...]
    domain: tuple[float, float]


@dataclass(frozen=True)
class HoverPoint:
    """Nearest plotted point to a pointer position"""
    index: int
    x: float
    y: float
    date: str
    value: float
    label: str
