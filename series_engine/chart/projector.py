"""
Chart projection of numeric series onto a bounded drawing surface.

Maps a normalized series to chart-space coordinates (y grows downward),
builds SVG-style path strings, picks evenly spaced x ticks with cadence-aware
labels, and places gridlines. Output is plain data, so any renderer (SVG,
canvas, terminal plot) can draw it.
"""

import math
from typing import Iterable, Optional, Sequence

from ..config.defaults import CadenceParams, ChartParams
from ..data.models import Cadence, Series
from ..data.validators import validate_chart_dimensions
from ..metrics.cadence import infer_cadence
from ..models.chart import ChartProjection, HoverPoint, LineProjection, Point
from ..utils.time import format_period_label


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _coord(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _path(points: Sequence[Point]) -> str:
    if not points:
        return ""
    head = f"M {_coord(points[0][0])},{_coord(points[0][1])}"
    tail = "".join(f" L {_coord(x)},{_coord(y)}" for x, y in points[1:])
    return head + tail


def value_domain(*arrays: Iterable[float]) -> tuple[float, float]:
    """
    Shared y-domain over several arrays, ignoring NaN sentinels.

    Returns:
        (min, max) of all finite values; (0, 1) when there are none and
        (v - 1, v + 1) when every finite value equals v
    """
    lo = math.inf
    hi = -math.inf
    for array in arrays:
        for value in array:
            if isinstance(value, (int, float)) and math.isfinite(value):
                lo = min(lo, value)
                hi = max(hi, value)

    if not math.isfinite(lo) or not math.isfinite(hi):
        return 0.0, 1.0
    if lo == hi:
        return lo - 1.0, hi + 1.0
    return float(lo), float(hi)


def tick_indices(count: int, tick_count_target: int) -> list[int]:
    """
    Evenly spaced tick indices that always include the last point.

    step = max(1, round((count - 1) / (ticks - 1))), ticks = min(target, count)
    """
    if count <= 0:
        return []

    ticks = min(tick_count_target, count)
    step = max(1, _round_half_up((count - 1) / (ticks - 1))) if ticks > 1 else count

    indices = list(range(0, count, step))
    if indices[-1] != count - 1:
        indices.append(count - 1)
    return indices


class ChartProjector:
    """Projects series and indicator arrays onto a fixed coordinate space"""

    def __init__(self, params: Optional[ChartParams] = None,
                 cadence_params: Optional[CadenceParams] = None):
        self.params = params or ChartParams()
        self.cadence_params = cadence_params or CadenceParams()
        validate_chart_dimensions(self.params.width, self.params.height, self.params.padding)

    def _gridlines(self, height: float, padding: float) -> tuple[float, ...]:
        count = self.params.gridline_count
        if count == 1:
            return (height / 2.0,)
        spacing = (height - 2 * padding) / (count - 1)
        return tuple(padding + spacing * i for i in range(count))

    def project(self, series: Series, cadence: Optional[Cadence] = None,
                width: Optional[float] = None, height: Optional[float] = None,
                padding: Optional[float] = None) -> ChartProjection:
        """
        Project a normalized series onto the drawing surface.

        The value range is widened by y_margin_pct on each side so extrema
        are not clipped; a flat series is drawn along the vertical midpoint.

        Args:
            series: Normalized series
            cadence: Cadence for tick labels, inferred when omitted
            width, height, padding: Override the configured surface

        Returns:
            ChartProjection; y_domain is the widened range mapped onto
            [height - padding, padding]
        """
        w = self.params.width if width is None else width
        h = self.params.height if height is None else height
        p = self.params.padding if padding is None else padding
        validate_chart_dimensions(w, h, p)

        h_gridlines = self._gridlines(h, p)
        n = len(series)
        if n == 0:
            return ChartProjection(width=w, height=h, padding=p, h_gridlines=h_gridlines)

        if cadence is None:
            cadence = infer_cadence(series, self.cadence_params)

        values = series.values
        y_min = min(values)
        y_max = max(values)
        margin = (y_max - y_min) * self.params.y_margin_pct
        y0 = y_min - margin
        y1 = y_max + margin

        dx = (w - 2 * p) / (n - 1) if n > 1 else 0.0

        def scale_y(value: float) -> float:
            if y1 == y0:
                return h / 2.0
            return h - p - (value - y0) / (y1 - y0) * (h - 2 * p)

        points = tuple((p + i * dx, scale_y(value)) for i, value in enumerate(values))
        point_path = _path(points)

        area_path = None
        if self.params.include_area:
            baseline = h - p
            area_path = (f"{point_path} L {_coord(points[-1][0])},{_coord(baseline)}"
                         f" L {_coord(p)},{_coord(baseline)} Z")

        indices = tuple(tick_indices(n, self.params.tick_count_target))
        labels = tuple(format_period_label(series.instants[i], cadence) for i in indices)
        positions = tuple(points[i][0] for i in indices)

        return ChartProjection(
            width=w,
            height=h,
            padding=p,
            points=points,
            point_path=point_path,
            area_path=area_path,
            tick_indices=indices,
            tick_labels=labels,
            tick_positions=positions,
            y_domain=(y0, y1),
            h_gridlines=h_gridlines,
            v_gridlines=positions,
        )

    def project_line(self, values: Sequence[float], domain: Optional[tuple[float, float]] = None,
                     width: Optional[float] = None, height: Optional[float] = None,
                     padding: Optional[float] = None) -> LineProjection:
        """
        Project an index-aligned indicator array containing NaN sentinels.

        Each run of finite values becomes its own sub-path, so warm-up
        periods and gaps are left undrawn. Points are clamped to the surface.

        Args:
            values: Indicator values aligned with the price array
            domain: (lo, hi) to map onto the surface; value_domain(values)
                when omitted. Pass a shared domain to overlay several lines.
        """
        w = self.params.width if width is None else width
        h = self.params.height if height is None else height
        p = self.params.padding if padding is None else padding
        validate_chart_dimensions(w, h, p)

        lo, hi = domain if domain is not None else value_domain(values)
        span = (hi - lo) or 1.0
        n = len(values)
        step_x = (w - 2 * p) / (n - 1) if n > 1 else 0.0

        segments: list[tuple[Point, ...]] = []
        current: list[Point] = []
        for i, value in enumerate(values):
            if not (isinstance(value, (int, float)) and math.isfinite(value)):
                if current:
                    segments.append(tuple(current))
                    current = []
                continue
            y = h - p - (value - lo) / span * (h - 2 * p)
            current.append((p + i * step_x, max(0.0, min(h, y))))
        if current:
            segments.append(tuple(current))

        path = " ".join(_path(segment) for segment in segments)
        return LineProjection(path=path, segments=tuple(segments), domain=(lo, hi))


def nearest_point(projection: ChartProjection, series: Series, x: float,
                  cadence: Optional[Cadence] = None) -> Optional[HoverPoint]:
    """
    Map a pointer x coordinate to the nearest plotted observation.

    Args:
        projection: Result of ChartProjector.project for this series
        series: The series that was projected
        x: Pointer x in chart coordinates
        cadence: Cadence for the label, inferred when omitted

    Returns:
        HoverPoint, or None for an empty projection
    """
    if projection.is_empty or len(series) != len(projection.points):
        return None

    n = len(projection.points)
    if n == 1:
        index = 0
    else:
        dx = projection.points[1][0] - projection.points[0][0]
        index = _round_half_up((x - projection.points[0][0]) / dx) if dx else 0
        index = max(0, min(n - 1, index))

    if cadence is None:
        cadence = infer_cadence(series)

    px, py = projection.points[index]
    observation = series[index]
    return HoverPoint(
        index=index,
        x=px,
        y=py,
        date=observation.date,
        value=observation.value,
        label=format_period_label(series.instants[index], cadence),
    )
