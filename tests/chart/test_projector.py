"""Tests for chart projection"""

import pytest

from series_engine.chart.projector import ChartProjector, nearest_point, tick_indices, value_domain
from series_engine.config.defaults import ChartParams
from series_engine.data.models import Series
from series_engine.data.normalizer import normalize_observations


class TestTickIndices:
    """Test tick index selection"""

    def test_includes_first_and_last(self):
        """Test ticks start at 0 and always end at the last index"""
        ticks = tick_indices(24, 8)
        assert ticks[0] == 0
        assert ticks[-1] == 23
        assert ticks == [0, 3, 6, 9, 12, 15, 18, 21, 23]

    def test_fewer_points_than_target(self):
        """Test every point is a tick when there are few points"""
        assert tick_indices(3, 8) == [0, 1, 2]

    def test_single_and_empty(self):
        """Test degenerate counts"""
        assert tick_indices(1, 8) == [0]
        assert tick_indices(0, 8) == []

    def test_single_tick_target(self):
        """Test a target of one still marks the last point"""
        assert tick_indices(10, 1) == [0, 9]


class TestValueDomain:
    """Test shared y-domain"""

    def test_ignores_nan(self):
        """Test NaN sentinels are ignored"""
        assert value_domain([1.0, float("nan"), 5.0], [3.0]) == (1.0, 5.0)

    def test_flat_and_empty(self):
        """Test flat and empty fallbacks"""
        assert value_domain([2.0, 2.0]) == (1.0, 3.0)
        assert value_domain([float("nan")]) == (0.0, 1.0)


class TestChartProjector:
    """Test series projection"""

    def test_points_within_bounds(self, monthly_series):
        """Test every point lies inside the padded surface"""
        projection = ChartProjector().project(monthly_series)
        p = projection.padding
        for x, y in projection.points:
            assert p <= x <= projection.width - p + 1e-9
            assert p <= y <= projection.height - p + 1e-9

    def test_x_spacing(self, monthly_series):
        """Test points span the padded width evenly"""
        projection = ChartProjector(ChartParams(width=600, height=170, padding=12)).project(monthly_series)
        assert projection.points[0][0] == pytest.approx(12.0)
        assert projection.points[-1][0] == pytest.approx(588.0)

    def test_margin_keeps_extrema_off_edges(self, monthly_series):
        """Test the y margin pads the value range"""
        projection = ChartProjector().project(monthly_series)
        lo, hi = projection.y_domain
        assert lo < min(monthly_series.values)
        assert hi > max(monthly_series.values)
        # Rising series: the last point is highest on screen
        assert projection.points[-1][1] < projection.points[0][1]
        assert projection.points[-1][1] > projection.padding

    def test_paths(self, monthly_series):
        """Test line and area path strings"""
        projection = ChartProjector().project(monthly_series)
        assert projection.point_path.startswith("M 12,")
        assert projection.point_path.count(" L ") == len(monthly_series) - 1
        assert projection.area_path.startswith(projection.point_path)
        assert projection.area_path.endswith("L 588,158 L 12,158 Z")

    def test_no_area(self, monthly_series):
        """Test the area path can be disabled"""
        projection = ChartProjector(ChartParams(include_area=False)).project(monthly_series)
        assert projection.area_path is None

    def test_tick_labels_follow_cadence(self, quarterly_series, monthly_series):
        """Test labels use the inferred cadence"""
        quarterly = ChartProjector().project(quarterly_series)
        assert quarterly.tick_labels[0] == "2022-Q1"
        assert quarterly.tick_labels[-1] == "2023-Q4"

        monthly = ChartProjector().project(monthly_series)
        assert monthly.tick_labels[0] == "Jan 2020"
        assert monthly.tick_labels[-1] == "Dec 2021"
        assert monthly.v_gridlines == monthly.tick_positions

    def test_flat_series_centered(self):
        """Test a constant series is drawn at mid-height"""
        series = normalize_observations([("2024-01", 5), ("2024-02", 5), ("2024-03", 5)])
        projection = ChartProjector().project(series)
        assert all(y == pytest.approx(85.0) for _, y in projection.points)

    def test_single_point(self):
        """Test a single point sits at the left padding"""
        series = normalize_observations([("2024-01", 5)])
        projection = ChartProjector().project(series)
        assert projection.points == ((12.0, 85.0),)
        assert projection.tick_indices == (0,)

    def test_empty_series(self):
        """Test an empty series projects to nothing"""
        projection = ChartProjector().project(Series.empty())
        assert projection.is_empty
        assert projection.point_path == ""
        assert projection.tick_labels == ()
        assert len(projection.h_gridlines) == 5

    def test_gridlines(self, monthly_series):
        """Test horizontal gridlines span the padded height"""
        projection = ChartProjector().project(monthly_series)
        assert projection.h_gridlines[0] == pytest.approx(12.0)
        assert projection.h_gridlines[-1] == pytest.approx(158.0)

    def test_invalid_dimensions(self, monthly_series):
        """Test a surface smaller than its padding is rejected"""
        with pytest.raises(ValueError):
            ChartProjector().project(monthly_series, width=20, padding=12)


class TestProjectLine:
    """Test indicator line projection"""

    def test_gaps_split_segments(self):
        """Test NaN sentinels break the path"""
        values = [float("nan"), 1.0, 2.0, float("nan"), 3.0, 4.0]
        line = ChartProjector().project_line(values)
        assert len(line.segments) == 2
        assert line.path.count("M ") == 2
        assert line.domain == (1.0, 4.0)

    def test_shared_domain_clamps(self):
        """Test values outside a shared domain are clamped"""
        line = ChartProjector().project_line([0.0, 10.0], domain=(2.0, 8.0))
        ys = [y for segment in line.segments for _, y in segment]
        assert all(0.0 <= y <= 170.0 for y in ys)

    def test_all_nan(self):
        """Test an undefined line has no path"""
        line = ChartProjector().project_line([float("nan")] * 3)
        assert line.path == ""
        assert line.segments == ()


class TestNearestPoint:
    """Test pointer hover lookup"""

    def test_nearest_index(self, monthly_series):
        """Test the pointer snaps to the nearest point"""
        projection = ChartProjector().project(monthly_series)
        step = projection.points[1][0] - projection.points[0][0]
        hover = nearest_point(projection, monthly_series, projection.points[5][0] + 0.4 * step)
        assert hover.index == 5
        assert hover.value == monthly_series[5].value
        assert hover.label == "Jun 2020"

    def test_clamped_to_range(self, monthly_series):
        """Test pointers outside the plot snap to the ends"""
        projection = ChartProjector().project(monthly_series)
        assert nearest_point(projection, monthly_series, -100.0).index == 0
        assert nearest_point(projection, monthly_series, 10_000.0).index == len(monthly_series) - 1

    def test_empty(self):
        """Test no hover point for an empty chart"""
        projection = ChartProjector().project(Series.empty())
        assert nearest_point(projection, Series.empty(), 50.0) is None
