from __future__ import annotations

import unittest
from unittest import mock

import numpy as np

from linegraph import ContinuousChart, IndexedChart, InvalidArgument, NotFound
from linegraph.series import build_segments
from linegraph_scene.geometry import Rect


class BuildSegmentsTests(unittest.TestCase):
    def test_empty_points_give_no_segments(self) -> None:
        self.assertEqual(build_segments(np.empty((0, 2)), color=(1, 2, 3, 255), thickness=2.0), ())

    def test_single_point_gives_degenerate_segment(self) -> None:
        (segment,) = build_segments(np.asarray([[4.0, 5.0]]), color=(1, 2, 3, 255), thickness=2.0)
        self.assertEqual(segment.point1, (4.0, 5.0))
        self.assertEqual(segment.point2, (4.0, 5.0))
        self.assertTrue(segment.is_degenerate)

    def test_consecutive_points_are_joined(self) -> None:
        points = np.asarray([[0.0, 0.0], [1.0, 1.0], [2.0, 0.0]])
        segments = build_segments(points, color=(9, 9, 9, 255), thickness=4.0)
        self.assertEqual([(s.point1, s.point2) for s in segments], [((0.0, 0.0), (1.0, 1.0)), ((1.0, 1.0), (2.0, 0.0))])
        self.assertTrue(all(s.color == (9, 9, 9, 255) and s.thickness == 4.0 for s in segments))


class ContinuousSeriesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.chart = ContinuousChart(graph_area=Rect(0.0, 0.0, 100.0, 100.0))
        self.chart.max_x = 10.0
        self.chart.max_y = 10.0

    def test_unsorted_data_renders_in_x_order(self) -> None:
        series = self.chart.add_series([(5.0, 1.0), (1.0, 2.0), (3.0, 3.0)])
        np.testing.assert_array_equal(series.data, [[1.0, 2.0], [3.0, 3.0], [5.0, 1.0]])
        self.chart.flush()
        self.assertEqual(len(series.segments), 2)
        first, second = series.segments
        self.assertEqual(first.point1, (10.0, 80.0))
        self.assertEqual(first.point2, (30.0, 70.0))
        self.assertEqual(second.point1, (30.0, 70.0))
        self.assertEqual(second.point2, (50.0, 90.0))

    def test_segments_are_children_of_background(self) -> None:
        series = self.chart.add_series([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)])
        self.chart.flush()
        for segment in series.segments:
            self.assertIs(segment.parent, self.chart.background)

    def test_new_series_is_dirty_until_flushed(self) -> None:
        series = self.chart.add_series([(0.0, 0.0)])
        self.assertTrue(series.dirty)
        self.assertEqual(series.segments, ())
        self.chart.flush()
        self.assertFalse(series.dirty)
        self.assertEqual(len(series.segments), 1)

    def test_empty_sequence_is_valid_and_has_no_segments(self) -> None:
        series = self.chart.add_series([])
        self.chart.flush()
        self.assertEqual(len(series), 0)
        self.assertEqual(series.segments, ())

    def test_none_data_is_invalid(self) -> None:
        with self.assertRaises(InvalidArgument):
            self.chart.add_series(None)
        self.assertEqual(self.chart.series, ())

    def test_multiple_mutations_in_one_tick_rebuild_once(self) -> None:
        series = self.chart.add_series([(0.0, 0.0), (1.0, 1.0)])
        self.chart.flush()
        with mock.patch("linegraph.series.build_segments", wraps=build_segments) as spy:
            self.chart.min_y = -1.0
            self.chart.max_y = 20.0
            series.set_data([(2.0, 2.0), (3.0, 3.0), (4.0, 4.0)])
            self.chart.flush()
            self.chart.flush()
        self.assertEqual(spy.call_count, 1)
        self.assertEqual(len(series.segments), 2)

    def test_clean_series_flush_is_noop(self) -> None:
        series = self.chart.add_series([(0.0, 0.0), (1.0, 1.0)])
        self.assertTrue(series.flush())
        before = series.segments
        self.assertFalse(series.flush())
        self.assertIs(series.segments, before)

    def test_rebuild_replaces_every_segment(self) -> None:
        series = self.chart.add_series([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)])
        self.chart.flush()
        old = series.segments
        series.set_data([(0.0, 1.0), (1.0, 2.0)])
        self.chart.flush()
        new = series.segments
        self.assertEqual(len(new), 1)
        self.assertFalse(any(a is b for a in old for b in new))
        for segment in old:
            self.assertIsNone(segment.parent)
        background_children = self.chart.background.children
        self.assertEqual(sum(1 for c in background_children if c in new), 1)
        self.assertFalse(any(c in old for c in background_children))

    def test_graph_area_change_marks_dirty_and_moves_geometry(self) -> None:
        series = self.chart.add_series([(10.0, 10.0)])
        self.chart.flush()
        self.assertEqual(series.segments[0].point1, (100.0, 0.0))
        self.chart.graph_area = Rect(0.0, 0.0, 50.0, 50.0)
        self.assertTrue(series.dirty)
        self.chart.flush()
        self.assertEqual(series.segments[0].point1, (50.0, 0.0))

    def test_same_graph_area_is_noop(self) -> None:
        series = self.chart.add_series([(1.0, 1.0)])
        self.chart.flush()
        self.chart.set_graph_area((0, 0, 100, 100))
        self.assertFalse(series.dirty)

    def test_color_and_thickness_apply_in_place(self) -> None:
        series = self.chart.add_series([(0.0, 0.0), (1.0, 1.0), (2.0, 0.0)], color=(255, 0, 0), thickness=2.0)
        self.chart.flush()
        segments = series.segments
        series.color = "#00FF00"
        series.set_thickness(5.0)
        self.assertFalse(series.dirty)
        self.assertIs(series.segments, segments)
        for segment in segments:
            self.assertEqual(segment.color, (0, 255, 0, 255))
            self.assertEqual(segment.thickness, 5.0)

    def test_invalid_color_or_thickness_rejected(self) -> None:
        series = self.chart.add_series([(0.0, 0.0)])
        with self.assertRaises(InvalidArgument):
            series.set_color("green")
        with self.assertRaises(InvalidArgument):
            series.set_thickness(-1.0)
        with self.assertRaises(InvalidArgument):
            self.chart.add_series([(0.0, 0.0)], color=(1, 2))
        self.assertEqual(len(self.chart.series), 1)

    def test_failed_set_data_keeps_previous_buffer(self) -> None:
        series = self.chart.add_series([(0.0, 0.0), (1.0, 1.0)])
        self.chart.flush()
        with self.assertRaises(InvalidArgument):
            series.set_data([(0.0, float("nan"))])
        self.assertEqual(len(series), 2)
        self.assertFalse(series.dirty)

    def test_rebuild_reentry_is_rejected(self) -> None:
        series = self.chart.add_series([(0.0, 0.0), (1.0, 1.0)])

        def reenter(*args, **kwargs):
            series._rebuild(self.chart)

        with mock.patch("linegraph.series.build_segments", side_effect=reenter):
            with self.assertRaisesRegex(RuntimeError, "re-entered"):
                self.chart.flush()
        self.assertTrue(series.dirty)
        self.chart.flush()
        self.assertEqual(len(series.segments), 1)

    def test_rebuild_is_logged(self) -> None:
        self.chart.add_series([(0.0, 0.0), (0.5, 1.0), (1.0, 0.0)])
        with self.assertLogs("linegraph.series", level="DEBUG") as logs:
            self.chart.flush()
        self.assertIn("3 points -> 2 segments", logs.output[0])


class RemoveSeriesTests(unittest.TestCase):
    def test_remove_releases_segments(self) -> None:
        chart = ContinuousChart()
        series = chart.add_series([(0.0, 0.0), (0.5, 1.0), (1.0, 0.0)])
        chart.flush()
        segments = series.segments
        self.assertTrue(chart.remove_series(series))
        self.assertFalse(series.attached)
        self.assertEqual(series.segments, ())
        for segment in segments:
            self.assertFalse(chart.contains(segment))

    def test_second_remove_reports_missing(self) -> None:
        chart = ContinuousChart()
        series = chart.add_series([(0.0, 0.0)])
        self.assertTrue(chart.remove_series(series))
        self.assertFalse(chart.remove_series(series))
        with self.assertRaises(NotFound):
            chart.remove_series(series, missing_ok=False)

    def test_series_from_other_chart_is_not_found(self) -> None:
        chart = ContinuousChart()
        other = ContinuousChart().add_series([(0.0, 0.0)])
        self.assertFalse(chart.remove_series(other))
        self.assertTrue(other.attached)

    def test_detached_series_never_rebuilds(self) -> None:
        chart = IndexedChart()
        series = chart.add_series([0.0, 1.0])
        chart.remove_series(series)
        series.set_data([0.5, 0.5, 0.5])
        self.assertFalse(series.flush())
        self.assertEqual(series.segments, ())
        self.assertEqual(chart.max_x, 0)


if __name__ == "__main__":
    unittest.main()
