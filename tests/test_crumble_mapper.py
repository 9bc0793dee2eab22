from __future__ import annotations

import unittest
from unittest import mock

from crumble_core.render.paper import Paper
from crumble_plot.mapper import map_values, value_to_y
from crumble_plot.metadata import ChartMetadata
from crumble_plot.style import ChartStyle


def _metadata(**kwargs) -> ChartMetadata:
    base = dict(
        top_value=5.0,
        bottom_value=1.0,
        width=300.0,
        height=150.0,
        padding=10.0,
        colors=None,
        segments=3,
        shades=False,
        auto_segments=False,
    )
    base.update(kwargs)
    return ChartMetadata(**base)


class ValueMapperGeometryTests(unittest.TestCase):
    def test_points_are_evenly_spaced_inside_padding(self) -> None:
        points = map_values(None, [1, 3, 2], None, _metadata())
        self.assertEqual(len(points), 3)
        for point, expected in zip(points, (10.0, 150.0, 290.0)):
            self.assertAlmostEqual(point.x, expected, places=9)
        self.assertGreater(points[0].y, points[1].y)
        self.assertLess(points[1].y, points[2].y)

    def test_first_and_last_x_do_not_depend_on_values(self) -> None:
        meta = _metadata(padding=20.0)
        for values in ([1, 2, 3, 4], [5, 5, 1, 1], [0, 100, -3, 2]):
            points = map_values(None, values, None, meta)
            self.assertAlmostEqual(points[0].x, 20.0, places=9)
            self.assertAlmostEqual(points[-1].x, 280.0, places=9)

    def test_larger_values_map_higher(self) -> None:
        meta = _metadata()
        ys = [p.y for p in map_values(None, [1.0, 1.5, 2.0, 3.0, 4.5, 5.0], None, meta)]
        self.assertEqual(ys, sorted(ys, reverse=True))
        self.assertEqual(len(set(ys)), len(ys))

    def test_bottom_and_top_map_to_height_and_zero_without_padding(self) -> None:
        meta = _metadata(padding=0.0)
        points = map_values(None, [meta.bottom_value, meta.top_value], None, meta)
        self.assertAlmostEqual(points[0].y, 150.0, places=9)
        self.assertAlmostEqual(points[1].y, 0.0, places=9)
        self.assertAlmostEqual(value_to_y(meta.bottom_value, meta), 150.0)

    def test_missing_values_read_as_zero(self) -> None:
        meta = _metadata(bottom_value=0.0)
        with_none = map_values(None, [None, 2, None], None, meta)
        with_zero = map_values(None, [0, 2, 0], None, meta)
        self.assertEqual(with_none, with_zero)

    def test_single_value_sits_on_left_edge(self) -> None:
        points = map_values(None, [3], None, _metadata())
        self.assertEqual(len(points), 1)
        self.assertAlmostEqual(points[0].x, 10.0)

    def test_colored_series_requires_paper(self) -> None:
        with self.assertRaises(ValueError):
            map_values(None, [1, 2], "red", _metadata())


class ValueMapperDrawingTests(unittest.TestCase):
    def test_geometry_only_mode_draws_nothing(self) -> None:
        paper = mock.Mock(spec=Paper)
        map_values(paper, [1, 2, 3], None, _metadata())
        self.assertEqual(paper.method_calls, [])

    def test_draws_segments_between_points_and_two_circles_per_point(self) -> None:
        paper = Paper("chart", 300, 150)
        map_values(paper, [1, 3, 2, 4], "red", _metadata())
        kinds = [el.kind for el in paper.elements]
        self.assertEqual(kinds.count("path"), 3)
        self.assertEqual(kinds.count("circle"), 8)
        for line in (el for el in paper.elements if el.kind == "path"):
            self.assertEqual(line.attrs["stroke"], "red")
            self.assertEqual(line.attrs["stroke-width"], 4.0)

    def test_markers_stay_above_following_segment(self) -> None:
        paper = Paper("chart", 300, 150)
        map_values(paper, [1, 3, 2], "red", _metadata())
        kinds = [el.kind for el in paper.elements]
        # Each previous marker pair is raised above the segment drawn after it.
        self.assertEqual(kinds, ["path", "circle", "circle", "path", "circle", "circle", "circle", "circle"])
        first_pair = paper.elements[1:3]
        self.assertTrue(all(el.geometry["cx"] == 10.0 for el in first_pair))

    def test_inner_marker_carries_value_and_hover(self) -> None:
        paper = Paper("chart", 300, 150)
        map_values(paper, [1, 3], "#123456", _metadata())
        inner = [el for el in paper.elements if el.kind == "circle" and el.geometry["r"] == 4.0]
        self.assertEqual([el.node.get_attribute("data-point-y") for el in inner], [1.0, 3.0])
        self.assertTrue(all(el.node.get_attribute("data-point") == 1 for el in inner))

        marker = inner[0]
        self.assertEqual(marker.attrs["fill"], "#fff")
        marker.fire("enter")
        self.assertEqual(marker.attrs["fill"], "#123456")
        marker.fire("leave")
        self.assertEqual(marker.attrs["fill"], "#fff")

    def test_outer_ring_stroke_hidden_when_shading(self) -> None:
        paper = Paper("chart", 300, 150)
        map_values(paper, [1, 3], "red", _metadata(shades=True))
        rings = [el for el in paper.elements if el.kind == "circle" and el.geometry["r"] == 6.0]
        self.assertEqual(len(rings), 2)
        self.assertTrue(all(el.attrs.get("stroke-opacity") == 0 for el in rings))

        plain = Paper("chart", 300, 150)
        map_values(plain, [1, 3], "red", _metadata())
        rings = [el for el in plain.elements if el.kind == "circle" and el.geometry["r"] == 6.0]
        self.assertTrue(all("stroke-opacity" not in el.attrs for el in rings))

    def test_style_controls_marker_geometry(self) -> None:
        paper = Paper("chart", 300, 150)
        style = ChartStyle(marker_radius=2.0, ring_radius=3.0, line_width=1.0)
        map_values(paper, [1, 3], "red", _metadata(), style)
        radii = sorted({el.geometry["r"] for el in paper.elements if el.kind == "circle"})
        self.assertEqual(radii, [2.0, 3.0])


if __name__ == "__main__":
    unittest.main()
