from __future__ import annotations

from pathlib import Path
import tempfile
import unittest
import xml.etree.ElementTree as ET

from crumble_core.render.paper import TEXT_BASELINE_SHIFT, Paper
from crumble_core.render.raster import parse_path, rasterize, save_png


class PaperTests(unittest.TestCase):
    def test_rejects_empty_surface(self) -> None:
        with self.assertRaises(ValueError):
            Paper("c", 0, 10)

    def test_z_order_controls(self) -> None:
        paper = Paper("c", 50, 50)
        a = paper.circle(1, 1, 1)
        b = paper.path("M0 0L1 1")
        c = paper.text(5, 5, "hi")
        self.assertEqual(paper.elements, (a, b, c))
        c.to_back()
        self.assertEqual(paper.elements, (c, a, b))
        c.to_front()
        a.to_front()
        self.assertEqual(paper.elements, (b, c, a))

    def test_elements_of_other_papers_cannot_be_moved(self) -> None:
        first = Paper("a", 10, 10)
        second = Paper("b", 10, 10)
        stray = first.circle(1, 1, 1)
        with self.assertRaises(ValueError):
            second._move(stray, front=True)

    def test_attr_accepts_mapping_and_keywords(self) -> None:
        paper = Paper("c", 10, 10)
        el = paper.circle(1, 1, 1).attr({"fill": "red"}, stroke_width=3)
        self.assertEqual(el.attrs["fill"], "red")
        self.assertEqual(el.attrs["stroke-width"], 3)

    def test_hover_callbacks_receive_element(self) -> None:
        paper = Paper("c", 10, 10)
        seen: list[str] = []
        el = paper.circle(1, 1, 1).hover(lambda e: seen.append(f"in:{e.kind}"), lambda e: seen.append("out"))
        self.assertTrue(el.has_hover)
        el.fire("enter")
        el.fire("leave")
        self.assertEqual(seen, ["in:circle", "out"])
        with self.assertRaises(ValueError):
            el.fire("click")  # type: ignore[arg-type]
        paper.circle(2, 2, 1).fire("enter")

    def test_text_nodes_start_with_baseline_shift(self) -> None:
        paper = Paper("c", 10, 10)
        el = paper.text(1, 2, "a\nb")
        self.assertEqual(len(el.node.children), 2)
        self.assertEqual(el.node.children[0].attributes[0], ["dy", TEXT_BASELINE_SHIFT])

    def test_markup_is_valid_svg(self) -> None:
        paper = Paper("chart-1", 120.5, 60)
        paper.path("M0 0L10 10").attr({"stroke": "red", "stroke-width": 4})
        dot = paper.circle(10, 10, 4).attr({"fill": "#fff"})
        dot.node.set_attribute("data-point-y", 2.5)
        paper.text(3, 4, "7").attr({"font-size": 12})
        root = ET.fromstring(paper.to_markup())
        self.assertTrue(root.tag.endswith("svg"))
        self.assertEqual(root.attrib["id"], "chart-1")
        self.assertEqual(root.attrib["width"], "120.5")
        tags = [child.tag.split("}")[-1] for child in root]
        self.assertEqual(tags, ["path", "circle", "text"])
        circle = root[1]
        self.assertEqual(circle.attrib["data-point-y"], "2.5")
        self.assertEqual(circle.attrib["cx"], "10")
        self.assertEqual(root[2][0].text, "7")

    def test_save_writes_markup(self) -> None:
        paper = Paper("c", 10, 10)
        paper.circle(5, 5, 2)
        with tempfile.TemporaryDirectory() as tmp:
            out = paper.save(Path(tmp) / "c.svg")
            self.assertEqual(out.read_text(encoding="utf-8"), paper.to_markup())

    def test_clear_removes_everything(self) -> None:
        paper = Paper("c", 10, 10)
        paper.circle(5, 5, 2)
        paper.clear()
        self.assertEqual(paper.elements, ())


class RasterTests(unittest.TestCase):
    def test_parse_path_handles_lines_and_closed_polygons(self) -> None:
        self.assertEqual(parse_path("M0 0L10 5"), [([(0.0, 0.0), (10.0, 5.0)], False)])
        self.assertEqual(
            parse_path("M0,0 10,0 10,10 Z"),
            [([(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)], True)],
        )
        self.assertEqual(parse_path("M-1.5,2e1 3,4 Z")[0][0][0], (-1.5, 20.0))

    def test_shapes_are_painted_in_z_order(self) -> None:
        paper = Paper("c", 20, 20)
        paper.path("M0,0 20,0 20,20 0,20 Z").attr({"fill": "#ff0000", "stroke-width": 0})
        paper.circle(10, 10, 4).attr({"fill": "#0000ff", "stroke": "none"})
        image = rasterize(paper)
        self.assertEqual(image.size, (20, 20))
        self.assertEqual(image.getpixel((10, 10)), (0, 0, 255, 255))
        self.assertEqual(image.getpixel((1, 1)), (255, 0, 0, 255))

    def test_fill_opacity_blends_with_background(self) -> None:
        paper = Paper("c", 10, 10)
        paper.path("M0,0 10,0 10,10 0,10 Z").attr({"fill": "#000000", "fill-opacity": 0.2, "stroke-width": 0})
        r, g, b, a = rasterize(paper).getpixel((5, 5))
        self.assertEqual(a, 255)
        self.assertTrue(190 <= r <= 215)

    def test_save_png_scales_output(self) -> None:
        paper = Paper("c", 10, 8)
        paper.text(5, 4, "1").attr({"fill": "#bbb"})
        with tempfile.TemporaryDirectory() as tmp:
            out = save_png(paper, Path(tmp) / "c.png", scale=2.0)
            self.assertTrue(out.read_bytes().startswith(b"\x89PNG"))
        with self.assertRaises(ValueError):
            rasterize(paper, scale=0)


if __name__ == "__main__":
    unittest.main()
