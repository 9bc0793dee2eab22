from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Literal, Mapping
import xml.etree.ElementTree as ET


SVG_NAMESPACE = "http://www.w3.org/2000/svg"
ElementKind = Literal["circle", "path", "text"]
HoverPhase = Literal["enter", "leave"]
HoverCallback = Callable[["Element"], None]

# Default attributes a fresh shape carries before any `attr` call.
_BASE_ATTRS: dict[str, dict[str, Any]] = {
    "circle": {"fill": "none", "stroke": "#000"},
    "path": {"fill": "none", "stroke": "#000"},
    "text": {"font-family": "Arial", "font-size": 10, "stroke": "none", "fill": "#000", "text-anchor": "middle"},
}
# Baseline shift emitted on the first line of every text node.
TEXT_BASELINE_SHIFT = 3.5


@dataclass
class TextSpan:
    """One line of a text node with its ordered `[name, value]` attributes."""

    text: str
    attributes: list[list[Any]] = field(default_factory=list)


@dataclass
class Node:
    """Mutable document node behind a drawn element."""

    tag: str
    attributes: dict[str, Any] = field(default_factory=dict)
    children: list[TextSpan] = field(default_factory=list)

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def get_attribute(self, name: str) -> Any:
        return self.attributes.get(name)


class Element:
    """A shape on a paper. Mutators return the element for chaining."""

    def __init__(self, paper: "Paper", kind: ElementKind, geometry: Mapping[str, Any], node: Node) -> None:
        self.paper = paper
        self.kind = kind
        self.geometry = dict(geometry)
        self.attrs: dict[str, Any] = dict(_BASE_ATTRS[kind])
        self.node = node
        self._hover: tuple[HoverCallback, HoverCallback] | None = None

    def attr(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> "Element":
        if values:
            self.attrs.update(values)
        for key, value in kwargs.items():
            self.attrs[key.replace("_", "-")] = value
        return self

    def hover(self, on_enter: HoverCallback, on_leave: HoverCallback) -> "Element":
        self._hover = (on_enter, on_leave)
        return self

    @property
    def has_hover(self) -> bool:
        return self._hover is not None

    def fire(self, phase: HoverPhase) -> None:
        if self._hover is None:
            return
        on_enter, on_leave = self._hover
        if phase == "enter":
            on_enter(self)
        elif phase == "leave":
            on_leave(self)
        else:
            raise ValueError(f"unsupported hover phase: {phase!r}")

    def to_front(self) -> "Element":
        self.paper._move(self, front=True)
        return self

    def to_back(self) -> "Element":
        self.paper._move(self, front=False)
        return self

    def __repr__(self) -> str:
        return f"Element(kind={self.kind!r}, geometry={self.geometry!r})"


class Paper:
    """Vector drawing surface holding shapes in back-to-front order."""

    def __init__(self, container: str, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("paper width/height must be > 0")
        self.container = container
        self.width = width
        self.height = height
        self._elements: list[Element] = []

    @property
    def elements(self) -> tuple[Element, ...]:
        return tuple(self._elements)

    def circle(self, x: float, y: float, r: float) -> Element:
        return self._add("circle", {"cx": x, "cy": y, "r": r})

    def path(self, d: str) -> Element:
        return self._add("path", {"d": d})

    def text(self, x: float, y: float, text: str) -> Element:
        node = Node(tag="text")
        for index, line in enumerate(str(text).split("\n")):
            attributes: list[list[Any]] = [["dy", TEXT_BASELINE_SHIFT]] if index == 0 else [["dy", "1.2em"], ["x", x]]
            node.children.append(TextSpan(text=line, attributes=attributes))
        return self._add("text", {"x": x, "y": y, "text": str(text)}, node=node)

    def clear(self) -> None:
        self._elements.clear()

    def to_markup(self) -> str:
        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NAMESPACE,
                "id": str(self.container),
                "width": _fmt(self.width),
                "height": _fmt(self.height),
                "viewBox": f"0 0 {_fmt(self.width)} {_fmt(self.height)}",
            },
        )
        for element in self._elements:
            _append_svg(root, element)
        return ET.tostring(root, encoding="unicode")

    def save(self, path: str | Path) -> Path:
        out = Path(path)
        out.write_text(self.to_markup(), encoding="utf-8")
        return out

    def _add(self, kind: ElementKind, geometry: Mapping[str, Any], *, node: Node | None = None) -> Element:
        element = Element(self, kind, geometry, node or Node(tag=kind))
        self._elements.append(element)
        return element

    def _move(self, element: Element, *, front: bool) -> None:
        if element.paper is not self:
            raise ValueError("element belongs to a different paper")
        self._elements.remove(element)
        if front:
            self._elements.append(element)
        else:
            self._elements.insert(0, element)


def _append_svg(parent: ET.Element, element: Element) -> None:
    attrib: dict[str, str] = {}
    if element.kind == "text":
        attrib["x"] = _fmt(element.geometry["x"])
        attrib["y"] = _fmt(element.geometry["y"])
    else:
        for key, value in element.geometry.items():
            attrib[key] = value if isinstance(value, str) else _fmt(value)
    for key, value in element.attrs.items():
        attrib[key] = _fmt(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else str(value)
    for key, value in element.node.attributes.items():
        attrib[key] = _fmt(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else str(value)
    child = ET.SubElement(parent, element.kind, attrib)
    for span in element.node.children:
        tspan = ET.SubElement(child, "tspan", {str(name): _fmt(value) if isinstance(value, (int, float)) else str(value) for name, value in span.attributes})
        tspan.text = span.text


def _fmt(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    out = f"{value:.6f}".rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out
