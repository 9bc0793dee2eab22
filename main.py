from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Any

from crumble_core.render.raster import save_png
from crumble_plot import ChartOptionsError, create, load_chart_options, validate_chart_style


LOGGER = logging.getLogger("crumble")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="crumble")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a line chart from a TOML options file")
    render.add_argument("options", type=Path)
    render.add_argument("--out", type=Path, required=True, help="SVG output path")
    render.add_argument("--png", type=Path, default=None, help="Optional PNG preview path")
    render.add_argument("--png-scale", type=float, default=1.0)
    render.add_argument(
        "--style",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a chart style value (repeatable)",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render":
        try:
            style = validate_chart_style(_parse_style_overrides(args.style))
            options = load_chart_options(args.options)
            paper = create(options, style=style)
        except (ChartOptionsError, ValueError, FileNotFoundError) as exc:
            print(f"crumble: {exc}", file=sys.stderr)
            return 2
        out = paper.save(args.out)
        LOGGER.info("wrote %s", out)
        if args.png is not None:
            png = save_png(paper, args.png, scale=args.png_scale)
            LOGGER.info("wrote %s", png)
        return 0
    return 1


def _parse_style_overrides(pairs: list[str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"style override must use KEY=VALUE: {pair!r}")
        overrides[key.strip()] = _coerce_scalar(raw.strip())
    return overrides


def _coerce_scalar(raw: str) -> Any:
    try:
        return float(raw)
    except ValueError:
        return raw


if __name__ == "__main__":
    raise SystemExit(main())
