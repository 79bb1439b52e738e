"""
GridGen CLI: reduce an image to a labelled grid.

Usage:
  gridgen map.jpg                                 # 50x50 grid, road-map palette, prints summary
  gridgen map.jpg -W 80 -H 60 --ascii             # prints the text grid
  gridgen map.jpg --palette palette.json          # [{"color": [r, g, b], "label": "water"}, ...]
  gridgen map.jpg --render grid.png --json grid.json
  gridgen map.jpg --debug                         # also writes the reduced image to temp.png
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from gridgen.config import settings
from gridgen.engine.config import GeneratorConfig
from gridgen.engine.containers import DictHashMap
from gridgen.engine.errors import ConfigurationError, ImageLoadError
from gridgen.engine.generator import BackgroundGenerator
from gridgen.engine.palettes import ROAD_MAP_COLORS, ROAD_MAP_LABELS
from gridgen.models.grid import Location, MapObject
from gridgen.utils.rasterizer import collect_rows, grid_to_text, label_counts, render_grid

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    """argparse type: an integer greater than zero."""
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return n


def load_palette(path: str | Path) -> tuple[list[list[int]], list[str]]:
    """Read ``[{"color": [r, g, b], "label": "..."}, ...]`` into parallel lists."""
    try:
        entries = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"could not read palette {path}: {e}") from e
    if not isinstance(entries, list):
        raise ConfigurationError(f"palette {path} must be a JSON list")
    colors: list[list[int]] = []
    labels: list[str] = []
    for entry in entries:
        try:
            colors.append(entry["color"])
            labels.append(str(entry["label"]))
        except (KeyError, TypeError) as e:
            raise ConfigurationError(f"bad palette entry {entry!r}") from e
    return colors, labels


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridgen", description="Image to labelled grid by nearest palette colour"
    )
    parser.add_argument("image", help="Source image path")
    parser.add_argument("-W", "--width", type=positive_int, default=settings.default_width, help="Grid width in cells")
    parser.add_argument("-H", "--height", type=positive_int, default=settings.default_height, help="Grid height in cells")
    parser.add_argument("-p", "--palette", help="Palette JSON file (default: road-map palette)")
    parser.add_argument("--debug", action="store_true", default=settings.gridgen_debug,
                        help="Exit on load failure and write the reduced image")
    parser.add_argument("--render", metavar="PNG", help="Write the grid as coloured cells")
    parser.add_argument("--cell-size", type=positive_int, default=settings.cell_size, help="Cell size in pixels for --render")
    parser.add_argument("--json", metavar="PATH", help="Write row-major labels as JSON")
    parser.add_argument("--ascii", action="store_true", help="Print the text grid")
    return parser


def run(args: argparse.Namespace) -> int:
    if args.palette:
        colors, labels = load_palette(args.palette)
    else:
        colors, labels = ROAD_MAP_COLORS, ROAD_MAP_LABELS

    config = GeneratorConfig(debug_artifact_path=settings.debug_artifact_path)
    gen: BackgroundGenerator[Location, MapObject] = BackgroundGenerator(
        args.image, args.width, args.height, debug=args.debug, config=config
    )
    gen.bind_color_table(DictHashMap, colors, labels)

    grid: dict[Location, MapObject] = {}
    gen.generate(grid.__setitem__, Location.factory(gen.height), MapObject)
    rows = collect_rows(grid, gen.width, gen.height)

    if args.ascii:
        print(grid_to_text(rows))

    if args.json:
        Path(args.json).write_text(json.dumps(rows, indent=2), encoding="utf-8")
        logger.info("Wrote %s", args.json)

    if args.render:
        render_grid(grid, gen.width, gen.height, args.cell_size, args.cell_size).save(args.render)
        logger.info("Rendered %s", args.render)

    counts = ", ".join(f"{k}={v}" for k, v in sorted(label_counts(rows).items()))
    print(f"{gen.width}x{gen.height} grid: {counts}")
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=getattr(logging, settings.gridgen_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except (ConfigurationError, ImageLoadError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
