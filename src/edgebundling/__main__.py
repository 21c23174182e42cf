"""Command-line interface."""
import argparse
import logging
import sys
from typing import Optional, Sequence

from edgebundling.config import ChartConfig, SAMPLE_CSV_PATH, load_config
from edgebundling.logging_config import setup_logging
from edgebundling.model.io import DatasetLoader, DatasetError
from edgebundling.model.layout import Viewport
from edgebundling.model.state import DiagramState, build_geometry

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edgebundling",
        description="Draw a hierarchical edge bundling diagram from a CSV or name/imports JSON dataset.",
    )
    parser.add_argument("data", nargs="?", default=SAMPLE_CSV_PATH,
                        help="Dataset file (.csv or .json). Defaults to the bundled sample.")
    parser.add_argument("-o", "--output", help="Render into this image file instead of opening a window.")
    parser.add_argument("--json", dest="json_output", help="Export the diagram geometry as JSON.")
    parser.add_argument("--tension", type=float, help="Bundling tension in [0, 1].")
    parser.add_argument("--size", nargs=2, type=float, metavar=("WIDTH", "HEIGHT"), default=(960.0, 960.0),
                        help="Drawing surface size.")
    parser.add_argument("--focus", help="Identifier of the leaf to highlight.")
    parser.add_argument("--config", help="JSON file with chart settings.")
    parser.add_argument("--log-level", default="info", help="Logging level (debug, info, warning, ...).")
    parser.add_argument("--log-file", help="Also write the log into this file.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        setup_logging(level=args.log_level, log_file=args.log_file)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        config = load_config(args.config) if args.config else ChartConfig()
    except (OSError, ValueError) as e:
        logger.error(f"Could not load chart config: {e}")
        return 1
    tension = config.tension if args.tension is None else args.tension

    if not args.output and not args.json_output:
        from edgebundling.main import main as run_interactive
        config.tension = tension
        run_interactive(args.data, config=config, focus=args.focus)
        return 0

    try:
        records = DatasetLoader.load(args.data, config=config)
    except (OSError, DatasetError) as e:
        logger.error(f"Could not load dataset: {e}")
        return 1

    state = DiagramState(
        records=records,
        viewport=Viewport(width=args.size[0], height=args.size[1]),
        tension=tension,
        config=config,
        focused_leaf=args.focus,
    )
    geometry = build_geometry(state)

    if args.output:
        from edgebundling.view.diagram import render_to_file
        render_to_file(geometry, args.output)
    if args.json_output:
        DatasetLoader.export_geometry(geometry, args.json_output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
