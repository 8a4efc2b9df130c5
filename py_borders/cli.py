"""Command line entry point: generate a scenario, draw its borders, save a PNG."""

import argparse
import sys
from typing import List, Optional, Tuple

import structlog

from .config import Settings, settings
from .core.border_field import BorderFieldResult
from .core.exceptions import BorderFieldError
from .core.scenario import generate_scenario
from .core.vertices import ExtractionResult
from .engine import BorderEngine, Command
from .utils.logging import configure_logging

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-borders",
        description="Render group borders and boundary vertices for a random seed scenario",
    )
    parser.add_argument("--output", default="borders.png", help="PNG file to write")
    parser.add_argument("--seeds", type=int, help="Number of seeds to scatter")
    parser.add_argument("--random-seed", type=int, help="Seed for the scenario generator")
    parser.add_argument("--width", type=int, help="Raster columns")
    parser.add_argument("--height", type=int, help="Raster rows")
    parser.add_argument("--smoothing-radius", type=float, help="Contending distance band")
    parser.add_argument("--workers", type=int, help="Row worker threads")
    parser.add_argument("--kernel", choices=["vectorized", "reference"], help="Row kernel")
    parser.add_argument("--no-vertices", action="store_true",
                        help="Skip boundary vertex extraction")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Environment settings with command line overrides applied."""
    overrides = {
        "seed_count": args.seeds,
        "width": args.width,
        "height": args.height,
        "smoothing_radius": args.smoothing_radius,
        "workers": args.workers,
        "kernel": args.kernel,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return Settings(**overrides) if overrides else settings


def run(args: argparse.Namespace, run_settings: Settings
        ) -> Tuple[BorderEngine, BorderFieldResult, Optional[ExtractionResult]]:
    """Generate the scenario and run the border pass, then the vertex pass unless skipped."""
    seeds = generate_scenario(
        count=run_settings.seed_count,
        width=run_settings.width,
        height=run_settings.height,
        seed=args.random_seed,
    )
    engine = BorderEngine.from_settings(seeds, run_settings)

    borders = engine.handle(Command.COMPUTE_BORDERS)
    vertices = None
    if not args.no_vertices:
        vertices = engine.handle(Command.EXTRACT_VERTICES)
    return engine, borders, vertices


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    run_settings = settings_from_args(args)
    configure_logging(run_settings.log_level, run_settings.log_format)

    try:
        engine, borders, vertices = run(args, run_settings)
    except BorderFieldError as e:
        logger.error("Pass failed", error=str(e))
        return 1

    engine.canvas.save_png(args.output)
    logger.info(
        "Done",
        border_cells=borders.border_cells,
        vertices=len(vertices.vertices) if vertices else 0,
        output=args.output,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
