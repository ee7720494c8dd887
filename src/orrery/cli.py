"""
Command-line interface for batch sprite generation.

Usage:
    orrery [--stars [G,K,...]] [--planets [terran,...]] [--moons N] [options]
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from orrery.bodies.base import BodyKind
from orrery.errors import ConfigurationError
from orrery.io.cache import SpriteCache
from orrery.io.exporter import count_sprites
from orrery.logging_config import setup_logging
from orrery.pipeline import DEFAULT_COUNTS, PROFILES, PipelineConfig, SpritePipeline

# CLI flag -> kind, for kinds selected by type name
TYPED_FLAGS = {
    "stars": BodyKind.STAR,
    "planets": BodyKind.PLANET,
    "gas_giants": BodyKind.GAS_GIANT,
    "black_holes": BodyKind.BLACK_HOLE,
}
# CLI flag -> kind, for kinds selected by count
COUNTED_FLAGS = {
    "moons": BodyKind.MOON,
    "asteroids": BodyKind.ASTEROID,
    "comets": BodyKind.COMET,
}


def _progress_bar(current: int, total: int, width: int = 35):
    """Print a progress bar to stdout."""
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    if sys.stdout.isatty():
        sys.stdout.write(f"\r[{bar}] {pct:5.1f}%  sprite {current}/{total}")
        sys.stdout.flush()
        if current >= total:
            sys.stdout.write("\n")
    else:
        if current % max(1, total // 20) == 0 or current >= total:
            print(f"{pct:5.1f}%  sprite {current}/{total}", flush=True)


def _split_types(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def build_selection(args: argparse.Namespace) -> Dict[BodyKind, Union[List[str], int]]:
    """
    Translate selection flags into a pipeline selection.

    A bare typed flag (``--stars``) selects every type of that kind; no
    selection flag at all selects everything.
    """
    selection: Dict[BodyKind, Union[List[str], int]] = {}
    for flag, kind in TYPED_FLAGS.items():
        value = getattr(args, flag)
        if value is not None:
            selection[kind] = _split_types(value)
    for flag, kind in COUNTED_FLAGS.items():
        value = getattr(args, flag)
        if value is not None:
            selection[kind] = value

    if not selection:
        selection = {kind: [] for kind in TYPED_FLAGS.values()}
        selection.update(DEFAULT_COUNTS)
    return selection


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orrery",
        description="Procedurally generate celestial sprite sheets",
    )

    # Selection
    parser.add_argument(
        "--stars", nargs="?", const="", default=None, metavar="CLASSES",
        help="Stellar classes, comma separated (bare flag: all)",
    )
    parser.add_argument(
        "--planets", nargs="?", const="", default=None, metavar="TYPES",
        help="Planet types, comma separated (bare flag: all)",
    )
    parser.add_argument(
        "--gas-giants", dest="gas_giants", nargs="?", const="", default=None, metavar="TYPES",
        help="Gas giant types, comma separated (bare flag: all)",
    )
    parser.add_argument(
        "--black-holes", dest="black_holes", nargs="?", const="", default=None, metavar="TYPES",
        help="Black hole types, comma separated (bare flag: all)",
    )
    parser.add_argument("--moons", type=int, default=None, metavar="N", help="Number of moons")
    parser.add_argument("--asteroids", type=int, default=None, metavar="N", help="Number of asteroids")
    parser.add_argument("--comets", type=int, default=None, metavar="N", help="Number of comets")

    # Output
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=Path("sprites"),
        help="Output directory (default: sprites)",
    )
    parser.add_argument(
        "-p", "--profile",
        choices=list(PROFILES),
        default="full",
        help="Frame size preset (default: full)",
    )
    parser.add_argument("--frames", type=int, default=None, help="Frames per sheet (default: per body type)")
    parser.add_argument("--pixel-size", type=int, default=None, help="Pixel block size (default: per body type)")
    parser.add_argument("--variants", type=int, default=1, help="Sheets per type (default: 1)")
    parser.add_argument("--seed", type=int, default=0, help="Base seed (default: 0)")

    # Execution
    parser.add_argument("-j", "--workers", type=int, default=1, help="Worker processes (default: 1)")
    parser.add_argument("--no-cache", action="store_true", help="Do not read or write the sprite cache")
    parser.add_argument("--clear-cache", action="store_true", help="Empty the sprite cache first")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for progress messages, -vv for debug")
    parser.add_argument("--log-file", type=str, default=None, help="Append a full debug log to this file")
    return parser


def main(argv: Optional[Sequence[str]] = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logger = setup_logging(level, args.log_file)

    try:
        config = PipelineConfig(
            output_dir=args.output,
            profile=args.profile,
            frame_count=args.frames,
            pixel_size=args.pixel_size,
            variants=args.variants,
            seed=args.seed,
            workers=args.workers,
            use_cache=not args.no_cache,
        )
        cache = SpriteCache()
        if args.clear_cache:
            cache.clear()
            logger.info("Cleared sprite cache")
        pipeline = SpritePipeline(config, cache)
        jobs = pipeline.plan(build_selection(args))
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not jobs:
        print("Nothing to generate.")
        return

    print(f"Generating {len(jobs)} sprite sheets into {config.output_dir} ({config.profile} profile)")
    t0 = time.time()
    result = pipeline.run(jobs, progress_callback=_progress_bar)

    print(f"\nDone in {time.time() - t0:.1f}s")
    print(f"  Written: {len(result.written)} ({result.cached} from cache)")
    if result.failed:
        print(f"  Failed: {len(result.failed)}")
        for file, error in result.failed:
            print(f"    {file}: {error}")
    if result.manifest_path is not None:
        print(f"  Manifest: {result.manifest_path} ({count_sprites(result.manifest)} sprites)")


if __name__ == "__main__":
    main()
