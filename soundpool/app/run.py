"""
Command line entry point for SoundPool.

Builds a pool from items given on the command line, draws a number of
splashes and prints one line per splash. Pool defaults come from
PoolConfig.load_config(); flags override them.

Usage:
    python -m soundpool step1 step2=2 step3 --mode shuffle --count 6 --seed 7
"""

import argparse
import logging
import logging.handlers
import os
import sys
from typing import List, Optional, Tuple

from soundpool.config import PoolConfig
from soundpool.core.audio_pool import AudioPool
from soundpool.errors import EmptyCollectionError, SoundPoolError
from soundpool.selection.selection_policy import SelectionMode

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Set up console logging and, optionally, a rotation-tolerant log file.

    Args:
        level: Log level name
        log_file: Path for a WatchedFileHandler, or None for console only
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT
    )

    if not log_file:
        return

    log_path = os.path.abspath(log_file)
    root = logging.getLogger()
    if any(isinstance(h, logging.handlers.WatchedFileHandler)
           and getattr(h, 'baseFilename', None) == log_path
           for h in root.handlers):
        return

    try:
        # WatchedFileHandler reopens the file if it is rotated externally
        handler = logging.handlers.WatchedFileHandler(log_file, mode='a', delay=True)
    except OSError as e:
        logger.warning(f"[POOL] Cannot open log file {log_file}: {e}")
        return
    handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s'))

    # Write failures must not interrupt drawing
    original_emit = handler.emit

    def safe_emit(record):
        try:
            original_emit(record)
        except (IOError, OSError):
            pass

    handler.emit = safe_emit
    root.addHandler(handler)


def parse_item(text: str) -> Tuple[str, float]:
    """
    Parse an ITEM[=WEIGHT] argument.

    Raises:
        argparse.ArgumentTypeError: If the weight is not a number
    """
    name, sep, weight_str = text.partition("=")
    if not name:
        raise argparse.ArgumentTypeError(f"Missing item name in {text!r}")
    if not sep:
        return name, 1.0
    try:
        return name, float(weight_str)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid weight for {name}: {weight_str!r} (must be a number)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Draw randomized splashes from a sound pool")

    parser.add_argument(
        "items",
        nargs="*",
        type=parse_item,
        metavar="ITEM[=WEIGHT]",
        help="Pool items in order, with optional weight (default 1)"
    )
    parser.add_argument(
        "--mode",
        type=str,
        help=f"Selection mode (overrides env): {', '.join(m.value for m in SelectionMode)}"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed, 0 for non-deterministic (overrides env)"
    )
    parser.add_argument(
        "--count",
        type=int,
        default=1,
        help="Number of splashes to draw (default 1)"
    )
    parser.add_argument(
        "--volume",
        type=float,
        nargs=2,
        metavar=("MIN", "MAX"),
        help="Volume range (overrides env)"
    )
    parser.add_argument(
        "--pitch",
        type=float,
        nargs=2,
        metavar=("MIN", "MAX"),
        help="Pitch range (overrides env)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level (overrides env)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.count < 0:
        parser.error("--count must be non-negative")

    names = [name for name, _ in args.items]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        parser.error(f"Duplicate items: {', '.join(duplicates)}")

    try:
        config = PoolConfig.load_config()
    except ValueError as e:
        parser.error(str(e))

    if args.mode is not None:
        config.selection_mode = args.mode
    if args.seed is not None:
        config.random_seed = args.seed
    if args.volume is not None:
        config.volume_min, config.volume_max = args.volume
    if args.pitch is not None:
        config.pitch_min, config.pitch_max = args.pitch
    if args.log_level is not None:
        config.log_level = args.log_level.upper()

    try:
        config.validate()
    except ValueError as e:
        parser.error(str(e))

    configure_logging(config.log_level, config.log_file)

    try:
        pool = AudioPool.from_config(config, args.items, name="cli")
    except SoundPoolError as e:
        parser.error(str(e))

    for index in range(args.count):
        try:
            splash = pool.draw_splash()
        except EmptyCollectionError:
            logger.error("[POOL] No items given, nothing to draw")
            return 1
        print(f"{index + 1:>4}  {splash.item}  volume={splash.volume:.3f}  pitch={splash.pitch:.3f}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
