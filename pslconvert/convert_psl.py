#!/usr/bin/env python3
"""
Convert PSL

Reads a PlayStation level and reports what was recovered.

Pipeline:
1. Load reader configuration (optional INI)
2. Read and link the level
3. Print a summary, optionally write it as JSON

Usage:
    python -m pslconvert level01.psl
    python -m pslconvert level01.psl --json level01.json --log convert.log
"""

import sys
import argparse
import json
from pathlib import Path
from typing import List, Optional

from .config import ReaderConfig
from .errors import PSLReadError
from .level import Level
from .parsers import read_psl_level
from .utils import log, logError, init_logging, close_logging, print_summary, get_counts


def print_level_summary(level: Level):
    """Log the counts and extents of a level."""
    summary = level.summary()
    log(f"Level: {summary['name'] or '(unnamed)'}")
    log(f"  Vertices:                {summary['vertices']}")
    log(f"  Segments:                {summary['segments']}")
    log(f"  Objects:                 {summary['objects']}")
    log(f"  Walls:                   {summary['walls']} ({summary['linked_walls']} linked)")
    log(f"  Triggers:                {summary['triggers']}")
    log(f"  Matcens:                 {summary['matcens']}")
    log(f"  Reactor trigger targets: {summary['reactor_trigger_targets']}")
    log(f"  Exit sides:              {summary['exits']}")
    bbox = summary['bounding_box']
    if bbox:
        lo = ", ".join(f"{c:.2f}" for c in bbox['min'])
        hi = ", ".join(f"{c:.2f}" for c in bbox['max'])
        log(f"  Bounds:                  ({lo}) - ({hi})")


def convert(input_path: Path, json_path: Optional[Path] = None,
            config: Optional[ReaderConfig] = None) -> Level:
    """
    Read a level and report it.

    Args:
        input_path: PlayStation level file
        json_path: Optional destination for the JSON summary
        config: Reader constants

    Returns:
        The linked level
    """
    log(f"Reading {input_path}")
    level = read_psl_level(input_path, config)
    print_level_summary(level)

    if json_path:
        json_path.parent.mkdir(parents=True, exist_ok=True)
        with open(json_path, 'w', encoding='utf-8') as f:
            json.dump(level.summary(), f, indent=2)
        log(f"Wrote {json_path}")

    return level


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Read a PlayStation level and report the recovered level graph',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
    python -m pslconvert level01.psl

    # Keep a JSON summary and a log file:
    python -m pslconvert level01.psl --json out/level01.json --log convert.log

    # Override format constants:
    python -m pslconvert level01.psl --config reader.ini
        """
    )

    parser.add_argument('input', help='PlayStation level file (.psl)')
    parser.add_argument('--json', default=None,
                        help='Write the level summary as JSON to this path')
    parser.add_argument('--config', default=None,
                        help='INI file with a [format] section overriding reader constants')
    parser.add_argument('--log', default=None,
                        help='Also write the log to this file')
    args = parser.parse_args(argv)

    init_logging(Path(args.log) if args.log else None)

    try:
        input_path = Path(args.input)
        if not input_path.exists():
            logError(f"Input file not found: {input_path}")
            return 1

        config = ReaderConfig.from_ini(args.config) if args.config else ReaderConfig()
        convert(input_path, Path(args.json) if args.json else None, config)

    except (PSLReadError, OSError, ValueError) as e:
        logError(f"{input_path}: {e}")
    finally:
        print_summary()
        close_logging()

    errors, _ = get_counts()
    return 1 if errors else 0


if __name__ == '__main__':
    sys.exit(main())
