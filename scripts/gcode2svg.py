#!/usr/bin/env python3
"""Render an SVG preview of a V-carve G-code program.

Reads G-code (inches) and writes an SVG showing the groove a V-bit of the
given included angle cuts into stock whose top is at Z=0.

Usage:
    # stdin → stdout, 30° bit
    python scripts/gcode2svg.py < job.nc > job.svg

    # 60° bit, files, dots instead of outlines
    python scripts/gcode2svg.py 60 -i job.nc -o outputs/job.svg --mode dots

    # Settings from YAML, angle overridden on the command line
    python scripts/gcode2svg.py 90 --config configs/preview.v1.yaml

Exit status:
    0 on success, 1 on a bad tool angle, config or G-code error.
"""

import argparse
import io
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from vcarve_preview.carve import pipeline, tokenizer
from vcarve_preview.utils import fs, logging_config, validators

USAGE = "Usage: gcode2svg [TOOL_ANGLE]"

logger = logging.getLogger("gcode2svg")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Preview V-carve G-code as SVG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        'tool_angle',
        nargs='?',
        default=None,
        help='V-bit included angle in degrees, strictly between 0 and 180 (default: 30)'
    )
    parser.add_argument('-i', '--input', type=str, default=None, help='G-code file (default: stdin)')
    parser.add_argument('-o', '--output', type=str, default=None, help='SVG file (default: stdout)')
    parser.add_argument('--config', type=str, default=None, help='preview.v1 YAML config')
    parser.add_argument('--mode', choices=validators.RENDER_MODES, default=None, help='Render mode')
    parser.add_argument('--ppi', type=float, default=None, help='Pixels per inch')
    parser.add_argument('--compact', action='store_true', help='Write the SVG without line breaks')
    parser.add_argument('--verbose', action='store_true', help='Debug logging')
    parser.add_argument('--log-file', type=str, default=None, help='Also write logs to this file')
    parser.add_argument('--log-json', action='store_true', help='Write the log file as JSON lines')
    return parser.parse_args(argv)


def parse_tool_angle(text: str) -> Optional[float]:
    """Angle in degrees, or None if it is not a number inside (0, 180)."""
    try:
        angle = float(text)
    except ValueError:
        return None
    if not 0.0 < angle < 180.0:
        return None
    return angle


def read_input(path: Optional[str]) -> bytes:
    """Whole G-code program from a file, or from stdin when path is None."""
    if path is None:
        return sys.stdin.buffer.read()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"G-code file not found: {path}")
    return path.read_bytes()


def build_config(args: argparse.Namespace) -> validators.PreviewV1:
    """Merge the YAML config (if any) with command-line overrides."""
    cfg = validators.load_preview_config(args.config) if args.config else validators.PreviewV1()

    overrides = {}
    if args.tool_angle is not None:
        overrides['tool_angle_deg'] = parse_tool_angle(args.tool_angle)
    if args.mode is not None:
        overrides['render_mode'] = args.mode
    if args.ppi is not None:
        overrides['ppi'] = args.ppi
    if args.compact:
        overrides['pretty'] = False

    if not overrides:
        return cfg
    return validators.PreviewV1(**{**cfg.model_dump(), **overrides})


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging_config.setup_logging(
        log_level="DEBUG" if args.verbose else "WARNING",
        log_file=args.log_file,
        json=args.log_json,
        context={"app": "gcode2svg"}
    )
    logging_config.install_excepthook()

    try:
        return run(args)
    finally:
        logging_config.shutdown()


def run(args: argparse.Namespace) -> int:
    """Convert one program; returns the exit status."""
    if args.tool_angle is not None and parse_tool_angle(args.tool_angle) is None:
        print(USAGE, file=sys.stderr)
        return 1

    try:
        cfg = build_config(args)
    except (ValueError, yaml.YAMLError, FileNotFoundError) as e:
        # pydantic's ValidationError is a ValueError
        logger.error(f"Invalid configuration: {e}")
        return 1

    logger.debug(
        f"Tool angle {cfg.tool_angle_deg}°, {cfg.ppi} ppi, mode={cfg.render_mode}, pretty={cfg.pretty}"
    )

    try:
        if args.input and args.output:
            pipeline.convert_file(args.input, args.output, cfg)
        else:
            gcode = read_input(args.input)
            if args.output:
                buf = io.StringIO()
                pipeline.gcode_to_svg(gcode, buf, cfg)
                fs.atomic_write_text(buf.getvalue(), args.output)
            else:
                pipeline.gcode_to_svg(gcode, sys.stdout, cfg)
                sys.stdout.flush()
    except (tokenizer.GCodeSyntaxError, FileNotFoundError, RuntimeError) as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
