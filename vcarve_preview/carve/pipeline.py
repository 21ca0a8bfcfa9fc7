"""G-code → SVG carve preview pipeline.

Stages (strictly sequential, whole input in memory):
    1. tokenizer.tokenize: text → blocks
    2. MotionTraceBuilder: blocks → waypoints
    3. compute_canvas_bounds: first pass over waypoints for the header size
    4. StrokeSegmenter + StrokeRenderer: second pass, strokes → primitives
    5. SvgDocument: header, primitives, footer

Public API:
    summary = gcode_to_svg(text, out, cfg)
    summary = convert_file("job.nc", "job.svg", cfg)

Summary keys: blocks, waypoints, strokes, primitives, canvas_px.
"""

import io
import logging
import math
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence, TextIO, Tuple, Union

from ..utils import fs, validators
from . import motion, tokenizer
from .renderer import make_renderer
from .segmenter import StrokeSegmenter
from .svg import SvgDocument

logger = logging.getLogger(__name__)


def compute_canvas_bounds(waypoints: Iterable[motion.Waypoint], ppi: float) -> Tuple[int, int]:
    """Canvas size in pixels from the extent of the engaged waypoints.

    Parameters
    ----------
    waypoints : Iterable[motion.Waypoint]
        Full trace
    ppi : float
        Pixels per inch

    Returns
    -------
    Tuple[int, int]
        (width, height): max engaged x and max engaged |y|, scaled and
        rounded up. (0, 0) when the tool never enters the stock.
    """
    max_x = 0.0
    max_y = 0.0
    for wp in waypoints:
        if wp.z < 0:
            max_x = max(max_x, wp.x)
            max_y = max(max_y, abs(wp.y))
    # Round before ceil so 1.0 in * 100 ppi does not become 101 px from float noise
    return math.ceil(round(max_x * ppi, 6)), math.ceil(round(max_y * ppi, 6))


def render_waypoints(
    waypoints: Sequence[motion.Waypoint],
    out: TextIO,
    cfg: validators.PreviewV1
) -> Dict[str, Any]:
    """Render a waypoint trace as a complete SVG document.

    Parameters
    ----------
    waypoints : Sequence[motion.Waypoint]
        Trace from MotionTraceBuilder (iterated twice)
    out : TextIO
        Destination stream
    cfg : validators.PreviewV1
        Validated preview configuration

    Returns
    -------
    Dict[str, Any]
        waypoints, strokes, primitives, canvas_px
    """
    width, height = compute_canvas_bounds(waypoints, cfg.ppi)

    doc = SvgDocument(out, pretty=cfg.pretty, decimals=cfg.decimals)
    renderer = make_renderer(cfg.render_mode)
    segmenter = StrokeSegmenter(cfg.ppi, cfg.tool_angle_deg)

    doc.header(width, height)
    stroke_count = 0
    for stroke in segmenter.segment(waypoints):
        renderer.render(stroke, doc)
        stroke_count += 1
        logger.debug(f"Stroke {stroke_count}: {len(stroke)} points")
    doc.footer()

    return {
        'waypoints': len(waypoints),
        'strokes': stroke_count,
        'primitives': doc.primitive_count,
        'canvas_px': (width, height),
    }


def gcode_to_svg(
    gcode: Union[str, bytes],
    out: TextIO,
    cfg: Optional[validators.PreviewV1] = None
) -> Dict[str, Any]:
    """Convert G-code text (or raw bytes) to an SVG preview.

    Parameters
    ----------
    gcode : Union[str, bytes]
        Complete program; bytes are decoded as UTF-8 with replacement
    out : TextIO
        Destination stream
    cfg : Optional[validators.PreviewV1]
        Configuration, defaults to PreviewV1()

    Returns
    -------
    Dict[str, Any]
        Run summary (blocks, waypoints, strokes, primitives, canvas_px)

    Raises
    ------
    tokenizer.GCodeSyntaxError
        If the program cannot be tokenized; nothing is written in that case
    """
    cfg = cfg if cfg is not None else validators.PreviewV1()
    if isinstance(gcode, bytes):
        gcode = gcode.decode("utf-8", errors="replace")

    blocks = tokenizer.tokenize(gcode)
    waypoints = motion.build_trace(blocks)

    summary = {'blocks': len(blocks)}
    summary.update(render_waypoints(waypoints, out, cfg))

    logger.info(
        f"Rendered {summary['strokes']} strokes ({summary['primitives']} primitives) "
        f"from {summary['waypoints']} moves, canvas {summary['canvas_px'][0]}x{summary['canvas_px'][1]} px"
    )
    return summary


def convert_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    cfg: Optional[validators.PreviewV1] = None
) -> Dict[str, Any]:
    """Convert a G-code file to an SVG file (written atomically).

    Raises
    ------
    FileNotFoundError
        If the input file doesn't exist
    """
    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(f"G-code file not found: {input_path}")

    buf = io.StringIO()
    summary = gcode_to_svg(input_path.read_bytes(), buf, cfg)
    fs.atomic_write_text(buf.getvalue(), output_path)

    logger.info(f"Wrote {output_path}")
    return summary
