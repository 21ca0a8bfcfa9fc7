"""Stroke renderers: one strategy per render mode, chosen once per run.

Modes:
    - dots: one circle per stroke point
    - trapezoids: closed ribbon outline with rounded end caps
    - full: reserved, renders nothing

A stroke with a single point is always drawn as a circle, whatever the mode
(the ``full`` placeholder excepted). So is a stroke whose points all share
one position, since it has no direction to offset along.

Usage:
    renderer = make_renderer("trapezoids")
    renderer.render(stroke, doc)
"""

import logging
from typing import Dict, List, Type

import numpy as np

from ..utils import geometry
from .segmenter import Stroke
from .svg import PathCommand, SvgDocument

logger = logging.getLogger(__name__)


class StrokeRenderer:
    """Base strategy: draws degenerate strokes as dots, delegates the rest."""

    mode = ""

    def render(self, stroke: Stroke, doc: SvgDocument) -> None:
        if not stroke:
            return
        if len(stroke) == 1 or not self._has_extent(stroke):
            draw_dots(stroke, doc)
        else:
            self.render_polyline(stroke, doc)

    def render_polyline(self, stroke: Stroke, doc: SvgDocument) -> None:
        raise NotImplementedError

    @staticmethod
    def _has_extent(stroke: Stroke) -> bool:
        points = np.array([(p.x, p.y) for p in stroke], dtype=np.float64)
        return bool((geometry.segment_lengths(points) > geometry.MIN_SEGMENT_PX).any())


def draw_dots(stroke: Stroke, doc: SvgDocument) -> None:
    for point in stroke:
        doc.circle(point.x, point.y, point.r)


class DotRenderer(StrokeRenderer):
    mode = "dots"

    def render_polyline(self, stroke: Stroke, doc: SvgDocument) -> None:
        draw_dots(stroke, doc)


class TrapezoidRenderer(StrokeRenderer):
    """Ribbon outline: offset sides joined by semicircular caps.

    Each vertex is offset along the normal of its incoming segment. The
    outline walks the positive side forward, arcs across the far end,
    walks the negative side back and arcs across the near end.
    """

    mode = "trapezoids"

    def render_polyline(self, stroke: Stroke, doc: SvgDocument) -> None:
        doc.path(self.outline(stroke))

    @staticmethod
    def outline(stroke: Stroke) -> List[PathCommand]:
        """Path commands for the closed outline of a stroke with ≥ 2 points."""
        points = np.array([(p.x, p.y) for p in stroke], dtype=np.float64)
        radii = np.array([p.r for p in stroke], dtype=np.float64)
        pos, neg = geometry.offset_sides(points, radii)

        commands: List[PathCommand] = [("M", *pos[0])]
        commands.extend(("L", *p) for p in pos[1:])
        commands.append(_cap(pos[-1], neg[-1]))
        commands.extend(("L", *p) for p in neg[-2::-1])
        commands.append(_cap(neg[0], pos[0]))
        commands.append(("Z",))
        return commands


def _cap(start: np.ndarray, end: np.ndarray) -> PathCommand:
    """Half-circle arc from start to end (sweep 0 bulges outward)."""
    r = float(np.linalg.norm(end - start)) / 2.0
    return ("A", r, r, 0, 0, 0, *end)


class FullRenderer(StrokeRenderer):
    """Reserved mode with no outline algorithm; renders nothing."""

    mode = "full"

    def __init__(self):
        self._warned = False

    def render(self, stroke: Stroke, doc: SvgDocument) -> None:
        if not self._warned:
            logger.warning("Render mode 'full' is not implemented, strokes are skipped")
            self._warned = True


RENDERERS: Dict[str, Type[StrokeRenderer]] = {
    cls.mode: cls for cls in (DotRenderer, TrapezoidRenderer, FullRenderer)
}


def make_renderer(mode: str) -> StrokeRenderer:
    """Instantiate the renderer for a render mode name.

    Raises
    ------
    ValueError
        If the mode is unknown
    """
    try:
        return RENDERERS[mode.lower()]()
    except KeyError:
        raise ValueError(f"Unknown render mode: {mode}. Use one of {sorted(RENDERERS)}.") from None
