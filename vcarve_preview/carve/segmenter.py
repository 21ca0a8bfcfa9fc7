"""Stroke segmenter: waypoints → engaged strokes in pixel space.

The stock surface is Z=0. A waypoint with Z < 0 has the bit engaged; a run
of consecutive engaged waypoints forms one stroke. Each stroke point carries
the pixel position (y inverted for top-down image coordinates) and the
groove half-width at that depth.

Groove geometry for a V-bit of included angle θ:
    width  = depth · 2·tan(θ/2)        (depth2width)
    radius = depth · ppi · depth2width / 2

A stroke closes when Z returns to ≥ 0, and at end of input if still open.
Consecutive identical points (position and radius) are coalesced.

Usage:
    seg = StrokeSegmenter(ppi=100, tool_angle_deg=30)
    for stroke in seg.segment(waypoints):
        renderer.render(stroke, doc)
"""

import logging
import math
from typing import Iterable, Iterator, List, NamedTuple, Optional

from .motion import Waypoint

logger = logging.getLogger(__name__)


class StrokePoint(NamedTuple):
    """Stroke sample in pixels: position and groove half-width."""
    x: float
    y: float
    r: float


Stroke = List[StrokePoint]


def depth_to_width(tool_angle_deg: float) -> float:
    """Groove width per unit depth for a V-bit of the given included angle."""
    return 2.0 * math.tan(math.radians(tool_angle_deg / 2.0))


class StrokeSegmenter:
    """Groups engaged waypoints into strokes.

    Parameters
    ----------
    ppi : float
        Pixels per inch
    tool_angle_deg : float
        V-bit included angle in degrees, caller-validated to (0, 180)

    Attributes
    ----------
    depth2width : float
        Groove width per unit depth
    stroke : Stroke
        Stroke in progress (empty when the bit is out of the stock)
    """

    def __init__(self, ppi: float, tool_angle_deg: float):
        self.ppi = ppi
        self.tool_angle_deg = tool_angle_deg
        self.depth2width = depth_to_width(tool_angle_deg)
        self.stroke: Stroke = []
        self.engaged = False

    def reset(self) -> None:
        self.stroke = []
        self.engaged = False

    def to_point(self, waypoint: Waypoint) -> StrokePoint:
        """Project an engaged waypoint to a stroke point."""
        return StrokePoint(
            waypoint.x * self.ppi,
            -waypoint.y * self.ppi,
            -waypoint.z * self.ppi * self.depth2width / 2.0,
        )

    def feed(self, waypoint: Waypoint) -> Optional[Stroke]:
        """Consume one waypoint.

        Returns
        -------
        Optional[Stroke]
            The stroke that this waypoint closed, if any
        """
        if waypoint.z < 0:
            point = self.to_point(waypoint)
            if not self.stroke or self.stroke[-1] != point:
                self.stroke.append(point)
            self.engaged = True
            return None

        if self.engaged:
            self.engaged = False
            return self._flush()
        return None

    def finish(self) -> Optional[Stroke]:
        """Close the stroke left open at end of input."""
        self.engaged = False
        if self.stroke:
            logger.debug("Input ended with the tool engaged, flushing open stroke")
            return self._flush()
        return None

    def segment(self, waypoints: Iterable[Waypoint]) -> Iterator[Stroke]:
        """Yield every stroke of a waypoint sequence, in order."""
        for waypoint in waypoints:
            stroke = self.feed(waypoint)
            if stroke is not None:
                yield stroke
        stroke = self.finish()
        if stroke is not None:
            yield stroke

    def _flush(self) -> Stroke:
        stroke, self.stroke = self.stroke, []
        return stroke
