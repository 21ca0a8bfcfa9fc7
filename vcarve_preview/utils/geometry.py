"""Polyline geometry for groove outlines.

Provides:
    - Segment lengths of a polyline
    - Per-vertex unit normals taken from the incoming segment
    - Offset side lists (positive / negative) for a width-varying ribbon

Used by:
    - Trapezoid renderer: stroke points → closed ribbon outline

All coordinates are pixels (already scaled and y-inverted by the segmenter).
The offsets are local: each vertex is pushed along the normal of the segment
that arrives at it, with no mitering at corners. Sharp turns therefore pinch
or overlap; that matches how the outline is meant to approximate the groove.
"""

from typing import Tuple

import numpy as np

# Segments shorter than this (px) have no usable direction.
MIN_SEGMENT_PX = 1e-9


def segment_lengths(points: np.ndarray) -> np.ndarray:
    """Length of each polyline segment.

    Parameters
    ----------
    points : np.ndarray
        Vertices, shape (N, 2), N ≥ 1

    Returns
    -------
    np.ndarray
        Lengths, shape (N-1,)
    """
    points = np.asarray(points, dtype=np.float64)
    return np.linalg.norm(np.diff(points, axis=0), axis=1)


def left_normals(points: np.ndarray) -> np.ndarray:
    """Unit normal at every vertex, from the direction of its incoming segment.

    Parameters
    ----------
    points : np.ndarray
        Vertices, shape (N, 2), N ≥ 2

    Returns
    -------
    np.ndarray
        Unit normals, shape (N, 2). The direction (dx, dy) maps to (-dy, dx).
        Vertex 0 has no incoming segment and uses the first one.

    Raises
    ------
    ValueError
        If fewer than 2 points, or every segment has zero length

    Notes
    -----
    A zero-length segment (repeated position with a different radius) takes
    the direction of the closest earlier non-degenerate segment, or of the
    first non-degenerate segment when none precedes it.
    """
    points = np.asarray(points, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 2 or points.shape[0] < 2:
        raise ValueError(f"Expected (N, 2) points with N >= 2, got shape {points.shape}")

    seg = np.diff(points, axis=0)
    lengths = np.linalg.norm(seg, axis=1)
    valid = lengths > MIN_SEGMENT_PX
    if not valid.any():
        raise ValueError("Polyline has no segment of non-zero length")

    # Forward-fill degenerate segments with the last valid index, then
    # back-fill the leading run with the first valid one.
    idx = np.where(valid, np.arange(len(seg)), -1)
    idx = np.maximum.accumulate(idx)
    idx[idx < 0] = int(np.argmax(valid))

    unit = seg[idx] / lengths[idx][:, None]
    normals = np.column_stack([-unit[:, 1], unit[:, 0]])

    # Vertex i (i ≥ 1) uses segment i-1; vertex 0 reuses segment 0.
    return np.vstack([normals[:1], normals])


def offset_sides(points: np.ndarray, radii: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Offset a polyline to both sides by a per-vertex radius.

    Parameters
    ----------
    points : np.ndarray
        Vertices, shape (N, 2), N ≥ 2
    radii : np.ndarray
        Half-widths, shape (N,)

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        (positive, negative) vertex lists, each shape (N, 2):
        positive = p + n·r, negative = p - n·r
    """
    points = np.asarray(points, dtype=np.float64)
    radii = np.asarray(radii, dtype=np.float64)
    if radii.shape != (points.shape[0],):
        raise ValueError(f"radii shape {radii.shape} does not match {points.shape[0]} points")

    offsets = left_normals(points) * radii[:, None]
    return points + offsets, points - offsets
