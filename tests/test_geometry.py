"""Unit tests for outline geometry.

Tests:
    - Normals follow the incoming segment (no averaging at corners)
    - Zero-length segments borrow a neighbouring direction
    - Side offsets scale with the per-vertex radius

Run:
    pytest tests/test_geometry.py -v
"""

import numpy as np
import pytest

from vcarve_preview.utils import geometry


def test_segment_lengths():
    pts = np.array([[0, 0], [3, 4], [3, 4], [3, 5]])
    assert np.allclose(geometry.segment_lengths(pts), [5.0, 0.0, 1.0])


def test_left_normals_straight_line():
    pts = np.array([[0.0, 0.0], [10.0, 0.0], [20.0, 0.0]])
    normals = geometry.left_normals(pts)
    assert np.allclose(normals, [[0, 1], [0, 1], [0, 1]])


def test_left_normals_use_incoming_segment():
    pts = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0]])
    normals = geometry.left_normals(pts)
    # Corner vertex keeps the first segment's normal, the last one turns
    assert np.allclose(normals[1], [0, 1])
    assert np.allclose(normals[2], [-1, 0])


def test_left_normals_are_unit_length():
    rng = np.random.default_rng(0)
    pts = rng.uniform(-50, 50, size=(20, 2))
    norms = np.linalg.norm(geometry.left_normals(pts), axis=1)
    assert np.allclose(norms, 1.0)


def test_left_normals_fill_zero_length_segments():
    pts = np.array([[0.0, 0.0], [0.0, 0.0], [5.0, 0.0], [5.0, 0.0]])
    normals = geometry.left_normals(pts)
    assert np.allclose(normals, [[0, 1]] * 4)


def test_left_normals_rejects_degenerate_input():
    with pytest.raises(ValueError, match="N >= 2"):
        geometry.left_normals(np.array([[1.0, 1.0]]))
    with pytest.raises(ValueError, match="non-zero length"):
        geometry.left_normals(np.array([[1.0, 1.0], [1.0, 1.0]]))


def test_offset_sides():
    pts = np.array([[0.0, 0.0], [100.0, 0.0]])
    radii = np.array([1.0, 2.0])
    pos, neg = geometry.offset_sides(pts, radii)
    assert np.allclose(pos, [[0, 1], [100, 2]])
    assert np.allclose(neg, [[0, -1], [100, -2]])


def test_offset_sides_shape_mismatch():
    with pytest.raises(ValueError, match="radii shape"):
        geometry.offset_sides(np.array([[0.0, 0.0], [1.0, 0.0], [2.0, 0.0]]), np.ones(2))
