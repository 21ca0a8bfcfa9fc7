"""Unit tests for stroke renderers.

Tests:
    - Dot mode: one circle per point
    - Trapezoid mode: closed outline with two arc caps
    - Single-point and stationary strokes fall back to dots
    - Reserved full mode renders nothing
    - Mode lookup

Run:
    pytest tests/test_renderer.py -v
"""

import io
import logging

import pytest

from vcarve_preview.carve import renderer
from vcarve_preview.carve.segmenter import StrokePoint
from vcarve_preview.carve.svg import SvgDocument


@pytest.fixture
def doc():
    d = SvgDocument(io.StringIO())
    d.header(100, 100)
    return d


def body(d):
    return d.out.getvalue().splitlines()[2:]


LINE = [StrokePoint(0.0, 0.0, 1.34), StrokePoint(100.0, 0.0, 1.34)]


def test_make_renderer_modes():
    assert isinstance(renderer.make_renderer("dots"), renderer.DotRenderer)
    assert isinstance(renderer.make_renderer("Trapezoids"), renderer.TrapezoidRenderer)
    assert isinstance(renderer.make_renderer("full"), renderer.FullRenderer)
    with pytest.raises(ValueError, match="Unknown render mode"):
        renderer.make_renderer("ribbons")


def test_dots_render_one_circle_per_point(doc):
    renderer.DotRenderer().render(LINE, doc)
    assert body(doc) == [
        '<circle cx="0.0" cy="0.0" r="1.3"/>',
        '<circle cx="100.0" cy="0.0" r="1.3"/>',
    ]


def test_trapezoid_straight_stroke(doc):
    renderer.TrapezoidRenderer().render(LINE, doc)
    assert body(doc) == [
        '<path d="M 0.0 1.3 L 100.0 1.3 A 1.3 1.3 0.0 0 0 100.0 -1.3 '
        'L 0.0 -1.3 A 1.3 1.3 0.0 0 0 0.0 1.3 Z"/>'
    ]
    assert doc.primitive_count == 1


def test_trapezoid_outline_structure():
    stroke = [
        StrokePoint(0.0, 0.0, 1.0),
        StrokePoint(10.0, 0.0, 2.0),
        StrokePoint(10.0, 10.0, 3.0),
    ]
    commands = renderer.TrapezoidRenderer.outline(stroke)
    letters = [c[0] for c in commands]
    assert letters == ["M", "L", "L", "A", "L", "L", "A", "Z"]

    # Far cap spans the last vertex's width, near cap the first one's
    far_cap, near_cap = commands[3], commands[6]
    assert far_cap[1] == pytest.approx(3.0)
    assert near_cap[1] == pytest.approx(1.0)
    # The outline returns to its starting vertex
    assert tuple(near_cap[-2:]) == pytest.approx(tuple(commands[0][1:]))


def test_trapezoid_corner_uses_incoming_direction():
    stroke = [
        StrokePoint(0.0, 0.0, 1.0),
        StrokePoint(10.0, 0.0, 1.0),
        StrokePoint(10.0, 10.0, 1.0),
    ]
    commands = renderer.TrapezoidRenderer.outline(stroke)
    # Corner vertex offset straight down (+y), not mitered
    assert tuple(commands[1][1:]) == pytest.approx((10.0, 1.0))
    assert tuple(commands[2][1:]) == pytest.approx((9.0, 10.0))


def test_single_point_stroke_is_a_circle_in_trapezoid_mode(doc):
    renderer.TrapezoidRenderer().render([StrokePoint(0.0, 0.0, 2.6795)], doc)
    assert body(doc) == ['<circle cx="0.0" cy="0.0" r="2.7"/>']


def test_stationary_stroke_falls_back_to_dots(doc):
    plunge = [StrokePoint(5.0, 5.0, 1.0), StrokePoint(5.0, 5.0, 2.0)]
    renderer.TrapezoidRenderer().render(plunge, doc)
    assert len(body(doc)) == 2
    assert all(line.startswith("<circle") for line in body(doc))


def test_empty_stroke_renders_nothing(doc):
    renderer.TrapezoidRenderer().render([], doc)
    assert doc.primitive_count == 0


def test_full_mode_renders_nothing_and_warns_once(doc, caplog):
    full = renderer.FullRenderer()
    with caplog.at_level(logging.WARNING, logger="vcarve_preview.carve.renderer"):
        full.render(LINE, doc)
        full.render([StrokePoint(0.0, 0.0, 1.0)], doc)

    assert doc.primitive_count == 0
    warnings = [r for r in caplog.records if "not implemented" in r.getMessage()]
    assert len(warnings) == 1
