"""Unit tests for the SVG document emitter.

Tests:
    - Fixed-point number formatting (negative zero, rounding)
    - Header / primitives / footer order and attributes
    - Pretty vs compact output
    - Misuse (primitives outside an open document)

Run:
    pytest tests/test_svg.py -v
"""

import io
import xml.etree.ElementTree as ET

import pytest

from vcarve_preview.carve.svg import SVG_NS, SvgDocument, format_number


def test_format_number():
    assert format_number(1.33975) == "1.3"
    assert format_number(100) == "100.0"
    assert format_number(-0.0) == "0.0"
    assert format_number(-0.04) == "0.0"
    assert format_number(-2.68) == "-2.7"
    assert format_number(1.23456, decimals=3) == "1.235"


def test_pretty_document_layout():
    out = io.StringIO()
    doc = SvgDocument(out)
    doc.header(100, 0)
    doc.circle(0.0, -0.0, 2.6795)
    doc.footer()

    assert out.getvalue() == (
        '<?xml version="1.0"?>\n'
        f'<svg xmlns="{SVG_NS}" width="100" height="0">\n'
        '<circle cx="0.0" cy="0.0" r="2.7"/>\n'
        '</svg>\n'
    )
    assert doc.primitive_count == 1


def test_compact_document_is_single_line():
    out = io.StringIO()
    doc = SvgDocument(out, pretty=False)
    doc.header(10, 20)
    doc.circle(1, 2, 3)
    doc.circle(4, 5, 6)
    doc.footer()

    text = out.getvalue()
    assert text.count("\n") == 1
    assert text.endswith("</svg>\n")


def test_path_formatting():
    out = io.StringIO()
    doc = SvgDocument(out)
    doc.header(1, 1)
    doc.path([("M", 0, 1.34), ("L", 100, 1.34), ("A", 1.34, 1.34, 0, 0, 0, 100, -1.34), ("Z",)])
    doc.footer()

    assert '<path d="M 0.0 1.3 L 100.0 1.3 A 1.3 1.3 0.0 0 0 100.0 -1.3 Z"/>' in out.getvalue()


def test_document_is_well_formed_xml():
    out = io.StringIO()
    doc = SvgDocument(out)
    doc.header(5, 5)
    doc.circle(1, 1, 1)
    doc.path([("M", 0, 0), ("L", 1, 1), ("Z",)])
    doc.footer()

    root = ET.fromstring(out.getvalue().split("\n", 1)[1])
    assert root.tag == f"{{{SVG_NS}}}svg"
    assert root.attrib["width"] == "5"
    assert [child.tag.split("}")[1] for child in root] == ["circle", "path"]


def test_primitive_before_header_raises():
    doc = SvgDocument(io.StringIO())
    with pytest.raises(RuntimeError, match="new"):
        doc.circle(0, 0, 1)


def test_primitive_after_footer_raises():
    doc = SvgDocument(io.StringIO())
    doc.header(1, 1)
    doc.footer()
    with pytest.raises(RuntimeError, match="closed"):
        doc.path([("M", 0, 0)])


def test_double_header_raises():
    doc = SvgDocument(io.StringIO())
    doc.header(1, 1)
    with pytest.raises(RuntimeError, match="already written"):
        doc.header(1, 1)
