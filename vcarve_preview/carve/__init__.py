"""Carve preview core: G-code blocks → waypoints → strokes → SVG.

Layering: carve/ depends on utils/, never the other way around.
"""

from . import motion
from . import pipeline
from . import renderer
from . import segmenter
from . import svg
from . import tokenizer

from .pipeline import convert_file, gcode_to_svg

__all__ = [
    'motion',
    'pipeline',
    'renderer',
    'segmenter',
    'svg',
    'tokenizer',
    'convert_file',
    'gcode_to_svg',
]
