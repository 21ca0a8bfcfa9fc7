"""SVG document emitter.

Writes, in order:
    <?xml version="1.0"?>
    <svg xmlns="http://www.w3.org/2000/svg" width="W" height="H">
    <circle .../> and <path .../> primitives, in stroke order
    </svg>

Numbers are fixed-point (one decimal by default) so output is byte-stable
across runs. Pretty mode ends every element with a newline; compact mode
writes the document on one line.

The header needs the final canvas size, so callers compute bounds before
writing any primitive (see pipeline.compute_canvas_bounds).
"""

from typing import Sequence, TextIO, Tuple, Union

SVG_NS = "http://www.w3.org/2000/svg"

PathCommand = Tuple[Union[str, float], ...]


def format_number(value: float, decimals: int = 1) -> str:
    """Fixed-point text for a coordinate, with negative zero printed as zero."""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-") and float(text) == 0.0:
        return text[1:]
    return text


class SvgDocument:
    """Streams an SVG document to a text output.

    Parameters
    ----------
    out : TextIO
        Destination stream
    pretty : bool
        Newline after every element, default True
    decimals : int
        Fixed-point digits for coordinates, default 1

    Attributes
    ----------
    primitive_count : int
        Circles and paths written so far
    """

    def __init__(self, out: TextIO, pretty: bool = True, decimals: int = 1):
        self.out = out
        self.pretty = pretty
        self.decimals = decimals
        self.primitive_count = 0
        self._state = "new"

    def _num(self, value: float) -> str:
        return format_number(value, self.decimals)

    def _emit(self, element: str) -> None:
        self.out.write(element)
        if self.pretty:
            self.out.write("\n")

    def _require_open(self) -> None:
        if self._state != "open":
            raise RuntimeError(f"Cannot write primitives to a {self._state} SVG document")

    def header(self, width: int, height: int) -> None:
        """Write the XML declaration and the opening <svg> tag."""
        if self._state != "new":
            raise RuntimeError("SVG header already written")
        self._emit('<?xml version="1.0"?>')
        self._emit(f'<svg xmlns="{SVG_NS}" width="{int(width)}" height="{int(height)}">')
        self._state = "open"

    def circle(self, cx: float, cy: float, r: float) -> None:
        self._require_open()
        self._emit(f'<circle cx="{self._num(cx)}" cy="{self._num(cy)}" r="{self._num(r)}"/>')
        self.primitive_count += 1

    def path(self, commands: Sequence[PathCommand]) -> None:
        """Write a <path> from (letter, *numbers) commands.

        Examples
        --------
        >>> doc.path([("M", 0, 1), ("L", 10, 1), ("A", 1, 1, 0, 0, 0, 10, -1), ("Z",)])
        """
        self._require_open()
        parts = []
        for command in commands:
            letter, *args = command
            if letter == "A":
                # rx ry rotation large-arc sweep x y; the flags stay integers
                rx, ry, rot, large, sweep, x, y = args
                parts.append(
                    f"A {self._num(rx)} {self._num(ry)} {self._num(rot)} "
                    f"{int(large)} {int(sweep)} {self._num(x)} {self._num(y)}"
                )
            else:
                parts.append(" ".join([letter] + [self._num(a) for a in args]))
        self._emit(f'<path d="{" ".join(parts)}"/>')
        self.primitive_count += 1

    def footer(self) -> None:
        """Close the document; the stream always ends with a newline."""
        self._require_open()
        self.out.write("</svg>\n")
        self._state = "closed"
