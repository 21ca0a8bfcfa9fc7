"""G-code tokenizer: raw text → blocks of word-address and comment chunks.

One block per input line. Each block is an ordered list of ``Chunk``:
    - WORD_ADDRESS: letter (upper-cased) + numeric value, e.g. ``G1``, ``X-.25``
    - COMMENT: ``( ... )`` inline comment or ``; ...`` to end of line

Skipped:
    - Whitespace anywhere in the line
    - ``%`` program delimiter lines
    - Leading ``/`` block-delete marker

Anything else (stray characters, a letter with no number, an unclosed
parenthesis) raises ``GCodeSyntaxError`` with the 1-based line and column.
The motion interpreter downstream never sees malformed input.

Usage:
    from vcarve_preview.carve import tokenizer

    blocks = tokenizer.tokenize("G1 X1 Y0 Z-0.05 (cut)\\nG0 Z0.1\\n")
    blocks[0][0].word, blocks[0][0].int_value()  # → ('G', 1)
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class ChunkType(Enum):
    WORD_ADDRESS = "word_address"
    COMMENT = "comment"


class GCodeSyntaxError(ValueError):
    """Raised when a line cannot be tokenized."""

    def __init__(self, message: str, line_number: int, column: int):
        super().__init__(f"Line {line_number}, column {column}: {message}")
        self.line_number = line_number
        self.column = column


@dataclass(frozen=True)
class Chunk:
    """A single token of a block."""
    kind: ChunkType
    text: str
    word: Optional[str] = None
    value: Optional[float] = None

    def float_value(self) -> float:
        """Address value as a real number."""
        if self.kind is not ChunkType.WORD_ADDRESS:
            raise ValueError(f"Comment chunk has no address: {self.text!r}")
        return self.value

    def int_value(self) -> int:
        """Address value as an integer.

        Raises
        ------
        ValueError
            If the chunk is a comment or the value is not integral (``G0.5``)
        """
        value = self.float_value()
        if not value.is_integer():
            raise ValueError(f"Address {self.text!r} is not an integer")
        return int(value)


Block = List[Chunk]

# Accepts X.5, X5., X-1.25, X+2; no exponents, so G1E5 stays two words
_WORD = re.compile(r'([A-Za-z])\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))')
_PAREN_COMMENT = re.compile(r'\(([^)]*)\)')


def tokenize_line(line: str, line_number: int = 1) -> Block:
    """Tokenize a single line into a block.

    Parameters
    ----------
    line : str
        One line of G-code, without its newline
    line_number : int
        1-based line number for error messages

    Returns
    -------
    Block
        Chunks in source order (may be empty)

    Raises
    ------
    GCodeSyntaxError
        On any character that does not start a word or a comment
    """
    block: Block = []
    stripped = line.strip()
    if stripped.startswith('%'):
        return block

    pos = 0
    if stripped.startswith('/'):
        pos = line.index('/') + 1

    while pos < len(line):
        ch = line[pos]

        if ch.isspace():
            pos += 1
            continue

        if ch == ';':
            block.append(Chunk(ChunkType.COMMENT, line[pos + 1:].strip()))
            break

        if ch == '(':
            match = _PAREN_COMMENT.match(line, pos)
            if not match:
                raise GCodeSyntaxError("Unclosed parenthesis in comment", line_number, pos + 1)
            block.append(Chunk(ChunkType.COMMENT, match.group(1).strip()))
            pos = match.end()
            continue

        match = _WORD.match(line, pos)
        if match:
            letter = match.group(1).upper()
            number = match.group(2)
            block.append(Chunk(
                ChunkType.WORD_ADDRESS,
                f"{letter}{number}",
                word=letter,
                value=float(number),
            ))
            pos = match.end()
            continue

        if ch.isalpha():
            raise GCodeSyntaxError(f"Word '{ch}' has no numeric address", line_number, pos + 1)
        raise GCodeSyntaxError(f"Unrecognized character: '{ch}'", line_number, pos + 1)

    return block


def tokenize(text: str) -> List[Block]:
    """Tokenize a whole program.

    Parameters
    ----------
    text : str
        Complete G-code text

    Returns
    -------
    List[Block]
        One block per line, in order (blank lines give empty blocks)

    Raises
    ------
    GCodeSyntaxError
        On the first malformed line
    """
    return [tokenize_line(line, i) for i, line in enumerate(text.splitlines(), 1)]
