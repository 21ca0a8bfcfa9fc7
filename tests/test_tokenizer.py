"""Unit tests for the G-code tokenizer.

Tests:
    - Word-address chunks (case, signs, leading decimal point)
    - Parenthesis and semicolon comments
    - Skipped lines (%, block delete, blank)
    - Syntax errors carry line and column
    - Integer / real address access

Run:
    pytest tests/test_tokenizer.py -v
"""

import pytest

from vcarve_preview.carve import tokenizer
from vcarve_preview.carve.tokenizer import ChunkType, GCodeSyntaxError


def words(block):
    return [(c.word, c.value) for c in block if c.kind is ChunkType.WORD_ADDRESS]


def test_tokenize_simple_motion_line():
    block = tokenizer.tokenize_line("G1 X1 Y0 Z-0.05")
    assert words(block) == [('G', 1.0), ('X', 1.0), ('Y', 0.0), ('Z', -0.05)]


def test_tokenize_lowercase_and_packed_words():
    block = tokenizer.tokenize_line("g01x.5y-2.z+3")
    assert words(block) == [('G', 1.0), ('X', 0.5), ('Y', -2.0), ('Z', 3.0)]
    assert block[0].text == "G01"


def test_tokenize_exponent_is_not_a_number_suffix():
    block = tokenizer.tokenize_line("G1E5")
    assert words(block) == [('G', 1.0), ('E', 5.0)]


def test_tokenize_comments():
    block = tokenizer.tokenize_line("G0 (rapid to start) X1 ; trailing note")
    kinds = [c.kind for c in block]
    assert kinds == [
        ChunkType.WORD_ADDRESS,
        ChunkType.COMMENT,
        ChunkType.WORD_ADDRESS,
        ChunkType.COMMENT,
    ]
    assert block[1].text == "rapid to start"
    assert block[3].text == "trailing note"


def test_tokenize_skipped_lines():
    assert tokenizer.tokenize_line("%") == []
    assert tokenizer.tokenize_line("   ") == []
    assert words(tokenizer.tokenize_line("/G1 X2")) == [('G', 1.0), ('X', 2.0)]


def test_tokenize_program_keeps_one_block_per_line():
    blocks = tokenizer.tokenize("G1 X0\n\nG0 Z1\n")
    assert len(blocks) == 3
    assert blocks[1] == []


def test_tokenize_unclosed_comment_raises():
    with pytest.raises(GCodeSyntaxError, match="Unclosed parenthesis") as exc:
        tokenizer.tokenize("G0 X0\nG1 (oops")
    assert exc.value.line_number == 2
    assert exc.value.column == 4


def test_tokenize_word_without_number_raises():
    with pytest.raises(GCodeSyntaxError, match="no numeric address"):
        tokenizer.tokenize_line("G1 X")


def test_tokenize_stray_character_raises():
    with pytest.raises(GCodeSyntaxError, match="Unrecognized character"):
        tokenizer.tokenize_line("G1 X1 $")


def test_syntax_error_is_value_error():
    assert issubclass(GCodeSyntaxError, ValueError)


def test_chunk_int_and_float_values():
    g, x = tokenizer.tokenize_line("G0.5 X2")
    assert g.float_value() == 0.5
    with pytest.raises(ValueError, match="not an integer"):
        g.int_value()
    assert x.int_value() == 2


def test_comment_chunk_has_no_address():
    (comment,) = tokenizer.tokenize_line("(hello)")
    with pytest.raises(ValueError):
        comment.float_value()
