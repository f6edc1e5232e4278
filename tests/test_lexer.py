"""Tests for simpledot.syntax.lexer — token classification, positions and lex errors."""

import pytest

from simpledot.errors import LexError, LexErrorKind
from simpledot.syntax.lexer import Token, TokenKind, tokenize


def _lex(src: str) -> list[Token]:
    return list(tokenize(src))


def _kinds(src: str) -> list[TokenKind]:
    return [t.kind for t in _lex(src)]


def _single(src: str) -> Token:
    tokens = _lex(src)
    assert len(tokens) == 2, f"expected one token plus EOF, got {tokens}"
    assert tokens[1].kind == TokenKind.EOF
    return tokens[0]


# ─── Numerals ────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("text", ["-42", "3.14", ".5", "-.5", "0", "7.", "-0.25"])
def test_numeral_single_token(text):
    token = _single(text)
    assert token.kind == TokenKind.NUMERAL
    assert token.text == text
    assert token.value == text


@pytest.mark.parametrize("text", ["12ab", "1.2.3", "-x", ".", "-.x"])
def test_invalid_numeral(text):
    with pytest.raises(LexError) as info:
        _lex(text)
    assert info.value.kind == LexErrorKind.InvalidNumeral


def test_numeral_before_edge_operator():
    assert _kinds("1->2") == [TokenKind.NUMERAL, TokenKind.DIRECTED_EDGE, TokenKind.NUMERAL, TokenKind.EOF]


# ─── Identifiers and keywords ────────────────────────────────────────────────

def test_identifier_with_digits():
    token = _single("abc123")
    assert token.kind == TokenKind.IDENTIFIER
    assert token.value == "abc123"


def test_identifier_underscore_start():
    assert _single("_x_1").kind == TokenKind.IDENTIFIER


def test_identifier_extended_range():
    token = _single("café_ÿ")
    assert token.kind == TokenKind.IDENTIFIER
    assert token.value == "café_ÿ"


@pytest.mark.parametrize("text", ["graph", "Graph", "GRAPH", "gRaPh"])
def test_keyword_case_insensitive(text):
    token = _single(text)
    assert token.kind == TokenKind.GRAPH
    assert token.is_keyword
    assert token.text == text


@pytest.mark.parametrize(
    "text,kind",
    [
        ("strict", TokenKind.STRICT),
        ("digraph", TokenKind.DIGRAPH),
        ("node", TokenKind.NODE),
        ("edge", TokenKind.EDGE),
        ("subgraph", TokenKind.SUBGRAPH),
    ],
)
def test_all_keywords(text, kind):
    assert _single(text).kind == kind


def test_keyword_prefix_is_identifier():
    assert _single("graphs").kind == TokenKind.IDENTIFIER
    assert _single("nodes1").kind == TokenKind.IDENTIFIER


def test_quoted_keyword_is_not_keyword():
    token = _single('"graph"')
    assert token.kind == TokenKind.QUOTED_STRING
    assert token.is_id
    assert not token.is_keyword
    assert token.value == "graph"


# ─── Quoted strings ──────────────────────────────────────────────────────────

def test_quoted_string_escaped_quote():
    token = _single("\"a\\\"b\"")
    assert token.kind == TokenKind.QUOTED_STRING
    assert token.value == 'a"b'
    assert token.text == '"a\\"b"'


def test_quoted_string_keeps_other_backslashes():
    assert _single('"\\N"').value == "\\N"


def test_quoted_string_empty():
    assert _single('""').value == ""


def test_quoted_string_preserves_case_and_spaces():
    assert _single('"Hello World"').value == "Hello World"


def test_quoted_string_line_continuation():
    assert _single('"abc\\\ndef"').value == "abcdef"


def test_unterminated_quoted_string():
    with pytest.raises(LexError) as info:
        _lex('a -> "never closed')
    assert info.value.kind == LexErrorKind.UnterminatedQuotedString
    assert info.value.position.column == 6


# ─── Punctuation ─────────────────────────────────────────────────────────────

def test_punctuation():
    assert _kinds("{ } [ ] ; , = -> --") == [
        TokenKind.LBRACE,
        TokenKind.RBRACE,
        TokenKind.LBRACKET,
        TokenKind.RBRACKET,
        TokenKind.SEMICOLON,
        TokenKind.COMMA,
        TokenKind.EQUALS,
        TokenKind.DIRECTED_EDGE,
        TokenKind.UNDIRECTED_EDGE,
        TokenKind.EOF,
    ]


def test_edge_operators_are_single_tokens():
    assert _kinds("a--b") == [TokenKind.IDENTIFIER, TokenKind.UNDIRECTED_EDGE, TokenKind.IDENTIFIER, TokenKind.EOF]
    assert _kinds("a->b") == [TokenKind.IDENTIFIER, TokenKind.DIRECTED_EDGE, TokenKind.IDENTIFIER, TokenKind.EOF]


@pytest.mark.parametrize("src", ["a:n", "<b>x</b>", '"a" + "b"', "a @ b"])
def test_unexpected_character(src):
    with pytest.raises(LexError) as info:
        _lex(src)
    assert info.value.kind == LexErrorKind.UnexpectedCharacter


# ─── Comments and whitespace ─────────────────────────────────────────────────

def test_line_comment_skipped():
    assert _kinds("a // comment -> b\nc") == [TokenKind.IDENTIFIER, TokenKind.IDENTIFIER, TokenKind.EOF]


def test_block_comment_skipped():
    assert _kinds("a /* b -> c\n */ d") == [TokenKind.IDENTIFIER, TokenKind.IDENTIFIER, TokenKind.EOF]


def test_preprocessor_line_skipped():
    assert _kinds('# 1 "file.gv"\n  a') == [TokenKind.IDENTIFIER, TokenKind.EOF]


def test_hash_mid_line_is_unexpected():
    with pytest.raises(LexError) as info:
        _lex("a # b")
    assert info.value.kind == LexErrorKind.UnexpectedCharacter


def test_unterminated_block_comment():
    with pytest.raises(LexError) as info:
        _lex("a /* open")
    assert info.value.kind == LexErrorKind.UnterminatedComment


def test_empty_input_is_just_eof():
    assert _kinds("") == [TokenKind.EOF]
    assert _kinds("  \n\t ") == [TokenKind.EOF]


# ─── Positions ───────────────────────────────────────────────────────────────

def test_positions_track_lines_and_columns():
    tokens = _lex('digraph {\n  a -> "b"\n}')
    positions = [(t.text, t.position.line, t.position.column, t.position.offset) for t in tokens]
    assert positions == [
        ("digraph", 1, 1, 0),
        ("{", 1, 9, 8),
        ("a", 2, 3, 12),
        ("->", 2, 5, 14),
        ('"b"', 2, 8, 17),
        ("}", 3, 1, 21),
        ("", 3, 2, 22),
    ]


def test_byte_offsets_count_utf8_bytes():
    tokens = _lex('graph { "größe" -- ü }')
    quoted, op, target = tokens[2], tokens[3], tokens[4]
    assert (quoted.position.offset, quoted.position.byte_offset) == (8, 8)
    assert (op.position.offset, op.position.byte_offset) == (16, 18)
    assert (target.position.offset, target.position.byte_offset) == (19, 21)
    assert target.position.column == 20


def test_error_byte_offset_after_non_ascii():
    with pytest.raises(LexError) as info:
        _lex("graph { é:p }")
    pos = info.value.position
    assert (pos.offset, pos.byte_offset) == (9, 10)


def test_error_position():
    with pytest.raises(LexError) as info:
        _lex("graph {\n  a : b }")
    pos = info.value.position
    assert (pos.line, pos.column, pos.offset) == (2, 5, 12)
    assert "line 2, column 5" in str(info.value)


def test_tokenize_is_lazy():
    stream = tokenize("a b :")
    assert next(stream).value == "a"
    assert next(stream).value == "b"
    with pytest.raises(LexError):
        next(stream)
