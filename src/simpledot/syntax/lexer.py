"""DOT subset tokenizer.

Turns source text into a forward-only stream of positioned tokens. Knows
nothing about grammar structure: keywords are recognised here only because
the reclassification is purely lexical.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from simpledot.errors import LexError, LexErrorKind, SourcePosition


class TokenKind(Enum):
    # IDs
    IDENTIFIER = auto()
    NUMERAL = auto()
    QUOTED_STRING = auto()

    # Keywords
    STRICT = auto()
    GRAPH = auto()
    DIGRAPH = auto()
    NODE = auto()
    EDGE = auto()
    SUBGRAPH = auto()

    # Punctuation
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    SEMICOLON = auto()  # ;
    COMMA = auto()  # ,
    EQUALS = auto()  # =
    DIRECTED_EDGE = auto()  # ->
    UNDIRECTED_EDGE = auto()  # --

    EOF = auto()


KEYWORDS: dict[str, TokenKind] = {
    "strict": TokenKind.STRICT,
    "graph": TokenKind.GRAPH,
    "digraph": TokenKind.DIGRAPH,
    "node": TokenKind.NODE,
    "edge": TokenKind.EDGE,
    "subgraph": TokenKind.SUBGRAPH,
}

ID_KINDS = frozenset({TokenKind.IDENTIFIER, TokenKind.NUMERAL, TokenKind.QUOTED_STRING})
KEYWORD_KINDS = frozenset(KEYWORDS.values())
EDGE_OP_KINDS = frozenset({TokenKind.DIRECTED_EDGE, TokenKind.UNDIRECTED_EDGE})

_PUNCTUATION: dict[str, TokenKind] = {
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
    "=": TokenKind.EQUALS,
}

# Human-readable token descriptions, used in "expected ..." error messages.
DESCRIPTIONS: dict[TokenKind, str] = {
    TokenKind.IDENTIFIER: "identifier",
    TokenKind.NUMERAL: "numeral",
    TokenKind.QUOTED_STRING: "quoted string",
    TokenKind.STRICT: "'strict'",
    TokenKind.GRAPH: "'graph'",
    TokenKind.DIGRAPH: "'digraph'",
    TokenKind.NODE: "'node'",
    TokenKind.EDGE: "'edge'",
    TokenKind.SUBGRAPH: "'subgraph'",
    TokenKind.LBRACE: "'{'",
    TokenKind.RBRACE: "'}'",
    TokenKind.LBRACKET: "'['",
    TokenKind.RBRACKET: "']'",
    TokenKind.SEMICOLON: "';'",
    TokenKind.COMMA: "','",
    TokenKind.EQUALS: "'='",
    TokenKind.DIRECTED_EDGE: "'->'",
    TokenKind.UNDIRECTED_EDGE: "'--'",
    TokenKind.EOF: "end of input",
}

# [-]?(.[0-9]+ | [0-9]+(.[0-9]*)?)
NUMERAL_RE = re.compile(r"-?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)")
_WHITESPACE_RE = re.compile(r"[ \t\r\n\f\v]+")
_NEWLINE_RE = re.compile(r"\r\n|\n|\r")


def is_id_start(ch: str) -> bool:
    """Letters, underscore, and anything from the extended range (>= 0x80)."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_" or ord(ch) >= 0x80


def is_id_char(ch: str) -> bool:
    return is_id_start(ch) or ("0" <= ch <= "9")


@dataclass(frozen=True)
class Token:
    """A lexed token.

    ``text`` is the raw slice of the source; ``value`` is the ID value the
    token denotes (quotes and escapes removed for quoted strings, the raw
    text otherwise).
    """

    kind: TokenKind
    text: str
    value: str
    position: SourcePosition

    @property
    def is_id(self) -> bool:
        return self.kind in ID_KINDS

    @property
    def is_keyword(self) -> bool:
        return self.kind in KEYWORD_KINDS

    def describe(self) -> str:
        if self.is_id:
            return f"{DESCRIPTIONS[self.kind]} {self.text!r}"
        if self.is_keyword:
            return f"keyword '{self.text}'"
        return DESCRIPTIONS[self.kind]


class _Scanner:
    """Cursor over the source text that tracks line and column."""

    def __init__(self, src: str) -> None:
        self.src = src
        self.pos = 0
        self.line = 1
        self.col = 1
        self.byte_pos = 0

    def eof(self) -> bool:
        return self.pos >= len(self.src)

    def peek(self, s: str) -> bool:
        return self.src.startswith(s, self.pos)

    def char(self, ahead: int = 0) -> str:
        idx = self.pos + ahead
        return self.src[idx] if idx < len(self.src) else ""

    def position(self) -> SourcePosition:
        return SourcePosition(offset=self.pos, line=self.line, column=self.col, byte_offset=self.byte_pos)

    def advance_to(self, end: int) -> str:
        """Move to ``end``, updating line/column, and return the skipped text."""
        text = self.src[self.pos : end]
        newlines = len(_NEWLINE_RE.findall(text))
        if newlines:
            self.line += newlines
            last = max(text.rfind("\n"), text.rfind("\r"))
            self.col = len(text) - last
        else:
            self.col += len(text)
        self.byte_pos += len(text.encode("utf-8", "surrogatepass"))
        self.pos = end
        return text

    def at_line_start(self) -> bool:
        """True if only blanks precede the cursor on the current line."""
        idx = self.pos - 1
        while idx >= 0 and self.src[idx] in " \t":
            idx -= 1
        return idx < 0 or self.src[idx] in "\r\n"

    # ── Trivia ────────────────────────────────────────────────────────────────

    def skip_trivia(self) -> None:
        """Skip whitespace, // and /* */ comments, and # preprocessor lines."""
        while not self.eof():
            m = _WHITESPACE_RE.match(self.src, self.pos)
            if m:
                self.advance_to(m.end())
                continue
            if self.peek("//") or (self.peek("#") and self.at_line_start()):
                self.advance_to(self._line_end())
                continue
            if self.peek("/*"):
                start = self.position()
                end = self.src.find("*/", self.pos + 2)
                if end < 0:
                    raise LexError(
                        LexErrorKind.UnterminatedComment,
                        "block comment is never closed",
                        start,
                    )
                self.advance_to(end + 2)
                continue
            break

    def _line_end(self) -> int:
        m = _NEWLINE_RE.search(self.src, self.pos)
        return m.start() if m else len(self.src)

    # ── Token readers ─────────────────────────────────────────────────────────

    def read_quoted_string(self) -> Token:
        start = self.position()
        idx = self.pos + 1
        buf: list[str] = []
        while idx < len(self.src):
            ch = self.src[idx]
            if ch == '"':
                text = self.advance_to(idx + 1)
                return Token(TokenKind.QUOTED_STRING, text, "".join(buf), start)
            if ch == "\\":
                nxt = self.src[idx + 1] if idx + 1 < len(self.src) else ""
                if nxt == '"':
                    buf.append('"')
                    idx += 2
                    continue
                if nxt in ("\n", "\r"):
                    # line continuation
                    idx += 3 if self.src.startswith("\r\n", idx + 1) else 2
                    continue
            buf.append(ch)
            idx += 1
        raise LexError(
            LexErrorKind.UnterminatedQuotedString,
            "quoted string is never closed",
            start,
        )

    def read_numeral(self) -> Token:
        start = self.position()
        m = NUMERAL_RE.match(self.src, self.pos)
        if m is None:
            raise LexError(
                LexErrorKind.InvalidNumeral,
                f"{self.src[self.pos:self.pos + 2]!r} does not start a numeral",
                start,
            )
        following = self.src[m.end()] if m.end() < len(self.src) else ""
        if following == "." or (following and is_id_char(following)):
            end = m.end()
            while end < len(self.src) and (self.src[end] == "." or is_id_char(self.src[end])):
                end += 1
            raise LexError(
                LexErrorKind.InvalidNumeral,
                f"malformed numeral {self.src[self.pos:end]!r}",
                start,
            )
        text = self.advance_to(m.end())
        return Token(TokenKind.NUMERAL, text, text, start)

    def read_identifier(self) -> Token:
        start = self.position()
        end = self.pos
        while end < len(self.src) and is_id_char(self.src[end]):
            end += 1
        text = self.advance_to(end)
        kind = KEYWORDS.get(text.lower(), TokenKind.IDENTIFIER)
        return Token(kind, text, text, start)

    def read_punctuation(self) -> Token | None:
        start = self.position()
        if self.peek("->"):
            return Token(TokenKind.DIRECTED_EDGE, self.advance_to(self.pos + 2), "->", start)
        if self.peek("--"):
            return Token(TokenKind.UNDIRECTED_EDGE, self.advance_to(self.pos + 2), "--", start)
        kind = _PUNCTUATION.get(self.char())
        if kind is None:
            return None
        text = self.advance_to(self.pos + 1)
        return Token(kind, text, text, start)


def tokenize(src: str) -> Iterator[Token]:
    """Lazily lex ``src`` into tokens, ending with a single EOF token.

    Raises:
        LexError: At the first character sequence that is not a valid token.
    """
    scanner = _Scanner(src)
    while True:
        scanner.skip_trivia()
        if scanner.eof():
            yield Token(TokenKind.EOF, "", "", scanner.position())
            return

        ch = scanner.char()
        if ch == '"':
            yield scanner.read_quoted_string()
            continue

        # Edge operators win over a leading '-' numeral sign.
        punct = scanner.read_punctuation()
        if punct is not None:
            yield punct
            continue

        if ch == "-" or ch == "." or ("0" <= ch <= "9"):
            yield scanner.read_numeral()
            continue

        if is_id_start(ch):
            yield scanner.read_identifier()
            continue

        raise LexError(
            LexErrorKind.UnexpectedCharacter,
            f"unexpected character {ch!r}",
            scanner.position(),
        )
