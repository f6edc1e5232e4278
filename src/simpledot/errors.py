"""Error types for simpledot lexing, parsing and attribute validation.

Every failure is fail-fast: the first error aborts the parse call and is raised
to the caller with the source position it was detected at.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class SourcePosition:
    """A location in the source text.

    Attributes:
        offset: Character offset from the start of the input (0-indexed)
        byte_offset: Offset of the same point in the UTF-8 encoded input
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    offset: int
    line: int
    column: int
    byte_offset: int

    @classmethod
    def start(cls) -> SourcePosition:
        return cls(offset=0, line=1, column=1, byte_offset=0)

    def format(self) -> str:
        return f"line {self.line}, column {self.column}"


class LexErrorKind(Enum):
    UnexpectedCharacter = "unexpected character"
    UnterminatedQuotedString = "unterminated quoted string"
    InvalidNumeral = "invalid numeral"
    UnterminatedComment = "unterminated comment"


class SyntaxErrorKind(Enum):
    UnexpectedToken = "unexpected token"
    UnexpectedEndOfInput = "unexpected end of input"
    UnmatchedBrace = "unmatched brace"
    WrongEdgeOperator = "wrong edge operator"
    NestingTooDeep = "nesting too deep"
    InputTooLarge = "input too large"


class AttributeErrorKind(Enum):
    UnknownAttribute = "unknown attribute"
    WrongEntityKind = "wrong entity kind"
    MalformedValue = "malformed value"


class DotError(ValueError):
    """Base exception for all simpledot errors."""

    def __init__(self, kind: Enum, message: str, position: SourcePosition | None = None):
        self.kind = kind
        self.message = message
        self.position = position
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.position is not None:
            return f"{self.position.format()}: {self.message}"
        return self.message


class LexError(DotError):
    """Raised when the source text cannot be split into tokens.

    Examples:
    - A character outside the subset (ports, HTML strings, '+')
    - A quoted string or block comment missing its terminator
    - A numeral running into letters or a second decimal point
    """

    kind: LexErrorKind


class DotSyntaxError(DotError):
    """Raised when the token sequence does not match the subset grammar.

    Carries the descriptions of the tokens that would have been accepted at
    the failing position in ``expected``.
    """

    kind: SyntaxErrorKind

    def __init__(
        self,
        kind: SyntaxErrorKind,
        message: str,
        position: SourcePosition | None = None,
        expected: tuple[str, ...] = (),
    ):
        self.expected = tuple(sorted(set(expected)))
        super().__init__(kind, message, position)

    def _format_message(self) -> str:
        text = super()._format_message()
        if self.expected:
            text += f" (expected {', '.join(self.expected)})"
        return text


class DotAttributeError(DotError):
    """Raised when an attribute is unknown, misapplied or has a malformed value."""

    kind: AttributeErrorKind

    def __init__(
        self,
        kind: AttributeErrorKind,
        message: str,
        position: SourcePosition | None = None,
        name: str | None = None,
    ):
        self.name = name
        super().__init__(kind, message, position)

    def at(self, position: SourcePosition) -> DotAttributeError:
        """Return a copy of this error located at ``position``."""
        return DotAttributeError(self.kind, self.message, position, self.name)
