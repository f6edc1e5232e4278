"""Syntax stage: source text to unvalidated syntax tree."""

from __future__ import annotations

from simpledot.config import ParseConfig
from simpledot.parsers.base import Parser
from simpledot.parsers.dot import DotParser
from simpledot.syntax.types import GraphTree

__all__ = ["DotParser", "Parser", "parse_tree"]


def parse_tree(src: str, config: ParseConfig | None = None) -> GraphTree:
    """Lex and parse ``src`` without resolving or validating attributes."""
    parser: Parser = DotParser(config)
    return parser.parse(src)
