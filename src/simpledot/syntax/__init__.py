"""Lexical and syntactic layer: tokens and the unvalidated syntax tree."""

from simpledot.syntax.lexer import Token, TokenKind, tokenize
from simpledot.syntax.types import (
    AssignStmt,
    AttrItem,
    AttrStmt,
    EdgeStmt,
    GraphTree,
    NodeRef,
    NodeStmt,
    SubgraphStmt,
)

__all__ = [
    "AssignStmt",
    "AttrItem",
    "AttrStmt",
    "EdgeStmt",
    "GraphTree",
    "NodeRef",
    "NodeStmt",
    "SubgraphStmt",
    "Token",
    "TokenKind",
    "tokenize",
]
