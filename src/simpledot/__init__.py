"""simpledot: a validating parser for a constrained subset of the DOT language."""

from simpledot.config import ParseConfig
from simpledot.errors import (
    AttributeErrorKind,
    DotAttributeError,
    DotError,
    DotSyntaxError,
    LexError,
    LexErrorKind,
    SourcePosition,
    SyntaxErrorKind,
)
from simpledot.ir.ast import (
    ClusterSubgraph,
    Component,
    EdgeDecl,
    Graph,
    GraphAttribute,
    NodeDecl,
    Subgraph,
)
from simpledot.ir.builder import build
from simpledot.parsers import parse_tree
from simpledot.schema import default_for
from simpledot.types import AttributeName, EntityKind, GraphKind, ValueType

__all__ = [
    "AttributeErrorKind",
    "AttributeName",
    "ClusterSubgraph",
    "Component",
    "DotAttributeError",
    "DotError",
    "DotSyntaxError",
    "EdgeDecl",
    "EntityKind",
    "Graph",
    "GraphAttribute",
    "GraphKind",
    "LexError",
    "LexErrorKind",
    "NodeDecl",
    "ParseConfig",
    "SourcePosition",
    "Subgraph",
    "SyntaxErrorKind",
    "ValueType",
    "default_for",
    "parse",
]


def parse(src: str, config: ParseConfig | None = None) -> Graph:
    """Parse DOT subset text into a validated Graph.

    Args:
        src: The complete source text.
        config: Optional limits; defaults to ``ParseConfig()``.

    Returns:
        The resolved Graph. Calling twice on the same text gives equal values.

    Raises:
        LexError: If the text contains a malformed token.
        DotSyntaxError: If the tokens do not form a subset graph.
        DotAttributeError: If an attribute is unknown, misapplied or malformed.
    """
    config = config or ParseConfig()
    if config.max_input_length is not None and len(src) > config.max_input_length:
        raise DotSyntaxError(
            SyntaxErrorKind.InputTooLarge,
            f"input is {len(src)} characters, limit is {config.max_input_length}",
            SourcePosition.start(),
        )
    return build(parse_tree(src, config))
