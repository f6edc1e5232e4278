"""DOT subset parser — hand-rolled recursive descent over the token stream.

Builds the unvalidated syntax tree from ``syntax.types``. Ambiguity between
node statements, edge statements and assignments is resolved with one or two
tokens of lookahead; nothing is ever re-scanned.

    graph      : [strict] (graph | digraph) [ID] '{' stmt_list '}'
    stmt_list  : [stmt [';'] stmt_list]
    stmt       : node_stmt | edge_stmt | attr_stmt | ID '=' ID | subgraph
    attr_stmt  : (graph | node | edge) attr_list
    attr_list  : '[' [a_list] ']' [attr_list]
    a_list     : ID '=' ID [(';' | ',')] [a_list]
    edge_stmt  : (ID | subgraph) edgeRHS [attr_list]
    edgeRHS    : edgeop (ID | subgraph) [edgeRHS]
    node_stmt  : ID [attr_list]
    subgraph   : [subgraph [ID]] '{' stmt_list '}'
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Iterator

from simpledot.config import ParseConfig
from simpledot.errors import DotSyntaxError, SourcePosition, SyntaxErrorKind
from simpledot.syntax.lexer import (
    DESCRIPTIONS,
    EDGE_OP_KINDS,
    ID_KINDS,
    Token,
    TokenKind,
    tokenize,
)
from simpledot.syntax.types import (
    AssignStmt,
    AttrItem,
    AttrStmt,
    EdgeStmt,
    Endpoint,
    GraphTree,
    NodeRef,
    NodeStmt,
    Statement,
    SubgraphStmt,
)
from simpledot.types import EntityKind, GraphKind

logger = logging.getLogger(__name__)

_ATTR_TARGETS: dict[TokenKind, EntityKind] = {
    TokenKind.GRAPH: EntityKind.Graph,
    TokenKind.NODE: EntityKind.Node,
    TokenKind.EDGE: EntityKind.Edge,
}

_EDGE_OPS: dict[GraphKind, TokenKind] = {
    GraphKind.Directed: TokenKind.DIRECTED_EDGE,
    GraphKind.Undirected: TokenKind.UNDIRECTED_EDGE,
}

_STMT_START = (
    *ID_KINDS,
    TokenKind.GRAPH,
    TokenKind.NODE,
    TokenKind.EDGE,
    TokenKind.SUBGRAPH,
    TokenKind.LBRACE,
    TokenKind.RBRACE,
)


class _Cursor:
    """Forward-only cursor over a token stream with a small lookahead buffer."""

    def __init__(self, tokens: Iterable[Token], config: ParseConfig) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._buffer: deque[Token] = deque()
        self.config = config
        self.kind = GraphKind.Undirected
        self.depth = 0
        self.statement_count = 0

    # ── Primitive helpers ─────────────────────────────────────────────────────

    def peek(self, ahead: int = 0) -> Token:
        while len(self._buffer) <= ahead:
            token = next(self._tokens, None)
            if token is None:
                # EOF is sticky once the stream is exhausted.
                token = self._buffer[-1]
            self._buffer.append(token)
        return self._buffer[ahead]

    def at(self, *kinds: TokenKind) -> bool:
        return self.peek().kind in kinds

    def advance(self) -> Token:
        token = self.peek()
        if token.kind is not TokenKind.EOF:
            self._buffer.popleft()
        return token

    def accept(self, *kinds: TokenKind) -> Token | None:
        if self.at(*kinds):
            return self.advance()
        return None

    def expect(self, *kinds: TokenKind) -> Token:
        token = self.accept(*kinds)
        if token is None:
            raise self.unexpected(kinds)
        return token

    def unexpected(self, kinds: Iterable[TokenKind]) -> DotSyntaxError:
        token = self.peek()
        expected = tuple(DESCRIPTIONS[k] for k in kinds)
        if token.kind is TokenKind.EOF:
            return DotSyntaxError(
                SyntaxErrorKind.UnexpectedEndOfInput,
                "unexpected end of input",
                token.position,
                expected,
            )
        return DotSyntaxError(
            SyntaxErrorKind.UnexpectedToken,
            f"unexpected {token.describe()}",
            token.position,
            expected,
        )

    def expect_id(self) -> Token:
        return self.expect(*ID_KINDS)

    # ── Lookahead predicates ──────────────────────────────────────────────────

    def at_attr_stmt(self) -> bool:
        return self.peek().kind in _ATTR_TARGETS and self.peek(1).kind is TokenKind.LBRACKET

    def at_subgraph(self) -> bool:
        return self.at(TokenKind.SUBGRAPH, TokenKind.LBRACE)

    def at_edge_op(self) -> bool:
        """True at an edge operator; raises if it is the wrong one for the graph kind."""
        token = self.peek()
        if token.kind not in EDGE_OP_KINDS:
            return False
        wanted = _EDGE_OPS[self.kind]
        if token.kind is not wanted:
            raise DotSyntaxError(
                SyntaxErrorKind.WrongEdgeOperator,
                f"{token.text!r} is not allowed in a {self.kind.keyword}; use {self.kind.edge_op!r}",
                token.position,
                (DESCRIPTIONS[wanted],),
            )
        return True

    # ── Attribute lists ───────────────────────────────────────────────────────

    def parse_a_list(self) -> list[AttrItem]:
        items: list[AttrItem] = []
        while not self.at(TokenKind.RBRACKET):
            if not self.peek().is_id:
                raise self.unexpected((*ID_KINDS, TokenKind.RBRACKET))
            name = self.advance()
            self.expect(TokenKind.EQUALS)
            value = self.expect_id()
            items.append(AttrItem(name=name.value, value=value.value, position=name.position))
            self.accept(TokenKind.COMMA, TokenKind.SEMICOLON)
        return items

    def parse_attr_lists(self) -> list[list[AttrItem]]:
        """Zero or more consecutive ``[...]`` groups."""
        lists: list[list[AttrItem]] = []
        while self.accept(TokenKind.LBRACKET):
            lists.append(self.parse_a_list())
            self.expect(TokenKind.RBRACKET)
        return lists

    # ── Statements ────────────────────────────────────────────────────────────

    def parse_attr_stmt(self) -> AttrStmt:
        keyword = self.advance()
        return AttrStmt(
            target=_ATTR_TARGETS[keyword.kind],
            attr_lists=self.parse_attr_lists(),
            position=keyword.position,
        )

    def parse_edge_rhs(self, first: Endpoint, position: SourcePosition) -> EdgeStmt:
        endpoints: list[Endpoint] = [first]
        while self.at_edge_op():
            self.advance()
            endpoints.append(self.parse_endpoint())
        return EdgeStmt(endpoints=endpoints, attr_lists=self.parse_attr_lists(), position=position)

    def parse_endpoint(self) -> Endpoint:
        if self.at_subgraph():
            return self.parse_subgraph()
        token = self.peek()
        if not token.is_id:
            raise self.unexpected((*ID_KINDS, TokenKind.SUBGRAPH, TokenKind.LBRACE))
        self.advance()
        return NodeRef(id=token.value, position=token.position)

    def parse_id_stmt(self) -> Statement:
        token = self.advance()
        if self.accept(TokenKind.EQUALS):
            value = self.expect_id()
            return AssignStmt(AttrItem(name=token.value, value=value.value, position=token.position))
        node = NodeRef(id=token.value, position=token.position)
        if self.at_edge_op():
            return self.parse_edge_rhs(node, token.position)
        return NodeStmt(node=node, attr_lists=self.parse_attr_lists())

    def parse_statement(self) -> Statement:
        self.statement_count += 1
        if self.at_attr_stmt():
            return self.parse_attr_stmt()
        if self.at_subgraph():
            subgraph = self.parse_subgraph()
            if self.at_edge_op():
                return self.parse_edge_rhs(subgraph, subgraph.position)
            return subgraph
        if self.peek().is_id:
            return self.parse_id_stmt()
        if self.peek().kind in _ATTR_TARGETS:
            # 'graph', 'node' or 'edge' not followed by '['
            self.advance()
            raise self.unexpected((TokenKind.LBRACKET,))
        raise self.unexpected(_STMT_START)

    def parse_stmt_list(self, opening: Token) -> list[Statement]:
        statements: list[Statement] = []
        while not self.at(TokenKind.RBRACE):
            if self.at(TokenKind.EOF):
                raise DotSyntaxError(
                    SyntaxErrorKind.UnmatchedBrace,
                    f"'{{' opened at {opening.position.format()} is never closed",
                    self.peek().position,
                    (DESCRIPTIONS[TokenKind.RBRACE],),
                )
            statements.append(self.parse_statement())
            self.accept(TokenKind.SEMICOLON)
        self.advance()
        return statements

    def parse_subgraph(self) -> SubgraphStmt:
        start = self.peek().position
        name: str | None = None
        if self.accept(TokenKind.SUBGRAPH):
            if self.peek().is_id:
                name = self.advance().value
        opening = self.expect(TokenKind.LBRACE)
        if self.depth >= self.config.max_nesting_depth:
            raise DotSyntaxError(
                SyntaxErrorKind.NestingTooDeep,
                f"subgraphs nested deeper than {self.config.max_nesting_depth} levels",
                opening.position,
            )
        self.depth += 1
        try:
            statements = self.parse_stmt_list(opening)
        finally:
            self.depth -= 1
        return SubgraphStmt(name=name, statements=statements, position=start)

    # ── Top-level parse ───────────────────────────────────────────────────────

    def parse_graph(self) -> GraphTree:
        strict = self.accept(TokenKind.STRICT) is not None
        header = self.expect(TokenKind.GRAPH, TokenKind.DIGRAPH)
        self.kind = GraphKind.Directed if header.kind is TokenKind.DIGRAPH else GraphKind.Undirected
        name = self.advance().value if self.peek().is_id else None
        opening = self.expect(TokenKind.LBRACE)
        statements = self.parse_stmt_list(opening)

        trailing = self.peek()
        if trailing.kind is TokenKind.RBRACE:
            raise DotSyntaxError(
                SyntaxErrorKind.UnmatchedBrace,
                "'}' does not close any '{'",
                trailing.position,
                (DESCRIPTIONS[TokenKind.EOF],),
            )
        if trailing.kind is not TokenKind.EOF:
            raise self.unexpected((TokenKind.EOF,))

        logger.debug(
            "parsed %s%s %r: %d statements",
            "strict " if strict else "",
            self.kind.keyword,
            name,
            self.statement_count,
        )
        return GraphTree(kind=self.kind, strict=strict, name=name, statements=statements)


class DotParser:
    """Parser for the DOT subset: source text to unvalidated syntax tree."""

    def __init__(self, config: ParseConfig | None = None) -> None:
        self.config = config or ParseConfig()

    def parse(self, src: str) -> GraphTree:
        cursor = _Cursor(tokenize(src), self.config)
        return cursor.parse_graph()
