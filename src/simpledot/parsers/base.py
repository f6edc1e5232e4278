"""Base parser protocol."""

from __future__ import annotations

from typing import Protocol

from simpledot.syntax.types import GraphTree


class Parser(Protocol):
    """Protocol that all syntax-stage parsers must implement."""

    def parse(self, src: str) -> GraphTree:
        """Parse source text into an unvalidated syntax tree."""
        ...
