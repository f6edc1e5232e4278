"""Centralized configuration for simpledot."""

from __future__ import annotations

from dataclasses import dataclass

# Upper bound for max_nesting_depth; deeper limits overflow the interpreter stack.
MAX_NESTING_DEPTH = 100


@dataclass(frozen=True)
class ParseConfig:
    """Limits applied to a single parse call."""

    max_nesting_depth: int = 64
    max_input_length: int | None = None

    def __post_init__(self) -> None:
        if not 1 <= self.max_nesting_depth <= MAX_NESTING_DEPTH:
            raise ValueError(
                f"max_nesting_depth must be between 1 and {MAX_NESTING_DEPTH}, got {self.max_nesting_depth}"
            )
        if self.max_input_length is not None and self.max_input_length < 0:
            raise ValueError(f"max_input_length must not be negative, got {self.max_input_length}")
