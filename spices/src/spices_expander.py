#!/usr/bin/env python3
"""
SPICES Structure Expander

Rewrites repeat shorthand in a validated token stream:

* ``3A`` becomes ``A-A-A`` (the tags following A stay with the last copy)
* ``2{...}`` repeats the whole curly span verbatim, braces included

Repeats compose: a particle repeat inside a repeated span is expanded in every
copy, and each emitted token records the product of the repeat counts that
enclose it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .spices_tokens import Token, TokenKind, connection_token


@dataclass(frozen=True)
class ExpandedTokens:
    """Fully expanded token stream with the repeat multiplier of each token."""

    tokens: Tuple[Token, ...]
    multipliers: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.tokens)

    @property
    def particle_count(self) -> int:
        return sum(1 for token in self.tokens if token.is_particle)


def _matching_curly_close(tokens: Sequence[Token], open_index: int) -> int:
    for i in range(open_index + 1, len(tokens)):
        if tokens[i].kind is TokenKind.CURLY_CLOSE:
            return i
    raise ValueError(f"Unclosed curly bracket at token {open_index}")


def _expand_into(tokens: Sequence[Token], multiplier: int, out_tokens: List[Token], out_multipliers: List[int]) -> None:
    i = 0
    while i < len(tokens):
        token = tokens[i]
        following = tokens[i + 1] if i + 1 < len(tokens) else None
        if token.kind is TokenKind.NUMBER and following is not None:
            repeat = token.value
            if following.kind is TokenKind.CURLY_OPEN:
                close_index = _matching_curly_close(tokens, i + 1)
                span = tokens[i + 1:close_index + 1]
                for _ in range(repeat):
                    _expand_into(span, multiplier * repeat, out_tokens, out_multipliers)
                i = close_index + 1
                continue
            if following.is_particle:
                for copy in range(repeat):
                    if copy:
                        out_tokens.append(connection_token(following.position))
                        out_multipliers.append(multiplier * repeat)
                    out_tokens.append(following)
                    out_multipliers.append(multiplier * repeat)
                i += 2
                continue
        out_tokens.append(token)
        out_multipliers.append(multiplier)
        i += 1


def expand_tokens(tokens: Sequence[Token]) -> ExpandedTokens:
    """
    Expand numeric and curly-bracket repeats.

    Args:
        tokens: Validated token stream of one part

    Returns:
        ExpandedTokens without any NUMBER tokens left
    """
    out_tokens: List[Token] = []
    out_multipliers: List[int] = []
    _expand_into(tuple(tokens), 1, out_tokens, out_multipliers)
    return ExpandedTokens(tuple(out_tokens), tuple(out_multipliers))


__all__ = ["ExpandedTokens", "expand_tokens"]
