#!/usr/bin/env python3
"""
SPICES Token Model

Tagged-union token type produced once by the tokenizer and matched on by every
later stage (validator, expander, indexer, connectivity builder).

* TokenKind enumerates structural kinds plus the diagnostic kinds used for
  malformed lexemes that the validator reports with a specific error code
* Token is immutable so that token tuples can be cached and shared
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional


MAX_PARTICLE_NAME_LENGTH = 10


# ==========================================================================
# Token Kinds
# ==========================================================================


class TokenKind(Enum):
    PARTICLE = "particle"
    MONOMER = "monomer"
    NUMBER = "number"
    CONNECTION = "-"
    NORMAL_OPEN = "("
    NORMAL_CLOSE = ")"
    CURLY_OPEN = "{"
    CURLY_CLOSE = "}"
    ANGLE_OPEN = "<"
    ANGLE_CLOSE = ">"
    RING_CLOSURE = "ring_closure"
    HEAD = "[HEAD]"
    TAIL = "[TAIL]"
    START = "[START]"
    END = "[END]"
    BACKBONE_INDEX = "backbone_index"

    # Malformed lexemes
    UNKNOWN = "unknown"
    INVALID_TAG = "invalid_tag"
    INVALID_BACKBONE = "invalid_backbone"
    SQUARE_OPEN = "["
    SQUARE_CLOSE = "]"
    QUOTE = "'"


PARTICLE_KINDS: FrozenSet[TokenKind] = frozenset({TokenKind.PARTICLE, TokenKind.MONOMER})

TAG_KINDS: FrozenSet[TokenKind] = frozenset({
    TokenKind.RING_CLOSURE,
    TokenKind.HEAD,
    TokenKind.TAIL,
    TokenKind.START,
    TokenKind.END,
})

# Every token that involves square brackets, well formed or not
SQUARE_KINDS: FrozenSet[TokenKind] = TAG_KINDS | {
    TokenKind.INVALID_TAG,
    TokenKind.SQUARE_OPEN,
    TokenKind.SQUARE_CLOSE,
}

BACKBONE_KINDS: FrozenSet[TokenKind] = frozenset({
    TokenKind.BACKBONE_INDEX,
    TokenKind.INVALID_BACKBONE,
    TokenKind.QUOTE,
})

TAG_KEYWORDS = {
    "HEAD": TokenKind.HEAD,
    "TAIL": TokenKind.TAIL,
    "START": TokenKind.START,
    "END": TokenKind.END,
}


# ==========================================================================
# Token
# ==========================================================================


@dataclass(frozen=True)
class Token:
    """A classified lexeme.

    ``value`` holds the integer payload of NUMBER, RING_CLOSURE and
    BACKBONE_INDEX tokens; ``position`` is the offset in the whitespace-free
    input.
    """

    kind: TokenKind
    text: str
    value: Optional[int] = None
    position: int = 0

    @property
    def is_particle(self) -> bool:
        """Particle or monomer, i.e. something that receives an ordinal."""
        return self.kind in PARTICLE_KINDS

    @property
    def name(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


def connection_token(position: int = 0) -> Token:
    return Token(TokenKind.CONNECTION, "-", None, position)


def render_tokens(tokens) -> str:
    """Join tokens back into notation text."""
    return "".join(token.text for token in tokens)


__all__ = [
    "MAX_PARTICLE_NAME_LENGTH",
    "TokenKind",
    "PARTICLE_KINDS",
    "TAG_KINDS",
    "SQUARE_KINDS",
    "BACKBONE_KINDS",
    "TAG_KEYWORDS",
    "Token",
    "connection_token",
    "render_tokens",
]
