#!/usr/bin/env python3
"""
SPICES Particle Indexer

Assigns ordinals to the particle and monomer tokens of an expanded stream and
resolves every tag (ring closure, backbone index, HEAD/TAIL/START/END) to the
particle it belongs to: the nearest preceding particle at the same branch
depth.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .spices_expander import ExpandedTokens
from .spices_tokens import Token, TokenKind


@dataclass(frozen=True)
class CurlySpan:
    """Token positions of one monomer span and its splice particles."""

    open_position: int
    close_position: int
    head: int
    tail: int


@dataclass(frozen=True)
class IndexedUnit:
    tokens: Tuple[Token, ...]
    multipliers: Tuple[int, ...]
    particle_positions: Tuple[int, ...]
    particle_names: Tuple[str, ...]
    particle_multipliers: Tuple[int, ...]
    ordinal_of: Tuple[int, ...]
    backbone_indices: Tuple[int, ...]
    ring_closures: Tuple[Tuple[int, int, int], ...]
    start: int
    end: int
    spans: Tuple[CurlySpan, ...]

    @property
    def particle_count(self) -> int:
        return len(self.particle_positions)


def tag_owner(tokens: Tuple[Token, ...], ordinal_of: Tuple[int, ...], tag_position: int) -> int:
    """
    Ordinal of the particle a tag attaches to.

    Scans backward from ``tag_position``, skipping closed branches, and returns
    the first particle at the tag's own depth, or -1 if there is none.
    """
    depth = 0
    for i in range(tag_position - 1, -1, -1):
        kind = tokens[i].kind
        if kind is TokenKind.NORMAL_CLOSE:
            depth += 1
        elif kind is TokenKind.NORMAL_OPEN:
            if depth == 0:
                return -1
            depth -= 1
        elif depth == 0 and ordinal_of[i] >= 0:
            return ordinal_of[i]
    return -1


def _span_ends(tokens, ordinal_of, open_position: int, close_position: int) -> Tuple[int, int]:
    head: Optional[int] = None
    tail: Optional[int] = None
    ordinals = [ordinal_of[i] for i in range(open_position + 1, close_position) if ordinal_of[i] >= 0]
    for i in range(open_position + 1, close_position):
        if tokens[i].kind is TokenKind.HEAD:
            head = tag_owner(tokens, ordinal_of, i)
        elif tokens[i].kind is TokenKind.TAIL:
            tail = tag_owner(tokens, ordinal_of, i)
    if head is None:
        head = ordinals[0]
    if tail is None:
        tail = ordinals[-1]
    return head, tail


def index_particles(expanded: ExpandedTokens) -> IndexedUnit:
    """
    Index the particles of an expanded token stream.

    Args:
        expanded: Output of expand_tokens()

    Returns:
        IndexedUnit with ring closures as (label, first ordinal, second ordinal)
        triples, paired by occurrence order per label
    """
    tokens = expanded.tokens
    ordinal_of: List[int] = []
    positions: List[int] = []
    for i, token in enumerate(tokens):
        if token.is_particle:
            ordinal_of.append(len(positions))
            positions.append(i)
        else:
            ordinal_of.append(-1)
    ordinal_tuple = tuple(ordinal_of)

    backbone = [0] * len(positions)
    start = end = -1
    open_rings: Dict[int, int] = {}
    rings: List[Tuple[int, int, int]] = []
    spans: List[CurlySpan] = []
    open_position: Optional[int] = None

    for i, token in enumerate(tokens):
        kind = token.kind
        if kind is TokenKind.BACKBONE_INDEX:
            backbone[tag_owner(tokens, ordinal_tuple, i)] = token.value
        elif kind is TokenKind.START:
            start = tag_owner(tokens, ordinal_tuple, i)
        elif kind is TokenKind.END:
            end = tag_owner(tokens, ordinal_tuple, i)
        elif kind is TokenKind.RING_CLOSURE:
            owner = tag_owner(tokens, ordinal_tuple, i)
            if token.value in open_rings:
                rings.append((token.value, open_rings.pop(token.value), owner))
            else:
                open_rings[token.value] = owner
        elif kind is TokenKind.CURLY_OPEN:
            open_position = i
        elif kind is TokenKind.CURLY_CLOSE and open_position is not None:
            head, tail = _span_ends(tokens, ordinal_tuple, open_position, i)
            spans.append(CurlySpan(open_position, i, head, tail))
            open_position = None

    return IndexedUnit(
        tokens=tokens,
        multipliers=expanded.multipliers,
        particle_positions=tuple(positions),
        particle_names=tuple(tokens[p].text for p in positions),
        particle_multipliers=tuple(expanded.multipliers[p] for p in positions),
        ordinal_of=ordinal_tuple,
        backbone_indices=tuple(backbone),
        ring_closures=tuple(rings),
        start=start,
        end=end,
        spans=tuple(spans),
    )


__all__ = ["CurlySpan", "IndexedUnit", "tag_owner", "index_particles"]
