#!/usr/bin/env python3
"""
SPICES Connectivity Builder

Derives bonds from an indexed token stream:

* sequential neighbours (explicit '-' or implicit adjacency) are bonded
* '(' remembers the attachment particle, ')' restores it
* a monomer span is spliced in through its HEAD and continues from its TAIL
* paired ring-closure tags add the remaining bonds

The adjacency list is symmetric and sorted ascending per particle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from .spices_indexer import IndexedUnit
from .spices_tokens import TokenKind

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]


@dataclass(frozen=True)
class Connectivity:
    edges: Tuple[Edge, ...]
    adjacency: Tuple[Tuple[int, ...], ...]

    @property
    def degrees(self) -> Tuple[int, ...]:
        return tuple(len(neighbors) for neighbors in self.adjacency)

    @property
    def terminal(self) -> Tuple[bool, ...]:
        return tuple(len(neighbors) == 1 for neighbors in self.adjacency)


def series_edges(left: int, left_count: int, right: int, right_count: int) -> List[Edge]:
    """
    Edges between a left particle repeated ``left_count`` times and a right
    particle repeated ``right_count`` times, consecutive ordinals per copy.

    Each left copy connects to ``right_count // left_count`` right copies.
    """
    per_left = max(right_count // max(left_count, 1), 1)
    edges: List[Edge] = []
    for k in range(left_count):
        for r in range(per_left):
            edges.append((left + k, right + k * per_left + r))
    return edges


def build_connectivity(unit: IndexedUnit) -> Connectivity:
    """
    Build bonds for one indexed part.

    After expansion every particle token stands for one particle, so each
    adjacent pair contributes exactly one edge.
    """
    edges: Set[Edge] = set()

    def bond(a: int, b: int) -> None:
        if a == b:
            return
        for left, right in series_edges(a, 1, b, 1):
            edges.add((min(left, right), max(left, right)))

    previous: Optional[int] = None
    branch_stack: List[Optional[int]] = []
    spans = iter(unit.spans)
    span = None
    for i, token in enumerate(unit.tokens):
        kind = token.kind
        if token.is_particle:
            ordinal = unit.ordinal_of[i]
            if previous is not None:
                bond(previous, ordinal)
            previous = ordinal
        elif kind is TokenKind.NORMAL_OPEN:
            branch_stack.append(previous)
        elif kind is TokenKind.NORMAL_CLOSE:
            previous = branch_stack.pop()
        elif kind is TokenKind.CURLY_OPEN:
            span = next(spans)
            if previous is not None:
                bond(previous, span.head)
            previous = None
        elif kind is TokenKind.CURLY_CLOSE:
            previous = span.tail

    for _label, first, second in unit.ring_closures:
        bond(first, second)

    adjacency: List[List[int]] = [[] for _ in range(unit.particle_count)]
    for a, b in edges:
        adjacency[a].append(b)
        adjacency[b].append(a)
    logger.debug("Built %d edges for %d particles", len(edges), unit.particle_count)
    return Connectivity(
        edges=tuple(sorted(edges)),
        adjacency=tuple(tuple(sorted(neighbors)) for neighbors in adjacency),
    )


__all__ = ["Edge", "Connectivity", "series_edges", "build_connectivity"]
