#!/usr/bin/env python3
"""
SPICES Segment Enumerator

Enumerates connected particle chains ("n-mers") of length 1..max_length as
name strings joined by a separator. Chains never revisit a particle; unless
both directions are requested a chain and its reverse collapse onto the
variant whose first name is not greater than its last name.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .spices_graph import Adjacency


def _render(chain: Sequence[int], names: Sequence[str], both_directions: bool, separator: str) -> str:
    labels = [names[i] for i in chain]
    if not both_directions and labels[0] > labels[-1]:
        labels.reverse()
    return separator.join(labels)


def _unique(items: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def enumerate_chains(adjacency: Adjacency, max_length: int) -> List[List[Tuple[int, ...]]]:
    """
    Directed chains of particle ordinals, grouped by length.

    Length-1 chains are single particles, length-2 chains are directed edges,
    longer chains extend their predecessors by one unvisited neighbour.
    Chains that end in a terminal particle are not extended.
    """
    if max_length < 1:
        raise ValueError(f"max_length must be at least 1, got {max_length}")
    chains: List[List[Tuple[int, ...]]] = [[(i,) for i in range(len(adjacency))]]
    for _length in range(2, max_length + 1):
        extended: List[Tuple[int, ...]] = []
        for chain in chains[-1]:
            last = chain[-1]
            if len(chain) > 1 and len(adjacency[last]) == 1:
                continue
            for candidate in adjacency[last]:
                if candidate not in chain:
                    extended.append(chain + (candidate,))
        chains.append(extended)
    return chains


def enumerate_segments(
    adjacency: Adjacency,
    names: Sequence[str],
    max_length: int,
    include_both_directions: bool = False,
    separator: str = "-",
) -> List[List[str]]:
    """
    Segment strings grouped by length.

    Args:
        adjacency: Particle adjacency list
        names: Particle names by ordinal
        max_length: Longest segment length, at least 1
        include_both_directions: Keep a chain and its reverse as distinct entries
        separator: String placed between particle names

    Returns:
        List whose entry k-1 holds the distinct length-k segments in
        first-seen order
    """
    return [
        _unique(_render(chain, names, include_both_directions, separator) for chain in chains)
        for chains in enumerate_chains(adjacency, max_length)
    ]


def merge_segments(per_part: Sequence[List[List[str]]], max_length: int) -> List[List[str]]:
    """Concatenate per-part segment lists length by length, keeping first occurrences."""
    merged: List[List[str]] = []
    for k in range(max_length):
        merged.append(_unique(segment for part in per_part for segment in part[k]))
    return merged


__all__ = ["enumerate_chains", "enumerate_segments", "merge_segments"]
