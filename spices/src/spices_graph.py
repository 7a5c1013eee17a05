#!/usr/bin/env python3
"""
SPICES Graph Analyzer

Traversals over a particle adjacency list (tuple of sorted neighbour tuples,
indexed by particle ordinal):

* depth_first_search: iterative pre-order DFS in adjacency order
* heuristic_diameter: double DFS, oriented by particle name
* shortest_path: BFS between two ordinals (START -> END)
"""

from __future__ import annotations

from collections import deque
from typing import List, Sequence, Tuple

Adjacency = Sequence[Sequence[int]]


def depth_first_search(adjacency: Adjacency, source: int) -> Tuple[List[int], List[int]]:
    """
    Depth-first search from ``source`` with an explicit stack.

    Visits neighbours in adjacency order, exactly as the recursive pre-order
    traversal would.

    Returns:
        (distance, parent): hop count in the DFS tree (-1 if unreachable) and
        parent ordinal (-1 for the source and unreachable particles)
    """
    count = len(adjacency)
    distance = [-1] * count
    parent = [-1] * count
    distance[source] = 0
    stack = [(source, 0)]
    while stack:
        node, cursor = stack[-1]
        neighbors = adjacency[node]
        if cursor < len(neighbors):
            stack[-1] = (node, cursor + 1)
            candidate = neighbors[cursor]
            if distance[candidate] < 0:
                distance[candidate] = distance[node] + 1
                parent[candidate] = node
                stack.append((candidate, 0))
        else:
            stack.pop()
    return distance, parent


def farthest(distance: Sequence[int]) -> int:
    """First ordinal with the largest distance."""
    best = 0
    for i, d in enumerate(distance):
        if d > distance[best]:
            best = i
    return best


def trace_path(parent: Sequence[int], source: int, target: int) -> Tuple[int, ...]:
    path = [target]
    while path[-1] != source:
        previous = parent[path[-1]]
        if previous < 0:
            return ()
        path.append(previous)
    path.reverse()
    return tuple(path)


def orient_path(path: Tuple[int, ...], names: Sequence[str]) -> Tuple[int, ...]:
    """Put the end with the lexically smaller particle name (then ordinal) first."""
    if len(path) < 2:
        return path
    first, last = path[0], path[-1]
    if (names[first], first) > (names[last], last):
        return tuple(reversed(path))
    return path


def heuristic_diameter(adjacency: Adjacency, names: Sequence[str]) -> Tuple[int, ...]:
    """
    Approximate longest path by double depth-first search.

    Exact on trees; on cyclic graphs it is the DFS-tree path between the two
    farthest particles found.

    Args:
        adjacency: Particle adjacency list
        names: Particle names, used to orient the result

    Returns:
        Particle ordinals along the path
    """
    if not adjacency:
        return ()
    if len(adjacency) == 1:
        return (0,)
    distance, _ = depth_first_search(adjacency, 0)
    source = farthest(distance)
    distance, parent = depth_first_search(adjacency, source)
    target = farthest(distance)
    return orient_path(trace_path(parent, source, target), names)


def shortest_path(adjacency: Adjacency, start: int, end: int) -> Tuple[int, ...]:
    """
    Breadth-first path from ``start`` to ``end``.

    The first path found in adjacency order wins. Returns an empty tuple when
    ``end`` is unreachable.
    """
    if start == end:
        return (start,)
    parent = [-1] * len(adjacency)
    visited = [False] * len(adjacency)
    visited[start] = True
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for candidate in adjacency[node]:
            if visited[candidate]:
                continue
            visited[candidate] = True
            parent[candidate] = node
            if candidate == end:
                return trace_path(parent, start, end)
            queue.append(candidate)
    return ()


__all__ = [
    "Adjacency",
    "depth_first_search",
    "farthest",
    "trace_path",
    "orient_path",
    "heuristic_diameter",
    "shortest_path",
]
