#!/usr/bin/env python3
"""
SPICES Coordinate Assigner

Places the particles of one part on a straight line between two anchor
points:

* the main chain (START -> END path, otherwise the oriented heuristic
  diameter) is laid out from the first anchor towards the last anchor
* the spacing is the bond length, compressed when the anchors are closer
  than the chain would need
* side-chain particles take the position of the main-chain particle they
  branch from
"""

from __future__ import annotations

from collections import deque
from typing import List, Optional, Sequence

import numpy as np

from .spices_graph import Adjacency, heuristic_diameter, shortest_path


def as_point(point) -> np.ndarray:
    """Convert a 3-sequence to a float vector."""
    vector = np.asarray(point, dtype=float)
    if vector.shape != (3,):
        raise ValueError(f"Expected a point with 3 coordinates, got shape {vector.shape}")
    return vector


def main_chain(adjacency: Adjacency, names: Sequence[str], start: int = -1, end: int = -1):
    """START -> END path when both are tagged and connected, else the diameter."""
    if start >= 0 and end >= 0:
        path = shortest_path(adjacency, start, end)
        if path:
            return path
    return heuristic_diameter(adjacency, names)


def chain_step(first: np.ndarray, last: np.ndarray, chain_length: int, bond_length: float) -> np.ndarray:
    """Displacement between consecutive main-chain particles."""
    if chain_length < 2:
        return np.zeros(3)
    delta = last - first
    distance = float(np.linalg.norm(delta))
    if distance < (chain_length - 1) * bond_length:
        return delta / (chain_length - 1)
    return delta * (bond_length / distance)


def assign_coordinates(
    adjacency: Adjacency,
    names: Sequence[str],
    first,
    last,
    bond_length: float,
    start: int = -1,
    end: int = -1,
) -> np.ndarray:
    """
    Coordinates for every particle of one part.

    Args:
        adjacency: Particle adjacency list
        names: Particle names by ordinal
        first: Anchor of the first main-chain particle
        last: Anchor towards which the main chain is laid out
        bond_length: Preferred distance between bonded main-chain particles
        start: START ordinal or -1
        end: END ordinal or -1

    Returns:
        Array of shape (particle_count, 3)
    """
    first = as_point(first)
    last = as_point(last)
    if bond_length <= 0:
        raise ValueError(f"bond_length must be positive, got {bond_length}")
    count = len(adjacency)
    coordinates = np.tile(first, (count, 1))
    if count <= 1:
        return coordinates

    chain = main_chain(adjacency, names, start, end)
    step = chain_step(first, last, len(chain), bond_length)
    placed = [False] * count
    queue = deque()
    for i, ordinal in enumerate(chain):
        coordinates[ordinal] = first + i * step
        placed[ordinal] = True
        queue.append(ordinal)

    # Side chains inherit the position of their attachment particle
    while queue:
        node = queue.popleft()
        for candidate in adjacency[node]:
            if not placed[candidate]:
                coordinates[candidate] = coordinates[node]
                placed[candidate] = True
                queue.append(candidate)
    return coordinates


def assign_structure_coordinates(
    parts,
    first_points: Sequence,
    last_points: Sequence,
    bond_length: float,
) -> List[np.ndarray]:
    """
    Coordinates for a multi-part structure, one array per anchor pair.

    Args:
        parts: ParsedUnit per part occurrence, in global order
        first_points: First anchors, one per coordinate set
        last_points: Last anchors, same length as first_points
        bond_length: Preferred bond length

    Returns:
        List of (total_particle_count, 3) arrays
    """
    if len(first_points) != len(last_points):
        raise ValueError("first_points and last_points must have the same length")
    total = sum(part.particle_count for part in parts)
    result: List[np.ndarray] = []
    for first, last in zip(first_points, last_points):
        if total == 1:
            result.append(as_point(first).reshape(1, 3))
            continue
        blocks = [
            assign_coordinates(part.adjacency, part.particle_names, first, last, bond_length, part.start, part.end)
            for part in parts
        ]
        result.append(np.vstack(blocks) if blocks else np.zeros((0, 3)))
    return result


def format_coordinate(value: Optional[float]) -> str:
    return "" if value is None else str(float(value))


__all__ = [
    "as_point",
    "main_chain",
    "chain_step",
    "assign_coordinates",
    "assign_structure_coordinates",
    "format_coordinate",
]
