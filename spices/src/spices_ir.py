#!/usr/bin/env python3
"""
SPICES Intermediate Representation

Immutable values passed between the pipeline stages:

* TokenStream: front-end result for one part (tokens + validation context)
* ParsedUnit: fully connected part, shared by every occurrence of the part
* ParticleFrequency: particle name with its occurrence count
* CompositeStructure: the whole input, either valid with its parts and
  particle matrix or invalid with exactly one error code
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

import numpy as np

from core.dataclass import DSLProgram

from .spices_coordinates import assign_coordinates, assign_structure_coordinates, format_coordinate, main_chain
from .spices_errors import ErrorCode
from .spices_graph import heuristic_diameter, shortest_path
from .spices_segments import enumerate_segments, merge_segments
from .spices_tokens import Token, TokenKind
from .spices_validator import validate_tokens

Point = Tuple[float, float, float]


# ==========================================================================
# Front-End Program
# ==========================================================================


@dataclass(frozen=True)
class TokenStream(DSLProgram):
    """Tokens of one part together with the context they are validated in."""

    text: str
    tokens: Tuple[Token, ...]
    is_monomer: bool = False
    available_particles: Optional[FrozenSet[str]] = None

    def validate(self) -> None:
        validate_tokens(self.tokens, self.is_monomer, self.available_particles)


# ==========================================================================
# Parsed Part
# ==========================================================================


@dataclass(frozen=True)
class ParsedUnit:
    """One connected part, immutable and safe to share between occurrences."""

    text: str
    tokens: Tuple[Token, ...]
    expanded_tokens: Tuple[Token, ...]
    particle_names: Tuple[str, ...]
    particle_positions: Tuple[int, ...]
    particle_multipliers: Tuple[int, ...]
    ordinal_of: Tuple[int, ...]
    backbone_indices: Tuple[int, ...]
    ring_closures: Tuple[Tuple[int, int, int], ...]
    edges: Tuple[Tuple[int, int], ...]
    adjacency: Tuple[Tuple[int, ...], ...]
    start: int = -1
    end: int = -1

    @property
    def particle_count(self) -> int:
        return len(self.particle_names)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    @property
    def degrees(self) -> Tuple[int, ...]:
        return tuple(len(neighbors) for neighbors in self.adjacency)

    @property
    def max_degree(self) -> int:
        return max(self.degrees, default=0)

    @property
    def terminal(self) -> Tuple[bool, ...]:
        """Degree-1 flag per particle."""
        return tuple(len(neighbors) == 1 for neighbors in self.adjacency)

    @property
    def monomers(self) -> Tuple[str, ...]:
        return _unique_monomers(self.tokens)

    def diameter(self) -> Tuple[int, ...]:
        return heuristic_diameter(self.adjacency, self.particle_names)

    def tagged_path(self) -> Tuple[int, ...]:
        """START -> END path, empty when the part has no START/END."""
        if self.start < 0 or self.end < 0:
            return ()
        return shortest_path(self.adjacency, self.start, self.end)

    def main_chain(self) -> Tuple[int, ...]:
        return tuple(main_chain(self.adjacency, self.particle_names, self.start, self.end))

    def segments(self, max_length: int, include_both_directions: bool = False, separator: str = "-") -> List[List[str]]:
        return enumerate_segments(self.adjacency, self.particle_names, max_length, include_both_directions, separator)

    def coordinates(self, first, last, bond_length: float = 1.0) -> np.ndarray:
        return assign_coordinates(self.adjacency, self.particle_names, first, last, bond_length, self.start, self.end)


def _unique_monomers(tokens: Sequence[Token]) -> Tuple[str, ...]:
    names: List[str] = []
    for token in tokens:
        if token.kind is TokenKind.MONOMER and token.text not in names:
            names.append(token.text)
    return tuple(names)


@dataclass(frozen=True, order=True)
class ParticleFrequency:
    particle: str
    frequency: int


# ==========================================================================
# Composite Structure
# ==========================================================================


@dataclass(frozen=True)
class CompositeStructure:
    """
    Result of parsing a complete SPICES input.

    ``parts`` holds one ParsedUnit per part occurrence (repeated parts refer
    to the same object). ``coordinates`` holds one tuple of points per anchor
    pair when coordinates were requested.
    """

    text: str
    is_valid: bool
    error: Optional[ErrorCode] = None
    error_position: Optional[int] = None
    structure_tokens: Tuple[Token, ...] = ()
    parts: Tuple[ParsedUnit, ...] = ()
    start_index: int = 1
    coordinates: Tuple[Tuple[Point, ...], ...] = ()
    bond_length: float = 1.0
    segment_separator: str = "-"

    # ----------------------------------------------------------------------
    # Validity
    # ----------------------------------------------------------------------

    @property
    def error_message(self) -> str:
        return self.error.message if self.error is not None else ""

    # ----------------------------------------------------------------------
    # Parts and particles
    # ----------------------------------------------------------------------

    @property
    def part_texts(self) -> Tuple[str, ...]:
        return tuple(part.text for part in self.parts)

    @property
    def unique_parts(self) -> Tuple[ParsedUnit, ...]:
        unique: Dict[str, ParsedUnit] = {}
        for part in self.parts:
            unique.setdefault(part.text, part)
        return tuple(unique.values())

    @property
    def part_offsets(self) -> Tuple[int, ...]:
        offsets = []
        total = 0
        for part in self.parts:
            offsets.append(total)
            total += part.particle_count
        return tuple(offsets)

    @property
    def has_multiple_parts(self) -> bool:
        return len(self.parts) > 1

    @property
    def particle_count(self) -> int:
        return sum(part.particle_count for part in self.parts)

    @property
    def display_particle_count(self) -> int:
        """Particle tokens of the input as written, monomers excluded."""
        return sum(1 for token in self.structure_tokens if token.kind is TokenKind.PARTICLE)

    @property
    def particle_names(self) -> Tuple[str, ...]:
        return tuple(name for part in self.parts for name in part.particle_names)

    @property
    def backbone_indices(self) -> Tuple[int, ...]:
        return tuple(index for part in self.parts for index in part.backbone_indices)

    @property
    def max_backbone_index(self) -> int:
        return max(self.backbone_indices, default=0)

    @property
    def has_backbone(self) -> bool:
        return self.max_backbone_index > 0

    @property
    def monomers(self) -> Tuple[str, ...]:
        return _unique_monomers(self.structure_tokens)

    @property
    def max_degree(self) -> int:
        return max((part.max_degree for part in self.parts), default=0)

    def global_adjacency(self) -> Tuple[Tuple[int, ...], ...]:
        """Adjacency list over global ordinals."""
        adjacency = []
        for offset, part in zip(self.part_offsets, self.parts):
            adjacency.extend(tuple(offset + n for n in neighbors) for neighbors in part.adjacency)
        return tuple(adjacency)

    # ----------------------------------------------------------------------
    # Frequencies
    # ----------------------------------------------------------------------

    @property
    def frequency_map(self) -> Dict[str, int]:
        return dict(Counter(self.particle_names))

    @property
    def frequencies(self) -> Tuple[ParticleFrequency, ...]:
        return tuple(sorted(ParticleFrequency(name, count) for name, count in self.frequency_map.items()))

    def frequency_of(self, particle: str) -> int:
        return self.frequency_map.get(particle, 0)

    def has_particle(self, particle: str) -> bool:
        return particle in self.frequency_map

    # ----------------------------------------------------------------------
    # Matrix
    # ----------------------------------------------------------------------

    @property
    def matrix(self) -> Tuple[Tuple[str, ...], ...]:
        """
        One row per particle: number, name, backbone index, x, y, z, then the
        neighbour offsets relative to the particle. Repeated per coordinate set
        with continuous numbering.
        """
        if not self.is_valid:
            return ()
        coordinate_sets = self.coordinates or (None,)
        total = self.particle_count
        rows = []
        for block, points in enumerate(coordinate_sets):
            number = self.start_index + block * total
            for offset, part in zip(self.part_offsets, self.parts):
                for local, name in enumerate(part.particle_names):
                    point = points[offset + local] if points is not None else (None, None, None)
                    rows.append(
                        (str(number), name, str(part.backbone_indices[local]))
                        + tuple(format_coordinate(value) for value in point)
                        + tuple(str(neighbor - local) for neighbor in part.adjacency[local])
                    )
                    number += 1
        return tuple(rows)

    # ----------------------------------------------------------------------
    # Analysis
    # ----------------------------------------------------------------------

    def segments(self, max_length: int, include_both_directions: bool = False) -> List[List[str]]:
        """Distinct segments of length 1..max_length over all parts."""
        per_part = [
            part.segments(max_length, include_both_directions, self.segment_separator)
            for part in self.unique_parts
        ]
        if not per_part:
            if max_length < 1:
                raise ValueError(f"max_length must be at least 1, got {max_length}")
            return [[] for _ in range(max_length)]
        return merge_segments(per_part, max_length)

    def particle_coordinates(self, first_points, last_points, bond_length: Optional[float] = None) -> List[np.ndarray]:
        """
        Coordinates of all particles, one (particle_count, 3) array per anchor pair.

        A single point may be given instead of a list of points.
        """
        if not self.is_valid:
            return []
        first_points = point_list(first_points)
        last_points = point_list(last_points)
        return assign_structure_coordinates(
            self.parts, first_points, last_points, self.bond_length if bond_length is None else bond_length
        )


def point_list(points) -> List[np.ndarray]:
    array = np.asarray(points, dtype=float)
    if array.ndim == 1:
        array = array.reshape(1, -1)
    return [row for row in array]


__all__ = [
    "Point",
    "TokenStream",
    "ParsedUnit",
    "ParticleFrequency",
    "CompositeStructure",
    "point_list",
]
