#!/usr/bin/env python3
"""
Tests for graph analysis, segment enumeration and coordinate assignment.
"""

import numpy as np
import pytest

from spices.src.spices_compiler import compile_part
from spices.src.spices_coordinates import assign_coordinates, assign_structure_coordinates, chain_step
from spices.src.spices_graph import (
    depth_first_search,
    farthest,
    heuristic_diameter,
    orient_path,
    shortest_path,
)
from spices.src.spices_segments import enumerate_chains, enumerate_segments, merge_segments


# ==========================================================================
# Depth-first search and diameter
# ==========================================================================


def test_depth_first_search_follows_adjacency_order():
    # Triangle 0-1-2 plus tail 2-3
    adjacency = ((1, 2), (0, 2), (0, 1, 3), (2,))
    distance, parent = depth_first_search(adjacency, 0)
    # Pre-order: 0 -> 1 -> 2 -> 3
    assert distance == [0, 1, 2, 3]
    assert parent == [-1, 0, 1, 2]


def test_depth_first_search_handles_long_chains():
    count = 20000
    adjacency = tuple(
        tuple(n for n in (i - 1, i + 1) if 0 <= n < count) for i in range(count)
    )
    distance, _ = depth_first_search(adjacency, 0)
    assert distance[-1] == count - 1


def test_farthest_takes_first_maximum():
    assert farthest([0, 2, 1, 2]) == 1


def test_diameter_of_chain():
    unit = compile_part("A-B-C")
    assert unit.diameter() == (0, 1, 2)


def test_diameter_is_oriented_by_name():
    unit = compile_part("C-B-A")
    # Path runs from A (ordinal 2) to C (ordinal 0)
    assert unit.diameter() == (2, 1, 0)


def test_diameter_with_equal_end_names_starts_at_lower_ordinal():
    unit = compile_part("A-B-A")
    assert unit.diameter() == (0, 1, 2)


def test_diameter_of_branched_structure():
    unit = compile_part("A(B)C")
    path = unit.diameter()
    assert set(path) == {0, 1, 2}
    assert path[1] == 0
    assert unit.particle_names[path[0]] == "B"


def test_diameter_of_single_particle():
    assert heuristic_diameter(((),), ["A"]) == (0,)
    assert heuristic_diameter((), []) == ()


def test_orient_path():
    assert orient_path((3, 1), ["A", "Z", "B", "C"]) == (3, 1)
    assert orient_path((0, 2), ["B", "X", "A"]) == (2, 0)


# ==========================================================================
# Breadth-first START -> END path
# ==========================================================================


def test_tagged_path():
    unit = compile_part("A[START]-B(X-Y)-C[END]")
    assert unit.start == 0
    assert unit.end == 4
    assert unit.tagged_path() == (0, 1, 4)
    assert unit.main_chain() == (0, 1, 4)


def test_tagged_path_through_ring_is_shortest():
    unit = compile_part("A[START][1]-B-C-D-E[END][1]")
    assert unit.tagged_path() == (0, 4)


def test_shortest_path_edge_cases():
    adjacency = ((1,), (0,), ())
    assert shortest_path(adjacency, 0, 0) == (0,)
    assert shortest_path(adjacency, 0, 1) == (0, 1)
    assert shortest_path(adjacency, 0, 2) == ()


def test_no_tags_means_no_tagged_path():
    assert compile_part("A-B").tagged_path() == ()


# ==========================================================================
# Segments
# ==========================================================================


def test_segments_of_chain():
    unit = compile_part("A-B-C")
    assert unit.segments(3) == [["A", "B", "C"], ["A-B", "B-C"], ["A-B-C"]]


def test_segments_both_directions():
    unit = compile_part("A-B-C")
    segments = unit.segments(3, include_both_directions=True)
    assert segments[1] == ["A-B", "B-A", "B-C", "C-B"]
    assert segments[2] == ["A-B-C", "C-B-A"]


def test_segments_do_not_revisit_particles():
    unit = compile_part("A[1]-B-C[1]")
    chains = enumerate_chains(unit.adjacency, 4)
    assert chains[3] == []
    assert all(len(set(chain)) == len(chain) for chains_k in chains for chain in chains_k)


def test_segments_longer_than_structure_are_empty():
    assert compile_part("A-B").segments(4)[2:] == [[], []]


def test_segments_invalid_length():
    with pytest.raises(ValueError):
        enumerate_segments(((),), ["A"], 0)


def test_segments_custom_separator():
    unit = compile_part("A-B")
    assert unit.segments(2, separator="_") == [["A", "B"], ["A_B"]]


def test_merge_segments():
    merged = merge_segments([[["A"], ["A-B"]], [["B", "C"], ["A-B", "B-C"]]], 2)
    assert merged == [["A", "B", "C"], ["A-B", "B-C"]]


# ==========================================================================
# Coordinates
# ==========================================================================


def test_chain_uses_bond_length_when_anchors_are_far_apart():
    unit = compile_part("A-B-C")
    coordinates = unit.coordinates([0, 0, 0], [4, 0, 0], bond_length=1.5)
    assert coordinates.shape == (3, 3)
    np.testing.assert_allclose(coordinates[:, 0], [0.0, 1.5, 3.0])
    np.testing.assert_allclose(coordinates[:, 1:], 0.0)


def test_chain_is_compressed_when_anchors_are_close():
    unit = compile_part("A-B-C")
    coordinates = unit.coordinates([0, 0, 0], [2, 0, 0], bond_length=1.5)
    np.testing.assert_allclose(coordinates[:, 0], [0.0, 1.0, 2.0])


def test_side_chain_copies_attachment_point():
    unit = compile_part("A-B(X-Y)-C-D")
    coordinates = unit.coordinates([0, 0, 0], [10, 0, 0], bond_length=1.0)
    # Particles off the main chain share a main-chain position
    chain = unit.main_chain()
    assert len(chain) == 5
    for ordinal in range(unit.particle_count):
        assert any(np.allclose(coordinates[ordinal], coordinates[c]) for c in chain)


def test_start_end_override_main_chain():
    unit = compile_part("A[START]-B(X-Y-Z)-C[END]")
    coordinates = unit.coordinates([0, 0, 0], [0, 0, 10], bond_length=2.0)
    np.testing.assert_allclose(coordinates[0], [0, 0, 0])
    np.testing.assert_allclose(coordinates[1], [0, 0, 2])
    np.testing.assert_allclose(coordinates[5], [0, 0, 4])
    np.testing.assert_allclose(coordinates[4], [0, 0, 2])


def test_single_particle_sits_on_first_anchor():
    coordinates = assign_coordinates(((),), ["A"], [1, 2, 3], [4, 5, 6], 1.0)
    np.testing.assert_allclose(coordinates, [[1, 2, 3]])


def test_chain_step_degenerate():
    np.testing.assert_allclose(chain_step(np.zeros(3), np.zeros(3), 3, 1.0), np.zeros(3))
    np.testing.assert_allclose(chain_step(np.zeros(3), np.ones(3), 1, 1.0), np.zeros(3))


def test_assign_coordinates_rejects_bad_input():
    with pytest.raises(ValueError):
        assign_coordinates(((1,), (0,)), ["A", "B"], [0, 0], [1, 0, 0], 1.0)
    with pytest.raises(ValueError):
        assign_coordinates(((1,), (0,)), ["A", "B"], [0, 0, 0], [1, 0, 0], 0.0)


def test_structure_coordinates_per_anchor_set():
    parts = [compile_part("A-B"), compile_part("C")]
    arrays = assign_structure_coordinates(parts, [[0, 0, 0], [0, 5, 0]], [[1, 0, 0], [0, 6, 0]], 1.0)
    assert len(arrays) == 2
    assert arrays[0].shape == (3, 3)
    np.testing.assert_allclose(arrays[0][1], [1, 0, 0])
    np.testing.assert_allclose(arrays[1][2], [0, 5, 0])
    with pytest.raises(ValueError):
        assign_structure_coordinates(parts, [[0, 0, 0]], [], 1.0)
