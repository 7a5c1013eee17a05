#!/usr/bin/env python3
"""
Tests for the SPICES grammar validator and the outer part checks.

Valid structures must parse; every invalid structure must fail with its
specific error code and produce no particle matrix.
"""

import pytest

from spices.src.spices_composer import parse_spices
from spices.src.spices_errors import ErrorCode, SpicesValidationError
from spices.src.spices_parser import tokenize
from spices.src.spices_tokens import TokenKind
from spices.src.spices_validator import (
    ADJACENCY_RULES,
    adjacency_error,
    curly_spans,
    find_error,
    top_level_regions,
    validate_tokens,
)

E = ErrorCode

VALID_STRUCTURES = [
    "3<A>2<A><C-C-C>50<D>",
    "1A-1A-1A",
    "3A",
    "4A-B-B-4C",
    "{A[HEAD]-B-B-3C[TAIL]}",
    "Y-2{A-B[HEAD]-B-3C[TAIL]}-Z",
    "{C[TAIL]-A[HEAD]-B}{E-D[HEAD]-F[TAIL]}-G",
    "A-B(C1)(C2-D)(C3-D)-D",
    "<(A-B[1]-C-D)(A-B-C[1]-D)>",
    "(A[1]-B)(B-A[1])",
    "A[1]-B[1]",
    "A[1][2]-B-C-D[1][2]",
    "A-B-{2A[HEAD]-B[TAIL]}-B",
    "A-#MyMonomer",
    "#MyMonomer",
    "A[START]-B-C[END]",
    "3A[START]-B-C[END]",
    "A[1][START]-B-C[END][1]",
    "H2O-C6H5OH",
    "A'1'-B'2'",
    "10A'1'-B-C'2'",
    "A(B)C",
    "A[1]B-C[1]",
    "2{AB}",
    "<A><B>",
    "A-BBBB-A",
    "A-AAAA-B",
    "3ALA(B)-D",
    "MeAcNHBB-CisButene-TriMeNH2",
    "Methan(EtAcetate-14Methan)-Methan(EtAcetate-6Methan-CisButen-8Methan)-Methan-DMP-Ethylamin",
    "A-B-C",
]

INVALID_STRUCTURES = [
    ("A*-A", E.INVALID_CHARACTER),
    ("A B", E.INVALID_WHITE_SPACE),
    ("", E.NO_TOKENS),
    ("0A", E.INVALID_FIRST_CHARACTER_OF_STRUCTURE),
    ("{0A-A[HEAD]-B[TAIL]}", E.INVALID_FIRST_CHARACTER_OF_MONOMER),
    ("-A", E.INVALID_FIRST_CHARACTER_OF_STRUCTURE),
    ("A-", E.INVALID_LAST_CHARACTER_OF_STRUCTURE),
    ("A-2{(A)-B[HEAD]-B[TAIL]}", E.INVALID_PARTICLE_AFTER_NORMAL_CLOSING_BRACKET),
    ("(A-B)A", E.INVALID_PARTICLE_AFTER_NORMAL_CLOSING_BRACKET),
    ("(A-B)-A", E.INVALID_PARTICLE_AFTER_NORMAL_CLOSING_BRACKET),
    ("(A-B)(D-E)-A", E.INVALID_PARTICLE_AFTER_NORMAL_CLOSING_BRACKET),
    ("123", E.INVALID_PARTICLE_NAME),
    ("ASDFGJOCKELMENOCKEL", E.INVALID_PARTICLE_NAME),
    ("ABCDEFGHIJK", E.INVALID_PARTICLE_NAME),
    ("A-ABCDEFGHIJK-B", E.INVALID_PARTICLE_NAME),
    ("A-B{A[HEAD]-B[TAIL]}-A-B", E.MISSING_A_CONNECTION_PRIOR_CURLY_OPENING_BRACKET),
    ("A-2(B-A-B)-B-A-B", E.INVALID_PARTICLE_PRIOR_NORMAL_BRACKET),
    ("3(A)", E.INVALID_PARTICLE_PRIOR_NORMAL_BRACKET),
    ("A-#B#D-A", E.MONOMER_AFTER_MONOMER),
    ("A-{A[HEAD]-#Hugo-B[TAIL]}-A", E.MONOMER_IN_MONOMER),
    ("A-#Hugo[HEAD]-B", E.ILLEGAL_USING_OF_HEAD_OR_TAIL),
    ("{A[HEAD]B-C[TAIL]}", E.MISSING_A_CONNECTION_AFTER_HEAD_OR_TAIL),
    ("A-[START]B-C[END]", E.INVALID_PARTICLE_AFTER_CONNECTION),
    ("A[1][START]5-B-C[END][1]", E.INVALID_PARTICLE_AFTER_START_END),
    ("A-#-B", E.INVALID_PARTICLE_NAME),
    ("A-#myMonomer-B", E.INVALID_PARTICLE_NAME),
    ("(A)", E.MISSING_CONNECTION),
    ("(A)(B)", E.MISSING_CONNECTION),
    ("(A[1]-B-C[1])(B-A)", E.MISSING_CONNECTION),
    ("(A[1]-B[1])(C[2]-D[2])", E.STRUCTURE_NOT_ONE_PART),
    ("A<B>", E.INVALID_CHARACTER_PRIOR_ANGULAR_BRACKET),
    ("<A>B<A>", E.INVALID_CHARACTER_PRIOR_ANGULAR_BRACKET),
    ("<A>B", E.INVALID_PARTICLE_AFTER_ANGLE_CLOSING_BRACKET),
    ("<A>2<A>B", E.INVALID_PARTICLE_AFTER_ANGLE_CLOSING_BRACKET),
    ("<A>2<>", E.EMPTY_ANGLE_BRACKETS),
    ("<A", E.MISSING_CLOSING_ANGLE_BRACKET),
    ("A>", E.MISSING_OPENING_ANGLE_BRACKET),
    ("0<A>", E.ILLEGAL_FREQUENCY),
    ("'1'-B-B-C-D'2'", E.INVALID_FIRST_CHARACTER_OF_STRUCTURE),
    ("3'1'A-B'2'", E.INVALID_POSITION_OF_BACKBONE_INDEX),
    ("A('1'A-B'2')", E.INVALID_POSITION_OF_BACKBONE_INDEX),
    ("A-A'1'-B-{A[HEAD]-B[TAIL]}'2'", E.INVALID_POSITION_OF_BACKBONE_INDEX),
    ("A'1'-A-'2'B", E.INVALID_POSITION_OF_BACKBONE_INDEX),
    ("A-A''-B", E.ILLEGAL_BACKBONE_INDEX_FORMAT),
    ("A-A'A'-B", E.TOO_LESS_BACKBONE_INDEX),
    ("A'1'-B", E.TOO_LESS_BACKBONE_INDEX),
    ("A'1'-B'", E.MISSING_BACKBONE_INDEX),
    ("A'1'-B'3'", E.MISSING_BACKBONE_INDEX),
    ("A'1'-B'1'", E.REDUNDANCY_OF_BACKBONE_INDICES),
    ("A'1''2'-B'3'", E.MULTIPLE_BACKBONE_INDICES),
    ("H2O'1'Bu'2'", E.MISSING_A_CONNECTION_AFTER_BACKBONE_INDEX),
    ("A-0A", E.ILLEGAL_FREQUENCY),
    ("A'0'-A'1'", E.ZERO_IN_BACKBONE_INDEX),
    ("{A'1'-A'2'}", E.BACKBONE_INDEX_IN_MONOMER),
    ("E-Cys-3{A", E.MISSING_CLOSING_CURLY_BRACKET),
    ("<A-B-C><E-Cys-3{A>", E.MISSING_CLOSING_CURLY_BRACKET),
    ("A-B}", E.MISSING_OPENING_CURLY_BRACKET),
    ("A-{}", E.EMPTY_CURLY_BRACKETS),
    ("A[1]B", E.MISSING_RING_CLOSURE),
    ("A[1]-B[2]", E.MISSING_RING_CLOSURE),
    ("A[1]-B[1]-C[1]", E.TOO_MANY_RING_CLOSURES),
    ("A(B", E.MISSING_CLOSING_NORMAL_BRACKET),
    ("A)B(C", E.MISSING_OPENING_NORMAL_BRACKET),
    ("A()B", E.EMPTY_NORMAL_BRACKETS),
    ("A((B))", E.IN_SERIES_OF_NORMAL_OPENING_BRACKETS),
    ("A--B", E.MISSING_PARTICLE_BETWEEN_TWO_CONNECTIONS),
    ("A-(B)", E.MISSING_PARTICLE_BETWEEN_CONNECTION_AND_NORMAL_OPENING_BRACKET),
    ("A[1", E.MISSING_CLOSING_ANGULAR_BRACKET),
    ("A1]", E.MISSING_OPENING_ANGULAR_BRACKET),
    ("A[X]", E.INVALID_CHARACTER_BETWEEN_ANGULAR_BRACKETS),
    ("A[START]-B", E.MISSING_END_ATTRIBUTE),
    ("A-B[END]", E.MISSING_START_ATTRIBUTE),
    ("A[START]-B[START]-C[END]", E.TOO_MANY_START_TAG),
    ("A[START]-B[END]-C[END]", E.TOO_MANY_END_TAG),
    ("A-{B[START]-C}", E.START_ATTRIBUTE_IN_MONOMER),
    ("A-{B[HEAD]-C}", E.MISSING_TAIL_ATTRIBUTE),
    ("A-{B-C[TAIL]}", E.MISSING_HEAD_ATTRIBUTE),
    ("A-{B[HEAD]-C[HEAD]-D[TAIL]}", E.TOO_MANY_HEAD),
    ("A-{(B)-C}", E.INVALID_PARTICLE_AFTER_NORMAL_CLOSING_BRACKET),
    ("A-3", E.MISSING_PARTICLE_AFTER_NUMBER),
    ("A2{B}", E.MISSING_A_CONNECTION_PRIOR_CURLY_OPENING_BRACKET),
    ("A-{#B}", E.MONOMER_IN_MONOMER),
]


@pytest.mark.parametrize("structure", VALID_STRUCTURES)
def test_valid_structures(structure):
    result = parse_spices(structure)
    assert result.is_valid, (structure, result.error)
    assert result.error is None
    assert result.matrix


@pytest.mark.parametrize("structure,expected", INVALID_STRUCTURES)
def test_invalid_structures(structure, expected):
    result = parse_spices(structure)
    assert not result.is_valid
    assert result.error is expected, (structure, result.error)
    assert result.matrix == ()
    assert result.parts == ()


def test_available_particles():
    assert parse_spices("A-B", available_particles={"A", "B"}).is_valid
    assert parse_spices("A-D", available_particles={"A", "B"}).error is E.INVALID_PARTICLE_NAME
    assert parse_spices("D", available_particles={"A", "B"}).error is E.INVALID_PARTICLE_NAME
    assert parse_spices("A-#Mono", available_particles={"A"}).is_valid


def test_monomer_definitions():
    assert parse_spices("{A[HEAD]-B[TAIL]}", is_monomer=True).is_valid
    assert parse_spices("A-B-B", is_monomer=True).error is E.NO_MONOMER
    assert parse_spices("{A-B}", is_monomer=True).error is E.MISSING_HEAD_OR_TAIL_ATTRIBUTE
    assert parse_spices("{A[1]-B[1]}", is_monomer=True).error is E.MISSING_HEAD_ATTRIBUTE
    assert parse_spices("{A[HEAD]-B[TAIL][TAIL]}", is_monomer=True).error is E.TOO_MANY_TAIL
    assert parse_spices("{A[HEAD]-B[TAIL][END]}", is_monomer=True).error is E.END_ATTRIBUTE_IN_MONOMER
    # Implicit HEAD/TAIL only outside of monomer definitions
    assert parse_spices("A-{B-C}").is_valid


def test_validate_tokens_raises_with_position():
    with pytest.raises(SpicesValidationError) as excinfo:
        validate_tokens(tokenize("A-B-0C"))
    assert excinfo.value.code is E.ILLEGAL_FREQUENCY
    assert excinfo.value.position == 4


def test_find_error():
    assert find_error(tokenize("A-B")) is None
    assert find_error(tokenize("A(B")) is E.MISSING_CLOSING_NORMAL_BRACKET
    assert find_error((), is_monomer=True) is E.NO_MONOMER
    assert find_error(()) is E.NO_TOKENS


def test_adjacency_table():
    assert adjacency_error(TokenKind.PARTICLE, TokenKind.CONNECTION) is None
    assert adjacency_error(TokenKind.CONNECTION, TokenKind.NORMAL_CLOSE) is E.MISSING_PARTICLE_BETWEEN_CONNECTION_AND_NORMAL_CLOSING_BRACKET
    assert adjacency_error(TokenKind.NUMBER, TokenKind.PARTICLE) is None
    assert adjacency_error(TokenKind.NUMBER, TokenKind.CONNECTION) is E.MISSING_PARTICLE_PRIOR_CONNECTION
    assert adjacency_error(TokenKind.BACKBONE_INDEX, TokenKind.CONNECTION) is None
    assert adjacency_error(TokenKind.ANGLE_OPEN, TokenKind.PARTICLE) is E.INVALID_PARTICLE_NAME


def test_adjacency_table_is_total():
    # Every (left, right) pair resolves to either legal or an error code
    for left, rule in ADJACENCY_RULES.items():
        for right in TokenKind:
            code = rule.check(right)
            assert code is None or isinstance(code, ErrorCode), (left, right)
            if rule.fallback is None and right not in rule.errors:
                assert code is None


def test_curly_spans_and_regions():
    tokens = tokenize("A-{B-C}-2{D}")
    assert curly_spans(tokens) == [(2, 6), (9, 11)]
    regions = top_level_regions(tokenize("(A[1]-B)(C(D)[1])"))
    assert ["".join(t.text for t in region) for region in regions] == ["A[1]-B", "C(D)[1]"]
