#!/usr/bin/env python3
"""
Tests for the SPICES tokenizer.

- Token boundaries for particles, monomers, numbers, tags and backbone indices
- Diagnostic token kinds for malformed lexemes
- Raw-text checks (invalid characters, white space between names)
- Memoization of tokenize()
"""

import pytest

from spices.src.spices_errors import ErrorCode, SpicesSyntaxError
from spices.src.spices_parser import check_raw_text, strip_whitespace, tokenize
from spices.src.spices_tokens import Token, TokenKind, render_tokens


def kinds(text):
    return [token.kind for token in tokenize(text)]


def texts(text):
    return [token.text for token in tokenize(text)]


def test_uppercase_letter_starts_a_particle():
    assert texts("H2O-C6H5OH") == ["H2O", "-", "C6H5OH"]
    assert texts("A-BBBB-A") == ["A", "-", "BBBB", "-", "A"]
    assert texts("MeAcNHBB-CisButene") == ["MeAcNHBB", "-", "CisButene"]
    assert kinds("AB") == [TokenKind.PARTICLE]
    assert texts("Cys") == ["Cys"]


def test_capital_run_longer_than_ten_is_unknown():
    assert kinds("ABCDEFGHIJ") == [TokenKind.PARTICLE]
    assert kinds("ABCDEFGHIJK") == [TokenKind.UNKNOWN]
    assert kinds("aBc") == [TokenKind.UNKNOWN]


def test_numbers_and_repeats():
    tokens = tokenize("10A-3B")
    assert [t.kind for t in tokens] == [
        TokenKind.NUMBER, TokenKind.PARTICLE, TokenKind.CONNECTION, TokenKind.NUMBER, TokenKind.PARTICLE,
    ]
    assert tokens[0].value == 10
    assert tokens[3].value == 3


def test_monomer_token():
    tokens = tokenize("A-#MyMonomer")
    assert tokens[2].kind is TokenKind.MONOMER
    assert tokens[2].text == "#MyMonomer"
    assert tokens[2].is_particle


def test_tags():
    tokens = tokenize("A[12][HEAD][TAIL][START][END]")
    assert [t.kind for t in tokens] == [
        TokenKind.PARTICLE, TokenKind.RING_CLOSURE, TokenKind.HEAD, TokenKind.TAIL, TokenKind.START, TokenKind.END,
    ]
    assert tokens[1].value == 12


def test_backbone_index():
    tokens = tokenize("A'1'-B'22'")
    assert tokens[1].kind is TokenKind.BACKBONE_INDEX
    assert tokens[1].value == 1
    assert tokens[4].value == 22


def test_brackets_are_single_tokens():
    assert kinds("<(A){B}>") == [
        TokenKind.ANGLE_OPEN, TokenKind.NORMAL_OPEN, TokenKind.PARTICLE, TokenKind.NORMAL_CLOSE,
        TokenKind.CURLY_OPEN, TokenKind.PARTICLE, TokenKind.CURLY_CLOSE, TokenKind.ANGLE_CLOSE,
    ]


def test_malformed_lexemes_are_kept_as_diagnostic_kinds():
    assert kinds("A-#-B")[2] is TokenKind.UNKNOWN
    assert kinds("A-#myMonomer-B")[2] is TokenKind.UNKNOWN
    assert kinds("abc") == [TokenKind.UNKNOWN]
    assert kinds("A[X]") == [TokenKind.PARTICLE, TokenKind.INVALID_TAG]
    assert kinds("A'B'") == [TokenKind.PARTICLE, TokenKind.INVALID_BACKBONE]
    assert kinds("A''") == [TokenKind.PARTICLE, TokenKind.INVALID_BACKBONE]
    assert kinds("A[1") == [TokenKind.PARTICLE, TokenKind.SQUARE_OPEN, TokenKind.NUMBER]
    assert kinds("A1]") == [TokenKind.PARTICLE, TokenKind.SQUARE_CLOSE]
    assert kinds("A'") == [TokenKind.PARTICLE, TokenKind.QUOTE]


def test_long_particle_name_is_unknown():
    assert kinds("Abcdefghij") == [TokenKind.PARTICLE]
    assert kinds("Abcdefghijk") == [TokenKind.UNKNOWN]


def test_whitespace_is_removed():
    tokens = tokenize(" A - B ( C ) ")
    assert render_tokens(tokens) == "A-B(C)"
    assert tokens[2].position == 2
    assert strip_whitespace(" <A >\t2< B>") == "<A>2<B>"


def test_whitespace_between_names_is_rejected():
    with pytest.raises(SpicesSyntaxError) as excinfo:
        tokenize("A B")
    assert excinfo.value.code is ErrorCode.INVALID_WHITE_SPACE

    with pytest.raises(SpicesSyntaxError) as excinfo:
        check_raw_text("A-1 2B")
    assert excinfo.value.code is ErrorCode.INVALID_WHITE_SPACE


def test_invalid_character():
    with pytest.raises(SpicesSyntaxError) as excinfo:
        tokenize("A*-A")
    assert excinfo.value.code is ErrorCode.INVALID_CHARACTER
    assert excinfo.value.position == 1


def test_empty_input():
    assert tokenize("") == ()
    assert tokenize("   ") == ()


def test_tokenize_is_memoized():
    first = tokenize("A-B-C")
    second = tokenize("A-B-C")
    assert first is second
    assert isinstance(first, tuple)
    assert all(isinstance(token, Token) for token in first)


def test_token_is_immutable():
    token = tokenize("A")[0]
    with pytest.raises(Exception):
        token.text = "B"
