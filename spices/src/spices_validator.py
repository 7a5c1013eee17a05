#!/usr/bin/env python3
"""
SPICES Grammar Validator

Validates a token stream for one part of a SPICES structure and reports the
first violated rule as an ErrorCode:

* Curly-bracket (monomer span) balance; each span is checked as a monomer and
  the remaining body, with spans collapsed to '{' '}', as a structure
* First/last token restrictions
* Square-bracket tags: balance, HEAD/TAIL/START/END cardinality, ring-closure
  pairing
* Normal-bracket balance and backbone-index format
* Token-pair adjacency through the ADJACENCY_RULES lookup table
* Backbone-index uniqueness and contiguity
* Connectivity of structures made only of parenthesized regions

Validation never builds partial graph state; callers only proceed to
expansion once validate_tokens() returned without raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from .spices_errors import ErrorCode, SpicesValidationError
from .spices_tokens import BACKBONE_KINDS, SQUARE_KINDS, TAG_KINDS, Token, TokenKind

logger = logging.getLogger(__name__)

K = TokenKind
E = ErrorCode


# ==========================================================================
# Token Adjacency Table
# ==========================================================================


@dataclass(frozen=True)
class AdjacencyRule:
    """Legality of the token that may follow a token of one kind.

    ``legal`` lists right-hand kinds that continue the scan, ``errors`` maps
    right-hand kinds to dedicated error codes and ``fallback`` covers every
    other kind.
    """

    legal: FrozenSet[TokenKind]
    errors: Dict[TokenKind, ErrorCode] = field(default_factory=dict)
    fallback: Optional[ErrorCode] = None

    def check(self, right: TokenKind) -> Optional[ErrorCode]:
        if right in self.legal:
            return None
        return self.errors.get(right, self.fallback)


ADJACENCY_RULES: Dict[TokenKind, AdjacencyRule] = {
    K.PARTICLE: AdjacencyRule(
        legal=frozenset({
            K.NORMAL_OPEN, K.NORMAL_CLOSE, K.RING_CLOSURE, K.CURLY_CLOSE, K.CONNECTION,
            K.HEAD, K.TAIL, K.START, K.END, K.MONOMER, K.NUMBER, K.PARTICLE,
            K.ANGLE_CLOSE, K.BACKBONE_INDEX,
        }),
        errors={K.CURLY_OPEN: E.MISSING_A_CONNECTION_PRIOR_CURLY_OPENING_BRACKET},
        fallback=E.INVALID_PARTICLE_AFTER_PARTICLE,
    ),
    K.NUMBER: AdjacencyRule(
        legal=frozenset({K.PARTICLE, K.CURLY_OPEN, K.MONOMER}),
        errors={
            K.NORMAL_OPEN: E.INVALID_PARTICLE_PRIOR_NORMAL_BRACKET,
            K.NORMAL_CLOSE: E.MISSING_A_PARTICLE_PRIOR_NORMAL_CLOSING_BRACKET,
            K.RING_CLOSURE: E.MISSING_PARTICLE_AFTER_NUMBER,
            K.CURLY_CLOSE: E.MISSING_PARTICLE_AFTER_NUMBER,
            K.HEAD: E.MISSING_PARTICLE_AFTER_NUMBER,
            K.TAIL: E.MISSING_PARTICLE_AFTER_NUMBER,
            K.CONNECTION: E.MISSING_PARTICLE_PRIOR_CONNECTION,
            K.BACKBONE_INDEX: E.INVALID_POSITION_OF_BACKBONE_INDEX,
        },
        fallback=E.INVALID_PARTICLE_NAME,
    ),
    K.NORMAL_OPEN: AdjacencyRule(
        legal=frozenset({K.NUMBER, K.PARTICLE, K.CURLY_OPEN, K.CURLY_CLOSE, K.MONOMER}),
        errors={
            K.NORMAL_OPEN: E.IN_SERIES_OF_NORMAL_OPENING_BRACKETS,
            K.NORMAL_CLOSE: E.EMPTY_NORMAL_BRACKETS,
            K.RING_CLOSURE: E.MISSING_A_PARTICLE_PRIOR_RING_CLOSURE,
            K.CONNECTION: E.MISSING_A_PARTICLE_PRIOR_CONNECTION,
            K.HEAD: E.MISSING_A_PARTICLE_PRIOR_HEAD_OR_TAIL,
            K.TAIL: E.MISSING_A_PARTICLE_PRIOR_HEAD_OR_TAIL,
            K.BACKBONE_INDEX: E.INVALID_POSITION_OF_BACKBONE_INDEX,
        },
        fallback=E.INVALID_PARTICLE_AFTER_NORMAL_OPENING_BRACKET,
    ),
    K.NORMAL_CLOSE: AdjacencyRule(
        legal=frozenset({
            K.NORMAL_OPEN, K.NORMAL_CLOSE, K.CURLY_CLOSE, K.CONNECTION, K.NUMBER,
            K.PARTICLE, K.ANGLE_CLOSE, K.BACKBONE_INDEX,
        }),
        errors={
            K.RING_CLOSURE: E.MISSING_A_PARTICLE_PRIOR_RING_CLOSURE,
            K.CURLY_OPEN: E.MISSING_A_CONNECTION_AFTER_NORMAL_CLOSING_BRACKET,
            K.MONOMER: E.MISSING_A_CONNECTION_AFTER_NORMAL_CLOSING_BRACKET,
            K.HEAD: E.MISSING_A_PARTICLE_PRIOR_HEAD_OR_TAIL,
            K.TAIL: E.MISSING_A_PARTICLE_PRIOR_HEAD_OR_TAIL,
        },
        fallback=E.INVALID_PARTICLE_AFTER_NORMAL_CLOSING_BRACKET,
    ),
    K.RING_CLOSURE: AdjacencyRule(
        legal=frozenset({
            K.NORMAL_OPEN, K.NORMAL_CLOSE, K.RING_CLOSURE, K.CURLY_OPEN, K.CURLY_CLOSE,
            K.CONNECTION, K.HEAD, K.TAIL, K.MONOMER, K.NUMBER, K.PARTICLE, K.START,
            K.END, K.ANGLE_CLOSE, K.BACKBONE_INDEX,
        }),
        fallback=E.INVALID_PARTICLE_AFTER_RING_CLOSURE,
    ),
    K.CURLY_OPEN: AdjacencyRule(
        legal=frozenset({
            K.NORMAL_OPEN, K.NORMAL_CLOSE, K.RING_CLOSURE, K.PARTICLE, K.CURLY_OPEN,
            K.CURLY_CLOSE, K.HEAD, K.TAIL, K.NUMBER,
        }),
        errors={
            K.CONNECTION: E.MISSING_A_PARTICLE_PRIOR_CONNECTION,
            K.MONOMER: E.MONOMER_INSIDE_OF_CURLY_BRACKET,
        },
        fallback=E.INVALID_PARTICLE_AFTER_CURLY_OPENING_BRACKET,
    ),
    K.CURLY_CLOSE: AdjacencyRule(
        legal=frozenset({
            K.NORMAL_OPEN, K.NORMAL_CLOSE, K.PARTICLE, K.CURLY_OPEN, K.CURLY_CLOSE,
            K.CONNECTION, K.HEAD, K.TAIL, K.NUMBER, K.ANGLE_CLOSE,
        }),
        errors={
            K.RING_CLOSURE: E.MISSING_A_PARTICLE_PRIOR_RING_CLOSURE,
            K.BACKBONE_INDEX: E.INVALID_POSITION_OF_BACKBONE_INDEX,
        },
        fallback=E.INVALID_PARTICLE_AFTER_CURLY_CLOSING_BRACKET,
    ),
    K.CONNECTION: AdjacencyRule(
        legal=frozenset({K.CURLY_OPEN, K.MONOMER, K.NUMBER, K.PARTICLE}),
        errors={
            K.NORMAL_OPEN: E.MISSING_PARTICLE_BETWEEN_CONNECTION_AND_NORMAL_OPENING_BRACKET,
            K.NORMAL_CLOSE: E.MISSING_PARTICLE_BETWEEN_CONNECTION_AND_NORMAL_CLOSING_BRACKET,
            K.RING_CLOSURE: E.MISSING_PARTICLE_BETWEEN_CONNECTION_AND_RING_CLOSURE,
            K.CURLY_CLOSE: E.INVALID_LAST_CHARACTER,
            K.CONNECTION: E.MISSING_PARTICLE_BETWEEN_TWO_CONNECTIONS,
            K.HEAD: E.MISSING_PARTICLE_BETWEEN_CONNECTION_AND_HEAD_OR_TAIL,
            K.TAIL: E.MISSING_PARTICLE_BETWEEN_CONNECTION_AND_HEAD_OR_TAIL,
            K.BACKBONE_INDEX: E.INVALID_POSITION_OF_BACKBONE_INDEX,
        },
        fallback=E.INVALID_PARTICLE_AFTER_CONNECTION,
    ),
    K.MONOMER: AdjacencyRule(
        legal=frozenset({
            K.NORMAL_OPEN, K.NORMAL_CLOSE, K.RING_CLOSURE, K.CURLY_OPEN, K.CURLY_CLOSE,
            K.CONNECTION, K.NUMBER, K.PARTICLE, K.ANGLE_CLOSE, K.BACKBONE_INDEX,
        }),
        errors={
            K.HEAD: E.INVALID_PARTICLE_AFTER_MONOMER,
            K.TAIL: E.INVALID_PARTICLE_AFTER_MONOMER,
            K.MONOMER: E.MONOMER_AFTER_MONOMER,
        },
        fallback=E.INVALID_PARTICLE_AFTER_MONOMER,
    ),
    K.BACKBONE_INDEX: AdjacencyRule(
        legal=frozenset(set(TokenKind)) - {K.PARTICLE, K.MONOMER, K.NUMBER, K.BACKBONE_INDEX},
        errors={
            K.PARTICLE: E.MISSING_A_CONNECTION_AFTER_BACKBONE_INDEX,
            K.MONOMER: E.MISSING_A_CONNECTION_AFTER_BACKBONE_INDEX,
            K.NUMBER: E.MISSING_A_CONNECTION_AFTER_BACKBONE_INDEX,
            K.BACKBONE_INDEX: E.MULTIPLE_BACKBONE_INDICES,
        },
    ),
}

_HEAD_TAIL_RULE = AdjacencyRule(
    legal=frozenset({
        K.NORMAL_OPEN, K.NORMAL_CLOSE, K.RING_CLOSURE, K.CURLY_OPEN, K.CURLY_CLOSE,
        K.CONNECTION, K.HEAD, K.TAIL, K.BACKBONE_INDEX,
    }),
    errors={
        K.MONOMER: E.MONOMER_AFTER_HEAD_OR_TAIL,
        K.NUMBER: E.MISSING_A_CONNECTION_AFTER_HEAD_OR_TAIL,
        K.PARTICLE: E.MISSING_A_CONNECTION_AFTER_HEAD_OR_TAIL,
    },
    fallback=E.INVALID_PARTICLE_AFTER_HEAD_TAIL,
)
_START_END_RULE = AdjacencyRule(
    legal=frozenset({
        K.NORMAL_OPEN, K.NORMAL_CLOSE, K.RING_CLOSURE, K.CURLY_OPEN, K.CURLY_CLOSE,
        K.CONNECTION, K.HEAD, K.TAIL, K.START, K.END, K.ANGLE_CLOSE, K.BACKBONE_INDEX,
    }),
    fallback=E.INVALID_PARTICLE_AFTER_START_END,
)
ADJACENCY_RULES[K.HEAD] = _HEAD_TAIL_RULE
ADJACENCY_RULES[K.TAIL] = _HEAD_TAIL_RULE
ADJACENCY_RULES[K.START] = _START_END_RULE
ADJACENCY_RULES[K.END] = _START_END_RULE

_INVALID_FIRST_KINDS: FrozenSet[TokenKind] = (
    SQUARE_KINDS | BACKBONE_KINDS | {K.CONNECTION, K.NORMAL_CLOSE}
)
_INVALID_LAST_KINDS: FrozenSet[TokenKind] = frozenset({K.SQUARE_OPEN, K.CONNECTION, K.NORMAL_OPEN})


def adjacency_error(left: TokenKind, right: TokenKind) -> Optional[ErrorCode]:
    """Error code for ``right`` directly following ``left``, None if legal."""
    rule = ADJACENCY_RULES.get(left)
    if rule is None:
        return E.INVALID_PARTICLE_NAME
    return rule.check(right)


# ==========================================================================
# Helpers
# ==========================================================================


def _fail(code: ErrorCode, token: Optional[Token] = None) -> None:
    raise SpicesValidationError(code, token.position if token is not None else None)


def _is_available(token: Token, available_particles: Optional[AbstractSet[str]]) -> bool:
    if token.kind is not K.PARTICLE:
        return False
    return available_particles is None or token.text in available_particles


def curly_spans(tokens: Sequence[Token]) -> List[Tuple[int, int]]:
    """
    Locate monomer spans.

    Returns:
        (open_index, close_index) pairs into ``tokens``

    Raises:
        SpicesValidationError: On unbalanced, nested or empty curly brackets
    """
    spans: List[Tuple[int, int]] = []
    open_index: Optional[int] = None
    for i, token in enumerate(tokens):
        if token.kind is K.CURLY_OPEN:
            if open_index is not None:
                _fail(E.MISSING_CLOSING_CURLY_BRACKET, tokens[open_index])
            open_index = i
        elif token.kind is K.CURLY_CLOSE:
            if open_index is None:
                _fail(E.MISSING_OPENING_CURLY_BRACKET, token)
            if i == open_index + 1:
                _fail(E.EMPTY_CURLY_BRACKETS, token)
            spans.append((open_index, i))
            open_index = None
    if open_index is not None:
        _fail(E.MISSING_CLOSING_CURLY_BRACKET, tokens[open_index])
    return spans


def _collapse_spans(tokens: Sequence[Token], spans: Sequence[Tuple[int, int]]) -> Tuple[Token, ...]:
    body: List[Token] = []
    cursor = 0
    for open_index, close_index in spans:
        body.extend(tokens[cursor:open_index + 1])
        cursor = close_index
    body.extend(tokens[cursor:])
    return tuple(body)


# ==========================================================================
# Substructure Checks
# ==========================================================================


def _check_boundaries(tokens: Sequence[Token], is_monomer: bool) -> None:
    first, last = tokens[0], tokens[-1]
    if first.kind in _INVALID_FIRST_KINDS or (first.kind is K.NUMBER and first.text.startswith("0")):
        _fail(E.INVALID_FIRST_CHARACTER_OF_MONOMER if is_monomer else E.INVALID_FIRST_CHARACTER_OF_STRUCTURE, first)
    if last.kind in _INVALID_LAST_KINDS:
        _fail(E.INVALID_LAST_CHARACTER_OF_MONOMER if is_monomer else E.INVALID_LAST_CHARACTER_OF_STRUCTURE, last)
    if first.kind is K.NORMAL_OPEN and last.kind is not K.NORMAL_CLOSE:
        _fail(E.INVALID_PARTICLE_AFTER_NORMAL_CLOSING_BRACKET, last)


def _check_square_tags(tokens: Sequence[Token], is_monomer: bool, require_head_tail: bool) -> None:
    squares = [token for token in tokens if token.kind in SQUARE_KINDS]
    if not squares:
        if is_monomer and require_head_tail:
            _fail(E.MISSING_HEAD_OR_TAIL_ATTRIBUTE, tokens[0])
        return

    for token in squares:
        if token.kind is K.SQUARE_OPEN:
            _fail(E.MISSING_CLOSING_ANGULAR_BRACKET, token)
        if token.kind is K.SQUARE_CLOSE:
            _fail(E.MISSING_OPENING_ANGULAR_BRACKET, token)

    counts = {K.HEAD: 0, K.TAIL: 0, K.START: 0, K.END: 0}
    for token in squares:
        if token.kind is K.INVALID_TAG:
            _fail(E.INVALID_CHARACTER_BETWEEN_ANGULAR_BRACKETS, token)
        if is_monomer:
            if token.kind is K.START:
                _fail(E.START_ATTRIBUTE_IN_MONOMER, token)
            if token.kind is K.END:
                _fail(E.END_ATTRIBUTE_IN_MONOMER, token)
        elif token.kind in (K.HEAD, K.TAIL):
            _fail(E.ILLEGAL_USING_OF_HEAD_OR_TAIL, token)
        if token.kind in counts:
            counts[token.kind] += 1

    if counts[K.START] > 1:
        _fail(E.TOO_MANY_START_TAG)
    if counts[K.END] > 1:
        _fail(E.TOO_MANY_END_TAG)
    if counts[K.START] == 1 and counts[K.END] == 0:
        _fail(E.MISSING_END_ATTRIBUTE)
    if counts[K.START] == 0 and counts[K.END] == 1:
        _fail(E.MISSING_START_ATTRIBUTE)

    if not is_monomer:
        return
    if not require_head_tail and counts[K.HEAD] == 0 and counts[K.TAIL] == 0:
        # Implicit HEAD/TAIL on the first/last particle of the span
        return
    if counts[K.HEAD] == 0:
        _fail(E.MISSING_HEAD_ATTRIBUTE)
    if counts[K.HEAD] > 1:
        _fail(E.TOO_MANY_HEAD)
    if counts[K.TAIL] == 0:
        _fail(E.MISSING_TAIL_ATTRIBUTE)
    if counts[K.TAIL] > 1:
        _fail(E.TOO_MANY_TAIL)


def _check_ring_closures(tokens: Sequence[Token]) -> None:
    labels = sorted(token.value for token in tokens if token.kind is K.RING_CLOSURE)
    if len(labels) == 1:
        _fail(E.MISSING_RING_CLOSURE)
    i = 0
    while i < len(labels):
        if i + 1 == len(labels) or labels[i] != labels[i + 1]:
            _fail(E.MISSING_RING_CLOSURE)
        if i + 2 < len(labels) and labels[i] == labels[i + 2]:
            _fail(E.TOO_MANY_RING_CLOSURES)
        i += 2


def _check_normal_brackets(tokens: Sequence[Token]) -> None:
    opening = sum(1 for token in tokens if token.kind is K.NORMAL_OPEN)
    closing = sum(1 for token in tokens if token.kind is K.NORMAL_CLOSE)
    if opening > closing:
        _fail(E.MISSING_CLOSING_NORMAL_BRACKET)
    if closing > opening:
        _fail(E.MISSING_OPENING_NORMAL_BRACKET)
    depth = 0
    for token in tokens:
        if token.kind is K.NORMAL_OPEN:
            depth += 1
        elif token.kind is K.NORMAL_CLOSE:
            depth -= 1
            if depth < 0:
                _fail(E.MISSING_OPENING_NORMAL_BRACKET, token)


def _check_backbone_format(tokens: Sequence[Token]) -> None:
    for token in tokens:
        if token.kind is K.INVALID_BACKBONE and token.text == "''":
            _fail(E.ILLEGAL_BACKBONE_INDEX_FORMAT, token)
    quotes = sum(token.text.count("'") for token in tokens if token.kind in BACKBONE_KINDS)
    if quotes % 2 != 0:
        _fail(E.MISSING_BACKBONE_INDEX)
    if quotes == 2:
        _fail(E.TOO_LESS_BACKBONE_INDEX)
    for token in tokens:
        if token.kind is K.INVALID_BACKBONE:
            _fail(E.ILLEGAL_BACKBONE_INDEX_FORMAT, token)


def _check_single_token(token: Token, is_monomer: bool, available_particles: Optional[AbstractSet[str]]) -> None:
    if token.kind is K.MONOMER:
        if is_monomer:
            _fail(E.MONOMER_IN_MONOMER, token)
        return
    if _is_available(token, available_particles):
        return
    _fail(E.INVALID_PARTICLE_NAME, token)


def _register_backbone(token: Token, seen: Set[int]) -> None:
    if token.value == 0:
        _fail(E.ZERO_IN_BACKBONE_INDEX, token)
    if token.value in seen:
        _fail(E.REDUNDANCY_OF_BACKBONE_INDICES, token)
    seen.add(token.value)


def _check_adjacency(tokens: Sequence[Token], is_monomer: bool, available_particles: Optional[AbstractSet[str]]) -> Set[int]:
    """Pairwise scan; returns the backbone index values seen."""
    backbone: Set[int] = set()
    for left, right in zip(tokens, tokens[1:]):
        if left.kind in (K.PARTICLE, K.UNKNOWN) and not _is_available(left, available_particles):
            _fail(E.INVALID_PARTICLE_NAME, left)
        if left.kind is K.NUMBER and left.value == 0:
            _fail(E.ILLEGAL_FREQUENCY, left)
        if left.kind is K.MONOMER and is_monomer:
            _fail(E.MONOMER_IN_MONOMER, left)
        if left.kind is K.BACKBONE_INDEX:
            _register_backbone(left, backbone)

        if right.kind is K.UNKNOWN or (right.kind is K.PARTICLE and not _is_available(right, available_particles)):
            _fail(adjacency_error(left.kind, K.NUMBER) or E.INVALID_PARTICLE_NAME, right)
        code = adjacency_error(left.kind, right.kind)
        if code is not None:
            _fail(code, right)

    last = tokens[-1]
    if last.kind is K.NUMBER:
        _fail(E.MISSING_PARTICLE_AFTER_NUMBER, last)
    if last.kind is K.MONOMER and is_monomer:
        _fail(E.MONOMER_IN_MONOMER, last)
    if last.kind in (K.PARTICLE, K.UNKNOWN) and not _is_available(last, available_particles):
        _fail(E.INVALID_PARTICLE_NAME, last)
    if last.kind is K.BACKBONE_INDEX:
        _register_backbone(last, backbone)
    return backbone


def top_level_regions(tokens: Sequence[Token]) -> List[Tuple[Token, ...]]:
    """Contents of every depth-0 parenthesized region, in order."""
    regions: List[Tuple[Token, ...]] = []
    depth = 0
    start = 0
    for i, token in enumerate(tokens):
        if token.kind is K.NORMAL_OPEN:
            if depth == 0:
                start = i + 1
            depth += 1
        elif token.kind is K.NORMAL_CLOSE:
            depth -= 1
            if depth == 0:
                regions.append(tuple(tokens[start:i]))
    return regions


def _check_regions_connected(tokens: Sequence[Token]) -> None:
    regions = top_level_regions(tokens)
    labels_per_region: List[Set[int]] = []
    for region in regions:
        if not any(token.kind in TAG_KINDS for token in region):
            _fail(E.MISSING_CONNECTION, region[0] if region else None)
        labels_per_region.append({token.value for token in region if token.kind is K.RING_CLOSURE})
    if len(regions) < 2:
        return

    # Union regions that share a ring-closure label
    parent = list(range(len(regions)))

    def find(i: int) -> int:
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for i in range(len(regions)):
        for j in range(i + 1, len(regions)):
            if labels_per_region[i] & labels_per_region[j]:
                parent[find(i)] = find(j)
    if len({find(i) for i in range(len(regions))}) > 1:
        _fail(E.STRUCTURE_NOT_ONE_PART)


def check_substructure(
    tokens: Sequence[Token],
    is_monomer: bool,
    available_particles: Optional[AbstractSet[str]] = None,
    require_head_tail: bool = True,
) -> None:
    """
    Validate one substructure: a monomer span or a structure body.

    Args:
        tokens: Tokens of the substructure, spans already collapsed
        is_monomer: Apply monomer rules (HEAD/TAIL, no START/END, no backbone)
        available_particles: Allowed particle names, None allows all
        require_head_tail: Monomer must carry explicit [HEAD] and [TAIL]

    Raises:
        SpicesValidationError: First violated rule
    """
    if not tokens:
        _fail(E.NO_TOKENS)
    _check_boundaries(tokens, is_monomer)
    if is_monomer:
        for token in tokens:
            if token.kind in BACKBONE_KINDS:
                _fail(E.BACKBONE_INDEX_IN_MONOMER, token)
    _check_square_tags(tokens, is_monomer, require_head_tail)
    _check_ring_closures(tokens)
    _check_normal_brackets(tokens)
    _check_backbone_format(tokens)

    if len(tokens) == 1:
        _check_single_token(tokens[0], is_monomer, available_particles)
        return

    backbone = _check_adjacency(tokens, is_monomer, available_particles)
    if backbone and len(backbone) < max(backbone):
        _fail(E.MISSING_BACKBONE_INDEX)

    if tokens[0].kind is K.NORMAL_OPEN:
        _check_regions_connected(tokens)


# ==========================================================================
# Public API
# ==========================================================================


def validate_tokens(
    tokens: Sequence[Token],
    is_monomer: bool = False,
    available_particles: Optional[AbstractSet[str]] = None,
) -> None:
    """
    Validate the tokens of one part.

    Args:
        tokens: Token stream of the part (no angle brackets)
        is_monomer: The part is a monomer definition '{...}'
        available_particles: Allowed particle names, None allows all

    Raises:
        SpicesValidationError: First violated rule
    """
    tokens = tuple(tokens)
    if is_monomer and (not tokens or tokens[0].kind is not K.CURLY_OPEN or tokens[-1].kind is not K.CURLY_CLOSE):
        _fail(E.NO_MONOMER)
    if not tokens:
        _fail(E.NO_TOKENS)

    spans = curly_spans(tokens)
    for open_index, close_index in spans:
        check_substructure(
            tokens[open_index + 1:close_index],
            is_monomer=True,
            available_particles=available_particles,
            require_head_tail=is_monomer,
        )
    check_substructure(_collapse_spans(tokens, spans), is_monomer=False, available_particles=available_particles)


def find_error(
    tokens: Sequence[Token],
    is_monomer: bool = False,
    available_particles: Optional[AbstractSet[str]] = None,
) -> Optional[ErrorCode]:
    """Like validate_tokens() but returns the error code instead of raising."""
    try:
        validate_tokens(tokens, is_monomer, available_particles)
    except SpicesValidationError as e:
        logger.debug("Validation failed: %s", e)
        return e.code
    return None


__all__ = [
    "AdjacencyRule",
    "ADJACENCY_RULES",
    "adjacency_error",
    "curly_spans",
    "top_level_regions",
    "check_substructure",
    "validate_tokens",
    "find_error",
]
