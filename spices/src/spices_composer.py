#!/usr/bin/env python3
"""
SPICES Multi-part Composer

Entry point for complete SPICES inputs:

* split_parts: outer checks on '<...>' part delimiters and repeat counts
* SpicesComposer: compiles every distinct part once (instance-local,
  lock-protected cache) and assembles the CompositeStructure
* parse_spices: one-call convenience wrapper

Policy constants live in DEFAULT_SPICES_POLICY; callers override them with a
``defaults`` mapping or explicit keyword arguments.
"""

from __future__ import annotations

import logging
import threading
from typing import AbstractSet, Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .spices_compiler import SpicesCompiler
from .spices_coordinates import assign_structure_coordinates
from .spices_errors import ErrorCode, SpicesError, SpicesSyntaxError
from .spices_ir import CompositeStructure, ParsedUnit, point_list
from .spices_parser import tokenize
from .spices_tokens import Token, TokenKind, render_tokens

logger = logging.getLogger(__name__)


# ==========================================================================
# Policy Defaults
# ==========================================================================


DEFAULT_SPICES_POLICY: Dict[str, Any] = {
    "start_index": 1,
    "bond_length": 1.0,
    "segment_separator": "-",
}


def resolve_policy(defaults: Optional[Mapping[str, Any]] = None, **overrides: Any) -> Dict[str, Any]:
    """Merge DEFAULT_SPICES_POLICY, caller defaults and explicit non-None overrides."""
    policy = dict(DEFAULT_SPICES_POLICY)
    if defaults:
        policy.update(defaults)
    policy.update({key: value for key, value in overrides.items() if value is not None})
    return policy


# ==========================================================================
# Part Splitting
# ==========================================================================


def split_parts(tokens: Sequence[Token]) -> List[Tuple[int, Tuple[Token, ...]]]:
    """
    Split a structure into its '<...>' parts.

    Args:
        tokens: Tokens of the complete input

    Returns:
        (repeat count, part tokens) per part in input order; an input without
        angle brackets is one part with count 1

    Raises:
        SpicesSyntaxError: On unbalanced, empty or misplaced angle brackets
    """
    tokens = tuple(tokens)
    if not tokens:
        raise SpicesSyntaxError(ErrorCode.NO_TOKENS)

    inside = False
    for token in tokens:
        if token.kind is TokenKind.ANGLE_OPEN:
            if inside:
                raise SpicesSyntaxError(ErrorCode.MISSING_CLOSING_ANGLE_BRACKET, token.position)
            inside = True
        elif token.kind is TokenKind.ANGLE_CLOSE:
            if not inside:
                raise SpicesSyntaxError(ErrorCode.MISSING_OPENING_ANGLE_BRACKET, token.position)
            inside = False
    if inside:
        raise SpicesSyntaxError(ErrorCode.MISSING_CLOSING_ANGLE_BRACKET)

    closes = [i for i, token in enumerate(tokens) if token.kind is TokenKind.ANGLE_CLOSE]
    if not closes:
        return [(1, tokens)]
    last_close = closes[-1]

    parts: List[Tuple[int, Tuple[Token, ...]]] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if i > last_close:
            raise SpicesSyntaxError(ErrorCode.INVALID_PARTICLE_AFTER_ANGLE_CLOSING_BRACKET, token.position)
        count = 1
        if token.kind is TokenKind.NUMBER and tokens[i + 1].kind is TokenKind.ANGLE_OPEN:
            if token.value == 0:
                raise SpicesSyntaxError(ErrorCode.ILLEGAL_FREQUENCY, token.position)
            count = token.value
            i += 1
        elif token.kind is not TokenKind.ANGLE_OPEN:
            raise SpicesSyntaxError(ErrorCode.INVALID_CHARACTER_PRIOR_ANGULAR_BRACKET, token.position)
        close = next(j for j in closes if j > i)
        if close == i + 1:
            raise SpicesSyntaxError(ErrorCode.EMPTY_ANGLE_BRACKETS, tokens[i].position)
        parts.append((count, tokens[i + 1:close]))
        i = close + 1
    return parts


# ==========================================================================
# Composer
# ==========================================================================


class SpicesComposer:
    """
    Parses complete SPICES inputs into CompositeStructure values.

    Distinct part strings are compiled once per composer and the resulting
    ParsedUnit is shared by every occurrence; the cache is guarded by a lock
    so a composer can be used from several threads.
    """

    def __init__(
        self,
        available_particles: Optional[AbstractSet[str]] = None,
        is_monomer: bool = False,
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        self.policy = resolve_policy(defaults)
        self.is_monomer = is_monomer
        self.compiler = SpicesCompiler(is_monomer, available_particles)
        self._parts: Dict[str, ParsedUnit] = {}
        self._lock = threading.Lock()

    def compile_part(self, text: str) -> ParsedUnit:
        with self._lock:
            cached = self._parts.get(text)
        if cached is not None:
            logger.debug("Part cache hit for %r", text)
            return cached
        unit = self.compiler.compile(text)
        with self._lock:
            return self._parts.setdefault(text, unit)

    def clear_cache(self) -> None:
        with self._lock:
            self._parts.clear()

    def parse(
        self,
        text: str,
        first_points=None,
        last_points=None,
        bond_length: Optional[float] = None,
        start_index: Optional[int] = None,
    ) -> CompositeStructure:
        """
        Parse a complete input.

        Args:
            text: SPICES notation
            first_points: Optional anchor (or list of anchors) for the first particle
            last_points: Optional anchor (or list of anchors) for the last particle
            bond_length: Overrides the policy bond length
            start_index: Overrides the policy number of the first matrix row

        Returns:
            CompositeStructure; invalid notation gives is_valid False and the
            error code instead of raising
        """
        if (first_points is None) != (last_points is None):
            raise ValueError("first_points and last_points must be given together")
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")
        policy = resolve_policy(self.policy, bond_length=bond_length, start_index=start_index)

        try:
            structure_tokens = tokenize(text)
            occurrences: List[ParsedUnit] = []
            for count, part_tokens in split_parts(structure_tokens):
                unit = self.compile_part(render_tokens(part_tokens))
                occurrences.extend([unit] * count)
        except SpicesError as e:
            logger.debug("Invalid structure %r: %s", text, e)
            return CompositeStructure(text=text, is_valid=False, error=e.code, error_position=e.position)

        coordinates: Tuple = ()
        if first_points is not None:
            arrays = assign_structure_coordinates(
                occurrences, point_list(first_points), point_list(last_points), policy["bond_length"]
            )
            coordinates = tuple(
                tuple(tuple(float(value) for value in row) for row in array) for array in arrays
            )

        return CompositeStructure(
            text=text,
            is_valid=True,
            structure_tokens=structure_tokens,
            parts=tuple(occurrences),
            start_index=policy["start_index"],
            coordinates=coordinates,
            bond_length=policy["bond_length"],
            segment_separator=policy["segment_separator"],
        )


def parse_spices(
    text: str,
    available_particles: Optional[AbstractSet[str]] = None,
    is_monomer: bool = False,
    start_index: Optional[int] = None,
    defaults: Optional[Mapping[str, Any]] = None,
    first_points=None,
    last_points=None,
    bond_length: Optional[float] = None,
) -> CompositeStructure:
    """Parse SPICES notation with a fresh composer."""
    composer = SpicesComposer(available_particles, is_monomer, defaults)
    return composer.parse(text, first_points, last_points, bond_length, start_index)


__all__ = [
    "DEFAULT_SPICES_POLICY",
    "resolve_policy",
    "split_parts",
    "SpicesComposer",
    "parse_spices",
]
