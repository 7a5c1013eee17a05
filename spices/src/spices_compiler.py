#!/usr/bin/env python3
"""
SPICES Part Compiler

Runs one part through the core DSL pipeline:

    tokenize (cached) -> TokenStream.validate() -> expand -> index -> connect

and returns an immutable ParsedUnit.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Any, Dict, Optional

from core.compiler import DSLCompiler

from .spices_connectivity import build_connectivity
from .spices_expander import expand_tokens
from .spices_indexer import index_particles
from .spices_ir import ParsedUnit, TokenStream
from .spices_parser import SpicesTransformer, default_parser, strip_whitespace, tokenize

logger = logging.getLogger(__name__)


class SpicesCompiler(DSLCompiler):
    """
    Compiles the text of a single part (no angle brackets) into a ParsedUnit.
    """

    def __init__(self, is_monomer: bool = False, available_particles: Optional[AbstractSet[str]] = None):
        """
        Args:
            is_monomer: Parts are monomer definitions '{...}'
            available_particles: Allowed particle names, None allows all
        """
        super().__init__(default_parser(), SpicesTransformer())
        self.is_monomer = is_monomer
        self.available_particles = frozenset(available_particles) if available_particles is not None else None

    def front_end(self, code: str) -> TokenStream:
        return TokenStream(
            text=strip_whitespace(code),
            tokens=tokenize(code),
            is_monomer=self.is_monomer,
            available_particles=self.available_particles,
        )

    def _compile(self, program: TokenStream) -> ParsedUnit:
        expanded = expand_tokens(program.tokens)
        indexed = index_particles(expanded)
        connectivity = build_connectivity(indexed)
        logger.debug(
            "Compiled part %r: %d particles, %d edges",
            program.text, indexed.particle_count, len(connectivity.edges),
        )
        return ParsedUnit(
            text=program.text,
            tokens=program.tokens,
            expanded_tokens=indexed.tokens,
            particle_names=indexed.particle_names,
            particle_positions=indexed.particle_positions,
            particle_multipliers=indexed.particle_multipliers,
            ordinal_of=indexed.ordinal_of,
            backbone_indices=indexed.backbone_indices,
            ring_closures=indexed.ring_closures,
            edges=connectivity.edges,
            adjacency=connectivity.adjacency,
            start=indexed.start,
            end=indexed.end,
        )

    def summary(self, code: str) -> Dict[str, Any]:
        """Compilation stages as plain values, for debugging."""
        stages = self.to_dict(code)
        unit = stages["compiler_output"]
        return {
            "source_code": code,
            "tokens": [token.text for token in stages["ast"].tokens],
            "expanded": "".join(token.text for token in unit.expanded_tokens),
            "particles": list(unit.particle_names),
            "adjacency": [list(neighbors) for neighbors in unit.adjacency],
        }


def compile_part(text: str, is_monomer: bool = False, available_particles: Optional[AbstractSet[str]] = None) -> ParsedUnit:
    """Compile one part; raises SpicesError on invalid notation."""
    return SpicesCompiler(is_monomer, available_particles).compile(text)


__all__ = ["SpicesCompiler", "compile_part"]
