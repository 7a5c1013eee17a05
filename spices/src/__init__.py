"""
SPICES Source Package

Tokenizer, grammar validator, structure expander, particle indexer,
connectivity builder, graph analysis, segment enumeration, coordinate
assignment and the multi-part composer.
"""

from .spices_tokens import Token, TokenKind

from .spices_errors import (
    ErrorCode,
    SpicesError,
    SpicesSyntaxError,
    SpicesValidationError,
)

from .spices_parser import (
    SpicesParser,
    SpicesTransformer,
    tokenize,
)

from .spices_validator import (
    validate_tokens,
    find_error,
)

from .spices_expander import ExpandedTokens, expand_tokens
from .spices_indexer import CurlySpan, IndexedUnit, index_particles
from .spices_connectivity import Connectivity, build_connectivity

from .spices_graph import (
    heuristic_diameter,
    shortest_path,
)

from .spices_segments import enumerate_segments
from .spices_coordinates import assign_coordinates, assign_structure_coordinates

from .spices_ir import (
    TokenStream,
    ParsedUnit,
    ParticleFrequency,
    CompositeStructure,
)

from .spices_compiler import SpicesCompiler, compile_part

from .spices_composer import (
    DEFAULT_SPICES_POLICY,
    SpicesComposer,
    split_parts,
    parse_spices,
)

__version__ = "1.0.0"

__all__ = [
    # Tokens and errors
    "Token",
    "TokenKind",
    "ErrorCode",
    "SpicesError",
    "SpicesSyntaxError",
    "SpicesValidationError",

    # Front end
    "SpicesParser",
    "SpicesTransformer",
    "tokenize",
    "validate_tokens",
    "find_error",

    # Pipeline stages
    "ExpandedTokens",
    "expand_tokens",
    "CurlySpan",
    "IndexedUnit",
    "index_particles",
    "Connectivity",
    "build_connectivity",

    # Analysis
    "heuristic_diameter",
    "shortest_path",
    "enumerate_segments",
    "assign_coordinates",
    "assign_structure_coordinates",

    # Results
    "TokenStream",
    "ParsedUnit",
    "ParticleFrequency",
    "CompositeStructure",

    # Compilation
    "SpicesCompiler",
    "compile_part",
    "DEFAULT_SPICES_POLICY",
    "SpicesComposer",
    "split_parts",
    "parse_spices",
]
