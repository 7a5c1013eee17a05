#!/usr/bin/env python3
"""
Parse SPICES Structures from the Command Line

Prints one JSON summary per structure: validity, error code, particle matrix,
frequencies and optional segments / coordinates.

Usage:
    spices "A-B(C)-D" "<A>2<B-C>" --segments 3
    spices "{A[HEAD]-B[TAIL]}" --monomer
    spices "A-B-C" --first 0 0 0 --last 4 0 0 --bond-length 1.5
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .spices_composer import DEFAULT_SPICES_POLICY, SpicesComposer
from .spices_ir import CompositeStructure

logger = logging.getLogger(__name__)


def summarize(structure: CompositeStructure, segment_length: int = 0, both_directions: bool = False) -> Dict[str, Any]:
    """Plain-value summary of a parse result."""
    summary: Dict[str, Any] = {
        "input": structure.text,
        "valid": structure.is_valid,
    }
    if not structure.is_valid:
        summary["error"] = structure.error.value
        summary["message"] = structure.error_message
        summary["position"] = structure.error_position
        return summary

    summary.update({
        "parts": list(structure.part_texts),
        "particles": structure.particle_count,
        "display_particles": structure.display_particle_count,
        "max_degree": structure.max_degree,
        "max_backbone_index": structure.max_backbone_index,
        "monomers": list(structure.monomers),
        "frequencies": {f.particle: f.frequency for f in structure.frequencies},
        "matrix": [list(row) for row in structure.matrix],
    })
    if segment_length > 0:
        summary["segments"] = structure.segments(segment_length, both_directions)
    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate SPICES line notation and print the particle matrix",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('structures', nargs='+', help='SPICES structures to parse')
    parser.add_argument('--monomer', action='store_true', help='Treat inputs as monomer definitions')
    parser.add_argument('--available', nargs='*', default=None, help='Allowed particle names')
    parser.add_argument('--start-index', type=int, default=DEFAULT_SPICES_POLICY["start_index"],
                        help='Number of the first particle in the matrix')
    parser.add_argument('--segments', type=int, default=0, help='Enumerate segments up to this length')
    parser.add_argument('--both-directions', action='store_true', help='Keep reversed segments')
    parser.add_argument('--first', type=float, nargs=3, metavar=('X', 'Y', 'Z'), help='First particle anchor')
    parser.add_argument('--last', type=float, nargs=3, metavar=('X', 'Y', 'Z'), help='Last particle anchor')
    parser.add_argument('--bond-length', type=float, default=DEFAULT_SPICES_POLICY["bond_length"],
                        help='Bond length for coordinates')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if (args.first is None) != (args.last is None):
        logger.error("--first and --last must be given together")
        return 2

    composer = SpicesComposer(
        available_particles=set(args.available) if args.available is not None else None,
        is_monomer=args.monomer,
    )
    invalid = 0
    for text in args.structures:
        structure = composer.parse(
            text,
            first_points=args.first,
            last_points=args.last,
            bond_length=args.bond_length,
            start_index=args.start_index,
        )
        if not structure.is_valid:
            invalid += 1
        print(json.dumps(summarize(structure, args.segments, args.both_directions)))

    logger.info("Parsed %d structure(s), %d invalid", len(args.structures), invalid)
    return 1 if invalid else 0


if __name__ == '__main__':
    sys.exit(main())
