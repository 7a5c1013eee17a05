"""
SPICES - line notation for coarse-grained particle structures

Parses, validates and converts SPICES notation (particles, bonds, branches,
ring closures, repeat units, monomers and multi-part assemblies) into an
explicit particle/connection matrix with optional 3D coordinates.
"""

__version__ = "1.0.0"
__author__ = "SPICES Development Team"
__description__ = "SPICES - line notation parser for coarse-grained particle structures"

from .src import *  # noqa: F401,F403
from .src import __all__
