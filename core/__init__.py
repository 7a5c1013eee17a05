"""
Core DSL framework: Lark-based parser wrapper, transformer base class,
compiler pipeline and program base class.
"""

from .parser import DSLParser, DSLTransformer
from .compiler import DSLCompiler
from .dataclass import DSLProgram

__all__ = ["DSLParser", "DSLTransformer", "DSLCompiler", "DSLProgram"]
