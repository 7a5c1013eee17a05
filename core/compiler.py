# compiler/base.py

from abc import ABC, abstractmethod
from typing import Any, Dict, Union
from pathlib import Path

"""
This file defines the base class for all DSL compilers.

A `DSLCompiler` takes DSL source code through a complete compilation pipeline:
1. Parsing (code - parse tree)
2. Transformation (parse tree - program)
3. Validation (check internal consistency)
4. Compilation (program - domain-specific output)

Subclasses must implement the `_compile` method to produce domain-specific outputs.
"""

class DSLCompiler(ABC):
    """
    Base class for compilers that turn DSL source code into structured output.
    Parses - transforms - validates - compiles.
    """

    def __init__(self, parser: Any, transformer: Any):
        """
        Initialize the compiler with a parser and a transformer.
        
        :param parser: Instance of a DSLParser
        :param transformer: Instance of a DSLTransformer
        """
        self.parser = parser
        self.transformer = transformer

    def front_end(self, code: str) -> Any:
        """
        Parse and transform source code into a program.
        Subclasses may override this to add caching or pre-checks.
        
        :param code: DSL source code as a string
        :return: Program representation
        """
        parse_tree = self.parser.parse(code)
        return self.transformer.transform(parse_tree)

    def to_dict(self, code: str) -> Dict[str, Any]:
        """
        Returns a dictionary representing all intermediate stages of compilation.
        Useful for debugging, visualization, or program introspection.
        
        :param code: DSL source code as a string
        :return: Dictionary with source code, parse tree, program, and compiler output
        """
        parse_tree = self.parser.parse(code)
        program = self.front_end(code)
        program.validate()
        output = self._compile(program)

        return {
            "source_code": code,
            "parse_tree": parse_tree,
            "ast": program,
            "compiler_output": output
        }

    @abstractmethod
    def _compile(self, program: Any) -> Any:
        """
        Subclasses must implement this method to define how the validated
        program is converted into the final output.
        
        :param program: The validated program representation
        :return: Final compiled output
        """
        pass

    def compile(self, code: Union[Path, str]) -> Any:
        """
        Runs the full compilation pipeline: parse - transform - validate - compile.
        
        :param code: DSL source code as a string or a file path
        :return: Final compiled output
        """
        if isinstance(code, Path):
            code = code.read_text()

        program = self.front_end(code)

        # Ensure the program implements and passes validation
        if hasattr(program, "validate"):
            program.validate()
        else:
            raise NotImplementedError("Program does not implement `validate()`.")

        return self._compile(program)
