from typing import Any

from lark import Lark
from lark import Transformer

"""
This file defines the core parsing logic shared by the DSL front ends.

`DSLParser` is responsible for loading a Lark grammar file and converting raw
source text into a parse tree using the Lark parsing library.

`DSLTransformer` is a base class for transforming the Lark parse tree into
structured Python values. Each front end subclasses this transformer to define
how grammar rules and terminals map to its own data types.
"""

class DSLParser():
    def __init__(self, grammar_file: str, start_symbol: str, parser: str = 'earley',
                 lexer: str = 'dynamic', **options: Any):
        """
        Initialize the DSL parser by loading the grammar
        and setting up the Lark parser.
        
        :param grammar_file: Path to the Lark grammar file
        :param start_symbol: The start symbol for grammar parsing
        :param parser: Lark parsing algorithm ('earley' or 'lalr')
        :param lexer: Lark lexer ('dynamic' only works with earley)
        :param options: Extra keyword arguments passed to Lark
        """
        # Read the grammar definition from file
        with open(grammar_file, 'r') as f:
            grammar = f.read()

        self.grammar_file = grammar_file
        self.start_symbol = start_symbol
        options.setdefault('maybe_placeholders', False)
        options.setdefault('propagate_positions', False)
        self.parser = Lark(grammar, start=start_symbol, parser=parser, lexer=lexer, **options)

    def parse(self, code: str):
        """
        Parse the given source text and return the Lark parse tree.
        
        :param code: Source text as a string
        :return: The resulting parse tree
        """
        tree = self.parser.parse(code)
        return tree

class DSLTransformer(Transformer):
    """
    A generic base transformer class based on Lark's Transformer,
    used to convert a Lark parse tree into Python values.
    Subclasses implement rule and terminal callbacks.
    """
    def __init__(self):
        super().__init__(visit_tokens=True)
