#!/usr/bin/env python3
"""
SPICES Tokenizer

Turns raw SPICES notation into a tuple of classified tokens:

* Raw-text checks that the lexer cannot express (allowed character set,
  white space between two alphanumeric characters)
* Lexing through the Lark grammar in spices.lark via the core DSLParser
* SpicesTransformer maps Lark terminals to the Token tagged union
* tokenize() memoizes results per distinct input string
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from lark import Token as LarkToken
from lark.exceptions import UnexpectedInput

from core.parser import DSLParser, DSLTransformer

from .spices_errors import ErrorCode, SpicesSyntaxError
from .spices_tokens import MAX_PARTICLE_NAME_LENGTH, TAG_KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

GRAMMAR_FILE = Path(__file__).parent / "spices.lark"

ALLOWED_CHARACTERS = re.compile(r"[0-9a-zA-Z{}#()\[\]<>\-'\s]+")
WHITESPACE_BETWEEN_ALPHANUMERICS = re.compile(r"[A-Za-z0-9]\s+[A-Za-z0-9]")
WHITESPACE = re.compile(r"\s+")
DIGITS = re.compile(r"[0-9]+")


class SpicesParser(DSLParser):
    """
    Lexer for SPICES notation built on the core DSLParser.

    The grammar is a flat token sequence, so the LALR parser with the basic
    lexer is used; terminal priorities resolve '#Name' against '#', '[..]'
    against '[' and "'..'" against "'".
    """

    def __init__(self, grammar_file: Optional[str] = None, start_symbol: str = "start"):
        if grammar_file is None:
            grammar_file = str(GRAMMAR_FILE)
        super().__init__(grammar_file, start_symbol, parser="lalr", lexer="basic")

    def parse(self, code: str):
        try:
            return super().parse(code)
        except UnexpectedInput as e:
            raise SpicesSyntaxError(ErrorCode.INVALID_CHARACTER, getattr(e, "pos_in_stream", None)) from e


class SpicesTransformer(DSLTransformer):
    """Transform the Lark token sequence into a tuple of SPICES tokens."""

    def start(self, items):
        return tuple(items)

    def MONOMER(self, token: LarkToken) -> Token:
        return Token(TokenKind.MONOMER, str(token), None, token.start_pos)

    def BAD_MONOMER(self, token: LarkToken) -> Token:
        return Token(TokenKind.UNKNOWN, str(token), None, token.start_pos)

    def PARTICLE(self, token: LarkToken) -> Token:
        text = str(token)
        kind = TokenKind.PARTICLE if len(text) <= MAX_PARTICLE_NAME_LENGTH else TokenKind.UNKNOWN
        return Token(kind, text, None, token.start_pos)

    def LOWER_NAME(self, token: LarkToken) -> Token:
        return Token(TokenKind.UNKNOWN, str(token), None, token.start_pos)

    def NUMBER(self, token: LarkToken) -> Token:
        return Token(TokenKind.NUMBER, str(token), int(token), token.start_pos)

    def TAG(self, token: LarkToken) -> Token:
        text = str(token)
        content = text[1:-1]
        if DIGITS.fullmatch(content):
            return Token(TokenKind.RING_CLOSURE, text, int(content), token.start_pos)
        if content in TAG_KEYWORDS:
            return Token(TAG_KEYWORDS[content], text, None, token.start_pos)
        return Token(TokenKind.INVALID_TAG, text, None, token.start_pos)

    def BACKBONE(self, token: LarkToken) -> Token:
        text = str(token)
        content = text[1:-1]
        if DIGITS.fullmatch(content):
            return Token(TokenKind.BACKBONE_INDEX, text, int(content), token.start_pos)
        return Token(TokenKind.INVALID_BACKBONE, text, None, token.start_pos)

    def __default_token__(self, token: LarkToken) -> Token:
        # Single-character terminals: kind value equals the character
        return Token(TokenKind(str(token)), str(token), None, token.start_pos)


@lru_cache(maxsize=None)
def default_parser() -> SpicesParser:
    return SpicesParser()


def check_raw_text(text: str) -> None:
    """
    Checks on the raw input that happen before white space is removed.

    Raises:
        SpicesSyntaxError: INVALID_WHITE_SPACE or INVALID_CHARACTER
    """
    match = WHITESPACE_BETWEEN_ALPHANUMERICS.search(text)
    if match:
        raise SpicesSyntaxError(ErrorCode.INVALID_WHITE_SPACE, match.start() + 1)
    if text and not ALLOWED_CHARACTERS.fullmatch(text):
        bad = next(i for i, ch in enumerate(text) if not ALLOWED_CHARACTERS.fullmatch(ch))
        raise SpicesSyntaxError(ErrorCode.INVALID_CHARACTER, bad, repr(text[bad]))


def strip_whitespace(text: str) -> str:
    return WHITESPACE.sub("", text)


@lru_cache(maxsize=4096)
def tokenize(text: str) -> Tuple[Token, ...]:
    """
    Tokenize SPICES notation.

    Args:
        text: Raw notation, possibly containing white space

    Returns:
        Tuple of tokens; positions refer to the white-space-free text

    Raises:
        SpicesSyntaxError: For invalid characters or illegal white space
    """
    check_raw_text(text)
    compact = strip_whitespace(text)
    if not compact:
        return ()
    tree = default_parser().parse(compact)
    tokens = SpicesTransformer().transform(tree)
    logger.debug("Tokenized %r into %d tokens", compact, len(tokens))
    return tokens


__all__ = [
    "GRAMMAR_FILE",
    "SpicesParser",
    "SpicesTransformer",
    "default_parser",
    "check_raw_text",
    "strip_whitespace",
    "tokenize",
]
