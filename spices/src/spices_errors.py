#!/usr/bin/env python3
"""
SPICES Error Catalog

Every validation failure maps to exactly one ErrorCode. The enum value is the
stable message key callers use for their own localization tables; ``message``
gives a default English text.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    # Input level
    NO_TOKENS = "NoTokens"
    INVALID_CHARACTER = "InvalidCharacter"
    INVALID_WHITE_SPACE = "InvalidWhiteSpace"
    NO_MONOMER = "NoMonomer"

    # Angle brackets (parts)
    MISSING_CLOSING_ANGLE_BRACKET = "MissingClosingAngleBracket"
    MISSING_OPENING_ANGLE_BRACKET = "MissingOpeningAngleBracket"
    EMPTY_ANGLE_BRACKETS = "EmptyAngleBrackets"
    INVALID_CHARACTER_PRIOR_ANGULAR_BRACKET = "InvalidCharacterPriorAngularBracket"
    INVALID_PARTICLE_AFTER_ANGLE_CLOSING_BRACKET = "InvalidParticleAfterAngleClosingBracket"

    # Curly brackets (monomers)
    MISSING_CLOSING_CURLY_BRACKET = "MissingClosingCurlyBracket"
    MISSING_OPENING_CURLY_BRACKET = "MissingOpeningCurlyBracket"
    EMPTY_CURLY_BRACKETS = "EmptyCurlyBrackets"

    # Normal brackets (branches)
    MISSING_CLOSING_NORMAL_BRACKET = "MissingClosingNormalBracket"
    MISSING_OPENING_NORMAL_BRACKET = "MissingOpeningNormalBracket"
    EMPTY_NORMAL_BRACKETS = "EmptyNormalBrackets"
    IN_SERIES_OF_NORMAL_OPENING_BRACKETS = "InSeriesOfNormalOpeningBrackets"

    # Square brackets (tags)
    MISSING_CLOSING_ANGULAR_BRACKET = "MissingClosingAngularBracket"
    MISSING_OPENING_ANGULAR_BRACKET = "MissingOpeningAngularBracket"
    INVALID_CHARACTER_BETWEEN_ANGULAR_BRACKETS = "InvalidCharacterBetweenAngularBrackets"

    # First / last token
    INVALID_FIRST_CHARACTER_OF_STRUCTURE = "InvalidFirstCharacterOfStructure"
    INVALID_FIRST_CHARACTER_OF_MONOMER = "InvalidFirstCharacterOfMonomer"
    INVALID_LAST_CHARACTER_OF_STRUCTURE = "InvalidLastCharacterOfStructure"
    INVALID_LAST_CHARACTER_OF_MONOMER = "InvalidLastCharacterOfMonomer"
    INVALID_LAST_CHARACTER = "InvalidLastCharacter"

    # Ring closures
    MISSING_RING_CLOSURE = "MissingRingClosure"
    TOO_MANY_RING_CLOSURES = "TooManyRingClosures"

    # Tags
    MISSING_HEAD_ATTRIBUTE = "MissingHeadAttribute"
    MISSING_TAIL_ATTRIBUTE = "MissingTailAttribute"
    MISSING_HEAD_OR_TAIL_ATTRIBUTE = "MissingHeadOrTailAttribute"
    TOO_MANY_HEAD = "TooManyHead"
    TOO_MANY_TAIL = "TooManyTail"
    MISSING_START_ATTRIBUTE = "MissingStartAttribute"
    MISSING_END_ATTRIBUTE = "MissingEndAttribute"
    TOO_MANY_START_TAG = "TooManyStartTag"
    TOO_MANY_END_TAG = "TooManyEndTag"
    START_ATTRIBUTE_IN_MONOMER = "StartAttributeInMonomer"
    END_ATTRIBUTE_IN_MONOMER = "EndAttributeInMonomer"
    ILLEGAL_USING_OF_HEAD_OR_TAIL = "IllegalUsingOfHeadOrTail"

    # Backbone indices
    BACKBONE_INDEX_IN_MONOMER = "BackboneIndexInMonomer"
    ILLEGAL_BACKBONE_INDEX_FORMAT = "IllegalBackboneIndexFormat"
    MISSING_BACKBONE_INDEX = "MissingBackboneIndex"
    TOO_LESS_BACKBONE_INDEX = "TooLessBackboneIndex"
    ZERO_IN_BACKBONE_INDEX = "ZeroInBackboneIndex"
    REDUNDANCY_OF_BACKBONE_INDICES = "RedundancyOfBackboneIndices"
    MULTIPLE_BACKBONE_INDICES = "MultipleBackboneIndices"
    INVALID_POSITION_OF_BACKBONE_INDEX = "InvalidPositionOfBackboneIndex"
    MISSING_A_CONNECTION_AFTER_BACKBONE_INDEX = "MissingAConnectionAfterBackboneIndex"

    # Particles, numbers, monomers
    INVALID_PARTICLE_NAME = "InvalidParticleName"
    ILLEGAL_FREQUENCY = "IllegalFrequency"
    MISSING_PARTICLE_AFTER_NUMBER = "MissingParticleAfterNumber"
    MONOMER_IN_MONOMER = "MonomerInMonomer"
    MONOMER_AFTER_MONOMER = "MonomerAfterMonomer"
    MONOMER_AFTER_HEAD_OR_TAIL = "MonomerAfterHeadOrTail"
    MONOMER_INSIDE_OF_CURLY_BRACKET = "MonomerInsideOfCurlyBracket"

    # Token adjacency
    INVALID_PARTICLE_AFTER_PARTICLE = "InvalidParticleAfterParticle"
    INVALID_PARTICLE_AFTER_MONOMER = "InvalidParticleAfterMonomer"
    INVALID_PARTICLE_AFTER_CONNECTION = "InvalidParticleAfterConnection"
    INVALID_PARTICLE_AFTER_RING_CLOSURE = "InvalidParticleAfterRingClosure"
    INVALID_PARTICLE_AFTER_HEAD_TAIL = "InvalidParticleAfterHeadTail"
    INVALID_PARTICLE_AFTER_START_END = "InvalidParticleAfterStartEnd"
    INVALID_PARTICLE_AFTER_NORMAL_OPENING_BRACKET = "InvalidParticleAfterNormalOpeningBracket"
    INVALID_PARTICLE_AFTER_NORMAL_CLOSING_BRACKET = "InvalidParticleAfterNormalClosingBracket"
    INVALID_PARTICLE_AFTER_CURLY_OPENING_BRACKET = "InvalidParticleAfterCurlyOpeningBracket"
    INVALID_PARTICLE_AFTER_CURLY_CLOSING_BRACKET = "InvalidParticleAfterCurlyClosingBracket"
    INVALID_PARTICLE_PRIOR_NORMAL_BRACKET = "InvalidParticlePriorNormalBracket"
    MISSING_A_CONNECTION_AFTER_HEAD_OR_TAIL = "MissingAConnectionAfterHeadOrTail"
    MISSING_A_CONNECTION_AFTER_NORMAL_CLOSING_BRACKET = "MissingAConnectionAfterNormalClosingBracket"
    MISSING_A_CONNECTION_PRIOR_CURLY_OPENING_BRACKET = "MissingAConnectionPriorCurlyOpeningBracket"
    MISSING_A_PARTICLE_PRIOR_CONNECTION = "MissingAParticlePriorConnection"
    MISSING_A_PARTICLE_PRIOR_HEAD_OR_TAIL = "MissingAParticlePriorHeadOrTail"
    MISSING_A_PARTICLE_PRIOR_NORMAL_CLOSING_BRACKET = "MissingAParticlePriorNormalClosingBracket"
    MISSING_A_PARTICLE_PRIOR_RING_CLOSURE = "MissingAParticlePriorRingClosure"
    MISSING_PARTICLE_PRIOR_CONNECTION = "MissingParticlePriorConnection"
    MISSING_PARTICLE_BETWEEN_TWO_CONNECTIONS = "MissingParticleBetweenTwoConnections"
    MISSING_PARTICLE_BETWEEN_CONNECTION_AND_HEAD_OR_TAIL = "MissingParticleBetweenConnectionAndHeadOrTail"
    MISSING_PARTICLE_BETWEEN_CONNECTION_AND_NORMAL_OPENING_BRACKET = "MissingParticleBetweenConnectionAndNormalOpeningBracket"
    MISSING_PARTICLE_BETWEEN_CONNECTION_AND_NORMAL_CLOSING_BRACKET = "MissingParticleBetweenConnectionAndNormalClosingBracket"
    MISSING_PARTICLE_BETWEEN_CONNECTION_AND_RING_CLOSURE = "MissingParticleBetweenConnectionAndRingClosure"

    # Connectivity
    MISSING_CONNECTION = "MissingConnection"
    STRUCTURE_NOT_ONE_PART = "StructureNotOnePart"

    @property
    def message(self) -> str:
        return ERROR_MESSAGES.get(self, self.value)


ERROR_MESSAGES = {
    ErrorCode.NO_TOKENS: "Structure is empty.",
    ErrorCode.INVALID_CHARACTER: "Structure contains an invalid character.",
    ErrorCode.INVALID_WHITE_SPACE: "White space between two letters or digits is not allowed.",
    ErrorCode.NO_MONOMER: "A monomer definition must be enclosed in curly brackets.",
    ErrorCode.MISSING_CLOSING_ANGLE_BRACKET: "Missing closing angle bracket '>'.",
    ErrorCode.MISSING_OPENING_ANGLE_BRACKET: "Missing opening angle bracket '<'.",
    ErrorCode.EMPTY_ANGLE_BRACKETS: "Empty angle brackets '<>'.",
    ErrorCode.INVALID_CHARACTER_PRIOR_ANGULAR_BRACKET: "Only a frequency may precede an opening angle bracket.",
    ErrorCode.INVALID_PARTICLE_AFTER_ANGLE_CLOSING_BRACKET: "Invalid character after closing angle bracket.",
    ErrorCode.MISSING_CLOSING_CURLY_BRACKET: "Missing closing curly bracket '}'.",
    ErrorCode.MISSING_OPENING_CURLY_BRACKET: "Missing opening curly bracket '{'.",
    ErrorCode.EMPTY_CURLY_BRACKETS: "Empty curly brackets '{}'.",
    ErrorCode.MISSING_CLOSING_NORMAL_BRACKET: "Missing closing bracket ')'.",
    ErrorCode.MISSING_OPENING_NORMAL_BRACKET: "Missing opening bracket '('.",
    ErrorCode.EMPTY_NORMAL_BRACKETS: "Empty brackets '()'.",
    ErrorCode.IN_SERIES_OF_NORMAL_OPENING_BRACKETS: "Two opening brackets '((' in series.",
    ErrorCode.MISSING_CLOSING_ANGULAR_BRACKET: "Missing closing square bracket ']'.",
    ErrorCode.MISSING_OPENING_ANGULAR_BRACKET: "Missing opening square bracket '['.",
    ErrorCode.INVALID_CHARACTER_BETWEEN_ANGULAR_BRACKETS: "Invalid content between square brackets.",
    ErrorCode.INVALID_FIRST_CHARACTER_OF_STRUCTURE: "Invalid first character of structure.",
    ErrorCode.INVALID_FIRST_CHARACTER_OF_MONOMER: "Invalid first character of monomer.",
    ErrorCode.INVALID_LAST_CHARACTER_OF_STRUCTURE: "Invalid last character of structure.",
    ErrorCode.INVALID_LAST_CHARACTER_OF_MONOMER: "Invalid last character of monomer.",
    ErrorCode.INVALID_LAST_CHARACTER: "Invalid last character.",
    ErrorCode.MISSING_RING_CLOSURE: "Ring closure is missing its partner.",
    ErrorCode.TOO_MANY_RING_CLOSURES: "Ring closure number is used more than twice.",
    ErrorCode.MISSING_HEAD_ATTRIBUTE: "Monomer has no [HEAD].",
    ErrorCode.MISSING_TAIL_ATTRIBUTE: "Monomer has no [TAIL].",
    ErrorCode.MISSING_HEAD_OR_TAIL_ATTRIBUTE: "Monomer needs [HEAD] and [TAIL].",
    ErrorCode.TOO_MANY_HEAD: "Monomer has more than one [HEAD].",
    ErrorCode.TOO_MANY_TAIL: "Monomer has more than one [TAIL].",
    ErrorCode.MISSING_START_ATTRIBUTE: "[END] requires a [START].",
    ErrorCode.MISSING_END_ATTRIBUTE: "[START] requires an [END].",
    ErrorCode.TOO_MANY_START_TAG: "More than one [START].",
    ErrorCode.TOO_MANY_END_TAG: "More than one [END].",
    ErrorCode.START_ATTRIBUTE_IN_MONOMER: "[START] is not allowed in a monomer.",
    ErrorCode.END_ATTRIBUTE_IN_MONOMER: "[END] is not allowed in a monomer.",
    ErrorCode.ILLEGAL_USING_OF_HEAD_OR_TAIL: "[HEAD] and [TAIL] are only allowed in a monomer.",
    ErrorCode.BACKBONE_INDEX_IN_MONOMER: "Backbone indices are not allowed in a monomer.",
    ErrorCode.ILLEGAL_BACKBONE_INDEX_FORMAT: "Backbone index must be a positive integer.",
    ErrorCode.MISSING_BACKBONE_INDEX: "Backbone indices are incomplete.",
    ErrorCode.TOO_LESS_BACKBONE_INDEX: "At least two backbone indices are required.",
    ErrorCode.ZERO_IN_BACKBONE_INDEX: "Backbone index 0 is not allowed.",
    ErrorCode.REDUNDANCY_OF_BACKBONE_INDICES: "Backbone index is used more than once.",
    ErrorCode.MULTIPLE_BACKBONE_INDICES: "A particle carries more than one backbone index.",
    ErrorCode.INVALID_POSITION_OF_BACKBONE_INDEX: "Backbone index must follow a particle.",
    ErrorCode.MISSING_A_CONNECTION_AFTER_BACKBONE_INDEX: "Missing connection after backbone index.",
    ErrorCode.INVALID_PARTICLE_NAME: "Invalid particle name.",
    ErrorCode.ILLEGAL_FREQUENCY: "Frequency must be greater than zero.",
    ErrorCode.MISSING_PARTICLE_AFTER_NUMBER: "Missing particle after number.",
    ErrorCode.MONOMER_IN_MONOMER: "A monomer may not contain another monomer.",
    ErrorCode.MONOMER_AFTER_MONOMER: "Missing connection between two monomers.",
    ErrorCode.MONOMER_AFTER_HEAD_OR_TAIL: "Monomer directly after [HEAD] or [TAIL].",
    ErrorCode.MONOMER_INSIDE_OF_CURLY_BRACKET: "Monomer inside of curly brackets.",
    ErrorCode.MISSING_CONNECTION: "Structure has disconnected parts.",
    ErrorCode.STRUCTURE_NOT_ONE_PART: "Structure does not form one part.",
}


# ==========================================================================
# Exceptions
# ==========================================================================


class SpicesError(ValueError):
    """Base error for malformed SPICES notation."""

    def __init__(self, code: ErrorCode, position: Optional[int] = None, detail: Optional[str] = None):
        self.code = code
        self.position = position
        self.detail = detail
        message = code.message
        if position is not None:
            message = f"{message} (position {position})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class SpicesSyntaxError(SpicesError):
    """Raised by the tokenizer and the part splitter."""


class SpicesValidationError(SpicesError):
    """Raised by the grammar validator."""


__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "SpicesError",
    "SpicesSyntaxError",
    "SpicesValidationError",
]
