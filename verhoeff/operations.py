"""
Public Verhoeff operations.

Every function normalises its input through ``verhoeff.digits`` and then
runs the checksum kernel. Input errors propagate as ``VerhoeffError``
subclasses; only the pattern-matcher adapter at the bottom of this module
turns them into ``False``.
"""

from functools import singledispatch
from typing import Optional
import logging

from .checksum import checksum, is_valid
from .digits import digits_from_text, to_digits
from .exceptions import VerhoeffError, WrongLengthError

logger = logging.getLogger(__name__)

AADHAAR_LENGTH = 12


def generate(value) -> int:
    """
    Calculate the check digit for a str, int or digit sequence.

    Examples:
        >>> generate("236")
        3
        >>> generate(12345)
        1
    """
    return checksum(to_digits(value))


def generate_string(value) -> str:
    """Same as :func:`generate`, returned as a one-character string."""
    return str(generate(value))


def validate(value) -> bool:
    """
    Validate a number whose last digit is its check digit.

    Raises:
        EmptyInputError: For "", [] or ()
        MalformedInputError: For text with non-digit characters
        InvalidDigitError: For sequences with elements outside 0..9

    Examples:
        >>> validate("2363")
        True
        >>> validate("2364")
        False
    """
    return is_valid(to_digits(value))


@singledispatch
def append(value):
    """
    Append the check digit to ``value``, keeping its representation.

    - str: original text plus the digit character, leading zeros preserved
    - int: decimal text of abs(value) plus the digit (a str, so a zero
      body keeps its digit: append(0) == "04")
    - list / tuple: a new list with the digit appended

    Examples:
        >>> append("00012")
        '000123'
        >>> append(12345)
        '123451'
    """
    raise TypeError(f"unsupported input type: {type(value).__name__}")


@append.register(str)
def _(value: str) -> str:
    return value + str(generate(value))


@append.register(int)
def _(value: int) -> str:
    return str(abs(value)) + str(generate(value))


@append.register(bool)
def _(value: bool):
    raise TypeError("unsupported input type: bool")


@append.register(list)
@append.register(tuple)
def _(value) -> list:
    digits = to_digits(value)
    digits.append(checksum(digits))
    return digits


def validate_fixed_length(text: str, required_length: int = AADHAAR_LENGTH) -> bool:
    """
    Validate a digit string that must have exactly ``required_length`` characters.

    The length is checked on the raw text before any digit parsing, so a
    wrong-length input fails with WrongLengthError whatever its content.

    Args:
        text: Identifier including its check digit, no separators
        required_length: Expected number of characters (12 for Aadhaar)

    Returns:
        True if the check digit matches, False otherwise

    Raises:
        TypeError: If text is not a string
        WrongLengthError: If len(text) != required_length
        MalformedInputError: If text contains non-digit characters
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")

    if len(text) != required_length:
        logger.debug(f"validate_fixed_length rejected wrong length: {len(text)} (expected {required_length})")
        raise WrongLengthError(required_length, len(text))

    return is_valid(digits_from_text(text))


def validate_aadhaar(text: str) -> bool:
    """Validate a bare 12-digit Aadhaar number (UIDAI uses Verhoeff)."""
    return validate_fixed_length(text, AADHAAR_LENGTH)


def suggest_correction(text: str) -> Optional[str]:
    """
    Suggest the corrected form of a digit string that fails validation.

    The last character is treated as a wrong check digit and replaced.

    Returns:
        Body plus correct check digit, or None if text already validates or
        is too short to have a body

    Example:
        >>> suggest_correction("2364")
        '2363'
    """
    if len(text) < 2 or validate(text):
        return None
    body = text[:-1]
    return append(body)


# ============================================================================
# Pattern-matcher adapter
# ============================================================================
# Presidio validators must return True (valid) or False (invalid), never raise
# ============================================================================

def checksum_aadhaar(text: str) -> bool:
    """Presidio validator wrapper for Aadhaar checksum."""
    if not isinstance(text, str):
        logger.debug(f"checksum_aadhaar rejected invalid type {type(text).__name__}")
        return False

    try:
        return validate_aadhaar(text.replace("-", "").replace(" ", ""))
    except VerhoeffError as e:
        logger.debug(f"checksum_aadhaar rejected invalid input: {e}")
        return False


__all__ = [
    "AADHAAR_LENGTH",
    "generate",
    "generate_string",
    "validate",
    "append",
    "validate_fixed_length",
    "validate_aadhaar",
    "suggest_correction",
    "checksum_aadhaar",
]
