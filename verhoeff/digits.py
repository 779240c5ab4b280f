"""
Digit extraction for the Verhoeff checksum.

Converts the supported input shapes (digit text, Python integers and explicit
digit sequences) into one canonical form: a list of ints in 0..9,
most-significant digit first. The checksum kernel only ever sees that form.

Text input is strict: separators are NOT skipped here. A space or dash is
a malformed character; strip separators before calling in.
"""

from functools import singledispatch
from typing import Iterable, List
import logging

from .exceptions import InvalidDigitError, MalformedInputError

logger = logging.getLogger(__name__)


def digits_from_text(text: str) -> List[int]:
    """
    Convert a string of decimal digit characters to a digit list.

    Any Unicode decimal digit is accepted (``str.isdecimal``), so full-width
    or Devanagari digits map to their numeric value.

    Args:
        text: Digit string, possibly empty

    Returns:
        List of ints in original left-to-right order ([] for "")

    Raises:
        MalformedInputError: If any character is not a decimal digit

    Example:
        >>> digits_from_text("0123")
        [0, 1, 2, 3]
    """
    digits = []
    for position, character in enumerate(text):
        if not character.isdecimal():
            logger.debug(f"digits_from_text rejected character {character!r} at position {position}")
            raise MalformedInputError(character, position)
        digits.append(int(character))
    return digits


def digits_from_integer(number: int) -> List[int]:
    """
    Decompose an integer into its decimal digits, most-significant first.

    Zero yields [0]. Negative numbers are normalised with abs(); the sign
    carries no meaning for identifiers and is dropped.

    Example:
        >>> digits_from_integer(2360)
        [2, 3, 6, 0]
    """
    if number < 0:
        logger.debug("digits_from_integer dropped the sign of a negative integer")
        number = -number

    if number == 0:
        return [0]

    digits = []
    while number:
        number, digit = divmod(number, 10)
        digits.append(digit)
    digits.reverse()
    return digits


def digits_from_sequence(values: Iterable[int]) -> List[int]:
    """
    Check an explicit digit sequence and return it as a new list.

    Raises:
        InvalidDigitError: If an element is not an int in 0..9 (bools are rejected)
    """
    digits = []
    for index, value in enumerate(values):
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 9:
            logger.debug(f"digits_from_sequence rejected {value!r} at index {index}")
            raise InvalidDigitError(value, index)
        digits.append(value)
    return digits


@singledispatch
def to_digits(value) -> List[int]:
    """
    Normalise any supported input into a canonical digit list.

    Registered for str, int, list and tuple. Anything else raises TypeError.
    """
    raise TypeError(f"unsupported input type: {type(value).__name__}")


@to_digits.register(str)
def _(value: str) -> List[int]:
    return digits_from_text(value)


@to_digits.register(int)
def _(value: int) -> List[int]:
    return digits_from_integer(value)


@to_digits.register(bool)
def _(value: bool) -> List[int]:
    raise TypeError("unsupported input type: bool")


@to_digits.register(list)
@to_digits.register(tuple)
def _(value) -> List[int]:
    return digits_from_sequence(value)


def reversed_digits(value) -> List[int]:
    """Normalise ``value`` and return its digits units-first."""
    digits = to_digits(value)
    digits.reverse()
    return digits


__all__ = [
    "digits_from_text",
    "digits_from_integer",
    "digits_from_sequence",
    "to_digits",
    "reversed_digits",
]
