"""
Verhoeff Checksum Kernel
Version: 1.0.0

The Verhoeff algorithm computes one check digit over a base-10 digit
sequence using arithmetic in the dihedral group D5. It detects:
- every single-digit substitution error
- every transposition of two adjacent digits

Positions are counted from the units digit, so the digit sequence is folded
right to left. Generation and validation are the same fold; generation
starts at permutation row 1 because the not-yet-appended check digit will
occupy position 0.

References:
- J. Verhoeff, "Error Detecting Decimal Codes" (1969)
- https://en.wikipedia.org/wiki/Verhoeff_algorithm
"""

from typing import Sequence
import logging

from .exceptions import EmptyInputError

logger = logging.getLogger(__name__)

# Multiplication table of D5: D[j][k] is the group product j * k
D = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 2, 3, 4, 0, 6, 7, 8, 9, 5),
    (2, 3, 4, 0, 1, 7, 8, 9, 5, 6),
    (3, 4, 0, 1, 2, 8, 9, 5, 6, 7),
    (4, 0, 1, 2, 3, 9, 5, 6, 7, 8),
    (5, 9, 8, 7, 6, 0, 4, 3, 2, 1),
    (6, 5, 9, 8, 7, 1, 0, 4, 3, 2),
    (7, 6, 5, 9, 8, 2, 1, 0, 4, 3),
    (8, 7, 6, 5, 9, 3, 2, 1, 0, 4),
    (9, 8, 7, 6, 5, 4, 3, 2, 1, 0),
)

# Permutation table: row i is the base permutation applied i times
P = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 5, 7, 6, 2, 8, 3, 0, 9, 4),
    (5, 8, 0, 3, 7, 9, 6, 1, 4, 2),
    (8, 9, 1, 6, 0, 4, 3, 5, 2, 7),
    (9, 4, 5, 3, 1, 2, 6, 8, 7, 0),
    (4, 2, 8, 6, 5, 7, 3, 9, 0, 1),
    (2, 7, 9, 3, 8, 0, 6, 4, 1, 5),
    (7, 0, 4, 6, 9, 1, 3, 2, 5, 8),
)

# Inverse table: INV[j] * j == 0 in D5
INV = (0, 4, 3, 2, 1, 5, 6, 7, 8, 9)

GENERATE_OFFSET = 1
VALIDATE_OFFSET = 0


def _fold(digits: Sequence[int], offset: int) -> int:
    """
    Fold a digit sequence into a single D5 element.

    Args:
        digits: Canonical digit sequence, most-significant first
        offset: Position of the units digit (1 when generating, 0 when validating)

    Returns:
        Final group state (0-9)
    """
    c = 0
    for i, digit in enumerate(reversed(digits)):
        c = D[c][P[(i + offset) % 8][digit]]
    return c


def checksum(digits: Sequence[int]) -> int:
    """
    Calculate the Verhoeff check digit for a digit sequence.

    The empty sequence folds to the identity, so its check digit is 0.

    Examples:
        >>> checksum([2, 3, 6])
        3
        >>> checksum([])
        0
    """
    return INV[_fold(digits, GENERATE_OFFSET)]


def is_valid(digits: Sequence[int]) -> bool:
    """
    Check a digit sequence whose last element is the check digit.

    Raises:
        EmptyInputError: If the sequence is empty

    Examples:
        >>> is_valid([2, 3, 6, 3])
        True
        >>> is_valid([2, 3, 6, 4])
        False
    """
    if not digits:
        raise EmptyInputError()

    state = _fold(digits, VALIDATE_OFFSET)
    if state != 0:
        logger.debug(f"is_valid fold ended in state {state}, expected 0")
    return state == 0


__all__ = ["D", "P", "INV", "checksum", "is_valid"]
