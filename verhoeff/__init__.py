"""
Verhoeff Checksum Package
Version: 1.0.0

Check digit generation and validation for numeric identifiers using the
Verhoeff (dihedral group D5) scheme. Presidio recognizers live in
``verhoeff.recognizers`` and are not imported here.
"""

from .checksum import checksum, is_valid
from .digits import (
    digits_from_text,
    digits_from_integer,
    digits_from_sequence,
    to_digits,
    reversed_digits,
)
from .exceptions import (
    VerhoeffError,
    MalformedInputError,
    InvalidDigitError,
    EmptyInputError,
    WrongLengthError,
)
from .operations import (
    generate,
    generate_string,
    validate,
    append,
    validate_fixed_length,
    validate_aadhaar,
    suggest_correction,
    checksum_aadhaar,
)
from .profiles import (
    load_profiles,
    get_profile,
    validate_identifier,
    format_identifier,
    mask_identifier,
)

__all__ = [
    # Kernel
    "checksum",
    "is_valid",
    # Digit extraction
    "digits_from_text",
    "digits_from_integer",
    "digits_from_sequence",
    "to_digits",
    "reversed_digits",
    # Errors
    "VerhoeffError",
    "MalformedInputError",
    "InvalidDigitError",
    "EmptyInputError",
    "WrongLengthError",
    # Public operations
    "generate",
    "generate_string",
    "validate",
    "append",
    "validate_fixed_length",
    "validate_aadhaar",
    "suggest_correction",
    "checksum_aadhaar",
    # Identifier profiles
    "load_profiles",
    "get_profile",
    "validate_identifier",
    "format_identifier",
    "mask_identifier",
]

__version__ = "1.0.0"
