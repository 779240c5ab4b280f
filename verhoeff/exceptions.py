"""
Exception hierarchy for the Verhoeff checksum library.

All public exceptions inherit from :class:`VerhoeffError`, which is itself a
``ValueError``. Callers that already guard identifier parsing with
``except (TypeError, ValueError)`` keep working, while callers that need to
tell the failure modes apart can catch the specific subclasses.
"""


class VerhoeffError(ValueError):
    """Base exception for all checksum input errors."""

    pass


class MalformedInputError(VerhoeffError):
    """Raised when text input contains a character that is not a decimal digit."""

    def __init__(self, character: str, position: int):
        self.character = character
        self.position = position
        super().__init__(
            f"input contains non-digit character {character!r} at position {position}"
        )


class InvalidDigitError(VerhoeffError):
    """Raised when an explicitly supplied digit is not an int in 0..9."""

    def __init__(self, value, index: int):
        self.value = value
        self.index = index
        super().__init__(f"input contains invalid digit {value!r} at index {index}")


class EmptyInputError(VerhoeffError):
    """Raised when validation is attempted on an empty digit sequence."""

    def __init__(self, message: str = "empty input: there is no check digit to validate"):
        super().__init__(message)


class WrongLengthError(VerhoeffError):
    """Raised when fixed-length validation receives input of the wrong length."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected} digits, got {actual}")
