"""
Presidio recognizers for Verhoeff-protected identifiers.

Pattern matches are checked against the Verhoeff check digit DURING
matching: a candidate with a wrong check digit is dropped before scoring,
so random 12-digit numbers never surface as Aadhaar numbers.
"""

from typing import Callable, List, Optional
import logging

from presidio_analyzer import Pattern, PatternRecognizer

from .exceptions import VerhoeffError
from .operations import validate_fixed_length
from .profiles import load_profiles, mask_identifier

logger = logging.getLogger(__name__)


class VerhoeffPatternRecognizer(PatternRecognizer):
    """
    Pattern recognizer with integrated Verhoeff validation.

    Args:
        validator_func: Callable taking the cleaned match and returning bool
        separators: Characters stripped from a match before validation
        group_size: Digits per group in masked log output
        **kwargs: Passed through to PatternRecognizer

    Example:
        >>> recognizer = VerhoeffPatternRecognizer(
        ...     supported_entity="IN_AADHAAR",
        ...     name="Aadhaar Recognizer",
        ...     patterns=[Pattern("aadhaar_bare", r"\\b\\d{12}\\b", 0.3)],
        ...     validator_func=fixed_length_validator(12),
        ... )
    """

    def __init__(self, validator_func: Optional[Callable[[str], bool]] = None, separators: str = " -",
                 group_size: int = 4, **kwargs):
        super().__init__(**kwargs)
        self.validator_func = validator_func
        self.separators = separators
        self.group_size = group_size

    def _execute_validator(self, pattern_text: str, context: str = "VALIDATE") -> bool:
        validation_text = pattern_text
        for separator in self.separators:
            validation_text = validation_text.replace(separator, '')

        is_valid = self.validator_func(validation_text)
        masked = mask_identifier(validation_text, group_size=self.group_size)
        logger.debug(f"[{context}] {self.name}: match='{masked}' result={is_valid}")
        return is_valid

    def validate_result(self, pattern_text: str) -> Optional[bool]:
        """
        Called BEFORE scoring. False drops the score to 0, True boosts it to 1.0.
        """
        if self.validator_func:
            return self._execute_validator(pattern_text, "VALIDATE")
        return None

    def invalidate_result(self, pattern_text: str) -> Optional[bool]:
        """Return True to reject the match."""
        if self.validator_func:
            should_invalidate = not self._execute_validator(pattern_text, "INVALIDATE")
            if should_invalidate:
                masked = mask_identifier(pattern_text, group_size=self.group_size)
                logger.debug(f"[INVALIDATED] {self.name}: '{masked}'")
            return should_invalidate
        return None


def fixed_length_validator(length: int) -> Callable[[str], bool]:
    """Build a never-raising validator for identifiers of ``length`` digits."""

    def _validator(text: str) -> bool:
        try:
            return validate_fixed_length(text, length)
        except VerhoeffError as e:
            logger.debug(f"fixed-length validator rejected candidate: {e}")
            return False

    _validator.__name__ = f"checksum_verhoeff_{length}"
    return _validator


def build_recognizer(profile: dict) -> VerhoeffPatternRecognizer:
    """Create a recognizer from one profile returned by load_profiles."""
    patterns = [
        Pattern(name=p['name'], regex=p['regex'], score=p['score'])
        for p in profile['patterns']
    ]
    return VerhoeffPatternRecognizer(
        supported_entity=profile['entity'],
        name=f"{profile['name']} Verhoeff Recognizer",
        supported_language=profile['language'],
        patterns=patterns,
        context=profile['context'] or None,
        validator_func=fixed_length_validator(profile['length']),
        separators=profile['separators'],
        group_size=profile['group_size'],
    )


def load_recognizers(yaml_path: Optional[str] = None) -> List[VerhoeffPatternRecognizer]:
    """One recognizer per configured identifier profile."""
    recognizers = []
    for profile in load_profiles(yaml_path).values():
        if not profile['patterns']:
            logger.warning(f"Profile '{profile['name']}' has no patterns, skipping recognizer")
            continue
        recognizers.append(build_recognizer(profile))
        logger.info(f"Loaded Verhoeff recognizer: {profile['name']} ({profile['entity']})")
    return recognizers


__all__ = [
    "VerhoeffPatternRecognizer",
    "fixed_length_validator",
    "build_recognizer",
    "load_recognizers",
]
