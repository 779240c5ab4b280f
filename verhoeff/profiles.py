"""
Identifier profiles loaded from YAML.

A profile describes one fixed-length identifier protected by a Verhoeff
check digit: how long it is, which separators may appear between digit
groups, and the patterns used to spot it in free text. The default file
ships at ``verhoeff/config/identifiers.yaml``; set VERHOEFF_PROFILES_PATH
to load another one.
"""

from typing import Dict, Optional
import logging
import os

import regex
import yaml

from .operations import validate_fixed_length

logger = logging.getLogger(__name__)

PROFILES_PATH_ENV = "VERHOEFF_PROFILES_PATH"
DEFAULT_PROFILES_PATH = os.path.join(
    os.path.dirname(__file__),
    'config',
    'identifiers.yaml'
)

MAX_REGEX_LENGTH = 500
REGEX_PROBE_TIMEOUT = 0.2  # seconds
_NESTED_QUANTIFIER = regex.compile(r'\([^)]*[*+]\)[*+]')


def resolve_profiles_path(yaml_path: Optional[str] = None) -> str:
    """Explicit path, then VERHOEFF_PROFILES_PATH, then the bundled file."""
    if yaml_path:
        return yaml_path
    return os.getenv(PROFILES_PATH_ENV) or DEFAULT_PROFILES_PATH


def _check_pattern(profile_name: str, regex_str: str) -> None:
    """Reject regexes that are too long, ReDoS-prone or do not compile."""
    if len(regex_str) > MAX_REGEX_LENGTH:
        logger.warning(f"Regex pattern too long ({len(regex_str)} chars) in {profile_name}: {regex_str[:50]}...")
        raise ValueError(f"Regex pattern exceeds maximum length of {MAX_REGEX_LENGTH} characters")

    if _NESTED_QUANTIFIER.search(regex_str):
        logger.warning(f"Potentially dangerous nested quantifiers in {profile_name}: {regex_str}")
        raise ValueError("Regex contains nested quantifiers which may cause ReDoS")

    try:
        compiled = regex.compile(regex_str)
    except regex.error as e:
        logger.error(f"Invalid regex in {profile_name}: {e}")
        raise ValueError(f"Invalid regex pattern: {e}")

    # Worst-case probe: long digit run with a non-matching tail
    try:
        compiled.search("1" * 64 + "!", timeout=REGEX_PROBE_TIMEOUT)
    except TimeoutError:
        logger.warning(f"Regex probe timed out in {profile_name}: {regex_str}")
        raise ValueError("Regex pattern hit the probe timeout (ReDoS risk)")


def _parse_profile(raw: dict) -> dict:
    """Validate one raw YAML entry and fill in defaults."""
    if not isinstance(raw, dict) or 'name' not in raw:
        raise ValueError(f"Profile entry must be a mapping with a 'name': {raw!r}")

    name = raw['name']
    length = raw.get('length')
    if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
        raise ValueError(f"Profile '{name}' needs a positive integer 'length', got {length!r}")

    group_size = raw.get('group_size', 4)
    if isinstance(group_size, bool) or not isinstance(group_size, int) or group_size <= 0:
        raise ValueError(f"Profile '{name}' needs a positive integer 'group_size', got {group_size!r}")

    raw_patterns = raw.get('patterns', [])
    if not isinstance(raw_patterns, list):
        raise ValueError(f"Profile '{name}' needs 'patterns' to be a list, got {raw_patterns!r}")

    patterns = []
    for pattern_config in raw_patterns:
        if not isinstance(pattern_config, dict) or not isinstance(pattern_config.get('regex'), str):
            raise ValueError(f"Profile '{name}' has a pattern without a string 'regex': {pattern_config!r}")
        regex_str = pattern_config['regex']
        _check_pattern(name, regex_str)
        patterns.append({
            'name': pattern_config.get('name', f"{name}_pattern"),
            'regex': regex_str,
            'score': float(pattern_config.get('score', 0.5)),
        })

    return {
        'name': name,
        'entity': raw.get('entity', str(name).upper()),
        'length': length,
        'separators': raw.get('separators', ''),
        'group_size': group_size,
        'language': raw.get('language', 'en'),
        'context': list(raw.get('context', [])),
        'patterns': patterns,
    }


def load_profiles(yaml_path: Optional[str] = None) -> Dict[str, dict]:
    """
    Load identifier profiles from YAML configuration.

    Args:
        yaml_path: Path to the YAML file (defaults via resolve_profiles_path)

    Returns:
        Mapping of profile name to normalised profile dict

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
        ValueError: If a profile or one of its patterns is invalid
    """
    path = resolve_profiles_path(yaml_path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        logger.error(f"Identifier profiles YAML file not found: {path}")
        raise
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse identifier profiles YAML: {e}")
        raise

    if not config or 'profiles' not in config:
        logger.warning(f"No profiles found in YAML config: {path}")
        return {}

    if not isinstance(config['profiles'], list):
        raise ValueError(f"'profiles' must be a list in {path}, got {config['profiles']!r}")

    profiles = {}
    for raw in config['profiles']:
        profile = _parse_profile(raw)
        if profile['name'] in profiles:
            raise ValueError(f"Duplicate profile name: {profile['name']}")
        profiles[profile['name']] = profile
        logger.info(f"Loaded identifier profile: {profile['name']} ({profile['length']} digits)")

    return profiles


def get_profile(name: str, yaml_path: Optional[str] = None) -> dict:
    """Return one profile by name; KeyError if it is not configured."""
    profiles = load_profiles(yaml_path)
    if name not in profiles:
        raise KeyError(f"Unknown identifier profile: {name}")
    return profiles[name]


def normalize_identifier(text: str, profile: dict) -> str:
    """Strip the profile's separator characters from text."""
    for separator in profile['separators']:
        text = text.replace(separator, '')
    return text


def validate_identifier(text: str, profile_name: str = "aadhaar", yaml_path: Optional[str] = None) -> bool:
    """
    Validate a possibly formatted identifier against its profile.

    Raises:
        KeyError: If the profile is not configured
        TypeError: If text is not a str
        WrongLengthError, MalformedInputError: As validate_fixed_length
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")
    profile = get_profile(profile_name, yaml_path)
    return validate_fixed_length(normalize_identifier(text, profile), profile['length'])


def _group(text: str, group_size: int) -> str:
    return " ".join(text[i:i + group_size] for i in range(0, len(text), group_size))


def format_identifier(text: str, group_size: int = 4) -> str:
    """
    Format an identifier in space-separated groups.

    Example:
        >>> format_identifier("234123412346")
        '2341 2341 2346'
    """
    clean = text.replace(' ', '').replace('-', '')
    return _group(clean, group_size)


def mask_identifier(text: str, show_last: int = 4, group_size: int = 4) -> str:
    """
    Mask an identifier for display, keeping only the last digits.

    Example:
        >>> mask_identifier("234123412346")
        'XXXX XXXX 2346'
    """
    clean = text.replace(' ', '').replace('-', '')
    visible = max(0, min(show_last, len(clean)))
    masked = 'X' * (len(clean) - visible) + clean[len(clean) - visible:]
    return _group(masked, group_size)


__all__ = [
    "PROFILES_PATH_ENV",
    "DEFAULT_PROFILES_PATH",
    "resolve_profiles_path",
    "load_profiles",
    "get_profile",
    "normalize_identifier",
    "validate_identifier",
    "format_identifier",
    "mask_identifier",
]
