"""
Tests for YAML identifier profiles.

Covers the bundled configuration, the VERHOEFF_PROFILES_PATH override and
the checks that reject unsafe or malformed profiles before use.
"""

import os
import tempfile

import pytest
import yaml

from verhoeff.exceptions import MalformedInputError, WrongLengthError
from verhoeff.operations import append
from verhoeff.profiles import (
    DEFAULT_PROFILES_PATH,
    PROFILES_PATH_ENV,
    format_identifier,
    get_profile,
    load_profiles,
    mask_identifier,
    normalize_identifier,
    resolve_profiles_path,
    validate_identifier,
)


def _write_yaml(config) -> str:
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(config, f)
        return f.name


def _profile(**overrides):
    profile = {
        'name': 'test_id',
        'length': 8,
        'patterns': [{'name': 'bare', 'regex': r'\b\d{8}\b', 'score': 0.4}],
    }
    profile.update(overrides)
    return profile


class TestBundledProfiles:
    """The shipped identifiers.yaml"""

    def test_default_path_exists(self):
        assert os.path.exists(DEFAULT_PROFILES_PATH)

    def test_aadhaar_profile(self):
        profile = load_profiles()['aadhaar']
        assert profile['length'] == 12
        assert profile['entity'] == 'IN_AADHAAR'
        assert profile['separators'] == ' -'
        assert 'aadhaar' in profile['context']
        assert len(profile['patterns']) == 2

    def test_get_profile_unknown(self):
        with pytest.raises(KeyError):
            get_profile('no_such_identifier')


class TestProfilesPath:
    """Path resolution order"""

    def test_explicit_path_wins(self, monkeypatch):
        monkeypatch.setenv(PROFILES_PATH_ENV, '/from/env.yaml')
        assert resolve_profiles_path('/explicit.yaml') == '/explicit.yaml'

    def test_env_override(self, monkeypatch):
        temp_yaml = _write_yaml({'profiles': [_profile()]})
        try:
            monkeypatch.setenv(PROFILES_PATH_ENV, temp_yaml)
            assert list(load_profiles()) == ['test_id']
        finally:
            os.unlink(temp_yaml)

    def test_default_when_unset(self, monkeypatch):
        monkeypatch.delenv(PROFILES_PATH_ENV, raising=False)
        assert resolve_profiles_path() == DEFAULT_PROFILES_PATH


class TestProfileLoading:
    """Schema checks and defaults"""

    def test_defaults_filled_in(self):
        temp_yaml = _write_yaml({'profiles': [_profile()]})
        try:
            profile = load_profiles(temp_yaml)['test_id']
        finally:
            os.unlink(temp_yaml)

        assert profile['entity'] == 'TEST_ID'
        assert profile['separators'] == ''
        assert profile['group_size'] == 4
        assert profile['language'] == 'en'
        assert profile['context'] == []
        assert profile['patterns'][0]['score'] == 0.4

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_profiles('/nonexistent/identifiers.yaml')

    def test_invalid_yaml(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write("profiles: [unclosed\n")
            temp_yaml = f.name
        try:
            with pytest.raises(yaml.YAMLError):
                load_profiles(temp_yaml)
        finally:
            os.unlink(temp_yaml)

    def test_empty_config(self):
        temp_yaml = _write_yaml({'other': 1})
        try:
            assert load_profiles(temp_yaml) == {}
        finally:
            os.unlink(temp_yaml)

    @pytest.mark.parametrize("length", [None, 0, -3, "12", True])
    def test_rejects_bad_length(self, length):
        temp_yaml = _write_yaml({'profiles': [_profile(length=length)]})
        try:
            with pytest.raises(ValueError, match='length'):
                load_profiles(temp_yaml)
        finally:
            os.unlink(temp_yaml)

    def test_rejects_duplicate_names(self):
        temp_yaml = _write_yaml({'profiles': [_profile(), _profile()]})
        try:
            with pytest.raises(ValueError, match='Duplicate'):
                load_profiles(temp_yaml)
        finally:
            os.unlink(temp_yaml)

    def test_rejects_profiles_without_list(self):
        temp_yaml = _write_yaml({'profiles': None})
        try:
            with pytest.raises(ValueError, match="'profiles' must be a list"):
                load_profiles(temp_yaml)
        finally:
            os.unlink(temp_yaml)

    @pytest.mark.parametrize(
        "patterns",
        [
            [{'name': 'no_regex'}],
            [{'name': 'numeric_regex', 'regex': 12345678}],
            ['\\b\\d{8}\\b'],
        ],
    )
    def test_rejects_pattern_without_regex(self, patterns):
        temp_yaml = _write_yaml({'profiles': [_profile(patterns=patterns)]})
        try:
            with pytest.raises(ValueError, match="test_id"):
                load_profiles(temp_yaml)
        finally:
            os.unlink(temp_yaml)

    def test_rejects_patterns_mapping(self):
        temp_yaml = _write_yaml({'profiles': [_profile(patterns={'regex': r'\b\d{8}\b'})]})
        try:
            with pytest.raises(ValueError, match="'patterns' to be a list"):
                load_profiles(temp_yaml)
        finally:
            os.unlink(temp_yaml)

    @pytest.mark.parametrize("group_size", [0, -1, "4", False])
    def test_rejects_bad_group_size(self, group_size):
        temp_yaml = _write_yaml({'profiles': [_profile(group_size=group_size)]})
        try:
            with pytest.raises(ValueError, match='group_size'):
                load_profiles(temp_yaml)
        finally:
            os.unlink(temp_yaml)


class TestPatternSafety:
    """Regexes are vetted before any recognizer is built"""

    def test_rejects_nested_quantifiers(self):
        profile = _profile(patterns=[{'name': 'nested', 'regex': r'(x+)*y', 'score': 0.8}])
        temp_yaml = _write_yaml({'profiles': [profile]})
        try:
            with pytest.raises(ValueError, match=r'(nested quantifiers|ReDoS)'):
                load_profiles(temp_yaml)
        finally:
            os.unlink(temp_yaml)

    def test_rejects_overlong_regex(self):
        profile = _profile(patterns=[{'name': 'long', 'regex': r'\d' * 300, 'score': 0.8}])
        temp_yaml = _write_yaml({'profiles': [profile]})
        try:
            with pytest.raises(ValueError, match='maximum length'):
                load_profiles(temp_yaml)
        finally:
            os.unlink(temp_yaml)

    def test_rejects_invalid_regex(self):
        profile = _profile(patterns=[{'name': 'broken', 'regex': r'\b[0-9', 'score': 0.8}])
        temp_yaml = _write_yaml({'profiles': [profile]})
        try:
            with pytest.raises(ValueError, match='Invalid regex'):
                load_profiles(temp_yaml)
        finally:
            os.unlink(temp_yaml)


class TestIdentifierHelpers:
    """Validation and display of formatted identifiers"""

    def test_validate_identifier_with_separators(self):
        number = append("23412341234")
        assert validate_identifier(format_identifier(number)) is True
        assert validate_identifier(f"{number[:4]}-{number[4:8]}-{number[8:]}") is True

    def test_validate_identifier_wrong_check_digit(self):
        number = append("23412341234")
        wrong = number[:-1] + str((int(number[-1]) + 1) % 10)
        assert validate_identifier(format_identifier(wrong)) is False

    def test_validate_identifier_errors(self):
        with pytest.raises(WrongLengthError):
            validate_identifier("2341 2341")
        with pytest.raises(MalformedInputError):
            validate_identifier("2341 2341 234x")

    @pytest.mark.parametrize("value", [234123412346, None, ["2341"]])
    def test_validate_identifier_rejects_non_text(self, value):
        with pytest.raises(TypeError, match="Expected str"):
            validate_identifier(value)

    def test_normalize_identifier(self):
        assert normalize_identifier("2341-2341 2346", {'separators': ' -'}) == "234123412346"
        assert normalize_identifier("2341-2341", {'separators': ''}) == "2341-2341"

    def test_format_identifier(self):
        assert format_identifier("234123412346") == "2341 2341 2346"
        assert format_identifier("2341-2341-2346") == "2341 2341 2346"

    def test_mask_identifier(self):
        assert mask_identifier("234123412346") == "XXXX XXXX 2346"
        assert mask_identifier("2341 2341 2346", show_last=0) == "XXXX XXXX XXXX"
        assert mask_identifier("123", show_last=4) == "123"
        assert mask_identifier("234123412346", group_size=3) == "XXX XXX XX2 346"
