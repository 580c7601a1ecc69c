"""
Tests for core.identity — zero identity sentinel and normalization.
"""

import pytest

from core.identity import ZERO_IDENTITY, is_zero_identity, normalize_identity


class TestIsZeroIdentity:
    @pytest.mark.parametrize("value", [
        None,
        "",
        "   ",
        "0x",
        "0x0",
        ZERO_IDENTITY,
        "0X0000",
    ])
    def test_zero_forms(self, value):
        assert is_zero_identity(value)

    @pytest.mark.parametrize("value", [
        "0xA11CE",
        "0x0000000000000000000000000000000000000001",
        "maintenance-team",
        "0",
    ])
    def test_real_identities(self, value):
        assert not is_zero_identity(value)


class TestNormalizeIdentity:
    def test_zero_collapses_to_sentinel(self):
        assert normalize_identity(None) == ZERO_IDENTITY
        assert normalize_identity("") == ZERO_IDENTITY
        assert normalize_identity("0x00") == ZERO_IDENTITY

    def test_strips_whitespace(self):
        assert normalize_identity("  0xB0B ") == "0xB0B"

    def test_case_is_preserved(self):
        assert normalize_identity("0xAbC") == "0xAbC"

    def test_rejects_non_string(self):
        with pytest.raises(TypeError, match="string"):
            normalize_identity(42)
