"""
Unit tests for provider version comparison.

Tests:
- Version string parsing
- Version comparison
- Minimum-version check
"""

import pytest

from cryptshell.core.version import MIN_PROVIDER_VERSION, compare_versions, parse_version, version_satisfies


class TestParseVersion:
    """Tests for parse_version function."""

    def test_parse_full_version(self):
        assert parse_version("1.6.0") == (1, 6, 0)

    def test_parse_short_version_pads_zeros(self):
        assert parse_version("2") == (2, 0, 0)
        assert parse_version("2.4") == (2, 4, 0)

    def test_parse_strips_whitespace(self):
        assert parse_version("  2.4.0\n") == (2, 4, 0)

    def test_parse_empty_raises(self):
        with pytest.raises(ValueError, match="Invalid version string"):
            parse_version("")

    def test_parse_too_many_parts_raises(self):
        with pytest.raises(ValueError, match="1-3 parts"):
            parse_version("1.2.3.4")

    def test_parse_non_numeric_raises(self):
        with pytest.raises(ValueError, match="Invalid version component"):
            parse_version("1.x.0")


class TestCompareVersions:
    """Tests for compare_versions function."""

    def test_equal(self):
        assert compare_versions("1.6.0", "1.6.0") == 0

    def test_less_than(self):
        assert compare_versions("1.5.9", "1.6.0") == -1

    def test_greater_than(self):
        assert compare_versions("2.0.0", "1.6.0") == 1

    def test_numeric_not_lexicographic(self):
        """1.10.0 is newer than 1.6.0 even though "1" < "6" as text."""
        assert compare_versions("1.10.0", "1.6.0") == 1


class TestVersionSatisfies:
    """Tests for the minimum-version gate."""

    def test_default_minimum_is_1_6_0(self):
        assert MIN_PROVIDER_VERSION == "1.6.0"

    @pytest.mark.parametrize("found", ["1.6.0", "1.6.1", "1.10.0", "2.4.0"])
    def test_accepted(self, found):
        assert version_satisfies(found)

    @pytest.mark.parametrize("found", ["1.5.9", "1.0.0", "0.9.9"])
    def test_rejected(self, found):
        assert not version_satisfies(found)
