"""Tests for requirement parsing."""

import math
import re

import pytest

from formknobs.exceptions import ParseError
from formknobs.requirements import Range, RequirementType, parse_requirement


class TestRequirementType:
    """Test requirement type tags."""

    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("str", RequirementType.STRING),
            ("string", RequirementType.STRING),
            ("int", RequirementType.INTEGER),
            ("Integer", RequirementType.INTEGER),
            ("num", RequirementType.FLOAT),
            ("number", RequirementType.FLOAT),
            ("float", RequirementType.FLOAT),
            ("bool", RequirementType.BOOLEAN),
            ("boolean", RequirementType.BOOLEAN),
            ("regex", RequirementType.REGEX),
            ("regexp", RequirementType.REGEX),
            ("range", RequirementType.RANGE),
        ],
    )
    def test_textual_tags(self, tag, expected):
        """Test that textual tags and aliases resolve."""
        assert RequirementType.coerce(tag) is expected

    def test_enum_passes_through(self):
        """Test that enum members are returned as is."""
        assert RequirementType.coerce(RequirementType.RANGE) is RequirementType.RANGE

    def test_unknown_tag(self):
        """Test that unknown tags fail."""
        with pytest.raises(ParseError) as exc_info:
            RequirementType.coerce("date")

        assert exc_info.value.context["requirement_type"] == "date"


class TestParseString:
    """Test string requirements."""

    def test_identity(self):
        """Test that strings are returned unchanged."""
        assert parse_requirement("string", " as is ") == " as is "

    def test_missing_value(self):
        """Test that a missing value becomes an empty string."""
        assert parse_requirement(RequirementType.STRING, None) == ""


class TestParseInteger:
    """Test integer requirements."""

    def test_valid(self):
        """Test a valid integer."""
        assert parse_requirement("integer", "10") == 10

    def test_surrounding_whitespace(self):
        """Test that whitespace is ignored."""
        assert parse_requirement("int", " -3 ") == -3

    @pytest.mark.parametrize("raw", ["", "ten", "1.5", "0x10", "1_000", "- 3", "١٢"])
    def test_invalid(self, raw):
        """Test that non-integers fail."""
        with pytest.raises(ParseError):
            parse_requirement("integer", raw)


class TestParseFloat:
    """Test float requirements."""

    def test_valid(self):
        """Test a valid float."""
        assert parse_requirement("float", "2.5") == 2.5

    def test_invalid_gives_nan(self):
        """Test that invalid input gives NaN instead of failing."""
        assert math.isnan(parse_requirement("number", "abc"))
        assert math.isnan(parse_requirement("num", ""))


class TestParseBoolean:
    """Test boolean requirements."""

    @pytest.mark.parametrize("raw", ["", None, "  ", "true", "yes", "1", "anything"])
    def test_true_values(self, raw):
        """Test values that parse as true."""
        assert parse_requirement("boolean", raw) is True

    @pytest.mark.parametrize("raw", ["false", "FALSE", " False ", "0", " 0"])
    def test_false_values(self, raw):
        """Test values that parse as false."""
        assert parse_requirement("bool", raw) is False


class TestParseRegex:
    """Test regex requirements."""

    def test_valid(self):
        """Test a valid pattern."""
        pattern = parse_requirement("regex", r"^\d{4}$")
        assert isinstance(pattern, re.Pattern)
        assert pattern.match("2024")

    def test_invalid(self):
        """Test that an invalid pattern fails."""
        with pytest.raises(ParseError) as exc_info:
            parse_requirement("regexp", "([a-z]")

        assert exc_info.value.context["raw_value"] == "([a-z]"


class TestParseRange:
    """Test range requirements."""

    def test_valid(self):
        """Test a range with whitespace."""
        assert parse_requirement("range", "1, 5") == Range(min=1.0, max=5.0)

    def test_floats(self):
        """Test fractional bounds."""
        assert parse_requirement("range", " -0.5 ,2.25 ") == Range(min=-0.5, max=2.25)

    def test_contains(self):
        """Test the inclusive range check."""
        value = parse_requirement("range", "1,5")
        assert value.contains(1)
        assert value.contains(5)
        assert not value.contains(5.01)

    @pytest.mark.parametrize("raw", ["1,2,3", "1", "", "a,b", "1,b", "1;5"])
    def test_invalid(self, raw):
        """Test that anything but two numbers fails."""
        with pytest.raises(ParseError):
            parse_requirement("range", raw)


def test_unknown_type():
    """Test that parsing with an unknown type fails."""
    with pytest.raises(ParseError):
        parse_requirement("date", "2024-01-01")
