"""
Unit tests for postcode module.
"""

from pricemodel.utils.postcode import (
    format_postcode,
    is_allowed_area,
    normalize_postcode,
    parse_outcode,
    postcode_area,
)


class TestNormalizePostcode:
    """Tests for normalize_postcode function."""

    def test_strips_all_whitespace(self):
        assert normalize_postcode(" se20  7ua ") == "SE207UA"

    def test_tabs(self):
        assert normalize_postcode("BR3\t1AB") == "BR31AB"

    def test_empty(self):
        assert normalize_postcode("") == ""
        assert normalize_postcode(None) == ""


class TestOutcode:
    """Tests for outcode and area helpers."""

    def test_outcode_drops_inward_code(self):
        assert parse_outcode("SE207UA") == "SE20"
        assert parse_outcode("BR31AB") == "BR3"
        assert parse_outcode("E12AB") == "E1"

    def test_area(self):
        assert postcode_area("SE20 7UA") == "SE"
        assert postcode_area("e1 2ab") == "E"
        assert postcode_area("") == ""

    def test_format(self):
        assert format_postcode("SE207UA") == "SE20 7UA"


class TestIsAllowedArea:
    """Tests for is_allowed_area function."""

    def test_prefix_match(self):
        assert is_allowed_area("SE20", ["SE", "BR"])
        assert is_allowed_area("BR3", ["SE", "BR"])

    def test_no_match(self):
        assert not is_allowed_area("CR0", ["SE", "BR"])
        assert not is_allowed_area("S1", ["SE"])

    def test_empty_allowed(self):
        assert not is_allowed_area("SE20", [])
