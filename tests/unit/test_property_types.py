"""
Unit tests for property_types module.
"""

import pytest

from pricemodel.utils.property_types import (
    normalize_new_build,
    normalize_property_type,
    normalize_tenure,
    property_type_label,
)


class TestNormalizePropertyType:
    """Tests for normalize_property_type function."""

    @pytest.mark.parametrize("code", ["D", "S", "T", "F"])
    def test_known_codes(self, code):
        assert normalize_property_type(code) == code

    def test_lowercase_and_whitespace(self):
        assert normalize_property_type(" t ") == "T"

    def test_other_code(self):
        assert normalize_property_type("O") == "O"

    def test_unknown_becomes_other(self):
        assert normalize_property_type("X") == "O"

    def test_none(self):
        assert normalize_property_type(None) == "O"


class TestFlags:
    """Tests for new build and tenure flags."""

    def test_new_build_yes(self):
        assert normalize_new_build("Y") is True
        assert normalize_new_build("y") is True

    def test_new_build_other(self):
        assert normalize_new_build("N") is False
        assert normalize_new_build(None) is False

    def test_leasehold(self):
        assert normalize_tenure("L") == "L"

    def test_anything_else_is_freehold(self):
        assert normalize_tenure("F") == "F"
        assert normalize_tenure("U") == "F"
        assert normalize_tenure(None) == "F"


class TestPropertyTypeLabel:
    """Tests for property_type_label function."""

    def test_label(self):
        assert property_type_label("F") == "Flat/Maisonette"

    def test_unknown_label(self):
        assert property_type_label("?") == "Other"
