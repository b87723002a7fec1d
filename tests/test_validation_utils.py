"""
Unit tests for phone normalization and input helpers.
"""

import pytest

from app.core.exceptions import InvalidPhoneError, ValidationError
from utils.validation_utils import (
    format_delivery_number,
    normalize_phone,
    validate_phone_number,
)


class TestNormalizePhone:
    """Tests for normalize_phone."""

    @pytest.mark.parametrize(
        "raw",
        [
            "+91 98765-43210",
            "9876543210",
            "91-9876543210",
            "(98765) 43210",
            "+919876543210",
            " 98765 43210 ",
        ],
    )
    def test_formats_share_one_key(self, raw):
        assert normalize_phone(raw) == "9876543210"

    def test_ten_digit_number_starting_with_91_is_kept(self):
        assert normalize_phone("9123456789") == "9123456789"

    @pytest.mark.parametrize("raw", [None, "", "   ", "+-()"])
    def test_rejects_empty_input(self, raw):
        with pytest.raises(InvalidPhoneError):
            normalize_phone(raw)

    def test_invalid_phone_is_a_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            normalize_phone("")
        assert exc_info.value.status_code == 400


class TestFormatDeliveryNumber:
    """Tests for format_delivery_number."""

    def test_prefixes_country_code(self):
        assert format_delivery_number("9876543210") == "919876543210"

    def test_keeps_existing_country_code(self):
        assert format_delivery_number("919876543210") == "919876543210"

    def test_prefixes_local_number_that_starts_with_91(self):
        assert format_delivery_number("9123456789") == "919123456789"

    def test_delivery_number_differs_from_key(self):
        key = normalize_phone("+91 98765 43210")
        assert format_delivery_number(key) != key


def test_validate_phone_number():
    assert validate_phone_number("+91 98765 43210")
    assert not validate_phone_number("12345")
    assert not validate_phone_number("5876543210")
    assert not validate_phone_number(None)


def test_numeric_phone_normalizes_like_string():
    assert normalize_phone(919876543210) == "9876543210"
    assert normalize_phone(9876543210) == "9876543210"
