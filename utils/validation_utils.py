"""
utils/validation_utils.py

Purpose: Input validation

- Phone normalization (store key) and delivery formatting
- Indian mobile number validation
"""

import re
from typing import Any, Optional

from app.core.exceptions import InvalidPhoneError
from utils.constants import DEFAULT_COUNTRY_CODE


def normalize_phone(raw: Any, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """
    Canonicalizes a phone number into the OTP store key.

    Strips every non-digit, then drops a leading country code when the
    number is longer than a local 10-digit number.

    Examples:
        >>> normalize_phone("+91 98765-43210")
        '9876543210'
        >>> normalize_phone("91-9876543210")
        '9876543210'
        >>> normalize_phone("9876543210")
        '9876543210'

    Raises:
        InvalidPhoneError: If the input is empty or has no digits
    """
    if raw is None:
        raise InvalidPhoneError("Phone required")

    digits = re.sub(r"\D", "", str(raw))
    if not digits:
        raise InvalidPhoneError("Phone required")

    if len(digits) > 10 and digits.startswith(country_code):
        digits = digits[len(country_code):]

    return digits


def format_delivery_number(phone_key: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """
    Formats a normalized phone for outbound delivery (e.g. 919876543210).

    Display-only; never used as a store key.
    """
    if phone_key.startswith(country_code) and len(phone_key) > 10:
        return phone_key
    return f"{country_code}{phone_key}"


def validate_phone_number(phone: Optional[str]) -> bool:
    """
    Validates Indian phone number format.

    Args:
        phone: Phone number string

    Returns:
        True if valid Indian mobile number
    """
    if not phone:
        return False

    try:
        phone = normalize_phone(phone)
    except InvalidPhoneError:
        return False

    # Indian mobile format (starts with 6-9, 10 digits total)
    return bool(re.match(r"^[6-9]\d{9}$", phone))
