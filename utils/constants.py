"""
utils/constants.py

Purpose: Centralized static content

- User-facing response messages
- OTP and form field constants

(Prevents hardcoding across the codebase)
"""

# ============================================================
# SERVICE
# ============================================================

LIVENESS_MESSAGE = "Admission Backend Running 🚀"

# ============================================================
# OTP
# ============================================================

OTP_CODE_MIN = 1000
OTP_CODE_MAX = 9999

DEFAULT_DISPLAY_NAME = "Student"
DEFAULT_COUNTRY_CODE = "91"

PHONE_REQUIRED_MESSAGE = "Phone required"
OTP_INVALID_MESSAGE = "Invalid or expired OTP"
OTP_SEND_FAILED_MESSAGE = "Failed to send OTP"

# ============================================================
# ADMISSION FORM
# ============================================================

FORM_TEXT_FIELDS = ("name", "phone", "parentProfession")

REQUIRED_FILE_FIELDS = ("mark10", "idCard")
OPTIONAL_FILE_FIELDS = ("mark11", "mark12", "discountMark")

FILES_MISSING_MESSAGE = "Required files missing"
FILE_TOO_LARGE_MESSAGE = "File too large"
FORM_SUBMIT_FAILED_MESSAGE = "Failed to submit form"

DEFAULT_MIME_TYPE = "application/octet-stream"
