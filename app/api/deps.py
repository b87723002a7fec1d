"""
app/api/deps.py

Purpose: Service dependencies for the routers

- One OTPService (and so one OTPStore) per process
- Tests swap them through app.dependency_overrides
"""

from typing import Optional

from app.services.form_service import FormService, build_form_service
from app.services.otp_service import OTPService, build_otp_service

_otp_service: Optional[OTPService] = None
_form_service: Optional[FormService] = None


def get_otp_service() -> OTPService:
    """Get or create the global OTP service instance."""
    global _otp_service
    if _otp_service is None:
        _otp_service = build_otp_service()
    return _otp_service


def get_form_service() -> FormService:
    """Get or create the global form service instance."""
    global _form_service
    if _form_service is None:
        _form_service = build_form_service()
    return _form_service


def close_services():
    """Drop service instances and any pending OTPs."""
    global _otp_service, _form_service
    if _otp_service:
        _otp_service.store.clear()
        _otp_service = None
    _form_service = None
