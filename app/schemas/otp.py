"""
app/schemas/otp.py

Pydantic models for the OTP endpoints.

Fields stay optional so a missing phone reaches the service and gets the
400 "Phone required" response instead of a schema error.
"""

from pydantic import BaseModel, Field
from typing import Optional, Union


class SendOTPRequest(BaseModel):
    """Request schema for /send-otp."""

    phoneNumber: Optional[Union[str, int]] = Field(default=None, description="Phone number in any format")
    userName: Optional[str] = Field(default=None, description="Name used in the OTP message")


class VerifyOTPRequest(BaseModel):
    """Request schema for /verify-otp."""

    phoneNumber: Optional[Union[str, int]] = Field(default=None, description="Phone number used for /send-otp")
    otpCode: Optional[Union[str, int]] = Field(default=None, description="Code received by the user")


class OTPFailureResponse(BaseModel):
    """Uniform verification failure body."""

    success: bool = False
    message: str
