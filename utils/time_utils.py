"""
utils/time_utils.py

Purpose: Time and expiry helpers

- OTP expiry calculation and checks
- Timestamp utilities
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

def utcnow() -> datetime:
    """
    Current time as a timezone-aware UTC datetime.
    """
    return datetime.now(timezone.utc)

def calculate_otp_expiry(issued_at: datetime, validity_minutes: int = 5) -> datetime:
    """
    Calculates OTP expiry timestamp.
    """
    return issued_at + timedelta(minutes=validity_minutes)

def is_otp_expired(expires_at: datetime, now: Optional[datetime] = None) -> bool:
    """
    Checks if an OTP has expired. An OTP is dead at exactly its expiry instant.
    """
    now = now or utcnow()
    return now >= expires_at

def format_timestamp(dt: Optional[datetime], format_str: str = "%Y-%m-%d %H:%M:%S") -> str:
    """
    Formats a datetime object to string.
    """
    if not dt:
        return "N/A"
    return dt.strftime(format_str)
