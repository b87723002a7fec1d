"""
app/services/otp_service.py

Purpose: OTP issue and verification

- Generates 4-digit codes and stores them per normalized phone
- Delivers the code through the messaging API
- Verifies codes: exact string match, before expiry, single use
"""

import secrets
from typing import Any, Optional

from app.core.config import settings
from app.core.exceptions import InvalidPhoneError, ValidationError
from app.core.logging import get_logger, LogContext, mask_phone
from app.services.aisensy_service import AiSensyService
from app.services.otp_store import Challenge, OTPStore
from utils.constants import (
    DEFAULT_DISPLAY_NAME,
    OTP_CODE_MIN,
    OTP_CODE_MAX,
    PHONE_REQUIRED_MESSAGE,
)
from utils.time_utils import calculate_otp_expiry
from utils.validation_utils import (
    normalize_phone,
    format_delivery_number,
    validate_phone_number,
)

logger = get_logger(__name__)


def generate_otp_code() -> str:
    """Uniformly random code in 1000..9999, so always four digits."""
    return str(OTP_CODE_MIN + secrets.randbelow(OTP_CODE_MAX - OTP_CODE_MIN + 1))


class OTPService:
    """
    Issues and verifies one-time passcodes.

    Owns its OTPStore; handlers get the service through dependencies.
    """

    def __init__(
        self,
        store: OTPStore,
        messenger: AiSensyService,
        ttl_minutes: int = 5,
        country_code: str = "91",
    ):
        self.store = store
        self.messenger = messenger
        self.ttl_minutes = ttl_minutes
        self.country_code = country_code

    async def issue(self, raw_phone: Any, display_name: Optional[str] = None) -> Challenge:
        """
        Creates a challenge for the phone and sends the code.

        The challenge is committed before delivery and is kept if delivery
        fails, so a resend does not need a new code.

        Raises:
            ValidationError: If the phone is missing
            ConfigurationError: If the messaging API is not configured
            DeliveryError: If the messaging API call fails
        """
        if raw_phone is None or not str(raw_phone).strip():
            raise ValidationError(PHONE_REQUIRED_MESSAGE)

        phone_key = normalize_phone(raw_phone, self.country_code)
        destination = format_delivery_number(phone_key, self.country_code)
        name = (display_name or "").strip() or DEFAULT_DISPLAY_NAME

        with LogContext(phone_key=mask_phone(phone_key)):
            # Store nothing while delivery is unconfigured
            self.messenger.ensure_configured()

            if not validate_phone_number(phone_key):
                logger.warning("Issuing OTP for a number that is not a valid Indian mobile")

            issued_at = self.store.now()
            challenge = Challenge(
                phone_key=phone_key,
                code=generate_otp_code(),
                display_name=name,
                issued_at=issued_at,
                expires_at=calculate_otp_expiry(issued_at, self.ttl_minutes),
            )
            self.store.put(phone_key, challenge)
            logger.info(f"OTP issued, valid for {self.ttl_minutes} minutes")

        # LogContext swaps the global record factory, so no awaits inside it
        await self.messenger.send_otp(
            destination=destination,
            otp_code=challenge.code,
            user_name=name,
        )

        return challenge

    def verify(self, raw_phone: Any, supplied_code: Any) -> bool:
        """
        Checks a code against the stored challenge.

        Unknown phone, expired challenge and wrong code all return False.
        A correct code consumes the challenge.
        """
        if raw_phone is None or supplied_code is None or not str(raw_phone).strip():
            return False

        try:
            phone_key = normalize_phone(raw_phone, self.country_code)
        except InvalidPhoneError:
            return False

        code = str(supplied_code)
        now = self.store.now()

        with LogContext(phone_key=mask_phone(phone_key)):
            # Lazy cleanup of a stale challenge
            if self.store.pop_if(phone_key, lambda c: c.is_expired(now)):
                logger.info("OTP verification failed: expired")
                return False

            consumed = self.store.pop_if(
                phone_key,
                lambda c: not c.is_expired(now) and c.matches(code),
            )
            if consumed is None:
                logger.info("OTP verification failed")
                return False

            logger.info("✅ OTP verified")
            return True


def build_otp_service() -> OTPService:
    """Creates an OTPService wired from settings."""
    store = OTPStore(max_entries=settings.OTP_STORE_MAX_ENTRIES)
    return OTPService(
        store=store,
        messenger=AiSensyService(),
        ttl_minutes=settings.OTP_TTL_MINUTES,
        country_code=settings.DEFAULT_COUNTRY_CODE,
    )
