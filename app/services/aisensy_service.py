"""
app/services/aisensy_service.py

Purpose: OTP delivery through the AiSensy campaign API

- Sends the OTP template message to a phone number
- Single attempt, bounded timeout, no retries
- Failures surface as DeliveryError with the API response logged
"""

import httpx
from typing import Any, Dict, Optional

from app.core.config import settings
from app.core.exceptions import ConfigurationError, DeliveryError
from app.core.logging import get_logger, mask_phone

logger = get_logger(__name__)


class AiSensyService:
    """Service for sending OTP messages via the AiSensy campaign API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        campaign_name: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.API_KEY
        self.api_url = api_url if api_url is not None else settings.API_URL
        self.campaign_name = campaign_name or settings.OTP_CAMPAIGN_NAME
        self._timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    def is_configured(self) -> bool:
        """Check if the messaging API key and URL are set"""
        return bool(self.api_key and self.api_url)

    def ensure_configured(self) -> None:
        """
        Raises:
            ConfigurationError: If the API key or URL is missing
        """
        missing = [
            name for name, value in (("API_KEY", self.api_key), ("API_URL", self.api_url))
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "OTP delivery is not configured",
                details={"missing": missing}
            )

    async def send_otp(
        self,
        destination: str,
        otp_code: str,
        user_name: str,
    ) -> Dict[str, Any]:
        """
        Sends the OTP campaign message.

        Args:
            destination: Phone with country code, digits only (919876543210)
            otp_code: Code inserted as the template parameter
            user_name: Name shown in the message

        Returns:
            Parsed API acknowledgement

        Raises:
            ConfigurationError: If the API is not configured
            DeliveryError: On timeout, network error, non-2xx or a non-JSON-object body
        """
        self.ensure_configured()

        payload = {
            "apiKey": self.api_key,
            "campaignName": self.campaign_name,
            "destination": destination,
            "userName": user_name,
            "templateParams": [otp_code],
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        logger.info(f"📤 Sending OTP campaign '{self.campaign_name}' to {mask_phone(destination)}")

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
        except httpx.TimeoutException:
            logger.error("Messaging API timeout")
            raise DeliveryError(details={"reason": "timeout"})
        except httpx.RequestError as e:
            logger.error(f"Network error sending OTP: {e}")
            raise DeliveryError(details={"reason": "network", "error": str(e)})

        if not response.is_success:
            logger.error(f"❌ Messaging API error: {response.status_code} - {response.text}")
            raise DeliveryError(
                details={"status_code": response.status_code, "body": response.text}
            )

        try:
            result = response.json()
        except ValueError:
            result = None

        if not isinstance(result, dict):
            logger.error(f"❌ Messaging API returned a malformed acknowledgement: {response.text}")
            raise DeliveryError(
                details={"reason": "malformed_response", "status_code": response.status_code, "body": response.text}
            )

        logger.info(f"✅ OTP message accepted for {mask_phone(destination)}")
        return result
