"""
app/services/sheet_service.py

Purpose: Google Sheet ingest

- Posts admission submissions (fields + base64 attachments) as JSON
- Apps Script answers through a redirect, so redirects are followed
- Failures surface as ForwardError
"""

import httpx
from typing import Any, Dict, Optional

from app.core.config import settings
from app.core.exceptions import ConfigurationError, ForwardError
from app.core.logging import get_logger

logger = get_logger(__name__)


class SheetService:
    """Service for forwarding submissions to the spreadsheet endpoint"""

    def __init__(
        self,
        sheet_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.sheet_url = sheet_url if sheet_url is not None else settings.GOOGLE_SHEET_URL
        self._timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    def is_configured(self) -> bool:
        return bool(self.sheet_url)

    async def submit(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Forwards a submission payload.

        Returns:
            Parsed response body (empty dict if not JSON)

        Raises:
            ConfigurationError: If GOOGLE_SHEET_URL is not set
            ForwardError: On timeout, network error, non-2xx or an error body
        """
        if not self.is_configured():
            raise ConfigurationError(
                "Form submission is not configured",
                details={"missing": ["GOOGLE_SHEET_URL"]}
            )

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.post(self.sheet_url, json=payload)
        except httpx.TimeoutException:
            logger.error("Google Sheet timeout")
            raise ForwardError(details={"reason": "timeout"})
        except httpx.RequestError as e:
            logger.error(f"Network error forwarding submission: {e}")
            raise ForwardError(details={"reason": "network", "error": str(e)})

        if not response.is_success:
            logger.error(f"❌ Google Sheet error: {response.status_code} - {response.text}")
            raise ForwardError(
                details={"status_code": response.status_code, "body": response.text}
            )

        try:
            data = response.json()
        except ValueError:
            # Plain-text acknowledgement
            return {}

        if isinstance(data, dict) and (data.get("result") == "error" or data.get("success") is False):
            logger.error(f"❌ Google Sheet rejected submission: {data}")
            raise ForwardError(details={"body": data})

        logger.info("✅ Submission stored in Google Sheet")
        return data if isinstance(data, dict) else {"response": data}
