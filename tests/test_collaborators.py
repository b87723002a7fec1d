"""
Tests for the outbound messaging and Google Sheet clients, using
httpx.MockTransport in place of the network.
"""

import json

import httpx
import pytest

from app.core.exceptions import ConfigurationError, DeliveryError, ForwardError
from app.services.aisensy_service import AiSensyService
from app.services.sheet_service import SheetService

API_URL = "https://messaging.example.com/campaign/t1/api/v2"
SHEET_URL = "https://script.example.com/macros/s/abc/exec"


def recording_transport(handler, calls):
    def _handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return handler(request)
    return httpx.MockTransport(_handler)


class TestAiSensyService:

    @pytest.mark.asyncio
    async def test_sends_campaign_payload(self):
        calls = []
        transport = recording_transport(
            lambda request: httpx.Response(200, json={"success": "true"}), calls
        )
        service = AiSensyService(
            api_key="secret", api_url=API_URL, campaign_name="OTP5", transport=transport
        )

        result = await service.send_otp("919876543210", "4821", "Asha")

        assert result == {"success": "true"}
        assert len(calls) == 1
        request = calls[0]
        assert str(request.url) == API_URL
        assert request.headers["Authorization"] == "Bearer secret"
        assert json.loads(request.content) == {
            "apiKey": "secret",
            "campaignName": "OTP5",
            "destination": "919876543210",
            "userName": "Asha",
            "templateParams": ["4821"],
        }

    @pytest.mark.asyncio
    async def test_non_success_status_raises_delivery_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(401, text="Invalid API key"))
        service = AiSensyService(api_key="bad", api_url=API_URL, transport=transport)

        with pytest.raises(DeliveryError) as exc_info:
            await service.send_otp("919876543210", "4821", "Student")

        assert exc_info.value.details == {"status_code": 401, "body": "Invalid API key"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="OK"),
            httpx.Response(200, json=["queued"]),
        ],
    )
    async def test_malformed_acknowledgement_raises_delivery_error(self, response):
        transport = httpx.MockTransport(lambda request: response)
        service = AiSensyService(api_key="secret", api_url=API_URL, transport=transport)

        with pytest.raises(DeliveryError) as exc_info:
            await service.send_otp("919876543210", "4821", "Student")

        assert exc_info.value.details["reason"] == "malformed_response"
        assert exc_info.value.details["status_code"] == 200

    @pytest.mark.asyncio
    async def test_timeout_raises_delivery_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        service = AiSensyService(
            api_key="secret", api_url=API_URL, transport=httpx.MockTransport(handler)
        )
        with pytest.raises(DeliveryError) as exc_info:
            await service.send_otp("919876543210", "4821", "Student")
        assert exc_info.value.details["reason"] == "timeout"

    @pytest.mark.asyncio
    async def test_network_error_raises_delivery_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = AiSensyService(
            api_key="secret", api_url=API_URL, transport=httpx.MockTransport(handler)
        )
        with pytest.raises(DeliveryError):
            await service.send_otp("919876543210", "4821", "Student")

    @pytest.mark.asyncio
    async def test_missing_config_raises_before_any_call(self):
        calls = []
        transport = recording_transport(lambda request: httpx.Response(200), calls)
        service = AiSensyService(api_key="", api_url=API_URL, transport=transport)

        assert service.is_configured() is False
        with pytest.raises(ConfigurationError) as exc_info:
            await service.send_otp("919876543210", "4821", "Student")

        assert exc_info.value.details == {"missing": ["API_KEY"]}
        assert calls == []


class TestSheetService:

    @pytest.mark.asyncio
    async def test_posts_payload_and_follows_redirect(self):
        calls = []

        def handler(request):
            if request.url.host == "script.example.com":
                return httpx.Response(302, headers={"Location": "https://echo.example.com/result"})
            return httpx.Response(200, json={"result": "success"})

        service = SheetService(sheet_url=SHEET_URL, transport=recording_transport(handler, calls))
        result = await service.submit({"name": "Asha"})

        assert result == {"result": "success"}
        assert json.loads(calls[0].content) == {"name": "Asha"}
        assert str(calls[-1].url) == "https://echo.example.com/result"

    @pytest.mark.asyncio
    async def test_plain_text_ack(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="OK"))
        service = SheetService(sheet_url=SHEET_URL, transport=transport)
        assert await service.submit({"name": "Asha"}) == {}

    @pytest.mark.asyncio
    async def test_error_body_raises_forward_error(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json={"result": "error", "error": "sheet locked"})
        )
        service = SheetService(sheet_url=SHEET_URL, transport=transport)
        with pytest.raises(ForwardError):
            await service.submit({"name": "Asha"})

    @pytest.mark.asyncio
    async def test_server_error_raises_forward_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
        service = SheetService(sheet_url=SHEET_URL, transport=transport)
        with pytest.raises(ForwardError) as exc_info:
            await service.submit({"name": "Asha"})
        assert exc_info.value.details["status_code"] == 500

    @pytest.mark.asyncio
    async def test_missing_url(self):
        service = SheetService(sheet_url="")
        assert service.is_configured() is False
        with pytest.raises(ConfigurationError):
            await service.submit({"name": "Asha"})
