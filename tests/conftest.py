"""
Shared fixtures: a controllable clock, a store, and services with the
external collaborators mocked out.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_form_service, get_otp_service
from app.main import app
from app.services.aisensy_service import AiSensyService
from app.services.form_service import FormService
from app.services.otp_service import OTPService
from app.services.otp_store import OTPStore
from app.services.sheet_service import SheetService


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime = datetime(2026, 1, 15, 10, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return OTPStore(clock=clock, max_entries=100)


@pytest.fixture
def messenger():
    """AiSensyService double; send_otp is an AsyncMock."""
    mock = MagicMock(spec=AiSensyService)
    mock.send_otp.return_value = {"status": "success"}
    mock.is_configured.return_value = True
    return mock


@pytest.fixture
def otp_service(store, messenger):
    return OTPService(store=store, messenger=messenger, ttl_minutes=5, country_code="91")


@pytest.fixture
def sheet():
    """SheetService double; submit is an AsyncMock."""
    mock = MagicMock(spec=SheetService)
    mock.submit.return_value = {"result": "success"}
    mock.is_configured.return_value = True
    return mock


@pytest.fixture
def form_service(sheet):
    return FormService(sheet=sheet, max_upload_bytes=1024)


@pytest.fixture
def client(otp_service, form_service):
    app.dependency_overrides[get_otp_service] = lambda: otp_service
    app.dependency_overrides[get_form_service] = lambda: form_service
    yield TestClient(app)
    app.dependency_overrides.clear()
