"""Shared test fixtures."""

import os

# Settings require a JWT secret at import time
os.environ.setdefault("JWT_SECRET", "test-secret-key-for-unit-tests-only")
os.environ.setdefault("SEED_DEFAULT_PLANS", "true")

from datetime import datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from tests.unit.factories import T0  # noqa: E402


class FakeClock:
    """Manually advanced clock; call it like utc_now()."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


class RecordingSms:
    """SmsSender that records messages; `delivered` controls the reported outcome."""

    def __init__(self, delivered: bool = True) -> None:
        self.delivered = delivered
        self.sent: list[tuple[str, str]] = []

    async def send(self, number: str, message: str) -> bool:
        self.sent.append((number, message))
        return self.delivered


class RecordingEmail:
    def __init__(self, delivered: bool = True) -> None:
        self.delivered = delivered
        self.sent: list[tuple[str, str, str]] = []

    async def send(self, to_email: str, subject: str, body: str) -> bool:
        self.sent.append((to_email, subject, body))
        return self.delivered


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sms() -> RecordingSms:
    return RecordingSms()


@pytest.fixture
def email() -> RecordingEmail:
    return RecordingEmail()


@pytest.fixture
def services(clock: FakeClock, sms: RecordingSms, email: RecordingEmail):
    from config.settings import settings
    from src.bootstrap import build_services

    return build_services(settings, clock=clock, sms=sms, email=email)


@pytest.fixture
async def client(services) -> AsyncClient:
    """Async HTTP client bound to a fresh app with its own in-memory state."""
    from src.main import create_app

    transport = ASGITransport(app=create_app(services))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
