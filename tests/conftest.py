"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from talkbank_baas.client import BaasClient
from talkbank_baas.common.settings import Settings
from talkbank_baas.signing import Credential

BASE_URL = "https://baas.test/api/v1/"
EMPTY_HASH = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def make_response(status: int = 200, payload: bytes = b"{}") -> AsyncMock:
    """Mock aiohttp response usable as an async context manager."""
    response = AsyncMock()
    response.status = status
    response.read = AsyncMock(return_value=payload)
    response.__aenter__ = AsyncMock(return_value=response)
    response.__aexit__ = AsyncMock(return_value=None)
    return response


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        base_url=BASE_URL,
        partner_id="partner-1",
        token="s3cr3t",
        http_timeout=5.0,
    )


@pytest.fixture
def credential() -> Credential:
    return Credential(partner_id="partner-1", token="s3cr3t")


@pytest.fixture
def fixed_now() -> datetime:
    """Instant used to pin request dates."""
    return datetime(1994, 11, 15, 8, 12, 31, tzinfo=timezone.utc)


@pytest.fixture
def session() -> MagicMock:
    """Fake aiohttp session answering 200 with an empty JSON object."""
    fake = MagicMock()
    fake.request = AsyncMock(return_value=make_response())
    fake.close = AsyncMock()
    return fake


@pytest.fixture
def client(credential: Credential, session: MagicMock) -> BaasClient:
    """Client wired to the fake session."""
    baas = BaasClient(BASE_URL, credential)
    baas._session = session
    return baas
