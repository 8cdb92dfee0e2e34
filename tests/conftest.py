"""Shared fixtures for tests."""

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from smartcar_api.config import USER_AGENT
from smartcar_api.transport import AiohttpTransport

VALID_TOKEN = "valid-token"
VALID_AUTHORIZATION = f"Bearer {VALID_TOKEN}"
VALID_VID = "valid-vid"
IMPERIAL_ODOMETER_READING = 3.14
METRIC_ODOMETER_READING = 2.71
SUCCESS = {"status": "success"}
VALID_USER_AGENT = USER_AGENT


@pytest.fixture
def mock_transport():
    """Create a mock transport."""
    transport = MagicMock(spec=AiohttpTransport)
    transport.request = AsyncMock()
    transport.close = AsyncMock()
    transport.closed = False
    return transport


@pytest.fixture
def sample_permissions_data():
    """Sample permissions reply from the API."""
    return {"permissions": ["permission1", "permission2", "permission3"]}


@pytest.fixture
def sample_token_data():
    """Sample OAuth token endpoint reply."""
    return {
        "access_token": "access-abc",
        "token_type": "Bearer",
        "expires_in": 7200,
        "refresh_token": "refresh-xyz",
    }


def make_mock_response(status=200, content_type="application/json", json_data=None, text=""):
    """Create a mock aiohttp response."""
    response = AsyncMock()
    response.status = status
    response.reason = "OK" if status < 400 else "Error"
    response.headers = {"Content-Type": content_type} if content_type else {}
    response.json = AsyncMock(return_value=json_data)
    response.text = AsyncMock(return_value=text)
    return response


def make_mock_session(response=None, side_effect=None):
    """Create a mock aiohttp session whose request() yields ``response``."""
    session = MagicMock(spec=aiohttp.ClientSession)
    session.closed = False
    if side_effect is not None:
        enter = AsyncMock(side_effect=side_effect)
    else:
        enter = AsyncMock(return_value=response)
    session.request = MagicMock(
        return_value=AsyncMock(__aenter__=enter, __aexit__=AsyncMock(return_value=False))
    )
    return session
