"""
Shared pytest fixtures for email_relay tests.
"""

from typing import Callable

import httpx
import pytest
from unittest.mock import MagicMock

from email_relay.config import AssetHostConfig, SMTPConfig

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000001e221bc330000000049454e44ae426082"
)

SOURCE_URL = "https://images.example.com/banner.png"
UPLOAD_HOST = "api.cloudinary.test"


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def mail_payload() -> dict:
    """Well-formed send request."""
    return {
        "to": "sarah.smith@example.com",
        "subject": "Your quote is ready",
        "html": "<p>Hi Sarah, your quote is attached.</p>",
        "text": "Hi Sarah, your quote is attached.",
    }


@pytest.fixture
def smtp_config() -> SMTPConfig:
    return SMTPConfig(
        host="mail.example.com",
        port=587,
        username="relay@example.com",
        password="secret",
        default_from="Bookings <bookings@example.com>",
    )


@pytest.fixture
def asset_config() -> AssetHostConfig:
    """Cloudinary configured for uploads."""
    return AssetHostConfig(
        cloud_name="demo-cloud",
        upload_preset="email-unsigned",
        api_base=f"https://{UPLOAD_HOST}/v1_1",
    )


@pytest.fixture
def unconfigured_asset_config() -> AssetHostConfig:
    return AssetHostConfig()


@pytest.fixture
def mock_logger():
    """Stand-in for an injected structlog logger."""
    return MagicMock()


@pytest.fixture
def make_client() -> Callable[..., httpx.AsyncClient]:
    """
    Build an AsyncClient backed by httpx.MockTransport.

    Source fetches and Cloudinary uploads are routed by host. Every request
    is recorded on client.requests.
    """

    def _make(
        source: httpx.Response | Exception | None = None,
        upload: httpx.Response | Exception | None = None,
    ) -> httpx.AsyncClient:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            response = upload if request.url.host == UPLOAD_HOST else source
            if response is None:
                raise AssertionError(f"unexpected request to {request.url}")
            if isinstance(response, Exception):
                raise response
            # fresh copy so a client can serve the same response repeatedly
            return httpx.Response(
                response.status_code,
                headers=response.headers,
                content=response.content,
            )

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client.requests = requests
        return client

    return _make
