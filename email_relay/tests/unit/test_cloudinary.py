"""Unit tests for the Cloudinary client."""

import httpx
import pytest

from email_relay.config import AssetHostConfig
from email_relay.core.exceptions import AssetUploadError
from email_relay.services.cloudinary import CloudinaryClient


class TestUpload:
    """Tests for upload error mapping."""

    @pytest.mark.asyncio
    async def test_invalid_cloud_name_is_upload_error(self, make_client, png_bytes):
        config = AssetHostConfig(cloud_name="demo\x7fcloud", upload_preset="email-unsigned")
        client = make_client()

        with pytest.raises(AssetUploadError, match="Cloudinary request failed"):
            await CloudinaryClient(config, client).upload(png_bytes, "logo.jpg", "email-assets")

        assert client.requests == []

    @pytest.mark.asyncio
    async def test_connect_error_is_upload_error(self, asset_config, make_client, png_bytes):
        client = make_client(upload=httpx.ConnectError("connection reset"))

        with pytest.raises(AssetUploadError):
            await CloudinaryClient(asset_config, client).upload(png_bytes, "logo.jpg", "email-assets")

    @pytest.mark.asyncio
    async def test_unconfigured_is_upload_error(self, unconfigured_asset_config, make_client, png_bytes):
        with pytest.raises(AssetUploadError, match="not configured"):
            await CloudinaryClient(unconfigured_asset_config, make_client()).upload(
                png_bytes, "logo.jpg", "email-assets"
            )
