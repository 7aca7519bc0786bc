"""
Cloudinary client for re-hosting email images.

Uses unsigned uploads, so only the cloud name and an upload preset are needed.
"""

import httpx

from email_relay.config import AssetHostConfig
from email_relay.core.exceptions import AssetUploadError
from email_relay.core.logging import get_logger

log = get_logger(__name__)


class CloudinaryClient:
    """Uploads image bytes to Cloudinary over an existing httpx client."""

    def __init__(self, config: AssetHostConfig, client: httpx.AsyncClient, logger=None):
        self.config = config
        self._client = client
        self.log = logger or log

    async def upload(self, content: bytes, filename: str, folder: str) -> str:
        """
        Upload an image.

        Args:
            content: Image bytes
            filename: Name sent with the file part
            folder: Cloudinary folder to store the asset under

        Returns:
            The asset's secure_url.

        Raises:
            AssetUploadError: on transport failure, a non-success response,
                or a response without secure_url.
        """
        if not self.config.enabled:
            raise AssetUploadError("Cloudinary not configured")

        try:
            response = await self._client.post(
                self.config.upload_url,
                data={
                    "upload_preset": self.config.upload_preset,
                    "folder": folder,
                },
                files={"file": (filename, content)},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AssetUploadError(f"Cloudinary request failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            raise AssetUploadError(self._error_message(data))

        secure_url = data.get("secure_url") if isinstance(data, dict) else None
        if not secure_url:
            raise AssetUploadError("Cloudinary response missing secure_url")

        self.log.info(
            "image_uploaded",
            folder=folder,
            filename=filename,
            size=len(content),
        )
        return secure_url

    @staticmethod
    def _error_message(data) -> str:
        """Pull error.message out of a Cloudinary error body."""
        error = data.get("error") if isinstance(data, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return "Cloudinary upload failed"
