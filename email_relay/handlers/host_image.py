"""
Handler for re-hosting remote images for use in HTML email.

Pipeline:
    1. Fetch source_url
    2. Upload to Cloudinary when configured -> Uploaded(url) | FallBack(reason)
    3. On FallBack, inline the fetched bytes as a data: URI
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx

from email_relay.config import AssetHostConfig, Settings
from email_relay.core.exceptions import RequestValidationError
from email_relay.core.models import (
    FallBack,
    FetchedImage,
    HandlerResult,
    ImageHostRequest,
    Uploaded,
    UploadOutcome,
)
from email_relay.handlers.base import BaseHandler
from email_relay.handlers.registry import register_handler
from email_relay.services.cloudinary import CloudinaryClient
from email_relay.services.source import fetch_image, to_data_uri


@register_handler
class HostEmailImageHandler(BaseHandler):
    """Returns {url} pointing at a hosted copy of source_url, or a data URI."""

    name = "host-email-image"
    failure_message = "Failed to process image"

    def __init__(
        self,
        config: AssetHostConfig,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
        logger=None,
    ):
        super().__init__(logger)
        self.config = config
        self.timeout = timeout
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "HostEmailImageHandler":
        return cls(settings.asset_host_config(), timeout=settings.http_timeout)

    @asynccontextmanager
    async def _http(self) -> AsyncIterator[httpx.AsyncClient]:
        """Injected client if any, otherwise one scoped to this invocation."""
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            yield client

    async def handle(self, payload: dict[str, Any]) -> HandlerResult:
        request = ImageHostRequest.from_dict(payload)
        if not request.source_url:
            raise RequestValidationError("source_url is required")

        async with self._http() as client:
            image = await fetch_image(client, request.source_url)
            outcome = await self.upload(client, request, image)

        if isinstance(outcome, Uploaded):
            return HandlerResult.json(200, {"url": outcome.url})

        self.log.info(
            "image_inlined",
            source_url=request.source_url,
            reason=outcome.reason,
            content_type=image.content_type,
            size=len(image.content),
        )
        return HandlerResult.json(200, {"url": to_data_uri(image)})

    async def upload(
        self,
        client: httpx.AsyncClient,
        request: ImageHostRequest,
        image: FetchedImage,
    ) -> UploadOutcome:
        """Try the asset host. Failures are logged and reported as FallBack."""
        if not self.config.enabled:
            return FallBack(reason="not_configured")

        cloudinary = CloudinaryClient(self.config, client, logger=self.log)
        try:
            url = await cloudinary.upload(
                image.content,
                filename=request.upload_filename,
                folder=self.config.folder_for(request.usage),
            )
        except Exception as e:
            # any upload fault falls back to inlining
            self.log.warning(
                "image_upload_failed",
                reason="falling back to data URI",
                source_url=request.source_url,
                cloud_name=self.config.cloud_name,
                error=str(e),
            )
            return FallBack(reason=str(e))

        return Uploaded(url=url)
