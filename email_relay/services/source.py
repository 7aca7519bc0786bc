"""
Fetch images from caller-supplied URLs.
"""

import base64

import httpx

from email_relay.config import DEFAULT_CONTENT_TYPE
from email_relay.core.exceptions import SourceFetchError
from email_relay.core.logging import get_logger
from email_relay.core.models import FetchedImage

log = get_logger(__name__)


async def fetch_image(client: httpx.AsyncClient, source_url: str) -> FetchedImage:
    """
    Download source_url.

    Raises:
        SourceFetchError: the upstream answered with a non-success status.
        httpx.HTTPError: the URL could not be reached at all.
    """
    response = await client.get(source_url)
    if not response.is_success:
        log.info(
            "source_fetch_rejected",
            source_url=source_url,
            status=response.status_code,
        )
        raise SourceFetchError(response.status_code, response.reason_phrase)

    content_type = response.headers.get("content-type") or DEFAULT_CONTENT_TYPE
    log.debug(
        "source_fetched",
        source_url=source_url,
        content_type=content_type,
        size=len(response.content),
    )
    return FetchedImage(content=response.content, content_type=content_type)


def to_data_uri(image: FetchedImage) -> str:
    """Inline the image as a base64 data: URI."""
    encoded = base64.b64encode(image.content).decode("ascii")
    return f"data:{image.content_type};base64,{encoded}"
