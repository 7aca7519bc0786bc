"""Core modules for the email relay."""

from .logging import configure_logging, get_logger
from .exceptions import (
    RelayError,
    MethodNotAllowedError,
    RequestValidationError,
    SourceFetchError,
    AssetUploadError,
)
from .models import (
    InvocationEvent,
    HandlerResult,
    MailRequest,
    ImageHostRequest,
    FetchedImage,
    Uploaded,
    FallBack,
    UploadOutcome,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "RelayError",
    "MethodNotAllowedError",
    "RequestValidationError",
    "SourceFetchError",
    "AssetUploadError",
    "InvocationEvent",
    "HandlerResult",
    "MailRequest",
    "ImageHostRequest",
    "FetchedImage",
    "Uploaded",
    "FallBack",
    "UploadOutcome",
]
