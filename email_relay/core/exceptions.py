"""
Error taxonomy for relay handlers.

Handlers raise these; BaseHandler.invoke turns them into result envelopes.
"""


class RelayError(Exception):
    """Base class for all relay errors."""

    status_code = 500


class MethodNotAllowedError(RelayError):
    """Request used a verb other than POST."""

    status_code = 405

    def __init__(self, method: str = ""):
        self.method = method
        super().__init__("Method Not Allowed")


class RequestValidationError(RelayError):
    """Caller supplied a bad payload."""

    status_code = 400


class SourceFetchError(RequestValidationError):
    """The source_url answered with a non-success status."""

    def __init__(self, status: int, reason: str):
        self.status = status
        self.reason = reason
        super().__init__(f"Failed to fetch source_url: {status} {reason}")


class AssetUploadError(RelayError):
    """The asset host rejected or failed an upload. Recovered by the data URI fallback."""
