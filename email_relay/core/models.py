"""
Data models for the relay.

Uses dataclasses for clean, typed data structures. Nothing here outlives a
single invocation.
"""

import json
from dataclasses import dataclass
from typing import Any

from email_relay.config import DEFAULT_ASSET_FILENAME


@dataclass
class InvocationEvent:
    """Generic request envelope handed to a handler by the front door."""

    http_method: str = "POST"
    body: str | None = None

    @classmethod
    def from_payload(cls, payload: Any, http_method: str = "POST") -> "InvocationEvent":
        return cls(http_method=http_method, body=json.dumps(payload))


@dataclass
class HandlerResult:
    """Result envelope: a status code and a JSON-encoded body."""

    status_code: int
    body: str

    @classmethod
    def json(cls, status_code: int, payload: dict[str, Any]) -> "HandlerResult":
        return cls(status_code=status_code, body=json.dumps(payload))

    @classmethod
    def error(cls, status_code: int, error: str, details: str | None = None) -> "HandlerResult":
        payload = {"error": error}
        if details is not None:
            payload["details"] = details
        return cls.json(status_code, payload)

    @property
    def payload(self) -> dict[str, Any]:
        """Decoded body."""
        return json.loads(self.body)

    def to_dict(self) -> dict[str, Any]:
        return {"statusCode": self.status_code, "body": self.body}


@dataclass
class MailRequest:
    """An outbound HTML email."""

    to: str = ""
    subject: str = ""
    html: str = ""
    text: str | None = None

    REQUIRED = ("to", "subject", "html")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MailRequest":
        return cls(
            to=data.get("to") or "",
            subject=data.get("subject") or "",
            html=data.get("html") or "",
            text=data.get("text") or None,
        )

    def missing_fields(self) -> list[str]:
        """Required fields that are absent or empty, in declaration order."""
        return [name for name in self.REQUIRED if not getattr(self, name)]


@dataclass
class ImageHostRequest:
    """A remote image to re-host for use in an email."""

    source_url: str = ""
    filename: str = DEFAULT_ASSET_FILENAME
    usage: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ImageHostRequest":
        return cls(
            source_url=data.get("source_url") or "",
            filename=data.get("filename") or DEFAULT_ASSET_FILENAME,
            usage=data.get("usage") or None,
        )

    @property
    def upload_filename(self) -> str:
        # Always .jpg, whatever the source type is.
        return f"{self.filename}.jpg"


@dataclass
class FetchedImage:
    """Bytes retrieved from a source_url."""

    content: bytes
    content_type: str


@dataclass(frozen=True)
class Uploaded:
    """Asset host accepted the upload."""

    url: str


@dataclass(frozen=True)
class FallBack:
    """Upload skipped or failed; encode inline instead."""

    reason: str


UploadOutcome = Uploaded | FallBack
