"""
Abstract base class for relay handlers.
"""

import json
from abc import ABC, abstractmethod
from typing import Any

from email_relay.config import Settings
from email_relay.core.exceptions import MethodNotAllowedError, RequestValidationError
from email_relay.core.logging import get_logger
from email_relay.core.models import HandlerResult, InvocationEvent

log = get_logger(__name__)


class BaseHandler(ABC):
    """
    Handler interface: one invocation event in, one result envelope out.

    Subclasses implement handle(); invoke() owns method checks, body
    decoding and the mapping of errors to status codes.
    """

    name: str = ""
    failure_message: str = "Request failed"

    def __init__(self, logger=None):
        self.log = logger or log

    @classmethod
    @abstractmethod
    def from_settings(cls, settings: Settings) -> "BaseHandler":
        """Build the handler with its explicit config."""
        pass

    @abstractmethod
    async def handle(self, payload: dict[str, Any]) -> HandlerResult:
        """
        Process a decoded request body.

        Args:
            payload: JSON object from the request body

        Returns:
            HandlerResult for the success path. Errors are raised.
        """
        pass

    async def invoke(self, event: InvocationEvent) -> HandlerResult:
        """Run the handler. Never raises."""
        try:
            self.check_method(event.http_method)
        except MethodNotAllowedError as e:
            self.log.info("method_not_allowed", handler=self.name, method=e.method)
            return HandlerResult.error(e.status_code, str(e))

        try:
            payload = self.parse_body(event.body)
            return await self.handle(payload)
        except RequestValidationError as e:
            self.log.info("request_rejected", handler=self.name, error=str(e))
            return HandlerResult.error(e.status_code, str(e))
        except Exception as e:
            self.log.error("handler_failed", handler=self.name, error=str(e), exc_info=True)
            return HandlerResult.error(500, self.failure_message, details=str(e))

    @staticmethod
    def check_method(method: str | None) -> None:
        if (method or "").upper() != "POST":
            raise MethodNotAllowedError(method or "")

    @staticmethod
    def parse_body(body: str | None) -> dict[str, Any]:
        """Decode a JSON object body. An empty body counts as {}."""
        if not body:
            return {}
        try:
            payload = json.loads(body)
        except ValueError:
            raise RequestValidationError("Invalid JSON body")
        if not isinstance(payload, dict):
            raise RequestValidationError("Request body must be a JSON object")
        return payload
