"""
Handler registry for routing function names to handlers.
"""

from typing import Type

from email_relay.config import Settings
from email_relay.core.logging import get_logger
from email_relay.handlers.base import BaseHandler

log = get_logger(__name__)

# Global handler registry, keyed by function name
_handlers: dict[str, Type[BaseHandler]] = {}


def register_handler(handler_class: Type[BaseHandler]) -> Type[BaseHandler]:
    """
    Decorator to register a handler class under its name.

    Usage:
        @register_handler
        class SendEmailHandler(BaseHandler):
            name = "send"
            ...
    """
    if not handler_class.name:
        raise ValueError(f"{handler_class.__name__} has no name")
    _handlers[handler_class.name] = handler_class
    log.debug("handler_registered", handler=handler_class.__name__, name=handler_class.name)
    return handler_class


def get_handler(name: str, settings: Settings) -> BaseHandler | None:
    """
    Build the handler registered under name.

    Args:
        name: Function name, e.g. "send"
        settings: Settings to take the handler's config from

    Returns:
        A fresh handler, or None if nothing is registered under name
    """
    handler_class = get_handler_class(name)
    if handler_class is None:
        return None
    return handler_class.from_settings(settings)


def get_handler_class(name: str) -> Type[BaseHandler] | None:
    """Handler class registered under name, without building it."""
    return _handlers.get(name)


def get_handler_names() -> list[str]:
    """Names of all registered handlers."""
    return sorted(_handlers)
