"""Relay handlers."""

from .base import BaseHandler
from .registry import register_handler, get_handler, get_handler_class, get_handler_names

# Import handlers to trigger registration via @register_handler decorator
from .send import SendEmailHandler
from .host_image import HostEmailImageHandler

__all__ = [
    "BaseHandler",
    "register_handler",
    "get_handler",
    "get_handler_class",
    "get_handler_names",
    "SendEmailHandler",
    "HostEmailImageHandler",
]
