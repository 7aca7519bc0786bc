"""Clients for the relay's upstream services."""

from .cloudinary import CloudinaryClient
from .mailer import SMTPMailer
from .source import fetch_image, to_data_uri

__all__ = ["CloudinaryClient", "SMTPMailer", "fetch_image", "to_data_uri"]
