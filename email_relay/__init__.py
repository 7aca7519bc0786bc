"""
Email relay.

A small HTTP backend that:
- Sends HTML email through an SMTP relay
- Re-hosts remote images on Cloudinary, falling back to inline data URIs
"""

__version__ = "1.0.0"
