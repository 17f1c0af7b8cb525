"""Domain layer - pure message translation with no I/O or framework dependencies.

Contents:
    * :mod:`.message` - Message, Envelope, Attachment and Address value objects
    * :mod:`.attachments` - URL attachment marking and detection
    * :mod:`.payload` - Message-to-JSON payload translation
    * :mod:`.enums` - Domain enumerations (TransportErrorKind, OutputFormat, DeployTarget)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .attachments import URL_ATTACHMENT_HEADER, get_attachment_url, is_url_attachment, url_attachment
from .enums import DeployTarget, OutputFormat, TransportErrorKind
from .errors import (
    ApiError,
    ConfigurationError,
    MissingRecipientError,
    MissingSenderError,
    NetworkError,
    TransportError,
)
from .message import Address, Attachment, Envelope, Message
from .payload import build_payload

__all__ = [
    # Message model
    "Address",
    "Attachment",
    "Envelope",
    "Message",
    # Attachments
    "URL_ATTACHMENT_HEADER",
    "get_attachment_url",
    "is_url_attachment",
    "url_attachment",
    # Payload
    "build_payload",
    # Enums
    "DeployTarget",
    "OutputFormat",
    "TransportErrorKind",
    # Errors
    "ApiError",
    "ConfigurationError",
    "MissingRecipientError",
    "MissingSenderError",
    "NetworkError",
    "TransportError",
]
