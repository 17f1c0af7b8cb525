"""Freesend mail transport: payload builder, URL attachments and HTTP sender.

Public surface, routed through the architectural layers:

- Domain: message model, URL-attachment marker, payload builder, errors
- Adapters: the httpx transport, its configuration and the mailer registry
- Composition: wired configuration loader
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Adapter exports
from .adapters.mail import (
    FreesendConfig,
    FreesendTransport,
    MailerRegistry,
    SentMessage,
    attach_url,
    register_freesend,
)

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain import (
    Address,
    ApiError,
    Attachment,
    ConfigurationError,
    Envelope,
    Message,
    MissingRecipientError,
    MissingSenderError,
    NetworkError,
    TransportError,
    TransportErrorKind,
    build_payload,
    get_attachment_url,
    url_attachment,
)

__all__ = [
    "Address",
    "ApiError",
    "Attachment",
    "ConfigurationError",
    "Envelope",
    "FreesendConfig",
    "FreesendTransport",
    "MailerRegistry",
    "Message",
    "MissingRecipientError",
    "MissingSenderError",
    "NetworkError",
    "SentMessage",
    "TransportError",
    "TransportErrorKind",
    "attach_url",
    "build_payload",
    "get_attachment_url",
    "get_config",
    "print_info",
    "register_freesend",
    "url_attachment",
]
