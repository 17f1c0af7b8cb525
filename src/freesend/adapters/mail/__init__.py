"""Mail adapter - Freesend HTTP transport.

Structure:
    * :mod:`.config` - Freesend configuration model and fallback chain
    * :mod:`.transport` - httpx-based transport and send function
    * :mod:`.mime` - stdlib ``email.message`` bridge
    * :mod:`.registry` - named-mailer registry

Contents:
    * :class:`.config.FreesendConfig` - Transport configuration container
    * :func:`.config.load_freesend_config_from_dict` - Config dict loader
    * :class:`.transport.FreesendTransport` - Primary sending interface
    * :func:`.transport.send_message` - Port-shaped send function
    * :class:`.registry.MailerRegistry` - Named mailers
"""

from __future__ import annotations

from .config import FreesendConfig, load_freesend_config_from_dict, resolve_freesend_config
from .mime import attach_url, envelope_from_email, message_from_email
from .registry import MailerRegistry, register_freesend
from .transport import FreesendTransport, SentMessage, encode_payload, send_message

__all__ = [
    "FreesendConfig",
    "FreesendTransport",
    "MailerRegistry",
    "SentMessage",
    "attach_url",
    "encode_payload",
    "envelope_from_email",
    "load_freesend_config_from_dict",
    "message_from_email",
    "register_freesend",
    "resolve_freesend_config",
    "send_message",
]
