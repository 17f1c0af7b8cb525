"""Translate a :class:`Message` into the Freesend JSON request body.

Pure functions, no I/O. The only failures are unresolvable sender or
recipient addresses, raised before any network call.
"""

from __future__ import annotations

import base64
from typing import Any

from .attachments import get_attachment_url
from .errors import MissingRecipientError, MissingSenderError
from .message import Address, Attachment, Envelope, Message

#: Filename used when an attachment does not declare one.
DEFAULT_ATTACHMENT_FILENAME = "attachment"


def _is_usable(address: Address | None) -> bool:
    return address is not None and bool(address.email.strip())


def resolve_sender(message: Message, envelope: Envelope) -> Address:
    """Return the message's first From address, else the envelope sender.

    Raises:
        MissingSenderError: When neither source holds an address.
    """
    for address in message.from_addresses:
        if _is_usable(address):
            return address
    if envelope.sender is not None and _is_usable(envelope.sender):
        return envelope.sender
    raise MissingSenderError()


def resolve_recipient(message: Message, envelope: Envelope) -> str:
    """Return the single recipient address sent as ``to``.

    The first usable entry of ``message.to`` wins; the envelope recipients
    are only consulted when the message has none. Empty or whitespace-only
    addresses count as absent.

    Raises:
        MissingRecipientError: When neither source holds a usable address.

    Example:
        >>> msg = Message.create(to=["a@example.com", "b@example.com"])
        >>> resolve_recipient(msg, Envelope.create(recipients=["z@example.com"]))
        'a@example.com'
    """
    for candidates in (message.to, envelope.recipients):
        for address in candidates:
            if _is_usable(address):
                return address.email.strip()
    raise MissingRecipientError()


def build_attachment(attachment: Attachment) -> dict[str, str]:
    """Build one attachment entry: ``url`` for marked parts, base64 ``content`` otherwise."""
    entry: dict[str, str] = {"filename": attachment.filename or DEFAULT_ATTACHMENT_FILENAME}

    url = get_attachment_url(attachment)
    if url is not None:
        entry["url"] = url
    else:
        entry["content"] = base64.b64encode(attachment.read()).decode("ascii")

    if attachment.content_type:
        entry["contentType"] = attachment.content_type
    return entry


def build_attachments(message: Message) -> list[dict[str, str]]:
    """Build attachment entries in the message's original order."""
    return [build_attachment(attachment) for attachment in message.attachments]


def build_payload(message: Message, envelope: Envelope | None = None) -> dict[str, Any]:
    """Build the request body for one send call.

    Args:
        message: Message to translate; never mutated.
        envelope: Fallback sender/recipient source. None means empty.

    Returns:
        JSON-serialisable dict following the Freesend send-email schema.

    Raises:
        MissingRecipientError: No usable recipient address.
        MissingSenderError: No usable sender address.

    Example:
        >>> payload = build_payload(
        ...     Message.create(
        ...         from_address="sender@example.com",
        ...         to="recipient@example.com",
        ...         subject="Test Subject",
        ...         html="<h1>Hello World</h1>",
        ...     )
        ... )
        >>> payload == {
        ...     "fromEmail": "sender@example.com",
        ...     "to": "recipient@example.com",
        ...     "subject": "Test Subject",
        ...     "html": "<h1>Hello World</h1>",
        ... }
        True
    """
    envelope = envelope if envelope is not None else Envelope()
    recipient = resolve_recipient(message, envelope)
    sender = resolve_sender(message, envelope)

    payload: dict[str, Any] = {
        "fromEmail": sender.email.strip(),
        "to": recipient,
        "subject": message.subject or "",
    }

    if sender.name:
        payload["fromName"] = sender.name

    if message.html:
        payload["html"] = message.html

    if message.text:
        payload["text"] = message.text

    # The API requires at least one body field.
    if "html" not in payload and "text" not in payload:
        payload["text"] = ""

    attachments = build_attachments(message)
    if attachments:
        payload["attachments"] = attachments

    return payload


__all__ = [
    "DEFAULT_ATTACHMENT_FILENAME",
    "build_attachment",
    "build_attachments",
    "build_payload",
    "resolve_recipient",
    "resolve_sender",
]
