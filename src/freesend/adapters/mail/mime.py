"""Bridge between stdlib ``email.message`` objects and the domain message model.

Applications usually compose mail with :class:`email.message.EmailMessage`.
These helpers convert such a message, and the envelope implied by its
headers, into :class:`~freesend.domain.message.Message` /
:class:`~freesend.domain.message.Envelope` so the transport can send it.
Part headers are carried over verbatim, which keeps the
``X-Freesend-Url`` marker of URL attachments intact.

Contents:
    * :func:`message_from_email` - convert a stdlib message.
    * :func:`envelope_from_email` - derive sender/recipients from headers.
    * :func:`attach_url` - add a URL-marked attachment part to a stdlib message.
"""

from __future__ import annotations

from email.header import decode_header, make_header
from email.message import EmailMessage
from email.message import Message as StdlibMessage
from email.utils import getaddresses

from freesend.domain.attachments import URL_ATTACHMENT_HEADER
from freesend.domain.message import Address, Attachment, Envelope, Message


def _header_text(value: object) -> str:
    """Return a header value as text, decoding RFC 2047 encoded-words.

    Messages parsed with the default compat32 policy hand back raw
    encoded-words; a header longer than one folded line is always written
    that way when the message is serialised.
    """
    return str(make_header(decode_header(str(value))))


def _addresses(msg: StdlibMessage, *header_names: str) -> tuple[Address, ...]:
    values: list[str] = []
    for name in header_names:
        values.extend(str(value) for value in msg.get_all(name, []))
    return tuple(
        Address(email=email, name=_header_text(display) if display else None)
        for display, email in getaddresses(values)
        if email
    )


def _is_attachment_part(part: StdlibMessage) -> bool:
    disposition = part.get_content_disposition()
    if disposition == "attachment":
        return True
    return disposition == "inline" and part.get_filename() is not None


def _decode_text(part: StdlibMessage) -> str:
    payload = part.get_payload(decode=True)
    if not isinstance(payload, bytes):
        return ""
    charset = part.get_content_charset() or "utf-8"
    try:
        return payload.decode(charset, errors="replace")
    except LookupError:
        return payload.decode("utf-8", errors="replace")


def _attachment_from_part(part: StdlibMessage) -> Attachment:
    payload = part.get_payload(decode=True)
    return Attachment(
        filename=part.get_filename(),
        body=payload if isinstance(payload, bytes) else b"",
        content_type=part.get_content_type() if part.get("Content-Type") is not None else None,
        headers=tuple((key, _header_text(value)) for key, value in part.items()),
    )


def message_from_email(msg: StdlibMessage) -> Message:
    """Convert a stdlib message into the domain model.

    The first non-attachment ``text/html`` and ``text/plain`` parts become
    the bodies; every attachment part becomes an :class:`Attachment` in the
    order it appears.

    Example:
        >>> from email.message import EmailMessage
        >>> msg = EmailMessage()
        >>> msg["From"] = "Jane <jane@example.com>"
        >>> msg["To"] = "bob@example.com"
        >>> msg["Subject"] = "Hi"
        >>> msg.set_content("Hello")
        >>> converted = message_from_email(msg)
        >>> converted.from_addresses[0].name, converted.text.strip()
        ('Jane', 'Hello')
    """
    html: str | None = None
    text: str | None = None
    attachments: list[Attachment] = []

    for part in msg.walk():
        if part.is_multipart():
            continue
        if _is_attachment_part(part):
            attachments.append(_attachment_from_part(part))
            continue
        content_type = part.get_content_type()
        if content_type == "text/html" and html is None:
            html = _decode_text(part)
        elif content_type == "text/plain" and text is None:
            text = _decode_text(part)

    subject = msg.get("Subject")
    return Message(
        from_addresses=_addresses(msg, "From"),
        to=_addresses(msg, "To"),
        subject=_header_text(subject) if subject is not None else None,
        html=html,
        text=text,
        attachments=tuple(attachments),
    )


def envelope_from_email(msg: StdlibMessage) -> Envelope:
    """Derive the envelope from ``Sender``/``From`` and ``To``/``Cc``/``Bcc``.

    Example:
        >>> from email.message import EmailMessage
        >>> msg = EmailMessage()
        >>> msg["From"] = "jane@example.com"
        >>> msg["Bcc"] = "hidden@example.com"
        >>> envelope_from_email(msg).recipients[0].email
        'hidden@example.com'
    """
    senders = _addresses(msg, "Sender") or _addresses(msg, "From")
    return Envelope(
        sender=senders[0] if senders else None,
        recipients=_addresses(msg, "To", "Cc", "Bcc"),
    )


def attach_url(msg: EmailMessage, url: str, filename: str, content_type: str | None = None) -> None:
    """Append an empty attachment part marked for URL delivery.

    Args:
        msg: Message to extend in place.
        url: HTTP/HTTPS location Freesend downloads the file from.
        filename: Name shown to the recipient.
        content_type: Optional MIME type; when omitted the part declares none
            and Freesend infers it.

    Example:
        >>> from email.message import EmailMessage
        >>> msg = EmailMessage()
        >>> msg.set_content("see attached")
        >>> attach_url(msg, "https://example.com/a.pdf", "a.pdf", "application/pdf")
        >>> part = list(msg.iter_attachments())[0]
        >>> part["X-Freesend-Url"]
        'https://example.com/a.pdf'
    """
    maintype, _, subtype = (content_type or "application/octet-stream").partition("/")
    msg.add_attachment(b"", maintype=maintype, subtype=subtype or "octet-stream", filename=filename)
    part = msg.get_payload()[-1]
    part[URL_ATTACHMENT_HEADER] = url
    if content_type is None:
        del part["Content-Type"]


__all__ = [
    "attach_url",
    "envelope_from_email",
    "message_from_email",
]
