"""URL-based attachment marking.

Freesend can fetch an attachment from an HTTP/HTTPS URL instead of receiving
base64 content. An attachment is flagged for URL delivery by carrying the
:data:`URL_ATTACHMENT_HEADER` header with the URL as value and an empty body.
Detection is a plain header lookup, so marked attachments need no shared
state and survive any pipeline that preserves part headers.

Note:
    Freesend only fetches HTTP/HTTPS URLs, gives up after 30 seconds and
    rejects files larger than 25 MB. The URL is not validated locally; an
    unreachable URL fails the send on the remote side.
"""

from __future__ import annotations

from .message import Attachment

#: Reserved header marking an attachment as "fetch from this URL".
URL_ATTACHMENT_HEADER = "X-Freesend-Url"


def url_attachment(url: str, filename: str, content_type: str | None = None) -> Attachment:
    """Create an attachment that Freesend downloads from ``url``.

    Args:
        url: HTTP/HTTPS location of the file.
        filename: Name shown to the recipient.
        content_type: Optional MIME type; when omitted the API infers it.

    Returns:
        Attachment with an empty body and the URL marker header.

    Example:
        >>> att = url_attachment("https://example.com/report.pdf", "report.pdf", "application/pdf")
        >>> get_attachment_url(att)
        'https://example.com/report.pdf'
        >>> att.read()
        b''
    """
    attachment = Attachment(filename=filename, body=b"").with_header(URL_ATTACHMENT_HEADER, url)
    if content_type is not None:
        attachment = attachment.with_content_type(content_type)
    return attachment


def get_attachment_url(attachment: Attachment) -> str | None:
    """Return the marker URL, or None for a content attachment.

    Example:
        >>> get_attachment_url(Attachment.from_data(b"x", "x.bin")) is None
        True
    """
    value = attachment.header(URL_ATTACHMENT_HEADER)
    if value is None or not value.strip():
        return None
    return value


def is_url_attachment(attachment: Attachment) -> bool:
    """Return True when ``attachment`` carries a non-empty URL marker."""
    return get_attachment_url(attachment) is not None


__all__ = [
    "URL_ATTACHMENT_HEADER",
    "get_attachment_url",
    "is_url_attachment",
    "url_attachment",
]
