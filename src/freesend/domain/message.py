"""Immutable message model read by the payload builder.

The transport never mutates these objects. Stdlib ``email.message`` objects
are converted into this model by :mod:`freesend.adapters.mime`.

Contents:
    * :class:`Address` - email address with optional display name.
    * :class:`Attachment` - filename, byte body (or producer), content type, headers.
    * :class:`Envelope` - transport-level sender/recipient fallback.
    * :class:`Message` - from/to/subject/bodies/attachments.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from email.utils import formataddr, parseaddr

BodySource = bytes | Callable[[], bytes]


@dataclass(frozen=True, slots=True)
class Address:
    """Email address with an optional display name.

    Example:
        >>> Address.parse("John Doe <john@example.com>")
        Address(email='john@example.com', name='John Doe')
        >>> str(Address("john@example.com"))
        'john@example.com'
    """

    email: str
    name: str | None = None

    @classmethod
    def parse(cls, value: str | Address) -> Address:
        """Parse ``"Name <addr>"`` or a bare address; empty names become None."""
        if isinstance(value, Address):
            return value
        name, email = parseaddr(value)
        return cls(email=email or value.strip(), name=name or None)

    def __str__(self) -> str:
        return formataddr((self.name or "", self.email))


def _parse_addresses(values: Iterable[str | Address]) -> tuple[Address, ...]:
    return tuple(Address.parse(v) for v in values)


@dataclass(frozen=True, slots=True)
class Attachment:
    """A file attached to a message.

    ``body`` is either raw bytes or a zero-argument callable producing them;
    it is only evaluated by :meth:`read`. ``headers`` is an ordered tuple of
    ``(key, value)`` string pairs carried alongside the part.

    Example:
        >>> att = Attachment.from_data(b"hello", "note.txt", "text/plain")
        >>> att.read()
        b'hello'
        >>> att.with_header("X-Trace", "1").header("x-trace")
        '1'
    """

    filename: str | None = None
    body: BodySource = b""
    content_type: str | None = None
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_data(
        cls,
        data: BodySource | str,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> Attachment:
        """Build a raw-content attachment; ``str`` data is encoded as UTF-8."""
        body = data.encode("utf-8") if isinstance(data, str) else data
        return cls(filename=filename, body=body, content_type=content_type)

    def read(self) -> bytes:
        """Return the attachment bytes, invoking the producer if needed."""
        data = self.body() if callable(self.body) else self.body
        if isinstance(data, str):
            return data.encode("utf-8")
        return bytes(data)

    def header(self, name: str) -> str | None:
        """Return the first value stored under ``name`` (case-insensitive)."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None

    def with_header(self, name: str, value: str) -> Attachment:
        """Return a copy with ``name: value`` appended to the headers."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_content_type(self, content_type: str) -> Attachment:
        """Return a copy declaring ``content_type``."""
        return replace(self, content_type=content_type)


@dataclass(frozen=True, slots=True)
class Envelope:
    """Effective sender and recipients, used only as a fallback source."""

    sender: Address | None = None
    recipients: tuple[Address, ...] = ()

    @classmethod
    def create(
        cls,
        sender: str | Address | None = None,
        recipients: Iterable[str | Address] = (),
    ) -> Envelope:
        """Build an envelope from plain strings or addresses.

        Example:
            >>> Envelope.create("bounce@example.com", ["a@example.com"]).recipients[0].email
            'a@example.com'
        """
        return cls(
            sender=Address.parse(sender) if sender is not None else None,
            recipients=_parse_addresses(recipients),
        )


@dataclass(frozen=True, slots=True)
class Message:
    """Generic outgoing email.

    Example:
        >>> msg = Message.create(
        ...     from_address="Jane <jane@example.com>",
        ...     to=["bob@example.com"],
        ...     subject="Hi",
        ...     text="Hello",
        ... )
        >>> msg.from_addresses[0].name
        'Jane'
    """

    from_addresses: tuple[Address, ...] = ()
    to: tuple[Address, ...] = ()
    subject: str | None = None
    html: str | None = None
    text: str | None = None
    attachments: tuple[Attachment, ...] = field(default=())

    @classmethod
    def create(
        cls,
        *,
        from_address: str | Address | Iterable[str | Address] | None = None,
        to: str | Address | Iterable[str | Address] = (),
        subject: str | None = None,
        html: str | None = None,
        text: str | None = None,
        attachments: Iterable[Attachment] = (),
    ) -> Message:
        """Convenience constructor accepting strings or address objects."""
        return cls(
            from_addresses=_parse_addresses(_as_iterable(from_address)),
            to=_parse_addresses(_as_iterable(to)),
            subject=subject,
            html=html,
            text=text,
            attachments=tuple(attachments),
        )

    def attach(self, attachment: Attachment) -> Message:
        """Return a copy with ``attachment`` appended."""
        return replace(self, attachments=(*self.attachments, attachment))


def _as_iterable(value: str | Address | Iterable[str | Address] | None) -> Iterable[str | Address]:
    if value is None:
        return ()
    if isinstance(value, (str, Address)):
        return (value,)
    return value


__all__ = [
    "Address",
    "Attachment",
    "BodySource",
    "Envelope",
    "Message",
]
