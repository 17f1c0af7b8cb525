"""Payload builder stories: sender, recipient, subject, bodies, attachments."""

from __future__ import annotations

import base64

import pytest

from freesend.adapters.mail.transport import encode_payload
from freesend.domain.attachments import URL_ATTACHMENT_HEADER, url_attachment
from freesend.domain.errors import MissingRecipientError, MissingSenderError
from freesend.domain.message import Address, Attachment, Envelope, Message
from freesend.domain.payload import build_payload, resolve_recipient, resolve_sender

# ======================== Sender ========================


@pytest.mark.os_agnostic
def test_sender_display_name_becomes_from_name() -> None:
    """A From address with a display name yields fromEmail and fromName."""
    message = Message.create(from_address="Jane Doe <jane@example.com>", to="bob@example.com", subject="Hi")

    payload = build_payload(message)

    assert payload["fromEmail"] == "jane@example.com"
    assert payload["fromName"] == "Jane Doe"


@pytest.mark.os_agnostic
def test_sender_without_display_name_omits_from_name_key() -> None:
    """fromName is absent, not empty, when the sender has no display name."""
    message = Message.create(from_address="jane@example.com", to="bob@example.com", subject="Hi")

    payload = build_payload(message)

    assert "fromName" not in payload


@pytest.mark.os_agnostic
def test_envelope_sender_is_used_when_message_has_no_from() -> None:
    """The envelope sender fills in for a message without From."""
    message = Message.create(to="bob@example.com", subject="Hi")
    envelope = Envelope.create(sender="Bounces <bounce@example.com>")

    payload = build_payload(message, envelope)

    assert payload["fromEmail"] == "bounce@example.com"
    assert payload["fromName"] == "Bounces"


@pytest.mark.os_agnostic
def test_message_from_wins_over_envelope_sender() -> None:
    """The message's own From takes precedence over the envelope."""
    message = Message.create(from_address="jane@example.com", to="bob@example.com")

    sender = resolve_sender(message, Envelope.create(sender="bounce@example.com"))

    assert sender == Address("jane@example.com")


@pytest.mark.os_agnostic
def test_missing_sender_raises() -> None:
    """Neither From nor envelope sender raises MissingSenderError."""
    message = Message.create(to="bob@example.com", subject="Hi")

    with pytest.raises(MissingSenderError):
        build_payload(message)


# ======================== Recipient ========================


@pytest.mark.os_agnostic
def test_first_message_recipient_is_used_regardless_of_envelope() -> None:
    """payload.to is the first To entry even when the envelope has recipients."""
    message = Message.create(from_address="a@example.com", to=["first@example.com", "second@example.com"])
    envelope = Envelope.create(recipients=["envelope@example.com"])

    assert build_payload(message, envelope)["to"] == "first@example.com"


@pytest.mark.os_agnostic
def test_first_envelope_recipient_is_used_when_to_is_empty() -> None:
    """An empty To list falls back to the first envelope recipient."""
    message = Message.create(from_address="a@example.com")
    envelope = Envelope.create(recipients=["one@example.com", "two@example.com"])

    assert build_payload(message, envelope)["to"] == "one@example.com"


@pytest.mark.os_agnostic
def test_recipient_drops_display_name() -> None:
    """Only the bare address is sent as ``to``."""
    message = Message.create(from_address="a@example.com", to="Bob <bob@example.com>")

    assert build_payload(message)["to"] == "bob@example.com"


@pytest.mark.os_agnostic
def test_missing_recipient_raises_with_fixed_message() -> None:
    """No To and no envelope recipients raises MissingRecipientError."""
    message = Message.create(from_address="a@example.com", subject="Hi")

    with pytest.raises(MissingRecipientError, match="No recipient address provided"):
        build_payload(message, Envelope())


@pytest.mark.os_agnostic
def test_whitespace_recipient_counts_as_absent() -> None:
    """A blank To entry is skipped; with nothing else available it fails."""
    message = Message(from_addresses=(Address("a@example.com"),), to=(Address("   "),))

    with pytest.raises(MissingRecipientError):
        resolve_recipient(message, Envelope())


@pytest.mark.os_agnostic
def test_whitespace_recipient_falls_through_to_envelope() -> None:
    """A blank To entry does not shadow an envelope recipient."""
    message = Message(from_addresses=(Address("a@example.com"),), to=(Address(" "),))

    assert resolve_recipient(message, Envelope.create(recipients=["env@example.com"])) == "env@example.com"


@pytest.mark.os_agnostic
def test_missing_recipient_is_reported_before_missing_sender() -> None:
    """When both are missing the recipient error wins."""
    with pytest.raises(MissingRecipientError):
        build_payload(Message())


# ======================== Subject and bodies ========================


@pytest.mark.os_agnostic
def test_html_only_message_matches_wire_example() -> None:
    """An HTML-only message produces exactly the documented payload."""
    message = Message.create(
        from_address="sender@example.com",
        to="recipient@example.com",
        subject="Test Subject",
        html="<h1>Hello World</h1>",
    )

    assert build_payload(message) == {
        "fromEmail": "sender@example.com",
        "to": "recipient@example.com",
        "subject": "Test Subject",
        "html": "<h1>Hello World</h1>",
    }


@pytest.mark.os_agnostic
def test_missing_subject_becomes_empty_string() -> None:
    """An unset subject is sent as an empty string."""
    message = Message.create(from_address="a@example.com", to="b@example.com", text="x")

    assert build_payload(message)["subject"] == ""


@pytest.mark.os_agnostic
def test_both_bodies_are_sent_when_present() -> None:
    """html and text are both included when both are non-empty."""
    message = Message.create(from_address="a@example.com", to="b@example.com", html="<p>x</p>", text="x")

    payload = build_payload(message)

    assert payload["html"] == "<p>x</p>"
    assert payload["text"] == "x"


@pytest.mark.os_agnostic
def test_empty_bodies_force_empty_text() -> None:
    """Without any body, text is set to an empty string and html is omitted."""
    message = Message.create(from_address="a@example.com", to="b@example.com", html="", text=None)

    payload = build_payload(message)

    assert payload["text"] == ""
    assert "html" not in payload


@pytest.mark.os_agnostic
def test_payload_key_order_is_stable() -> None:
    """Keys follow the wire schema order."""
    message = Message.create(
        from_address="Jane <a@example.com>",
        to="b@example.com",
        subject="s",
        html="<p>h</p>",
        text="t",
        attachments=[Attachment.from_data(b"1", "one.txt")],
    )

    assert list(build_payload(message)) == ["fromEmail", "to", "subject", "fromName", "html", "text", "attachments"]


# ======================== Attachments ========================


@pytest.mark.os_agnostic
def test_raw_attachment_is_base64_content_without_url() -> None:
    """Raw bytes are sent base64-encoded under ``content``."""
    data = b"\x00\x01binary\xff"
    message = Message.create(
        from_address="a@example.com", to="b@example.com", attachments=[Attachment.from_data(data, "blob.bin")]
    )

    entry = build_payload(message)["attachments"][0]

    assert entry == {"filename": "blob.bin", "content": base64.b64encode(data).decode("ascii")}


@pytest.mark.os_agnostic
def test_url_attachment_has_url_and_no_content() -> None:
    """A marked attachment is sent by URL and never carries content."""
    attachment = url_attachment("https://example.com/report.pdf", "report.pdf")
    message = Message.create(from_address="a@example.com", to="b@example.com", attachments=[attachment])

    entry = build_payload(message)["attachments"][0]

    assert entry == {"filename": "report.pdf", "url": "https://example.com/report.pdf"}


@pytest.mark.os_agnostic
def test_url_marker_wins_over_existing_content() -> None:
    """The marker header makes the builder ignore any body bytes."""
    attachment = Attachment.from_data(b"ignored", "a.txt").with_header(URL_ATTACHMENT_HEADER, "https://x.test/a")
    message = Message.create(from_address="a@example.com", to="b@example.com", attachments=[attachment])

    entry = build_payload(message)["attachments"][0]

    assert "content" not in entry
    assert entry["url"] == "https://x.test/a"


@pytest.mark.os_agnostic
def test_blank_url_marker_falls_back_to_content() -> None:
    """An empty marker value is treated as unmarked."""
    attachment = Attachment.from_data(b"data", "a.txt").with_header(URL_ATTACHMENT_HEADER, "  ")
    message = Message.create(from_address="a@example.com", to="b@example.com", attachments=[attachment])

    entry = build_payload(message)["attachments"][0]

    assert "url" not in entry
    assert entry["content"] == base64.b64encode(b"data").decode("ascii")


@pytest.mark.os_agnostic
def test_declared_content_type_is_included() -> None:
    """contentType appears only when the attachment declares one."""
    typed = url_attachment("https://x.test/a.pdf", "a.pdf", "application/pdf")
    untyped = Attachment.from_data(b"x", "x.bin")
    message = Message.create(from_address="a@example.com", to="b@example.com", attachments=[typed, untyped])

    entries = build_payload(message)["attachments"]

    assert entries[0]["contentType"] == "application/pdf"
    assert "contentType" not in entries[1]


@pytest.mark.os_agnostic
def test_unnamed_attachment_defaults_to_literal_attachment() -> None:
    """An attachment without a filename is sent as ``attachment``."""
    message = Message.create(
        from_address="a@example.com", to="b@example.com", attachments=[Attachment.from_data(b"x")]
    )

    assert build_payload(message)["attachments"][0]["filename"] == "attachment"


@pytest.mark.os_agnostic
def test_attachment_order_is_preserved() -> None:
    """Entries appear in the message's attachment order."""
    attachments = [
        Attachment.from_data(b"1", "first.txt"),
        url_attachment("https://x.test/second", "second.txt"),
        Attachment.from_data(b"3", "third.txt"),
    ]
    message = Message.create(from_address="a@example.com", to="b@example.com", attachments=attachments)

    names = [entry["filename"] for entry in build_payload(message)["attachments"]]

    assert names == ["first.txt", "second.txt", "third.txt"]


@pytest.mark.os_agnostic
def test_no_attachments_omits_key() -> None:
    """The attachments key is absent rather than an empty list."""
    message = Message.create(from_address="a@example.com", to="b@example.com", text="x")

    assert "attachments" not in build_payload(message)


@pytest.mark.os_agnostic
def test_lazy_attachment_body_is_read_when_building() -> None:
    """A callable body is invoked to produce the content."""
    message = Message.create(
        from_address="a@example.com",
        to="b@example.com",
        attachments=[Attachment(filename="lazy.txt", body=lambda: b"lazy")],
    )

    assert build_payload(message)["attachments"][0]["content"] == base64.b64encode(b"lazy").decode("ascii")


# ======================== Determinism ========================


@pytest.mark.os_agnostic
def test_building_twice_yields_identical_json_bytes() -> None:
    """The same unmodified message always encodes to the same bytes."""
    message = Message.create(
        from_address="Jane <a@example.com>",
        to="b@example.com",
        subject="s",
        text="t",
        attachments=[Attachment.from_data(b"data", "d.txt", "text/plain")],
    )

    assert encode_payload(build_payload(message)) == encode_payload(build_payload(message))


@pytest.mark.os_agnostic
def test_builder_does_not_mutate_message() -> None:
    """The message compares equal before and after building."""
    message = Message.create(from_address="a@example.com", to="b@example.com", text="t")
    before = Message.create(from_address="a@example.com", to="b@example.com", text="t")

    build_payload(message)

    assert message == before
