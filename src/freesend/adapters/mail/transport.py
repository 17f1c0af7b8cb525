"""Freesend HTTP transport.

Sends one message per call as an authenticated JSON POST through httpx and
maps every failure onto the :class:`~freesend.domain.errors.TransportError`
family. There are no retries; retry policy belongs to the caller.

Contents:
    * :class:`SentMessage` - receipt returned on HTTP 200.
    * :class:`FreesendTransport` - the transport itself.
    * :func:`encode_payload` - deterministic JSON encoding.
    * :func:`send_message` - port-shaped convenience wrapper.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from email.message import Message as StdlibMessage
from types import TracebackType
from typing import Any

import httpx
import orjson

from freesend.domain.errors import ApiError, NetworkError
from freesend.domain.message import Envelope, Message
from freesend.domain.payload import build_payload

from .config import FreesendConfig
from .mime import envelope_from_email, message_from_email

logger = logging.getLogger(__name__)

#: Total request timeout in seconds when the caller does not override it.
DEFAULT_TIMEOUT = 30.0
#: Connect timeout in seconds when the caller does not override it.
DEFAULT_CONNECT_TIMEOUT = 10.0


def encode_payload(payload: dict[str, Any]) -> bytes:
    """Serialise ``payload`` to compact JSON bytes.

    Key order follows insertion order, so the same message always encodes
    to the same bytes.

    Example:
        >>> encode_payload({"to": "a@example.com", "subject": ""})
        b'{"to":"a@example.com","subject":""}'
    """
    return orjson.dumps(payload)


@dataclass(frozen=True, slots=True)
class SentMessage:
    """Receipt for a message the API accepted with HTTP 200."""

    message: Message
    envelope: Envelope
    payload: dict[str, Any]
    status_code: int
    response_text: str


class FreesendTransport:
    """Transport sending messages through the Freesend send-email API.

    Args:
        api_key: Freesend API key, sent as a bearer token.
        endpoint: Full URL of the send-email endpoint; used verbatim.
        client: Optional shared httpx client. When omitted the transport
            creates (and owns) one with the default timeouts.
        timeout: Optional timeout for an owned client.

    Example:
        >>> transport = FreesendTransport("key", "https://freesend.test/api/send-email")
        >>> str(transport)
        'freesend'
        >>> transport.close()
    """

    def __init__(
        self,
        api_key: str,
        endpoint: str,
        client: httpx.Client | None = None,
        timeout: httpx.Timeout | None = None,
    ) -> None:
        self.api_key = api_key
        self.endpoint = endpoint
        self._owns_client = client is None
        self.client = (
            client
            if client is not None
            else httpx.Client(timeout=timeout or httpx.Timeout(DEFAULT_TIMEOUT, connect=DEFAULT_CONNECT_TIMEOUT))
        )

    @classmethod
    def from_config(cls, config: FreesendConfig, client: httpx.Client | None = None) -> FreesendTransport:
        """Build a transport from a complete :class:`FreesendConfig`.

        Raises:
            ConfigurationError: When the API key or endpoint is missing.
        """
        config.require_complete()
        timeout = httpx.Timeout(config.timeout, connect=config.connect_timeout)
        return cls(str(config.api_key), str(config.endpoint), client=client, timeout=timeout)

    def build_payload(self, message: Message, envelope: Envelope | None = None) -> dict[str, Any]:
        """Build the request body for ``message`` without sending it."""
        return build_payload(message, envelope)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def send(self, message: Message, envelope: Envelope | None = None) -> SentMessage:
        """Send ``message`` with exactly one HTTP request.

        Args:
            message: Message to deliver.
            envelope: Fallback sender/recipients. None means empty.

        Returns:
            Receipt carrying the payload and the raw response text.

        Raises:
            MissingRecipientError: No usable recipient; no request is made.
            MissingSenderError: No usable sender; no request is made.
            ApiError: The API answered with a status other than 200.
            NetworkError: The request failed before a response arrived.

        Side Effects:
            Performs one POST to :attr:`endpoint`. Logs the attempt at INFO,
            API errors at WARNING and network errors at ERROR.
        """
        envelope = envelope if envelope is not None else Envelope()
        payload = build_payload(message, envelope)
        log_context = {
            "transport": str(self),
            "endpoint": self.endpoint,
            "recipient": payload["to"],
            "subject": payload["subject"],
            "attachment_count": len(payload.get("attachments", [])),
        }

        logger.info("Sending email via Freesend", extra=log_context)

        try:
            response = self.client.post(self.endpoint, headers=self._headers(), content=encode_payload(payload))
        except httpx.HTTPError as exc:
            logger.error("Freesend request failed", extra={**log_context, "error": str(exc)})
            raise NetworkError(exc) from exc

        if response.status_code != 200:
            logger.warning(
                "Freesend API rejected email",
                extra={**log_context, "status_code": response.status_code},
            )
            raise ApiError(response.status_code, response.text)

        logger.info("Email sent via Freesend", extra={**log_context, "status_code": response.status_code})
        return SentMessage(
            message=message,
            envelope=envelope,
            payload=payload,
            status_code=response.status_code,
            response_text=response.text,
        )

    def send_email_message(self, msg: StdlibMessage, envelope: Envelope | None = None) -> SentMessage:
        """Convert a stdlib ``email`` message and send it.

        The envelope defaults to the one implied by the message headers, so
        Bcc-only messages still resolve a recipient.
        """
        resolved = envelope if envelope is not None else envelope_from_email(msg)
        return self.send(message_from_email(msg), resolved)

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> FreesendTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __str__(self) -> str:
        return "freesend"

    def __repr__(self) -> str:
        return f"FreesendTransport(endpoint={self.endpoint!r}, api_key='[REDACTED]')"


def send_message(
    message: Message,
    *,
    config: FreesendConfig,
    envelope: Envelope | None = None,
) -> SentMessage:
    """Send ``message`` with a short-lived transport built from ``config``.

    Raises:
        ConfigurationError: Incomplete configuration.
        TransportError: Any send failure (see :meth:`FreesendTransport.send`).
    """
    with FreesendTransport.from_config(config) as transport:
        return transport.send(message, envelope)


__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_TIMEOUT",
    "FreesendTransport",
    "SentMessage",
    "encode_payload",
    "send_message",
]
