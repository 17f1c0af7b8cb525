"""In-memory mail adapters for testing.

Provides mail functions that satisfy the same Protocols as production
adapters but perform no HTTP requests.

Contents:
    * :class:`TransportSpy` - Captures send calls for test assertions.
    * :func:`load_freesend_config_from_dict_in_memory` - In-memory config loader.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ...domain.message import Envelope, Message
from ...domain.payload import build_payload
from ..mail.config import FreesendConfig, load_freesend_config_from_dict
from ..mail.transport import SentMessage


def _empty_sent_list() -> list[dict[str, Any]]:
    """Create an empty typed list for send records."""
    return []


@dataclass
class TransportSpy:
    """Captures send operations for test assertions.

    The payload is built exactly as the real transport builds it, so a
    message without recipient or sender raises the same error here. Each
    test should create its own spy to avoid cross-test pollution.

    Attributes:
        sent: Captured calls as dicts with ``message``, ``envelope``,
            ``config`` and ``payload`` keys.
        raise_exception: When set, ``send_message`` raises this exception
            after recording the call.
        status_code: Status reported in the returned receipt.
        response_text: Body reported in the returned receipt.

    Example:
        >>> spy = TransportSpy()
        >>> message = Message.create(from_address="a@example.com", to="b@example.com", subject="Hi", text="x")
        >>> spy.send_message(message, config=FreesendConfig(api_key="k")).status_code
        200
        >>> spy.sent[0]["payload"]["to"]
        'b@example.com'
    """

    sent: list[dict[str, Any]] = field(default_factory=_empty_sent_list)
    raise_exception: Exception | None = None
    status_code: int = 200
    response_text: str = '{"success":true}'

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent.clear()
        self.raise_exception = None

    @property
    def payloads(self) -> list[dict[str, Any]]:
        """Payloads of every recorded send, in order."""
        return [record["payload"] for record in self.sent]

    def send_message(
        self,
        message: Message,
        *,
        config: FreesendConfig,
        envelope: Envelope | None = None,
    ) -> SentMessage:
        """Record the call and return a receipt.

        Raises:
            MissingRecipientError: When no recipient resolves.
            MissingSenderError: When no sender resolves.
            Exception: If raise_exception is set, raises that exception.
        """
        envelope = envelope if envelope is not None else Envelope()
        payload = build_payload(message, envelope)
        self.sent.append({"message": message, "envelope": envelope, "config": config, "payload": payload})
        if self.raise_exception is not None:
            raise self.raise_exception
        return SentMessage(
            message=message,
            envelope=envelope,
            payload=payload,
            status_code=self.status_code,
            response_text=self.response_text,
        )


def load_freesend_config_from_dict_in_memory(
    config_dict: Mapping[str, Any],
    mailer: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> FreesendConfig:
    """Resolve config with the real fallback chain but an isolated environment.

    ``environ`` defaults to an empty mapping so tests never pick up a
    developer's ``FREESEND_API_KEY``.
    """
    return load_freesend_config_from_dict(config_dict, mailer=mailer, environ={} if environ is None else environ)


__all__ = [
    "TransportSpy",
    "load_freesend_config_from_dict_in_memory",
]
