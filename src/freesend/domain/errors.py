"""Domain-specific exceptions for typed error handling at boundaries.

Send failures form a closed family rooted at :class:`TransportError`; each
subclass carries the context a caller needs to log meaningfully and exposes
its :class:`~freesend.domain.enums.TransportErrorKind` via ``.kind``.
"""

from __future__ import annotations

from .enums import TransportErrorKind


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised at mailer-construction time when the API key or endpoint is empty
    after every fallback source was consulted, or when a named mailer does
    not exist in the registry.

    Example:
        >>> err = ConfigurationError("Freesend API key is not configured.")
        >>> str(err)
        'Freesend API key is not configured.'
    """


class TransportError(Exception):
    """Base class for every failure surfaced from a send call.

    Example:
        >>> err = TransportError("boom")
        >>> err.kind is None
        True
    """

    kind: TransportErrorKind | None = None


class MissingRecipientError(TransportError):
    """Neither the message nor the envelope yields a usable recipient.

    Example:
        >>> str(MissingRecipientError())
        'No recipient address provided'
        >>> MissingRecipientError().kind.value
        'missing_recipient'
    """

    kind = TransportErrorKind.MISSING_RECIPIENT

    def __init__(self, message: str = "No recipient address provided") -> None:
        super().__init__(message)


class MissingSenderError(TransportError):
    """Neither the message nor the envelope yields a sender address."""

    kind = TransportErrorKind.MISSING_SENDER

    def __init__(self, message: str = "No sender address provided") -> None:
        super().__init__(message)


class ApiError(TransportError):
    """The Freesend API answered with a status other than 200.

    The raw response body is kept verbatim; it is never parsed.

    Example:
        >>> err = ApiError(401, '{"error":"Invalid API key"}')
        >>> str(err)
        'Freesend API returned status 401: {"error":"Invalid API key"}'
        >>> err.status_code
        401
    """

    kind = TransportErrorKind.API_ERROR

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Freesend API returned status {status_code}: {body}")


class NetworkError(TransportError):
    """Connection, timeout, DNS, or TLS failure before a response arrived.

    Example:
        >>> err = NetworkError(OSError("Connection refused"))
        >>> str(err)
        'Failed to send email via Freesend: Connection refused'
    """

    kind = TransportErrorKind.NETWORK_ERROR

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Failed to send email via Freesend: {cause}")


__all__ = [
    "ApiError",
    "ConfigurationError",
    "MissingRecipientError",
    "MissingSenderError",
    "NetworkError",
    "TransportError",
]
