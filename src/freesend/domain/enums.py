"""Type-safe domain enums for error kinds, output formats and deploy targets."""

from __future__ import annotations

from enum import Enum


class TransportErrorKind(str, Enum):
    """Closed set of reasons a send call can fail.

    Example:
        >>> TransportErrorKind.API_ERROR.value
        'api_error'
        >>> TransportErrorKind.NETWORK_ERROR == "network_error"
        True
    """

    MISSING_RECIPIENT = "missing_recipient"
    MISSING_SENDER = "missing_sender"
    API_ERROR = "api_error"
    NETWORK_ERROR = "network_error"


class OutputFormat(str, Enum):
    """Output format options for configuration and payload display.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class DeployTarget(str, Enum):
    """Configuration layers the bundled config file can be published to.

    Attributes:
        APP: System-wide application configuration (requires privileges).
        HOST: System-wide host-specific configuration (requires privileges).
        USER: User-specific configuration (~/.config on Linux).

    Example:
        >>> DeployTarget.USER.value
        'user'
    """

    APP = "app"
    HOST = "host"
    USER = "user"


__all__ = [
    "DeployTarget",
    "OutputFormat",
    "TransportErrorKind",
]
