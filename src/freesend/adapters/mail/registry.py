"""Named-mailer registry with pluggable transport factories.

Mirrors the "mail manager" extension point found in web frameworks: code
registers a factory per transport name, and mailers declared under
``[mailers.<name>]`` in the layered configuration are built on first use.

Example configuration::

    [mailers.transactional]
    transport = "freesend"         # optional, "freesend" when omitted
    key = "fs_live_..."            # optional, falls back to [freesend].api_key
    endpoint = "https://..."       # optional, falls back to [freesend].endpoint
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol, cast

import httpx

from freesend.domain.errors import ConfigurationError
from freesend.domain.message import Envelope, Message

from .config import TRANSPORT_NAME, resolve_freesend_config
from .transport import FreesendTransport, SentMessage

logger = logging.getLogger(__name__)


class MailTransport(Protocol):
    """Structural type every registered transport satisfies."""

    def send(self, message: Message, envelope: Envelope | None = None) -> SentMessage: ...


TransportFactory = Callable[[Mapping[str, Any]], MailTransport]


class MailerRegistry:
    """Registry of transport factories and the mailers built from them.

    Args:
        config_dict: Layered configuration as a plain mapping; the
            ``mailers`` section declares the named mailers.

    Example:
        >>> registry = MailerRegistry({"mailers": {"default": {"transport": "freesend", "key": "k"}}})
        >>> register_freesend(registry, environ={})
        >>> registry.transports()
        ['freesend']
        >>> str(registry.mailer("default"))
        'freesend'
    """

    def __init__(self, config_dict: Mapping[str, Any] | None = None) -> None:
        self.config_dict: Mapping[str, Any] = config_dict or {}
        self._factories: dict[str, TransportFactory] = {}
        self._mailers: dict[str, MailTransport] = {}

    def extend(self, name: str, factory: TransportFactory) -> None:
        """Register ``factory`` under the transport ``name``, replacing any previous one."""
        self._factories[name] = factory
        logger.debug("Registered mail transport", extra={"transport": name})

    def transports(self) -> list[str]:
        """Return the registered transport names, sorted."""
        return sorted(self._factories)

    def mailer_config(self, name: str) -> Mapping[str, Any]:
        """Return the ``[mailers.<name>]`` section.

        Raises:
            ConfigurationError: When the mailer is not declared.
        """
        mailers = self.config_dict.get("mailers", {})
        if not isinstance(mailers, Mapping) or name not in mailers:
            raise ConfigurationError(f"Mailer [{name}] is not defined.")
        section = cast(Mapping[str, Any], mailers)[name]
        if not isinstance(section, Mapping):
            raise ConfigurationError(f"Mailer [{name}] must be a table.")
        return cast(Mapping[str, Any], section)

    def mailer(self, name: str) -> MailTransport:
        """Return the transport for mailer ``name``, building it on first use.

        Raises:
            ConfigurationError: Unknown mailer, unknown transport, or a
                factory rejecting its configuration.
        """
        if name in self._mailers:
            return self._mailers[name]

        section = self.mailer_config(name)
        transport_name = section.get("transport", TRANSPORT_NAME)
        if not isinstance(transport_name, str) or transport_name not in self._factories:
            raise ConfigurationError(f"Unsupported mail transport [{transport_name}] for mailer [{name}].")

        transport = self._factories[transport_name](section)
        self._mailers[name] = transport
        logger.info("Mailer created", extra={"mailer": name, "transport": transport_name})
        return transport

    def purge(self, name: str | None = None) -> None:
        """Forget cached mailers so they are rebuilt from configuration."""
        if name is None:
            self._mailers.clear()
        else:
            self._mailers.pop(name, None)


def register_freesend(
    registry: MailerRegistry,
    environ: Mapping[str, str] | None = None,
    client: httpx.Client | None = None,
) -> None:
    """Register the ``freesend`` transport factory on ``registry``.

    The factory resolves settings eagerly through the fallback chain
    (mailer section, ``[freesend]`` section, environment, default), so a
    missing API key fails when the mailer is built, not when it sends.

    Args:
        registry: Registry to extend.
        environ: Environment mapping; defaults to :data:`os.environ`.
        client: Optional httpx client shared by every Freesend mailer.
    """

    def _factory(mailer: Mapping[str, Any]) -> MailTransport:
        package = registry.config_dict.get("freesend", {})
        config = resolve_freesend_config(
            mailer=mailer,
            package=cast(Mapping[str, Any], package) if isinstance(package, Mapping) else {},
            environ=environ,
        )
        return FreesendTransport.from_config(config, client=client)

    registry.extend(TRANSPORT_NAME, _factory)


__all__ = [
    "MailTransport",
    "MailerRegistry",
    "TransportFactory",
    "register_freesend",
]
