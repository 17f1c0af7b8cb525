"""Freesend configuration model and fallback-chain resolver.

Provides the FreesendConfig Pydantic model for validated, immutable transport
settings and the resolver that applies the configuration fallback chain:

    mailer-specific override -> [freesend] section -> environment -> default

The chain is evaluated once, at mailer-construction time. A missing API key
or endpoint is reported immediately as :class:`ConfigurationError` instead
of surfacing later as a failed send.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from freesend.domain.errors import ConfigurationError

#: Production endpoint used when nothing else is configured.
DEFAULT_ENDPOINT = "https://freesend.metafog.io/api/send-email"

#: Environment variables consulted after the layered configuration.
ENV_API_KEY = "FREESEND_API_KEY"
ENV_ENDPOINT = "FREESEND_ENDPOINT"

#: Transport name mailers reference via ``transport = "freesend"``.
TRANSPORT_NAME = "freesend"


class FreesendConfig(BaseModel):
    """Validated, immutable Freesend transport configuration.

    Example:
        >>> config = FreesendConfig(api_key="fs_live_123")
        >>> config.endpoint
        'https://freesend.metafog.io/api/send-email'
        >>> config.timeout, config.connect_timeout
        (30.0, 10.0)
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    endpoint: str | None = DEFAULT_ENDPOINT
    timeout: float = 30.0
    connect_timeout: float = 10.0

    @field_validator("api_key", "endpoint", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: Any) -> Any:
        """Coerce empty or whitespace-only strings to None.

        Empty strings from config files and ``.env`` files mean "not
        configured", so they must fall through to the next source.
        """
        if isinstance(v, str):
            return v if v.strip() else None
        return v

    @model_validator(mode="after")
    def _validate_timeouts(self) -> FreesendConfig:
        """Reject non-positive timeouts with a clear message.

        Raises:
            ValueError: When a timeout is zero or negative.
        """
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.connect_timeout <= 0:
            raise ValueError(f"connect_timeout must be positive, got {self.connect_timeout}")
        return self

    @property
    def is_complete(self) -> bool:
        """True when both the API key and the endpoint are set."""
        return bool(self.api_key) and bool(self.endpoint)

    def require_complete(self) -> FreesendConfig:
        """Return self, or raise ConfigurationError naming the missing setting.

        Raises:
            ConfigurationError: When the API key or the endpoint is missing.

        Example:
            >>> FreesendConfig(api_key=None).require_complete()  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ConfigurationError: Freesend API key is not configured.
        """
        if not self.api_key:
            raise ConfigurationError("Freesend API key is not configured.")
        if not self.endpoint:
            raise ConfigurationError("Freesend endpoint is not configured.")
        return self

    def __repr__(self) -> str:
        """Return string representation with api_key redacted.

        Example:
            >>> "secret" in repr(FreesendConfig(api_key="secret"))
            False
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"FreesendConfig({', '.join(fields)})"


def first_configured(sources: Iterable[Any]) -> str | None:
    """Return the first source that is a non-blank string, as written.

    Example:
        >>> first_configured([None, "  ", "https://api.test", "ignored"])
        'https://api.test'
        >>> first_configured([None, ""]) is None
        True
    """
    for source in sources:
        if isinstance(source, str) and source.strip():
            return source
    return None


def _as_mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return cast(Mapping[str, Any], value)
    return {}


def resolve_freesend_config(
    mailer: Mapping[str, Any] | None = None,
    package: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> FreesendConfig:
    """Apply the fallback chain and validate the result.

    Args:
        mailer: Mailer-specific settings (``key``, ``endpoint``, timeouts).
        package: The ``[freesend]`` section (``api_key``, ``endpoint``, timeouts).
        environ: Environment mapping; defaults to :data:`os.environ`.

    Returns:
        Complete FreesendConfig.

    Raises:
        ConfigurationError: When the API key or endpoint is empty after all
            sources were consulted, or a timeout is invalid.

    Example:
        >>> cfg = resolve_freesend_config(
        ...     mailer={"key": "mailer-key"},
        ...     package={"api_key": "package-key"},
        ...     environ={},
        ... )
        >>> cfg.api_key, cfg.endpoint
        ('mailer-key', 'https://freesend.metafog.io/api/send-email')
    """
    mailer = mailer or {}
    package = package or {}
    env = os.environ if environ is None else environ

    api_key = first_configured([mailer.get("key"), package.get("api_key"), env.get(ENV_API_KEY)])
    endpoint = first_configured(
        [mailer.get("endpoint"), package.get("endpoint"), env.get(ENV_ENDPOINT), DEFAULT_ENDPOINT]
    )

    settings: dict[str, Any] = {"api_key": api_key, "endpoint": endpoint}
    for key in ("timeout", "connect_timeout"):
        value = mailer.get(key, package.get(key))
        if value is not None:
            settings[key] = value

    try:
        config = FreesendConfig.model_validate(settings)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid Freesend configuration: {exc}") from exc
    return config.require_complete()


def load_freesend_config_from_dict(
    config_dict: Mapping[str, Any],
    mailer: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> FreesendConfig:
    """Load FreesendConfig from a layered configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed model.
    When ``mailer`` is given, the ``[mailers.<name>]`` section supplies the
    highest-precedence ``key`` and ``endpoint`` overrides.

    Args:
        config_dict: Configuration dictionary, typically ``Config.as_dict()``.
        mailer: Optional named mailer whose overrides apply first.
        environ: Environment mapping; defaults to :data:`os.environ`.

    Raises:
        ConfigurationError: Missing settings, an unknown mailer name, or a
            mailer bound to another transport.

    Example:
        >>> config_dict = {
        ...     "freesend": {"api_key": "pkg-key"},
        ...     "mailers": {"alerts": {"transport": "freesend", "endpoint": "https://alerts.test/send"}},
        ... }
        >>> load_freesend_config_from_dict(config_dict, mailer="alerts", environ={}).endpoint
        'https://alerts.test/send'
    """
    package = _as_mapping(config_dict.get("freesend", {}))
    mailer_section: Mapping[str, Any] = {}
    if mailer is not None:
        mailers = _as_mapping(config_dict.get("mailers", {}))
        if mailer not in mailers:
            raise ConfigurationError(f"Mailer [{mailer}] is not defined.")
        mailer_section = _as_mapping(mailers[mailer])
        transport = mailer_section.get("transport", TRANSPORT_NAME)
        if transport != TRANSPORT_NAME:
            raise ConfigurationError(f"Mailer [{mailer}] uses transport [{transport}], not [{TRANSPORT_NAME}].")
    return resolve_freesend_config(mailer=mailer_section, package=package, environ=environ)


__all__ = [
    "DEFAULT_ENDPOINT",
    "ENV_API_KEY",
    "ENV_ENDPOINT",
    "TRANSPORT_NAME",
    "FreesendConfig",
    "first_configured",
    "load_freesend_config_from_dict",
    "resolve_freesend_config",
]
