"""Application ports — callable Protocol definitions for adapter functions.

Each Protocol's ``__call__`` matches the signature of the adapter function
that implements it, so plain module-level functions satisfy the ports
structurally (PEP 544) and in-memory doubles can be swapped in for tests.

Infrastructure types (``Config``, ``FreesendConfig``, ``SentMessage``) are
imported under ``TYPE_CHECKING`` only, keeping this layer free of runtime
adapter imports.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import DeployTarget, OutputFormat
from ..domain.message import Envelope, Message

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.mail.config import FreesendConfig
    from ..adapters.mail.transport import SentMessage


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Return the path to the bundled default configuration file."""

    def __call__(self) -> Path: ...


class DeployConfiguration(Protocol):
    """Publish the default configuration to the given target layers."""

    def __call__(
        self,
        *,
        targets: Sequence[DeployTarget],
        force: bool = ...,
        profile: str | None = ...,
    ) -> list[Path]: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class LoadFreesendConfigFromDict(Protocol):
    """Resolve FreesendConfig from a configuration dictionary."""

    def __call__(
        self,
        config_dict: Mapping[str, Any],
        mailer: str | None = ...,
        environ: Mapping[str, str] | None = ...,
    ) -> FreesendConfig: ...


class SendMessage(Protocol):
    """Send one message through the Freesend API."""

    def __call__(
        self,
        message: Message,
        *,
        config: FreesendConfig,
        envelope: Envelope | None = ...,
    ) -> SentMessage: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DeployConfiguration",
    "DisplayConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "LoadFreesendConfigFromDict",
    "SendMessage",
]
