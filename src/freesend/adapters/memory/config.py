"""In-memory configuration adapters for testing.

Satisfy the same Protocols as the production configuration adapters
without touching the filesystem. The in-memory configuration mirrors the
shape of ``defaultconfig.toml`` so the mail fallback chain sees the same
sections it sees in production.
"""

from __future__ import annotations

import copy
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from lib_layered_config import Config

from ...domain.enums import DeployTarget, OutputFormat

#: Mirror of the bundled defaults: empty key and endpoint, one default mailer.
DEFAULT_CONFIG_DICT: dict[str, Any] = {
    "freesend": {"api_key": "", "endpoint": "", "timeout": 30.0, "connect_timeout": 10.0},
    "mailers": {"default": {"transport": "freesend"}},
}


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return a Config holding the default sections, ignoring profile and start_dir.

    Example:
        >>> get_config_in_memory()["mailers"]["default"]["transport"]
        'freesend'
    """
    return Config(copy.deepcopy(DEFAULT_CONFIG_DICT), {})


def get_default_config_path_in_memory() -> Path:
    """Return a synthetic path (not a real file)."""
    return Path(tempfile.gettempdir()) / "freesend" / "defaultconfig.toml"


def deploy_configuration_in_memory(
    *,
    targets: Sequence[DeployTarget],
    force: bool = False,
    profile: str | None = None,
) -> list[Path]:
    """Pretend nothing needed writing."""
    return []


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """No-op display."""


__all__ = [
    "DEFAULT_CONFIG_DICT",
    "deploy_configuration_in_memory",
    "display_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
]
