"""Display configuration with API keys masked.

Wraps lib_layered_config's Rich-styled display. Secrets under ``[freesend]``
and ``[mailers.*]`` are replaced before rendering so ``freesend config``
output can be pasted into bug reports.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from freesend.domain.enums import OutputFormat

#: Replacement shown instead of a configured secret.
MASK = "********"


def _is_set(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def mask_secrets(config: Config) -> Config:
    """Return ``config`` with configured API keys replaced by :data:`MASK`.

    Unset (empty) secrets are left alone so the output still shows that
    nothing was configured.

    Example:
        >>> cfg = Config({"freesend": {"api_key": "fs_live_1"}, "mailers": {"a": {"key": ""}}}, {})
        >>> masked = mask_secrets(cfg)
        >>> masked["freesend"]["api_key"], masked["mailers"]["a"]["key"]
        ('********', '')
    """
    data = config.as_dict()
    overrides: dict[str, dict[str, object]] = {}

    freesend = data.get("freesend")
    if isinstance(freesend, Mapping) and _is_set(cast(Mapping[str, Any], freesend).get("api_key")):
        overrides["freesend"] = {"api_key": MASK}

    mailers = data.get("mailers")
    if isinstance(mailers, Mapping):
        for name, section in cast(Mapping[str, Any], mailers).items():
            if isinstance(section, Mapping) and _is_set(cast(Mapping[str, Any], section).get("key")):
                overrides.setdefault("mailers", {})[name] = {"key": MASK}

    if not overrides:
        return config
    return config.with_overrides(overrides)


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Render the configuration with secrets masked.

    Pending log records are flushed first so they do not interleave with
    the rendered configuration.

    Args:
        config: Loaded layered configuration.
        output_format: HUMAN (TOML-like) or JSON.
        section: Restrict output to one top-level section.
        console: Rich console override, mainly for tests.
        profile: Profile name shown in provenance comments.

    Raises:
        ValueError: If ``section`` does not exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    _lib_display(
        mask_secrets(config),
        output_format=LibOutputFormat(output_format.value),
        section=section,
        profile=profile,
        console=console,
    )


__all__ = ["MASK", "display_config", "mask_secrets"]
