"""CLI command implementations.

Contents:
    * Info command from :mod:`.info`
    * Config commands from :mod:`.config`
    * Mail commands from :mod:`.mail` (subpackage)
"""

from __future__ import annotations

from .config import cli_config, cli_config_deploy
from .info import cli_info
from .mail import cli_payload, cli_send

__all__ = [
    "cli_config",
    "cli_config_deploy",
    "cli_info",
    "cli_payload",
    "cli_send",
]
