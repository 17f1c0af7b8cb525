"""Configuration adapter - loading, publishing, and display.

Provides adapters for configuration management using lib_layered_config.

Contents:
    * :mod:`.loader` - Configuration loading with caching
    * :mod:`.deploy` - Publishing the bundled config file
    * :mod:`.display` - Configuration display with secrets masked
"""

from __future__ import annotations

from .deploy import deploy_configuration
from .display import display_config, mask_secrets
from .loader import get_config, get_default_config_path

__all__ = [
    "deploy_configuration",
    "display_config",
    "get_config",
    "get_default_config_path",
    "mask_secrets",
]
