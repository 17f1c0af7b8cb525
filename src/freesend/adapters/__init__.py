"""Adapters layer - infrastructure and framework integrations.

Connects the domain to httpx, lib_layered_config, lib_log_rich, the stdlib
``email`` package and the command line.

Contents:
    * :mod:`.mail` - Freesend HTTP transport, stdlib bridge, mailer registry
    * :mod:`.config` - Configuration loading, publishing, and display
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.cli` - rich_click command-line interface
"""

from __future__ import annotations

__all__: list[str] = []
