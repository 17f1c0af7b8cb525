"""Mail CLI commands.

Contents:
    * :func:`.send.cli_send` - Send a message through Freesend.
    * :func:`.payload.cli_payload` - Print the request body without sending.
"""

from __future__ import annotations

from .payload import cli_payload
from .send import cli_send

__all__ = ["cli_payload", "cli_send"]
