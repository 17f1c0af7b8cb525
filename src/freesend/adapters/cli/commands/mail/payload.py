"""The ``payload`` command: print the JSON body ``send`` would post."""

from __future__ import annotations

import logging
from typing import Any

import lib_log_rich.runtime
import orjson
import rich_click as click

from freesend.domain.payload import build_payload

from ...constants import CLICK_CONTEXT_SETTINGS
from ._common import build_message, execute_with_mail_error_handling, message_options

logger = logging.getLogger(__name__)


@click.command("payload", context_settings=CLICK_CONTEXT_SETTINGS)
@message_options
def cli_payload(
    recipients: tuple[str, ...],
    subject: str,
    from_address: str | None,
    text: str | None,
    html: str | None,
    attachments: tuple[str, ...],
    attachment_urls: tuple[str, ...],
    attachment_url_names: tuple[str, ...],
) -> None:
    """Print the Freesend request body for a message without sending it.

    No configuration is read and no request is made, so this works without
    an API key.
    """
    with lib_log_rich.runtime.bind(job_id="cli-payload", extra={"command": "payload", "subject": subject}):

        def _build() -> dict[str, Any]:
            message = build_message(
                recipients=recipients,
                subject=subject,
                from_address=from_address,
                text=text,
                html=html,
                attachments=attachments,
                attachment_urls=attachment_urls,
                attachment_url_names=attachment_url_names,
            )
            return build_payload(message)

        payload = execute_with_mail_error_handling(operation=_build, action="build payload")
        logger.debug("Payload built", extra={"attachment_count": len(payload.get("attachments", []))})
        click.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8"))


__all__ = ["cli_payload"]
