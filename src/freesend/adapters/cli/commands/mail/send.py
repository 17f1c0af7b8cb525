"""The ``send`` command: deliver one message through the Freesend API."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from freesend.adapters.mail.transport import SentMessage

from ...constants import CLICK_CONTEXT_SETTINGS
from ...context import get_cli_context
from ._common import (
    build_message,
    execute_with_mail_error_handling,
    message_options,
    resolve_transport_config,
)

logger = logging.getLogger(__name__)


@click.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@message_options
@click.option("--mailer", default=None, help="Named mailer from [mailers.<name>] to send with")
@click.option("--api-key", default=None, help="Override the Freesend API key")
@click.option("--endpoint", default=None, help="Override the Freesend send-email endpoint URL")
@click.pass_context
def cli_send(
    ctx: click.Context,
    recipients: tuple[str, ...],
    subject: str,
    from_address: str | None,
    text: str | None,
    html: str | None,
    attachments: tuple[str, ...],
    attachment_urls: tuple[str, ...],
    attachment_url_names: tuple[str, ...],
    mailer: str | None,
    api_key: str | None,
    endpoint: str | None,
) -> None:
    r"""Send an email through Freesend.

    \b
    Exit codes:
      22  no recipient or no sender
      69  API rejected the message or was unreachable
      78  API key or endpoint not configured, unknown mailer
    """
    cli_ctx = get_cli_context(ctx)
    extra = {"command": "send", "recipients": list(recipients), "subject": subject, "mailer": mailer}

    with lib_log_rich.runtime.bind(job_id="cli-send", extra=extra):

        def _send() -> SentMessage:
            config = resolve_transport_config(
                cli_ctx.config,
                cli_ctx.services.load_freesend_config_from_dict,
                mailer=mailer,
                api_key=api_key,
                endpoint=endpoint,
            )
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
            return cli_ctx.services.send_message(message, config=config)

        receipt = execute_with_mail_error_handling(operation=_send, action="send email")
        logger.info("Email sent via CLI", extra={"recipient": receipt.payload["to"]})
        click.echo(f"\nEmail sent successfully to {receipt.payload['to']}.")


__all__ = ["cli_send"]
