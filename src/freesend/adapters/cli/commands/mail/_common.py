"""Shared utilities for the mail CLI commands.

Holds the message options shared by ``send`` and ``payload``, message
assembly from those options, transport config resolution with CLI
overrides, and the mapping from mail errors to exit codes.
"""

from __future__ import annotations

import functools
import logging
import mimetypes
import os
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any, NoReturn, TypeVar, cast
from urllib.parse import urlsplit

import rich_click as click
from lib_layered_config import Config

from freesend.application.ports import LoadFreesendConfigFromDict
from freesend.domain.attachments import url_attachment
from freesend.domain.errors import (
    ConfigurationError,
    MissingRecipientError,
    MissingSenderError,
    TransportError,
)
from freesend.domain.message import Attachment, Message
from freesend.domain.payload import DEFAULT_ATTACHMENT_FILENAME

from ...exit_codes import ExitCode

if TYPE_CHECKING:
    from freesend.adapters.mail.config import FreesendConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop options the user did not pass (None or empty tuple).

    Example:
        >>> filter_sentinels(key="k", endpoint=None, names=())
        {'key': 'k'}
    """
    return {k: v for k, v in kwargs.items() if v is not None and v != ()}


def message_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Apply the message-building options shared by ``send`` and ``payload``."""
    options = [
        click.option(
            "--to",
            "recipients",
            multiple=True,
            default=(),
            help="Recipient address (repeatable; Freesend receives the first one)",
        ),
        click.option("--subject", required=True, help="Email subject line"),
        click.option("--from", "from_address", default=None, help='Sender address, e.g. "Jane <jane@example.com>"'),
        click.option("--text", default=None, help="Plain-text body"),
        click.option("--html", default=None, help="HTML body"),
        click.option(
            "--attach",
            "attachments",
            multiple=True,
            type=click.Path(dir_okay=False, path_type=str),
            help="File to attach as base64 content (repeatable)",
        ),
        click.option(
            "--attach-url",
            "attachment_urls",
            multiple=True,
            help="HTTP/HTTPS URL Freesend downloads as an attachment (repeatable)",
        ),
        click.option(
            "--attach-url-name",
            "attachment_url_names",
            multiple=True,
            help="Filename for the matching --attach-url (repeatable, paired by position)",
        ),
    ]
    return functools.reduce(lambda f, opt: opt(f), reversed(options), func)


def _filename_from_url(url: str) -> str:
    """Return the last path segment of ``url``.

    Example:
        >>> _filename_from_url("https://cdn.example.com/files/report.pdf?sig=1")
        'report.pdf'
        >>> _filename_from_url("https://example.com/")
        'attachment'
    """
    return PurePosixPath(urlsplit(url).path).name or DEFAULT_ATTACHMENT_FILENAME


def _file_attachment(path_str: str) -> Attachment:
    """Read ``path_str`` into an attachment.

    Raises:
        FileNotFoundError: When the path does not exist.
    """
    path = Path(path_str)
    content_type, _ = mimetypes.guess_type(path.name)
    return Attachment.from_data(path.read_bytes(), path.name, content_type)


def _url_attachments(urls: Sequence[str], names: Sequence[str]) -> list[Attachment]:
    if len(names) > len(urls):
        raise click.UsageError("--attach-url-name given more often than --attach-url.")
    attachments: list[Attachment] = []
    for index, url in enumerate(urls):
        filename = names[index] if index < len(names) else _filename_from_url(url)
        content_type, _ = mimetypes.guess_type(filename)
        attachments.append(url_attachment(url, filename, content_type))
    return attachments


def build_message(
    *,
    recipients: Sequence[str],
    subject: str,
    from_address: str | None,
    text: str | None,
    html: str | None,
    attachments: Sequence[str] = (),
    attachment_urls: Sequence[str] = (),
    attachment_url_names: Sequence[str] = (),
) -> Message:
    """Assemble a :class:`Message` from CLI option values.

    File attachments come first, URL attachments after them, each group in
    command-line order.

    Raises:
        FileNotFoundError: An ``--attach`` path does not exist.
        click.UsageError: More ``--attach-url-name`` than ``--attach-url`` values.
    """
    parts = [_file_attachment(p) for p in attachments]
    parts.extend(_url_attachments(attachment_urls, attachment_url_names))
    return Message.create(
        from_address=from_address,
        to=recipients,
        subject=subject,
        text=text,
        html=html,
        attachments=parts,
    )


def _as_dict(value: Any) -> dict[str, Any]:
    return dict(cast(Mapping[str, Any], value)) if isinstance(value, Mapping) else {}


def resolve_transport_config(
    config: Config,
    loader: LoadFreesendConfigFromDict,
    *,
    mailer: str | None = None,
    api_key: str | None = None,
    endpoint: str | None = None,
) -> FreesendConfig:
    """Resolve the transport config, with ``--api-key``/``--endpoint`` taking precedence.

    CLI values are written into the highest-precedence source the loader
    reads: the selected mailer section, or ``[freesend]`` without one.

    Raises:
        ConfigurationError: Missing API key or endpoint, or unknown mailer.
    """
    config_dict = dict(config.as_dict())
    if mailer is None:
        overrides = filter_sentinels(api_key=api_key, endpoint=endpoint)
        if overrides:
            config_dict["freesend"] = {**_as_dict(config_dict.get("freesend")), **overrides}
    else:
        overrides = filter_sentinels(key=api_key, endpoint=endpoint)
        mailers = _as_dict(config_dict.get("mailers"))
        if overrides and mailer in mailers:
            mailers[mailer] = {**_as_dict(mailers[mailer]), **overrides}
            config_dict["mailers"] = mailers
    return loader(config_dict, mailer=mailer)


def execute_with_mail_error_handling(*, operation: Callable[[], T], action: str) -> T:
    """Run ``operation`` and translate mail failures into exit codes.

    Handlers, most specific first:

    1. ConfigurationError -> CONFIG_ERROR (78)
    2. MissingRecipientError / MissingSenderError -> INVALID_ARGUMENT (22)
    3. FileNotFoundError -> FILE_NOT_FOUND (2)
    4. TransportError (ApiError, NetworkError) -> DELIVERY_FAILURE (69)
    5. Exception -> GENERAL_ERROR (1), re-raised when ``DEVELOPMENT_MODE`` is set

    Raises:
        SystemExit: On any handled error.
        click.UsageError: Passed through so Click reports it as a usage error.
    """
    try:
        return operation()
    except click.UsageError:
        raise
    except ConfigurationError as exc:
        _fail(exc, "Configuration error", ExitCode.CONFIG_ERROR)
    except (MissingRecipientError, MissingSenderError) as exc:
        _fail(exc, "Invalid message", ExitCode.INVALID_ARGUMENT)
    except FileNotFoundError as exc:
        _fail(exc, "Attachment file not found", ExitCode.FILE_NOT_FOUND)
    except TransportError as exc:
        _fail(exc, f"Failed to {action}", ExitCode.DELIVERY_FAILURE)
    except Exception as exc:
        if os.environ.get("DEVELOPMENT_MODE"):
            raise
        _fail(exc, "Unexpected error", ExitCode.GENERAL_ERROR, log_traceback=True)


def _fail(exc: Exception, user_message: str, exit_code: ExitCode, *, log_traceback: bool = False) -> NoReturn:
    """Log ``exc``, print it to stderr and exit with ``exit_code``.

    Raises:
        SystemExit: Always.
    """
    kind = getattr(exc, "kind", None)
    logger.error(
        user_message,
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "error_kind": kind.value if kind is not None else None,
        },
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code) from exc


__all__ = [
    "build_message",
    "execute_with_mail_error_handling",
    "filter_sentinels",
    "message_options",
    "resolve_transport_config",
]
