"""POSIX-conventional exit codes for CLI error paths.

Every ``SystemExit`` raised by a command carries one of these values, so a
calling script can tell a configuration problem from a rejected send.

Contents:
    * :class:`ExitCode` - IntEnum of all exit codes used by this application.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes following sysexits.h and errno conventions.

    * 2: ENOENT, an attachment path does not exist
    * 13: EACCES, config-deploy without privileges
    * 22: EINVAL, no usable recipient or sender
    * 69: EX_UNAVAILABLE, the API rejected the send or was unreachable
    * 78: EX_CONFIG, API key or endpoint missing, unknown mailer
    * 130/141/143: signals, translated by ``lib_cli_exit_tools``

    Example:
        >>> int(ExitCode.DELIVERY_FAILURE)
        69
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    PERMISSION_DENIED = 13
    INVALID_ARGUMENT = 22
    DELIVERY_FAILURE = 69
    CONFIG_ERROR = 78
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


__all__ = ["ExitCode"]
