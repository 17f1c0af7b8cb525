"""Static package metadata surfaced to CLI commands and documentation.

Kept in sync with ``pyproject.toml`` so that ``freesend info`` and the
``--version`` flag report the installed distribution without importing
``importlib.metadata`` at CLI start-up.

Contents:
    * Distribution metadata constants (name, title, version, homepage, author).
    * lib_layered_config identifiers (vendor, app, slug).
    * :func:`print_info` - render the metadata block.
"""

from __future__ import annotations

#: Distribution name as published on the package index.
name = "freesend"
#: One-line description shown in CLI help.
title = "Freesend HTTP email transport with URL attachments"
#: Distribution version.
version = "1.0.0"
#: Project homepage.
homepage = "https://freesend.metafog.io/docs/api/send-email"
#: Author attribution.
author = "Skylark"
#: Author contact address.
author_email = "dev@skylark.example"
#: Console script name.
shell_command = "freesend"

#: Vendor, application and slug used by lib_layered_config to locate files.
LAYEREDCONF_VENDOR = "skylark"
LAYEREDCONF_APP = "freesend"
LAYEREDCONF_SLUG = "freesend"


def print_info() -> None:
    """Print the summarised metadata block.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for freesend:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
