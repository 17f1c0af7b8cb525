"""Publish the bundled configuration file to app/host/user directories."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from lib_layered_config import deploy_config
from lib_layered_config.examples.deploy import DeployAction

from freesend import __init__conf__
from freesend.adapters.config.loader import get_default_config_path, validate_profile
from freesend.domain.enums import DeployTarget

logger = logging.getLogger(__name__)

_WRITTEN = frozenset({DeployAction.CREATED, DeployAction.OVERWRITTEN})


def deploy_configuration(
    *,
    targets: Sequence[DeployTarget],
    force: bool = False,
    profile: str | None = None,
) -> list[Path]:
    r"""Copy ``defaultconfig.toml`` into the requested configuration layers.

    This is the "publish config" step: it gives users an editable file
    holding the ``[freesend]`` and ``[mailers]`` sections in the location
    the loader reads from.

    Args:
        targets: Layers to write (app, host, user).
        force: Overwrite files that already exist.
        profile: Optional profile; files land in ``profile/<name>/``.

    Returns:
        Paths that were created or overwritten. Empty when every target
        already existed and ``force`` was False.

    Raises:
        PermissionError: Writing app/host layers without privileges.
        ValueError: Invalid profile name.

    Note:
        Typical destinations on Linux are ``/etc/xdg/freesend/config.toml``
        (app), ``/etc/xdg/freesend/hosts/<hostname>.toml`` (host) and
        ``~/.config/freesend/config.toml`` (user).
    """
    if profile is not None:
        validate_profile(profile)

    results = deploy_config(
        source=get_default_config_path(),
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        targets=[t.value for t in targets],
        force=force,
        set_permissions=True,
        dir_mode=None,
        file_mode=None,
    )

    paths: list[Path] = []
    for result in results:
        if result.action in _WRITTEN:
            paths.append(result.destination)
        paths.extend(extra.destination for extra in result.dot_d_results if extra.action in _WRITTEN)

    logger.info("Configuration published", extra={"paths": [str(p) for p in paths], "force": force})
    return paths


__all__ = ["deploy_configuration"]
