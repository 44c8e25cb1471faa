"""
System packages — apt-get install of the build host's OS dependencies.

A plain list in provision.yml, installed before the toolchain. No
version pinning or resolution: apt decides.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from buildhost.core.services.toolchain.data.constants import APT_TIMEOUT
from buildhost.core.services.toolchain.domain.errors import InstallationFailure
from buildhost.core.services.toolchain.execution.subprocess_runner import (
    CommandRunner,
    run_command,
)

logger = logging.getLogger(__name__)

_APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def install_system_packages(
    packages: Sequence[str],
    *,
    runner: CommandRunner = run_command,
) -> list[str]:
    """``apt-get update`` then ``apt-get install -y <packages>``.

    Returns:
        The packages requested, or ``[]`` when there was nothing to do.

    Raises:
        InstallationFailure: Either apt-get call exited non-zero.
    """
    if not packages:
        logger.debug("No system packages configured")
        return []

    for cmd in (
        ["apt-get", "update"],
        ["apt-get", "install", "-y", *packages],
    ):
        logger.info("%s", " ".join(cmd[:3]))
        result = runner(cmd, env_overrides=_APT_ENV, timeout=APT_TIMEOUT)
        if not result.ok:
            raise InstallationFailure(
                f"'{' '.join(cmd[:2])}' exited {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr,
            )
    return list(packages)
