"""
L4 Execution — World-writable grant on the toolchain roots.

Later, less-privileged build steps write into the toolchain tree
(``cargo install``, registry caches), so both roots get ``a+w``
recursively. The grant is confined to the two roots of a request:
any other path is refused.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from buildhost.core.models.request import ProvisioningRequest
from buildhost.core.services.toolchain.domain.errors import InstallationFailure

logger = logging.getLogger(__name__)

_WORLD_WRITE = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH


def _add_write(path: str) -> None:
    mode = os.lstat(path).st_mode
    if stat.S_ISLNK(mode):
        return
    os.chmod(path, stat.S_IMODE(mode) | _WORLD_WRITE)


def grant_world_writable(request: ProvisioningRequest, root: Path) -> int:
    """Recursively add ``a+w`` to ``root``, like ``chmod -R a+w``.

    Symlinks are neither followed nor modified.

    Args:
        request: The request whose install roots bound the grant.
        root: One of ``request.install_roots``.

    Returns:
        Number of filesystem entries updated.

    Raises:
        ValueError: ``root`` is not one of the request's install roots.
        InstallationFailure: ``root`` does not exist or cannot be changed.
    """
    if Path(root) not in request.install_roots:
        raise ValueError(f"Refusing world-writable grant outside install roots: {root}")
    if not Path(root).is_dir():
        raise InstallationFailure(f"Install root missing after install: {root}")

    count = 0
    try:
        _add_write(str(root))
        count += 1
        for dirpath, dirnames, filenames in os.walk(root):
            for name in dirnames + filenames:
                _add_write(os.path.join(dirpath, name))
                count += 1
    except OSError as e:
        raise InstallationFailure(f"Cannot open up {root}: {e}") from e

    logger.debug("Granted a+w on %d entries under %s", count, root)
    return count


def grant_toolchain_write_access(request: ProvisioningRequest) -> None:
    """Apply the world-writable grant to both install roots."""
    for root in request.install_roots:
        grant_world_writable(request, root)
    logger.info(
        "Install roots writable for later build steps: %s",
        ", ".join(str(r) for r in request.install_roots),
    )
