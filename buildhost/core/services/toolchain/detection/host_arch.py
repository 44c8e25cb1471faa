"""
L3 Detection — Host architecture.

Read-only. Asks the OS package subsystem how it classifies the
host (``dpkg --print-architecture``) rather than reading the CPU type, so
the toolchain agrees with the packages apt installs next to it. There
is no fallback: a host dpkg cannot classify is unsupported, and
``--arch`` is the only override.
"""

from __future__ import annotations

import logging
import shutil

from buildhost.core.services.toolchain.domain.errors import UnsupportedArchitecture
from buildhost.core.services.toolchain.execution.subprocess_runner import (
    CommandRunner,
    run_command,
)

logger = logging.getLogger(__name__)


def detect_host_arch(*, runner: CommandRunner = run_command) -> str:
    """Return the host's dpkg architecture string, e.g. ``"amd64"``.

    The string is returned as reported; resolution decides whether it
    is supported.

    Raises:
        UnsupportedArchitecture: dpkg is missing, failed, or printed nothing.
    """
    if not shutil.which("dpkg"):
        raise UnsupportedArchitecture(
            "", message="cannot determine host architecture: dpkg not found (use --arch)",
        )

    result = runner(["dpkg", "--print-architecture"], timeout=10)
    if not result.ok:
        raise UnsupportedArchitecture(
            "",
            message=(
                f"cannot determine host architecture: dpkg --print-architecture "
                f"exited {result.returncode}"
            ),
        )

    arch = result.stdout.strip()
    if not arch:
        raise UnsupportedArchitecture(
            "", message="cannot determine host architecture: dpkg printed nothing",
        )
    logger.debug("dpkg architecture: %s", arch)
    return arch
