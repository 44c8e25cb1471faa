"""
L4 Execution — Auxiliary tools via ``cargo install``.

Runs after the toolchain is done, using the cargo it just installed.
The tools are independent of each other; they run one after another.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from buildhost.core.models.config import CargoTool
from buildhost.core.models.request import ProvisioningRequest
from buildhost.core.services.toolchain.data.constants import CARGO_INSTALL_TIMEOUT
from buildhost.core.services.toolchain.domain.errors import InstallationFailure
from buildhost.core.services.toolchain.execution.subprocess_runner import (
    CommandRunner,
    run_command,
)

logger = logging.getLogger(__name__)


def cargo_install_command(tool: CargoTool) -> list[str]:
    """``cargo install [--force] <name> --version <version>``."""
    cmd = ["cargo", "install"]
    if tool.force:
        cmd.append("--force")
    cmd += [tool.name, "--version", tool.version]
    return cmd


def install_cargo_tools(
    request: ProvisioningRequest,
    tools: Iterable[CargoTool],
    *,
    runner: CommandRunner = run_command,
) -> list[str]:
    """Install each tool at its pinned version.

    Returns:
        ``["rust-script 0.7.0", ...]`` for the tools installed.

    Raises:
        InstallationFailure: ``cargo install`` exited non-zero.
    """
    installed: list[str] = []
    for tool in tools:
        logger.info("cargo install %s %s", tool.name, tool.version)
        result = runner(
            cargo_install_command(tool),
            env_overrides=request.toolchain_env(),
            timeout=CARGO_INSTALL_TIMEOUT,
        )
        if not result.ok:
            raise InstallationFailure(
                f"cargo install {tool.name} {tool.version} exited {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr,
            )
        installed.append(f"{tool.name} {tool.version}")
    return installed
