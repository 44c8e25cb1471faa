"""
L4 Execution — Run the verified installer.

The installer lives on disk only for as long as it runs: it is written
to a private temp file, marked executable, executed, and removed again
whatever the exit status.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from buildhost.core.models.profile import ArchitectureProfile
from buildhost.core.models.request import ProvisioningRequest
from buildhost.core.services.toolchain.data.constants import (
    INSTALLER_FLAGS,
    INSTALLER_PREFIX,
    INSTALLER_TIMEOUT,
)
from buildhost.core.services.toolchain.domain.errors import InstallationFailure
from buildhost.core.services.toolchain.execution.subprocess_runner import (
    CommandResult,
    CommandRunner,
    run_command,
)

logger = logging.getLogger(__name__)


def installer_args(request: ProvisioningRequest, profile: ArchitectureProfile) -> list[str]:
    """Fixed non-interactive argument set for rustup-init."""
    return [
        *INSTALLER_FLAGS,
        "--default-toolchain", request.toolchain_version,
        "--default-host", profile.target_triple,
    ]


def cleanup_installer(path: str | Path) -> None:
    """Remove the transient installer file."""
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as e:
        logger.warning("Could not remove installer %s: %s", path, e)


def run_installer(
    installer: bytes,
    request: ProvisioningRequest,
    profile: ArchitectureProfile,
    *,
    runner: CommandRunner = run_command,
    work_dir: str | Path | None = None,
) -> CommandResult:
    """Write, execute and delete the (already verified) installer.

    Args:
        installer: Verified installer bytes.
        request: Provisioning request (version and install roots).
        profile: Resolved profile (default host triple).
        runner: Command runner.
        work_dir: Directory for the transient file (default: temp dir).

    Returns:
        The installer's ``CommandResult``.

    Raises:
        InstallationFailure: The installer could not be written to
            ``work_dir`` or exited non-zero.
    """
    try:
        fd, path = tempfile.mkstemp(
            prefix=INSTALLER_PREFIX,
            dir=str(work_dir) if work_dir else None,
        )
    except OSError as e:
        raise InstallationFailure(f"Cannot stage installer: {e}") from e

    try:
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(installer)
            os.chmod(path, 0o700)
        except OSError as e:
            raise InstallationFailure(f"Cannot stage installer: {e}") from e

        cmd = [path, *installer_args(request, profile)]
        logger.info(
            "Installing Rust %s for %s", request.toolchain_version, profile.target_triple,
        )
        result = runner(
            cmd,
            env_overrides=request.toolchain_env(),
            timeout=INSTALLER_TIMEOUT,
        )
    finally:
        cleanup_installer(path)

    if not result.ok:
        raise InstallationFailure(
            f"rustup-init exited {result.returncode}",
            returncode=result.returncode,
            stderr=result.stderr,
        )
    return result
