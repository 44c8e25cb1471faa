"""
L4 Execution — Post-install smoke test.

An image is only good if every installed tool can report its own
version from the fresh ``CARGO_HOME/bin``.
"""

from __future__ import annotations

import logging

from buildhost.core.models.request import ProvisioningRequest
from buildhost.core.services.toolchain.data.constants import (
    SMOKE_TEST_COMMANDS,
    SMOKE_TEST_TIMEOUT,
)
from buildhost.core.services.toolchain.domain.errors import (
    PostInstallVerificationFailed,
)
from buildhost.core.services.toolchain.execution.subprocess_runner import (
    CommandRunner,
    run_command,
)

logger = logging.getLogger(__name__)


def smoke_test(
    request: ProvisioningRequest,
    *,
    runner: CommandRunner = run_command,
) -> dict[str, str]:
    """Run ``rustup --version``, ``cargo --version`` and ``rustc --version``.

    Stops at the first failure.

    Returns:
        ``{"rustup": "rustup 1.27.0 (...)", "cargo": ..., "rustc": ...}``

    Raises:
        PostInstallVerificationFailed: A version query exited non-zero.
    """
    versions: dict[str, str] = {}
    for cmd in SMOKE_TEST_COMMANDS:
        result = runner(
            list(cmd),
            env_overrides=request.toolchain_env(),
            timeout=SMOKE_TEST_TIMEOUT,
        )
        if not result.ok:
            raise PostInstallVerificationFailed(list(cmd), result.returncode, result.stderr)
        # rustup prints its version banner on stderr in some releases
        line = (result.stdout or result.stderr).strip().splitlines()
        versions[cmd[0]] = line[0] if line else ""
        logger.info("%s", versions[cmd[0]] or f"{cmd[0]}: ok")
    return versions
