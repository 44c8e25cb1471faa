"""
L5 Orchestration — The toolchain provisioner.

Drives the strictly sequential pipeline::

    resolve → fetch → verify → install → grant → smoke test

Each stage's output is the next stage's precondition, so the first
``ProvisionError`` ends the run with a ``failed`` outcome. There are
no retries and nothing is rolled back: the build container is
disposable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path

from buildhost.core.models.config import DEFAULT_BASE_URL
from buildhost.core.models.outcome import InstallationOutcome, ProvisionStage
from buildhost.core.models.profile import ArchitectureProfile
from buildhost.core.models.request import ProvisioningRequest
from buildhost.core.services.toolchain.data.profiles import ARCHITECTURE_PROFILES
from buildhost.core.services.toolchain.domain.errors import ProvisionError
from buildhost.core.services.toolchain.domain.resolution import (
    resolve_architecture_profile,
)
from buildhost.core.services.toolchain.execution.download import fetch_installer
from buildhost.core.services.toolchain.execution.install import run_installer
from buildhost.core.services.toolchain.execution.integrity import (
    sha256_hex,
    verify_integrity,
)
from buildhost.core.services.toolchain.execution.permissions import (
    grant_toolchain_write_access,
)
from buildhost.core.services.toolchain.execution.smoke import smoke_test
from buildhost.core.services.toolchain.execution.subprocess_runner import (
    CommandRunner,
    run_command,
)

logger = logging.getLogger(__name__)

Fetcher = Callable[[ArchitectureProfile, str], bytes]


class Provisioner:
    """Installs one pinned toolchain, matched to the host architecture.

    Args:
        runner: Executes commands (installer, smoke tests).
        fetcher: Downloads the installer for a profile and base URL.
        profiles: Architecture table. Only tests pass anything but the
            pinned table.
        base_url: Artifact host for the installer.
        work_dir: Where the transient installer file is written.
    """

    def __init__(
        self,
        *,
        runner: CommandRunner = run_command,
        fetcher: Fetcher = fetch_installer,
        profiles: Mapping[str, ArchitectureProfile] = ARCHITECTURE_PROFILES,
        base_url: str = DEFAULT_BASE_URL,
        work_dir: str | Path | None = None,
    ) -> None:
        self._runner = runner
        self._fetcher = fetcher
        self._profiles = profiles
        self._base_url = base_url
        self._work_dir = work_dir

    # ── Stages ──────────────────────────────────────────────────

    def resolve(self, host_arch: str) -> ArchitectureProfile:
        return resolve_architecture_profile(host_arch, self._profiles)

    def fetch(self, profile: ArchitectureProfile) -> bytes:
        return self._fetcher(profile, self._base_url)

    def install(
        self,
        installer: bytes,
        request: ProvisioningRequest,
        *,
        outcome: InstallationOutcome | None = None,
    ) -> InstallationOutcome:
        """Run a verified installer and smoke-test the result.

        The bytes are verified again against the pinned checksum first,
        so unverified bytes can never be executed through this method.

        Args:
            installer: Installer bytes.
            request: Provisioning request.
            outcome: Outcome to continue; a fresh one if omitted.

        Returns:
            The outcome, ``done`` or ``failed``.
        """
        if outcome is None:
            outcome = InstallationOutcome(toolchain_version=request.toolchain_version)
        try:
            self._install(installer, request, outcome)
        except ProvisionError as e:
            return self._fail(outcome, e)
        return outcome

    def run(self, request: ProvisioningRequest) -> InstallationOutcome:
        """Run the whole pipeline for ``request``."""
        outcome = InstallationOutcome(toolchain_version=request.toolchain_version)
        try:
            profile = self.resolve(request.host_arch)
            outcome.profile = profile
            outcome.advance(ProvisionStage.ARCHITECTURE_RESOLVED)
            logger.info("Host %s → %s", request.host_arch, profile.target_triple)

            installer = self.fetch(profile)
            outcome.advance(ProvisionStage.DOWNLOADED)

            verify_integrity(installer, profile.sha256)
            outcome.installer_sha256 = sha256_hex(installer)
            outcome.advance(ProvisionStage.VERIFIED)
        except ProvisionError as e:
            return self._fail(outcome, e)

        return self.install(installer, request, outcome=outcome)

    # ── Internals ───────────────────────────────────────────────

    def _install(
        self,
        installer: bytes,
        request: ProvisioningRequest,
        outcome: InstallationOutcome,
    ) -> None:
        profile = outcome.profile or self.resolve(request.host_arch)
        outcome.profile = profile

        verify_integrity(installer, profile.sha256)
        outcome.installer_sha256 = sha256_hex(installer)

        run_installer(
            installer, request, profile,
            runner=self._runner, work_dir=self._work_dir,
        )
        outcome.advance(ProvisionStage.INSTALLED)

        grant_toolchain_write_access(request)

        outcome.versions = smoke_test(request, runner=self._runner)
        outcome.advance(ProvisionStage.SMOKE_TESTED)
        outcome.advance(ProvisionStage.DONE)
        logger.info("Rust %s ready in %s", request.toolchain_version, request.cargo_bin)

    def _fail(self, outcome: InstallationOutcome, error: ProvisionError) -> InstallationOutcome:
        logger.error("Provisioning failed at %s: %s", outcome.stage, error)
        outcome.fail(error.reason, str(error))
        return outcome
