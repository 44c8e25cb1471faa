"""
Provision use case — build one CI host from start to finish.

This is the top-level orchestrator: it loads provision.yml, installs
system packages, detects the host architecture, provisions the
toolchain, installs the cargo tools and records the run in the audit
ledger. The first failure stops everything.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from buildhost.core.config.loader import ConfigError, load_config_or_default
from buildhost.core.models.config import ProvisionConfig
from buildhost.core.models.outcome import InstallationOutcome
from buildhost.core.models.request import ProvisioningRequest
from buildhost.core.persistence.audit import AuditEntry, AuditWriter
from buildhost.core.services.system_packages import install_system_packages
from buildhost.core.services.toolchain.data.constants import RUSTUP_VERSION
from buildhost.core.services.toolchain.detection.host_arch import detect_host_arch
from buildhost.core.services.toolchain.domain.errors import ProvisionError
from buildhost.core.services.toolchain.execution.cargo_tools import install_cargo_tools
from buildhost.core.services.toolchain.execution.subprocess_runner import (
    CommandRunner,
    run_command,
)
from buildhost.core.services.toolchain.orchestration.provisioner import Provisioner

logger = logging.getLogger(__name__)


@dataclass
class ProvisionResult:
    """Result of a provisioning run."""

    request: ProvisioningRequest | None = None
    outcome: InstallationOutcome | None = None
    config_path: Path | None = None
    system_packages: list[str] = field(default_factory=list)
    tools_installed: list[str] = field(default_factory=list)
    reason: str | None = None
    error: str | None = None
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and self.outcome is not None and self.outcome.ok

    def fail(self, error: ProvisionError | ConfigError) -> None:
        self.reason = error.reason
        self.error = str(error)

    def to_dict(self) -> dict:
        result: dict = {
            "ok": self.ok,
            "config_path": str(self.config_path) if self.config_path else None,
            "installer_version": RUSTUP_VERSION,
        }
        if self.request:
            result["request"] = self.request.model_dump(mode="json")
        if self.outcome:
            result["outcome"] = self.outcome.model_dump(mode="json")
        result["system_packages"] = self.system_packages
        result["tools_installed"] = self.tools_installed
        result["duration_ms"] = self.duration_ms
        if self.error:
            result["reason"] = self.reason
            result["error"] = self.error
        return result


def build_request(
    config: ProvisionConfig,
    *,
    host_arch: str,
    toolchain_version: str | None = None,
    rustup_home: str | Path | None = None,
    cargo_home: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ProvisioningRequest:
    """Resolve the request: flag > environment > provision.yml > default.

    Raises:
        ConfigError: The resolved values are inconsistent (e.g. both
            roots point at the same directory).
    """
    env = os.environ if environ is None else environ
    settings = config.toolchain
    try:
        return ProvisioningRequest(
            host_arch=host_arch,
            toolchain_version=toolchain_version or env.get("RUST_VERSION") or settings.version,
            rustup_home=Path(rustup_home or env.get("RUSTUP_HOME") or settings.rustup_home),
            cargo_home=Path(cargo_home or env.get("CARGO_HOME") or settings.cargo_home),
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid provisioning request: {e}") from e


def run_provision(
    config_path: Path | None = None,
    *,
    arch: str | None = None,
    toolchain_version: str | None = None,
    rustup_home: str | Path | None = None,
    cargo_home: str | Path | None = None,
    work_dir: str | Path | None = None,
    skip_tools: bool = False,
    skip_system_packages: bool = False,
    runner: CommandRunner = run_command,
    provisioner: Provisioner | None = None,
    environ: Mapping[str, str] | None = None,
) -> ProvisionResult:
    """Provision the build host.

    Args:
        config_path: Explicit provision.yml (default: search upward).
        arch: Host architecture override (default: ask dpkg).
        toolchain_version: Toolchain version override.
        rustup_home: RUSTUP_HOME override.
        cargo_home: CARGO_HOME override.
        work_dir: Directory for the transient installer.
        skip_tools: Don't install the cargo tools.
        skip_system_packages: Don't run apt-get.
        runner: Command runner for every subprocess.
        provisioner: Pre-built provisioner (default: from config).
        environ: Environment to read overrides from (default: os.environ).

    Returns:
        ProvisionResult; ``ok`` only if every stage succeeded.
    """
    start = time.monotonic()
    result = ProvisionResult()

    try:
        config, result.config_path = load_config_or_default(config_path)
    except ConfigError as e:
        result.fail(e)
        return result

    try:
        if not skip_system_packages:
            result.system_packages = install_system_packages(
                config.system_packages, runner=runner,
            )

        host_arch = arch or detect_host_arch(runner=runner)
        request = build_request(
            config,
            host_arch=host_arch,
            toolchain_version=toolchain_version,
            rustup_home=rustup_home,
            cargo_home=cargo_home,
            environ=environ,
        )
        result.request = request
    except (ProvisionError, ConfigError) as e:
        logger.error("%s", e)
        result.fail(e)
        _finish(result, config, start)
        return result

    if provisioner is None:
        provisioner = Provisioner(
            runner=runner,
            base_url=config.toolchain.base_url,
            work_dir=work_dir or config.work_dir,
        )

    outcome = provisioner.run(request)
    result.outcome = outcome
    if outcome.failed:
        result.reason = outcome.reason
        result.error = outcome.error
        _finish(result, config, start)
        return result

    if not skip_tools:
        try:
            result.tools_installed = install_cargo_tools(
                request, config.cargo_tools, runner=runner,
            )
        except ProvisionError as e:
            logger.error("%s", e)
            result.fail(e)

    _finish(result, config, start)
    return result


def _finish(result: ProvisionResult, config: ProvisionConfig, start: float) -> None:
    result.duration_ms = int((time.monotonic() - start) * 1000)
    if config.audit_log:
        AuditWriter(Path(config.audit_log)).write(_audit_entry(result))


def _audit_entry(result: ProvisionResult) -> AuditEntry:
    outcome = result.outcome
    request = result.request
    return AuditEntry(
        host_arch=request.host_arch if request else "",
        target_triple=outcome.profile.target_triple if outcome and outcome.profile else "",
        toolchain_version=request.toolchain_version if request else "",
        installer_version=RUSTUP_VERSION,
        status="done" if result.ok else "failed",
        reason=result.reason,
        error=result.error,
        stages=[str(s) for s in outcome.history] if outcome else [],
        installer_sha256=outcome.installer_sha256 if outcome else None,
        versions=dict(outcome.versions) if outcome else {},
        tools=result.tools_installed,
        system_packages=result.system_packages,
        duration_ms=result.duration_ms,
    )
