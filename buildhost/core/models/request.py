"""
ProvisioningRequest — the ambient inputs of one provisioning run.

Built once at process start from flags, environment and provision.yml,
then passed read-only through every stage.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, model_validator


class ProvisioningRequest(BaseModel):
    """What to install, for which host, and where."""

    model_config = ConfigDict(frozen=True)

    host_arch: str
    toolchain_version: str
    rustup_home: Path
    cargo_home: Path

    @model_validator(mode="after")
    def _roots_differ(self) -> ProvisioningRequest:
        if self.rustup_home == self.cargo_home:
            raise ValueError(f"rustup_home and cargo_home must differ (both {self.rustup_home})")
        return self

    @property
    def cargo_bin(self) -> Path:
        """Directory that holds rustup, cargo and rustc after install."""
        return self.cargo_home / "bin"

    @property
    def install_roots(self) -> tuple[Path, Path]:
        """The only two directories the run is allowed to open up."""
        return (self.rustup_home, self.cargo_home)

    def toolchain_env(self) -> dict[str, str]:
        """Environment overrides for the installer and every tool it ships.

        ``$PATH`` is expanded by the subprocess runner against the
        current process environment.
        """
        return {
            "RUSTUP_HOME": str(self.rustup_home),
            "CARGO_HOME": str(self.cargo_home),
            "PATH": f"{self.cargo_bin}:$PATH",
        }
