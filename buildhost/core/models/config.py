"""
ProvisionConfig — the provision.yml document.

Everything here is a free parameter of a build host. The installer
version and its per-architecture checksums are not: they are pinned
constants and have no configuration key. Unknown keys are rejected so
a stray ``skip_checksum: true`` fails loudly instead of being ignored.
"""

from __future__ import annotations

from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TOOLCHAIN_VERSION = "1.77.0"
DEFAULT_RUSTUP_HOME = "/usr/local/rustup"
DEFAULT_CARGO_HOME = "/usr/local/cargo"
DEFAULT_BASE_URL = "https://static.rust-lang.org"


class CargoTool(BaseModel):
    """An auxiliary tool installed with ``cargo install``."""

    model_config = ConfigDict(extra="forbid")

    name: str
    version: str
    force: bool = False

    @field_validator("name", "version")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value


def _default_cargo_tools() -> list[CargoTool]:
    return [
        CargoTool(name="rust-script", version="0.7.0"),
        CargoTool(name="cargo-make", version="0.37.5", force=True),
    ]


class ToolchainSettings(BaseModel):
    """The toolchain block of provision.yml."""

    model_config = ConfigDict(extra="forbid")

    version: str = DEFAULT_TOOLCHAIN_VERSION
    rustup_home: str = DEFAULT_RUSTUP_HOME
    cargo_home: str = DEFAULT_CARGO_HOME
    base_url: str = DEFAULT_BASE_URL

    @field_validator("version")
    @classmethod
    def _version_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("toolchain version must not be empty")
        return value

    @field_validator("base_url")
    @classmethod
    def _https_only(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme != "https" or not parsed.netloc:
            raise ValueError(f"base_url must be an https:// URL, got {value!r}")
        return value.rstrip("/")


class ProvisionConfig(BaseModel):
    """Root model for provision.yml."""

    model_config = ConfigDict(extra="forbid")

    toolchain: ToolchainSettings = Field(default_factory=ToolchainSettings)
    work_dir: str | None = None
    cargo_tools: list[CargoTool] = Field(default_factory=_default_cargo_tools)
    system_packages: list[str] = Field(default_factory=list)
    audit_log: str | None = None
