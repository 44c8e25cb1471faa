"""
Config check use case — validate provision.yml and report issues.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from buildhost.core.config.loader import ConfigError, find_config_file, load_config
from buildhost.core.models.config import ProvisionConfig

# A pinned toolchain is a release number, optionally with a channel date.
_PINNED_VERSION_RE = re.compile(r"^\d+\.\d+(\.\d+)?$|^(nightly|beta)-\d{4}-\d{2}-\d{2}$")


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: ProvisionConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "toolchain_version": self.config.toolchain.version if self.config else None,
            "cargo_tool_count": len(self.config.cargo_tools) if self.config else 0,
            "system_package_count": len(self.config.system_packages) if self.config else 0,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate provisioning configuration and report issues.

    Args:
        config_path: Optional explicit path to provision.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.errors.append("No provision.yml found.")
        return result
    result.config_path = config_path

    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Semantic checks
    version = config.toolchain.version
    if not _PINNED_VERSION_RE.match(version):
        result.warnings.append(
            f"Toolchain version '{version}' is not pinned; builds will not be reproducible."
        )

    for key in ("rustup_home", "cargo_home"):
        value = getattr(config.toolchain, key)
        if not Path(value).is_absolute():
            result.warnings.append(f"toolchain.{key} is not an absolute path: {value}")

    if Path(config.toolchain.rustup_home) == Path(config.toolchain.cargo_home):
        result.errors.append("toolchain.rustup_home and toolchain.cargo_home must differ.")

    names = [t.name for t in config.cargo_tools]
    dupes = {n for n in names if names.count(n) > 1}
    if dupes:
        result.errors.append(f"Duplicate cargo tools: {', '.join(sorted(dupes))}")

    pkg_dupes = {p for p in config.system_packages if config.system_packages.count(p) > 1}
    if pkg_dupes:
        result.warnings.append(f"Duplicate system packages: {', '.join(sorted(pkg_dupes))}")

    result.valid = len(result.errors) == 0
    return result
