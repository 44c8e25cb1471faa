"""
Configuration loader — reads provision.yml into domain models.

Reads YAML, validates against the Pydantic schema, and returns a
typed ``ProvisionConfig``. A missing file is not an error for the
provisioning run itself: the pinned defaults apply.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from buildhost.core.models.config import ProvisionConfig

logger = logging.getLogger(__name__)

# Default config filename
PROVISION_CONFIG_FILE = "provision.yml"


class ConfigError(Exception):
    """Raised when provisioning configuration is invalid or unreadable."""

    reason = "config_error"


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for provision.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to provision.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / PROVISION_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path) -> ProvisionConfig:
    """Load and validate provision.yml.

    Args:
        path: Path to the config file.

    Returns:
        Validated ProvisionConfig.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading provisioning config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = ProvisionConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid provisioning configuration in {path}: {e}") from e

    logger.info(
        "Loaded config: Rust %s, %d cargo tool(s)",
        config.toolchain.version, len(config.cargo_tools),
    )
    return config


def load_config_or_default(path: Path | None = None) -> tuple[ProvisionConfig, Path | None]:
    """Load ``path`` (or the discovered provision.yml), else the defaults.

    Returns:
        ``(config, path_used)``; ``path_used`` is None for defaults.

    Raises:
        ConfigError: An explicit or discovered file is invalid.
    """
    if path is None:
        path = find_config_file()
    if path is None:
        logger.debug("No %s found; using defaults", PROVISION_CONFIG_FILE)
        return ProvisionConfig(), None
    return load_config(path), path
