"""
L0 Data — Pinned installer constants.

Pure data. No logic. No imports beyond stdlib.

The installer (rustup-init) is pinned independently of the toolchain
it installs: the toolchain version is a free parameter of each build,
while the installer version below is fixed together with the
per-architecture checksums in ``profiles.py``. Bumping one means
bumping the other.
"""

from __future__ import annotations

RUSTUP_VERSION = "1.27.0"

# Immutable, versioned artifact location. Never the "latest" alias.
INSTALLER_URL_TEMPLATE = "{base_url}/rustup/archive/{version}/{triple}/rustup-init"

INSTALLER_PREFIX = "rustup-init-"

# Non-interactive, leave shell rc files alone, smallest component set.
INSTALLER_FLAGS: tuple[str, ...] = ("-y", "--no-modify-path", "--profile", "minimal")

# Post-install smoke test, run in this order.
SMOKE_TEST_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("rustup", "--version"),
    ("cargo", "--version"),
    ("rustc", "--version"),
)

USER_AGENT = "buildhost/1.0"

# Timeouts (seconds).
DOWNLOAD_TIMEOUT = 60
INSTALLER_TIMEOUT = 1800
SMOKE_TEST_TIMEOUT = 30
CARGO_INSTALL_TIMEOUT = 1800
APT_TIMEOUT = 1800
