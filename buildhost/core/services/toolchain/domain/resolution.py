"""
L1 Domain — Architecture → installer resolution.

Pure functions: no I/O. Maps the OS-reported architecture onto the
fixed profile table and builds the pinned installer URL.
"""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urlparse

from buildhost.core.models.profile import ArchitectureProfile
from buildhost.core.services.toolchain.data.constants import (
    INSTALLER_URL_TEMPLATE,
    RUSTUP_VERSION,
)
from buildhost.core.services.toolchain.data.profiles import ARCHITECTURE_PROFILES
from buildhost.core.services.toolchain.domain.errors import (
    DownloadError,
    UnsupportedArchitecture,
)


def normalize_arch(host_arch: str) -> str:
    """Strip any dpkg multiarch prefix: ``musl-linux-amd64`` → ``amd64``."""
    return host_arch.strip().rsplit("-", 1)[-1]


def resolve_architecture_profile(
    host_arch: str,
    profiles: Mapping[str, ArchitectureProfile] = ARCHITECTURE_PROFILES,
) -> ArchitectureProfile:
    """Look up the installer profile for a host architecture.

    There is no default: an identifier outside the table is fatal.

    Args:
        host_arch: Architecture string from the OS package subsystem.
        profiles: Profile table (the pinned table unless overridden).

    Returns:
        The matching profile.

    Raises:
        UnsupportedArchitecture: No entry for ``host_arch``.
    """
    arch = normalize_arch(host_arch)
    profile = profiles.get(arch)
    if profile is None:
        raise UnsupportedArchitecture(host_arch, list(profiles))
    return profile


def installer_url(profile: ArchitectureProfile, base_url: str) -> str:
    """Versioned download URL of the installer for ``profile``.

    Raises:
        DownloadError: ``base_url`` is not an https:// URL.
    """
    base = base_url.rstrip("/")
    url = INSTALLER_URL_TEMPLATE.format(
        base_url=base, version=RUSTUP_VERSION, triple=profile.target_triple,
    )
    if urlparse(base).scheme != "https":
        raise DownloadError(url, "refusing to download over a non-https URL")
    return url
