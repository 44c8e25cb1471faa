"""
L0 Data — Architecture profile table.

One entry per supported dpkg architecture. Each checksum is the
SHA-256 of ``rustup-init`` for that triple at ``RUSTUP_VERSION``.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from buildhost.core.models.profile import ArchitectureProfile


def _profile(arch: str, triple: str, sha256: str) -> tuple[str, ArchitectureProfile]:
    return arch, ArchitectureProfile(arch=arch, target_triple=triple, sha256=sha256)


ARCHITECTURE_PROFILES: Mapping[str, ArchitectureProfile] = MappingProxyType(dict([
    _profile(
        "amd64", "x86_64-unknown-linux-gnu",
        "a3d541a5484c8fa2f1c21478a6f6c505a778d473c21d60a18a4df5185d320ef8",
    ),
    _profile(
        "armhf", "armv7-unknown-linux-gnueabihf",
        "7cff34808434a28d5a697593cd7a46cefdf59c4670021debccd4c86afde0ff76",
    ),
    _profile(
        "arm64", "aarch64-unknown-linux-gnu",
        "76cd420cb8a82e540025c5f97bda3c65ceb0b0661d5843e6ef177479813b0367",
    ),
    _profile(
        "i386", "i686-unknown-linux-gnu",
        "cacdd10eb5ec58498cd95dbb7191fdab5fa4343e05daaf0fb7cdcae63be0a272",
    ),
    _profile(
        "ppc64el", "powerpc64le-unknown-linux-gnu",
        "b152711fb15fd629f0d4c2731cbf9167e6352da0ffcb2210447d80c010180f96",
    ),
]))
