"""
ArchitectureProfile — which installer binary to fetch for a host.

Profiles are immutable: one per supported dpkg architecture, each
pairing the rustup target triple with the SHA-256 of the installer
built for that triple.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator

_SHA256_RE = re.compile(r"^[0-9a-f]{64}$")


class ArchitectureProfile(BaseModel):
    """Installer variant for one host architecture."""

    model_config = ConfigDict(frozen=True)

    arch: str               # dpkg architecture, e.g. "amd64"
    target_triple: str      # e.g. "x86_64-unknown-linux-gnu"
    sha256: str             # expected installer digest (lowercase hex)

    @field_validator("sha256")
    @classmethod
    def _check_sha256(cls, value: str) -> str:
        value = value.lower()
        if not _SHA256_RE.match(value):
            raise ValueError(f"Not a SHA-256 hex digest: {value!r}")
        return value
