"""
L4 Execution — Installer integrity verification.

The installer is hashed in full before anything is written to disk
with execute permission. There is no switch that turns this off.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from pathlib import Path

from buildhost.core.services.toolchain.domain.errors import ChecksumMismatch

logger = logging.getLogger(__name__)


def _normalize(expected: str) -> str:
    # Accept "sha256:abc..." as well as bare hex.
    return expected.strip().removeprefix("sha256:").lower()


def sha256_hex(data: bytes) -> str:
    """SHA-256 hex digest of ``data``."""
    return hashlib.sha256(data).hexdigest()


def verify_integrity(data: bytes, expected_checksum: str) -> None:
    """Check ``data`` against ``expected_checksum``.

    Comparison is case-insensitive and constant-time. Calling it again
    with the same bytes gives the same answer.

    Raises:
        ChecksumMismatch: The digests differ.
    """
    expected = _normalize(expected_checksum)
    actual = sha256_hex(data)
    if not expected.isascii() or not hmac.compare_digest(actual, expected):
        logger.error("Installer checksum mismatch (expected %s, got %s)", expected, actual)
        raise ChecksumMismatch(expected, actual)
    logger.debug("Installer checksum OK: %s", actual)


def verify_file(path: Path, expected_checksum: str) -> str:
    """Verify a file on disk, reading it in chunks.

    Returns:
        The file's SHA-256 hex digest.

    Raises:
        ChecksumMismatch: The digests differ.
    """
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    actual = h.hexdigest()
    expected = _normalize(expected_checksum)
    if not expected.isascii() or not hmac.compare_digest(actual, expected):
        raise ChecksumMismatch(expected, actual)
    return actual
