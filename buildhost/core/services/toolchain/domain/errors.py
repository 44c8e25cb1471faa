"""
L1 Domain — Provisioning error taxonomy.

Every error here is fatal for the run. Each class carries a stable
``reason`` string that ends up in the outcome, the audit ledger and
the ``--json`` output.
"""

from __future__ import annotations


class ProvisionError(Exception):
    """Base class for every fatal provisioning failure."""

    reason = "provision_error"


class UnsupportedArchitecture(ProvisionError):
    """The host architecture has no entry in the profile table."""

    reason = "unsupported_architecture"

    def __init__(self, arch: str, supported: list[str] | None = None, message: str = ""):
        self.arch = arch
        self.supported = sorted(supported or [])
        if not message:
            message = f"unsupported architecture: {arch!r}"
            if self.supported:
                message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class DownloadError(ProvisionError):
    """Transport failure or non-success response while fetching the installer."""

    reason = "download_error"

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Download of {url} failed: {message}")


class ChecksumMismatch(ProvisionError):
    """The installer bytes do not hash to the pinned digest."""

    reason = "checksum_mismatch"

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            "SHA256 mismatch for installer\n"
            f"Expected: {expected}\n"
            f"Got:      {actual}\n"
            "The installer may have been tampered with."
        )


class InstallationFailure(ProvisionError):
    """An install command (rustup-init, cargo install, apt-get) failed."""

    reason = "installation_failure"

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class PostInstallVerificationFailed(ProvisionError):
    """An installed tool could not report its own version."""

    reason = "post_install_verification_failed"

    def __init__(self, command: list[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(
            f"Smoke test '{' '.join(command)}' exited {returncode}{detail}"
        )
