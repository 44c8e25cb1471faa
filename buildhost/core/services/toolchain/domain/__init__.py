"""
L1 Domain — pure logic: errors and architecture resolution.
"""

from buildhost.core.services.toolchain.domain.errors import (  # noqa: F401
    ChecksumMismatch,
    DownloadError,
    InstallationFailure,
    PostInstallVerificationFailed,
    ProvisionError,
    UnsupportedArchitecture,
)
from buildhost.core.services.toolchain.domain.resolution import (  # noqa: F401
    installer_url,
    normalize_arch,
    resolve_architecture_profile,
)
