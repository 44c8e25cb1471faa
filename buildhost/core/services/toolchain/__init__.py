"""
Toolchain provisioning service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate layer (data → domain → detection → execution →
orchestration)::

    from buildhost.core.services.toolchain import Provisioner
"""

# ── L0: Data ──
from buildhost.core.services.toolchain.data.constants import RUSTUP_VERSION  # noqa: F401
from buildhost.core.services.toolchain.data.profiles import (  # noqa: F401
    ARCHITECTURE_PROFILES,
)

# ── L1: Domain ──
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
    resolve_architecture_profile,
)

# ── L3: Detection ──
from buildhost.core.services.toolchain.detection.host_arch import (  # noqa: F401
    detect_host_arch,
)

# ── L4: Execution ──
from buildhost.core.services.toolchain.execution.cargo_tools import (  # noqa: F401
    install_cargo_tools,
)
from buildhost.core.services.toolchain.execution.download import (  # noqa: F401
    fetch_installer,
)
from buildhost.core.services.toolchain.execution.integrity import (  # noqa: F401
    verify_file,
    verify_integrity,
)

# ── L5: Orchestration ──
from buildhost.core.services.toolchain.orchestration.provisioner import (  # noqa: F401
    Provisioner,
)
