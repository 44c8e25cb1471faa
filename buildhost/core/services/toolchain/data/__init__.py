"""
L0 Data — pinned constants and the architecture table.
"""

from buildhost.core.services.toolchain.data.constants import (  # noqa: F401
    INSTALLER_URL_TEMPLATE,
    RUSTUP_VERSION,
)
from buildhost.core.services.toolchain.data.profiles import (  # noqa: F401
    ARCHITECTURE_PROFILES,
)
