"""
L4 Execution — ``__init__.py`` re-exports all execution functions.

These functions WRITE to the system: network fetches, the transient
installer file, subprocess calls, permission changes.
"""

from buildhost.core.services.toolchain.execution.cargo_tools import (  # noqa: F401
    cargo_install_command,
    install_cargo_tools,
)
from buildhost.core.services.toolchain.execution.download import (  # noqa: F401
    fetch_installer,
)
from buildhost.core.services.toolchain.execution.install import (  # noqa: F401
    cleanup_installer,
    installer_args,
    run_installer,
)
from buildhost.core.services.toolchain.execution.integrity import (  # noqa: F401
    sha256_hex,
    verify_file,
    verify_integrity,
)
from buildhost.core.services.toolchain.execution.permissions import (  # noqa: F401
    grant_toolchain_write_access,
    grant_world_writable,
)
from buildhost.core.services.toolchain.execution.smoke import (  # noqa: F401
    smoke_test,
)
from buildhost.core.services.toolchain.execution.subprocess_runner import (  # noqa: F401
    CommandResult,
    CommandRunner,
    run_command,
)
