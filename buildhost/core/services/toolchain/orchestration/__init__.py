"""
L5 Orchestration — the provisioning pipeline.
"""

from buildhost.core.services.toolchain.orchestration.provisioner import (  # noqa: F401
    Provisioner,
)
