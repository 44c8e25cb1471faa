"""
Domain models — Pydantic types for build host provisioning.

All models are re-exported here for convenient access:

    from buildhost.core.models import ArchitectureProfile, ProvisioningRequest
"""

from buildhost.core.models.config import (
    CargoTool,
    ProvisionConfig,
    ToolchainSettings,
)
from buildhost.core.models.outcome import InstallationOutcome, ProvisionStage
from buildhost.core.models.profile import ArchitectureProfile
from buildhost.core.models.request import ProvisioningRequest

__all__ = [
    # profile.py
    "ArchitectureProfile",
    # config.py
    "CargoTool",
    # outcome.py
    "InstallationOutcome",
    "ProvisionConfig",
    "ProvisionStage",
    # request.py
    "ProvisioningRequest",
    "ToolchainSettings",
]
