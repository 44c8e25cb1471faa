"""
L3 Detection — read-only queries against the host.
"""

from buildhost.core.services.toolchain.detection.host_arch import (  # noqa: F401
    detect_host_arch,
)
