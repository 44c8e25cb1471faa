"""
buildhost — reproducible CI build host provisioning.

Installs one pinned Rust toolchain, matched to the host architecture
and checksum-verified before execution, plus its auxiliary cargo tools.
"""

__version__ = "0.1.0"
