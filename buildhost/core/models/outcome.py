"""
InstallationOutcome — terminal state of a provisioning run.

The run is a strictly forward state machine::

    start → architecture_resolved → downloaded → verified
          → installed → smoke_tested → done

Any stage may jump to ``failed``; nothing moves backwards and a
terminal outcome never changes again.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from buildhost.core.models.profile import ArchitectureProfile


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class ProvisionStage(StrEnum):
    """Stages of the provisioning pipeline, in order."""

    START = "start"
    ARCHITECTURE_RESOLVED = "architecture_resolved"
    DOWNLOADED = "downloaded"
    VERIFIED = "verified"
    INSTALLED = "installed"
    SMOKE_TESTED = "smoke_tested"
    DONE = "done"
    FAILED = "failed"


_ORDER: dict[ProvisionStage, int] = {
    stage: index for index, stage in enumerate(ProvisionStage)
}
_TERMINAL = frozenset({ProvisionStage.DONE, ProvisionStage.FAILED})


class InstallationOutcome(BaseModel):
    """Where a run got to, and why it stopped."""

    stage: ProvisionStage = ProvisionStage.START
    history: list[ProvisionStage] = Field(
        default_factory=lambda: [ProvisionStage.START]
    )

    reason: str | None = None          # error kind, set on failure
    error: str | None = None           # human-readable failure message
    failed_at: ProvisionStage | None = None

    toolchain_version: str = ""
    profile: ArchitectureProfile | None = None
    installer_sha256: str | None = None
    versions: dict[str, str] = Field(default_factory=dict)

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the toolchain is installed and answered its smoke test."""
        return self.stage == ProvisionStage.DONE

    @property
    def failed(self) -> bool:
        return self.stage == ProvisionStage.FAILED

    @property
    def terminal(self) -> bool:
        return self.stage in _TERMINAL

    def reached(self, stage: ProvisionStage) -> bool:
        """Whether the run passed through ``stage``."""
        return stage in self.history

    def advance(self, stage: ProvisionStage) -> None:
        """Move forward to ``stage``.

        Raises:
            ValueError: On a backward move, a move out of a terminal
                stage, or an attempt to fail through ``advance``.
        """
        if stage == ProvisionStage.FAILED:
            raise ValueError("Use fail() to record a failure")
        if self.terminal:
            raise ValueError(f"Outcome already terminal ({self.stage})")
        if _ORDER[stage] <= _ORDER[self.stage]:
            raise ValueError(f"Cannot move from {self.stage} back to {stage}")
        self.stage = stage
        self.history.append(stage)
        if stage == ProvisionStage.DONE:
            self.ended_at = _now_iso()

    def fail(self, reason: str, error: str) -> None:
        """Record a terminal failure at the current stage."""
        if self.terminal:
            raise ValueError(f"Outcome already terminal ({self.stage})")
        self.failed_at = self.stage
        self.stage = ProvisionStage.FAILED
        self.history.append(ProvisionStage.FAILED)
        self.reason = reason
        self.error = error
        self.ended_at = _now_iso()
