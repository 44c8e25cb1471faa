"""
Audit ledger — append-only record of provisioning runs.

Each run appends one NDJSON line: what host it saw, which installer it
verified (by digest), what it installed and how it ended. Useful for
answering "what exactly is in this image?" after the fact.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


def generate_run_id() -> str:
    """Generate a unique provisioning run ID."""
    now = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    short = uuid.uuid4().hex[:6]
    return f"prov-{now}-{short}"


class AuditEntry(BaseModel):
    """A single provisioning run."""

    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    run_id: str = Field(default_factory=generate_run_id)

    # Inputs
    host_arch: str = ""
    target_triple: str = ""
    toolchain_version: str = ""
    installer_version: str = ""

    # Results
    status: str = ""               # done, failed
    reason: str | None = None      # error kind when failed
    error: str | None = None
    stages: list[str] = Field(default_factory=list)
    installer_sha256: str | None = None
    versions: dict[str, str] = Field(default_factory=dict)
    tools: list[str] = Field(default_factory=list)
    system_packages: list[str] = Field(default_factory=list)
    duration_ms: int = 0


class AuditWriter:
    """Append-only audit ledger writer.

    Each call to write() appends a single JSON line to the ledger file.
    The file is created if it doesn't exist.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def write(self, entry: AuditEntry) -> None:
        """Append an audit entry to the ledger.

        A ledger that cannot be written is logged, never fatal: the
        provisioning result stands on its own.
        """
        line = json.dumps(entry.model_dump(mode="json"), ensure_ascii=False) + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(line)
            logger.debug("Audit entry written: %s", entry.run_id)
        except OSError as e:
            logger.error("Failed to write audit entry to %s: %s", self._path, e)

    def read_all(self) -> list[AuditEntry]:
        """Read all entries from the ledger, oldest first."""
        if not self._path.is_file():
            return []

        entries = []
        try:
            with self._path.open("r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        entries.append(AuditEntry.model_validate(json.loads(line)))
                    except (json.JSONDecodeError, ValidationError) as e:
                        logger.warning("Skipping corrupt audit entry at line %d: %s", line_num, e)
        except OSError as e:
            logger.error("Failed to read audit ledger: %s", e)

        return entries

    def read_recent(self, n: int = 20) -> list[AuditEntry]:
        """Read the most recent N entries."""
        return self.read_all()[-n:]
