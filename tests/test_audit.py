"""
Tests for the provisioning audit ledger.
"""

import json
import re
from pathlib import Path

from buildhost.core.persistence.audit import AuditEntry, AuditWriter, generate_run_id


class TestRunId:
    def test_format(self):
        assert re.fullmatch(r"prov-\d{8}-\d{6}-[0-9a-f]{6}", generate_run_id())

    def test_unique(self):
        assert generate_run_id() != generate_run_id()


class TestAuditWriter:
    """Tests for the audit ledger."""

    def test_write_and_read(self, tmp_path: Path):
        writer = AuditWriter(path=tmp_path / "provision.ndjson")
        writer.write(AuditEntry(run_id="prov-1", host_arch="arm64", status="done"))

        entries = writer.read_all()
        assert len(entries) == 1
        assert entries[0].run_id == "prov-1"
        assert entries[0].host_arch == "arm64"

    def test_read_recent(self, tmp_path: Path):
        writer = AuditWriter(path=tmp_path / "provision.ndjson")
        for i in range(10):
            writer.write(AuditEntry(run_id=f"prov-{i:03d}"))

        recent = writer.read_recent(3)
        assert [e.run_id for e in recent] == ["prov-007", "prov-008", "prov-009"]

    def test_read_empty_ledger(self, tmp_path: Path):
        assert AuditWriter(path=tmp_path / "nonexistent.ndjson").read_all() == []

    def test_corrupt_lines_skipped(self, tmp_path: Path):
        """Corrupt lines in the ledger are skipped gracefully."""
        path = tmp_path / "provision.ndjson"
        path.write_text(
            '{"run_id": "good-1"}\n'
            "this is not json\n"
            '{"run_id": "bad", "duration_ms": "soon"}\n'
            '{"run_id": "good-2"}\n'
        )
        entries = AuditWriter(path=path).read_all()
        assert [e.run_id for e in entries] == ["good-1", "good-2"]

    def test_creates_parent_directories(self, tmp_path: Path):
        writer = AuditWriter(path=tmp_path / "deep" / "nested" / "provision.ndjson")
        writer.write(AuditEntry())
        assert writer.path.is_file()

    def test_unwritable_ledger_is_not_fatal(self, tmp_path: Path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        writer = AuditWriter(path=blocker / "provision.ndjson")
        writer.write(AuditEntry())
        assert writer.read_all() == []

    def test_ndjson_format(self, tmp_path: Path):
        """Each entry is a single line of valid JSON."""
        path = tmp_path / "provision.ndjson"
        writer = AuditWriter(path=path)
        writer.write(AuditEntry(error="line one\nline two"))
        writer.write(AuditEntry())

        lines = path.read_text().strip().split("\n")
        assert len(lines) == 2
        assert json.loads(lines[0])["error"] == "line one\nline two"
