"""
Tests for CLI commands — provision, toolchain, config check, and global options.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from buildhost.core.use_cases import provision as provision_use_case
from buildhost.main import cli
from tests.toolchain.simulated_host import INSTALLER_BYTES, FakeRunner, simulated_profiles


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Rust CI build host" in result.output
        for command in ("provision", "toolchain", "config"):
            assert command in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestToolchainCommands:
    def test_list(self):
        result = CliRunner().invoke(cli, ["toolchain", "list"])
        assert result.exit_code == 0
        assert "powerpc64le-unknown-linux-gnu" in result.output
        assert len(result.output.strip().splitlines()) == 5

    def test_list_json(self):
        result = CliRunner().invoke(cli, ["toolchain", "list", "--json"])
        assert result.exit_code == 0
        assert {p["arch"] for p in json.loads(result.stdout)} == {
            "amd64", "armhf", "arm64", "i386", "ppc64el",
        }

    def test_arch_json(self):
        result = CliRunner().invoke(cli, ["toolchain", "arch", "--arch", "armhf", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["target_triple"] == "armv7-unknown-linux-gnueabihf"
        assert data["installer_version"] == "1.27.0"

    def test_arch_unsupported(self):
        result = CliRunner().invoke(cli, ["toolchain", "arch", "--arch", "riscv64"])
        assert result.exit_code == 1
        assert "unsupported architecture" in result.output

    def test_url_default_host(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["toolchain", "url", "--arch", "i386"])
        assert result.exit_code == 0
        assert result.output.strip() == (
            "https://static.rust-lang.org/rustup/archive/1.27.0/"
            "i686-unknown-linux-gnu/rustup-init"
        )

    def test_url_from_config(self, tmp_path: Path):
        config = tmp_path / "provision.yml"
        config.write_text("toolchain:\n  base_url: https://mirror.example\n")
        result = CliRunner().invoke(
            cli, ["--config", str(config), "toolchain", "url", "--arch", "amd64"],
        )
        assert result.exit_code == 0
        assert result.output.startswith("https://mirror.example/rustup/archive/")

    def test_url_rejects_plain_http(self):
        result = CliRunner().invoke(
            cli, ["toolchain", "url", "--arch", "amd64", "--base-url", "http://x.example"],
        )
        assert result.exit_code == 1
        assert "non-https" in result.output

    def test_verify_mismatch(self, tmp_path: Path):
        installer = tmp_path / "rustup-init"
        installer.write_bytes(b"definitely not rustup")
        result = CliRunner().invoke(
            cli, ["toolchain", "verify", str(installer), "--arch", "amd64"],
        )
        assert result.exit_code == 1
        assert "SHA256 mismatch" in result.output

    def test_verify_match(self, tmp_path: Path, monkeypatch):
        import buildhost.core.services.toolchain as toolchain_pkg

        profile = simulated_profiles()["amd64"]
        monkeypatch.setattr(toolchain_pkg, "resolve_architecture_profile", lambda arch: profile)
        installer = tmp_path / "rustup-init"
        installer.write_bytes(INSTALLER_BYTES)
        result = CliRunner().invoke(
            cli, ["toolchain", "verify", str(installer), "--arch", "amd64"],
        )
        assert result.exit_code == 0
        assert "matches x86_64-unknown-linux-gnu" in result.output


class TestConfigCheckCommand:
    def test_valid(self, tmp_path: Path):
        config = tmp_path / "provision.yml"
        config.write_text("system_packages: [curl]\n")
        result = CliRunner().invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output
        assert "1.77.0" in result.output

    def test_invalid(self, tmp_path: Path):
        config = tmp_path / "provision.yml"
        config.write_text("toolchain:\n  rustup_home: /x\n  cargo_home: /x\n")
        result = CliRunner().invoke(cli, ["--config", str(config), "config", "check"])
        assert result.exit_code == 1
        assert "must differ" in result.output

    def test_json(self, tmp_path: Path):
        config = tmp_path / "provision.yml"
        config.write_text("toolchain:\n  version: stable\n")
        result = CliRunner().invoke(
            cli, ["--config", str(config), "config", "check", "--json"],
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["valid"] is True
        assert data["toolchain_version"] == "stable"
        assert data["warnings"]


class TestProvisionCommand:
    @pytest.fixture
    def simulated(self, tmp_path: Path, monkeypatch, make_provisioner):
        """Route `buildhost provision` through the simulated host."""
        runner = FakeRunner()
        real = provision_use_case.run_provision
        environ = {
            "RUSTUP_HOME": str(tmp_path / "rustup"),
            "CARGO_HOME": str(tmp_path / "cargo"),
        }

        def fake_run_provision(**kwargs):
            return real(
                **kwargs,
                runner=runner,
                provisioner=make_provisioner(runner=runner),
                environ=environ,
            )

        monkeypatch.setattr(provision_use_case, "run_provision", fake_run_provision)
        monkeypatch.chdir(tmp_path)
        return runner

    def test_success(self, simulated):
        result = CliRunner().invoke(cli, ["provision", "--arch", "amd64"])
        assert result.exit_code == 0, result.output
        assert "Rust 1.77.0 ready" in result.output
        assert "x86_64-unknown-linux-gnu" in result.output
        assert "rust-script 0.7.0" in result.output

    def test_quiet(self, simulated):
        result = CliRunner().invoke(cli, ["-q", "provision", "--arch", "amd64"])
        assert result.exit_code == 0
        assert "ready" not in result.output

    def test_failure(self, simulated):
        simulated.exit_codes["rustup-init"] = 1
        result = CliRunner().invoke(cli, ["provision", "--arch", "amd64"])
        assert result.exit_code == 1
        assert "failed at verified (installation_failure)" in result.output

    def test_json(self, simulated):
        result = CliRunner().invoke(
            cli, ["provision", "--arch", "amd64", "--skip-tools", "--json"],
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["tools_installed"] == []
        assert data["outcome"]["profile"]["target_triple"] == "x86_64-unknown-linux-gnu"

    def test_json_failure(self, simulated):
        result = CliRunner().invoke(cli, ["provision", "--arch", "sparc64", "--json"])
        assert result.exit_code == 1
        assert json.loads(result.stdout)["reason"] == "unsupported_architecture"

    def test_config_error(self, tmp_path: Path):
        config = tmp_path / "provision.yml"
        config.write_text("nonsense: true\n")
        result = CliRunner().invoke(cli, ["--config", str(config), "provision"])
        assert result.exit_code == 1
        assert "failed at setup (config_error)" in result.output


class TestHistoryCommand:
    def _config(self, tmp_path: Path) -> tuple[Path, Path]:
        ledger = tmp_path / "provision.ndjson"
        config = tmp_path / "provision.yml"
        config.write_text(f"audit_log: {ledger}\n")
        return config, ledger

    def test_lists_runs(self, tmp_path: Path):
        from buildhost.core.persistence.audit import AuditEntry, AuditWriter

        config, ledger = self._config(tmp_path)
        writer = AuditWriter(ledger)
        writer.write(AuditEntry(run_id="prov-a", host_arch="amd64", status="done",
                                toolchain_version="1.77.0"))
        writer.write(AuditEntry(run_id="prov-b", host_arch="riscv64", status="failed",
                                reason="unsupported_architecture"))

        result = CliRunner().invoke(cli, ["--config", str(config), "history"])
        assert result.exit_code == 0
        assert "✅" in result.output and "prov-a" in result.output
        assert "Rust 1.77.0" in result.output
        assert "(unsupported_architecture)" in result.output

    def test_limit_json(self, tmp_path: Path):
        from buildhost.core.persistence.audit import AuditEntry, AuditWriter

        config, ledger = self._config(tmp_path)
        writer = AuditWriter(ledger)
        for i in range(4):
            writer.write(AuditEntry(run_id=f"prov-{i}"))

        result = CliRunner().invoke(
            cli, ["--config", str(config), "history", "-n", "2", "--json"],
        )
        assert result.exit_code == 0
        assert [e["run_id"] for e in json.loads(result.stdout)] == ["prov-2", "prov-3"]

    def test_empty_ledger(self, tmp_path: Path):
        config, _ = self._config(tmp_path)
        result = CliRunner().invoke(cli, ["--config", str(config), "history"])
        assert result.exit_code == 0
        assert "No provisioning runs recorded." in result.output

    def test_no_ledger_configured(self, tmp_path: Path):
        config = tmp_path / "provision.yml"
        config.write_text("")
        result = CliRunner().invoke(cli, ["--config", str(config), "history"])
        assert result.exit_code == 1
        assert "No audit_log configured" in result.output

    def test_after_provision(self, tmp_path: Path, monkeypatch, make_provisioner):
        config, _ = self._config(tmp_path)
        runner = FakeRunner()
        real = provision_use_case.run_provision

        def fake_run_provision(**kwargs):
            return real(
                **kwargs,
                runner=runner,
                provisioner=make_provisioner(runner=runner),
                environ={
                    "RUSTUP_HOME": str(tmp_path / "rustup"),
                    "CARGO_HOME": str(tmp_path / "cargo"),
                },
            )

        monkeypatch.setattr(provision_use_case, "run_provision", fake_run_provision)
        CliRunner().invoke(cli, ["--config", str(config), "provision", "--arch", "amd64"])
        result = CliRunner().invoke(cli, ["--config", str(config), "history", "--json"])
        entries = json.loads(result.stdout)
        assert len(entries) == 1
        assert entries[0]["status"] == "done"
        assert entries[0]["target_triple"] == "x86_64-unknown-linux-gnu"
