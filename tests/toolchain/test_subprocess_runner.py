"""
Toolchain — the subprocess runner, against real child processes.
"""

from __future__ import annotations

import sys

from buildhost.core.services.toolchain.execution.subprocess_runner import (
    EXIT_NOT_FOUND,
    EXIT_TIMEOUT,
    run_command,
)


class TestRunCommand:
    def test_captures_stdout(self):
        result = run_command([sys.executable, "-c", "print('hello')"])
        assert result.ok
        assert result.stdout.strip() == "hello"
        assert result.command[0] == sys.executable

    def test_nonzero_exit(self):
        result = run_command([sys.executable, "-c", "import sys; sys.stderr.write('no'); sys.exit(3)"])
        assert not result.ok
        assert result.returncode == 3
        assert result.stderr == "no"

    def test_env_overrides_expand(self, monkeypatch):
        monkeypatch.setenv("BUILDHOST_TEST_BASE", "/base")
        result = run_command(
            [sys.executable, "-c", "import os; print(os.environ['X'])"],
            env_overrides={"X": "/extra:$BUILDHOST_TEST_BASE"},
        )
        assert result.stdout.strip() == "/extra:/base"

    def test_missing_binary(self):
        result = run_command(["/nonexistent/definitely-not-here"])
        assert result.returncode == EXIT_NOT_FOUND
        assert result.stderr

    def test_timeout(self):
        result = run_command([sys.executable, "-c", "import time; time.sleep(5)"], timeout=1)
        assert result.returncode == EXIT_TIMEOUT
        assert "timed out" in result.stderr

    def test_output_tail(self):
        result = run_command([sys.executable, "-c", "print('x' * 5000)"])
        assert len(result.stdout) == 2000

    def test_keyword_surface(self):
        import inspect

        params = inspect.signature(run_command).parameters
        assert list(params) == ["cmd", "env_overrides", "timeout"]
