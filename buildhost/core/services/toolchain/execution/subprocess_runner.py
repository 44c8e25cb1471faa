"""
L4 Execution — Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for provisioning.
Every stage (installer, smoke test, cargo install, apt-get, dpkg)
goes through ``run_command`` so tests can swap in one fake.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Conventional exit codes for failures that never reached the child.
EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127

_TAIL = 2000


@dataclass(frozen=True)
class CommandResult:
    """What a command did."""

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# Signature shared by ``run_command`` and test fakes.
CommandRunner = Callable[..., CommandResult]


def run_command(
    cmd: Sequence[str],
    *,
    env_overrides: dict[str, str] | None = None,
    timeout: int = 600,
) -> CommandResult:
    """Run a command and capture its output.

    Never raises for command failures: timeouts and launch errors
    come back as non-zero results so each stage can report them
    under its own error kind.

    Args:
        cmd: Command and arguments.
        env_overrides: Extra env vars. Values are passed through
            ``os.path.expandvars`` so ``"/x/bin:$PATH"`` works.
        timeout: Seconds before the child is killed.

    Returns:
        A ``CommandResult``; ``stdout``/``stderr`` keep the last 2000 chars.
    """
    command = tuple(str(part) for part in cmd)

    env = os.environ.copy()
    if env_overrides:
        for key, value in env_overrides.items():
            env[key] = os.path.expandvars(value)

    logger.debug("Running: %s", " ".join(command))
    start = time.monotonic()
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=env,
        )
    except subprocess.TimeoutExpired:
        logger.warning("Command timed out after %ds: %s", timeout, command[0])
        return CommandResult(
            command=command,
            returncode=EXIT_TIMEOUT,
            stderr=f"Command timed out ({timeout}s)",
            elapsed_ms=int((time.monotonic() - start) * 1000),
        )
    except OSError as e:
        logger.warning("Cannot launch %s: %s", command[0], e)
        return CommandResult(
            command=command,
            returncode=EXIT_NOT_FOUND,
            stderr=str(e),
            elapsed_ms=int((time.monotonic() - start) * 1000),
        )

    elapsed_ms = int((time.monotonic() - start) * 1000)
    logger.debug("Exit %d after %dms: %s", result.returncode, elapsed_ms, command[0])
    return CommandResult(
        command=command,
        returncode=result.returncode,
        stdout=result.stdout[-_TAIL:] if result.stdout else "",
        stderr=result.stderr[-_TAIL:] if result.stderr else "",
        elapsed_ms=elapsed_ms,
    )
