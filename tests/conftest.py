"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from buildhost.core.models.request import ProvisioningRequest
from buildhost.core.services.toolchain.orchestration.provisioner import Provisioner
from tests.toolchain.simulated_host import (
    INSTALLER_BYTES,
    FakeRunner,
    simulated_profiles,
)


@pytest.fixture
def installer_bytes() -> bytes:
    """Known-good installer fixture bytes."""
    return INSTALLER_BYTES


@pytest.fixture
def runner() -> FakeRunner:
    """A simulated host where every command succeeds."""
    return FakeRunner()


@pytest.fixture
def request_(tmp_path: Path) -> ProvisioningRequest:
    """A request installing into throwaway roots."""
    return ProvisioningRequest(
        host_arch="amd64",
        toolchain_version="1.77.0",
        rustup_home=tmp_path / "rustup",
        cargo_home=tmp_path / "cargo",
    )


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Directory for the transient installer."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def make_provisioner(runner: FakeRunner, work_dir: Path):
    """Build a Provisioner wired to the simulated host."""
    fetched: list[str] = []

    def _make(data: bytes = INSTALLER_BYTES, **kwargs) -> Provisioner:
        def fetcher(profile, base_url):
            fetched.append(profile.arch)
            return data

        kwargs.setdefault("runner", runner)
        kwargs.setdefault("profiles", simulated_profiles())
        kwargs.setdefault("work_dir", work_dir)
        provisioner = Provisioner(fetcher=fetcher, **kwargs)
        provisioner.fetched = fetched
        return provisioner

    return _make
