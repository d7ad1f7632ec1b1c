"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from setup_coding.adapters.mock import MockProcessAdapter
from setup_coding.core.models.facts import SystemFacts


@pytest.fixture
def facts() -> SystemFacts:
    """Facts of a typical Ubuntu 22.04 workstation."""
    return SystemFacts(
        architecture="amd64",
        kernel_name="Linux",
        hardware_name="x86_64",
        distro_codename="jammy",
    )


@pytest.fixture
def adapter() -> MockProcessAdapter:
    """Mock adapter answering the four fact probes like an Ubuntu host.

    Every other program spawns and exits 0, so tools look present
    unless a test marks them missing.
    """
    mock = MockProcessAdapter()
    mock.set_output("dpkg", "amd64\n")
    mock.set_output("uname -s", "Linux\n")
    mock.set_output("uname -m", "x86_64\n")
    mock.set_output("lsb_release", "jammy\n")
    return mock


@pytest.fixture
def ssh_dir(tmp_path: Path) -> Path:
    """A key directory that does not exist yet."""
    return tmp_path / "ssh"
