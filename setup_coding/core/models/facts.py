"""
SystemFacts — read-only snapshot of the host, resolved once per run.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SystemFacts(BaseModel):
    """Host facts interpolated into recipes (all values pre-trimmed)."""

    model_config = ConfigDict(frozen=True)

    architecture: str      # dpkg --print-architecture  (amd64, arm64, ...)
    kernel_name: str       # uname -s                   (Linux)
    hardware_name: str     # uname -m                   (x86_64, aarch64)
    distro_codename: str   # lsb_release -cs            (jammy, noble)
