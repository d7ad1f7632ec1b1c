"""
L2 Resolver — Request building.

Flattens a TargetEnvironment into the ordered list of provision
requests the plan runner walks. Section order is fixed: updates first
(tools may need a fresh package index), then tools, then keys.
"""

from __future__ import annotations

from pathlib import Path

from setup_coding.core.models.environment import TargetEnvironment
from setup_coding.core.models.request import SshKeyRequest, SystemUpdateRequest, ToolRequest

# apt-get update must precede installing dependencies
UPDATE_ORDER: tuple[str, ...] = ("system", "dependencies", "cleanup")


def build_requests(
    environment: TargetEnvironment,
) -> list[SystemUpdateRequest | ToolRequest | SshKeyRequest]:
    """All requests implied by the config, in execution order."""
    requests: list[SystemUpdateRequest | ToolRequest | SshKeyRequest] = []

    if environment.updates is not None:
        for kind in UPDATE_ORDER:
            if getattr(environment.updates, kind):
                requests.append(SystemUpdateRequest(update=kind))

    for name, options in environment.requested_tools():
        requests.append(ToolRequest(name=name, version=options.version))

    if environment.keys is not None and environment.keys.ssh is not None:
        ssh = environment.keys.ssh
        requests.append(
            SshKeyRequest(
                algorithm=ssh.algorithm,
                email=ssh.email,
                title=ssh.title,
                key_dir=str(Path(ssh.key_dir).expanduser()),
                upload=ssh.upload,
            )
        )

    return requests
