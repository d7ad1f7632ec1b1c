"""
Provision requests — units of desired state.

Requests are built once from the TargetEnvironment and consumed by the
plan runner. The engine never invents requests of its own.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# ssh-keygen creates this directory by itself; any other key_dir must
# be created before the key is generated.
DEFAULT_KEY_DIR = "~/.ssh"


class _Request(BaseModel, ABC):
    """Abstract base for every request type."""

    model_config = ConfigDict(frozen=True)

    @property
    @abstractmethod
    def identity(self) -> str:
        """Human-readable name of the item."""

    @property
    @abstractmethod
    def recipe_key(self) -> str:
        """Key into the recipe table."""


class SystemUpdateRequest(_Request):
    """Repeatable system maintenance. Never gated by a presence check."""

    kind: Literal["update"] = "update"
    update: Literal["system", "dependencies", "cleanup"]

    @property
    def identity(self) -> str:
        return f"update {self.update}"

    @property
    def recipe_key(self) -> str:
        return f"update:{self.update}"


class ToolRequest(_Request):
    """A command-line tool that should be installed."""

    kind: Literal["tool"] = "tool"
    name: str
    version: str | None = None

    @property
    def identity(self) -> str:
        return self.name

    @property
    def recipe_key(self) -> str:
        return f"tool:{self.name}"


class SshKeyRequest(_Request):
    """An SSH key pair that should exist in ``key_dir``.

    ``key_dir`` is an absolute path: ``~`` is expanded when the request
    is built, so recipes never depend on the caller's shell.
    """

    kind: Literal["ssh_key"] = "ssh_key"
    algorithm: str
    email: str
    title: str | None = None
    key_dir: str
    upload: bool = False

    @property
    def identity(self) -> str:
        return f"ssh key ({self.algorithm})"

    @property
    def recipe_key(self) -> str:
        return "key:ssh"

    @property
    def uses_default_dir(self) -> bool:
        """Whether the key lives in ssh-keygen's own default directory."""
        return Path(self.key_dir) == Path(DEFAULT_KEY_DIR).expanduser()

    @property
    def private_key_path(self) -> str:
        return f"{self.key_dir.rstrip('/')}/id_{self.algorithm}"

    @property
    def public_key_path(self) -> str:
        return f"{self.private_key_path}.pub"


ProvisionRequest = Annotated[
    SystemUpdateRequest | ToolRequest | SshKeyRequest,
    Field(discriminator="kind"),
]
