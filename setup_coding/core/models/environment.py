"""
TargetEnvironment model — the desired state of the machine.

Loaded from the user's config file, this declares which system updates
to apply, which tools should be installed and which credentials should
exist. If something isn't declared here, setup-coding leaves it alone.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from setup_coding.core.models.request import DEFAULT_KEY_DIR


class Updates(BaseModel):
    """System update policy. Every flag defaults to off."""

    system: bool = False
    dependencies: bool = False
    cleanup: bool = False


class ToolOptions(BaseModel):
    """Per-tool parameters (``{version: ...}`` form in the config)."""

    version: str | None = None


class SshKey(BaseModel):
    """An SSH key that should exist on the machine."""

    algorithm: str
    email: str
    title: str | None = None
    key_dir: str = DEFAULT_KEY_DIR
    upload: bool = False  # push the public key to GitHub via ``gh``

    @field_validator("algorithm", "email")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()


class Keys(BaseModel):
    """Credential section."""

    ssh: SshKey | None = None


class TargetEnvironment(BaseModel):
    """Root config model.

    ``tools`` keeps the declaration order of the config file; that order
    is the order in which tools are provisioned.

    A tool value may be:
        - ``true``                 → requested with default options
        - ``"1.2.3"``              → requested at that version
        - ``{version: "1.2.3"}``  → same, long form
        - ``false`` / ``null``     → not requested
    """

    updates: Updates | None = None
    tools: dict[str, bool | str | ToolOptions | None] = Field(default_factory=dict)
    keys: Keys | None = None

    @field_validator("tools", mode="before")
    @classmethod
    def _normalise_tool_names(cls, value: object) -> object:
        # docker_compose and docker-compose name the same tool
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(k).strip().replace("_", "-"): v for k, v in value.items()}
        return value

    def requested_tools(self) -> list[tuple[str, ToolOptions]]:
        """Tools that should be present, in declaration order."""
        requested = []
        for name, value in self.tools.items():
            if value is None or value is False:
                continue
            if isinstance(value, ToolOptions):
                requested.append((name, value))
            elif isinstance(value, str):
                requested.append((name, ToolOptions(version=value)))
            else:
                requested.append((name, ToolOptions()))
        return requested
