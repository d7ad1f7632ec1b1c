"""
PlanReport — the structured result of a provisioning run.

The engine returns this instead of printing; the CLI renders it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from setup_coding.core.models.request import SshKeyRequest, SystemUpdateRequest, ToolRequest
from setup_coding.core.models.step import Pipeline, PipelineOutcome

ItemStatus = Literal["installed", "updated", "present", "failed", "planned", "aborted"]


@dataclass
class ItemResult:
    """Outcome for one provision request."""

    request: SystemUpdateRequest | ToolRequest | SshKeyRequest
    status: ItemStatus
    outcome: PipelineOutcome | None = None
    pipeline: Pipeline | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status in ("installed", "updated", "present", "planned")

    @property
    def failure_summary(self) -> str:
        """Which program failed at which stage, for the summary line."""
        if self.detail:
            return self.detail
        if self.outcome is None:
            return ""
        parts = []
        for o in self.outcome.failed_steps:
            parts.append(f"{o.step.name} ({o.step.program}): {o.error}")
        return "; ".join(parts)

    def to_dict(self) -> dict:
        data: dict = {
            "item": self.request.identity,
            "kind": self.request.kind,
            "status": self.status,
        }
        if self.detail:
            data["detail"] = self.detail
        if self.outcome is not None:
            data["steps"] = [o.summary() for o in self.outcome.outcomes]
        elif self.pipeline is not None:
            data["commands"] = self.pipeline.render()
        return data


@dataclass
class PlanReport:
    """Result of executing a list of provision requests."""

    results: list[ItemResult] = field(default_factory=list)
    fatal: str | None = None
    dry_run: bool = False

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.status in ("installed", "updated"))

    @property
    def present(self) -> int:
        return sum(1 for r in self.results if r.status == "present")

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == "failed")

    @property
    def aborted(self) -> int:
        return sum(1 for r in self.results if r.status == "aborted")

    @property
    def all_ok(self) -> bool:
        return self.fatal is None and self.failed == 0

    @property
    def status(self) -> str:
        if self.all_ok:
            return "ok"
        if self.fatal is None and (self.succeeded > 0 or self.present > 0):
            return "partial"
        return "failed"

    def get(self, identity: str) -> ItemResult | None:
        """Look up a result by item identity."""
        for r in self.results:
            if r.request.identity == identity:
                return r
        return None

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "dry_run": self.dry_run,
            "fatal": self.fatal,
            "total": self.total,
            "succeeded": self.succeeded,
            "present": self.present,
            "failed": self.failed,
            "aborted": self.aborted,
            "items": [r.to_dict() for r in self.results],
        }
