"""
Step, Pipeline and their outcomes — the process execution contract.

A Step is one external process. A Pipeline is an ordered sequence of
Steps, where a step fed from ``InputSource.PIPE`` reads the previous
step's stdout as a live stream (shell ``A | B``). Adapters take a
Pipeline and return a PipelineOutcome. Never exceptions.
"""

from __future__ import annotations

import shlex
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class InputSource(StrEnum):
    """Where a step's stdin comes from."""

    NONE = "none"        # /dev/null
    INHERIT = "inherit"  # our own stdin (interactive prompts)
    PIPE = "pipe"        # previous step's stdout


class ErrorKind(StrEnum):
    """Why a step did not succeed."""

    SPAWN = "SpawnError"
    WAIT = "WaitError"
    STEP_FAILURE = "StepFailure"
    UPSTREAM = "SkippedDueToUpstreamFailure"


class Step(BaseModel):
    """One external process invocation."""

    model_config = ConfigDict(frozen=True)

    program: str
    args: tuple[str, ...] = ()
    input_source: InputSource = InputSource.NONE
    captures_output: bool = False
    label: str = ""
    critical: bool = True

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    @property
    def display(self) -> str:
        """Shell-like rendering, for logs and dry runs."""
        return shlex.join(self.argv)

    @property
    def name(self) -> str:
        return self.label or self.program


class Pipeline(BaseModel):
    """An ordered list of steps with validated pipe wiring."""

    model_config = ConfigDict(frozen=True)

    name: str
    steps: tuple[Step, ...]

    @model_validator(mode="after")
    def _check_wiring(self) -> Pipeline:
        for i, step in enumerate(self.steps):
            if step.input_source != InputSource.PIPE:
                continue
            if i == 0:
                raise ValueError(
                    f"{self.name}: first step '{step.name}' cannot read from a pipe"
                )
            if not self.steps[i - 1].captures_output:
                raise ValueError(
                    f"{self.name}: step '{step.name}' reads from a pipe but "
                    f"'{self.steps[i - 1].name}' does not capture its output"
                )
        return self

    def feeds_pipe(self, index: int) -> bool:
        """Whether the step at ``index`` streams into the next step."""
        nxt = index + 1
        return nxt < len(self.steps) and self.steps[nxt].input_source == InputSource.PIPE

    def render(self) -> list[str]:
        """Human-readable lines, joining piped steps with ``|``."""
        lines: list[str] = []
        for step in self.steps:
            if step.input_source == InputSource.PIPE and lines:
                lines[-1] = f"{lines[-1]} | {step.display}"
            else:
                lines.append(step.display)
        return lines


class StepOutcome(BaseModel):
    """What happened to one step."""

    step: Step
    status: Literal["ok", "failed", "skipped"]
    spawn_succeeded: bool = False
    waited: bool = False
    exit_code: int | None = None
    captured: bytes | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def captured_text(self) -> str | None:
        """Captured stdout for display (undecodable bytes replaced)."""
        if self.captured is None:
            return None
        return self.captured.decode("utf-8", errors="replace")

    @classmethod
    def spawn_failed(cls, step: Step, error: str) -> StepOutcome:
        return cls(
            step=step,
            status="failed",
            error=error,
            error_kind=ErrorKind.SPAWN,
        )

    @classmethod
    def upstream_missing(cls, step: Step) -> StepOutcome:
        return cls(
            step=step,
            status="skipped",
            error="missing upstream input",
            error_kind=ErrorKind.UPSTREAM,
        )

    @classmethod
    def finished(
        cls,
        step: Step,
        exit_code: int,
        captured: bytes | None = None,
    ) -> StepOutcome:
        if exit_code == 0:
            return cls(
                step=step,
                status="ok",
                spawn_succeeded=True,
                waited=True,
                exit_code=0,
                captured=captured,
            )
        return cls(
            step=step,
            status="failed",
            spawn_succeeded=True,
            waited=True,
            exit_code=exit_code,
            captured=captured,
            error=f"exited with code {exit_code}",
            error_kind=ErrorKind.STEP_FAILURE,
        )

    @classmethod
    def wait_failed(cls, step: Step, error: str) -> StepOutcome:
        return cls(
            step=step,
            status="failed",
            spawn_succeeded=True,
            error=error,
            error_kind=ErrorKind.WAIT,
        )

    def summary(self) -> dict:
        return {
            "label": self.step.name,
            "command": self.step.display,
            "status": self.status,
            "exit_code": self.exit_code,
            "error": self.error,
            "error_kind": str(self.error_kind) if self.error_kind else None,
        }


class PipelineOutcome(BaseModel):
    """Ordered step outcomes plus a derived verdict."""

    pipeline: Pipeline
    outcomes: list[StepOutcome] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """All steps succeeded, or the ones that didn't were non-critical."""
        return all(o.ok or not o.step.critical for o in self.outcomes)

    @property
    def failed_steps(self) -> list[StepOutcome]:
        return [o for o in self.outcomes if not o.ok and o.step.critical]

    def to_dict(self) -> dict:
        return {
            "pipeline": self.pipeline.name,
            "ok": self.ok,
            "steps": [o.summary() for o in self.outcomes],
        }
