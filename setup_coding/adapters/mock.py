"""
Mock adapter — in-memory test double for the process adapter.

Records every step it is asked to run and synthesizes outcomes without
touching the operating system. Configurable per program: spawn failure,
exit code and captured output.
"""

from __future__ import annotations

from setup_coding.adapters.base import ProcessAdapter
from setup_coding.core.models.step import InputSource, Pipeline, PipelineOutcome, Step, StepOutcome


class MockProcessAdapter(ProcessAdapter):
    """Universal mock adapter for testing.

    By default every step spawns and exits 0. Behaviour is keyed on the
    program name, or on the full command (``"uname -m"``) when a
    program needs different answers for different arguments.
    """

    def __init__(self, adapter_name: str = "mock"):
        self._name = adapter_name
        self._outputs: dict[str, bytes] = {}
        self._exit_codes: dict[str, int] = {}
        self._missing: set[str] = set()
        self._unwaitable: set[str] = set()
        self._call_log: list[Step] = []
        self._pipelines: list[Pipeline] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[Step]:
        """Every step that was actually 'spawned', in order."""
        return self._call_log

    @property
    def pipelines(self) -> list[Pipeline]:
        """Every pipeline this mock has received."""
        return self._pipelines

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def commands(self) -> list[str]:
        """Spawned steps rendered as command lines."""
        return [s.display for s in self._call_log]

    def set_output(self, key: str, output: str | bytes) -> None:
        """Synthesize captured stdout for a program or command."""
        self._outputs[key] = output.encode() if isinstance(output, str) else output

    def set_exit_code(self, key: str, code: int) -> None:
        self._exit_codes[key] = code

    def set_missing(self, program: str) -> None:
        """Make spawning ``program`` fail as if it were not installed."""
        self._missing.add(program)

    def set_unwaitable(self, program: str) -> None:
        """Make waiting on ``program`` fail."""
        self._unwaitable.add(program)

    def run_pipeline(self, pipeline: Pipeline) -> PipelineOutcome:
        self._pipelines.append(pipeline)
        outcomes: list[StepOutcome] = []
        producer_alive = False

        for i, step in enumerate(pipeline.steps):
            if step.input_source == InputSource.PIPE and not producer_alive:
                outcomes.append(StepOutcome.upstream_missing(step))
                continue

            if step.program in self._missing:
                outcomes.append(
                    StepOutcome.spawn_failed(
                        step, f"[Errno 2] No such file or directory: '{step.program}'"
                    )
                )
                producer_alive = False
                continue

            self._call_log.append(step)
            producer_alive = pipeline.feeds_pipe(i)

            if step.program in self._unwaitable:
                outcomes.append(StepOutcome.wait_failed(step, "[Errno 10] No child processes"))
                continue

            captured = None
            if step.captures_output and not producer_alive:
                captured = self._lookup(self._outputs, step, b"")
            exit_code = self._lookup(self._exit_codes, step, 0)
            outcomes.append(StepOutcome.finished(step, exit_code, captured))

        return PipelineOutcome(pipeline=pipeline, outcomes=outcomes)

    def reset(self) -> None:
        """Clear call log and configured behaviour."""
        self._call_log.clear()
        self._pipelines.clear()
        self._outputs.clear()
        self._exit_codes.clear()
        self._missing.clear()
        self._unwaitable.clear()

    @staticmethod
    def _lookup(table: dict, step: Step, default):
        if step.display in table:
            return table[step.display]
        return table.get(step.program, default)
