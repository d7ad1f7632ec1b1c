"""
Subprocess adapter — run pipelines of real processes.

This is the SINGLE PLACE where processes are spawned for provisioning.
Steps joined by ``InputSource.PIPE`` are spawned together as a chain,
each one's stdout wired straight into the next one's stdin (shell
``A | B`` semantics, nothing is buffered in between), and only then
waited on.
"""

from __future__ import annotations

import logging
import subprocess
from typing import IO, Any

from setup_coding.adapters.base import ProcessAdapter
from setup_coding.core.models.step import (
    InputSource,
    Pipeline,
    PipelineOutcome,
    Step,
    StepOutcome,
)

logger = logging.getLogger(__name__)

# stdin for the first step of a chain
_STDIN: dict[InputSource, Any] = {
    InputSource.NONE: subprocess.DEVNULL,
    InputSource.INHERIT: None,
}


def split_chains(pipeline: Pipeline) -> list[list[Step]]:
    """Group steps into chains of pipe-connected processes.

    ``[curl, gpg(pipe), echo, tee(pipe), apt]`` →
    ``[[curl, gpg], [echo, tee], [apt]]``
    """
    chains: list[list[Step]] = []
    for step in pipeline.steps:
        if step.input_source == InputSource.PIPE and chains:
            chains[-1].append(step)
        else:
            chains.append([step])
    return chains


class SubprocessAdapter(ProcessAdapter):
    """Run pipelines with ``subprocess.Popen``.

    Failure policy:
        - spawn failure   → step ``failed`` (SpawnError), later steps of
          the same chain ``skipped`` (missing upstream input)
        - wait failure    → step ``failed`` (WaitError)
        - non-zero exit   → step ``failed`` (StepFailure)
        - the next chain always runs
    """

    @property
    def name(self) -> str:
        return "subprocess"

    def run_pipeline(self, pipeline: Pipeline) -> PipelineOutcome:
        logger.debug("Running pipeline '%s' (%d steps)", pipeline.name, len(pipeline.steps))
        outcomes: list[StepOutcome] = []
        for chain in split_chains(pipeline):
            outcomes.extend(self._run_chain(chain))
        return PipelineOutcome(pipeline=pipeline, outcomes=outcomes)

    def _run_chain(self, steps: list[Step]) -> list[StepOutcome]:
        results: list[StepOutcome | None] = [None] * len(steps)
        spawned: list[tuple[int, subprocess.Popen]] = []
        try:
            self._spawn_chain(steps, results, spawned)
        finally:
            # Reap last-to-first: a capturing tail is drained before its
            # producers are waited on, so no one blocks on a full pipe.
            for i, proc in reversed(spawned):
                results[i] = self._reap(steps[i], proc, is_tail=i == len(steps) - 1)

        return [r for r in results if r is not None]

    def _spawn_chain(
        self,
        steps: list[Step],
        results: list[StepOutcome | None],
        spawned: list[tuple[int, subprocess.Popen]],
    ) -> None:
        upstream: IO[bytes] | None = None

        for i, step in enumerate(steps):
            stdin = _STDIN[step.input_source] if i == 0 else upstream
            upstream = None

            if i > 0 and stdin is None:
                logger.warning("Skipping '%s': missing upstream input", step.name)
                results[i] = StepOutcome.upstream_missing(step)
                continue

            logger.info("▶ %s", step.display)
            try:
                proc = subprocess.Popen(
                    step.argv,
                    stdin=stdin,
                    stdout=subprocess.PIPE if step.captures_output else None,
                )
            except (OSError, ValueError) as e:
                logger.warning("Could not start '%s' (%s): %s", step.name, step.program, e)
                results[i] = StepOutcome.spawn_failed(step, str(e))
            else:
                spawned.append((i, proc))
                if i + 1 < len(steps):
                    upstream = proc.stdout
            finally:
                # The child holds its own copy of the pipe now.
                if i > 0 and stdin is not None:
                    stdin.close()

    def _reap(self, step: Step, proc: subprocess.Popen, *, is_tail: bool) -> StepOutcome:
        try:
            if step.captures_output and is_tail:
                captured, _ = proc.communicate()
            else:
                proc.wait()
                captured = None
        except OSError as e:
            logger.warning("Could not wait for '%s' (%s): %s", step.name, step.program, e)
            return StepOutcome.wait_failed(step, str(e))

        if captured is not None:
            logger.debug("%s output: %r", step.name, captured[-2000:])

        outcome = StepOutcome.finished(step, proc.returncode, captured)
        if outcome.ok:
            logger.debug("✓ %s", step.name)
        else:
            logger.warning("✗ %s (%s) %s", step.name, step.program, outcome.error)
        return outcome
