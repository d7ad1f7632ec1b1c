"""
Adapter base — the protocol contract between engine and processes.

The engine only talks to the operating system through this protocol.
Detection probes and install recipes alike are handed to an adapter as
a Pipeline; the adapter returns a PipelineOutcome.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from setup_coding.core.models.step import Pipeline, PipelineOutcome


class ProcessAdapter(ABC):
    """Abstract base class for process adapters.

    Adapters perform external side effects and return outcomes.
    They NEVER raise for step-level failures — spawn, wait and exit
    errors are captured in the StepOutcome of the failing step.

    Implementations:
        SubprocessAdapter   — real processes (``subprocess.Popen``)
        MockProcessAdapter  — in-memory fake for tests
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'subprocess', 'mock')."""

    @abstractmethod
    def run_pipeline(self, pipeline: Pipeline) -> PipelineOutcome:
        """Run every step of the pipeline in order.

        Contract:
            - One StepOutcome per step, in pipeline order.
            - A pipe-fed step whose producer did not spawn is skipped.
            - Every spawned child has been waited on when this returns.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
