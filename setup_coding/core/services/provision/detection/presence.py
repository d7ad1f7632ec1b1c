"""
L3 Detection — Presence checks.

Answers "is this item already there?" so the plan runner only installs
what is missing. Never raises: a check that cannot complete reports
the item as absent, and the install recipe runs.
"""

from __future__ import annotations

import logging
from pathlib import Path

from setup_coding.adapters.base import ProcessAdapter
from setup_coding.core.models.request import SshKeyRequest, SystemUpdateRequest, ToolRequest
from setup_coding.core.models.step import InputSource, Pipeline, Step

logger = logging.getLogger(__name__)


def version_probe(tool: str) -> Pipeline:
    """``<tool> --version`` with stdin closed and output captured."""
    return Pipeline(
        name=f"presence:{tool}",
        steps=[
            Step(
                program=tool,
                args=("--version",),
                input_source=InputSource.NONE,
                captures_output=True,
                label="version check",
            ),
        ],
    )


class PresenceChecker:
    """Presence probes for tools and filesystem-backed resources."""

    def __init__(self, adapter: ProcessAdapter):
        self._adapter = adapter

    def is_present(self, request: SystemUpdateRequest | ToolRequest | SshKeyRequest) -> bool:
        if isinstance(request, ToolRequest):
            return self.tool_present(request.name)
        if isinstance(request, SshKeyRequest):
            return self.directory_present(request.key_dir)
        # updates are repeatable by nature
        return False

    def tool_present(self, tool: str) -> bool:
        """A tool is present when ``--version`` could be run to completion.

        The exit code is ignored. Some tools exit non-zero
        from ``--version`` while installed.
        """
        logger.info("checking for tool: %s", tool)
        try:
            outcome = self._adapter.run_pipeline(version_probe(tool)).outcomes[0]
        except Exception as e:
            logger.warning("presence check for %s failed: %s", tool, e)
            return False

        if not (outcome.spawn_succeeded and outcome.waited):
            logger.info("tool not found: %s (%s)", tool, outcome.error)
            return False

        if outcome.captured_text:
            logger.debug("%s --version: %s", tool, outcome.captured_text.strip())
        logger.info("found tool: %s (exit %s)", tool, outcome.exit_code)
        return True

    def directory_present(self, path: str) -> bool:
        logger.info("checking for folder: %s", path)
        try:
            found = Path(path).expanduser().resolve().is_dir()
        except (OSError, RuntimeError) as e:
            logger.warning("error trying to check folder %s: %s", path, e)
            return False
        logger.info("folder %s: %s", "found" if found else "not found", path)
        return found
