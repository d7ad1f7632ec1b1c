"""
L3 Detection — System facts.

Read-only probes for the values recipes interpolate into repository
lines and download URLs. Resolved lazily, once per run.
"""

from __future__ import annotations

import logging

from setup_coding.adapters.base import ProcessAdapter
from setup_coding.core.models.facts import SystemFacts
from setup_coding.core.models.step import InputSource, Pipeline, Step
from setup_coding.core.services.provision.domain.errors import DecodeError, FactError

logger = logging.getLogger(__name__)

# field → probe command
FACT_PROBES: dict[str, tuple[str, ...]] = {
    "architecture":    ("dpkg", "--print-architecture"),
    "kernel_name":     ("uname", "-s"),
    "hardware_name":   ("uname", "-m"),
    "distro_codename": ("lsb_release", "-cs"),
}


def probe_pipeline(fact: str) -> Pipeline:
    """The one-step pipeline that reads ``fact``."""
    program, *args = FACT_PROBES[fact]
    return Pipeline(
        name=f"fact:{fact}",
        steps=[
            Step(
                program=program,
                args=tuple(args),
                input_source=InputSource.NONE,
                captures_output=True,
                label=fact,
            ),
        ],
    )


def decode_output(raw: bytes) -> str:
    """Strict UTF-8 decode with surrounding whitespace trimmed."""
    try:
        return raw.decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise DecodeError(str(e)) from e


class FactResolver:
    """Runs the fact probes through an adapter and memoizes the result.

    There is no partial mode: if any probe fails, ``resolve()`` raises
    FactError and nothing is cached.
    """

    def __init__(self, adapter: ProcessAdapter):
        self._adapter = adapter
        self._facts: SystemFacts | None = None

    @property
    def resolved(self) -> bool:
        return self._facts is not None

    def resolve(self) -> SystemFacts:
        if self._facts is not None:
            return self._facts

        values: dict[str, str] = {}
        for fact in FACT_PROBES:
            logger.info("getting %s", fact.replace("_", " "))
            values[fact] = self._probe(fact)

        self._facts = SystemFacts(**values)
        logger.debug("System facts: %s", self._facts.model_dump())
        return self._facts

    def _probe(self, fact: str) -> str:
        outcome = self._adapter.run_pipeline(probe_pipeline(fact)).outcomes[0]

        if not outcome.ok:
            raise FactError(fact, f"{outcome.step.display}: {outcome.error}")

        try:
            value = decode_output(outcome.captured or b"")
        except DecodeError as e:
            raise FactError(fact, f"output is not valid text ({e})") from e

        if not value:
            raise FactError(fact, f"{outcome.step.display} printed nothing")
        return value
