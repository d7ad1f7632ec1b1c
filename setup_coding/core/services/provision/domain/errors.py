"""
L1 Domain — Provisioning error taxonomy.

Only ``FactError`` escapes the engine; every other failure is recorded
on a StepOutcome or ItemResult and reported at the end of the run.
"""

from __future__ import annotations


class ProvisionError(Exception):
    """Base class for provisioning errors."""


class DecodeError(ProvisionError):
    """Captured output is not valid UTF-8 text."""


class FactError(ProvisionError):
    """A system fact probe failed. Fatal to the run."""

    def __init__(self, probe: str, cause: str):
        self.probe = probe
        self.cause = cause
        super().__init__(f"could not resolve {probe}: {cause}")


class RecipeError(ProvisionError):
    """No recipe for a request, or a recipe could not be built."""
