"""
L5 Orchestration — ``__init__.py`` re-exports top-level coordinators.

These are the entry points that external code calls.
"""

from setup_coding.core.services.provision.orchestration.plan_runner import (  # noqa: F401
    PlanRunner,
)
