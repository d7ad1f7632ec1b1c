"""
Domain models — Pydantic types for setup-coding.

All models are re-exported here for convenient access:

    from setup_coding.core.models import TargetEnvironment, Step, Pipeline, PlanReport
"""

from setup_coding.core.models.environment import (
    Keys,
    SshKey,
    TargetEnvironment,
    ToolOptions,
    Updates,
)
from setup_coding.core.models.facts import SystemFacts
from setup_coding.core.models.report import ItemResult, PlanReport
from setup_coding.core.models.request import (
    ProvisionRequest,
    SshKeyRequest,
    SystemUpdateRequest,
    ToolRequest,
)
from setup_coding.core.models.step import (
    ErrorKind,
    InputSource,
    Pipeline,
    PipelineOutcome,
    Step,
    StepOutcome,
)

__all__ = [
    "ErrorKind",
    "InputSource",
    "ItemResult",
    "Keys",
    "Pipeline",
    "PipelineOutcome",
    "PlanReport",
    "ProvisionRequest",
    "SshKey",
    "SshKeyRequest",
    "Step",
    "StepOutcome",
    "SystemFacts",
    "SystemUpdateRequest",
    "TargetEnvironment",
    "ToolOptions",
    "ToolRequest",
    "Updates",
]
