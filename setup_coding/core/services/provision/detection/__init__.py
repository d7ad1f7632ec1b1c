"""
L3 Detection — ``__init__.py`` re-exports all detection probes.

These READ system state but never WRITE.
"""

from setup_coding.core.services.provision.detection.facts import (  # noqa: F401
    FACT_PROBES,
    FactResolver,
    decode_output,
    probe_pipeline,
)
from setup_coding.core.services.provision.detection.presence import (  # noqa: F401
    PresenceChecker,
    version_probe,
)
