"""
L2 Resolver — ``__init__.py`` re-exports all resolver functions.

These functions turn config and recipes into concrete pipelines.
They never execute anything.
"""

from setup_coding.core.services.provision.resolver.plan_resolution import (  # noqa: F401
    build_pipeline,
    get_recipe,
)
from setup_coding.core.services.provision.resolver.requests import (  # noqa: F401
    UPDATE_ORDER,
    build_requests,
)
