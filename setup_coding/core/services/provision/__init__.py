"""
Provisioning service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → domain → resolver → detection →
orchestration). Process execution itself lives in the adapters.

    from setup_coding.core.services.provision import PlanRunner, build_requests
"""

# ── L0: Data ──
from setup_coding.core.services.provision.data.recipes import (  # noqa: F401
    KNOWN_TOOLS,
    RECIPES,
    Recipe,
)

# ── L1: Domain ──
from setup_coding.core.services.provision.domain.errors import (  # noqa: F401
    DecodeError,
    FactError,
    ProvisionError,
    RecipeError,
)

# ── L2: Resolver ──
from setup_coding.core.services.provision.resolver.plan_resolution import (  # noqa: F401
    build_pipeline,
    get_recipe,
)
from setup_coding.core.services.provision.resolver.requests import (  # noqa: F401
    build_requests,
)

# ── L3: Detection ──
from setup_coding.core.services.provision.detection.facts import FactResolver  # noqa: F401
from setup_coding.core.services.provision.detection.presence import (  # noqa: F401
    PresenceChecker,
)

# ── L5: Orchestration ──
from setup_coding.core.services.provision.orchestration.plan_runner import (  # noqa: F401
    PlanRunner,
)
