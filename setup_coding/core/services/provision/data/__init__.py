"""
L0 Data — ``__init__.py`` re-exports the recipe table.

Pure data and pure builders. Nothing here touches the system.
"""

from setup_coding.core.services.provision.data.recipes import (  # noqa: F401
    DEFAULT_DOCKER_COMPOSE_VERSION,
    KNOWN_TOOLS,
    RECIPES,
    Recipe,
)
