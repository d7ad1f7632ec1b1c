"""
L1 Domain — ``__init__.py`` re-exports the error taxonomy.
"""

from setup_coding.core.services.provision.domain.errors import (  # noqa: F401
    DecodeError,
    FactError,
    ProvisionError,
    RecipeError,
)
