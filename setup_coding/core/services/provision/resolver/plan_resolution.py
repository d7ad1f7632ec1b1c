"""
L2 Resolver — Pipeline resolution.

Turns a provision request plus resolved system facts into a concrete,
validated Pipeline by looking up its recipe. Nothing is executed here.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from setup_coding.core.models.facts import SystemFacts
from setup_coding.core.models.request import SshKeyRequest, SystemUpdateRequest, ToolRequest
from setup_coding.core.models.step import Pipeline
from setup_coding.core.services.provision.data.recipes import RECIPES, Recipe
from setup_coding.core.services.provision.domain.errors import RecipeError

logger = logging.getLogger(__name__)


def get_recipe(
    request: SystemUpdateRequest | ToolRequest | SshKeyRequest,
    recipes: dict[str, Recipe] | None = None,
) -> Recipe:
    """Look up the recipe for a request.

    Raises:
        RecipeError: No recipe is registered under the request's key.
    """
    table = RECIPES if recipes is None else recipes
    recipe = table.get(request.recipe_key)
    if recipe is None:
        raise RecipeError(f"No recipe for '{request.identity}'")
    return recipe


def build_pipeline(
    request: SystemUpdateRequest | ToolRequest | SshKeyRequest,
    facts: SystemFacts | None = None,
    recipes: dict[str, Recipe] | None = None,
) -> Pipeline:
    """Instantiate the pipeline for ``request``.

    Args:
        request: What to provision.
        facts: Resolved system facts. Required by recipes that declare
            ``needs_facts``; ignored by the others.
        recipes: Recipe table override (defaults to ``RECIPES``).

    Raises:
        RecipeError: Unknown item, missing facts, or a recipe that
            produced invalid pipe wiring.
    """
    recipe = get_recipe(request, recipes)
    if recipe.needs_facts and facts is None:
        raise RecipeError(f"Recipe '{recipe.key}' needs system facts")

    steps = recipe.build(facts, request)
    if not steps:
        raise RecipeError(f"Recipe '{recipe.key}' produced no steps")

    try:
        pipeline = Pipeline(name=recipe.key, steps=steps)
    except ValidationError as e:
        raise RecipeError(f"Recipe '{recipe.key}' is miswired: {e}") from e

    logger.debug("Resolved %s → %d steps", recipe.key, len(pipeline.steps))
    return pipeline
