"""
L5 Orchestration — Plan runner.

Walks the provision requests in order, gates each one with a presence
check, resolves system facts the first time a recipe needs them,
builds the recipe's pipeline and runs it through the process adapter.

Failure policy:
    - one item failing never stops the run; it is recorded and the
      next item is attempted
    - a FactError stops the run immediately: no recipe that needs facts
      can be built, so the remaining items are reported as aborted
"""

from __future__ import annotations

import logging

from setup_coding.adapters.base import ProcessAdapter
from setup_coding.core.models.report import ItemResult, PlanReport
from setup_coding.core.models.request import SshKeyRequest, SystemUpdateRequest, ToolRequest
from setup_coding.core.services.provision.data.recipes import RECIPES, Recipe
from setup_coding.core.services.provision.detection.facts import FactResolver
from setup_coding.core.services.provision.detection.presence import PresenceChecker
from setup_coding.core.services.provision.domain.errors import FactError, RecipeError
from setup_coding.core.services.provision.resolver.plan_resolution import (
    build_pipeline,
    get_recipe,
)

logger = logging.getLogger(__name__)

Request = SystemUpdateRequest | ToolRequest | SshKeyRequest


class PlanRunner:
    """Single best-effort pass over a list of provision requests.

    Args:
        adapter: Runs every process (probes and recipes alike).
        facts: Fact resolver (default: one over ``adapter``).
        presence: Presence checker (default: one over ``adapter``).
        recipes: Recipe table (default: ``RECIPES``).
        dry_run: Check presence and build pipelines, but don't run them.
    """

    def __init__(
        self,
        adapter: ProcessAdapter,
        *,
        facts: FactResolver | None = None,
        presence: PresenceChecker | None = None,
        recipes: dict[str, Recipe] | None = None,
        dry_run: bool = False,
    ):
        self._adapter = adapter
        self._facts = facts or FactResolver(adapter)
        self._presence = presence or PresenceChecker(adapter)
        self._recipes = RECIPES if recipes is None else recipes
        self._dry_run = dry_run

    def execute(self, requests: list[Request]) -> PlanReport:
        report = PlanReport(dry_run=self._dry_run)

        for index, request in enumerate(requests):
            try:
                result = self._provision(request)
            except FactError as e:
                logger.error("Aborting: %s", e)
                report.fatal = str(e)
                report.results.extend(
                    ItemResult(request=r, status="aborted", detail="system facts unavailable")
                    for r in requests[index:]
                )
                break

            report.results.append(result)
            self._log_result(result)

        return report

    def _provision(self, request: Request) -> ItemResult:
        if not isinstance(request, SystemUpdateRequest) and self._presence.is_present(request):
            return ItemResult(request=request, status="present")

        try:
            recipe = get_recipe(request, self._recipes)
            facts = self._facts.resolve() if recipe.needs_facts else None
            pipeline = build_pipeline(request, facts, self._recipes)
        except RecipeError as e:
            return ItemResult(request=request, status="failed", detail=str(e))

        if self._dry_run:
            return ItemResult(request=request, status="planned", pipeline=pipeline)

        logger.info("provisioning %s", request.identity)
        outcome = self._adapter.run_pipeline(pipeline)

        if not outcome.ok:
            return ItemResult(request=request, status="failed", outcome=outcome, pipeline=pipeline)

        done = "updated" if isinstance(request, SystemUpdateRequest) else "installed"
        return ItemResult(request=request, status=done, outcome=outcome, pipeline=pipeline)

    @staticmethod
    def _log_result(result: ItemResult) -> None:
        marker = {"failed": "✗", "present": "⊘", "planned": "…"}.get(result.status, "✓")
        if result.status == "failed":
            logger.warning("%s %s → failed: %s", marker, result.request.identity,
                           result.failure_summary)
        else:
            logger.info("%s %s → %s", marker, result.request.identity, result.status)
