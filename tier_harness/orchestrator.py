"""Tier orchestrator coordinating runs across tiers."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from tier_harness.clients.loading import load_client_manifest
from tier_harness.errors import SetupAbort
from tier_harness.models.definition import TIER_ORDER, SuiteDefinition, Tier
from tier_harness.models.result import TierReport
from tier_harness.runner import TestTierRunner
from tier_harness.suite import build_cases

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class TierOrchestrator:
    """Runs the selected tiers of a suite, each with its own client."""

    stop_on_first_failure: bool = False
    ready_timeout: float = 30
    ready_poll_interval: float = 0.5
    parallel: bool = False

    async def run_tiers(
        self,
        suite: SuiteDefinition,
        tiers: Sequence[Tier] = TIER_ORDER,
    ) -> Sequence[TierReport]:
        """Run the selected tiers of a suite.

        Args:
            suite: Suite definition with clients and cases
            tiers: Tiers to run

        Returns:
            One report per selected tier, in unit, integration, acceptance order

        """
        selected = [tier for tier in TIER_ORDER if tier in tiers]
        if not selected:
            log.info("No tiers selected")
            return []

        results: list[TierReport | BaseException] = []
        if self.parallel:
            log.info("Running %d tier(s) in parallel...", len(selected))
            results.extend(
                await asyncio.gather(
                    *(self._run_tier(suite, tier) for tier in selected),
                    return_exceptions=True,
                )
            )
        else:
            for tier in selected:
                try:
                    results.append(await self._run_tier(suite, tier))
                except Exception as exc:
                    results.append(exc)

        return self._process_results(selected, results)

    def _process_results(
        self,
        tiers: Sequence[Tier],
        results: Sequence[TierReport | BaseException],
    ) -> Sequence[TierReport]:
        """Turn tier exceptions into aborted reports."""
        final_results: list[TierReport] = []

        for tier, result in zip(tiers, results, strict=True):
            if isinstance(result, TierReport):
                final_results.append(result)
            elif isinstance(result, Exception):
                log.error("Tier %s failed: %s", tier, result, exc_info=result)
                final_results.append(
                    TierReport(tier=tier, state="aborted", abort_reason=str(result))
                )
            else:
                raise result

        return final_results

    async def _run_tier(self, suite: SuiteDefinition, tier: Tier) -> TierReport:
        """Open the tier's client and run its cases."""
        try:
            cases = build_cases(suite, tier)
        except (ImportError, ValueError) as exc:
            return self._aborted(tier, f"cannot build cases: {exc}")

        if not cases:
            log.info("No cases for %s tier", tier)
            return TierReport(tier=tier, state="completed")

        spec = suite.clients.get(tier)
        if spec is None:
            return self._aborted(tier, "no client configured")

        manifest = load_client_manifest(spec.provider)
        if tier == "acceptance" and not manifest.full_stack:
            return self._aborted(
                tier,
                f"client '{spec.provider}' does not exercise the full stack",
            )

        config = manifest.config_cls(**spec.config)
        log.info("Opening %s client for %s tier", spec.provider, tier)

        try:
            async with manifest.client_factory(config) as client:
                runner = TestTierRunner(
                    tier=tier,
                    client=client,
                    stop_on_first_failure=self.stop_on_first_failure,
                    ready_timeout=self.ready_timeout,
                    ready_poll_interval=self.ready_poll_interval,
                )
                return await runner.run(cases)
        except SetupAbort as exc:
            return self._aborted(tier, exc.reason)

    def _aborted(self, tier: Tier, reason: str) -> TierReport:
        log.error("Aborting %s tier: %s", tier, reason)
        return TierReport(tier=tier, state="aborted", abort_reason=reason)
