"""CLI entry point for the tier harness."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from tier_harness.definition_loader import load_suite_definition
from tier_harness.models.definition import TIER_ORDER, ClientSpec, SuiteDefinition, Tier
from tier_harness.models.result import TierReport
from tier_harness.orchestrator import TierOrchestrator
from tier_harness.report import STATUS_SYMBOLS, format_output, format_report

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_ABORTED = 2


def log_results_summary(log: logging.Logger, reports: Sequence[TierReport]) -> None:
    """Log a formatted summary of tier results."""
    log.info("=" * 80)
    log.info("Tier Results Summary:")
    log.info("=" * 80)

    for report in reports:
        if report.state == "aborted":
            log.info("%s %s: aborted", STATUS_SYMBOLS["error"], report.tier)
            log.info("  Reason: %s", report.abort_reason)
            continue

        for outcome in report.outcomes:
            symbol = STATUS_SYMBOLS.get(outcome.status, "?")
            log.info(
                "%s %s/%s: %s (%.2fms)",
                symbol,
                report.tier,
                outcome.name,
                outcome.status,
                outcome.elapsed_ms,
            )
            if outcome.message:
                log.info("  Message: %s", outcome.message)


def select_tiers(tier: str) -> Sequence[Tier]:
    """Map the --tier argument to the tiers to run."""
    if tier == "all":
        return TIER_ORDER
    return [t for t in TIER_ORDER if t == tier]


def override_base_url(suite: SuiteDefinition, base_url: str) -> SuiteDefinition:
    """Point the acceptance tier's http client at another server."""
    spec = suite.clients.get("acceptance")
    if spec is None:
        spec = ClientSpec(provider="http")
    elif spec.provider != "http":
        raise ValueError(
            f"--base-url needs an http acceptance client, got '{spec.provider}'"
        )

    config = {**spec.config, "base_url": base_url}
    clients = {**suite.clients, "acceptance": spec.model_copy(update={"config": config})}
    return suite.model_copy(update={"clients": clients})


def exit_code_for(reports: Sequence[TierReport]) -> int:
    """Aborted tiers win over failing cases."""
    if any(report.state == "aborted" for report in reports):
        return EXIT_ABORTED
    if any(report.fail_count for report in reports):
        return EXIT_FAILURES
    return EXIT_OK


async def run(
    suite_path: Path,
    tier: str = "all",
    base_url: str | None = None,
    stop_on_first_failure: bool = False,
    ready_timeout: float = 30,
    parallel: bool = False,
    json_output: bool = False,
) -> int:
    """Run the selected tiers of a suite and return exit code."""
    log = logging.getLogger("tier_harness")

    log.info("Loading suite: %s", suite_path)
    try:
        suite = await load_suite_definition(suite_path)
        if base_url:
            suite = override_base_url(suite, base_url)
    except (FileNotFoundError, ValueError) as exc:
        log.error("Cannot load suite: %s", exc)
        return EXIT_ABORTED

    tiers = select_tiers(tier)
    log.info("Running tier(s): %s", ", ".join(tiers))

    orchestrator = TierOrchestrator(
        stop_on_first_failure=stop_on_first_failure,
        ready_timeout=ready_timeout,
        parallel=parallel,
    )
    reports = await orchestrator.run_tiers(suite, tiers)

    log_results_summary(log, reports)

    if json_output:
        print(json.dumps(format_output(reports), indent=2))
    else:
        print(format_report(reports))

    return exit_code_for(reports)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run endpoint smoke tests grouped by tier"
    )
    parser.add_argument(
        "--suite",
        type=Path,
        required=True,
        help="Path to the suite definition (YAML)",
    )
    parser.add_argument(
        "--tier",
        choices=[*TIER_ORDER, "all"],
        default="all",
        help="Tier to run",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Base URL of the server under test for the acceptance tier",
    )
    parser.add_argument(
        "--stop-on-first-failure",
        action="store_true",
        help="Stop a case at its first failed expectation",
    )
    parser.add_argument(
        "--ready-timeout",
        type=float,
        default=30,
        help="Seconds to wait for the server under test to become ready",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Run tiers concurrently",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            suite_path=args.suite,
            tier=args.tier,
            base_url=args.base_url,
            stop_on_first_failure=args.stop_on_first_failure,
            ready_timeout=args.ready_timeout,
            parallel=args.parallel,
            json_output=args.json,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
