"""Rendering of tier reports."""

from collections.abc import Sequence
from typing import Any

from tier_harness.models.definition import TIER_ORDER
from tier_harness.models.result import TierReport

STATUS_SYMBOLS = {
    "passed": "✓",
    "failed": "✗",
    "error": "!",
}


def ordered(reports: Sequence[TierReport]) -> Sequence[TierReport]:
    """Order reports unit, integration, acceptance."""
    return sorted(reports, key=lambda report: TIER_ORDER.index(report.tier))


def relative_costs(reports: Sequence[TierReport]) -> dict[str, float]:
    """Elapsed time of each completed tier relative to the cheapest one."""
    timed = {
        report.tier: report.total_elapsed_ms
        for report in reports
        if report.state == "completed" and report.total_elapsed_ms > 0
    }
    if not timed:
        return {}
    baseline = min(timed.values())
    return {tier: elapsed / baseline for tier, elapsed in timed.items()}


def format_report(reports: Sequence[TierReport]) -> str:
    """Render a human-readable summary of tier reports.

    Tiers always appear in unit, integration, acceptance order, whatever
    their elapsed time, so reports of different runs line up.
    """
    reports = ordered(reports)
    costs = relative_costs(reports)
    width = max((len(report.tier) for report in reports), default=0)

    lines = ["Tier report"]
    for report in reports:
        name = report.tier.ljust(width)
        if report.state == "aborted":
            lines.append(f"  {name}  ABORTED: {report.abort_reason}")
            continue

        cost = f"x{costs[report.tier]:.1f}" if report.tier in costs else "-"
        lines.append(
            f"  {name}  {report.pass_count} passed  {report.fail_count} failed"
            f"  {report.total_elapsed_ms:10.1f} ms  {cost}"
        )
        for outcome in report.outcomes:
            if outcome.passed:
                continue
            symbol = STATUS_SYMBOLS[outcome.status]
            lines.append(f"    {symbol} {outcome.name}: {outcome.message}")

    if "acceptance" in costs and max(costs, key=costs.__getitem__) != "acceptance":
        lines.append("note: acceptance tier is not the slowest tier")

    return "\n".join(lines)


def format_output(reports: Sequence[TierReport]) -> dict[str, Any]:
    """Format tier reports for JSON output."""
    tiers: list[dict[str, Any]] = []
    for report in ordered(reports):
        tiers.append(
            {
                "tier": report.tier,
                "state": report.state,
                "abort_reason": report.abort_reason,
                "passed": report.pass_count,
                "failed": report.fail_count,
                "errors": report.error_count,
                "elapsed_ms": report.total_elapsed_ms,
                "cases": [
                    {
                        "name": outcome.name,
                        "status": outcome.status,
                        "elapsed_ms": outcome.elapsed_ms,
                        "message": outcome.message,
                        "failures": [str(failure) for failure in outcome.failures],
                    }
                    for outcome in report.outcomes
                ],
            }
        )

    return {
        "total": sum(report.total_count for report in reports),
        "passed": sum(report.pass_count for report in reports),
        "failed": sum(report.fail_count for report in reports),
        "aborted": sum(1 for report in reports if report.state == "aborted"),
        "tiers": tiers,
    }
