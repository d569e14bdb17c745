"""JobRisk - AI automation risk research

Simple CLI for running one aggregation.
"""

import argparse
import asyncio
import json
import sys

from app.errors import AggregationFailedError, InvalidJobError
from app.services.aggregator import ResearchAggregator, fallback_results


async def run_analysis(job: str, as_json: bool = False) -> int:
    """Aggregate research for the given job title and print the report."""
    try:
        aggregator = ResearchAggregator.from_settings()
        report = await aggregator.analyze(job)
    except InvalidJobError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 2
    except AggregationFailedError as e:
        print(f"[!] {e}", file=sys.stderr)
        print("\nTry these instead:")
        for link in fallback_results():
            print(f"  - {link['title']}: {link['url']}")
        return 1

    if as_json:
        print(json.dumps(report.to_dict(), indent=2))
        return 0

    summary = report.summary
    print(f"Job: {report.job}")
    print("-" * 50)
    print(f"Risk level: {summary.risk_level.value}")
    print(f"Timeline:   {summary.timeline.value}")
    if summary.key_factors:
        print("Key factors:")
        for factor in summary.key_factors:
            print(f"  - {factor}")

    print(f"\n[*] Sources ({len(report.results)}):")
    for i, result in enumerate(report.results, 1):
        print(f"  {i}. [{result.relevance_score:.1f}] {result.title}")
        print(f"     {result.url} ({result.source or 'unknown'})")
    return 0


def main():
    parser = argparse.ArgumentParser(description="JobRisk automation research")
    parser.add_argument("--job", "-j", required=True, help="Job title to research")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    args = parser.parse_args()

    sys.exit(asyncio.run(run_analysis(args.job, args.json)))


if __name__ == "__main__":
    main()
