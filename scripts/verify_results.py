#!/usr/bin/env python3
"""
Verify IRV results across many seeds against PyRankVote and round invariants.
"""

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from analysis.election import run_simulation  # noqa: E402
from analysis.verification import ResultsVerifier  # noqa: E402
from data.scenario import DEFAULT_SCENARIO, PRESETS, get_preset  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Verify IRV results across seeds")
    parser.add_argument(
        "--preset", help="Preset scenario to verify (default: all presets)"
    )
    parser.add_argument(
        "--seeds", type=int, default=20, help="Number of seeds per scenario (default: 20)"
    )
    parser.add_argument(
        "--voters", type=int, default=500, help="Voters per run (default: 500)"
    )
    parser.add_argument("--export", help="Export verification report to CSV file")

    args = parser.parse_args()

    try:
        scenarios = [get_preset(args.preset)] if args.preset else [DEFAULT_SCENARIO, *PRESETS]
    except KeyError as e:
        logger.error(str(e))
        sys.exit(1)

    verifier = ResultsVerifier()
    reports = []
    for scenario in scenarios:
        logger.info(f"=== Verifying '{scenario.name}' over {args.seeds} seeds ===")
        for seed in range(1, args.seeds + 1):
            run = run_simulation(scenario.clusters, scenario.candidates, args.voters, seed)
            report = verifier.verify_run(run)
            report["scenario"] = scenario.name
            reports.append(report)

    frame = pd.DataFrame(reports)
    failed = frame[~frame["passed"]]
    skipped = frame["pyrankvote_match"].isna().sum()

    print(f"\nRuns verified: {len(frame)}")
    print(f"PyRankVote comparisons skipped (ties): {skipped}")
    print(f"Failures: {len(failed)}")
    for _, row in failed.iterrows():
        print(f"  {row['scenario']} seed {row['seed']}: {'; '.join(row['issues'])}")

    if args.export:
        frame.to_csv(args.export, index=False)
        print(f"\n✓ Verification report exported to: {args.export}")

    if failed.empty:
        print("\n🎉 Verification PASSED!")
        sys.exit(0)
    print("\n⚠️  Verification FAILED - see details above")
    sys.exit(1)


if __name__ == "__main__":
    main()
