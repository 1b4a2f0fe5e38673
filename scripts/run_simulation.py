#!/usr/bin/env python3
"""
Run a spatial election simulation and print every rule's outcome.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from analysis.election import results_summary, run_simulation  # noqa: E402
from analysis.irv import round_summary  # noqa: E402
from data.scenario import (  # noqa: E402
    DEFAULT_SCENARIO,
    PRESETS,
    get_preset,
    load_scenario,
    save_scenario,
)
from sim.models import MAX_VOTERS, clamp_voter_count  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Run a spatial election simulation")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--scenario", help="Path to scenario JSON file")
    source.add_argument(
        "--preset",
        help=f"Preset scenario name ({', '.join(p.name for p in PRESETS)})",
    )
    parser.add_argument(
        "--voters",
        type=int,
        default=1200,
        help=f"Number of voters (default: 1200, at most {MAX_VOTERS})",
    )
    parser.add_argument(
        "--seed", type=int, help="Generator seed (default: scenario seed, else 42)"
    )
    parser.add_argument(
        "--approval-k",
        type=int,
        default=2,
        help="Approvals per ballot for approval voting (default: 2)",
    )
    parser.add_argument("--export", help="Export results to CSV file")
    parser.add_argument("--save-scenario", help="Write the scenario used to JSON")

    args = parser.parse_args()

    try:
        if args.scenario:
            if not Path(args.scenario).exists():
                logger.error(f"Scenario file not found: {args.scenario}")
                sys.exit(1)
            scenario = load_scenario(args.scenario)
        elif args.preset:
            scenario = get_preset(args.preset)
        else:
            scenario = DEFAULT_SCENARIO

        seed = args.seed
        if seed is None:
            seed = scenario.seed if scenario.seed is not None else 42

        n_voters = clamp_voter_count(args.voters)
        logger.info(f"=== Simulating '{scenario.name}' ({n_voters} voters, seed {seed}) ===")
        run = run_simulation(
            scenario.clusters, scenario.candidates, n_voters, seed, args.approval_k
        )
        results = run.results

        if not results.candidate_ids:
            print("\nNo candidates in scenario; nothing to tabulate.")
            sys.exit(0)

        print("\n=== Rule Results ===")
        summary = results_summary(results)
        for _, row in summary.iterrows():
            print(
                f"  {row['candidate_id']:6s}: plurality {row['plurality_votes']:6d}  "
                f"approval {row['approval_votes']:6d}  pairwise wins {row['pairwise_wins']:2d}"
            )

        print(f"\nPlurality winner(s): {', '.join(results.plurality.winners) or '-'}")
        print(
            f"Approval (top {results.approval.top_k}) winner(s): "
            f"{', '.join(results.approval.winners) or '-'}"
        )
        print(f"Condorcet winner: {results.condorcet.winner or 'none (tie or cycle)'}")

        if results.irv is not None:
            print("\n=== IRV Round-by-Round ===")
            for round_obj in results.irv.rounds:
                print(f"\nRound {round_obj.round_number}:")
                for cid, votes in sorted(
                    round_obj.tally.items(), key=lambda item: (-item[1], item[0])
                ):
                    marker = "❌" if cid == round_obj.eliminated else "  "
                    print(f"  {marker} {cid:6s}: {votes:6d} votes")
            print(f"\nIRV winner: {results.irv.winner}")

        if args.export:
            export_path = Path(args.export)
            summary.to_csv(export_path.with_suffix(".csv"), index=False)
            print(f"\n✓ Results exported to: {export_path.with_suffix('.csv')}")

            if results.irv is not None:
                rounds_path = export_path.with_stem(export_path.stem + "_rounds").with_suffix(".csv")
                round_summary(results.irv).to_csv(rounds_path, index=False)
                print(f"✓ IRV rounds exported to: {rounds_path}")

        if args.save_scenario:
            save_scenario(scenario, args.save_scenario)
            print(f"✓ Scenario saved to: {args.save_scenario}")

    except (KeyError, ValueError) as e:
        logger.error(f"Error running simulation: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
