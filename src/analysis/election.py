"""
Election pipeline orchestration.

Runs sampler -> ballot builder -> rule engines as one pure function of its
inputs. Every change to clusters, candidates, voter count, approval-k or seed
is handled by calling run_simulation again; nothing is cached between runs.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

try:
    from ..sim.models import (
        ApprovalResult,
        Ballot,
        Candidate,
        Cluster,
        CondorcetResult,
        RuleResults,
        TallyResult,
        Voter,
        clamp_approval_k,
    )
    from ..sim.rng import LcgRng
    from ..sim.sampling import sample_voters
    from .ballots import compute_ballots
    from .irv import instant_runoff
    from .rules import approval, condorcet, plurality
except ImportError:
    from analysis.ballots import compute_ballots
    from analysis.irv import instant_runoff
    from analysis.rules import approval, condorcet, plurality
    from sim.models import (
        ApprovalResult,
        Ballot,
        Candidate,
        Cluster,
        CondorcetResult,
        RuleResults,
        TallyResult,
        Voter,
        clamp_approval_k,
    )
    from sim.rng import LcgRng
    from sim.sampling import sample_voters

logger = logging.getLogger(__name__)

DEFAULT_APPROVAL_K = 2


def convert_numpy_types(obj: Any) -> Any:
    """Convert numpy types to native Python types for JSON serialization."""
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, dict):
        return {k: convert_numpy_types(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [convert_numpy_types(item) for item in obj]
    else:
        return obj


@dataclass(frozen=True)
class SimulationRun:
    """Everything one pipeline run produced, plus the inputs it ran on."""

    seed: int
    approval_k: int
    voters: Tuple[Voter, ...]
    ballots: Tuple[Ballot, ...]
    results: RuleResults

    def to_dict(self, include_voters: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "seed": self.seed,
            "approval_k": self.approval_k,
            "voter_count": len(self.voters),
            "results": results_to_dict(self.results),
        }
        if include_voters:
            data["voters"] = [{"x": v.x, "y": v.y} for v in self.voters]
            data["ballots"] = [list(b) for b in self.ballots]
        return data


def tabulate(
    ballots: Sequence[Ballot], candidate_ids: Sequence[str], approval_k: int
) -> RuleResults:
    """
    Run all four voting rules over one ballot set.

    Args:
        ballots: Ranked ballots
        candidate_ids: Candidates in display order
        approval_k: Requested approvals per ballot; bounded to the candidate count

    Returns:
        RuleResults for plurality, approval, Condorcet and IRV
    """
    ids = tuple(candidate_ids)
    top_k = clamp_approval_k(approval_k, len(ids))

    if not ids:
        logger.info("No candidates, returning empty results")
        return RuleResults(
            plurality=TallyResult(tally={}, winners=()),
            approval=ApprovalResult(tally={}, winners=(), top_k=top_k),
            condorcet=CondorcetResult(matrix={}, winner=None),
            irv=None,
            candidate_ids=ids,
        )

    irv_result = instant_runoff(ballots) if ballots else None
    return RuleResults(
        plurality=plurality(ballots),
        approval=approval(ballots, top_k),
        condorcet=condorcet(ballots, ids),
        irv=irv_result,
        candidate_ids=ids,
    )


def simulate_election(
    candidates: Sequence[Candidate],
    voters: Sequence[Voter],
    approval_k: int = DEFAULT_APPROVAL_K,
) -> RuleResults:
    """Build ballots once for ``voters`` and tabulate every rule."""
    ballots = compute_ballots(voters, candidates)
    return tabulate(ballots, [c.id for c in candidates], approval_k)


def run_simulation(
    clusters: Sequence[Cluster],
    candidates: Sequence[Candidate],
    n_voters: int,
    seed: int,
    approval_k: int = DEFAULT_APPROVAL_K,
) -> SimulationRun:
    """
    Run the full pipeline from a fresh generator.

    Args:
        clusters: Population model
        candidates: Candidates in display order
        n_voters: Number of voters to sample
        seed: Generator seed
        approval_k: Approvals per ballot

    Returns:
        SimulationRun with voters, ballots and rule results
    """
    rng = LcgRng(seed)
    voters = sample_voters(clusters, n_voters, rng)
    ballots = compute_ballots(voters, candidates)
    results = tabulate(ballots, [c.id for c in candidates], approval_k)

    logger.info(
        f"Simulated {len(voters)} voters, {len(candidates)} candidates (seed={seed}): "
        f"plurality={results.plurality.winners} approval={results.approval.winners} "
        f"condorcet={results.condorcet.winner} irv={results.irv.winner if results.irv else None}"
    )
    return SimulationRun(
        seed=seed,
        approval_k=results.approval.top_k,
        voters=tuple(voters),
        ballots=tuple(ballots),
        results=results,
    )


def results_to_dict(results: RuleResults) -> Dict[str, Any]:
    """Convert RuleResults into plain JSON-ready structures."""
    irv: Optional[Dict[str, Any]] = None
    if results.irv is not None:
        irv = {
            "winner": results.irv.winner,
            "rounds": [
                {
                    "round": r.round_number,
                    "tally": dict(r.tally),
                    "remaining": list(r.remaining),
                    "eliminated": r.eliminated,
                    "exhausted_ballots": r.exhausted_ballots,
                }
                for r in results.irv.rounds
            ],
        }
    return convert_numpy_types(
        {
            "candidate_ids": list(results.candidate_ids),
            "plurality": {
                "tally": dict(results.plurality.tally),
                "winners": list(results.plurality.winners),
            },
            "approval": {
                "tally": dict(results.approval.tally),
                "winners": list(results.approval.winners),
                "top_k": results.approval.top_k,
            },
            "condorcet": {
                "matrix": {a: dict(row) for a, row in results.condorcet.matrix.items()},
                "winner": results.condorcet.winner,
            },
            "irv": irv,
        }
    )


def results_summary(results: RuleResults) -> pd.DataFrame:
    """
    Get a per-candidate comparison of all rules as a DataFrame.

    Returns:
        DataFrame with vote counts, pairwise wins, IRV elimination round and
        winner flags, in candidate display order
    """
    if not results.candidate_ids:
        return pd.DataFrame()

    matrix = results.condorcet.matrix
    eliminated_in = {}
    if results.irv is not None:
        eliminated_in = {
            r.eliminated: r.round_number for r in results.irv.rounds if r.eliminated
        }

    rows = []
    for cid in results.candidate_ids:
        rows.append(
            {
                "candidate_id": cid,
                "plurality_votes": results.plurality.tally.get(cid, 0),
                "approval_votes": results.approval.tally.get(cid, 0),
                "pairwise_wins": sum(
                    1
                    for other in results.candidate_ids
                    if other != cid and matrix[cid][other] > matrix[other][cid]
                ),
                "irv_eliminated_round": eliminated_in.get(cid),
                "plurality_winner": cid in results.plurality.winners,
                "approval_winner": cid in results.approval.winners,
                "condorcet_winner": cid == results.condorcet.winner,
                "irv_winner": results.irv is not None and cid == results.irv.winner,
            }
        )
    return pd.DataFrame(rows)
