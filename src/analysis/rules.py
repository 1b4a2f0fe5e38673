"""
Single-pass voting rules: plurality, approval (top-k) and Condorcet.

Ties in plurality and approval are reported, not broken. Winners are
listed in ascending identifier order.
"""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

try:
    from ..sim.models import (
        ApprovalResult,
        Ballot,
        CondorcetResult,
        PairwiseMatrix,
        TallyResult,
    )
except ImportError:
    from sim.models import (
        ApprovalResult,
        Ballot,
        CondorcetResult,
        PairwiseMatrix,
        TallyResult,
    )

logger = logging.getLogger(__name__)

# Ballots compared per block; bounds the chunk x c x c comparison array
PAIRWISE_CHUNK = 1024


def winners_from_tally(tally: Dict[str, int]) -> List[str]:
    """
    Get every candidate tied at the maximum tally, sorted by id.

    Args:
        tally: Candidate id -> votes

    Returns:
        Sorted list of winning ids (empty for an empty tally)
    """
    if not tally:
        return []
    top = max(tally.values())
    return sorted(cid for cid, votes in tally.items() if votes == top)


def plurality(ballots: Sequence[Ballot]) -> TallyResult:
    tally: Dict[str, int] = {}
    for ballot in ballots:
        if not ballot:
            continue
        first = ballot[0]
        tally[first] = tally.get(first, 0) + 1
    return TallyResult(tally=tally, winners=winners_from_tally(tally))


def approval(ballots: Sequence[Ballot], top_k: int) -> ApprovalResult:
    """
    Count one approval for each of a ballot's first ``top_k`` choices.

    Args:
        ballots: Ranked ballots
        top_k: Approvals per ballot, already bounded by the caller

    Returns:
        ApprovalResult echoing ``top_k``
    """
    tally: Dict[str, int] = {}
    for ballot in ballots:
        for cid in ballot[:top_k]:
            tally[cid] = tally.get(cid, 0) + 1
    return ApprovalResult(tally=tally, winners=winners_from_tally(tally), top_k=top_k)


def pairwise_matrix(ballots: Sequence[Ballot], candidate_ids: Sequence[str]) -> PairwiseMatrix:
    """
    Count, for each ordered pair (a, b), the ballots ranking a above b.

    A candidate missing from a ballot is neither above nor below anyone on
    that ballot.

    Args:
        ballots: Ranked ballots
        candidate_ids: Candidates to compare, in display order

    Returns:
        Nested dict ``matrix[a][b]``; diagonal entries are zero
    """
    ids = list(candidate_ids)
    if not ids:
        return {}

    index = {cid: i for i, cid in enumerate(ids)}
    counts = np.zeros((len(ids), len(ids)), dtype=np.int64)

    for start in range(0, len(ballots), PAIRWISE_CHUNK):
        chunk = ballots[start : start + PAIRWISE_CHUNK]
        positions = np.full((len(chunk), len(ids)), np.inf)
        for row, ballot in enumerate(chunk):
            for rank, cid in enumerate(ballot):
                col = index.get(cid)
                if col is not None:
                    positions[row, col] = rank
        ranked = np.isfinite(positions)
        above = (positions[:, :, None] < positions[:, None, :]) & ranked[:, None, :]
        counts += above.sum(axis=0)
    np.fill_diagonal(counts, 0)

    return {
        a: {b: int(counts[i, j]) for j, b in enumerate(ids)}
        for i, a in enumerate(ids)
    }


def condorcet_winner(matrix: PairwiseMatrix) -> Optional[str]:
    """Return the candidate beating every other head to head, or None."""
    ids = list(matrix)
    for cid in ids:
        if all(
            matrix[cid][other] > matrix[other][cid] for other in ids if other != cid
        ):
            return cid
    return None


def condorcet(ballots: Sequence[Ballot], candidate_ids: Sequence[str]) -> CondorcetResult:
    matrix = pairwise_matrix(ballots, candidate_ids)
    winner = condorcet_winner(matrix)
    if winner is None and matrix:
        logger.info("No Condorcet winner (pairwise tie or cycle)")
    return CondorcetResult(matrix=matrix, winner=winner)
