import logging
from typing import List, Sequence

import numpy as np

try:
    from ..sim.models import Ballot, Candidate, Voter
except ImportError:
    from sim.models import Ballot, Candidate, Voter

logger = logging.getLogger(__name__)


def compute_ballots(voters: Sequence[Voter], candidates: Sequence[Candidate]) -> List[Ballot]:
    """
    Rank candidates for every voter by Euclidean distance.

    Candidates at equal distance keep their order in ``candidates``.

    Args:
        voters: Voter positions
        candidates: Candidates in display order

    Returns:
        One ballot (tuple of candidate ids, nearest first) per voter
    """
    if not candidates or not voters:
        return []

    ids = [c.id for c in candidates]
    candidate_xy = np.array([[c.x, c.y] for c in candidates], dtype=float)
    voter_xy = np.array([[v.x, v.y] for v in voters], dtype=float)

    dx = voter_xy[:, None, 0] - candidate_xy[None, :, 0]
    dy = voter_xy[:, None, 1] - candidate_xy[None, :, 1]
    distances = np.sqrt(dx * dx + dy * dy)
    order = np.argsort(distances, axis=1, kind="stable")

    ballots = [tuple(ids[i] for i in row) for row in order.tolist()]
    logger.debug(f"Built {len(ballots)} ballots over {len(ids)} candidates")
    return ballots
