"""
Simulation primitives for the spatial election model.

This module provides the reproducible building blocks of a run:
- LcgRng: seeded linear congruential generator
- sample_voters: Gaussian-mixture voter sampling
- Value objects (Cluster, Candidate, Voter, rule results) and boundary clamps
"""

from .models import (
    ApprovalResult,
    Candidate,
    Cluster,
    CondorcetResult,
    IRVResult,
    IRVRound,
    RuleResults,
    TallyResult,
    MAX_VOTERS,
    WORLD_MAX,
    WORLD_MIN,
    Voter,
    clamp_approval_k,
    clamp_candidate,
    clamp_cluster,
    clamp_voter_count,
)
from .rng import LcgRng, lcg_step
from .sampling import sample_voters

__all__ = [
    "LcgRng",
    "lcg_step",
    "sample_voters",
    "Cluster",
    "Candidate",
    "Voter",
    "TallyResult",
    "ApprovalResult",
    "CondorcetResult",
    "IRVRound",
    "IRVResult",
    "RuleResults",
    "WORLD_MIN",
    "WORLD_MAX",
    "MAX_VOTERS",
    "clamp_cluster",
    "clamp_candidate",
    "clamp_voter_count",
    "clamp_approval_k",
]
