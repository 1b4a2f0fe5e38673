"""
Value objects shared by every simulation stage, plus boundary clamping.

All entities are frozen: each pipeline run produces new values and never
mutates the ones it was given. Result tallies are stored as read-only
mappings and winner lists as tuples, so a result handed to a caller cannot
be altered in place.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

WORLD_MIN = -5.0
WORLD_MAX = 5.0
WEIGHT_MIN = 0.0
WEIGHT_MAX = 1.0
SPREAD_MIN = 0.05
SPREAD_MAX = 3.0
MAX_VOTERS = 20000

Ballot = Tuple[str, ...]
PairwiseMatrix = Dict[str, Dict[str, int]]


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))


def freeze_tally(tally: Mapping[str, int]) -> Mapping[str, int]:
    """Read-only copy of a tally, keeping its key order."""
    return MappingProxyType(dict(tally))


@dataclass(frozen=True)
class Cluster:
    """One Gaussian mode of the voter population."""

    id: str
    x: float
    y: float
    weight: float
    spread: float


@dataclass(frozen=True)
class Candidate:
    """A candidate placed in the policy plane."""

    id: str
    label: str
    x: float
    y: float


@dataclass(frozen=True)
class Voter:
    x: float
    y: float


@dataclass(frozen=True)
class TallyResult:
    """Vote counts and (possibly tied) winners for plurality."""

    tally: Mapping[str, int]
    winners: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "tally", freeze_tally(self.tally))
        object.__setattr__(self, "winners", tuple(self.winners))


@dataclass(frozen=True)
class ApprovalResult:
    tally: Mapping[str, int]
    winners: Tuple[str, ...]
    top_k: int

    def __post_init__(self):
        object.__setattr__(self, "tally", freeze_tally(self.tally))
        object.__setattr__(self, "winners", tuple(self.winners))


@dataclass(frozen=True)
class CondorcetResult:
    matrix: Mapping[str, Mapping[str, int]]
    winner: Optional[str]

    def __post_init__(self):
        frozen = {cid: freeze_tally(row) for cid, row in self.matrix.items()}
        object.__setattr__(self, "matrix", MappingProxyType(frozen))


@dataclass(frozen=True)
class IRVRound:
    """Snapshot of one instant-runoff round."""

    round_number: int
    tally: Mapping[str, int]
    remaining: Tuple[str, ...]  # before this round's elimination
    eliminated: Optional[str] = None
    exhausted_ballots: int = 0

    def __post_init__(self):
        object.__setattr__(self, "tally", freeze_tally(self.tally))
        object.__setattr__(self, "remaining", tuple(self.remaining))

    @property
    def total_votes(self) -> int:
        return sum(self.tally.values())

    @property
    def is_final(self) -> bool:
        return self.eliminated is None


@dataclass(frozen=True)
class IRVResult:
    rounds: Tuple[IRVRound, ...]
    winner: Optional[str]


@dataclass(frozen=True)
class RuleResults:
    """Outputs of all four voting rules for one set of ballots."""

    plurality: TallyResult
    approval: ApprovalResult
    condorcet: CondorcetResult
    irv: Optional[IRVResult] = None
    candidate_ids: Tuple[str, ...] = field(default_factory=tuple)


def clamp_cluster(cluster: Cluster) -> Cluster:
    """
    Bring a cluster's numeric fields into their valid ranges.

    Args:
        cluster: Cluster as supplied by the caller

    Returns:
        Cluster with coordinates, weight and spread clamped
    """
    return replace(
        cluster,
        x=clamp(float(cluster.x), WORLD_MIN, WORLD_MAX),
        y=clamp(float(cluster.y), WORLD_MIN, WORLD_MAX),
        weight=clamp(float(cluster.weight), WEIGHT_MIN, WEIGHT_MAX),
        spread=clamp(float(cluster.spread), SPREAD_MIN, SPREAD_MAX),
    )


def clamp_candidate(candidate: Candidate) -> Candidate:
    return replace(
        candidate,
        x=clamp(float(candidate.x), WORLD_MIN, WORLD_MAX),
        y=clamp(float(candidate.y), WORLD_MIN, WORLD_MAX),
    )


def clamp_voter_count(n: int) -> int:
    """Bound a requested voter count to [0, MAX_VOTERS]."""
    return max(0, min(int(n), MAX_VOTERS))


def clamp_approval_k(k: int, candidate_count: int) -> int:
    """Bound approval-k to [1, candidate_count] (1 when there are no candidates)."""
    return max(1, min(int(k), candidate_count or 1))
