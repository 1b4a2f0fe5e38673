"""
Analysis module for spatial election simulation.

This module turns sampled voters into ballots and tabulates them:
- compute_ballots: distance-based ranked ballots
- plurality / approval / condorcet: single-pass rules
- IRVTabulator: round-by-round instant-runoff engine
- run_simulation / simulate_election: end-to-end pipeline

PyRankVote is used by ResultsVerifier to cross-check IRV winners.
"""

from .ballots import compute_ballots
from .election import (
    SimulationRun,
    results_summary,
    results_to_dict,
    run_simulation,
    simulate_election,
    tabulate,
)
from .irv import IRVTabulator, instant_runoff
from .rules import approval, condorcet, condorcet_winner, pairwise_matrix, plurality
from .verification import ResultsVerifier

__all__ = [
    "compute_ballots",
    "plurality",
    "approval",
    "pairwise_matrix",
    "condorcet_winner",
    "condorcet",
    "IRVTabulator",
    "instant_runoff",
    "SimulationRun",
    "simulate_election",
    "run_simulation",
    "tabulate",
    "results_to_dict",
    "results_summary",
    "ResultsVerifier",
]
