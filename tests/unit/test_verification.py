"""
Unit tests for the results verifier.
"""

import pytest

from analysis.election import run_simulation
from analysis.irv import instant_runoff
from analysis.verification import ResultsVerifier, has_elimination_tie
from sim.models import IRVRound


@pytest.mark.unit
def test_round_conservation_passes(line_ballots):
    verifier = ResultsVerifier()
    result = instant_runoff(line_ballots)
    assert verifier.check_round_conservation(line_ballots, result.rounds)
    assert verifier.issues == []


@pytest.mark.unit
def test_round_conservation_detects_bad_tally(line_ballots):
    """Test that a round whose tally loses a ballot is reported."""
    bad_round = IRVRound(
        round_number=1, tally={"A": 2, "B": 2, "C": 0}, remaining=("A", "B", "C")
    )
    verifier = ResultsVerifier()
    assert not verifier.check_round_conservation(line_ballots, [bad_round])
    assert len(verifier.issues) == 1


@pytest.mark.unit
def test_round_limit():
    rounds = [
        IRVRound(round_number=i, tally={"A": 1}, remaining=("A",)) for i in range(1, 4)
    ]
    verifier = ResultsVerifier()
    assert verifier.check_round_limit(rounds, 3)
    assert not verifier.check_round_limit(rounds, 2)


@pytest.mark.unit
def test_has_elimination_tie():
    tied = IRVRound(
        round_number=1, tally={"A": 3, "B": 1, "C": 1}, remaining=("A", "B", "C"), eliminated="B"
    )
    clear = IRVRound(
        round_number=1, tally={"A": 3, "B": 2, "C": 1}, remaining=("A", "B", "C"), eliminated="C"
    )
    final = IRVRound(round_number=2, tally={"A": 4, "B": 2}, remaining=("A", "B"))
    assert has_elimination_tie([tied, final])
    assert not has_elimination_tie([clear, final])


@pytest.mark.unit
def test_pyrankvote_matches_line_example(line_ballots):
    verifier = ResultsVerifier()
    assert verifier.compare_with_pyrankvote(line_ballots, instant_runoff(line_ballots)) is True


@pytest.mark.unit
def test_pyrankvote_skipped_on_tie():
    ballots = [("A", "B", "C")] * 2 + [("B", "A", "C")] + [("C", "B", "A")]
    verifier = ResultsVerifier()
    assert verifier.compare_with_pyrankvote(ballots, instant_runoff(ballots)) is None


@pytest.mark.unit
def test_verify_run_report(sample_clusters, line_candidates):
    run = run_simulation(sample_clusters, line_candidates, 200, 42)
    report = ResultsVerifier().verify_run(run)

    assert report["seed"] == 42
    assert report["candidate_count"] == 3
    assert report["round_conservation"] is True
    assert report["round_limit"] is True
    assert report["passed"] is True


@pytest.mark.unit
def test_verify_run_without_candidates(sample_clusters):
    report = ResultsVerifier().verify_run(run_simulation(sample_clusters, [], 50, 1))
    assert report["round_conservation"] is None
    assert report["passed"] is True
