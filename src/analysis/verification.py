import logging
from typing import Dict, List, Optional, Sequence

from pyrankvote import Ballot as PRVBallot
from pyrankvote import Candidate as PRVCandidate
from pyrankvote import instant_runoff_voting

try:
    from ..sim.models import Ballot, IRVResult, IRVRound
    from .election import SimulationRun
except ImportError:
    from analysis.election import SimulationRun
    from sim.models import Ballot, IRVResult, IRVRound

logger = logging.getLogger(__name__)


def has_elimination_tie(rounds: Sequence[IRVRound]) -> bool:
    """Whether any elimination had to pick among candidates tied for last."""
    for round_obj in rounds:
        if round_obj.eliminated is None:
            continue
        low = round_obj.tally[round_obj.eliminated]
        if sum(1 for votes in round_obj.tally.values() if votes == low) > 1:
            return True
    return False


class ResultsVerifier:
    """
    Checks IRV outputs for internal consistency and against PyRankVote.
    """

    def __init__(self):
        self.issues: List[str] = []

    def check_round_conservation(
        self, ballots: Sequence[Ballot], rounds: Sequence[IRVRound]
    ) -> bool:
        """
        Verify that every round's tally sums to the ballots still counting.

        Args:
            ballots: Ballots the rounds were tabulated from
            rounds: IRV rounds

        Returns:
            True when every round conserves ballots
        """
        ok = True
        for round_obj in rounds:
            remaining = set(round_obj.remaining)
            live = sum(1 for b in ballots if any(cid in remaining for cid in b))
            if round_obj.total_votes != live:
                self.issues.append(
                    f"Round {round_obj.round_number}: tally {round_obj.total_votes} != {live} live ballots"
                )
                ok = False
        return ok

    def check_round_limit(self, rounds: Sequence[IRVRound], candidate_count: int) -> bool:
        if len(rounds) > candidate_count:
            self.issues.append(
                f"{len(rounds)} rounds exceeds candidate count {candidate_count}"
            )
            return False
        return True

    def compare_with_pyrankvote(
        self, ballots: Sequence[Ballot], irv_result: IRVResult
    ) -> Optional[bool]:
        """
        Re-run IRV with PyRankVote and compare winners.

        Returns:
            True/False for a match/mismatch, None when the comparison is
            skipped (no ballots, or an elimination tie whose resolution may
            legitimately differ between implementations)
        """
        if not ballots or irv_result.winner is None:
            return None
        if has_elimination_tie(irv_result.rounds):
            logger.warning("Elimination tie present, skipping PyRankVote comparison")
            return None

        candidates_map: Dict[str, PRVCandidate] = {}
        for ballot in ballots:
            for cid in ballot:
                candidates_map.setdefault(cid, PRVCandidate(cid))

        prv_ballots = [
            PRVBallot(ranked_candidates=[candidates_map[cid] for cid in ballot])
            for ballot in ballots
            if ballot
        ]
        election_result = instant_runoff_voting(
            list(candidates_map.values()), prv_ballots
        )
        prv_winners = [c.name for c in election_result.get_winners()]

        if prv_winners != [irv_result.winner]:
            self.issues.append(
                f"IRV winner {irv_result.winner} differs from PyRankVote {prv_winners}"
            )
            return False
        return True

    def verify_run(self, run: SimulationRun) -> Dict:
        """
        Run every applicable check on a simulation run.

        Returns:
            Dictionary report; ``passed`` is False if any check failed
        """
        self.issues = []
        report = {
            "seed": run.seed,
            "voter_count": len(run.voters),
            "candidate_count": len(run.results.candidate_ids),
            "round_conservation": None,
            "round_limit": None,
            "pyrankvote_match": None,
        }

        irv = run.results.irv
        if irv is not None:
            report["round_conservation"] = self.check_round_conservation(
                run.ballots, irv.rounds
            )
            report["round_limit"] = self.check_round_limit(
                irv.rounds, len(run.results.candidate_ids)
            )
            report["pyrankvote_match"] = self.compare_with_pyrankvote(run.ballots, irv)

        report["issues"] = list(self.issues)
        report["passed"] = not self.issues
        if self.issues:
            for issue in self.issues:
                logger.error(f"Verification issue: {issue}")
        else:
            logger.info(f"Verification passed for seed {run.seed}")
        return report
