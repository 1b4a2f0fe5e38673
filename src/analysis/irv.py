import logging
from typing import Dict, List, Optional, Sequence

import pandas as pd

try:
    from ..sim.models import Ballot, IRVResult, IRVRound
except ImportError:
    from sim.models import Ballot, IRVResult, IRVRound

logger = logging.getLogger(__name__)


class IRVTabulator:
    """
    Instant-runoff tabulation engine.

    Eliminates the lowest-tallied candidate each round until one candidate
    holds a majority of the non-exhausted ballots or is the last one left.
    Ties for last place eliminate the lexicographically smallest id.
    """

    def __init__(self, ballots: Sequence[Ballot]):
        """
        Initialize IRV tabulator.

        Args:
            ballots: Ranked ballots, most preferred candidate first
        """
        self.ballots = list(ballots)
        self.rounds: List[IRVRound] = []
        self.winner: Optional[str] = None

    def initial_candidates(self) -> List[str]:
        """Every candidate appearing on any ballot, in first-seen order."""
        seen: Dict[str, None] = {}
        for ballot in self.ballots:
            for cid in ballot:
                seen.setdefault(cid, None)
        return list(seen)

    def tally_round(self, remaining: Sequence[str]) -> Dict[str, int]:
        """
        Count each ballot for its highest-ranked remaining candidate.

        Args:
            remaining: Candidates still in the race

        Returns:
            Candidate id -> votes, in ``remaining`` order
        """
        tally = {cid: 0 for cid in remaining}
        for ballot in self.ballots:
            choice = next((cid for cid in ballot if cid in tally), None)
            if choice is not None:
                tally[choice] += 1
        return tally

    def run_irv_tabulation(self) -> List[IRVRound]:
        """
        Run complete IRV tabulation.

        Returns:
            List of IRVRound objects, the last one without an elimination
        """
        self.rounds = []
        self.winner = None

        remaining = self.initial_candidates()
        if not remaining:
            logger.info("No ranked candidates on any ballot, skipping IRV")
            return self.rounds

        logger.info(
            f"Starting IRV tabulation: {len(remaining)} candidates, {len(self.ballots)} ballots"
        )

        round_num = 1
        while True:
            tally = self.tally_round(remaining)
            total = sum(tally.values())
            exhausted = len(self.ballots) - total

            # max() keeps the first candidate in remaining order on equal tallies
            leader = max(tally, key=tally.get)
            logger.debug(f"Round {round_num}: {tally}")

            if tally[leader] > total / 2 or len(remaining) == 1:
                self._record_round(round_num, tally, remaining, None, exhausted)
                self.winner = leader
                logger.info(
                    f"Candidate {leader} elected in round {round_num} with {tally[leader]} of {total} votes"
                )
                break

            if total == 0:
                self._record_round(round_num, tally, remaining, None, exhausted)
                self.winner = min(remaining)
                logger.warning(
                    f"No votes left to count in round {round_num}, electing {self.winner} by id order"
                )
                break

            min_votes = min(tally.values())
            lowest = min(cid for cid, votes in tally.items() if votes == min_votes)
            self._record_round(round_num, tally, remaining, lowest, exhausted)
            remaining = [cid for cid in remaining if cid != lowest]
            logger.debug(f"Eliminating candidate {lowest} with {min_votes} votes")
            round_num += 1

        logger.info(f"IRV tabulation complete: winner {self.winner}, {len(self.rounds)} rounds")
        return self.rounds

    def _record_round(
        self,
        round_num: int,
        tally: Dict[str, int],
        remaining: Sequence[str],
        eliminated: Optional[str],
        exhausted: int,
    ):
        self.rounds.append(
            IRVRound(
                round_number=round_num,
                tally=dict(tally),
                remaining=tuple(remaining),
                eliminated=eliminated,
                exhausted_ballots=exhausted,
            )
        )

    def result(self) -> IRVResult:
        return IRVResult(rounds=tuple(self.rounds), winner=self.winner)

    def get_round_summary(self) -> pd.DataFrame:
        """
        Get summary of all rounds as a DataFrame.

        Returns:
            DataFrame with one row per candidate per round
        """
        return round_summary(self.result())


def _candidate_status(candidate_id: str, round_obj: IRVRound, winner: Optional[str]) -> str:
    """Get the status of a candidate in a given round."""
    if candidate_id == round_obj.eliminated:
        return "eliminated"
    elif round_obj.is_final and candidate_id == winner:
        return "elected"
    else:
        return "continuing"


def round_summary(irv_result: IRVResult) -> pd.DataFrame:
    """
    Tabulate finished IRV rounds as a DataFrame.

    Args:
        irv_result: Rounds and winner of a completed tabulation

    Returns:
        DataFrame with columns round, candidate_id, votes, status and
        exhausted_ballots; empty when there were no rounds
    """
    if not irv_result.rounds:
        return pd.DataFrame()

    summary_data = []
    for round_obj in irv_result.rounds:
        for candidate_id, votes in round_obj.tally.items():
            summary_data.append(
                {
                    "round": round_obj.round_number,
                    "candidate_id": candidate_id,
                    "votes": votes,
                    "status": _candidate_status(candidate_id, round_obj, irv_result.winner),
                    "exhausted_ballots": round_obj.exhausted_ballots,
                }
            )

    return pd.DataFrame(summary_data)


def instant_runoff(ballots: Sequence[Ballot]) -> IRVResult:
    """Run IRV over ``ballots`` and return its rounds and winner."""
    tabulator = IRVTabulator(ballots)
    tabulator.run_irv_tabulation()
    return tabulator.result()
