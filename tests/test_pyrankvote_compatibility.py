"""
PyRankVote IRV compatibility testing.

This module checks that our IRV tabulator elects the same winner as the
PyRankVote library on simulated elections without elimination ties.
"""

import sys
import unittest
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from analysis.election import run_simulation
from analysis.irv import instant_runoff
from analysis.verification import ResultsVerifier, has_elimination_tie
from data.scenario import PRESETS


class TestPyRankVoteCompatibility(unittest.TestCase):
    """Compare IRV winners with PyRankVote."""

    def setUp(self):
        """Set up test fixtures."""
        self.verifier = ResultsVerifier()

    def test_hand_built_election(self):
        """Test a four-candidate election with a clear elimination order."""
        ballots = (
            [("A", "B", "C", "D")] * 8
            + [("B", "C", "A", "D")] * 6
            + [("C", "B", "A", "D")] * 5
            + [("D", "C", "B", "A")] * 2
        )
        result = instant_runoff(ballots)

        self.assertEqual([r.eliminated for r in result.rounds], ["D", "B", None])
        self.assertEqual(result.winner, "C")
        self.assertTrue(self.verifier.compare_with_pyrankvote(ballots, result))

    def test_presets_across_seeds(self):
        """Test preset elections agree with PyRankVote when no tie occurs."""
        compared = 0
        for preset in PRESETS:
            for seed in (preset.seed, 1, 2, 3):
                run = run_simulation(preset.clusters, preset.candidates, 301, seed)
                irv = run.results.irv
                match = self.verifier.compare_with_pyrankvote(run.ballots, irv)
                if has_elimination_tie(irv.rounds):
                    self.assertIsNone(match)
                else:
                    self.assertTrue(match, f"{preset.name} seed {seed}: {self.verifier.issues}")
                    compared += 1
        self.assertGreater(compared, 0)


if __name__ == "__main__":
    unittest.main()
