"""
Shared pytest configuration and fixtures for the spatial election simulator.

This module provides common test fixtures and utilities used across
all test modules.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from analysis.ballots import compute_ballots  # noqa: E402
from sim.models import Candidate, Cluster, Voter  # noqa: E402


@pytest.fixture
def line_candidates():
    """Three candidates on the x axis: C at -3, A at 0, B at 3."""
    return [
        Candidate(id="A", label="A", x=0.0, y=0.0),
        Candidate(id="B", label="B", x=3.0, y=0.0),
        Candidate(id="C", label="C", x=-3.0, y=0.0),
    ]


@pytest.fixture
def line_voters():
    """Five voters near the line candidates."""
    return [
        Voter(x=0.0, y=0.0),
        Voter(x=0.2, y=0.0),
        Voter(x=2.2, y=0.0),
        Voter(x=2.1, y=0.1),
        Voter(x=-2.1, y=0.0),
    ]


@pytest.fixture
def line_ballots(line_voters, line_candidates):
    """Ballots for the line voters: A>B>C x2, B>A>C x2, C>A>B x1."""
    return compute_ballots(line_voters, line_candidates)


@pytest.fixture
def sample_clusters():
    """Provide a two-cluster population model."""
    return [
        Cluster(id="c1", x=-1.5, y=-1.0, weight=0.45, spread=0.6),
        Cluster(id="c2", x=2.0, y=1.5, weight=0.35, spread=0.7),
    ]


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (full pipeline runs)",
    )
    config.addinivalue_line(
        "markers",
        "golden: marks tests as golden dataset validation (hand-computed results)",
    )
    config.addinivalue_line(
        "markers", "invariant: marks tests as mathematical invariant validation"
    )
    config.addinivalue_line(
        "markers", "smoke: marks tests as smoke tests (basic functionality check)"
    )
