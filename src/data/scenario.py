"""
Scenario records: a named population model and candidate field.

Scenarios are stored as plain JSON ``{name, description, clusters[],
candidates[], seed?}``. Numeric fields are clamped into range on load.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

try:
    from ..sim.models import Candidate, Cluster, clamp_candidate, clamp_cluster
except ImportError:
    from sim.models import Candidate, Cluster, clamp_candidate, clamp_cluster

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scenario:
    """A population model plus candidates, optionally pinned to a seed."""

    name: str
    description: str = ""
    clusters: Tuple[Cluster, ...] = field(default_factory=tuple)
    candidates: Tuple[Candidate, ...] = field(default_factory=tuple)
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Scenario":
        """
        Build a scenario from its plain-data form.

        Args:
            data: Parsed scenario record

        Returns:
            Scenario with clamped clusters and candidates

        Raises:
            ValueError: If a required field is missing or not numeric
        """
        if not isinstance(data, dict):
            raise ValueError("Scenario record must be an object")
        try:
            clusters = tuple(
                clamp_cluster(
                    Cluster(
                        id=str(c["id"]),
                        x=float(c["x"]),
                        y=float(c["y"]),
                        weight=float(c["weight"]),
                        spread=float(c["spread"]),
                    )
                )
                for c in data.get("clusters", [])
            )
            candidates = tuple(
                clamp_candidate(
                    Candidate(
                        id=str(c["id"]),
                        label=str(c.get("label") or c["id"]),
                        x=float(c["x"]),
                        y=float(c["y"]),
                    )
                )
                for c in data.get("candidates", [])
            )
            seed = data.get("seed")
            seed = int(seed) if seed is not None else None
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid scenario record: {e!r}") from e

        ids = [c.id for c in candidates]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate candidate ids in scenario: {ids}")

        return cls(
            name=str(data.get("name", "Untitled")),
            description=str(data.get("description", "")),
            clusters=clusters,
            candidates=candidates,
            seed=seed,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "clusters": [
                {"id": c.id, "x": c.x, "y": c.y, "weight": c.weight, "spread": c.spread}
                for c in self.clusters
            ],
            "candidates": [
                {"id": c.id, "label": c.label, "x": c.x, "y": c.y}
                for c in self.candidates
            ],
        }
        if self.seed is not None:
            data["seed"] = self.seed
        return data


def load_scenario(path: Union[str, Path]) -> Scenario:
    """Load a scenario record from a JSON file."""
    path = Path(path)
    logger.info(f"Loading scenario from: {path}")
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid scenario JSON in {path}: {e}") from e
    return Scenario.from_dict(data)


def save_scenario(scenario: Scenario, path: Union[str, Path]) -> Path:
    path = Path(path)
    with open(path, "w") as f:
        json.dump(scenario.to_dict(), f, indent=2)
    logger.info(f"Saved scenario '{scenario.name}' to: {path}")
    return path


def _cluster(cid, x, y, weight, spread) -> Cluster:
    return Cluster(id=cid, x=x, y=y, weight=weight, spread=spread)


def _candidate(cid, x, y) -> Candidate:
    return Candidate(id=cid, label=cid, x=x, y=y)


DEFAULT_SCENARIO = Scenario(
    name="Default",
    description="Two voter clusters with one nearby candidate each.",
    clusters=(
        _cluster("c1", -1.5, -1.0, 0.45, 0.6),
        _cluster("c2", 2.0, 1.5, 0.35, 0.7),
    ),
    candidates=(
        _candidate("A", -1.0, -1.0),
        _candidate("B", 1.6, 1.2),
    ),
    seed=42,
)

PRESETS: List[Scenario] = [
    Scenario(
        name="Plurality Split",
        description=(
            "Two similar contenders split a majority cluster, letting an outsider "
            "win under plurality."
        ),
        clusters=(
            _cluster("c1", -0.5, 0.2, 0.65, 0.5),
            _cluster("c2", 3.0, 0.5, 0.25, 0.6),
            _cluster("c3", -3.0, -2.0, 0.1, 0.4),
        ),
        candidates=(
            _candidate("A", -0.3, 0.25),
            _candidate("B", 0.2, 0.3),
            _candidate("C", 3.2, 0.3),
        ),
        seed=1337,
    ),
    Scenario(
        name="IRV vs Condorcet",
        description="Middle candidate is Condorcet winner but is eliminated early in IRV.",
        clusters=(
            _cluster("c1", -3.0, 0.0, 0.38, 0.5),
            _cluster("c2", 3.0, 0.0, 0.37, 0.5),
            _cluster("c3", 0.0, 0.0, 0.25, 0.7),
        ),
        candidates=(
            _candidate("A", -2.5, 0.0),
            _candidate("B", 2.5, 0.0),
            _candidate("C", 0.0, 0.0),
        ),
        seed=9,
    ),
    Scenario(
        name="Approval Compromise",
        description=(
            "Approval (top-2) favors a centrist compromise over polarized "
            "plurality leader."
        ),
        clusters=(
            _cluster("c1", -2.5, 0.5, 0.45, 0.55),
            _cluster("c2", 2.5, -0.3, 0.35, 0.55),
            _cluster("c3", 0.0, 0.0, 0.2, 0.6),
        ),
        candidates=(
            _candidate("A", -2.2, 0.4),
            _candidate("B", 2.4, -0.2),
            _candidate("C", 0.0, 0.1),
        ),
        seed=2024,
    ),
]


def get_preset(name: str) -> Scenario:
    """
    Look up a preset scenario by name (case-insensitive, hyphens match spaces).

    Raises:
        KeyError: If no preset has that name
    """
    wanted = name.strip().lower().replace("-", " ")
    for preset in PRESETS:
        if preset.name.lower() == wanted:
            return preset
    raise KeyError(f"Unknown preset: {name}")
