import logging
import os
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

try:
    from ..analysis.election import (
        convert_numpy_types,
        results_summary,
        run_simulation,
    )
    from ..data.scenario import PRESETS, Scenario, get_preset
    from ..sim.models import MAX_VOTERS, clamp_voter_count
except ImportError:
    from analysis.election import convert_numpy_types, results_summary, run_simulation
    from data.scenario import PRESETS, Scenario, get_preset
    from sim.models import MAX_VOTERS, clamp_voter_count

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Spatial Election Simulator",
    description="Simulate plurality, approval, Condorcet and IRV outcomes for a spatial voter model",
)

FALLBACK_SETTINGS = {
    "ESIM_DEFAULT_VOTERS": 1200,
    "ESIM_DEFAULT_APPROVAL_K": 2,
    "ESIM_DEFAULT_SEED": 42,
}


def get_setting(name: str) -> int:
    """
    Read an integer default from the environment.

    Falls back to the built-in default when the variable is unset or not an
    integer.
    """
    fallback = FALLBACK_SETTINGS[name]
    raw = os.environ.get(name)
    if raw is None:
        return fallback
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {fallback}")
        return fallback


class ClusterIn(BaseModel):
    id: str
    x: float
    y: float
    weight: float = 0.4
    spread: float = 0.6


class CandidateIn(BaseModel):
    id: str
    label: Optional[str] = None
    x: float
    y: float


class ScenarioIn(BaseModel):
    name: str = "Custom"
    description: str = ""
    clusters: List[ClusterIn] = Field(default_factory=list)
    candidates: List[CandidateIn] = Field(default_factory=list)
    seed: Optional[int] = None


class SimulationRequest(BaseModel):
    scenario: ScenarioIn
    voters: Optional[int] = Field(None, ge=0, le=MAX_VOTERS)
    approval_k: Optional[int] = None
    seed: Optional[int] = None
    include_voters: bool = False


def _simulate(
    scenario: Scenario,
    voters: Optional[int],
    approval_k: Optional[int],
    seed: Optional[int],
    include_voters: bool,
) -> dict:
    """Run one simulation, resolving unset parameters from the environment."""
    if seed is None:
        seed = scenario.seed if scenario.seed is not None else get_setting("ESIM_DEFAULT_SEED")
    n_voters = clamp_voter_count(
        voters if voters is not None else get_setting("ESIM_DEFAULT_VOTERS")
    )
    k = approval_k if approval_k is not None else get_setting("ESIM_DEFAULT_APPROVAL_K")

    run = run_simulation(scenario.clusters, scenario.candidates, n_voters, seed, k)
    payload = run.to_dict(include_voters=include_voters)
    payload["scenario"] = scenario.to_dict()
    summary = results_summary(run.results)
    # NaN is not valid JSON
    summary = summary.astype(object).where(summary.notna(), None)
    payload["summary"] = convert_numpy_types(summary.to_dict("records"))
    return payload


@app.on_event("startup")
async def startup_event():
    """Initialize the application."""
    logger.info("Starting Spatial Election Simulator")


@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.get("/api/presets")
def list_presets():
    """Get all preset scenarios."""
    return [preset.to_dict() for preset in PRESETS]


@app.get("/api/presets/{name}/simulate")
def simulate_preset(
    name: str,
    voters: Optional[int] = Query(None, ge=0, le=MAX_VOTERS),
    approval_k: Optional[int] = Query(None, ge=1),
    seed: Optional[int] = None,
    include_voters: bool = False,
):
    """Run a preset scenario."""
    try:
        scenario = get_preset(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown preset: {name}")
    return _simulate(scenario, voters, approval_k, seed, include_voters)


@app.post("/api/simulate")
def simulate(request: SimulationRequest):
    """Run a simulation for a caller-supplied scenario."""
    try:
        scenario = Scenario.from_dict(request.scenario.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _simulate(
        scenario,
        request.voters,
        request.approval_k,
        request.seed,
        request.include_voters,
    )
