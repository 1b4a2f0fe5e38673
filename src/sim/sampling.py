import logging
from itertools import accumulate
from typing import List, Sequence

try:
    from .models import WORLD_MAX, WORLD_MIN, Cluster, Voter, clamp
    from .rng import LcgRng
except ImportError:
    from sim.models import WORLD_MAX, WORLD_MIN, Cluster, Voter, clamp
    from sim.rng import LcgRng

logger = logging.getLogger(__name__)


def normalized_weights(clusters: Sequence[Cluster]) -> List[float]:
    """
    Turn cluster weights into a probability distribution.

    Negative weights count as zero; if nothing is left, every cluster gets
    the same share.
    """
    weights = [max(0.0, c.weight) for c in clusters]
    total = sum(weights)
    if total > 0:
        return [w / total for w in weights]
    logger.debug("Cluster weights sum to zero, using uniform cluster selection")
    return [1.0 / len(weights)] * len(weights)


def sample_voters(clusters: Sequence[Cluster], n: int, rng: LcgRng) -> List[Voter]:
    """
    Draw a voter population from a Gaussian mixture.

    Draw order per voter is fixed: cluster selection, then two draws for x,
    then two draws for y. Without clusters voters are uniform over the world
    box (x then y).

    Args:
        clusters: Mixture components
        n: Number of voters to draw
        rng: Generator owned by this run

    Returns:
        List of voters
    """
    if n <= 0:
        return []

    if not clusters:
        return [
            Voter(
                x=rng.uniform(WORLD_MIN, WORLD_MAX),
                y=rng.uniform(WORLD_MIN, WORLD_MAX),
            )
            for _ in range(n)
        ]

    cumulative = list(accumulate(normalized_weights(clusters)))

    def pick_cluster() -> Cluster:
        r = rng.next()
        for idx, threshold in enumerate(cumulative):
            if r <= threshold:
                return clusters[idx]
        return clusters[-1]

    voters = []
    for _ in range(n):
        cluster = pick_cluster()
        x = clamp(rng.normal(cluster.x, cluster.spread), WORLD_MIN, WORLD_MAX)
        y = clamp(rng.normal(cluster.y, cluster.spread), WORLD_MIN, WORLD_MAX)
        voters.append(Voter(x=x, y=y))
    return voters
