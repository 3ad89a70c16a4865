"""Random forward-only networks for experiments and tests."""

from __future__ import annotations

import random
from typing import Optional

import numpy as np

from ekflow.config import GENERATOR_CONFIG, GeneratorConfig
from ekflow.logging import get_logger
from ekflow.network import InvalidNetwork

logger = get_logger(__name__)


def random_network(
    node_count: int,
    *,
    seed: Optional[int] = None,
    config: GeneratorConfig = GENERATOR_CONFIG,
) -> np.ndarray:
    """Generate a random acyclic capacity matrix.

    Think of the nodes laid out in a row. Every node except the sink gets a
    few arcs to nodes further right, and every node except the source gets a
    few arcs from nodes further left. The result has:

    - only arcs from a lower to a higher index (no cycles, no self-loops);
    - a path from the source to every node;
    - a path from every node to the sink.

    Arcs drawn twice keep the capacity of the last draw.

    Args:
        node_count: Number of nodes, at least 2.
        seed: Seed for a private ``random.Random``; None for a fresh one.
        config: Arc count and capacity ranges.

    Returns:
        ``node_count x node_count`` float matrix.

    Raises:
        InvalidNetwork: If ``node_count < 2``.
    """
    if node_count < 2:
        raise InvalidNetwork(f"There must be at least 2 nodes, got {node_count}")

    rng = random.Random(seed)
    matrix = np.zeros((node_count, node_count), dtype=float)

    def draw_capacity() -> float:
        return float(rng.randint(config.min_capacity, config.max_capacity))

    def draw_arc_count() -> int:
        return rng.randint(config.min_arcs_per_node, config.max_arcs_per_node)

    for i in range(node_count - 1):
        for _ in range(draw_arc_count()):
            matrix[i, rng.randint(i + 1, node_count - 1)] = draw_capacity()
    for j in range(1, node_count):
        for _ in range(draw_arc_count()):
            matrix[rng.randint(0, j - 1), j] = draw_capacity()

    logger.debug(
        f"Generated random network: {node_count} nodes, "
        f"{int(np.count_nonzero(matrix))} arcs, seed={seed}"
    )
    return matrix
