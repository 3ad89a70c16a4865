"""Edmonds-Karp solver loop.

Repeats breadth-first augmenting-path search and augmentation on a
:class:`~ekflow.network.FlowNetwork` until the sink is unreachable.
"""

from __future__ import annotations

from typing import List, Optional

from numpy.typing import ArrayLike

from ekflow.algorithms.bfs import find_augmenting_path
from ekflow.logging import get_logger
from ekflow.network import FlowNetwork
from ekflow.types import AugmentingPath, MaxFlowResult

logger = get_logger(__name__)


def calc_max_flow(
    network: FlowNetwork,
    *,
    shortest_path: bool = False,
    max_iterations: Optional[int] = None,
) -> MaxFlowResult:
    """Compute the maximum flow from ``network.source`` to ``network.sink``.

    Edmonds-Karp: repeatedly find the fewest-arc augmenting path over the
    current residual capacities and push its bottleneck along it, until the
    sink is no longer reachable.

    The network is reset before solving, so calling this twice on the same
    network gives the same result. After the call the network's ``flow``,
    ``residual`` and ``total_flow`` reflect the solution.

    Args:
        network: The network to solve.
        shortest_path: If True, apply only the first augmenting path and
            return. The result is marked incomplete when another path exists.
        max_iterations: Optional cap on the number of augmentations. When the
            cap is hit before the search is exhausted the partial result is
            returned with ``complete=False``; its ``total_flow`` is a lower
            bound on the maximum.

    Returns:
        MaxFlowResult with the total flow, copies of the final matrices and
        the accepted augmenting paths.

    Notes:
        - Only forward residual capacity is used; flow is never cancelled
          along reverse arcs. The result is always a feasible flow; it is the
          maximum whenever no augmentation would need to reroute flow that
          was already placed.
        - Complexity is O(V * E^2) in the worst case.

    Examples:
        >>> net = FlowNetwork([[0, 6, 5, 0], [0, 0, 0, 4], [0, 0, 0, 3], [0, 0, 0, 0]])
        >>> calc_max_flow(net).total_flow
        7.0
    """
    if max_iterations is not None and max_iterations < 0:
        raise ValueError(f"max_iterations must be non-negative, got {max_iterations}")
    if shortest_path:
        max_iterations = 1 if max_iterations is None else min(max_iterations, 1)

    if not network.is_forward_only():
        logger.warning(
            "Network has arcs pointing to a lower or equal node index; "
            "they are ignored by the augmenting-path search"
        )

    network.reset()
    source, sink, node_count = network.source, network.sink, network.node_count
    paths: List[AugmentingPath] = []
    complete = True

    while True:
        path = find_augmenting_path(network.residual, source, sink, node_count)
        if path is None:
            break
        if max_iterations is not None and len(paths) >= max_iterations:
            complete = False
            logger.info(
                f"Stopped after {len(paths)} augmentation(s); "
                f"flow {network.total_flow} is not maximal"
            )
            break
        network.apply_path(path)
        paths.append(path)
        logger.debug(
            f"Augmenting path {'->'.join(str(n) for n in path.nodes)} "
            f"carries {path.bottleneck}, total {network.total_flow}"
        )

    if complete:
        logger.info(
            f"Maximum flow {network.total_flow} found with {len(paths)} "
            f"augmenting path(s) on {node_count} nodes"
        )

    return MaxFlowResult(
        total_flow=network.total_flow,
        capacity=network.capacity,
        flow=network.flow.copy(),
        residual=network.residual.copy(),
        paths=paths,
        complete=complete,
    )


def solve(
    capacity: ArrayLike,
    *,
    shortest_path: bool = False,
    max_iterations: Optional[int] = None,
) -> MaxFlowResult:
    """Build a ``FlowNetwork`` from ``capacity`` and solve it.

    Raises:
        InvalidNetwork: If ``capacity`` is not a valid capacity matrix.
    """
    return calc_max_flow(
        FlowNetwork(capacity),
        shortest_path=shortest_path,
        max_iterations=max_iterations,
    )
