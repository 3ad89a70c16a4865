"""Breadth-first search for augmenting paths over residual capacities.

The search visits candidate successors of a node ``u`` only in the index
range ``[u, n - 1]``, in ascending order. Networks built for this package
direct every arc from a lower to a higher index (source ``0``, sink
``n - 1``), and for those the restriction loses nothing. Arcs pointing to a
lower index are never followed; callers that pass such networks get the flow
reachable through forward arcs only.
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

import numpy as np

from ekflow.config import SOLVER_CONFIG
from ekflow.types import AugmentingPath, NodeColor, NodeIndex


@dataclass
class TraversalState:
    """Bookkeeping of a single breadth-first search.

    Attributes:
        color: Discovery state per node.
        parent: Node from which each node was discovered, None if never
            discovered (and for the source).
        bottleneck: Smallest residual capacity on the discovered path from
            the source to each node; ``inf`` until discovered.
        depth: Number of arcs on that path; -1 until discovered. Kept for
            diagnostics only.
    """

    color: List[NodeColor]
    parent: List[Optional[NodeIndex]]
    bottleneck: List[float]
    depth: List[int]
    queue: Deque[NodeIndex] = field(default_factory=deque)

    @classmethod
    def fresh(cls, node_count: int) -> "TraversalState":
        return cls(
            color=[NodeColor.UNDISCOVERED] * node_count,
            parent=[None] * node_count,
            bottleneck=[math.inf] * node_count,
            depth=[-1] * node_count,
        )

    def discover(self, node: NodeIndex, parent: Optional[NodeIndex], capacity: float) -> None:
        self.color[node] = NodeColor.DISCOVERED
        self.parent[node] = parent
        if parent is None:
            self.depth[node] = 0
        else:
            self.depth[node] = self.depth[parent] + 1
            self.bottleneck[node] = min(self.bottleneck[parent], capacity)
        self.queue.append(node)

    def trace_back(self, source: NodeIndex, sink: NodeIndex) -> List[NodeIndex]:
        """Return the discovered path from ``source`` to ``sink``."""
        nodes = [sink]
        node = sink
        while node != source:
            node = self.parent[node]
            nodes.append(node)
        nodes.reverse()
        return nodes


def breadth_first_search(
    residual: np.ndarray,
    source: NodeIndex,
    sink: NodeIndex,
    node_count: int,
    residual_threshold: Optional[float] = None,
) -> tuple[bool, TraversalState]:
    """Search the residual graph from ``source`` until ``sink`` is dequeued.

    Args:
        residual: Residual capacity matrix; not modified.
        source: Start node.
        sink: Target node.
        node_count: Number of nodes to consider.
        residual_threshold: An arc is usable while its residual capacity is
            above this value. Defaults to ``SOLVER_CONFIG.residual_threshold``.

    Returns:
        ``(found, state)`` where ``found`` tells whether the sink was reached
        and ``state`` holds the traversal bookkeeping.
    """
    if residual_threshold is None:
        residual_threshold = SOLVER_CONFIG.residual_threshold

    state = TraversalState.fresh(node_count)
    state.discover(source, None, math.inf)

    while state.queue:
        u = state.queue.popleft()
        row = residual[u]
        for j in range(u, node_count):
            if row[j] > residual_threshold and state.color[j] == NodeColor.UNDISCOVERED:
                state.discover(j, u, float(row[j]))
        state.color[u] = NodeColor.EXAMINED
        if u == sink:
            return True, state
    return False, state


def find_augmenting_path(
    residual: np.ndarray,
    source: NodeIndex,
    sink: NodeIndex,
    node_count: int,
    residual_threshold: Optional[float] = None,
) -> Optional[AugmentingPath]:
    """Return the fewest-arc augmenting path from ``source`` to ``sink``.

    Among the paths reachable under the ascending-index rule, breadth-first
    order yields one with the fewest arcs, which is what bounds the number
    of Edmonds-Karp iterations.

    Returns:
        The path with its bottleneck capacity, or None when the sink cannot
        be reached through arcs with residual capacity (always None when
        ``source == sink``, since a path needs at least one arc).
    """
    if source == sink:
        return None
    found, state = breadth_first_search(
        residual, source, sink, node_count, residual_threshold
    )
    if not found:
        return None
    return AugmentingPath(
        nodes=tuple(state.trace_back(source, sink)),
        bottleneck=state.bottleneck[sink],
    )
