"""Types and data structures for max-flow results.

Defines the immutable containers produced by the path finder and the solver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Tuple

import numpy as np

#: Index of a node in the capacity matrix.
NodeIndex = int

#: A directed arc as a ``(tail, head)`` pair of node indices.
Arc = Tuple[NodeIndex, NodeIndex]


class NodeColor(IntEnum):
    """Discovery state of a node during one breadth-first search."""

    #: Not reached yet.
    UNDISCOVERED = 0
    #: Reached and waiting in the queue.
    DISCOVERED = 1
    #: Dequeued and all its candidate successors scanned.
    EXAMINED = 2


@dataclass(frozen=True)
class AugmentingPath:
    """A source-to-sink path with positive residual capacity on every arc.

    Attributes:
        nodes: Node indices in order from source to sink.
        bottleneck: Smallest residual capacity along the path; the amount of
            flow the path can carry.
    """

    nodes: Tuple[NodeIndex, ...]
    bottleneck: float

    @property
    def arcs(self) -> Tuple[Arc, ...]:
        """Arcs of the path in source-to-sink order."""
        return tuple(zip(self.nodes[:-1], self.nodes[1:]))

    def __len__(self) -> int:
        return len(self.nodes) - 1


@dataclass(frozen=True)
class MaxFlowResult:
    """Outcome of a max-flow solve.

    Attributes:
        total_flow: Sum of the bottlenecks of all accepted augmenting paths.
        capacity: The capacity matrix that was solved.
        flow: Final flow on every arc.
        residual: Final residual capacity on every arc.
        paths: Accepted augmenting paths in the order they were applied.
        complete: False when the solve stopped early (iteration limit or
            single-path mode) while another augmenting path was available;
            ``total_flow`` is then a lower bound, not the maximum.
    """

    total_flow: float
    capacity: np.ndarray
    flow: np.ndarray
    residual: np.ndarray
    paths: List[AugmentingPath] = field(default_factory=list)
    complete: bool = True

    @property
    def iterations(self) -> int:
        """Number of augmentations performed."""
        return len(self.paths)

    @property
    def node_count(self) -> int:
        return int(self.capacity.shape[0])

    def saturated_arcs(self) -> List[Arc]:
        """Arcs whose whole capacity is used by the flow."""
        rows, cols = np.nonzero((self.capacity > 0) & (self.residual <= 0))
        return [(int(i), int(j)) for i, j in zip(rows, cols)]
