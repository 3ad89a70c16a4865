"""Capacitated flow network stored as dense matrices.

A network with ``n`` nodes is described by an ``n x n`` capacity matrix where
entry ``(i, j)`` is the capacity of arc ``i -> j`` and ``0`` means "no arc".
Node ``0`` is always the source and node ``n - 1`` the sink.

The network owns three matrices for the duration of a solve:

* ``capacity``: immutable after construction.
* ``residual``: starts as a copy of ``capacity``.
* ``flow``: starts at zero.

``residual == capacity - flow`` holds at all times, up to floating-point
rounding: both sides are updated with the same bottleneck but rounded
separately. Only :meth:`FlowNetwork.apply_path` mutates ``residual`` and
``flow``; the accessors hand out read-only views.
"""

from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np
from numpy.typing import ArrayLike

from ekflow.algorithms.augment import augment_flow
from ekflow.types import AugmentingPath, NodeIndex


class InvalidNetwork(ValueError):
    """Raised when a capacity matrix does not describe a valid network."""


def _read_only(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


def validate_capacity(capacity: ArrayLike) -> np.ndarray:
    """Return ``capacity`` as a float matrix, or raise ``InvalidNetwork``.

    The matrix must be square with at least two rows and contain only finite,
    non-negative numbers.
    """
    try:
        matrix = np.array(capacity, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidNetwork(f"Capacity matrix is not numeric: {exc}") from exc

    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise InvalidNetwork(
            f"Capacity matrix must be square, got shape {matrix.shape}"
        )
    if matrix.shape[0] < 2:
        raise InvalidNetwork(
            f"A network needs at least 2 nodes, got {matrix.shape[0]}"
        )
    if not np.all(np.isfinite(matrix)):
        raise InvalidNetwork("Capacity matrix contains NaN or infinite values")
    negative = np.argwhere(matrix < 0)
    if negative.size:
        i, j = (int(v) for v in negative[0])
        raise InvalidNetwork(
            f"Negative capacity {matrix[i, j]} on arc {i}->{j}"
        )
    return matrix


class FlowNetwork:
    """Capacity, residual and flow matrices of a single-source, single-sink network.

    Args:
        capacity: Square matrix of non-negative capacities. It is copied, so
            later changes to the argument do not affect the network.

    Raises:
        InvalidNetwork: If the matrix is not square, has fewer than two rows,
            or contains negative or non-finite entries.
    """

    def __init__(self, capacity: ArrayLike) -> None:
        self._capacity = validate_capacity(capacity)
        self._capacity.flags.writeable = False
        self._residual = self._capacity.copy()
        self._flow = np.zeros_like(self._capacity)
        self._total_flow = 0.0

    def __repr__(self) -> str:
        return (
            f"FlowNetwork(nodes={self.node_count}, arcs={self.arc_count}, "
            f"total_flow={self._total_flow})"
        )

    @property
    def node_count(self) -> int:
        return int(self._capacity.shape[0])

    @property
    def source(self) -> NodeIndex:
        return 0

    @property
    def sink(self) -> NodeIndex:
        return self.node_count - 1

    @property
    def capacity(self) -> np.ndarray:
        return self._capacity

    @property
    def residual(self) -> np.ndarray:
        return _read_only(self._residual)

    @property
    def flow(self) -> np.ndarray:
        return _read_only(self._flow)

    @property
    def total_flow(self) -> float:
        return self._total_flow

    @property
    def arc_count(self) -> int:
        return int(np.count_nonzero(self._capacity))

    def arcs(self) -> Iterator[Tuple[NodeIndex, NodeIndex, float]]:
        """Yield ``(tail, head, capacity)`` for every arc in row-major order."""
        for i, j in np.argwhere(self._capacity > 0):
            yield int(i), int(j), float(self._capacity[i, j])

    def is_forward_only(self) -> bool:
        """Return True if every arc leads from a lower to a higher node index.

        The augmenting-path search only looks at successors with an index not
        below the current node, so it finds every path only in networks for
        which this holds.
        """
        return not np.any(np.tril(self._capacity))

    def apply_path(self, path: AugmentingPath) -> None:
        """Push ``path.bottleneck`` units of flow along ``path``."""
        augment_flow(self._flow, self._residual, path.nodes, path.bottleneck)
        self._total_flow += path.bottleneck

    def reset(self) -> None:
        """Drop all flow: residual back to capacity, total back to zero."""
        np.copyto(self._residual, self._capacity)
        self._flow.fill(0.0)
        self._total_flow = 0.0
