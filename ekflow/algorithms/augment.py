"""Forward-only flow augmentation along an augmenting path."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ekflow.types import NodeIndex


def augment_flow(
    flow: np.ndarray,
    residual: np.ndarray,
    path: Sequence[NodeIndex],
    bottleneck: float,
) -> None:
    """
    Push ``bottleneck`` units of flow along ``path`` in place.

    For every arc ``(u, v)`` of the path, ``flow[u, v]`` grows and
    ``residual[u, v]`` shrinks by ``bottleneck``. Reverse arcs are left
    untouched: flow is never cancelled, so ``residual == capacity - flow``
    keeps holding entry by entry, up to floating-point rounding.

    Args:
        flow: Flow matrix to update.
        residual: Residual capacity matrix to update.
        path: Node indices from source to sink.
        bottleneck: Amount to push; must not exceed the residual capacity of
            any arc on the path.
    """
    tails = np.asarray(path[:-1], dtype=np.intp)
    heads = np.asarray(path[1:], dtype=np.intp)
    # A simple path visits each arc once, so fancy-index updates do not collide.
    flow[tails, heads] += bottleneck
    residual[tails, heads] -= bottleneck
