"""Shared fixtures: small capacity matrices with known maximum flows.

Node 0 is the source and the last node the sink in every network.
"""

from __future__ import annotations

import numpy as np
import pytest


def _matrix(size: int, arcs: dict) -> np.ndarray:
    matrix = np.zeros((size, size))
    for (i, j), capacity in arcs.items():
        matrix[i, j] = capacity
    return matrix


@pytest.fixture
def diamond():
    #        [6]     [4]
    #     ┌──────►1──────┐
    #     │              ▼
    #     0              3
    #     │              ▲
    #     └──────►2──────┘
    #        [5]     [3]
    #
    # Max flow: 7
    return _matrix(4, {(0, 1): 6, (0, 2): 5, (1, 3): 4, (2, 3): 3})


@pytest.fixture
def two_node():
    # 0 ──[9]──► 1
    # Max flow: 9
    return _matrix(2, {(0, 1): 9})


@pytest.fixture
def disconnected_sink():
    # 0 ──[5]──► 1        2
    # Max flow: 0
    return _matrix(3, {(0, 1): 5})


@pytest.fixture
def bottleneck_chain():
    # 0 ──[10]──► 1 ──[2]──► 2 ──[10]──► 3
    # Max flow: 2
    return _matrix(4, {(0, 1): 10, (1, 2): 2, (2, 3): 10})


@pytest.fixture
def fractional():
    # 0 ──[3.141]──► 1 ──[3.141]──► 2
    # Max flow: 3.141
    return _matrix(3, {(0, 1): 3.141, (1, 2): 3.141})


@pytest.fixture
def layered6():
    #          [4]      [10]
    #      ┌─────►3───────┐
    #  [10]│              ▼
    #  0──►1──[8]──►4──[10]──►5
    #  │   │[2]     ▲
    #  │   ▼  [9]   │
    #  └──►2────────┘
    #  [10]
    #
    # Max flow: 14 (arc 1->3 limits the upper branch to 4)
    return _matrix(
        6,
        {
            (0, 1): 10,
            (0, 2): 10,
            (1, 2): 2,
            (1, 3): 4,
            (1, 4): 8,
            (2, 4): 9,
            (3, 5): 10,
            (4, 5): 10,
        },
    )


@pytest.fixture
def early_sink():
    # The sink is one arc away from the source, while the longer branch
    # 0->1->2->4 is still being explored when the sink is dequeued.
    #
    # 0 ──[2]──────────────────► 4
    # └─[1]─► 1 ─[1]─► 2 ─[1]──┘     3 (isolated)
    return _matrix(5, {(0, 1): 1, (0, 4): 2, (1, 2): 1, (2, 4): 1})


@pytest.fixture
def backward_arc():
    # The only route to the sink uses arc 2->1, which points to a lower index.
    #
    # 0 ──[3]──► 2 ──[3]──► 1 ──[3]──► 3
    return _matrix(4, {(0, 2): 3, (2, 1): 3, (1, 3): 3})
