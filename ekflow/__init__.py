"""ekflow: maximum flow in capacitated networks with Edmonds-Karp.

A network is an ``n x n`` capacity matrix; node ``0`` is the source and node
``n - 1`` the sink. Flow is pushed along fewest-arc augmenting paths found by
breadth-first search over residual capacities until the sink is unreachable.

Primary API:
    FlowNetwork - validated capacity/residual/flow matrices
    calc_max_flow() - solve a FlowNetwork
    solve() - build and solve from a capacity matrix
    MaxFlowResult, AugmentingPath - result types
    random_network() - random forward-only networks
    read_matrix(), load_network_file() - network file readers

Example:
    from ekflow import solve

    result = solve([[0, 6, 5, 0], [0, 0, 0, 4], [0, 0, 0, 3], [0, 0, 0, 0]])
    result.total_flow  # 7.0
"""

from __future__ import annotations

from ekflow import cli, logging
from ekflow._version import __version__
from ekflow.algorithms.bfs import find_augmenting_path
from ekflow.algorithms.max_flow import calc_max_flow, solve
from ekflow.generate import random_network
from ekflow.io import NetworkFormatError, load_network_file, read_matrix
from ekflow.network import FlowNetwork, InvalidNetwork
from ekflow.nx import NodeMap, from_networkx, to_networkx
from ekflow.types import AugmentingPath, MaxFlowResult, NodeColor

__all__ = [
    # Version
    "__version__",
    # Model
    "FlowNetwork",
    "InvalidNetwork",
    # Algorithms
    "calc_max_flow",
    "solve",
    "find_augmenting_path",
    # Types
    "AugmentingPath",
    "MaxFlowResult",
    "NodeColor",
    # Input
    "NetworkFormatError",
    "read_matrix",
    "load_network_file",
    "random_network",
    # NetworkX
    "NodeMap",
    "from_networkx",
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
