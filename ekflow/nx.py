"""NetworkX graph conversion utilities.

Converts between NetworkX directed graphs and the dense capacity matrices
used by ekflow.

Example:
    >>> import networkx as nx
    >>> from ekflow.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("s", "a", capacity=6.0)
    >>> G.add_edge("a", "t", capacity=4.0)
    >>>
    >>> capacity, node_map = from_networkx(G, nodes=["s", "a", "t"])
    >>> node_map.to_index["t"]
    2
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Hashable, List, Optional, Sequence, Tuple

import numpy as np

if TYPE_CHECKING:
    import networkx as nx


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and matrix indices.

    Index ``0`` is the source and the last index the sink.

    Attributes:
        to_index: Maps original node names to matrix indices.
        to_name: Maps matrix indices back to original node names.
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: Sequence[Hashable]) -> "NodeMap":
        """Create a NodeMap from node names in index order."""
        to_index = {name: i for i, name in enumerate(names)}
        if len(to_index) != len(names):
            raise ValueError("Node names must be unique")
        return cls(to_index=to_index, to_name=dict(enumerate(names)))

    def __len__(self) -> int:
        return len(self.to_index)


def from_networkx(
    G: "nx.Graph",
    *,
    nodes: Optional[Sequence[Hashable]] = None,
    capacity_attr: str = "capacity",
    default_capacity: float = 1.0,
) -> Tuple[np.ndarray, NodeMap]:
    """Convert a NetworkX graph to a capacity matrix.

    Parallel edges of a multigraph are summed. Undirected graphs contribute
    an arc in each direction.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph or MultiGraph).
        nodes: Node order; the first is the source and the last the sink.
            Defaults to ``list(G.nodes)``. Nodes of ``G`` missing from this
            list, and their edges, are dropped.
        capacity_attr: Edge attribute holding the capacity.
        default_capacity: Capacity of edges without the attribute.

    Returns:
        ``(capacity, node_map)``.
    """
    names: List[Hashable] = list(G.nodes) if nodes is None else list(nodes)
    node_map = NodeMap.from_names(names)
    matrix = np.zeros((len(names), len(names)), dtype=float)

    directed = G.is_directed()
    for u, v, data in G.edges(data=True):
        if u not in node_map.to_index or v not in node_map.to_index:
            continue
        i, j = node_map.to_index[u], node_map.to_index[v]
        value = float(data.get(capacity_attr, default_capacity))
        matrix[i, j] += value
        if not directed and i != j:
            matrix[j, i] += value
    return matrix, node_map


def to_networkx(
    capacity: np.ndarray,
    flow: Optional[np.ndarray] = None,
    node_map: Optional[NodeMap] = None,
    *,
    capacity_attr: str = "capacity",
    flow_attr: str = "flow",
) -> "nx.DiGraph":
    """Convert a capacity matrix (and optional flow) to a NetworkX DiGraph.

    Every non-zero capacity entry becomes an edge. Nodes are labelled with
    their index unless a ``node_map`` restores the original names.
    """
    import networkx as nx

    capacity = np.asarray(capacity, dtype=float)
    G = nx.DiGraph()

    def name(idx: int) -> Hashable:
        return idx if node_map is None else node_map.to_name.get(idx, idx)

    for idx in range(capacity.shape[0]):
        G.add_node(name(idx))
    for i, j in np.argwhere(capacity > 0):
        attrs = {capacity_attr: float(capacity[i, j])}
        if flow is not None:
            attrs[flow_attr] = float(flow[i, j])
        G.add_edge(name(int(i)), name(int(j)), **attrs)
    return G
