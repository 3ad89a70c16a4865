"""Edmonds-Karp building blocks: augmenting-path search, flow augmentation
and the solver loop in ``ekflow.algorithms.max_flow``."""

from ekflow.algorithms.augment import augment_flow
from ekflow.algorithms.bfs import (
    TraversalState,
    breadth_first_search,
    find_augmenting_path,
)

__all__ = [
    "augment_flow",
    "TraversalState",
    "breadth_first_search",
    "find_augmenting_path",
]
