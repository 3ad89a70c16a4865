"""Configuration classes for ekflow components."""

from dataclasses import dataclass


@dataclass
class GeneratorConfig:
    """Shape of the random networks built by ``ekflow.generate``."""

    # Arcs added leaving each non-sink node and entering each non-source node
    min_arcs_per_node: int = 1
    max_arcs_per_node: int = 2

    # Integral arc capacities are drawn uniformly from this inclusive range
    min_capacity: int = 1
    max_capacity: int = 10

    def __post_init__(self) -> None:
        if not 0 < self.min_arcs_per_node <= self.max_arcs_per_node:
            raise ValueError(
                "arcs per node must satisfy 0 < min_arcs_per_node <= max_arcs_per_node"
            )
        if not 0 < self.min_capacity <= self.max_capacity:
            raise ValueError("capacities must satisfy 0 < min_capacity <= max_capacity")


@dataclass
class SolverConfig:
    """Numeric settings for the augmenting-path search."""

    # An arc is traversable while its residual capacity is above this value
    residual_threshold: float = 0.0


# Global configuration instances
GENERATOR_CONFIG = GeneratorConfig()
SOLVER_CONFIG = SolverConfig()
