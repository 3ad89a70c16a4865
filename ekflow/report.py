"""Human-readable rendering of capacity and flow matrices."""

from __future__ import annotations

from typing import List, Optional

import numpy as np
import pandas as pd

#: Placeholder printed for matrix entries without an arc.
NO_ARC = "***"


def format_number(value: float) -> str:
    """Return ``value`` without a trailing ``.0`` when it is integral.

    Examples:
        5.0 -> "5"; 3.141 -> "3.141"; 0.1 -> "0.1".
    """
    v = float(value)
    if v.is_integer():
        return str(int(v))
    return repr(v)


def matrix_frame(matrix: np.ndarray) -> pd.DataFrame:
    """Return ``matrix`` as a DataFrame laid out like the network file.

    Row ``i`` of the frame is column ``i`` of the matrix, i.e. the capacities
    of the arcs entering node ``i``. Labels are 1-based node numbers and
    zero entries are shown as ``***``.
    """
    matrix = np.asarray(matrix, dtype=float)
    labels = range(1, matrix.shape[0] + 1)
    frame = pd.DataFrame(matrix.T, index=labels, columns=labels)
    return frame.apply(
        lambda col: col.map(lambda v: NO_ARC if v == 0 else format_number(v))
    )


def format_matrix(matrix: np.ndarray) -> str:
    """Format a capacity or flow matrix as a text table."""
    return matrix_frame(matrix).to_string()


def format_arcs(capacity: np.ndarray, flow: Optional[np.ndarray] = None) -> str:
    """List arcs as ``i->j (used/capacity)`` with 1-based node numbers.

    Without ``flow`` every arc is listed with zero usage (the network before
    solving). With ``flow`` only arcs carrying flow are listed. Each output
    line holds the arcs leaving one node; nodes without listed arcs are
    skipped.
    """
    capacity = np.asarray(capacity, dtype=float)
    used = np.zeros_like(capacity) if flow is None else np.asarray(flow, dtype=float)
    shown = capacity if flow is None else used

    lines: List[str] = []
    for i in range(capacity.shape[0]):
        parts = [
            f"{i + 1}->{j + 1} ({format_number(used[i, j])}/{format_number(capacity[i, j])})"
            for j in np.flatnonzero(shown[i])
        ]
        if parts:
            lines.append(" ".join(parts))
    return "\n".join(lines)
