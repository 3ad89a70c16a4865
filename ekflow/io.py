"""Reading and writing capacity matrices.

Two file formats are supported.

Text network files hold the node count on the first non-empty line, followed
by one line per matrix *column*::

    4
    0 0 0 0
    6 0 0 0
    5 0 0 0
    0 4 3 0

Value ``k`` on column line ``i`` (counting from zero after the size line) is
the capacity of arc ``k -> i``; the example above has arcs ``0->1`` (6),
``0->2`` (5), ``1->3`` (4) and ``2->3`` (3). Missing trailing values and
missing column lines are zero.

YAML network files (``.yaml`` / ``.yml``) hold a mapping with either a
row-major ``capacity`` matrix::

    capacity:
      - [0, 6, 5, 0]
      - [0, 0, 0, 4]
      - [0, 0, 0, 3]
      - [0, 0, 0, 0]

or a node count and an arc list::

    nodes: 4
    arcs:
      - {source: 0, target: 1, capacity: 6}
      - {source: 1, target: 3, capacity: 4}
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Union

import numpy as np
import yaml

from ekflow.report import format_number
from ekflow.types import MaxFlowResult

PathLike = Union[str, Path]

YAML_SUFFIXES = (".yaml", ".yml")


class NetworkFormatError(ValueError):
    """Raised when a network file cannot be parsed."""


def parse_matrix(lines: Iterable[str], source: str = "<input>") -> np.ndarray:
    """Parse the text network format into a row-major capacity matrix.

    Args:
        lines: Lines of the file, with or without line terminators.
        source: Name used in error messages.

    Returns:
        ``n x n`` float matrix.

    Raises:
        NetworkFormatError: On a malformed size line, a size below 2, a
            non-numeric value, a column line with more than ``n`` values or
            more than ``n`` column lines.
    """
    matrix = None
    size = 0
    column = 0
    for line_no, raw in enumerate(lines, start=1):
        tokens = raw.split()
        if not tokens:
            continue

        if matrix is None:
            if len(tokens) != 1:
                raise NetworkFormatError(
                    f"{source}:{line_no}: expected the node count, got {raw.strip()!r}"
                )
            try:
                size = int(tokens[0])
            except ValueError:
                raise NetworkFormatError(
                    f"{source}:{line_no}: invalid node count {tokens[0]!r}"
                ) from None
            if size < 2:
                raise NetworkFormatError(
                    f"{source}:{line_no}: network size must be at least 2, got {size}"
                )
            matrix = np.zeros((size, size), dtype=float)
            continue

        if column >= size:
            raise NetworkFormatError(
                f"{source}:{line_no}: more than {size} column lines"
            )
        if len(tokens) > size:
            raise NetworkFormatError(
                f"{source}:{line_no}: {len(tokens)} values for a {size}-node network"
            )
        for row, token in enumerate(tokens):
            try:
                matrix[row, column] = float(token)
            except ValueError:
                raise NetworkFormatError(
                    f"{source}:{line_no}: invalid capacity {token!r}"
                ) from None
        column += 1

    if matrix is None:
        raise NetworkFormatError(f"{source}: missing node count")
    return matrix


def read_matrix(path: PathLike) -> np.ndarray:
    """Read a text network file. See :func:`parse_matrix`."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        return parse_matrix(fh, source=str(path))


def format_matrix_file(capacity: np.ndarray) -> str:
    """Render ``capacity`` in the text network format."""
    capacity = np.asarray(capacity, dtype=float)
    lines = [str(capacity.shape[0])]
    # One line per column of the matrix
    for column in capacity.T:
        lines.append(" ".join(format_number(v) for v in column))
    return "\n".join(lines) + "\n"


def write_matrix(path: PathLike, capacity: np.ndarray) -> None:
    Path(path).write_text(format_matrix_file(capacity), encoding="utf-8")


def matrix_from_mapping(data: Any, source: str = "<input>") -> np.ndarray:
    """Build a capacity matrix from a parsed YAML document."""
    if not isinstance(data, dict):
        raise NetworkFormatError(f"{source}: expected a mapping at top level")

    if "capacity" in data:
        rows = data["capacity"]
        if not isinstance(rows, list) or not all(isinstance(r, list) for r in rows):
            raise NetworkFormatError(f"{source}: 'capacity' must be a list of rows")
        try:
            return np.array(rows, dtype=float)
        except (TypeError, ValueError) as exc:
            raise NetworkFormatError(f"{source}: invalid capacity matrix: {exc}") from exc

    if "nodes" not in data:
        raise NetworkFormatError(f"{source}: expected 'capacity' or 'nodes' and 'arcs'")
    size = data["nodes"]
    if not isinstance(size, int) or isinstance(size, bool) or size < 2:
        raise NetworkFormatError(
            f"{source}: 'nodes' must be an integer of at least 2, got {size!r}"
        )
    matrix = np.zeros((size, size), dtype=float)
    for idx, arc in enumerate(data.get("arcs") or []):
        try:
            i, j = int(arc["source"]), int(arc["target"])
            value = float(arc["capacity"])
        except (KeyError, TypeError, ValueError) as exc:
            raise NetworkFormatError(f"{source}: invalid arc #{idx}: {arc!r}") from exc
        if not (0 <= i < size and 0 <= j < size):
            raise NetworkFormatError(
                f"{source}: arc #{idx} {i}->{j} is outside nodes 0..{size - 1}"
            )
        matrix[i, j] = value
    return matrix


def load_network_file(path: PathLike) -> np.ndarray:
    """Read a network file, choosing the format from the file suffix."""
    path = Path(path)
    if path.suffix.lower() not in YAML_SUFFIXES:
        return read_matrix(path)
    with path.open("r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise NetworkFormatError(f"{path}: invalid YAML: {exc}") from exc
    return matrix_from_mapping(data, source=str(path))


def result_to_dict(result: MaxFlowResult) -> Dict[str, Any]:
    """Return a JSON-serialisable view of ``result``."""
    return {
        "total_flow": result.total_flow,
        "complete": result.complete,
        "iterations": result.iterations,
        "nodes": result.node_count,
        "paths": [
            {"nodes": list(p.nodes), "bottleneck": p.bottleneck} for p in result.paths
        ],
        "capacity": result.capacity.tolist(),
        "flow": result.flow.tolist(),
        "residual": result.residual.tolist(),
    }
