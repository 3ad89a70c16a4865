"""Command-line interface for ekflow."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from ekflow.algorithms.max_flow import calc_max_flow
from ekflow.generate import random_network
from ekflow.io import format_matrix_file, load_network_file, result_to_dict
from ekflow.logging import enable_debug_logging, get_logger, set_global_log_level
from ekflow.network import FlowNetwork
from ekflow.report import format_arcs, format_matrix, format_number

logger = get_logger(__name__)

#: Print options of the ``solve`` command, in output order.
PRINT_SECTIONS = {
    "a": "Capacity matrix",
    "b": "Flow matrix",
    "c": "Initial flow",
    "d": "Final flow",
}


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _print_options(value: str) -> str:
    """argparse type for ``--print``: any combination of a, b, c and d."""
    letters = value.lower()
    unknown = sorted(set(letters) - set(PRINT_SECTIONS))
    if not letters or unknown:
        raise argparse.ArgumentTypeError(
            f"print options must be a combination of {''.join(PRINT_SECTIONS)}, got {value!r}"
        )
    return letters


def _fail(message: str) -> None:
    logger.error(message)
    print(f"❌ ERROR: {message}")
    sys.exit(1)


def _solve(
    file: Optional[Path],
    nodes: Optional[int],
    seed: Optional[int],
    print_options: str,
    results_path: Optional[Path],
    max_iterations: Optional[int],
) -> None:
    """Load or generate a network, solve it and print the requested sections."""
    _start_time = perf_counter()
    try:
        if file is not None:
            logger.info(f"Reading network from {file}")
            capacity = load_network_file(file)
        else:
            logger.info(f"Generating random network with {nodes} nodes")
            capacity = random_network(nodes, seed=seed)
        network = FlowNetwork(capacity)
    except FileNotFoundError:
        _fail(f"Network file not found: {file}")
    except OSError as e:
        _fail(f"Cannot read network file {file}: {e}")
    except ValueError as e:
        _fail(f"{type(e).__name__}: {e}")

    result = calc_max_flow(network, max_iterations=max_iterations)

    renderers = {
        "a": lambda: format_matrix(result.capacity),
        "b": lambda: format_matrix(result.flow),
        "c": lambda: format_arcs(result.capacity),
        "d": lambda: format_arcs(result.capacity, result.flow),
    }
    for key, heading in PRINT_SECTIONS.items():
        if key in print_options:
            print(heading)
            print(renderers[key]())
            print()

    if results_path is not None:
        results_path.parent.mkdir(parents=True, exist_ok=True)
        results_path.write_text(json.dumps(result_to_dict(result), indent=2))
        logger.info(f"Results written to {results_path}")

    suffix = "" if result.complete else " (stopped early, not maximal)"
    print(f"Maximum flow is {format_number(result.total_flow)}{suffix}")
    logger.info(f"Solve completed in {_format_duration(perf_counter() - _start_time)}")


def _generate(nodes: int, seed: Optional[int], output: Optional[Path]) -> None:
    """Write a random network in the text format to ``output`` or stdout."""
    try:
        capacity = random_network(nodes, seed=seed)
    except ValueError as e:
        _fail(f"{type(e).__name__}: {e}")

    text = format_matrix_file(capacity)
    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    logger.info(f"Random network with {nodes} nodes written to {output}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``ekflow`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="ekflow",
        description="Compute maximum flow with the Edmonds-Karp algorithm.",
        epilog=(
            "examples:\n"
            "  ekflow solve --file nodes.txt\n"
            "      read the network from nodes.txt and print the maximum flow\n"
            "  ekflow solve --random 15 --print abcd\n"
            "      solve a random 15-node network and print every section"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{solve,generate}",
        help="Available commands",
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        "solve",
        help="Compute the maximum flow of a network",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "print options (printed in this order):\n"
            + "\n".join(f"  {k}  {v}" for k, v in PRINT_SECTIONS.items())
        ),
    )
    source = solve_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--file",
        "-f",
        type=Path,
        help="Network file (text format, or YAML with a .yaml/.yml suffix)",
    )
    source.add_argument(
        "--random",
        "-r",
        type=int,
        metavar="NODES",
        help="Solve a random network with this many nodes",
    )
    solve_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for --random"
    )
    solve_parser.add_argument(
        "--print",
        "-p",
        dest="print_options",
        type=_print_options,
        default=None,
        metavar="abcd",
        help="Sections to print before the maximum flow",
    )
    solve_parser.add_argument(
        "--results",
        type=Path,
        default=None,
        help="Export the result (total, paths and matrices) to a JSON file",
    )
    solve_parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Stop after this many augmenting paths (result may not be maximal)",
    )

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate", help="Write a random network in the text format"
    )
    generate_parser.add_argument("nodes", type=int, help="Number of nodes")
    generate_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )
    generate_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        enable_debug_logging()
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "solve":
        if args.max_iterations is not None and args.max_iterations < 0:
            parser.error("--max-iterations must be non-negative")
        _solve(
            file=args.file,
            nodes=args.random,
            seed=args.seed,
            print_options=args.print_options or "",
            results_path=args.results,
            max_iterations=args.max_iterations,
        )
    elif args.command == "generate":
        _generate(args.nodes, args.seed, args.output)


if __name__ == "__main__":
    main()
