"""Print a sorting trace to the console, one log line per step.

Usage:
    python debug_trace.py graph.txt --algorithm bfs
    echo "0: 1\n1: 0" | python debug_trace.py - --algorithm dfs --verbose
"""

import argparse
import sys
from pathlib import Path

from graph import SAMPLE_INPUTS, Algorithm, FormatError, InputMode, TraceStep, parse
from server.session import summarize_step
from sorting import EmptyGraphError, run_sort


def format_step(step: TraceStep, verbose: bool = False) -> str:
    line = f"Step {step.index + 1}: {step.message}"
    if not verbose:
        return line
    details = []
    if step.stack is not None:
        details.append(f"stack={list(step.stack)}")
    if step.queue is not None:
        details.append(f"queue={list(step.queue)}")
    if step.in_degree is not None:
        details.append(f"in_degree={dict(step.in_degree)}")
    if step.active_edge is not None:
        details.append(f"edge={step.active_edge[0]}->{step.active_edge[1]}")
    if details:
        line += "\n    " + " ".join(details)
    return line


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the step-by-step trace of a topological sort.")
    parser.add_argument(
        "input",
        nargs="?",
        default="",
        help="Graph text file, '-' for stdin. Defaults to the built-in sample.",
    )
    parser.add_argument("--mode", choices=[m.value for m in InputMode], default=InputMode.LIST.value)
    parser.add_argument("--algorithm", choices=[a.value for a in Algorithm], default=Algorithm.DFS.value)
    parser.add_argument("--verbose", action="store_true", help="Show auxiliary state per step.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.input == "-":
        text = sys.stdin.read()
    elif args.input:
        text = Path(args.input).read_text(encoding="utf-8")
    else:
        text = SAMPLE_INPUTS[args.mode]

    try:
        graph = parse(text, args.mode)
        trace = run_sort(graph, args.algorithm)
    except (FormatError, EmptyGraphError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for step in trace.steps:
        print(format_step(step, verbose=args.verbose))
    print()
    print(summarize_step(trace.final_step, trace.algorithm))
    return 0 if trace.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
