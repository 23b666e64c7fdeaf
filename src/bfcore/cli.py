from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import List, Optional

from .errors import BFError, UnterminatedLoopError
from .evaluator import TapeEvaluator
from .parser import count_nodes, format_tree, max_depth, parse_tree


STEP_LIMIT_ENV = "BFCORE_STEP_LIMIT"


def _resolve_step_limit(value: Optional[int]) -> Optional[int]:
    """Flag value, else $BFCORE_STEP_LIMIT, else unbounded. Raises ValueError."""
    if value is None:
        raw = os.environ.get(STEP_LIMIT_ENV, "").strip()
        if not raw:
            return None
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"{STEP_LIMIT_ENV} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"step limit must be >= 0, got {value}")
    return value


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _report(err: BFError) -> None:
    text = err.report() if isinstance(err, UnterminatedLoopError) else str(err)
    print(f"Error: {text}", file=sys.stderr)


def _format_cells(cells: List[int]) -> str:
    rows = [" ".join(map(str, cells[i:i + 8])) for i in range(0, len(cells), 8)]
    return "\n".join(rows)


def _cmd_run(args: argparse.Namespace) -> int:
    try:
        max_steps = _resolve_step_limit(args.max_steps)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    source = _read_source(args.file)
    evaluator = TapeEvaluator(source, max_steps=max_steps)

    start = time.time()
    try:
        state = evaluator.run()
    except BFError as e:
        _report(e)
        return 1
    end = time.time()

    sys.stdout.write(''.join(state.output))
    sys.stdout.flush()

    if args.stats:
        print("\n================", file=sys.stderr)
        print(f"Execution took {(end - start) * 1000:.2f} ms, {state.steps} steps, pointer at {state.pointer}", file=sys.stderr)
    if args.dump > 0:
        print(_format_cells([int(b) for b in state.memory[:args.dump]]), file=sys.stderr)
    return 0


def _cmd_parse(args: argparse.Namespace) -> int:
    source = _read_source(args.file)
    try:
        tree = parse_tree(source)
    except BFError as e:
        _report(e)
        return 1

    leaves, loops = count_nodes(tree)
    print(f"ok: {leaves} leaves, {loops} loops, depth {max_depth(tree)}")
    if args.tree:
        print(format_tree(tree))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfcore",
        description="Parse and evaluate Brainfuck programs on a 30000-cell tape.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Evaluate a program and print its output")
    run.add_argument("file", help="Source file, or - for stdin")
    run.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help=f"Abort after this many instructions (default: ${STEP_LIMIT_ENV}, else unbounded)",
    )
    run.add_argument("--dump", type=int, default=0, help="Print the first N tape cells after the run")
    run.add_argument("--stats", action="store_true", help="Report timing and step count")
    run.set_defaults(func=_cmd_run)

    check = sub.add_parser("parse", help="Check loop structure without running")
    check.add_argument("file", help="Source file, or - for stdin")
    check.add_argument("--tree", action="store_true", help="Print the nested tree")
    check.set_defaults(func=_cmd_parse)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
        logging.getLogger("bfcore").setLevel(logging.DEBUG)

    try:
        return args.func(args)
    except FileNotFoundError:
        print(f"Couldn't find file {args.file}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
