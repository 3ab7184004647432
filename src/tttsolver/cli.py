from __future__ import annotations

import argparse
import csv
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .display import render_position, render_tree
from .game_basics import (
    OUTCOME_NAMES,
    PLAYER_NAMES,
    check_id,
    encode,
    parse_board,
    parse_player,
    serialize_board,
)
from .paths import runs_dir
from .solver import SolverInvariantError, solve, solve_all
from .state_space import StateSpace
from .summary import reachable_ids, summarize
from .tracking import log_metrics, log_params, maybe_mlflow_run


@dataclass
class RunArgs:
    verbose: bool = False
    tracking: str = "none"  # one of: "none", "mlflow"
    log_dir: Optional[Path] = None

    def resolved_log_dir(self) -> Path:
        return self.log_dir if self.log_dir is not None else runs_dir()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tttsolver", description="Exhaustive tic-tac-toe solver")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for tracking logs (default: $TTTSOLVER_RUNS_DIR or <repo>/runs)",
    )

    sub.add_parser("solve", help="Solve every position and log outcome counts")

    p_show = sub.add_parser("show", help="Print one solved position")
    target = p_show.add_mutually_exclusive_group(required=True)
    target.add_argument("--id", type=int, help="Position id")
    target.add_argument("--board", help="Board string, e.g. O---X---- (-=empty)")
    p_show.add_argument("--player", default="O", help="Player to move with --board (O or X, default O)")

    p_tree = sub.add_parser("tree", help="Print a position and its successors as an indented tree")
    p_tree.add_argument("--id", type=int, default=0, help="Starting position id (default: 0, empty board)")
    p_tree.add_argument("--depth", type=int, default=1, help="Number of moves to expand (default: 1)")

    p_dump = sub.add_parser("dump", help="Stream the solved table as CSV to stdout")
    p_dump.add_argument(
        "--reachable-only", action="store_true", help="Only positions reachable from the empty board"
    )

    return p


def _print_info() -> None:
    import importlib.util
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _cmd_solve(args: RunArgs) -> int:
    with maybe_mlflow_run(args.tracking == "mlflow", run_name="solve", log_dir=args.resolved_log_dir()) as tracked:
        space = StateSpace.build()
        edges = space.link_predecessors()
        stats = solve(space)
        info = summarize(space)
        logging.info("positions=%d terminal=%d edges=%d", info['positions'], info['terminal'], edges)
        logging.info("expected=%s", info['expected'])
        logging.info(
            "reachable=%d reachable_terminal=%d terminal_outcomes=%s",
            info['reachable'],
            info['reachable_terminal'],
            info['reachable_terminal_outcomes'],
        )
        logging.info("reachable_expected=%s", info['reachable_expected'])
        logging.info("root=%s", info['root_expected'])
        if not tracked:
            return 0
        log_params({"board_size": 3, "num_positions": stats.positions})
        metrics = {
            "positions": float(stats.positions),
            "terminal": float(stats.terminal),
            "resolved": float(stats.resolved),
            "pops": float(stats.pops),
            "solve_s": stats.elapsed_s,
            "reachable": float(info['reachable']),
        }
        metrics.update({f"reachable_{k}": float(v) for k, v in info['reachable_expected'].items()})
        log_metrics(metrics)
    return 0


def _cmd_dump(space: StateSpace, reachable_only: bool) -> int:
    w = csv.writer(sys.stdout)
    w.writerow([
        "id", "board", "next_player", "outcome", "expected_outcome",
        "num_successors", "num_predecessors",
    ])
    ids = sorted(reachable_ids(space)) if reachable_only else range(len(space))
    for i in ids:
        p = space[i]
        w.writerow([
            p.id,
            serialize_board(p.cells),
            PLAYER_NAMES[p.next_player],
            OUTCOME_NAMES[p.outcome],
            OUTCOME_NAMES[p.expected_outcome],
            len(p.successor_ids),
            len(p.predecessor_ids),
        ])
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("tttsolver"))
        except Exception:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    args = RunArgs(verbose=ns.verbose, tracking=ns.tracking, log_dir=ns.log_dir)

    try:
        if ns.cmd == "solve":
            return _cmd_solve(args)

        if ns.cmd == "show":
            if ns.board is not None:
                state_id = encode(parse_board(ns.board), parse_player(ns.player))
            else:
                state_id = check_id(ns.id)
            space = solve_all()
            print(render_position(space.get_position(state_id)))
            return 0

        if ns.cmd == "tree":
            check_id(ns.id)
            if ns.depth < 0:
                raise ValueError(f"depth must be >= 0, got {ns.depth}")
            space = solve_all()
            print(render_tree(space, ns.id, ns.depth))
            return 0

        if ns.cmd == "dump":
            return _cmd_dump(solve_all(), ns.reachable_only)
    except ValueError as e:
        logging.error("%s", e)
        return 2
    except SolverInvariantError as e:
        logging.error("Solver failed: %s", e)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
