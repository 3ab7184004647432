#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from tttsolver.paths import runs_dir
from tttsolver.solver import solve
from tttsolver.state_space import StateSpace
from tttsolver.tracking import log_metrics, log_params, maybe_mlflow_run


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 5
    tracking: str = "none"  # or "mlflow"
    log_dir: Optional[Path] = None


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Time repeated full solves")
    ap.add_argument("--repeats", type=int, default=Config.repeats)
    ap.add_argument("--tracking", choices=["none", "mlflow"], default="none")
    ap.add_argument("--log-dir", type=Path, default=None)
    ns = ap.parse_args(argv)
    cfg = Config(repeats=ns.repeats, tracking=ns.tracking, log_dir=ns.log_dir)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    with maybe_mlflow_run(cfg.tracking == "mlflow", run_name="benchmarks",
                          log_dir=cfg.log_dir or runs_dir()) as tracked:
        solve_times: List[float] = []
        pops: List[int] = []
        for _ in range(cfg.repeats):
            space = StateSpace.build()
            space.link_predecessors()
            st = solve(space)
            solve_times.append(st.elapsed_s)
            pops.append(st.pops)
        m_solve, h_solve = ci95(solve_times)
        logging.info("solve_mean_s=%.3f ci95_half_s=%.3f pops=%s", m_solve, h_solve, sorted(set(pops)))
        if tracked:
            log_params({"repeats": cfg.repeats})
            log_metrics({"solve_mean_s": m_solve, "solve_ci95_half_s": h_solve})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
