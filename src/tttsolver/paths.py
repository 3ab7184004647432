"""Path helpers for tracking output.

Environment-first, with fallbacks that still work when installed as a
package or executed from arbitrary CWDs.
"""

from __future__ import annotations

import os
from pathlib import Path


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var TTTSOLVER_REPO_ROOT -> nearest parent containing .git -> CWD.
    """
    env = os.getenv("TTTSOLVER_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def runs_dir() -> Path:
    p = os.getenv("TTTSOLVER_RUNS_DIR")
    return Path(p) if p else repo_root() / "runs"
