from pathlib import Path

import pytest

from tttsolver.paths import repo_root, runs_dir
from tttsolver.tracking import log_metrics, log_params, maybe_mlflow_run


def test_repo_root_prefers_cwd_when_no_git_and_no_env(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("TTTSOLVER_REPO_ROOT", raising=False)
    monkeypatch.delenv("TTTSOLVER_RUNS_DIR", raising=False)
    monkeypatch.chdir(tmp_path)
    import tttsolver.paths as P

    monkeypatch.setattr(P, "_find_git_root", lambda start: None)

    assert repo_root() == tmp_path
    assert runs_dir() == tmp_path / "runs"


def test_env_overrides(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TTTSOLVER_REPO_ROOT", str(tmp_path))
    monkeypatch.delenv("TTTSOLVER_RUNS_DIR", raising=False)
    assert repo_root() == tmp_path
    assert runs_dir() == tmp_path / "runs"
    monkeypatch.setenv("TTTSOLVER_RUNS_DIR", str(tmp_path / "elsewhere"))
    assert runs_dir() == tmp_path / "elsewhere"


def test_tracking_disabled_is_noop(tmp_path: Path):
    with maybe_mlflow_run(False, run_name="t", log_dir=tmp_path) as active:
        assert active is False
    assert not (tmp_path / "mlruns").exists()


def test_tracking_soft_fails_without_mlflow(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    import builtins

    real_import = builtins.__import__

    def fake_import(name, *args, **kwargs):
        if name == "mlflow":
            raise ImportError("mlflow blocked for test")
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    with maybe_mlflow_run(True, run_name="t", log_dir=tmp_path) as active:
        assert active is False
        log_params({"a": 1})
        log_metrics({"b": 2.0})
