# km_actions/app/environment.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


@dataclass
class Paths:
    """Resolved filesystem locations used by the harness."""

    root: Path
    data_root: Path
    failures_dir: Path
    artifacts_dir: Path
    reports_dir: Path
    settings_file: Path


def build_default_paths(env: Optional[Mapping[str, str]] = None, failures_dir: Optional[str] = None) -> Paths:
    """Create the default Paths collection and ensure directories exist.

    The data root is ``$KM_ACTIONS_ROOT/data`` when set, otherwise ``./km_actions_data``.
    """

    source_env = os.environ if env is None else env
    root_value = source_env.get("KM_ACTIONS_ROOT")
    root = Path(root_value).expanduser() if root_value else Path.cwd()
    data_root = root / "data" if root_value else root / "km_actions_data"
    paths = Paths(
        root=root,
        data_root=data_root,
        failures_dir=Path(failures_dir).expanduser() if failures_dir else data_root / "failures",
        artifacts_dir=data_root / "artifacts",
        reports_dir=data_root / "reports",
        settings_file=data_root / "settings.json",
    )
    _ensure_dirs(paths.data_root, paths.failures_dir, paths.artifacts_dir, paths.reports_dir)
    return paths


def _ensure_dirs(*directories: Path) -> None:
    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)
