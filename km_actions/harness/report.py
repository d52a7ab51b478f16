"""Tabular summaries of round-trip runs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Union

import pandas as pd

from .roundtrip import RoundTripResult

logger = logging.getLogger(__name__)

COLUMNS = ["name", "passed", "mismatch", "engine_errors", "script_error", "error", "artifact_path"]


def results_frame(results: Iterable[RoundTripResult]) -> pd.DataFrame:
    rows = [
        {
            "name": result.name,
            "passed": result.passed,
            "mismatch": result.mismatch,
            "engine_errors": len(result.engine_errors),
            "script_error": result.script_error or "",
            "error": result.error or "",
            "artifact_path": str(result.artifact_path) if result.artifact_path else "",
        }
        for result in results
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def summarize(results: Union[pd.DataFrame, Iterable[RoundTripResult]]) -> Dict[str, float]:
    frame = results if isinstance(results, pd.DataFrame) else results_frame(results)
    total = int(len(frame))
    passed = int(frame["passed"].sum()) if total else 0
    return {
        "total": total,
        "passed": passed,
        "failed": total - passed,
        "mismatched": int(frame["mismatch"].sum()) if total else 0,
        "pass_rate": round(passed / total, 4) if total else 0.0,
    }


def failed_cases(frame: pd.DataFrame) -> pd.DataFrame:
    return frame[~frame["passed"].astype(bool)].reset_index(drop=True)


def write_report(results: Iterable[RoundTripResult], path: Path) -> pd.DataFrame:
    """Write a ``.csv`` or ``.json`` report, chosen by the file suffix."""

    frame = results_frame(results)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".json":
        frame.to_json(path, orient="records", indent=2)
    else:
        frame.to_csv(path, index=False)
    summary = summarize(frame)
    logger.info(
        "Wrote %s: %d passed, %d failed (%.1f%%)",
        path,
        summary["passed"],
        summary["failed"],
        summary["pass_rate"] * 100,
    )
    return frame
