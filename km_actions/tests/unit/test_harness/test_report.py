from __future__ import annotations

import json
from pathlib import Path

import pandas as pd

from km_actions.harness import RoundTripResult, failed_cases, results_frame, summarize, write_report


def _results():
    return [
        RoundTripResult("ok", generated_xml="<dict/>", retrieved_xml="<dict/>", passed=True),
        RoundTripResult("differs", generated_xml="<dict/>", retrieved_xml="<array/>", error="Generated and retrieved XML differ"),
        RoundTripResult("crashed", script_error="osascript exited with status 1", engine_errors=["boom error"]),
    ]


def test_results_frame_has_one_row_per_case() -> None:
    frame = results_frame(_results())
    assert list(frame.columns) == ["name", "passed", "mismatch", "engine_errors", "script_error", "error", "artifact_path"]
    assert frame["name"].tolist() == ["ok", "differs", "crashed"]
    assert frame["mismatch"].tolist() == [False, True, False]
    assert frame["engine_errors"].tolist() == [0, 0, 1]


def test_summarize_counts() -> None:
    summary = summarize(_results())
    assert summary == {"total": 3, "passed": 1, "failed": 2, "mismatched": 1, "pass_rate": 0.3333}
    assert summarize([])["total"] == 0


def test_failed_cases_keeps_only_failures() -> None:
    failures = failed_cases(results_frame(_results()))
    assert failures["name"].tolist() == ["differs", "crashed"]


def test_write_report_csv_and_json(tmp_path: Path) -> None:
    csv_path = tmp_path / "reports" / "run.csv"
    write_report(_results(), csv_path)
    assert pd.read_csv(csv_path)["name"].tolist() == ["ok", "differs", "crashed"]

    json_path = tmp_path / "run.json"
    write_report(_results(), json_path)
    records = json.loads(json_path.read_text(encoding="utf-8"))
    assert records[2]["script_error"] == "osascript exited with status 1"
