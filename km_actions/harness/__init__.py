"""Round-trip validation of generated actions against a running engine."""

from .normalize import extract_action_dict, normalize_action_xml
from .report import failed_cases, results_frame, summarize, write_report
from .roundtrip import RoundTripHarness, RoundTripResult, sanitize_test_id

__all__ = [
    "RoundTripHarness",
    "RoundTripResult",
    "extract_action_dict",
    "failed_cases",
    "normalize_action_xml",
    "results_frame",
    "sanitize_test_id",
    "summarize",
    "write_report",
]
