"""Text, processing mode and placement keys."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..exceptions import ActionConfigurationError

PROCESSING_MODES = ("TextTokensOnly", "Nothing")
SET_VARIABLE_WHERE = ("Prepend", "Append")


def validate_processing_mode(mode: Optional[str]) -> Optional[str]:
    if mode is not None and mode not in PROCESSING_MODES:
        raise ActionConfigurationError(f"Processing mode must be one of {PROCESSING_MODES}, got {mode!r}")
    return mode


def text_entries(text: str, mode: Optional[str] = None) -> List[Tuple[str, Any]]:
    entries: List[Tuple[str, Any]] = [("Text", text)]
    if mode:
        entries.append(("TextProcessingMode", mode))
    return entries


def processing_mode_entries(mode: Optional[str]) -> List[Tuple[str, Any]]:
    return [("ProcessingMode", mode)] if mode else []


def where_entries(where: Optional[str]) -> List[Tuple[str, Any]]:
    return [("Where", where)] if where else []
