"""Allure reporting helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

try:
    import allure  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    allure = None  # type: ignore


def attach_text(name: str, text: str, attachment_type: Optional[str] = None) -> None:
    if allure is None or not text:
        return
    attachment_type = attachment_type or "application/xml"
    try:
        allure.attach(text, name=name, attachment_type=attachment_type)
    except Exception:  # pragma: no cover - reporting must not break a run
        pass


def attach_file(name: str, path: Optional[Path], attachment_type: Optional[str] = None) -> None:
    if allure is None or path is None:
        return
    if not path.exists():
        return
    attachment_type = attachment_type or "application/octet-stream"
    try:
        allure.attach(path.read_bytes(), name=name, attachment_type=attachment_type)
    except Exception:  # pragma: no cover - reporting must not break a run
        pass


def attach_round_trip(result) -> None:
    """Attach both XML texts and the preserved ``.kmmacros`` of a round-trip result."""

    attach_text(f"{result.name} generated", result.generated_xml)
    attach_text(f"{result.name} retrieved", result.retrieved_xml)
    attach_file(f"{result.name} kmmacros", result.artifact_path)
