"""Finder-style file operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..plist import PlistDict, action_uid
from ..templates.flags import notify_on_failure_entries, stop_on_failure_entries
from .base import DictAction, build, coerce_options, require_choice

FILE_OPERATIONS = (
    "Reveal",
    "CreateUnique",
    "OnlyMove",
    "OnlyRename",
    "Move",
    "Copy",
    "Duplicate",
    "Trash",
    "Delete",
    "RecursiveDelete",
)
# operations that only take a source path
SINGLE_PATH_OPERATIONS = frozenset({"Reveal", "Duplicate", "Trash", "Delete", "RecursiveDelete"})


@dataclass(slots=True, frozen=True)
class FileOptions:
    operation: str = "Reveal"
    source: str = ""
    destination: str = ""
    output_path: Optional[str] = None
    stop_on_failure: Optional[bool] = None
    notify_on_failure: Optional[bool] = None

    def __post_init__(self) -> None:
        require_choice("operation", self.operation, FILE_OPERATIONS)


def create_file(options: Optional[FileOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(FileOptions, options, kwargs)
    destination = "" if opts.operation in SINGLE_PATH_OPERATIONS else (opts.destination or "")
    plist = (
        PlistDict()
        .add("ActionUID", action_uid())
        .add("Destination", destination)
        .add("MacroActionType", "File")
        .extend(notify_on_failure_entries(opts.notify_on_failure))
        .add("Operation", opts.operation)
    )
    if opts.operation == "CreateUnique":
        plist.add("OutputPath", opts.output_path or "")
    plist.add("Source", opts.source)
    plist.extend(stop_on_failure_entries(opts.stop_on_failure, default=False))
    return build("File", plist)
