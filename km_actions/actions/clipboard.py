"""Cut, copy, paste and set-clipboard actions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..exceptions import StyledTextError
from ..plist import Data, PlistDict, action_uid, encode_styled_text, generate_basic_rtf, strip_rtf_to_plain_text
from ..templates.clipboard import clipboard_entries, coerce_clipboard
from ..templates.flags import notify_on_failure_entries, stop_on_failure_entries, timeout_entries
from ..templates.text import processing_mode_entries, validate_processing_mode
from ..tokens import resolve_token_preset
from .base import DictAction, build, coerce_options

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class CutCopyPasteOptions:
    timeout_aborts: Optional[bool] = None
    notify_on_timeout: bool = True


def _cut_copy_paste(action: str, default_aborts: bool, opts: CutCopyPasteOptions) -> DictAction:
    aborts = default_aborts if opts.timeout_aborts is None else opts.timeout_aborts
    plist = (
        PlistDict()
        .add("Action", action)
        .add("ActionUID", action_uid())
        .add("IsDisclosed", False)
        .add("MacroActionType", "CutCopyPaste")
        .extend(timeout_entries(aborts, opts.notify_on_timeout))
    )
    return build(action, plist)


def create_copy(options: Optional[CutCopyPasteOptions] = None, /, **kwargs: Any) -> DictAction:
    return _cut_copy_paste("Copy", True, coerce_options(CutCopyPasteOptions, options, kwargs))


def create_cut(options: Optional[CutCopyPasteOptions] = None, /, **kwargs: Any) -> DictAction:
    return _cut_copy_paste("Cut", False, coerce_options(CutCopyPasteOptions, options, kwargs))


def create_paste(options: Optional[CutCopyPasteOptions] = None, /, **kwargs: Any) -> DictAction:
    return _cut_copy_paste("Paste", False, coerce_options(CutCopyPasteOptions, options, kwargs))


@dataclass(slots=True, frozen=True)
class SetClipboardToTextOptions:
    text: str = ""
    token_preset: Optional[str] = None
    processing_mode: Optional[str] = None
    include_styled_text: bool = False
    rtf_content: Optional[str] = None
    destination: Any = None
    stop_on_failure: Optional[bool] = None
    notify_on_failure: Optional[bool] = None

    def __post_init__(self) -> None:
        validate_processing_mode(self.processing_mode)
        coerce_clipboard(self.destination)


def create_set_clipboard_to_text(options: Optional[SetClipboardToTextOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(SetClipboardToTextOptions, options, kwargs)
    text = resolve_token_preset(opts.text, opts.token_preset)

    styled: Optional[Data] = None
    if opts.include_styled_text:
        rtf = opts.rtf_content or generate_basic_rtf(opts.text)
        try:
            styled = Data(encode_styled_text(rtf))
        except StyledTextError as exc:
            logger.warning("Styled text could not be encoded, using plain text: %s", exc)
        else:
            if opts.rtf_content:
                text = strip_rtf_to_plain_text(rtf)

    plist = (
        PlistDict()
        .add("ActionUID", action_uid())
        .add("JustDisplay", False)
        .add("MacroActionType", "SetClipboardToText")
        .extend(notify_on_failure_entries(opts.notify_on_failure))
        .extend(processing_mode_entries(opts.processing_mode))
        # recorded only when switched on
        .extend(stop_on_failure_entries(opts.stop_on_failure, default=False))
        .add("StyledText", styled)
        .extend(clipboard_entries(coerce_clipboard(opts.destination), prefix="Target"))
        .add("Text", text)
    )
    return build("SetClipboardToText", plist)
