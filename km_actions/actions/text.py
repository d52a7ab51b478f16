"""Typing, pasting and displaying text, plus styled comments."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..exceptions import StyledTextError
from ..plist import Data, PlistDict, action_uid, encode_styled_text, generate_basic_rtf, strip_rtf_to_plain_text
from ..templates.application import validate_target
from ..templates.text import processing_mode_entries, validate_processing_mode
from ..tokens import resolve_token_preset
from .base import DictAction, build, coerce_options, require_choice

logger = logging.getLogger(__name__)

INSERT_TEXT_ACTIONS = (
    "ByTyping",
    "ByPasting",
    "ByPastingStyles",
    "DisplayWindow",
    "DisplayBriefly",
    "DisplayLarge",
)
STYLED_INSERT_ACTIONS = ("ByPastingStyles", "DisplayWindow")


@dataclass(slots=True, frozen=True)
class InsertTextOptions:
    text: str = ""
    action: str = "ByTyping"
    processing_mode: Optional[str] = None
    include_styled_text: bool = False
    rtf_content: Optional[str] = None
    targeting_type: str = "Front"
    token_preset: Optional[str] = None

    def __post_init__(self) -> None:
        require_choice("action", self.action, INSERT_TEXT_ACTIONS)
        validate_processing_mode(self.processing_mode)
        validate_target(self.targeting_type)


def create_insert_text(options: Optional[InsertTextOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(InsertTextOptions, options, kwargs)
    text = resolve_token_preset(opts.text, opts.token_preset)
    plist = PlistDict().add("Action", opts.action)
    plist.add("ActionUID", action_uid())
    plist.add("MacroActionType", "InsertText")
    plist.extend(processing_mode_entries(opts.processing_mode))
    if opts.include_styled_text and opts.action in STYLED_INSERT_ACTIONS:
        rtf = opts.rtf_content or generate_basic_rtf(text)
        try:
            plist.add("StyledText", Data(encode_styled_text(rtf)))
        except StyledTextError as exc:
            logger.warning("Styled text skipped, inserting plain text: %s", exc)
        else:
            # the engine stores the RTF's own text when custom RTF is given
            if opts.rtf_content:
                text = strip_rtf_to_plain_text(opts.rtf_content)
    if opts.action == "ByTyping":
        plist.add("TargetApplication", PlistDict())
        plist.add("TargetingType", opts.targeting_type)
    plist.add("Text", text)
    return build("InsertText", plist)


def create_display_text_briefly(text: str, processing_mode: Optional[str] = None) -> DictAction:
    return create_insert_text(text=text, action="DisplayBriefly", processing_mode=processing_mode)


def create_display_text_window(
    text: str,
    processing_mode: Optional[str] = None,
    include_styled_text: bool = False,
    rtf_content: Optional[str] = None,
) -> DictAction:
    return create_insert_text(
        text=text,
        action="DisplayWindow",
        processing_mode=processing_mode,
        include_styled_text=include_styled_text,
        rtf_content=rtf_content,
    )


@dataclass(slots=True, frozen=True)
class CommentOptions:
    title: str = ""
    text: str = ""
    rtf_content: Optional[str] = None


def create_comment(options: Optional[CommentOptions] = None, /, **kwargs: Any) -> DictAction:
    opts = coerce_options(CommentOptions, options, kwargs)
    rtf = opts.rtf_content or generate_basic_rtf(opts.text)
    plist = (
        PlistDict()
        .add("ActionUID", action_uid())
        .add("MacroActionType", "Comment")
        .add("StyledText", Data(encode_styled_text(rtf)))
        .add("Title", opts.title)
    )
    return build("Comment", plist)
