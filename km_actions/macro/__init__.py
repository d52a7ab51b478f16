"""Macro envelopes and macro generation."""

from .assembler import (
    PLIST_FOOTER,
    PLIST_HEADER,
    build_ephemeral_macro_xml,
    create_macro_group_plist,
    wrap_as_km_macros,
)
from .generate import ExportTarget, generate_macro
