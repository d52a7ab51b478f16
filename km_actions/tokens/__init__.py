"""Keyboard Maestro token table and lookup."""

from .lookup import TokenEntry, TokenLookup, default_lookup, humanize_token_name, lookup_token, resolve_token_preset
from .table import KM_TOKENS
