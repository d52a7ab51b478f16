"""Lookup helpers for Keyboard Maestro text tokens."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple, Union

from ..exceptions import UnknownTokenError
from .table import KM_TOKENS

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_RETURN_KEYS = ("human", "pascal", "token")


def humanize_token_name(pascal: str) -> str:
    """``ARandomUniqueID`` -> ``A Random Unique ID``."""

    return _CAMEL_BOUNDARY_RE.sub(" ", pascal)


@dataclass(slots=True, frozen=True)
class TokenEntry:
    human: str
    pascal: str
    token: str


Index = Dict[str, TokenEntry]


class TokenLookup:
    """Lazily indexed token table searchable by human name, PascalCase name or token text."""

    def __init__(self, tokens: Optional[Mapping[str, str]] = None) -> None:
        self._tokens = dict(KM_TOKENS if tokens is None else tokens)
        self._indexes: Optional[Tuple[Index, Index, Index]] = None

    def _build_indexes(self) -> Tuple[Index, Index, Index]:
        """Human, PascalCase and token-text indexes, built on first use."""

        if self._indexes is None:
            by_human: Index = {}
            by_pascal: Index = {}
            by_token: Index = {}
            for pascal, token in self._tokens.items():
                entry = TokenEntry(human=humanize_token_name(pascal), pascal=pascal, token=token)
                by_human[entry.human] = entry
                by_pascal[entry.pascal] = entry
                by_token[entry.token] = entry
            self._indexes = (by_human, by_pascal, by_token)
        return self._indexes

    def find(self, query: str) -> Optional[TokenEntry]:
        by_human, by_pascal, by_token = self._build_indexes()
        return by_human.get(query) or by_pascal.get(query) or by_token.get(query)

    def lookup(self, query: str, return_key: Optional[str] = None) -> Union[str, Dict[str, str]]:
        """Resolve ``query`` and return one field, or the fields the query did not match."""

        entry = self.find(query)
        if entry is None:
            raise UnknownTokenError(f'Unknown Keyboard Maestro token: "{query}"')
        if return_key is not None:
            if return_key not in _RETURN_KEYS:
                raise ValueError(f"return_key must be one of {_RETURN_KEYS}, got {return_key!r}")
            return getattr(entry, return_key)
        fields = {"human": entry.human, "pascal": entry.pascal, "token": entry.token}
        return {key: value for key, value in fields.items() if value != query}

    def search(self, fragment: str) -> Dict[str, str]:
        """Case-insensitive substring search over human names, returning human -> token."""

        by_human = self._build_indexes()[0]
        needle = fragment.casefold()
        return {
            human: entry.token
            for human, entry in sorted(by_human.items())
            if needle in human.casefold() or needle in entry.token.casefold()
        }


default_lookup = TokenLookup()


def lookup_token(query: str, return_key: Optional[str] = None) -> Union[str, Dict[str, str]]:
    return default_lookup.lookup(query, return_key)


def resolve_token_preset(text: str, preset: Optional[str], lookup: Optional[TokenLookup] = None) -> str:
    """Substitute a text preset: ``delete``, ``positionCursor`` or any token name.

    An empty or unrecognised preset leaves the text unchanged.
    """

    if not preset:
        return text
    if preset == "delete":
        return "%Delete%"
    if preset == "positionCursor":
        return "%|%"
    entry = (lookup or default_lookup).find(preset)
    if entry is None:
        logger.debug("Ignoring unknown token preset %r", preset)
        return text
    return entry.token
