"""Condition model, normalisers and serializer."""

from .model import (
    CONDITION_LIST_MATCHES,
    CONDITION_TYPES,
    CONDITION_VARIANTS,
    Condition,
    ConditionVariant,
    coerce_condition,
    condition_list_plist,
    condition_to_xml,
    verify_condition_registry,
)
from .normalize import PIXEL_PAIRS
