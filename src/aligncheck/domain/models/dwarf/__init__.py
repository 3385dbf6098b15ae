#!/usr/bin/env python3

"""DWARF tag classification constants."""

from .tag_constants import (
    AGGREGATE_TAGS,
    BITFIELD_ATTRIBUTES,
    POINTER_TAGS,
    RECORD_TAGS,
    SCALAR_TAGS,
    SCOPE_TAGS,
    TRANSPARENT_TYPE_TAGS,
)

__all__ = [
    "AGGREGATE_TAGS",
    "BITFIELD_ATTRIBUTES",
    "POINTER_TAGS",
    "RECORD_TAGS",
    "SCALAR_TAGS",
    "SCOPE_TAGS",
    "TRANSPARENT_TYPE_TAGS",
]
