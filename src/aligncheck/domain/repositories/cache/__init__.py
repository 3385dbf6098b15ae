#!/usr/bin/env python3

"""Cache implementations for resolved DWARF data."""

from .layout_cache import LayoutCache

__all__ = [
    "LayoutCache",
]
