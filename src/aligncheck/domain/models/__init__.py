#!/usr/bin/env python3

"""Domain models for the alignment checker."""

from . import dwarf, layout

__all__ = [
    "dwarf",
    "layout",
]
