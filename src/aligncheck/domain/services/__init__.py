#!/usr/bin/env python3

"""Domain services layer."""

from . import analysis, parsing

__all__ = [
    "analysis",
    "parsing",
]
