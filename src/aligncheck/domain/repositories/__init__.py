#!/usr/bin/env python3

"""Repositories for resolved DWARF data."""

from . import cache

__all__ = [
    "cache",
]
