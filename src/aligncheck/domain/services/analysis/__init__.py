#!/usr/bin/env python3

"""Padding analysis services."""

from .layout_analyzer import (
    LayoutAnalyzer,
    LayoutContractError,
    diagnose,
    effective_alignment,
    minimal_size,
    round_up,
    suggested_order,
    total_savings,
)
from .layout_oracle import LayoutOracle

__all__ = [
    "LayoutAnalyzer",
    "LayoutContractError",
    "LayoutOracle",
    "diagnose",
    "effective_alignment",
    "minimal_size",
    "round_up",
    "suggested_order",
    "total_savings",
]
