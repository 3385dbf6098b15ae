#!/usr/bin/env python3

"""Parsing services turning DWARF debug information into record layouts."""

from .die_type_classifier import DIETypeClassifier
from .record_extractor import DwarfLayoutOracle
from .type_layout_resolver import TypeLayoutResolver

__all__ = [
    "DIETypeClassifier",
    "DwarfLayoutOracle",
    "TypeLayoutResolver",
]
