#!/usr/bin/env python3

"""Layout analysis domain models."""

from .field_info import FieldInfo
from .finding import Finding
from .platform_sizes import PlatformSizes
from .record_info import RecordInfo
from .source_location import SourceLocation
from .type_layout import VOID_LAYOUT, TypeLayout

__all__ = [
    "FieldInfo",
    "Finding",
    "PlatformSizes",
    "RecordInfo",
    "SourceLocation",
    "TypeLayout",
    "VOID_LAYOUT",
]
