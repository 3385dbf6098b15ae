#!/usr/bin/env python3

"""Record information model for layout analysis."""

from dataclasses import dataclass

from .field_info import FieldInfo
from .source_location import SourceLocation


@dataclass(frozen=True)
class RecordInfo:
    """A record type as reported by a layout oracle.

    ``fields`` keeps declaration order. ``actual_size`` is the ABI size of
    that order including all padding; ``alignment`` is the record's own
    alignment requirement.
    """

    name: str
    fields: tuple[FieldInfo, ...]
    actual_size: int
    alignment: int
    location: SourceLocation | None = None
    unit: str = ""
