#!/usr/bin/env python3

"""Finding model: a record that could be made smaller by reordering."""

from dataclasses import dataclass

from .field_info import FieldInfo
from .source_location import SourceLocation


@dataclass(frozen=True)
class Finding:
    """Mismatch between the actual and minimal size of one record."""

    record_name: str
    unit: str
    location: SourceLocation | None
    minimal_size: int
    actual_size: int
    suggested_order: tuple[FieldInfo, ...]

    @property
    def savings(self) -> int:
        """Bytes saved by adopting the suggested order."""
        return self.actual_size - self.minimal_size
