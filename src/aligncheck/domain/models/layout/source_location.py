#!/usr/bin/env python3

"""Source location model for record declarations."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """Where a record type was declared."""

    file: str
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"
