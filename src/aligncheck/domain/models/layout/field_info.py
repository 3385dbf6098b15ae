#!/usr/bin/env python3

"""Field information model for layout analysis."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldInfo:
    """One data member of a record, in declaration order."""

    name: str
    size: int
    alignment: int = 1
