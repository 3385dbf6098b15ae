#!/usr/bin/env python3

"""Size and alignment of a resolved type."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TypeLayout:
    """Storage size and alignment of a type on the target platform."""

    size: int
    alignment: int = 1


# void, incomplete and unresolvable types
VOID_LAYOUT = TypeLayout(size=0, alignment=1)
