#!/usr/bin/env python3

"""Platform size parameters for layout analysis."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class PlatformSizes:
    """Word size and maximum alignment of a target platform."""

    word_size: int = 8
    max_align: int = 8

    def with_max_align(self, max_align: int | None) -> "PlatformSizes":
        """Return a copy with the alignment cap overridden (None keeps it)."""
        if max_align is None:
            return self
        return replace(self, max_align=max_align)
