#!/usr/bin/env python3

"""Bounded cache of resolved type layouts keyed by DIE offset."""

from collections import OrderedDict
from typing import Any

from ...models.layout import TypeLayout


class LayoutCache:
    """Least-recently-used store of TypeLayout values.

    A type DIE is usually referenced by many members across many records, so
    the resolver looks each offset up here before walking its type chain.
    """

    def __init__(self, max_size: int = 5000):
        """
        Args:
            max_size: Number of layouts kept before the stalest is dropped
        """
        self.max_size = max_size
        self._entries: OrderedDict[int, TypeLayout] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, offset: int) -> TypeLayout | None:
        """Look up the layout of the type DIE at offset."""
        layout = self._entries.get(offset)
        if layout is None:
            self.misses += 1
            return None

        self._entries.move_to_end(offset)
        self.hits += 1
        return layout

    def put(self, offset: int, layout: TypeLayout) -> None:
        """Remember a layout, dropping the least recently used one when full."""
        self._entries[offset] = layout
        self._entries.move_to_end(offset)
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> dict[str, Any]:
        """Entry count and hit ratio, for the end-of-run debug log."""
        lookups = self.hits + self.misses
        return {
            "entries": len(self._entries),
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "hit_ratio": round(self.hits / lookups, 3) if lookups else 0.0,
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, offset: int) -> bool:
        return offset in self._entries
