#!/usr/bin/env python3

"""Interface between the layout analyzer and a type-system oracle."""

from collections.abc import Iterator
from typing import Any, Protocol

from ...models.layout import FieldInfo, RecordInfo


class LayoutOracle(Protocol):
    """Source of record layouts as the target platform computes them.

    Record handles are opaque to the analyzer; only the oracle knows how to
    introspect them.
    """

    def fields_of(self, handle: Any) -> list[FieldInfo]:
        """Fields of a record in declaration order."""
        ...

    def actual_size_of(self, handle: Any) -> int:
        """ABI size of the record in declaration order, padding included."""
        ...

    def alignment_of(self, handle: Any) -> int:
        """Alignment requirement of the record."""
        ...

    def iter_records(self) -> Iterator[RecordInfo]:
        """Yield every record the oracle knows about."""
        ...
