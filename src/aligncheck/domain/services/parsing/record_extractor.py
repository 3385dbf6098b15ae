#!/usr/bin/env python3

"""DWARF-backed layout oracle.

Walks every compilation unit of a DWARF info structure and reports each
struct/class definition as a RecordInfo: its fields in declaration order,
their sizes and alignments, and the record's actual size and alignment.

Records whose field order cannot be freely changed are left out:
- records with base classes (the base subobject always comes first)
- records with bitfields (bits share storage units)
- records without data members (C++ gives empty classes size 1)
- records aligned beyond the platform maximum (the padding is requested)
- records with overlapping members ([[no_unique_address]])
"""

from collections.abc import Iterable, Iterator
from pathlib import PurePosixPath
from typing import Any

from elftools.dwarf.compileunit import CompileUnit
from elftools.dwarf.die import DIE
from elftools.dwarf.dwarfinfo import DWARFInfo

from ....infrastructure.config import get_config
from ....infrastructure.logging import ProgressTracker, get_logger
from ...models.layout import FieldInfo, PlatformSizes, RecordInfo, SourceLocation
from ...repositories.cache import LayoutCache
from ..analysis.layout_analyzer import round_up
from .die_type_classifier import DIETypeClassifier
from .type_layout_resolver import TypeLayoutResolver

logger = get_logger(__name__)


class DwarfLayoutOracle:
    """Reports record layouts from DWARF debug information.

    Record handles passed to fields_of(), actual_size_of() and alignment_of()
    are struct/class DIEs.
    """

    def __init__(
        self,
        dwarf_info: DWARFInfo,
        platform: PlatformSizes,
        record_names: Iterable[str] | None = None,
        resolver: TypeLayoutResolver | None = None,
        progress: ProgressTracker | None = None,
        config: dict[str, Any] | None = None,
    ):
        """Initialize the oracle.

        Args:
            dwarf_info: DWARF information structure
            platform: Word size and maximum alignment of the target
            record_names: Optional names to restrict enumeration to
                (qualified or unqualified)
            resolver: Optional type layout resolver to share
            progress: Optional progress tracker
            config: Optional tuning flags (defaults to get_config())
        """
        self.dwarf_info = dwarf_info
        self.platform = platform
        self.config = config if config is not None else get_config()
        self.record_names = frozenset(record_names) if record_names else None
        self.resolver = resolver or TypeLayoutResolver(
            platform, LayoutCache(self.config["TYPE_CACHE_SIZE"])
        )
        self.progress = progress or ProgressTracker(logger)
        self._file_names: dict[int, tuple[list[str], int]] = {}

    # Oracle interface

    def fields_of(self, handle: DIE) -> list[FieldInfo]:
        """Non-static data members of a record in declaration order."""
        fields: list[FieldInfo] = []
        for child in handle.iter_children():
            if not DIETypeClassifier.is_data_member(child):
                continue
            layout = self.resolver.resolve_member(child)
            fields.append(
                FieldInfo(
                    name=self._member_name(child),
                    size=layout.size,
                    alignment=layout.alignment,
                )
            )
        return fields

    def alignment_of(self, handle: DIE) -> int:
        """Alignment of a record, capped at the platform maximum."""
        return self._record_alignment(handle, self.fields_of(handle))

    def actual_size_of(self, handle: DIE) -> int:
        """Size of a record in declaration order, rounded to its alignment."""
        return self._actual_size(handle, self.alignment_of(handle))

    def iter_records(self) -> Iterator[RecordInfo]:
        """Yield every analyzable record definition in the DWARF info.

        Yields:
            RecordInfo per record, first occurrence only when
            DEDUPLICATE_RECORDS is on
        """
        seen: set[tuple[str, SourceLocation | None]] = set()
        deduplicate = self.config["DEDUPLICATE_RECORDS"]

        cu: CompileUnit
        for cu in self.dwarf_info.iter_CUs():
            with self.progress.track_cu(cu):
                unit = self._unit_name(cu)
                die: DIE
                for die in cu.iter_DIEs():
                    self.progress.count_die()
                    if die.is_null() or not DIETypeClassifier.is_record(die):
                        continue

                    record = self.record_from_die(cu, die, unit)
                    if record is None:
                        continue

                    key = (record.name, record.location)
                    if deduplicate and key in seen:
                        continue
                    seen.add(key)

                    self.progress.count_record()
                    yield record

        self.progress.report_summary()
        logger.debug(f"Type layout cache: {self.resolver.cache.stats()}")

    # Record construction

    def record_from_die(self, cu: CompileUnit, die: DIE, unit: str) -> RecordInfo | None:
        """Build a RecordInfo from a struct/class DIE.

        Args:
            cu: Compilation unit containing the DIE
            die: Struct or class DIE
            unit: Name of the compilation unit

        Returns:
            RecordInfo, or None if the record is not analyzable
        """
        name = self.qualified_name(die)
        reason = self._skip_reason(die, name)
        if reason is not None:
            if reason != "filtered":
                logger.debug(f"Skipping {name or 'anonymous record'} at 0x{die.offset:x}: {reason}")
                self.progress.count_skipped()
            return None

        fields = self.fields_of(die)
        if not fields:
            logger.debug(f"Skipping {name} at 0x{die.offset:x}: no data members")
            self.progress.count_skipped()
            return None

        alignment = self._record_alignment(die, fields)
        reason = self._layout_skip_reason(die, fields, alignment)
        if reason is not None:
            logger.debug(f"Skipping {name} at 0x{die.offset:x}: {reason}")
            self.progress.count_skipped()
            return None

        return RecordInfo(
            name=name or f"(anonymous@0x{die.offset:x})",
            fields=tuple(fields),
            actual_size=self._actual_size(die, alignment),
            alignment=alignment,
            location=self.source_location(cu, die),
            unit=unit,
        )

    def qualified_name(self, die: DIE) -> str | None:
        """Name of a record qualified with its enclosing scopes.

        Returns:
            Qualified name such as "ns::Outer::Inner", or None if anonymous
        """
        name = DIETypeClassifier.get_name(die)
        if name is None:
            return None

        parts = [name]
        parent = die.get_parent()
        while parent is not None and DIETypeClassifier.is_scope(parent):
            parts.append(DIETypeClassifier.get_name(parent) or "(anonymous)")
            parent = parent.get_parent()

        return "::".join(reversed(parts))

    def source_location(self, cu: CompileUnit, die: DIE) -> SourceLocation | None:
        """Declaration location of a DIE, or None without DW_AT_decl_file."""
        file_index = DIETypeClassifier.get_int(die, "DW_AT_decl_file")
        if file_index is None:
            return None

        names, base = self._cu_file_names(cu)
        position = file_index - base
        if 0 <= position < len(names):
            file_name = names[position]
        else:
            file_name = f"<file {file_index}>"

        return SourceLocation(
            file=file_name,
            line=DIETypeClassifier.get_int(die, "DW_AT_decl_line", 0) or 0,
            column=DIETypeClassifier.get_int(die, "DW_AT_decl_column", 0) or 0,
        )

    def _skip_reason(self, die: DIE, name: str | None) -> str | None:
        if self.record_names is not None:
            short_name = DIETypeClassifier.get_name(die)
            if name not in self.record_names and short_name not in self.record_names:
                return "filtered"

        if DIETypeClassifier.is_declaration(die):
            return "declaration only"
        if "DW_AT_byte_size" not in die.attributes:
            return "no byte size"
        if name is None and not self.config["INCLUDE_ANONYMOUS"]:
            return "anonymous"

        for child in die.iter_children():
            if child.tag == "DW_TAG_inheritance":
                return "has base classes"
            if DIETypeClassifier.is_data_member(child) and DIETypeClassifier.is_bitfield(child):
                return "has bitfields"

        return None

    def _layout_skip_reason(
        self, die: DIE, fields: list[FieldInfo], alignment: int
    ) -> str | None:
        """Reason why sizes alone cannot describe the record, or None.

        The padding of a record aligned beyond the platform maximum is
        requested by the program. Overlapping members (such as C++20
        [[no_unique_address]]) share storage, so their sizes do not add up.
        """
        if alignment > self.platform.max_align:
            return f"aligned to {alignment}, above maximum {self.platform.max_align}"

        byte_size = DIETypeClassifier.get_int(die, "DW_AT_byte_size", 0) or 0
        if sum(field.size for field in fields) > byte_size:
            return "overlapping members"

        members = [
            child for child in die.iter_children() if DIETypeClassifier.is_data_member(child)
        ]
        spans: list[tuple[int, int]] = []
        for member, field in zip(members, fields):
            offset = DIETypeClassifier.get_int(member, "DW_AT_data_member_location")
            if offset is not None and field.size > 0:
                spans.append((offset, offset + field.size))

        covered = 0
        for start, end in sorted(spans):
            if start < covered:
                return "overlapping members"
            covered = max(covered, end)

        return None

    def _record_alignment(self, die: DIE, fields: list[FieldInfo]) -> int:
        explicit = DIETypeClassifier.get_int(die, "DW_AT_alignment")
        if explicit:
            return explicit
        return max((field.alignment for field in fields), default=1)

    @staticmethod
    def _actual_size(die: DIE, alignment: int) -> int:
        byte_size = DIETypeClassifier.get_int(die, "DW_AT_byte_size", 0) or 0
        return round_up(byte_size, alignment)

    @staticmethod
    def _member_name(member: DIE) -> str:
        name = DIETypeClassifier.get_name(member)
        if name is not None:
            return name
        offset = DIETypeClassifier.get_int(member, "DW_AT_data_member_location", 0)
        return f"(anonymous@{offset})"

    @staticmethod
    def _unit_name(cu: CompileUnit) -> str:
        top_die = cu.get_top_DIE()
        return DIETypeClassifier.get_name(top_die) or f"cu@0x{cu.cu_offset:x}"

    def _cu_file_names(self, cu: CompileUnit) -> tuple[list[str], int]:
        """File names of a CU's line program and the index of the first one.

        DW_AT_decl_file is 1-based before DWARF 5 and 0-based from DWARF 5.
        """
        cached = self._file_names.get(cu.cu_offset)
        if cached is not None:
            return cached

        names: list[str] = []
        base = 1
        try:
            line_program = self.dwarf_info.line_program_for_CU(cu)
        except Exception as e:
            logger.debug(f"No line program for CU at 0x{cu.cu_offset:x}: {e}")
            line_program = None

        if line_program is not None:
            header = line_program.header
            version = header["version"]
            directories = [_decode(d) for d in header["include_directory"]]
            base = 0 if version >= 5 else 1

            for entry in header["file_entry"]:
                file_name = _decode(entry.name)
                dir_index = entry.dir_index
                # Before DWARF 5, directory 0 is the compilation directory
                dir_position = dir_index if version >= 5 else dir_index - 1
                if 0 <= dir_position < len(directories):
                    file_name = str(PurePosixPath(directories[dir_position]) / file_name)
                names.append(file_name)

        self._file_names[cu.cu_offset] = (names, base)
        return names, base


def _decode(value: bytes | str) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)
