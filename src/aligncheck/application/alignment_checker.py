#!/usr/bin/env python3

"""Alignment checking for one ELF file."""

from collections.abc import Iterable
from pathlib import Path
from types import TracebackType

from ..domain.models.layout import Finding, PlatformSizes
from ..domain.services.analysis import LayoutAnalyzer
from ..domain.services.parsing import DwarfLayoutOracle
from ..infrastructure.elf_platform import PlatformDetector
from ..infrastructure.elf_reader import ElfDebugReader
from ..infrastructure.logging import get_logger, log_timing

logger = get_logger(__name__)


class AlignmentChecker:
    """Finds records in an ELF file that could shrink by reordering fields.

    Wires together the ELF reader, platform detection, the DWARF layout
    oracle and the layout analyzer. Use as a context manager.
    """

    def __init__(
        self,
        elf_path: Path,
        max_align: int | None = None,
        record_names: Iterable[str] | None = None,
    ) -> None:
        """Initialize checker.

        Args:
            elf_path: Path to an ELF file with DWARF debug info
            max_align: Override of the detected maximum alignment
            record_names: Optional record names to restrict the check to
        """
        self.elf_path = elf_path
        self.max_align = max_align
        self.record_names = list(record_names) if record_names else None
        self.reader = ElfDebugReader(elf_path)
        self.platform: PlatformSizes | None = None

    def __enter__(self) -> "AlignmentChecker":
        self.reader.open()
        assert self.reader.elf_file is not None
        self.platform = PlatformDetector.detect(self.reader.elf_file).with_max_align(
            self.max_align
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.reader.close()

    @log_timing
    def check(self) -> list[Finding]:
        """Analyze every record in the ELF file.

        Returns:
            Findings in DWARF order

        Raises:
            RuntimeError: If the checker has not been entered
        """
        if self.reader.dwarf_info is None or self.platform is None:
            raise RuntimeError("ELF file not opened. Use AlignmentChecker as a context manager.")

        logger.info(f"Checking {self.elf_path}")
        oracle = DwarfLayoutOracle(
            self.reader.dwarf_info,
            self.platform,
            record_names=self.record_names,
        )
        analyzer = LayoutAnalyzer(self.platform)
        return analyzer.analyze_oracle(oracle)
