#!/usr/bin/env python3

"""Opens ELF files and their DWARF debug information."""

from pathlib import Path
from types import TracebackType
from typing import IO

from elftools.dwarf.dwarfinfo import DWARFInfo
from elftools.elf.elffile import ELFFile

from .logging import get_logger

logger = get_logger(__name__)


class ElfDebugReader:
    """Owns the file handle of an ELF file and its loaded DWARF info.

    Use as a context manager:

        with ElfDebugReader(path) as reader:
            for cu in reader.dwarf_info.iter_CUs():
                ...
    """

    def __init__(self, elf_path: Path) -> None:
        """
        Initialize the reader.

        Args:
            elf_path: Path to the ELF file
        """
        self.elf_path = elf_path
        self.file_handle: IO[bytes] | None = None
        self.elf_file: ELFFile | None = None
        self.dwarf_info: DWARFInfo | None = None

    def open(self) -> None:
        """Open the ELF file and load its DWARF info.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the path is not a file or has no DWARF info
            RuntimeError: If pyelftools cannot parse the file
        """
        if not self.elf_path.exists():
            raise FileNotFoundError(f"ELF file not found: {self.elf_path}")

        if not self.elf_path.is_file():
            raise ValueError(f"Not a file: {self.elf_path}")

        self.file_handle = open(self.elf_path, "rb")
        try:
            self.elf_file = ELFFile(self.file_handle)
            logger.debug(f"Opened ELF file: {self.elf_path}")
            logger.debug(f"Architecture: {self.elf_file.get_machine_arch()}")
        except Exception as e:
            self.close()
            raise RuntimeError(f"Failed to open ELF file {self.elf_path}: {e}") from e

        if not self.elf_file.has_dwarf_info():
            self.close()
            raise ValueError(f"No DWARF debug information found in {self.elf_path}")

        try:
            self.dwarf_info = self.elf_file.get_dwarf_info()
        except Exception as e:
            self.close()
            raise RuntimeError(f"Failed to load DWARF info from {self.elf_path}: {e}") from e

        logger.debug("DWARF information loaded successfully")

    def close(self) -> None:
        """Release the file handle."""
        if self.file_handle is not None:
            self.file_handle.close()
        self.file_handle = None
        self.elf_file = None
        self.dwarf_info = None

    def __enter__(self) -> "ElfDebugReader":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
