#!/usr/bin/env python3

"""ELF platform detection.

Derives the size parameters the layout analyzer needs from an ELF header:
- Word size from the ELF class (ELFCLASS32 / ELFCLASS64)
- Maximum alignment from the ELF class and machine architecture
"""

from elftools.elf.elffile import ELFFile

from ..domain.models.layout import PlatformSizes
from .logging import get_logger

logger = get_logger(__name__)

# Largest fundamental alignment by ELF class. 64-bit SysV ABIs align
# long double, __int128 and max_align_t to 16.
DEFAULT_MAX_ALIGN_BY_CLASS = {32: 8, 64: 16}


class PlatformDetector:
    """Detects word size and maximum alignment of an ELF target."""

    # Machine type strings (as returned by pyelftools)
    MACHINE_I386_STR = "EM_386"
    MACHINE_X86_64_STR = "EM_X86_64"

    # Machines whose ABI caps member alignment below the default.
    # i386 System V aligns double and long long to 4 inside structs.
    MAX_ALIGN_BY_MACHINE = {
        MACHINE_I386_STR: 4,
    }

    @staticmethod
    def detect(elf: ELFFile) -> PlatformSizes:
        """Detect platform sizes from an opened ELF file.

        Args:
            elf: ELFFile object

        Returns:
            PlatformSizes for the target
        """
        elfclass = elf.elfclass
        machine_str = elf.header["e_machine"]

        if elfclass not in (32, 64):
            logger.warning(f"Unknown ELF class {elfclass}, assuming 64-bit")
            elfclass = 64

        word_size = elfclass // 8
        max_align = PlatformDetector.MAX_ALIGN_BY_MACHINE.get(
            machine_str, DEFAULT_MAX_ALIGN_BY_CLASS[elfclass]
        )

        logger.debug(
            f"ELF Characteristics: machine={machine_str}, class={elfclass}, "
            f"little_endian={elf.little_endian}"
        )
        logger.info(f"Target {machine_str}: word size {word_size}, max alignment {max_align}")

        return PlatformSizes(word_size=word_size, max_align=max_align)
