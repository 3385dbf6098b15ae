#!/usr/bin/env python3

"""Padding analysis for record field layouts.

Compares the size a record has in declaration order with the smallest size
any ordering of the same fields could reach, and suggests an ordering when
the two differ.

The minimal size is the sum of all field sizes rounded up once to the record
alignment. This is exact for scalar fields, whose alignment equals their size.
For composite fields whose alignment is smaller than their size it is a lower
bound: it can only under-report the achievable savings.
"""

from collections.abc import Iterable, Sequence

from ....infrastructure.logging import get_logger, log_timing
from ...models.layout import FieldInfo, Finding, PlatformSizes, RecordInfo
from .layout_oracle import LayoutOracle

logger = get_logger(__name__)


class LayoutContractError(ValueError):
    """Raised when a layout oracle hands over impossible sizes."""


def round_up(size: int, alignment: int) -> int:
    """Round size up to the nearest multiple of alignment.

    Args:
        size: Size in bytes
        alignment: Alignment in bytes (values below 1 act as 1)

    Returns:
        Smallest multiple of alignment that is >= size
    """
    if alignment <= 1:
        return size
    remainder = size % alignment
    if remainder:
        size += alignment - remainder
    return size


def effective_alignment(alignment: int, max_align: int) -> int:
    """Cap an alignment at the platform maximum, never going below 1."""
    return max(1, min(alignment, max_align))


def minimal_size(record: RecordInfo, max_align: int) -> tuple[int, int]:
    """Compute the smallest size reachable by reordering the record's fields.

    Args:
        record: Record with its fields
        max_align: Platform maximum alignment

    Returns:
        Tuple of (minimal size, record alignment)
    """
    alignment = effective_alignment(record.alignment, max_align)
    total = sum(field.size for field in record.fields)
    return round_up(total, alignment), alignment


def suggested_order(fields: Iterable[FieldInfo]) -> list[FieldInfo]:
    """Order fields largest first, ties broken by name.

    The name tie-break only makes the output reproducible.
    """
    return sorted(fields, key=lambda field: (-field.size, field.name))


def _check_contract(record: RecordInfo) -> None:
    if record.actual_size < 0:
        raise LayoutContractError(
            f"Record {record.name} has negative actual size {record.actual_size}"
        )
    for field in record.fields:
        if field.size < 0:
            raise LayoutContractError(
                f"Field {record.name}.{field.name} has negative size {field.size}"
            )


def diagnose(record: RecordInfo, max_align: int) -> Finding | None:
    """Check a record for avoidable padding.

    Args:
        record: Record with fields in declaration order and its actual size
        max_align: Platform maximum alignment

    Returns:
        Finding when the record could be smaller, None when it is optimal

    Raises:
        LayoutContractError: If sizes are negative or the actual size is
            below the minimal size
    """
    _check_contract(record)

    size, alignment = minimal_size(record, max_align)
    if size == record.actual_size:
        return None

    if size > record.actual_size:
        raise LayoutContractError(
            f"Record {record.name} reports size {record.actual_size}, "
            f"below the minimal size {size} (alignment {alignment})"
        )

    logger.debug(
        f"Record {record.name}: minimal={size}, actual={record.actual_size}, "
        f"alignment={alignment}"
    )
    return Finding(
        record_name=record.name,
        unit=record.unit,
        location=record.location,
        minimal_size=size,
        actual_size=record.actual_size,
        suggested_order=tuple(suggested_order(record.fields)),
    )


class LayoutAnalyzer:
    """Runs padding analysis for one target platform.

    The platform is held explicitly so analyzers for different targets can
    run side by side.
    """

    def __init__(self, platform: PlatformSizes):
        """Initialize analyzer.

        Args:
            platform: Word size and maximum alignment of the target
        """
        self.platform = platform

    def diagnose(self, record: RecordInfo) -> Finding | None:
        """Diagnose a single record against this platform."""
        return diagnose(record, self.platform.max_align)

    def analyze(self, records: Iterable[RecordInfo]) -> list[Finding]:
        """Diagnose records and collect the findings in input order."""
        findings: list[Finding] = []
        checked = 0
        for record in records:
            checked += 1
            finding = self.diagnose(record)
            if finding is not None:
                findings.append(finding)

        logger.info(f"Checked {checked} records, {len(findings)} could be smaller")
        return findings

    @log_timing
    def analyze_oracle(self, oracle: LayoutOracle) -> list[Finding]:
        """Diagnose every record a layout oracle reports."""
        return self.analyze(oracle.iter_records())


def total_savings(findings: Sequence[Finding]) -> int:
    """Sum of bytes saved across findings."""
    return sum(finding.savings for finding in findings)
