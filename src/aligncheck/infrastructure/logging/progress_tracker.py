#!/usr/bin/env python3

"""Counters and timing for a pass over the compilation units of a file."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from time import perf_counter
from typing import Any


class ProgressTracker:
    """
    Counts what record enumeration visits and logs per-CU timing.

    Counters:
        cu_count: Compilation units entered
        die_count: DIEs visited
        record_count: Records handed on for analysis
        skipped_count: Record definitions left out (declarations, bitfields...)
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.reset()

    @contextmanager
    def track_cu(self, cu: Any) -> Iterator[None]:
        """
        Time the body as one compilation unit.

        Errors raised inside are logged with the CU number and re-raised.

        Args:
            cu: Compilation unit (only its cu_offset is read)
        """
        self.cu_count += 1
        number = self.cu_count
        records_before = self.record_count
        started = perf_counter()
        self.logger.debug(f"CU #{number} at 0x{getattr(cu, 'cu_offset', 0):x}")

        try:
            yield
        except Exception as e:
            self.logger.error(f"CU #{number} failed after {perf_counter() - started:.3f}s: {e}")
            raise

        self.logger.debug(
            f"CU #{number}: {self.record_count - records_before} records "
            f"in {perf_counter() - started:.3f}s"
        )

    def count_die(self) -> None:
        self.die_count += 1

    def count_record(self) -> None:
        self.record_count += 1

    def count_skipped(self) -> None:
        self.skipped_count += 1

    def report_summary(self) -> None:
        """Log one INFO line with all counters and the elapsed time."""
        self.logger.info(
            f"Enumerated {self.record_count} records ({self.skipped_count} skipped) "
            f"from {self.cu_count} CUs, {self.die_count} DIEs "
            f"in {perf_counter() - self.started:.2f}s"
        )

    def reset(self) -> None:
        """Zero the counters and restart the clock."""
        self.started = perf_counter()
        self.cu_count = 0
        self.die_count = 0
        self.record_count = 0
        self.skipped_count = 0
