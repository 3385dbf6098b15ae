"""Pytest configuration and shared fixtures."""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from aligncheck.domain.models.layout import FieldInfo, PlatformSizes, RecordInfo
from aligncheck.infrastructure.logging import LoggerSetup

from .dwarf_doubles import make_die


@pytest.fixture
def die_factory() -> Callable[..., Mock]:
    """Return the DIE double factory."""
    return make_die


@pytest.fixture
def platform() -> PlatformSizes:
    """64-bit platform with 8-byte maximum alignment."""
    return PlatformSizes(word_size=8, max_align=8)


@pytest.fixture
def padded_record() -> RecordInfo:
    """Record [a:1, b:8, c:1] laid out in 24 bytes."""
    return RecordInfo(
        name="Padded",
        fields=(
            FieldInfo("a", 1, 1),
            FieldInfo("b", 8, 8),
            FieldInfo("c", 1, 1),
        ),
        actual_size=24,
        alignment=8,
        unit="padded.c",
    )


@pytest.fixture(autouse=True)
def reset_logging() -> Any:
    """Detach handlers installed by LoggerSetup between tests."""
    yield
    if LoggerSetup.is_initialized():
        LoggerSetup.reset()
