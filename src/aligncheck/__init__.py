"""aligncheck - find structs that could shrink by reordering their fields."""

from .application import AlignmentChecker
from .infrastructure.config import Config
from .main import main

__all__ = ["AlignmentChecker", "Config", "main"]
