"""Infrastructure configuration module."""

from .analysis_config import get_config
from .application_config import FORMAT_CHOICES, SORT_CHOICES, Config

__all__ = ["Config", "FORMAT_CHOICES", "SORT_CHOICES", "get_config"]
