"""Application layer for alignment checking."""

from .alignment_checker import AlignmentChecker
from .report_formatter import format_finding, format_report, render_json

__all__ = ["AlignmentChecker", "format_finding", "format_report", "render_json"]
