#!/usr/bin/env python3

"""Rendering of findings as diagnostic lines or JSON."""

import json
from collections.abc import Iterable
from typing import Any

from ..domain.models.layout import Finding

UNKNOWN_LOCATION = "<unknown>"


def format_finding(finding: Finding, verbose: bool = False) -> str:
    """Render one finding as a diagnostic line.

    Args:
        finding: Finding to render
        verbose: Append the recommended field order

    Returns:
        Line of the form
        "unit: file:line:col: struct Name could have size N (currently M)"
    """
    location = str(finding.location) if finding.location is not None else UNKNOWN_LOCATION
    line = (
        f"{finding.unit}: {location}: struct {finding.record_name} "
        f"could have size {finding.minimal_size} (currently {finding.actual_size})"
    )
    if verbose:
        field_lines = [
            f"\t\t{field.name} (size {field.size})" for field in finding.suggested_order
        ]
        line += ":\n\tRecommended alignment:\n" + "\n".join(field_lines)
    return line


def format_report(
    findings: Iterable[Finding],
    verbose: bool = False,
    sort_by: str = "location",
) -> list[str]:
    """Render and sort findings.

    Args:
        findings: Findings to render
        verbose: Include recommended field orders
        sort_by: "location" sorts rendered lines; "savings" puts the largest
            savings first

    Returns:
        Rendered lines in output order
    """
    rendered = [(finding, format_finding(finding, verbose)) for finding in findings]
    if sort_by == "savings":
        rendered.sort(key=lambda item: (-item[0].savings, item[1]))
    else:
        rendered.sort(key=lambda item: item[1])
    return [line for _, line in rendered]


def finding_to_dict(finding: Finding) -> dict[str, Any]:
    """Convert a finding to a JSON-serializable dictionary."""
    location = finding.location
    return {
        "record": finding.record_name,
        "unit": finding.unit,
        "file": location.file if location else None,
        "line": location.line if location else None,
        "column": location.column if location else None,
        "minimal_size": finding.minimal_size,
        "actual_size": finding.actual_size,
        "savings": finding.savings,
        "suggested_order": [
            {"name": field.name, "size": field.size, "alignment": field.alignment}
            for field in finding.suggested_order
        ],
    }


def render_json(findings: Iterable[Finding], sort_by: str = "location") -> str:
    """Render findings as a JSON array, in the same order as format_report()."""
    items = sorted(findings, key=lambda finding: format_finding(finding))
    if sort_by == "savings":
        items.sort(key=lambda finding: -finding.savings)
    return json.dumps([finding_to_dict(finding) for finding in items], indent=2)
