"""Output formatting for diagnostics and scenario groups."""

import json
from typing import Literal

import yaml

from ..diagnostics import Diagnostics, Issue, Severity
from ..ingest.models import ScenarioCollection


def format_diagnostics(
    diagnostics: Diagnostics,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format diagnostics for output.

    Args:
        diagnostics: The diagnostics to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_json(diagnostics)
    return _format_text(diagnostics)


def _format_text(diagnostics: Diagnostics) -> str:
    """Format diagnostics as human-readable text."""
    lines: list[str] = []

    errors = diagnostics.errors
    warnings = diagnostics.warnings
    infos = [i for i in diagnostics.issues if i.severity == Severity.INFO]

    lines.append("ERRORS:")
    if errors:
        for issue in errors:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    lines.append("")

    lines.append("WARNINGS:")
    if warnings:
        for issue in warnings:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    if infos:
        lines.append("")
        lines.append("INFO:")
        for issue in infos:
            lines.append(f"  {_format_issue_text(issue)}")

    # Summary
    lines.append("")
    if not diagnostics.has_errors:
        if warnings:
            lines.append(f"Check passed with {len(warnings)} warning(s)")
        else:
            lines.append("Check passed")
    else:
        lines.append(
            f"Check failed: {len(errors)} error(s), {len(warnings)} warning(s)"
        )

    return "\n".join(lines)


def _format_issue_text(issue: Issue) -> str:
    """Format a single issue as text."""
    location = f"[{issue.location}] " if issue.location else ""

    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"

    return f"{symbol} {issue.code}: {location}{issue.message}"


def _format_json(diagnostics: Diagnostics) -> str:
    data = {
        "valid": not diagnostics.has_errors,
        "error_count": len(diagnostics.errors),
        "warning_count": len(diagnostics.warnings),
        "issues": [
            {
                "code": issue.code,
                "message": issue.message,
                "severity": issue.severity.value,
                "row": issue.row,
                "path": issue.path,
                "details": issue.details,
            }
            for issue in diagnostics.issues
        ],
    }
    return json.dumps(data, indent=2, default=str)


def format_groups(
    groups: ScenarioCollection,
    format: Literal["json", "yaml"] = "json",
) -> str:
    """Serialize scenario groups in their external (aliased) shape."""
    data = groups.to_list()
    if format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False)
