"""
Review Report Module

Renders a ReviewSummary as a plain-text report (for download or printing)
and as JSON for integrations. Only display values are rendered, so masked
fields stay masked.
"""

import json

from ..models.review_summary import ReviewSection, ReviewSummary


def _render_section(section: ReviewSection) -> list:
    lines = []
    status = "OK" if section.is_valid else "NEEDS ATTENTION"

    lines.append("─" * 80)
    lines.append(f"{section.title.upper()} [{status}]")
    lines.append("─" * 80)

    for item in section.items:
        if item.passed:
            lines.append(f"  ✓ {item.label}: {item.display_value}")
        else:
            lines.append(f"  ✗ {item.label}: {item.display_value}")
            lines.append(f"      Error: {item.error}")

    lines.append("")
    return lines


def generate_review_report(summary: ReviewSummary) -> str:
    """
    Generate the all-at-once review report.

    Args:
        summary: Review summary produced by the review action

    Returns:
        Report as a string
    """
    lines = []

    lines.append("=" * 80)
    lines.append("PATIENT INTAKE REVIEW")
    lines.append("=" * 80)
    lines.append(f"Generated: {summary.generated_at.strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append(f"Status: {'Ready to submit' if summary.is_valid else 'Errors found'}")
    lines.append("")

    for section in summary.sections:
        lines.extend(_render_section(section))

    lines.append("─" * 80)
    lines.append("NEXT STEPS")
    lines.append("─" * 80)

    if summary.is_valid:
        lines.append("  1. Confirm the information above")
        lines.append("  2. Submit the form")
    else:
        failed = summary.failed_items()
        lines.append(f"  ❌ {len(failed)} item(s) must be corrected before submission.")
        lines.append("  1. Return to the form and fix the items marked ✗")
        lines.append("  2. Review again before submitting")

    lines.append("")
    lines.append("=" * 80)
    lines.append("END OF REPORT")
    lines.append("=" * 80)

    return "\n".join(lines)


def export_to_json(summary: ReviewSummary) -> str:
    """
    Export a review summary to JSON.

    Args:
        summary: Review summary

    Returns:
        JSON string with an added top-level "is_valid" flag
    """
    result_dict = summary.model_dump()
    result_dict["is_valid"] = summary.is_valid
    return json.dumps(result_dict, indent=2, default=str)
