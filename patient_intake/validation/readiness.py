"""
Readiness Aggregator

Derives the single boolean that gates submission. It is a pure function of
the current error map and form values and is never cached.
"""

from typing import Dict, Iterable

from ..models.form_snapshot import FormSnapshot
from ..models.validation_result import ReadinessResult


def compute_readiness(
    errors: Dict[str, str],
    snapshot: FormSnapshot,
    required_fields: Iterable[str],
    radio_groups: Iterable[str]
) -> ReadinessResult:
    """
    Decide whether the form may be submitted.

    Ready iff:
    1. The error map is empty
    2. Every required field has a non-empty value
    3. Every radio group has a selection

    Args:
        errors: Current error map (field/group -> message)
        snapshot: Current form view
        required_fields: Field ids that must be populated
        radio_groups: Group names that must have a selection

    Returns:
        ReadinessResult with the verdict and what is blocking it
    """
    missing = [field_id for field_id in required_fields if not snapshot.value(field_id)]
    unselected = [group for group in radio_groups if not snapshot.selected(group)]
    error_fields = list(errors)

    return ReadinessResult(
        is_ready=not error_fields and not missing and not unselected,
        error_fields=error_fields,
        missing_fields=missing,
        unselected_groups=unselected,
    )
