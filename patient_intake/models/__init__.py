"""
Data Models Module

Pydantic models for type safety and validation.

Components:
- form_snapshot.py: Lazy read-only form view handed to validators
- validation_result.py: Field/group validation and readiness results
- review_summary.py: Pre-submit review summary
"""

from .form_snapshot import FormSnapshot
from .validation_result import FieldValidationResult, ReadinessResult
from .review_summary import ReviewItem, ReviewSection, ReviewSummary

__all__ = [
    "FormSnapshot",
    "FieldValidationResult",
    "ReadinessResult",
    "ReviewItem",
    "ReviewSection",
    "ReviewSummary",
]
