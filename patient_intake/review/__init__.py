"""
Review Module

Pre-submit review and the review/submit workflow.

Components:
- summary_builder.py: Builds the sectioned pass/fail review summary
- review_flow.py: Editing / Reviewing / Submitted state machine
"""

from .summary_builder import ReviewSummaryBuilder
from .review_flow import ReviewFlow

__all__ = [
    "ReviewSummaryBuilder",
    "ReviewFlow",
]
