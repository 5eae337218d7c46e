"""
Utilities Module

Helper functions and utilities used across the application.

Components:
- logger.py: Centralized logging with PHI masking
- error_handler.py: Error codes, IntakeError and ErrorResult
- date_utils.py: Date parsing and birth-date range checks
- format_utils.py: Input masks, format checks and PHI masking
- reporting.py: Plain-text and JSON review reports
"""

from .logger import get_logger, get_module_logger
from .error_handler import ErrorCode, ErrorLevel, IntakeError, ErrorResult, ErrorHandler
from .date_utils import parse_date, is_valid_birth_date
from .format_utils import format_ssn, format_phone, mask_ssn, mask_phi
from .reporting import generate_review_report, export_to_json

__all__ = [
    "get_logger",
    "get_module_logger",
    "ErrorCode",
    "ErrorLevel",
    "IntakeError",
    "ErrorResult",
    "ErrorHandler",
    "parse_date",
    "is_valid_birth_date",
    "format_ssn",
    "format_phone",
    "mask_ssn",
    "mask_phi",
    "generate_review_report",
    "export_to_json",
]
