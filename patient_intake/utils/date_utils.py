"""
Date Validation Utilities

Provides helper functions for date validation including:
- Strict MM/DD/YYYY parsing with calendar checks
- Birth date range checks (not in the future, not older than 120 years)
"""

from datetime import date
from typing import Optional, Union
import re

from ..config.constants import REGEX_PATTERNS, MAX_AGE_YEARS


def parse_date(date_str: str) -> Optional[date]:
    """
    Parse an MM/DD/YYYY string into a date object.

    The string must match the pattern exactly (two-digit month and day,
    four-digit year) and denote a real calendar date, so 02/30/2024 and
    04/31/2024 are rejected.

    Args:
        date_str: String representation of a date

    Returns:
        date object if successfully parsed, None otherwise
    """
    if not date_str or not isinstance(date_str, str):
        return None

    if re.fullmatch(REGEX_PATTERNS["date"], date_str) is None:
        return None

    month, day, year = (int(part) for part in date_str.split("/"))

    try:
        return date(year, month, day)
    except ValueError:
        # Day out of range for the month, or year 0000
        return None


def subtract_years(anchor: date, years: int) -> date:
    """
    Move a date back by a whole number of years.

    Feb 29 maps to Feb 28 when the target year is not a leap year.

    Args:
        anchor: Starting date
        years: Number of years to subtract

    Returns:
        The shifted date
    """
    try:
        return anchor.replace(year=anchor.year - years)
    except ValueError:
        return anchor.replace(year=anchor.year - years, day=28)


def is_valid_birth_date(date_value: Union[str, date],
                        today: Optional[date] = None,
                        max_age_years: int = MAX_AGE_YEARS) -> bool:
    """
    Check if a date of birth is acceptable.

    A birth date is acceptable when it:
    - Is a real calendar date
    - Is not after today (today itself is allowed)
    - Is not earlier than exactly max_age_years before today

    Args:
        date_value: Birth date (MM/DD/YYYY string or date)
        today: Reference date (defaults to the local date)
        max_age_years: Oldest accepted age

    Returns:
        True if birth date is acceptable, False otherwise
    """
    if isinstance(date_value, str):
        date_value = parse_date(date_value)

    if date_value is None:
        return False

    today = today or date.today()
    earliest = subtract_years(today, max_age_years)

    return earliest <= date_value <= today
