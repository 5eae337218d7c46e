"""
Field Validators for the Patient Intake Form

One pure predicate per field. Every validator has the same shape:

    validator(value, snapshot=None) -> bool

and is evaluated against the CURRENT (already formatted) value. Validators
never raise; "invalid" is simply False. Only two validators read another
field, and they do it through the snapshot argument:

- password reads userid (must not equal it, case-insensitively)
- confirm_password reads password (must equal it exactly)

The date of birth validator reads the snapshot's evaluation date.
"""

from datetime import date
from typing import Callable, Dict, Optional

from ..config.constants import (
    ADDRESS_MAX_LENGTH,
    ADDRESS_MIN_LENGTH,
    PASSWORD_MIN_LENGTH,
    USER_ID_MAX_LENGTH,
    USER_ID_MIN_LENGTH,
)
from ..models.form_snapshot import FormSnapshot
from ..utils.date_utils import is_valid_birth_date
from ..utils.format_utils import (
    matches,
    validate_email as _email_format,
    validate_phone as _phone_format,
    validate_ssn as _ssn_format,
    validate_zip_code as _zip_format,
)


FieldValidator = Callable[[str, Optional[FormSnapshot]], bool]


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _length_between(value: str, minimum: int, maximum: int) -> bool:
    return minimum <= len(value) <= maximum


def _as_of(snapshot: Optional[FormSnapshot]) -> date:
    return snapshot.as_of if snapshot is not None else date.today()


# =============================================================================
# PERSONAL INFORMATION
# =============================================================================

def validate_first_name(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """1-30 characters: letters, apostrophes and dashes."""
    return matches("name", value)


def validate_middle_initial(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """Optional; otherwise exactly one letter."""
    if not value:
        return True
    return matches("middle_initial", value)


def validate_last_name(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """1-30 characters: letters, apostrophes and dashes."""
    return matches("name", value)


def validate_date_of_birth(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """
    Validate date of birth.

    Requirements:
    - MM/DD/YYYY with month 01-12 and day 01-31
    - A real calendar date (02/30/2024 fails, 02/29/2024 passes)
    - Not after the evaluation date
    - Not before the evaluation date minus 120 years

    Args:
        value: Current field value
        snapshot: Supplies the evaluation date (defaults to today)

    Returns:
        True if valid, False otherwise
    """
    if not value:
        return False
    return is_valid_birth_date(value, today=_as_of(snapshot))


def validate_ssn(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """Exactly DDD-DD-DDDD."""
    return _ssn_format(value)


# =============================================================================
# ADDRESS INFORMATION
# =============================================================================

def validate_address(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """Required; 2-30 characters."""
    if not value:
        return False
    return _length_between(value, ADDRESS_MIN_LENGTH, ADDRESS_MAX_LENGTH)


def validate_address_optional(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """Optional; 2-30 characters if entered."""
    if not value:
        return True
    return _length_between(value, ADDRESS_MIN_LENGTH, ADDRESS_MAX_LENGTH)


def validate_city(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """Required; 2-30 characters."""
    if not value:
        return False
    return _length_between(value, ADDRESS_MIN_LENGTH, ADDRESS_MAX_LENGTH)


def validate_state(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """Any non-empty selection."""
    return bool(value)


def validate_zip_code(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """Exactly 5 digits."""
    return _zip_format(value)


# =============================================================================
# CONTACT INFORMATION
# =============================================================================

def validate_email(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """name@domain.tld with a 2+ letter TLD."""
    return _email_format(value)


def validate_phone(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """Optional; otherwise DDD-DDD-DDDD."""
    if not value:
        return True
    return _phone_format(value)


# =============================================================================
# ACCOUNT INFORMATION
# =============================================================================

def validate_user_id(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """
    Validate user ID.

    Requirements:
    - 5-20 characters
    - Starts with a letter
    - Remaining characters are letters, digits, dashes or underscores
    """
    if not value:
        return False
    if not _length_between(value, USER_ID_MIN_LENGTH, USER_ID_MAX_LENGTH):
        return False
    return matches("user_id", value)


def validate_password(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """
    Validate password complexity and its relation to the user ID.

    Requirements:
    - 8+ characters
    - At least 1 uppercase, 1 lowercase and 1 digit (ASCII)
    - When a user ID is entered, must not equal it ignoring case

    Args:
        value: Current password value
        snapshot: Supplies the current userid value

    Returns:
        True if valid, False otherwise
    """
    if not value or len(value) < PASSWORD_MIN_LENGTH:
        return False

    has_upper = any("A" <= ch <= "Z" for ch in value)
    has_lower = any("a" <= ch <= "z" for ch in value)
    has_digit = any("0" <= ch <= "9" for ch in value)

    if not (has_upper and has_lower and has_digit):
        return False

    user_id = snapshot.value("userid") if snapshot is not None else ""
    if user_id and value.lower() == user_id.lower():
        return False

    return True


def validate_confirm_password(value: str, snapshot: Optional[FormSnapshot] = None) -> bool:
    """Non-empty and exactly equal to the current password."""
    password = snapshot.value("password") if snapshot is not None else ""
    return value != "" and value == password


# =============================================================================
# MESSAGE PRODUCERS
# =============================================================================

def last_name_message(value: str) -> str:
    return "Last name must be 1-30 characters, letters, apostrophes, and dashes only"


# =============================================================================
# REGISTRIES
# =============================================================================

# Validator names referenced from validation_rules.yaml
FIELD_VALIDATORS: Dict[str, FieldValidator] = {
    "first_name": validate_first_name,
    "middle_initial": validate_middle_initial,
    "last_name": validate_last_name,
    "date_of_birth": validate_date_of_birth,
    "ssn": validate_ssn,
    "address": validate_address,
    "address_optional": validate_address_optional,
    "city": validate_city,
    "state": validate_state,
    "zip_code": validate_zip_code,
    "email": validate_email,
    "phone": validate_phone,
    "user_id": validate_user_id,
    "password": validate_password,
    "confirm_password": validate_confirm_password,
}

# Message producers referenced from validation_rules.yaml
MESSAGE_PRODUCERS: Dict[str, Callable[[str], str]] = {
    "last_name_message": last_name_message,
}
