"""
Format Utilities

Provides keystroke-time input masks and format checks including:
- SSN (Social Security Number) masking as XXX-XX-XXXX
- Phone number masking as XXX-XXX-XXXX
- Zip codes and email addresses
- PHI masking for logs and review output
"""

import re
from typing import Callable, Dict, Optional
from ..config.constants import REGEX_PATTERNS, SSN_DIGITS, PHONE_DIGITS


_NON_DIGITS = re.compile(r"[^0-9]")


def digits_only(value: Optional[str]) -> str:
    """
    Strip every character that is not an ASCII digit.

    Args:
        value: Raw input text

    Returns:
        The digits of value, in order (empty string for empty input)
    """
    if not value or not isinstance(value, str):
        return ""

    return _NON_DIGITS.sub("", value)


def _group_digits(digits: str, groups: tuple) -> str:
    """
    Join consecutive digit groups with hyphens.

    Only groups that have started are emitted, so partial input yields
    partial output ("1234" with (3, 2, 4) -> "123-4").
    """
    parts = []
    start = 0
    for size in groups:
        chunk = digits[start:start + size]
        if not chunk:
            break
        parts.append(chunk)
        start += size

    return "-".join(parts)


def format_ssn(raw: Optional[str]) -> str:
    """
    Mask raw SSN input as XXX-XX-XXXX.

    Non-digits are dropped and input is truncated to 9 digits. Idempotent:
    formatting an already formatted value returns it unchanged.

    Args:
        raw: Raw field text as typed

    Returns:
        Formatted SSN (possibly partial, possibly empty)
    """
    digits = digits_only(raw)[:SSN_DIGITS]
    return _group_digits(digits, (3, 2, 4))


def format_phone(raw: Optional[str]) -> str:
    """
    Mask raw phone input as XXX-XXX-XXXX.

    Non-digits are dropped and input is truncated to 10 digits.

    Args:
        raw: Raw field text as typed

    Returns:
        Formatted phone (possibly partial, possibly empty)
    """
    digits = digits_only(raw)[:PHONE_DIGITS]
    return _group_digits(digits, (3, 3, 4))


def matches(pattern_name: str, value: Optional[str]) -> bool:
    """
    Check a value against a named pattern from REGEX_PATTERNS.

    The whole value must match.

    Args:
        pattern_name: Key in REGEX_PATTERNS
        value: Value to check

    Returns:
        True if value fully matches, False otherwise
    """
    if not value or not isinstance(value, str):
        return False

    return re.fullmatch(REGEX_PATTERNS[pattern_name], value) is not None


def validate_ssn(ssn: str) -> bool:
    """
    Validate Social Security Number format.

    Accepts only the masked form 123-45-6789.

    Args:
        ssn: Social Security Number to validate

    Returns:
        True if valid SSN format, False otherwise
    """
    return matches("ssn", ssn)


def validate_phone(phone: str) -> bool:
    """
    Validate phone number format (555-123-4567).

    Args:
        phone: Phone number to validate

    Returns:
        True if valid phone format, False otherwise
    """
    return matches("phone", phone)


def validate_email(email: str) -> bool:
    """
    Validate email address format.

    Basic email validation - checks for:
    - Valid local-part characters
    - @ symbol
    - Domain with a 2+ letter extension

    Args:
        email: Email address to validate

    Returns:
        True if valid email format, False otherwise
    """
    return matches("email", email)


def validate_zip_code(zip_code: str) -> bool:
    """
    Validate ZIP code format (exactly 5 digits).

    Args:
        zip_code: ZIP code to validate

    Returns:
        True if valid ZIP code format, False otherwise
    """
    return matches("zip_code", zip_code)


def mask_ssn(ssn: str) -> str:
    """
    Mask SSN for logging/display (***-**-1234).

    Args:
        ssn: SSN to mask

    Returns:
        Masked SSN
    """
    digits = digits_only(ssn)
    if len(digits) != SSN_DIGITS:
        return "***-**-****"

    # Show only last 4 digits
    return f"***-**-{digits[-4:]}"


def mask_secret(value: Optional[str]) -> str:
    """Mask a secret by character count."""
    return "*" * len(value or "")


def mask_phi(value: str, field_name: str) -> str:
    """
    Mask PHI (Protected Health Information) for logging.

    Args:
        value: Value to mask
        field_name: Name of the field

    Returns:
        Masked value
    """
    if not value:
        return "[REDACTED]"

    if field_name == "ssn":
        return mask_ssn(value)

    if field_name in ("password", "confirm_password"):
        return mask_secret(value)

    # For other PHI, show only first and last characters
    if len(value) <= 2:
        return "*" * len(value)

    return f"{value[0]}{'*' * (len(value) - 2)}{value[-1]}"


# Keystroke masks, referenced by name from validation_rules.yaml
FORMATTERS: Dict[str, Callable[[Optional[str]], str]] = {
    "ssn": format_ssn,
    "phone": format_phone,
}

# Focus-loss normalizations, referenced by name from validation_rules.yaml
BLUR_TRANSFORMS: Dict[str, Callable[[str], str]] = {
    "lowercase": str.lower,
}
