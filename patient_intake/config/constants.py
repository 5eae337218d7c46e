"""
Application Constants and Enumerations

Defines constants used throughout the intake engine including form sections,
form states, rule kinds, regex patterns and length limits.

KEY DESIGN PRINCIPLES:

1. EVERY RULE IS A CLOSED-FORM PREDICATE:
   - A field is valid or invalid from its current value alone, plus at most
     one explicitly named sibling field (password reads userid,
     confirm_password reads password)

2. INVALID IS NOT AN EXCEPTION:
   - Validators return booleans; messages come from the rule table
   - Only programming mistakes (unknown ids, illegal transitions, broken
     rule files) raise

3. READINESS IS ALWAYS RECOMPUTED:
   - Submission is permitted iff no errors AND every required field and
     radio group is populated
"""

from enum import Enum


class FormSection(str, Enum):
    """Display sections of the intake form"""
    PERSONAL_INFORMATION = "Personal Information"
    CONTACT_INFORMATION = "Contact Information"
    ADDRESS_INFORMATION = "Address Information"
    MEDICAL_HISTORY = "Medical History"
    ADDITIONAL_INFORMATION = "Additional Information"
    ACCOUNT_INFORMATION = "Account Information"


class FormState(str, Enum):
    """Review/submit workflow states"""
    EDITING = "Editing"
    REVIEWING = "Reviewing"
    SUBMITTED = "Submitted"


class RuleKind(str, Enum):
    """Shape of the rule that produced a validation result"""
    FIELD = "field"
    RADIO_GROUP = "radio_group"


# Regex patterns for format validation (matched against the whole value)
REGEX_PATTERNS = {
    "name": r"[A-Za-z'-]{1,30}",
    "middle_initial": r"[A-Za-z]",
    "date": r"(0[1-9]|1[0-2])/(0[1-9]|[12][0-9]|3[01])/[0-9]{4}",
    "ssn": r"[0-9]{3}-[0-9]{2}-[0-9]{4}",
    "phone": r"[0-9]{3}-[0-9]{3}-[0-9]{4}",
    "zip_code": r"[0-9]{5}",
    "email": r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}",
    "user_id": r"[A-Za-z][A-Za-z0-9_-]*",
}


# Formatter digit limits
SSN_DIGITS = 9
PHONE_DIGITS = 10

# Length limits
NAME_MAX_LENGTH = 30
ADDRESS_MIN_LENGTH = 2
ADDRESS_MAX_LENGTH = 30
USER_ID_MIN_LENGTH = 5
USER_ID_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 8

# Oldest accepted date of birth, in years before today
MAX_AGE_YEARS = 120

# Health rating scale shown in review
HEALTH_RATING_SCALE = 10


# Notice surfaced when confirm is attempted with outstanding errors
SUBMIT_BLOCKED_NOTICE = "Please correct all errors before submitting."


# US State abbreviations (state selection options)
US_STATES = [
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "DC", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "PR", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY"
]


# Fields to mask in logs
SENSITIVE_FIELDS = {
    "ssn",
    "dob",
    "password",
    "confirm_password",
}
