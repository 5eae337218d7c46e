"""
Validation Module

Live validation of the intake form against the rule table in
config/validation_rules.yaml.

Components:
- validation_engine.py: Error-map owner and event API
- rule_loader.py: Loads the rule table from YAML
- readiness.py: Aggregate "may submit" computation
- field_validators.py: Individual field predicates
"""

from .validation_engine import ValidationEngine
from .rule_loader import RuleLoader, FieldRule, RadioGroupRule, get_rule_loader
from .readiness import compute_readiness
from .field_validators import (
    FIELD_VALIDATORS,
    MESSAGE_PRODUCERS,
    validate_date_of_birth,
    validate_password,
    validate_confirm_password,
)

__all__ = [
    # Main components
    "ValidationEngine",
    "RuleLoader",
    "FieldRule",
    "RadioGroupRule",
    "get_rule_loader",
    "compute_readiness",

    # Field validators
    "FIELD_VALIDATORS",
    "MESSAGE_PRODUCERS",
    "validate_date_of_birth",
    "validate_password",
    "validate_confirm_password",
]
