"""
Configuration Module

Manages application configuration and settings.

Components:
- settings.py: Application settings from environment variables
- validation_rules.yaml: Field rules table (loaded by validation.rule_loader)
- constants.py: Application constants and enums
"""

from .constants import FormSection, FormState, RuleKind
from .settings import IntakeSettings, get_settings

__all__ = [
    "FormSection",
    "FormState",
    "RuleKind",
    "IntakeSettings",
    "get_settings",
]
