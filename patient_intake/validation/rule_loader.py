"""
Validation Rule Loader

Loads and parses the intake rule table from validation_rules.yaml.
Provides type-safe access to field, radio group, checkbox group and
free-field configurations, in the order they appear in the file.
"""

import yaml
from pathlib import Path
from typing import Dict, Optional, List, Any
from pydantic import BaseModel, Field, ValidationError
from functools import lru_cache

from ..config.constants import FormSection
from ..config.settings import get_settings
from ..utils.error_handler import configuration_error
from ..utils.format_utils import FORMATTERS, BLUR_TRANSFORMS
from .field_validators import FIELD_VALIDATORS, MESSAGE_PRODUCERS


class FieldRule(BaseModel):
    """Validation rule for a single free-text field"""

    field_id: str = Field(
        ...,
        description="Field identifier"
    )

    label: str = Field(
        ...,
        description="Label shown to the user"
    )

    section: FormSection = Field(
        ...,
        description="Display section"
    )

    validator: str = Field(
        ...,
        description="Name of a predicate in FIELD_VALIDATORS"
    )

    error_message: str = Field(
        ...,
        description="Error message for validation failure"
    )

    message_producer: Optional[str] = Field(
        None,
        description="Name of a value -> message function in MESSAGE_PRODUCERS"
    )

    required: bool = Field(
        False,
        description="Whether a non-empty value is needed for readiness"
    )

    formatter: Optional[str] = Field(
        None,
        description="Keystroke mask applied before validation (ssn, phone)"
    )

    blur_transform: Optional[str] = Field(
        None,
        description="Normalization applied on focus loss (lowercase)"
    )

    sensitive: bool = Field(
        False,
        description="Whether field contains PHI or secrets requiring masking"
    )

    def message_for(self, value: str) -> str:
        """Resolve the error message for an invalid value."""
        if self.message_producer:
            return MESSAGE_PRODUCERS[self.message_producer](value)
        return self.error_message


class RadioGroupRule(BaseModel):
    """Required-selection rule for a radio group"""

    group_name: str = Field(..., description="Radio group name")
    label: str = Field(..., description="Label shown to the user")
    section: FormSection = Field(..., description="Display section")
    required_message: str = Field(..., description="Message when nothing is selected")
    review_error: Optional[str] = Field(None, description="Error text shown in the review summary")


class CheckboxGroup(BaseModel):
    """Checkbox group shown in review; never validated"""

    group_name: str
    label: str
    section: FormSection


class FreeField(BaseModel):
    """Free-form field shown in review; never validated"""

    field_id: str
    label: str
    section: FormSection
    default: str = ""


class RuleLoader:
    """
    Loads and manages the intake rule table from YAML configuration.

    Rules are loaded once and cached on the instance. Every name the YAML
    refers to (validator, message producer, formatter, blur transform) is
    checked against its registry at load time.
    """

    def __init__(self, rules_path: Optional[Path] = None):
        """
        Initialize the RuleLoader.

        Args:
            rules_path: Path to validation_rules.yaml. If None, uses the
                INTAKE_RULES_PATH setting or the packaged default.
        """
        if rules_path is None:
            rules_path = get_settings().rules_path
        if rules_path is None:
            current_file = Path(__file__)
            rules_path = current_file.parent.parent / "config" / "validation_rules.yaml"

        self.rules_path = Path(rules_path)
        self._rules: Dict[str, FieldRule] = {}
        self._radio_groups: Dict[str, RadioGroupRule] = {}
        self._checkbox_groups: Dict[str, CheckboxGroup] = {}
        self._free_fields: Dict[str, FreeField] = {}
        self._raw_yaml: Dict[str, Any] = {}
        self._loaded = False

    def load_rules(self, force_reload: bool = False) -> Dict[str, FieldRule]:
        """
        Load the rule table from the YAML file.

        Args:
            force_reload: If True, reload rules even if already loaded

        Returns:
            Ordered dictionary mapping field ids to FieldRule objects

        Raises:
            FileNotFoundError: If rules file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            IntakeError: If a rule is malformed or names an unknown function
        """
        if self._loaded and not force_reload:
            return self._rules

        if not self.rules_path.exists():
            raise FileNotFoundError(
                f"Validation rules file not found: {self.rules_path}"
            )

        try:
            with open(self.rules_path, 'r', encoding='utf-8') as f:
                self._raw_yaml = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Failed to parse YAML file {self.rules_path}: {e}")

        if not isinstance(self._raw_yaml, dict):
            raise configuration_error(
                "Validation rules YAML must be a dictionary",
                path=str(self.rules_path)
            )

        self._rules = self._parse_section("fields", FieldRule, "field_id")
        self._radio_groups = self._parse_section("radio_groups", RadioGroupRule, "group_name")
        self._checkbox_groups = self._parse_section("checkbox_groups", CheckboxGroup, "group_name")
        self._free_fields = self._parse_section("free_fields", FreeField, "field_id")

        for rule in self._rules.values():
            self._check_references(rule)

        self._loaded = True
        return self._rules

    def _parse_section(self, section: str, model: type, key_name: str) -> Dict[str, Any]:
        """
        Parse one top-level section of the YAML into models.

        Args:
            section: Top-level key (fields, radio_groups, ...)
            model: Pydantic model for each entry
            key_name: Model attribute that receives the entry's key

        Returns:
            Ordered dictionary of parsed entries
        """
        raw_section = self._raw_yaml.get(section) or {}
        if not isinstance(raw_section, dict):
            raise configuration_error(
                f"Section '{section}' must be a mapping",
                path=str(self.rules_path)
            )

        parsed: Dict[str, Any] = {}
        for name, entry in raw_section.items():
            if not isinstance(entry, dict):
                raise configuration_error(
                    f"Entry '{name}' in '{section}' must be a mapping",
                    path=str(self.rules_path)
                )
            try:
                parsed[name] = model(**{**entry, key_name: name})
            except ValidationError as e:
                raise configuration_error(
                    f"Failed to parse rule '{name}' in '{section}': {e}",
                    path=str(self.rules_path)
                )

        return parsed

    def _check_references(self, rule: FieldRule) -> None:
        """Fail fast on names that have no registered implementation."""
        checks = [
            ("validator", rule.validator, FIELD_VALIDATORS),
            ("message_producer", rule.message_producer, MESSAGE_PRODUCERS),
            ("formatter", rule.formatter, FORMATTERS),
            ("blur_transform", rule.blur_transform, BLUR_TRANSFORMS),
        ]
        for attribute, name, registry in checks:
            if name is not None and name not in registry:
                raise configuration_error(
                    f"Rule '{rule.field_id}' refers to unknown {attribute} '{name}'",
                    field=rule.field_id,
                    path=str(self.rules_path)
                )

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load_rules()

    def get_rule(self, field_id: str) -> Optional[FieldRule]:
        """
        Get validation rule for a specific field.

        Args:
            field_id: Field identifier

        Returns:
            FieldRule object, or None if field not found
        """
        self._ensure_loaded()
        return self._rules.get(field_id)

    def get_all_rules(self) -> Dict[str, FieldRule]:
        """
        Get all loaded field rules, in file order.

        Returns:
            Dictionary mapping field ids to FieldRule objects
        """
        self._ensure_loaded()
        return self._rules.copy()

    def get_required_fields(self) -> Dict[str, FieldRule]:
        """
        Get only required fields.

        Returns:
            Dictionary of required field rules
        """
        self._ensure_loaded()
        return {
            field_id: rule
            for field_id, rule in self._rules.items()
            if rule.required
        }

    def get_fields_by_section(self, section: FormSection) -> Dict[str, FieldRule]:
        """
        Get field rules in one display section.

        Args:
            section: Form section (e.g., FormSection.ADDRESS_INFORMATION)

        Returns:
            Dictionary of field rules in the section
        """
        self._ensure_loaded()
        return {
            field_id: rule
            for field_id, rule in self._rules.items()
            if rule.section == section
        }

    def get_radio_groups(self) -> Dict[str, RadioGroupRule]:
        self._ensure_loaded()
        return self._radio_groups.copy()

    def get_checkbox_groups(self) -> Dict[str, CheckboxGroup]:
        self._ensure_loaded()
        return self._checkbox_groups.copy()

    def get_free_fields(self) -> Dict[str, FreeField]:
        self._ensure_loaded()
        return self._free_fields.copy()

    def reload_rules(self) -> Dict[str, FieldRule]:
        """
        Force reload of validation rules from file.

        Returns:
            Dictionary of reloaded rules
        """
        return self.load_rules(force_reload=True)

    def has_field(self, field_id: str) -> bool:
        """
        Check if a field has a validation rule.

        Args:
            field_id: Field identifier

        Returns:
            True if field has a rule, False otherwise
        """
        self._ensure_loaded()
        return field_id in self._rules


@lru_cache(maxsize=1)
def get_rule_loader() -> RuleLoader:
    """
    Get shared instance of RuleLoader.

    The rule table is static, so every engine can share one loader.

    Returns:
        RuleLoader instance
    """
    return RuleLoader()
