"""
Validation Engine

Core state holder for live intake validation. Owns the error map for one
form session and keeps it consistent under a stream of user edits:

    edit -> format -> write back -> validate -> error map -> readiness -> display

Concurrency: the engine is single-threaded and synchronous. Every event
(keystroke, focus loss, selection change) is handled to completion before
the next one is accepted, so each call touches exactly one error-map key and
cross-field validators always read their sibling's latest value. No locks or
queues are involved.
"""

from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..adapters.data_source import FormDataSource
from ..adapters.display import DisplayAdapter, NullDisplayAdapter
from ..config.constants import RuleKind
from ..models.form_snapshot import FormSnapshot
from ..models.validation_result import FieldValidationResult, ReadinessResult
from ..utils.error_handler import (
    IntakeError,
    field_invalid_error,
    group_unselected_error,
    unknown_field_error,
)
from ..utils.format_utils import FORMATTERS, BLUR_TRANSFORMS
from ..utils.logger import get_module_logger

from .field_validators import FIELD_VALIDATORS, FieldValidator
from .readiness import compute_readiness
from .rule_loader import RuleLoader, FieldRule, RadioGroupRule, get_rule_loader


logger = get_module_logger()


class ValidationEngine:
    """
    Live validation engine for the patient intake form.

    Responsibilities:
    1. Format numeric inputs (SSN, phone) as the user types
    2. Validate one field or radio group per event
    3. Keep the error map current (key present iff failing)
    4. Recompute readiness and notify the display adapter
    """

    def __init__(
        self,
        data_source: FormDataSource,
        display: Optional[DisplayAdapter] = None,
        rule_loader: Optional[RuleLoader] = None,
        today: Optional[Callable[[], date]] = None
    ):
        """
        Initialize the ValidationEngine.

        Args:
            data_source: Form data source (current values and selections)
            display: Display adapter to notify (no-op if None)
            rule_loader: RuleLoader instance (uses shared loader if None)
            today: Callable returning the evaluation date (defaults to date.today)
        """
        self.data_source = data_source
        self.display = display or NullDisplayAdapter()
        self.rule_loader = rule_loader or get_rule_loader()
        self.today = today or date.today

        # Load rules on initialization
        self.rules: Dict[str, FieldRule] = self.rule_loader.load_rules()
        self.radio_groups: Dict[str, RadioGroupRule] = self.rule_loader.get_radio_groups()
        self.required_fields: List[str] = list(self.rule_loader.get_required_fields())

        self.validator_registry = self._build_validator_registry()

        self._errors: Dict[str, str] = {}

    def _build_validator_registry(self) -> Dict[str, FieldValidator]:
        """
        Build registry mapping field ids to validator functions.

        Returns:
            Dictionary mapping field ids to validator callables
        """
        return {
            field_id: FIELD_VALIDATORS[rule.validator]
            for field_id, rule in self.rules.items()
        }

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def errors(self) -> Dict[str, str]:
        """Copy of the current error map."""
        return dict(self._errors)

    def snapshot(self) -> FormSnapshot:
        """Lazy read-only view of the form as of today."""
        return FormSnapshot(self.data_source, as_of=self.today())

    def _get_rule(self, field_id: str) -> FieldRule:
        rule = self.rules.get(field_id)
        if rule is None:
            raise unknown_field_error(field_id)
        return rule

    def _get_group(self, group_name: str) -> RadioGroupRule:
        group = self.radio_groups.get(group_name)
        if group is None:
            raise unknown_field_error(group_name)
        return group

    # ------------------------------------------------------------------
    # Side-effect-free evaluation
    # ------------------------------------------------------------------

    def evaluate_field(self, field_id: str, value: Optional[str] = None) -> bool:
        """
        Run a field's validator without touching the error map or display.

        Args:
            field_id: Field identifier
            value: Value to check (reads the data source if None)

        Returns:
            True if the value passes the field's rule
        """
        self._get_rule(field_id)
        snapshot = self.snapshot()
        if value is None:
            value = snapshot.value(field_id)
        return self.validator_registry[field_id](value, snapshot)

    def evaluate_radio_group(self, group_name: str) -> bool:
        """Whether the group currently has a selection (no side effects)."""
        self._get_group(group_name)
        return bool(self.data_source.get_selected_radio_value(group_name))

    # ------------------------------------------------------------------
    # Validation (one error-map transition per call)
    # ------------------------------------------------------------------

    def validate_field(
        self,
        field_id: str,
        current_value: Optional[str] = None
    ) -> FieldValidationResult:
        """
        Validate a single field and publish the outcome.

        Args:
            field_id: Field identifier
            current_value: Value to validate (reads the data source if None)

        Returns:
            FieldValidationResult with validation outcome

        Raises:
            IntakeError: If no rule is registered for field_id
        """
        rule = self._get_rule(field_id)
        if current_value is None:
            current_value = self.data_source.get_value(field_id) or ""

        is_valid = self.evaluate_field(field_id, current_value)
        message = None

        if is_valid:
            self._errors.pop(field_id, None)
            self.display.show_field_success(field_id)
        else:
            message = rule.message_for(current_value)
            self._errors[field_id] = message
            self.display.show_field_error(field_id, message)

        logger.log_validation(field_id, is_valid, message)
        self.compute_readiness()

        return FieldValidationResult(
            field_id=field_id,
            section=rule.section.value,
            rule_kind=RuleKind.FIELD,
            is_valid=is_valid,
            is_required=rule.required,
            message=message
        )

    def validate_radio_group(self, group_name: str) -> FieldValidationResult:
        """
        Validate that a radio group has a selection and publish the outcome.

        Args:
            group_name: Radio group name

        Returns:
            FieldValidationResult with validation outcome

        Raises:
            IntakeError: If no rule is registered for group_name
        """
        group = self._get_group(group_name)
        is_valid = self.evaluate_radio_group(group_name)
        message = None

        if is_valid:
            self._errors.pop(group_name, None)
            self.display.show_field_success(group_name)
        else:
            message = group.required_message
            self._errors[group_name] = message
            self.display.show_field_error(group_name, message)

        logger.log_validation(group_name, is_valid, message)
        self.compute_readiness()

        return FieldValidationResult(
            field_id=group_name,
            section=group.section.value,
            rule_kind=RuleKind.RADIO_GROUP,
            is_valid=is_valid,
            is_required=True,
            message=message
        )

    def validate_all(self) -> Dict[str, str]:
        """
        Re-validate every field and radio group, in rule order.

        Returns:
            Copy of the resulting error map
        """
        for field_id in self.rules:
            self.validate_field(field_id)
        for group_name in self.radio_groups:
            self.validate_radio_group(group_name)

        return self.errors

    # ------------------------------------------------------------------
    # Readiness
    # ------------------------------------------------------------------

    def _readiness(self) -> ReadinessResult:
        return compute_readiness(
            errors=self._errors,
            snapshot=self.snapshot(),
            required_fields=self.required_fields,
            radio_groups=self.radio_groups
        )

    def compute_readiness(self) -> ReadinessResult:
        """
        Recompute whether the form may be submitted and tell the display.

        Returns:
            ReadinessResult
        """
        result = self._readiness()
        self.display.set_submit_enabled(result.is_ready)
        return result

    @property
    def is_ready(self) -> bool:
        """Current readiness, without notifying the display."""
        return self._readiness().is_ready

    # ------------------------------------------------------------------
    # Event API
    # ------------------------------------------------------------------

    def format_value(self, field_id: str, raw_value: Optional[str]) -> str:
        """Apply the field's keystroke mask, if it has one."""
        rule = self._get_rule(field_id)
        if rule.formatter:
            return FORMATTERS[rule.formatter](raw_value)
        return raw_value or ""

    def handle_field_change(self, field_id: str, raw_value: Optional[str]) -> FieldValidationResult:
        """
        Content-change event: format, write back, then validate.

        Args:
            field_id: Field identifier
            raw_value: Field text as typed

        Returns:
            FieldValidationResult for the formatted value
        """
        value = self.format_value(field_id, raw_value)
        self.data_source.set_value(field_id, value)
        return self.validate_field(field_id, value)

    def handle_field_blur(self, field_id: str) -> FieldValidationResult:
        """
        Focus-loss event: normalize (email/userid lower-case), then validate.

        A user who never types still gets evaluated once they leave the field.
        """
        rule = self._get_rule(field_id)
        value = self.data_source.get_value(field_id) or ""

        if rule.blur_transform:
            value = BLUR_TRANSFORMS[rule.blur_transform](value)
            self.data_source.set_value(field_id, value)

        return self.validate_field(field_id, value)

    def handle_radio_change(self, group_name: str, value: Optional[str]) -> FieldValidationResult:
        """Selection-change event for a radio group."""
        self._get_group(group_name)
        self.data_source.select_radio(group_name, value)
        return self.validate_radio_group(group_name)

    def handle_checkbox_change(self, group_name: str, values: Iterable[str]) -> ReadinessResult:
        """Checkbox groups are informational; store and recompute readiness."""
        self.data_source.set_checkbox_values(group_name, values)
        return self.compute_readiness()

    # ------------------------------------------------------------------
    # Error reporting and submission data
    # ------------------------------------------------------------------

    def outstanding_errors(self) -> List[IntakeError]:
        """
        Describe each error-map entry with its taxonomy code.

        Returns:
            FIELD_INVALID / GROUP_UNSELECTED errors, one per entry
        """
        issues = []
        for key, message in self._errors.items():
            if key in self.radio_groups:
                issues.append(group_unselected_error(key, message))
            else:
                issues.append(field_invalid_error(key, message))
        return issues

    def submission_values(self) -> Dict[str, Any]:
        """
        Collect final values for the submission collaborator.

        User ID and email are lower-cased. Radio selections, checkbox values
        and free fields are included under their own names.

        Returns:
            Dictionary of field/group name -> value
        """
        values: Dict[str, Any] = {}
        for field_id in self.rules:
            values[field_id] = self.data_source.get_value(field_id) or ""

        values["userid"] = values.get("userid", "").lower()
        values["email"] = values.get("email", "").lower()

        for group_name in self.radio_groups:
            values[group_name] = self.data_source.get_selected_radio_value(group_name) or ""

        for group_name in self.rule_loader.get_checkbox_groups():
            values[group_name] = list(self.data_source.get_checked_checkbox_values(group_name))

        for field_id, free_field in self.rule_loader.get_free_fields().items():
            values[field_id] = self.data_source.get_value(field_id) or free_field.default

        return values
