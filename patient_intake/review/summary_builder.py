"""
Review Summary Builder

Builds the pre-submit review from the same validators the live engine uses,
evaluated without side effects. Sections can therefore be marked pass/fail
as a unit (e.g. the whole address) even though the error map is per field.

Only reads the form; never writes a value.
"""

from typing import Dict, List

from ..config.constants import FormSection, HEALTH_RATING_SCALE
from ..models.review_summary import ReviewItem, ReviewSection, ReviewSummary
from ..utils.format_utils import mask_secret, mask_ssn
from ..validation.validation_engine import ValidationEngine


def _item(label: str, display_value: str, passed: bool, error: str) -> ReviewItem:
    return ReviewItem(
        label=label,
        display_value=display_value,
        passed=passed,
        error=None if passed else error
    )


class ReviewSummaryBuilder:
    """Builds a ReviewSummary for the current state of an engine's form."""

    def __init__(self, engine: ValidationEngine):
        self.engine = engine

    def _value(self, field_id: str) -> str:
        return self.engine.data_source.get_value(field_id) or ""

    def _check(self, field_id: str) -> bool:
        return self.engine.evaluate_field(field_id)

    def build(self, errors: Dict[str, str]) -> ReviewSummary:
        """
        Build the review summary.

        Args:
            errors: Error map from the full re-validation that preceded the review

        Returns:
            ReviewSummary with one pass/fail annotation per logical item
        """
        return ReviewSummary(
            sections=[
                self._personal_section(),
                self._contact_section(),
                self._address_section(),
                self._medical_history_section(),
                self._additional_section(),
                self._account_section(),
            ],
            errors=dict(errors)
        )

    def _personal_section(self) -> ReviewSection:
        first_name = self._value("first_name")
        middle_initial = self._value("middle_initial")
        last_name = self._value("last_name")
        full_name = " ".join(part for part in (first_name, middle_initial, last_name) if part)
        name_valid = (
            self._check("first_name")
            and self._check("middle_initial")
            and self._check("last_name")
        )

        ssn = self._value("ssn")
        dob = self._value("dob")

        return ReviewSection(
            title=FormSection.PERSONAL_INFORMATION.value,
            items=[
                _item("Name", full_name, name_valid, "Invalid name format"),
                _item("SSN", mask_ssn(ssn) if ssn else "", self._check("ssn"), "Invalid SSN format"),
                _item("Date of Birth", dob, self._check("dob"), "Invalid date or out of range"),
            ]
        )

    def _contact_section(self) -> ReviewSection:
        email = self._value("email")
        phone = self._value("phone")

        return ReviewSection(
            title=FormSection.CONTACT_INFORMATION.value,
            items=[
                _item("Email", email, self._check("email"), "Invalid email format"),
                _item("Phone", phone or "Not provided", self._check("phone"), "Invalid phone format"),
            ]
        )

    def _address_section(self) -> ReviewSection:
        address1 = self._value("address1")
        address2 = self._value("address2")
        city = self._value("city")
        state = self._value("state")
        zip_code = self._value("zip")

        street = f"{address1}, {address2}" if address2 else address1
        full_address = f"{street}, {city}, {state} {zip_code}"
        address_valid = all(
            self._check(field_id)
            for field_id in ("address1", "address2", "city", "state", "zip")
        )

        return ReviewSection(
            title=FormSection.ADDRESS_INFORMATION.value,
            items=[
                _item("Address", full_address, address_valid,
                      "Invalid address or missing required fields"),
            ]
        )

    def _medical_history_section(self) -> ReviewSection:
        data_source = self.engine.data_source
        items: List[ReviewItem] = []

        for group_name, group in self.engine.rule_loader.get_checkbox_groups().items():
            if group.section != FormSection.MEDICAL_HISTORY:
                continue
            checked = list(data_source.get_checked_checkbox_values(group_name))
            items.append(_item(group.label, ", ".join(checked) if checked else "None selected", True, ""))

        symptoms = self._value("symptoms")
        items.append(_item("Symptoms", symptoms or "None described", True, ""))

        return ReviewSection(title=FormSection.MEDICAL_HISTORY.value, items=items)

    def _additional_section(self) -> ReviewSection:
        data_source = self.engine.data_source
        items: List[ReviewItem] = []

        for group_name, group in self.engine.radio_groups.items():
            selected = data_source.get_selected_radio_value(group_name) or ""
            items.append(_item(
                group.label,
                selected,
                self.engine.evaluate_radio_group(group_name),
                group.review_error or f"{group.label} not selected"
            ))

        free_fields = self.engine.rule_loader.get_free_fields()
        rating = self._value("health_rating")
        if not rating and "health_rating" in free_fields:
            rating = free_fields["health_rating"].default
        items.append(_item("Health Rating", f"{rating}/{HEALTH_RATING_SCALE}", True, ""))

        return ReviewSection(title=FormSection.ADDITIONAL_INFORMATION.value, items=items)

    def _account_section(self) -> ReviewSection:
        user_id = self._value("userid").lower()
        password = self._value("password")

        password_valid = self._check("password")
        passwords_match = self._check("confirm_password")

        if not password_valid:
            password_error = "Invalid password complexity or password equals user ID"
        else:
            password_error = "Passwords do not match"

        return ReviewSection(
            title=FormSection.ACCOUNT_INFORMATION.value,
            items=[
                _item("User ID", user_id, self._check("userid"), "Invalid user ID format"),
                _item("Password", mask_secret(password), password_valid and passwords_match,
                      password_error),
            ]
        )
