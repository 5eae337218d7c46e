"""
Tests for the live validation engine: error map transitions, formatting on
change, normalization on blur, display notifications and readiness.
"""

import pytest

from patient_intake.adapters import InMemoryFormData
from patient_intake.config.constants import RuleKind
from patient_intake.utils.error_handler import ErrorCode, IntakeError


class TestValidateField:

    def test_invalid_value_adds_error(self, engine, display):
        result = engine.validate_field("first_name")

        assert not result.is_valid
        assert result.rule_kind == RuleKind.FIELD
        assert result.section == "Personal Information"
        assert result.is_required
        assert engine.errors["first_name"] == result.message
        assert display.field_status["first_name"] == result.message

    def test_valid_value_removes_error(self, engine, empty_form, display):
        engine.validate_field("zip")
        assert "zip" in engine.errors

        empty_form.set_value("zip", "62704")
        result = engine.validate_field("zip")

        assert result.is_valid
        assert result.message is None
        assert "zip" not in engine.errors
        assert display.field_status["zip"] is None

    def test_explicit_value_overrides_data_source(self, engine):
        assert engine.validate_field("zip", "62704").is_valid
        assert not engine.validate_field("zip", "1234").is_valid

    def test_messages_come_from_rule_table(self, engine):
        engine.validate_field("zip", "1234")
        engine.validate_field("last_name", "Smith3")

        assert engine.errors["zip"] == "Zip code must be 5 digits"
        assert engine.errors["last_name"] == (
            "Last name must be 1-30 characters, letters, apostrophes, and dashes only"
        )

    def test_optional_fields_pass_when_empty(self, engine):
        for field_id in ("middle_initial", "address2", "phone"):
            assert engine.validate_field(field_id).is_valid
        assert engine.errors == {}

    def test_idempotent_on_empty_form(self, engine):
        for field_id in engine.rules:
            engine.validate_field(field_id)
            first = engine.errors
            engine.validate_field(field_id)
            assert engine.errors == first

    def test_idempotent_on_valid_form(self, valid_engine):
        for field_id in valid_engine.rules:
            first = valid_engine.validate_field(field_id)
            second = valid_engine.validate_field(field_id)
            assert first == second
        assert valid_engine.errors == {}

    def test_unknown_field_raises(self, engine):
        with pytest.raises(IntakeError) as exc_info:
            engine.validate_field("favorite_color")
        assert exc_info.value.code == ErrorCode.UNKNOWN_FIELD

    def test_dob_uses_injected_date(self, engine):
        assert engine.validate_field("dob", "06/15/2025").is_valid
        assert not engine.validate_field("dob", "06/16/2025").is_valid


class TestCrossFieldRules:

    def test_password_reads_current_user_id(self, engine, empty_form):
        empty_form.set_value("userid", "abcdefg1")
        assert not engine.validate_field("password", "Abcdefg1").is_valid

        engine.handle_field_change("userid", "johndoe")
        assert engine.validate_field("password", "Abcdefg1").is_valid

    def test_confirm_password_reads_current_password(self, engine, empty_form):
        empty_form.set_value("password", "Abcdefg1")

        assert engine.validate_field("confirm_password", "Abcdefg1").is_valid
        assert not engine.validate_field("confirm_password", "abcdefg1").is_valid

    def test_empty_passwords_do_not_match(self, engine):
        result = engine.validate_field("confirm_password", "")
        assert not result.is_valid
        assert result.message == "Passwords must match"


class TestRadioGroups:

    def test_unselected_group(self, engine, display):
        result = engine.validate_radio_group("gender")

        assert not result.is_valid
        assert result.rule_kind == RuleKind.RADIO_GROUP
        assert result.message == "Please select a gender"
        assert engine.errors["gender"] == "Please select a gender"
        assert display.field_status["gender"] == "Please select a gender"

    def test_selection_clears_error(self, engine, empty_form):
        engine.validate_radio_group("insurance")
        result = engine.handle_radio_change("insurance", "Yes")

        assert result.is_valid
        assert "insurance" not in engine.errors
        assert empty_form.get_selected_radio_value("insurance") == "Yes"

    def test_clearing_selection(self, engine):
        engine.handle_radio_change("vaccinated", "No")
        result = engine.handle_radio_change("vaccinated", None)

        assert not result.is_valid
        assert engine.errors["vaccinated"] == "Please select vaccination status"

    def test_unknown_group_raises(self, engine):
        with pytest.raises(IntakeError) as exc_info:
            engine.validate_radio_group("blood_type")
        assert exc_info.value.code == ErrorCode.UNKNOWN_FIELD


class TestEventApi:

    def test_ssn_is_formatted_before_validation(self, engine, empty_form):
        result = engine.handle_field_change("ssn", "123456789")

        assert empty_form.get_value("ssn") == "123-45-6789"
        assert result.is_valid

    def test_partial_ssn_is_formatted_and_invalid(self, engine, empty_form):
        result = engine.handle_field_change("ssn", "12345")

        assert empty_form.get_value("ssn") == "123-45"
        assert not result.is_valid
        assert engine.errors["ssn"] == "SSN must be 9 digits in XXX-XX-XXXX format"

    def test_phone_is_formatted(self, engine, empty_form):
        assert engine.handle_field_change("phone", "5551234567").is_valid
        assert empty_form.get_value("phone") == "555-123-4567"

    def test_fields_without_formatter_are_stored_as_typed(self, engine, empty_form):
        engine.handle_field_change("first_name", "Jane")
        assert empty_form.get_value("first_name") == "Jane"

    def test_blur_lowercases_email_and_user_id(self, engine, empty_form):
        engine.handle_field_change("email", "Jane.Doe@Example.com")
        engine.handle_field_change("userid", "JaneDoe_85")

        assert engine.handle_field_blur("email").is_valid
        assert engine.handle_field_blur("userid").is_valid
        assert empty_form.get_value("email") == "jane.doe@example.com"
        assert empty_form.get_value("userid") == "janedoe_85"

    def test_blur_validates_untouched_field(self, engine, display):
        result = engine.handle_field_blur("city")

        assert not result.is_valid
        assert display.field_status["city"] == "City must be 2-30 characters"

    def test_checkbox_change_only_recomputes_readiness(self, engine, empty_form):
        readiness = engine.handle_checkbox_change("vaccinations", ["Influenza"])

        assert not readiness.is_ready
        assert engine.errors == {}
        assert empty_form.get_checked_checkbox_values("vaccinations") == ["Influenza"]


class TestDisplayNotifications:

    def test_readiness_published_after_each_validation(self, engine, display):
        engine.validate_field("zip", "62704")

        assert display.call_names() == ["show_field_success", "set_submit_enabled"]
        assert display.submit_enabled is False

    def test_submit_enabled_once_form_is_complete(self, valid_engine, display):
        valid_engine.validate_all()
        assert display.submit_enabled is True

    def test_evaluate_has_no_side_effects(self, engine, display):
        assert not engine.evaluate_field("zip")
        assert not engine.evaluate_radio_group("gender")

        assert engine.errors == {}
        assert display.calls == []


class TestValidateAll:

    def test_valid_form(self, valid_engine):
        assert valid_engine.validate_all() == {}
        assert valid_engine.is_ready

    def test_empty_form_reports_required_entries(self, engine):
        errors = engine.validate_all()

        assert set(errors) == {
            "first_name", "last_name", "dob", "ssn", "address1", "city",
            "state", "zip", "email", "userid", "password", "confirm_password",
            "gender", "vaccinated", "insurance",
        }

    def test_returns_a_copy(self, engine):
        errors = engine.validate_all()
        errors.clear()
        assert engine.errors != {}

    def test_outstanding_errors_carry_codes(self, engine):
        engine.validate_field("zip", "1234")
        engine.validate_radio_group("gender")

        codes = {issue.details.get("field") or issue.details.get("group"): issue.code
                 for issue in engine.outstanding_errors()}
        assert codes == {
            "zip": ErrorCode.FIELD_INVALID,
            "gender": ErrorCode.GROUP_UNSELECTED,
        }


class TestSubmissionValues:

    def test_normalized_values(self, valid_engine):
        values = valid_engine.submission_values()

        assert values["email"] == "jane.doe@example.com"
        assert values["userid"] == "janedoe_85"
        assert values["ssn"] == "123-45-6789"
        assert values["gender"] == "Female"
        assert values["vaccinations"] == ["Influenza", "Tetanus"]

    def test_free_field_defaults(self, valid_engine):
        values = valid_engine.submission_values()

        assert values["health_rating"] == "5"
        assert values["symptoms"] == ""

    def test_does_not_touch_form(self, valid_engine, valid_form):
        valid_engine.submission_values()
        assert valid_form.get_value("email") == "Jane.Doe@Example.com"


class TestEngineIsolation:

    def test_engines_do_not_share_error_maps(self, make_engine):
        first = make_engine(InMemoryFormData())
        second = make_engine(InMemoryFormData())

        first.validate_field("zip", "1234")

        assert "zip" in first.errors
        assert second.errors == {}
