"""
Tests for the review summary and the Editing / Reviewing / Submitted flow.
"""

import pytest

from patient_intake.config.constants import FormSection, FormState, SUBMIT_BLOCKED_NOTICE
from patient_intake.review import ReviewFlow, ReviewSummaryBuilder
from patient_intake.utils.error_handler import ErrorCode, IntakeError


def item(summary, section, label):
    return next(i for i in summary.get_section(section.value).items if i.label == label)


class FailingSubmitter:

    def submit(self, values):
        raise ConnectionError("endpoint unreachable")


class TestReviewSummary:

    def test_valid_form(self, make_flow, valid_form):
        summary = make_flow(valid_form).review()

        assert summary.is_valid
        assert summary.errors == {}
        assert summary.failed_items() == []
        assert [section.title for section in summary.sections] == [
            "Personal Information",
            "Contact Information",
            "Address Information",
            "Medical History",
            "Additional Information",
            "Account Information",
        ]

    def test_display_values(self, make_flow, valid_form):
        summary = make_flow(valid_form).review()

        assert item(summary, FormSection.PERSONAL_INFORMATION, "Name").display_value == "Jane Q O'Brien-Smith"
        assert item(summary, FormSection.PERSONAL_INFORMATION, "SSN").display_value == "***-**-6789"
        assert item(summary, FormSection.ADDRESS_INFORMATION, "Address").display_value == (
            "123 Main St, Springfield, IL 62704"
        )
        assert item(summary, FormSection.MEDICAL_HISTORY, "Vaccinations").display_value == "Influenza, Tetanus"
        assert item(summary, FormSection.MEDICAL_HISTORY, "Symptoms").display_value == "None described"
        assert item(summary, FormSection.ADDITIONAL_INFORMATION, "Health Rating").display_value == "5/10"
        assert item(summary, FormSection.ACCOUNT_INFORMATION, "User ID").display_value == "janedoe_85"
        assert item(summary, FormSection.ACCOUNT_INFORMATION, "Password").display_value == "*" * 10

    def test_optional_values(self, make_flow, valid_form):
        valid_form.set_value("phone", "")
        valid_form.set_value("address2", "Apt 4")
        valid_form.set_checkbox_values("vaccinations", [])

        summary = make_flow(valid_form).review()

        assert summary.is_valid
        assert item(summary, FormSection.CONTACT_INFORMATION, "Phone").display_value == "Not provided"
        assert item(summary, FormSection.ADDRESS_INFORMATION, "Address").display_value == (
            "123 Main St, Apt 4, Springfield, IL 62704"
        )
        assert item(summary, FormSection.MEDICAL_HISTORY, "Vaccinations").display_value == "None selected"

    def test_invalid_address_fails_whole_item(self, make_flow, valid_form):
        valid_form.set_value("zip", "1234")

        summary = make_flow(valid_form).review()
        address = item(summary, FormSection.ADDRESS_INFORMATION, "Address")

        assert not summary.is_valid
        assert not address.passed
        assert address.error == "Invalid address or missing required fields"
        assert not summary.get_section("Address Information").is_valid
        assert summary.get_section("Contact Information").is_valid

    def test_unselected_group(self, make_flow, valid_form):
        valid_form.select_radio("insurance", None)

        summary = make_flow(valid_form).review()
        insurance = item(summary, FormSection.ADDITIONAL_INFORMATION, "Insurance")

        assert not insurance.passed
        assert insurance.error == "Insurance status not selected"
        assert summary.errors == {"insurance": "Please select insurance status"}

    def test_password_errors(self, make_flow, valid_form):
        valid_form.set_value("password", "janedoe_85")
        summary = make_flow(valid_form).review()
        assert item(summary, FormSection.ACCOUNT_INFORMATION, "Password").error == (
            "Invalid password complexity or password equals user ID"
        )

    def test_password_mismatch(self, make_flow, valid_form):
        valid_form.set_value("confirm_password", "Secur3Pas")
        summary = make_flow(valid_form).review()
        assert item(summary, FormSection.ACCOUNT_INFORMATION, "Password").error == "Passwords do not match"

    def test_review_does_not_mutate_values(self, make_flow, valid_form):
        valid_form.set_value("zip", "1234")
        before = (valid_form.values(), valid_form.radio_selections(), valid_form.checkbox_values())

        make_flow(valid_form).review()

        assert (valid_form.values(), valid_form.radio_selections(), valid_form.checkbox_values()) == before

    def test_verdicts_match_live_error_map(self, make_engine, valid_form, submitter, display):
        valid_form.set_value("zip", "1234")
        valid_form.set_value("email", "not-an-email")
        valid_form.select_radio("gender", None)
        engine = make_engine(valid_form)

        for field_id in engine.rules:
            engine.validate_field(field_id)
        for group_name in engine.radio_groups:
            engine.validate_radio_group(group_name)
        live = engine.errors

        summary = ReviewFlow(engine, submitter, display=display).review()

        assert summary.errors == live
        for field_id in engine.rules:
            assert engine.evaluate_field(field_id) == (field_id not in live)

    def test_builder_can_be_used_directly(self, valid_engine):
        summary = ReviewSummaryBuilder(valid_engine).build({})
        assert summary.is_valid


class TestReviewTransitions:

    def test_initial_state(self, make_flow, empty_form):
        flow = make_flow(empty_form)
        assert flow.state == FormState.EDITING
        assert flow.summary is None

    def test_review_enters_reviewing(self, make_flow, valid_form, display):
        flow = make_flow(valid_form)
        summary = flow.review()

        assert flow.state == FormState.REVIEWING
        assert flow.summary is summary
        assert display.review is summary
        names = display.call_names()
        assert names.index("render_review_summary") < names.index("scroll_to_review")

    def test_review_of_invalid_form_still_enters_reviewing(self, make_flow, empty_form):
        flow = make_flow(empty_form)
        summary = flow.review()

        assert not summary.is_valid
        assert flow.state == FormState.REVIEWING

    def test_re_review_is_allowed(self, make_flow, valid_form):
        flow = make_flow(valid_form)
        flow.review()
        flow.review()
        assert flow.state == FormState.REVIEWING

    def test_edit_returns_to_editing(self, make_flow, valid_form, display):
        valid_form.set_value("zip", "1234")
        flow = make_flow(valid_form)
        flow.review()
        errors = flow.engine.errors

        flow.edit()

        assert flow.state == FormState.EDITING
        assert flow.summary is None
        assert display.review_visible is False
        assert flow.engine.errors == errors

    @pytest.mark.parametrize("action", ["confirm", "edit"])
    def test_actions_require_reviewing(self, make_flow, valid_form, action):
        flow = make_flow(valid_form)

        with pytest.raises(IntakeError) as exc_info:
            getattr(flow, action)()

        assert exc_info.value.code == ErrorCode.INVALID_TRANSITION
        assert flow.state == FormState.EDITING

    def test_nothing_after_submitted(self, make_flow, valid_form):
        flow = make_flow(valid_form)
        flow.review()
        flow.confirm()

        for action in (flow.review, flow.confirm, flow.edit):
            with pytest.raises(IntakeError):
                action()
        assert flow.state == FormState.SUBMITTED


class TestConfirm:

    def test_invalid_zip_blocks_submission(self, make_flow, valid_form, submitter, display):
        valid_form.set_value("zip", "1234")
        flow = make_flow(valid_form)
        flow.review()

        result = flow.confirm()

        assert not result.success
        assert result.error.code == ErrorCode.SUBMIT_BLOCKED
        assert result.error.details["errors"] == {"zip": "Zip code must be 5 digits"}
        assert flow.state == FormState.REVIEWING
        assert submitter.submissions == []
        assert display.notices == [SUBMIT_BLOCKED_NOTICE]

    def test_confirm_revalidates(self, make_flow, valid_form):
        valid_form.set_value("zip", "1234")
        flow = make_flow(valid_form)
        flow.review()

        valid_form.set_value("zip", "62704")
        result = flow.confirm()

        assert result.success
        assert flow.state == FormState.SUBMITTED

    def test_successful_submission(self, make_flow, valid_form, submitter):
        flow = make_flow(valid_form)
        flow.review()

        result = flow.confirm()

        assert result.success
        assert result.unwrap() == submitter.last
        assert flow.state == FormState.SUBMITTED
        assert len(submitter.submissions) == 1

    def test_values_are_normalized_before_submission(self, make_flow, valid_form, submitter):
        flow = make_flow(valid_form)
        flow.review()
        flow.confirm()

        assert submitter.last["email"] == "jane.doe@example.com"
        assert submitter.last["userid"] == "janedoe_85"
        assert valid_form.get_value("email") == "jane.doe@example.com"
        assert valid_form.get_value("userid") == "janedoe_85"

    def test_transport_failure_stays_in_reviewing(self, make_engine, valid_form, display):
        flow = ReviewFlow(make_engine(valid_form), FailingSubmitter(), display=display)
        flow.review()

        result = flow.confirm()

        assert not result.success
        assert result.error.code == ErrorCode.SUBMISSION_FAILED
        assert "endpoint unreachable" in result.error.message
        assert flow.state == FormState.REVIEWING
        assert display.notices == [result.error.message]
