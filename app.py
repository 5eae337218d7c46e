"""
Patient Intake Form - Demo App

Streamlit front end for the patient intake validation engine. Every widget
change is forwarded to the engine, which formats the value, validates it and
tells the display adapter what to show.

Tech: Streamlit (zero frontend code needed)
Run: streamlit run app.py
"""

from typing import Dict, Optional

import streamlit as st

from patient_intake.adapters import InMemoryFormData, RecordingSubmitter
from patient_intake.config.constants import FormSection, FormState, HEALTH_RATING_SCALE, US_STATES
from patient_intake.models import ReviewSummary
from patient_intake.review import ReviewFlow
from patient_intake.utils import generate_review_report
from patient_intake.validation import ValidationEngine, get_rule_loader

# ==============================================================================
# PAGE CONFIGURATION
# ==============================================================================

st.set_page_config(
    page_title="Patient Intake Form",
    page_icon="🩺",
    layout="wide",
    initial_sidebar_state="collapsed"
)

RADIO_OPTIONS = {
    "gender": ["Male", "Female", "Other"],
    "vaccinated": ["Yes", "No"],
    "insurance": ["Yes", "No"],
}

CHECKBOX_OPTIONS = {
    "vaccinations": ["COVID-19", "Influenza", "Hepatitis B", "Tetanus", "MMR"],
}

PASSWORD_FIELDS = {"password", "confirm_password"}

# ==============================================================================
# DISPLAY ADAPTER
# ==============================================================================


class StreamlitDisplayAdapter:
    """
    Display adapter backed by st.session_state.

    Streamlit reruns the whole script after every interaction, so the adapter
    only records what the engine asked for and the page renders it on the
    next pass.
    """

    def __init__(self):
        self.field_errors: Dict[str, str] = {}
        self.submit_enabled = False
        self.review: Optional[ReviewSummary] = None
        self.notice: Optional[str] = None

    def show_field_error(self, field_id: str, message: str) -> None:
        self.field_errors[field_id] = message

    def show_field_success(self, field_id: str) -> None:
        self.field_errors.pop(field_id, None)

    def set_submit_enabled(self, enabled: bool) -> None:
        self.submit_enabled = enabled

    def render_review_summary(self, summary: ReviewSummary) -> None:
        self.review = summary

    def scroll_to_review(self) -> None:
        # The review is rendered at the top of the page, nothing to scroll
        pass

    def clear_review_summary(self) -> None:
        self.review = None

    def show_notice(self, message: str) -> None:
        self.notice = message


# ==============================================================================
# SESSION STATE
# ==============================================================================

def init_session():
    """Create the form, engine and review flow once per browser session."""
    if "engine" in st.session_state:
        return

    form = InMemoryFormData()
    display = StreamlitDisplayAdapter()
    engine = ValidationEngine(form, display=display)

    st.session_state.form = form
    st.session_state.display = display
    st.session_state.engine = engine
    st.session_state.submitter = RecordingSubmitter()
    st.session_state.flow = ReviewFlow(engine, st.session_state.submitter, display=display)


def widget_key(name: str) -> str:
    return f"intake_{name}"


def seed_widget(name: str, value):
    """Restore a widget value after the review page unmounted it."""
    key = widget_key(name)
    if key not in st.session_state:
        st.session_state[key] = value
    return key


def on_field_change(field_id: str):
    """Forward a text edit to the engine and show the formatted value."""
    engine: ValidationEngine = st.session_state.engine
    key = widget_key(field_id)

    engine.handle_field_change(field_id, st.session_state[key])

    # Streamlit commits text on Enter or focus loss, so this is also the blur
    if engine.rules[field_id].blur_transform:
        engine.handle_field_blur(field_id)

    st.session_state[key] = st.session_state.form.get_value(field_id)


def on_radio_change(group_name: str):
    st.session_state.engine.handle_radio_change(group_name, st.session_state[widget_key(group_name)])


def on_checkbox_change(group_name: str):
    st.session_state.engine.handle_checkbox_change(group_name, st.session_state[widget_key(group_name)])


def on_free_field_change(field_id: str):
    st.session_state.form.set_value(field_id, str(st.session_state[widget_key(field_id)]))


# ==============================================================================
# RENDERING HELPERS
# ==============================================================================

def render_field(field_id: str):
    """Render one validated text field with its current error."""
    engine: ValidationEngine = st.session_state.engine
    rule = engine.rules[field_id]
    label = rule.label if rule.required else f"{rule.label} (optional)"
    key = seed_widget(field_id, st.session_state.form.get_value(field_id))

    if field_id == "state":
        options = [""] + US_STATES
        st.selectbox(
            label,
            options,
            key=key,
            on_change=on_field_change,
            args=(field_id,)
        )
    else:
        st.text_input(
            label,
            key=key,
            type="password" if field_id in PASSWORD_FIELDS else "default",
            on_change=on_field_change,
            args=(field_id,)
        )

    error = st.session_state.display.field_errors.get(field_id)
    if error:
        st.error(error)


def render_section(section: FormSection):
    st.subheader(section.value)
    for field_id in get_rule_loader().get_fields_by_section(section):
        render_field(field_id)


def render_radio_groups():
    engine: ValidationEngine = st.session_state.engine
    form: InMemoryFormData = st.session_state.form
    for group_name, group in engine.radio_groups.items():
        key = seed_widget(group_name, form.get_selected_radio_value(group_name) or None)
        st.radio(
            group.label,
            RADIO_OPTIONS.get(group_name, []),
            horizontal=True,
            key=key,
            on_change=on_radio_change,
            args=(group_name,)
        )
        error = st.session_state.display.field_errors.get(group_name)
        if error:
            st.error(error)


def render_medical_history():
    loader = get_rule_loader()
    st.subheader(FormSection.MEDICAL_HISTORY.value)

    form: InMemoryFormData = st.session_state.form

    for group_name, group in loader.get_checkbox_groups().items():
        st.multiselect(
            group.label,
            CHECKBOX_OPTIONS.get(group_name, []),
            key=seed_widget(group_name, form.get_checked_checkbox_values(group_name)),
            on_change=on_checkbox_change,
            args=(group_name,)
        )

    st.text_area(
        "Symptoms",
        key=seed_widget("symptoms", form.get_value("symptoms")),
        on_change=on_free_field_change,
        args=("symptoms",)
    )


def render_additional_information():
    st.subheader(FormSection.ADDITIONAL_INFORMATION.value)
    render_radio_groups()

    default_rating = get_rule_loader().get_free_fields()["health_rating"].default
    rating = st.session_state.form.get_value("health_rating") or default_rating
    st.slider(
        "Health Rating",
        min_value=1,
        max_value=HEALTH_RATING_SCALE,
        key=seed_widget("health_rating", int(rating)),
        on_change=on_free_field_change,
        args=("health_rating",)
    )


def render_review(summary: ReviewSummary):
    """Show the review summary with pass/fail markers per item."""
    st.subheader("📋 Review Your Information")

    if summary.is_valid:
        st.success("✅ All information is valid. Confirm to submit.")
    else:
        st.error(f"❌ {len(summary.failed_items())} item(s) need attention.")

    for section in summary.sections:
        st.markdown(f"##### {section.title}")
        for item in section.items:
            if item.passed:
                st.markdown(f"**{item.label}:** `{item.display_value}` ✅")
            else:
                st.markdown(f"**{item.label}:** `{item.display_value}` ❌ {item.error}")

    st.download_button(
        "Download review report",
        data=generate_review_report(summary),
        file_name="intake_review.txt",
        mime="text/plain"
    )


# ==============================================================================
# MAIN APP UI
# ==============================================================================

init_session()

flow: ReviewFlow = st.session_state.flow
display: StreamlitDisplayAdapter = st.session_state.display

st.title("🩺 Patient Intake Form")
st.markdown("Fields are checked as you type. Review your information before submitting.")
st.markdown("---")

if flow.state == FormState.SUBMITTED:
    st.success("✅ Form submitted. Thank you!")
    with st.expander("🔧 View Submitted Values (JSON)", expanded=False):
        submitted = dict(st.session_state.submitter.last)
        for secret in PASSWORD_FIELDS:
            submitted.pop(secret, None)
        st.json(submitted)
    st.stop()

if display.notice:
    st.warning(display.notice)
    display.notice = None

if flow.state == FormState.REVIEWING and display.review is not None:
    render_review(display.review)

    col1, col2 = st.columns(2)
    with col1:
        if st.button("✏️ Edit", use_container_width=True):
            flow.edit()
            st.rerun()
    with col2:
        if st.button("✅ Confirm & Submit", type="primary", use_container_width=True):
            flow.confirm()
            st.rerun()
    st.stop()

col1, col2 = st.columns(2)

with col1:
    render_section(FormSection.PERSONAL_INFORMATION)
    render_section(FormSection.CONTACT_INFORMATION)
    render_section(FormSection.ADDRESS_INFORMATION)

with col2:
    render_medical_history()
    render_additional_information()
    render_section(FormSection.ACCOUNT_INFORMATION)

st.markdown("---")

if display.submit_enabled:
    st.success("All required information is complete.")
else:
    st.info("Complete every required field before submitting.")

if st.button("🔍 Review", type="primary"):
    flow.review()
    st.rerun()

# Footer
st.markdown("---")
st.caption("Patient Intake Form - demo front end for the patient_intake engine")
