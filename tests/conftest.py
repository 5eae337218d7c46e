"""
Shared fixtures for the patient intake tests.

All engines are pinned to a fixed evaluation date so date-of-birth
boundaries do not drift with the calendar.
"""

from datetime import date

import pytest

from patient_intake.adapters import InMemoryFormData, RecordingDisplayAdapter, RecordingSubmitter
from patient_intake.review import ReviewFlow
from patient_intake.validation import RuleLoader, ValidationEngine


TODAY = date(2025, 6, 15)

VALID_VALUES = {
    "first_name": "Jane",
    "middle_initial": "Q",
    "last_name": "O'Brien-Smith",
    "dob": "04/12/1985",
    "ssn": "123-45-6789",
    "address1": "123 Main St",
    "address2": "",
    "city": "Springfield",
    "state": "IL",
    "zip": "62704",
    "email": "Jane.Doe@Example.com",
    "phone": "555-123-4567",
    "userid": "JaneDoe_85",
    "password": "Secur3Pass",
    "confirm_password": "Secur3Pass",
}

VALID_RADIOS = {
    "gender": "Female",
    "vaccinated": "Yes",
    "insurance": "No",
}

VALID_CHECKBOXES = {
    "vaccinations": ["Influenza", "Tetanus"],
}


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def rule_loader():
    loader = RuleLoader()
    loader.load_rules()
    return loader


@pytest.fixture
def empty_form():
    return InMemoryFormData()


@pytest.fixture
def valid_form():
    """A form where every field and group passes."""
    return InMemoryFormData(
        values=VALID_VALUES,
        radio_selections=VALID_RADIOS,
        checkbox_values=VALID_CHECKBOXES
    )


@pytest.fixture
def display():
    return RecordingDisplayAdapter()


@pytest.fixture
def make_engine(display, rule_loader):
    """Factory for engines over a given form, sharing the recording display."""
    def _make(form):
        return ValidationEngine(
            form,
            display=display,
            rule_loader=rule_loader,
            today=lambda: TODAY
        )
    return _make


@pytest.fixture
def engine(make_engine, empty_form):
    return make_engine(empty_form)


@pytest.fixture
def valid_engine(make_engine, valid_form):
    return make_engine(valid_form)


@pytest.fixture
def submitter():
    return RecordingSubmitter()


@pytest.fixture
def make_flow(make_engine, submitter, display):
    def _make(form):
        return ReviewFlow(make_engine(form), submitter, display=display)
    return _make
