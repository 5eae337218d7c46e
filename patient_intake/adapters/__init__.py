"""
Adapters Module

Interfaces to the engine's external collaborators.

Components:
- display.py: Display adapter (errors, submit button, review rendering)
- data_source.py: Form data source (current values, selections)
- submission.py: Submission collaborator (final transport)
"""

from .data_source import FormDataSource, InMemoryFormData
from .display import DisplayAdapter, NullDisplayAdapter, RecordingDisplayAdapter
from .submission import Submitter, RecordingSubmitter

__all__ = [
    "FormDataSource",
    "InMemoryFormData",
    "DisplayAdapter",
    "NullDisplayAdapter",
    "RecordingDisplayAdapter",
    "Submitter",
    "RecordingSubmitter",
]
