"""
Patient Intake Validation Engine

Live field validation, submit readiness and a review/confirm workflow for
a patient registration form. UI-agnostic: the host page talks to the engine
through the adapters in patient_intake.adapters.
"""

__version__ = "0.1.0"

from . import config
from . import models
from . import utils
from . import adapters
from . import validation
from . import review

from .validation import ValidationEngine
from .review import ReviewFlow

__all__ = [
    "config",
    "models",
    "utils",
    "adapters",
    "validation",
    "review",
    "ValidationEngine",
    "ReviewFlow",
]
