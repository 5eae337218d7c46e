"""
Review/Submit Flow

Three-state workflow over the whole form:

    Editing --review--> Reviewing --confirm--> Submitted
       ^                    |
       +-------edit---------+

Review always succeeds (the summary records whether the form is valid).
Confirm re-validates once more and hands normalized values to the
submission collaborator only when the error map is empty; otherwise it
surfaces a blocking notice and stays in Reviewing.
"""

from typing import Any, Dict, Optional

from ..adapters.display import DisplayAdapter
from ..adapters.submission import Submitter
from ..config.constants import FormState, SUBMIT_BLOCKED_NOTICE
from ..models.review_summary import ReviewSummary
from ..utils.error_handler import (
    ErrorHandler,
    ErrorResult,
    invalid_transition_error,
    submit_blocked_error,
)
from ..utils.logger import get_module_logger
from ..validation.validation_engine import ValidationEngine
from .summary_builder import ReviewSummaryBuilder


logger = get_module_logger()


class ReviewFlow:
    """
    Review and submission state machine for one form session.

    Holds no validation state of its own: every transition asks the engine
    for a fresh full re-validation.
    """

    def __init__(
        self,
        engine: ValidationEngine,
        submitter: Submitter,
        display: Optional[DisplayAdapter] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        """
        Initialize the ReviewFlow.

        Args:
            engine: Validation engine owning the live error map
            submitter: Submission collaborator for the final values
            display: Display adapter (defaults to the engine's)
            error_handler: ErrorHandler for blocked/failed submissions
        """
        self.engine = engine
        self.submitter = submitter
        self.display = display or engine.display
        self.error_handler = error_handler or ErrorHandler(logger.logger)
        self.summary_builder = ReviewSummaryBuilder(engine)

        self.state = FormState.EDITING
        self.summary: Optional[ReviewSummary] = None

    def _transition(self, to_state: FormState, **details: Any) -> None:
        logger.log_transition(self.state.value, to_state.value, **details)
        self.state = to_state

    def review(self) -> ReviewSummary:
        """
        Editing -> Reviewing (re-review from Reviewing is allowed).

        Re-validates every field and group, builds the summary from the same
        validators, and hands it to the display.

        Returns:
            ReviewSummary (summary.is_valid tells whether submission can proceed)

        Raises:
            IntakeError: If the form was already submitted
        """
        if self.state == FormState.SUBMITTED:
            raise invalid_transition_error(self.state.value, "review")

        errors = self.engine.validate_all()
        summary = self.summary_builder.build(errors)

        self.summary = summary
        self.display.render_review_summary(summary)
        self.display.scroll_to_review()

        self._transition(FormState.REVIEWING, is_valid=summary.is_valid)
        return summary

    def confirm(self) -> ErrorResult:
        """
        Reviewing -> Submitted, only when the error map is empty.

        Returns:
            ErrorResult.ok(submitted values), or ErrorResult.fail with a
            SUBMIT_BLOCKED or SUBMISSION_FAILED error (state stays Reviewing)

        Raises:
            IntakeError: If not currently Reviewing
        """
        if self.state != FormState.REVIEWING:
            raise invalid_transition_error(self.state.value, "confirm")

        errors = self.engine.validate_all()

        if errors:
            error = submit_blocked_error(errors, self.engine.outstanding_errors())
            self.error_handler.handle(error)
            logger.log_submission(accepted=False, error_fields=sorted(errors))
            self.display.show_notice(SUBMIT_BLOCKED_NOTICE)
            return ErrorResult.fail(error)

        values = self._normalized_values()

        result = self.error_handler.wrap_operation(self.submitter.submit, values)
        if not result.success:
            self.display.show_notice(result.error.message)
            return result

        logger.log_submission(accepted=True)
        self._transition(FormState.SUBMITTED)
        return ErrorResult.ok(values)

    def edit(self) -> None:
        """
        Reviewing -> Editing. Discards the summary; the live error map is kept.

        Raises:
            IntakeError: If not currently Reviewing
        """
        if self.state != FormState.REVIEWING:
            raise invalid_transition_error(self.state.value, "edit")

        self.summary = None
        self.display.clear_review_summary()
        self._transition(FormState.EDITING)

    def _normalized_values(self) -> Dict[str, Any]:
        """Final values, with user ID and email lower-cased in the form too."""
        values = self.engine.submission_values()
        self.engine.data_source.set_value("userid", values["userid"])
        self.engine.data_source.set_value("email", values["email"])
        return values
