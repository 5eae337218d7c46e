"""
Standardized error handling for the patient intake engine.

Invalid user input is never an exception here: validators return booleans
and the engine records messages in its error map. IntakeError is reserved
for the blocked-submission outcome (carried inside an ErrorResult, not
raised) and for programming mistakes such as unknown field ids, illegal
workflow transitions and broken rule files.
"""

import traceback
from typing import Optional, Any, Callable, Dict, List
from enum import Enum
import logging


class ErrorLevel(Enum):
    """Error severity levels."""
    CRITICAL = "critical"  # System failure, cannot continue
    ERROR = "error"  # Operation failed, but system can continue
    WARNING = "warning"  # User-correctable state
    INFO = "info"  # Informational message


class ErrorCode(Enum):
    """Standardized error codes for different error types."""

    # User-correctable validation states (1xxx)
    FIELD_INVALID = 1001
    GROUP_UNSELECTED = 1002
    SUBMIT_BLOCKED = 1003

    # Collaborator failures (2xxx)
    SUBMISSION_FAILED = 2001

    # Programming / configuration errors (3xxx)
    UNKNOWN_FIELD = 3001
    INVALID_TRANSITION = 3002
    CONFIGURATION_ERROR = 3003


class IntakeError(Exception):
    """Base exception class for intake engine errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        level: ErrorLevel = ErrorLevel.ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """
        Initialize intake error.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            level: Severity level from ErrorLevel enum
            details: Additional error details as dictionary
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.level = level
        self.details = details or {}
        self.cause = cause

        if cause:
            self.details['original_error'] = str(cause)
            self.details['traceback'] = ''.join(
                traceback.format_exception(type(cause), cause, cause.__traceback__)
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            'message': self.message,
            'code': self.code.value,
            'level': self.level.value,
            'details': self.details
        }


class ErrorResult:
    """
    Standardized result wrapper for operations that may fail.

    Used by the review flow's confirm action: a blocked or failed submission
    is an ordinary outcome, not a raised exception.
    """

    def __init__(
        self,
        success: bool,
        value: Optional[Any] = None,
        error: Optional[IntakeError] = None
    ):
        """
        Initialize error result.

        Args:
            success: Whether the operation succeeded
            value: The result value if successful
            error: The error if failed
        """
        self.success = success
        self.value = value
        self.error = error

    @classmethod
    def ok(cls, value: Any) -> 'ErrorResult':
        """Create a successful result."""
        return cls(success=True, value=value, error=None)

    @classmethod
    def fail(cls, error: IntakeError) -> 'ErrorResult':
        """Create a failed result."""
        return cls(success=False, value=None, error=error)

    def unwrap(self) -> Any:
        """
        Get the value or raise the error.

        Returns:
            The value if successful

        Raises:
            IntakeError if failed
        """
        if self.success:
            return self.value
        else:
            raise self.error

    def unwrap_or(self, default: Any) -> Any:
        """Get the value or return a default."""
        return self.value if self.success else default


class ErrorHandler:
    """Centralized error handler with logging."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize error handler.

        Args:
            logger: Logger instance to use (creates default if None)
        """
        self.logger = logger or logging.getLogger(__name__)

    def handle(self, error: IntakeError) -> None:
        """
        Handle an error by logging it appropriately.

        Args:
            error: The error to handle
        """
        log_message = f"[{error.code.name}] {error.message}"

        if error.details:
            details = {k: v for k, v in error.details.items() if k != 'traceback'}
            log_message += f" | Details: {details}"

        if error.level == ErrorLevel.CRITICAL:
            self.logger.critical(log_message)
        elif error.level == ErrorLevel.ERROR:
            self.logger.error(log_message)
        elif error.level == ErrorLevel.WARNING:
            self.logger.warning(log_message)
        else:
            self.logger.info(log_message)

    def wrap_operation(self, operation: Callable, *args, **kwargs) -> ErrorResult:
        """
        Wrap a collaborator call in error handling.

        Args:
            operation: The operation to execute
            *args: Arguments for the operation
            **kwargs: Keyword arguments for the operation

        Returns:
            ErrorResult with the operation result or error
        """
        try:
            result = operation(*args, **kwargs)
            return ErrorResult.ok(result)
        except IntakeError as e:
            self.handle(e)
            return ErrorResult.fail(e)
        except Exception as e:
            # Convert transport failures to IntakeError
            intake_error = IntakeError(
                message=f"Submission failed: {str(e)}",
                code=ErrorCode.SUBMISSION_FAILED,
                level=ErrorLevel.ERROR,
                cause=e
            )
            self.handle(intake_error)
            return ErrorResult.fail(intake_error)


# Convenience functions for common error scenarios

def field_invalid_error(field_id: str, message: str) -> IntakeError:
    """Create a field-invalid error."""
    return IntakeError(
        message=f"Field '{field_id}' is invalid: {message}",
        code=ErrorCode.FIELD_INVALID,
        level=ErrorLevel.WARNING,
        details={'field': field_id, 'reason': message}
    )


def group_unselected_error(group_name: str, message: str) -> IntakeError:
    """Create a group-unselected error."""
    return IntakeError(
        message=f"Group '{group_name}' has no selection: {message}",
        code=ErrorCode.GROUP_UNSELECTED,
        level=ErrorLevel.WARNING,
        details={'group': group_name, 'reason': message}
    )


def submit_blocked_error(errors: Dict[str, str], issues: Optional[List[IntakeError]] = None) -> IntakeError:
    """Create a blocked-submission error listing every outstanding entry."""
    fields: List[str] = sorted(errors)
    return IntakeError(
        message=f"Submission blocked by {len(fields)} invalid field(s): {', '.join(fields)}",
        code=ErrorCode.SUBMIT_BLOCKED,
        level=ErrorLevel.WARNING,
        details={
            'errors': dict(errors),
            'issues': [issue.to_dict() for issue in issues or []]
        }
    )


def unknown_field_error(field_id: str) -> IntakeError:
    """Create an unknown field/group error."""
    return IntakeError(
        message=f"No validation rule registered for '{field_id}'",
        code=ErrorCode.UNKNOWN_FIELD,
        level=ErrorLevel.ERROR,
        details={'field': field_id}
    )


def invalid_transition_error(from_state: str, action: str) -> IntakeError:
    """Create an illegal workflow transition error."""
    return IntakeError(
        message=f"Action '{action}' is not allowed in state '{from_state}'",
        code=ErrorCode.INVALID_TRANSITION,
        level=ErrorLevel.ERROR,
        details={'state': from_state, 'action': action}
    )


def configuration_error(message: str, **details: Any) -> IntakeError:
    """Create a rule configuration error."""
    return IntakeError(
        message=message,
        code=ErrorCode.CONFIGURATION_ERROR,
        level=ErrorLevel.CRITICAL,
        details=details
    )
