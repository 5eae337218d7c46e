"""
Centralized logging infrastructure for the patient intake engine.

This module provides consistent logging across all modules with proper log
levels, formatting, optional file rotation, and PHI masking so that SSNs,
birth dates and passwords never reach a log line in clear text.
"""

import logging
import logging.handlers
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any
import json

from ..config.constants import SENSITIVE_FIELDS
from ..config.settings import get_settings


_SSN_PATTERN = re.compile(r"\b\d{3}-?\d{2}-?\d{4}\b")


class IntakeLogger:
    """
    Centralized logger for intake processing with consistent formatting.

    Features:
    - Structured logging: "message | {json details}"
    - Multiple log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - Optional file rotation to prevent log files from growing too large
    - PHI/PII masking for sensitive data
    """

    def __init__(
        self,
        name: str,
        log_dir: str = "logs",
        log_level: str = "INFO",
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        enable_console: bool = True,
        enable_file: bool = False
    ):
        """
        Initialize the intake logger.

        Args:
            name: Logger name (usually module name)
            log_dir: Directory for log files
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            max_bytes: Max size of log file before rotation
            backup_count: Number of backup files to keep
            enable_console: Whether to log to console
            enable_file: Whether to log to file
        """
        self.name = name
        self.logger = logging.getLogger(f"patient_intake.{name}")
        self.logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        self.logger.handlers = []  # Clear any existing handlers

        detailed_formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        simple_formatter = logging.Formatter(
            '%(levelname)s | %(message)s'
        )

        if enable_console:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.INFO)  # Console shows INFO and above
            console_handler.setFormatter(simple_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            Path(log_dir).mkdir(parents=True, exist_ok=True)

            log_file = os.path.join(log_dir, f"{name}_{datetime.now():%Y%m%d}.log")
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)  # File captures everything
            file_handler.setFormatter(detailed_formatter)
            self.logger.addHandler(file_handler)

            error_log_file = os.path.join(log_dir, f"{name}_errors_{datetime.now():%Y%m%d}.log")
            error_handler = logging.handlers.RotatingFileHandler(
                filename=error_log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(detailed_formatter)
            self.logger.addHandler(error_handler)

    def _mask_sensitive_data(self, data: Any) -> Any:
        """
        Mask sensitive data in log details.

        Args:
            data: Data to mask (dict, list, or string)

        Returns:
            Data with sensitive fields masked
        """
        if isinstance(data, dict):
            masked = {}
            for key, value in data.items():
                if str(key).lower() in SENSITIVE_FIELDS:
                    masked[key] = "***MASKED***"
                else:
                    masked[key] = self._mask_sensitive_data(value)
            return masked
        elif isinstance(data, list):
            return [self._mask_sensitive_data(item) for item in data]
        elif isinstance(data, str):
            return _SSN_PATTERN.sub('***-**-****', data)
        else:
            return data

    def _format(self, message: str, details: Dict[str, Any]) -> str:
        if not details:
            return message
        masked = self._mask_sensitive_data(details)
        return f"{message} | {json.dumps(masked, default=str)}"

    # Logging methods with automatic sensitive data masking

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self.logger.debug(self._format(message, kwargs))

    def info(self, message: str, **kwargs):
        """Log info message."""
        self.logger.info(self._format(message, kwargs))

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self.logger.warning(self._format(message, kwargs))

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs):
        """Log error message with optional exception."""
        message = self._format(message, kwargs)
        if exception:
            message = f"{message} | Exception: {str(exception)}"
        self.logger.error(message, exc_info=exception is not None)

    def critical(self, message: str, exception: Optional[Exception] = None, **kwargs):
        """Log critical message with optional exception."""
        message = self._format(message, kwargs)
        if exception:
            message = f"{message} | Exception: {str(exception)}"
        self.logger.critical(message, exc_info=exception is not None)

    # Specialized logging methods

    def log_validation(
        self,
        field_id: str,
        is_valid: bool,
        message: Optional[str] = None
    ):
        """Log a single field or group validation result."""
        if is_valid:
            self.debug("Validation passed", field=field_id)
        else:
            self.debug("Validation failed", field=field_id, error=message)

    def log_transition(self, from_state: str, to_state: str, **kwargs):
        """Log a review/submit workflow transition."""
        self.info("Form state transition", from_state=from_state, to_state=to_state, **kwargs)

    def log_submission(self, accepted: bool, error_fields: Optional[list] = None):
        """Log the outcome of a confirm action."""
        if accepted:
            self.info("Submission accepted")
        else:
            self.warning(
                "Submission blocked",
                error_fields=error_fields if error_fields else []
            )


# Logger instances by name
_loggers: Dict[str, IntakeLogger] = {}


def get_logger(
    name: str,
    log_level: Optional[str] = None,
    **kwargs
) -> IntakeLogger:
    """
    Get or create a logger instance.

    Args:
        name: Logger name (usually module name)
        log_level: Override default log level
        **kwargs: Additional arguments for IntakeLogger

    Returns:
        IntakeLogger instance
    """
    if name not in _loggers:
        settings = get_settings()
        if log_level is None:
            log_level = settings.log_level
        kwargs.setdefault("log_dir", settings.log_dir)
        kwargs.setdefault("enable_file", settings.log_to_file)

        _loggers[name] = IntakeLogger(name, log_level=log_level, **kwargs)

    return _loggers[name]


def get_module_logger() -> IntakeLogger:
    """
    Get a logger for the calling module.

    Returns:
        IntakeLogger instance for the calling module
    """
    import inspect
    frame = inspect.currentframe()
    if frame and frame.f_back:
        module_name = frame.f_back.f_globals.get('__name__', 'unknown')
    else:
        module_name = 'unknown'

    # Simplify module name (e.g., patient_intake.validation.validation_engine -> validation_engine)
    module_name = module_name.split('.')[-1]

    return get_logger(module_name)
