"""
Application settings loaded from environment variables (and a .env file).
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


_TRUE_VALUES = {"1", "true", "yes", "on"}


class IntakeSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    log_level: str = Field("INFO", description="Root level for intake loggers")
    log_dir: str = Field("logs", description="Directory for rotating log files")
    log_to_file: bool = Field(False, description="Whether to write log files")
    rules_path: Optional[Path] = Field(
        None,
        description="Override for validation_rules.yaml"
    )

    @classmethod
    def from_env(cls) -> "IntakeSettings":
        load_dotenv()

        rules_path = os.environ.get("INTAKE_RULES_PATH")
        return cls(
            log_level=os.environ.get("INTAKE_LOG_LEVEL", "INFO").upper(),
            log_dir=os.environ.get("INTAKE_LOG_DIR", "logs"),
            log_to_file=os.environ.get("INTAKE_LOG_TO_FILE", "").strip().lower() in _TRUE_VALUES,
            rules_path=Path(rules_path) if rules_path else None,
        )


@lru_cache(maxsize=1)
def get_settings() -> IntakeSettings:
    """
    Get the process-wide settings, read once from the environment.

    Returns:
        IntakeSettings instance
    """
    return IntakeSettings.from_env()
