"""
Validation Result Data Models

Defines the structure for validation results including single field/group
outcomes and aggregate form readiness.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from ..config.constants import RuleKind


class FieldValidationResult(BaseModel):
    """Result of validating a single field or radio group"""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "field_id": "zip",
                "section": "Address Information",
                "rule_kind": "field",
                "is_valid": False,
                "is_required": True,
                "message": "Zip code must be 5 digits"
            }
        }
    )

    field_id: str = Field(..., description="Field identifier or radio group name")
    section: str = Field(..., description="Display section (e.g., Personal Information)")
    rule_kind: RuleKind = Field(RuleKind.FIELD, description="Free-text field or radio group")

    is_valid: bool = Field(..., description="Whether the current value passed its rule")
    is_required: bool = Field(False, description="Whether a value is required for readiness")

    message: Optional[str] = Field(
        None,
        description="Error message when invalid, None when valid"
    )


class ReadinessResult(BaseModel):
    """Aggregate answer to 'may the form be submitted now?'"""

    model_config = ConfigDict(frozen=True)

    is_ready: bool = Field(..., description="Whether submission is permitted")

    error_fields: List[str] = Field(
        default_factory=list,
        description="Fields and groups currently in the error map"
    )

    missing_fields: List[str] = Field(
        default_factory=list,
        description="Required fields with an empty value"
    )

    unselected_groups: List[str] = Field(
        default_factory=list,
        description="Radio groups with no selection"
    )
