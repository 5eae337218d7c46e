"""
Review Summary Data Models

Structured, human-readable summary shown before final confirmation. Items
carry display values only; secrets are masked before they get here.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReviewItem(BaseModel):
    """One logical line of the review (e.g. Name, Address, Password)"""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Item label")
    display_value: str = Field("", description="Value as shown to the user")
    passed: bool = Field(..., description="Whether the item passed validation")
    error: Optional[str] = Field(None, description="Error text when the item failed")


class ReviewSection(BaseModel):
    """A display section with a unit-level pass/fail flag"""

    title: str = Field(..., description="Section title")
    items: List[ReviewItem] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return all(item.passed for item in self.items)


class ReviewSummary(BaseModel):
    """Full review produced by the review action"""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "sections": [
                    {
                        "title": "Contact Information",
                        "items": [
                            {"label": "Email", "display_value": "jdoe@example.com", "passed": True},
                            {"label": "Phone", "display_value": "Not provided", "passed": True}
                        ]
                    }
                ],
                "errors": {},
                "generated_at": "2025-12-04T10:30:00"
            }
        }
    )

    sections: List[ReviewSection] = Field(default_factory=list)

    errors: Dict[str, str] = Field(
        default_factory=dict,
        description="Error map produced by the full re-validation"
    )

    generated_at: datetime = Field(
        default_factory=datetime.now,
        description="When this summary was generated"
    )

    @property
    def is_valid(self) -> bool:
        """Every item passes and the fresh error map is empty."""
        return not self.errors and all(section.is_valid for section in self.sections)

    def get_section(self, title: str) -> Optional[ReviewSection]:
        for section in self.sections:
            if section.title == title:
                return section
        return None

    def failed_items(self) -> List[ReviewItem]:
        return [item for section in self.sections for item in section.items if not item.passed]
