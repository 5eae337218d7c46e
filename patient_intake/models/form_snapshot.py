"""
Form Snapshot

Read-only view of the current form handed to validators. Values are read
from the underlying data source on demand, so a cross-field validator sees
its sibling's value as of the moment it runs.
"""

from datetime import date
from typing import Dict, List, Optional

from ..adapters.data_source import FormDataSource, InMemoryFormData


class FormSnapshot:
    """Lazy, read-only view over a form data source plus the evaluation date."""

    def __init__(self, source: FormDataSource, as_of: Optional[date] = None):
        self._source = source
        self.as_of = as_of or date.today()

    @classmethod
    def from_values(
        cls,
        values: Optional[Dict[str, str]] = None,
        radio_selections: Optional[Dict[str, str]] = None,
        checkbox_values: Optional[Dict[str, List[str]]] = None,
        as_of: Optional[date] = None
    ) -> "FormSnapshot":
        """Build a snapshot over plain dictionaries."""
        source = InMemoryFormData(
            values=values,
            radio_selections=radio_selections,
            checkbox_values=checkbox_values
        )
        return cls(source, as_of=as_of)

    def value(self, field_id: str) -> str:
        return self._source.get_value(field_id) or ""

    def selected(self, group_name: str) -> str:
        return self._source.get_selected_radio_value(group_name) or ""

    def checked(self, group_name: str) -> List[str]:
        return list(self._source.get_checked_checkbox_values(group_name))
