"""
Form data source: where the engine reads current values and writes
formatted ones back.
"""

from typing import Dict, Iterable, List, Optional, Protocol, Sequence


class FormDataSource(Protocol):
    """The physical form, as seen by the engine."""

    def get_value(self, field_id: str) -> str:
        ...

    def set_value(self, field_id: str, value: str) -> None:
        ...

    def get_selected_radio_value(self, group_name: str) -> str:
        ...

    def select_radio(self, group_name: str, value: Optional[str]) -> None:
        ...

    def get_checked_checkbox_values(self, group_name: str) -> Sequence[str]:
        ...

    def set_checkbox_values(self, group_name: str, values: Iterable[str]) -> None:
        ...


class InMemoryFormData:
    """Dict-backed form used by tests and the Streamlit app."""

    def __init__(
        self,
        values: Optional[Dict[str, str]] = None,
        radio_selections: Optional[Dict[str, str]] = None,
        checkbox_values: Optional[Dict[str, List[str]]] = None
    ):
        self._values: Dict[str, str] = dict(values or {})
        self._radio_selections: Dict[str, str] = dict(radio_selections or {})
        self._checkbox_values: Dict[str, List[str]] = {
            name: list(checked) for name, checked in (checkbox_values or {}).items()
        }

    def get_value(self, field_id: str) -> str:
        return self._values.get(field_id, "")

    def set_value(self, field_id: str, value: str) -> None:
        self._values[field_id] = value if value is not None else ""

    def get_selected_radio_value(self, group_name: str) -> str:
        return self._radio_selections.get(group_name, "")

    def select_radio(self, group_name: str, value: Optional[str]) -> None:
        if value:
            self._radio_selections[group_name] = value
        else:
            self._radio_selections.pop(group_name, None)

    def get_checked_checkbox_values(self, group_name: str) -> List[str]:
        return list(self._checkbox_values.get(group_name, []))

    def set_checkbox_values(self, group_name: str, values: Iterable[str]) -> None:
        self._checkbox_values[group_name] = list(values)

    def values(self) -> Dict[str, str]:
        return dict(self._values)

    def radio_selections(self) -> Dict[str, str]:
        return dict(self._radio_selections)

    def checkbox_values(self) -> Dict[str, List[str]]:
        return {name: list(checked) for name, checked in self._checkbox_values.items()}
