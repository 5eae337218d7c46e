"""
Submission collaborator: performs the actual transport of final values.

The engine invokes it only when the error map is empty at confirm time.
"""

from typing import Any, Dict, List, Protocol


class Submitter(Protocol):

    def submit(self, values: Dict[str, Any]) -> None:
        ...


class RecordingSubmitter:
    """Submitter that keeps every payload it receives."""

    def __init__(self):
        self.submissions: List[Dict[str, Any]] = []

    def submit(self, values: Dict[str, Any]) -> None:
        self.submissions.append(dict(values))

    @property
    def last(self) -> Dict[str, Any]:
        return self.submissions[-1] if self.submissions else {}
