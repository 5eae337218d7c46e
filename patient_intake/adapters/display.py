"""
Display adapter: the engine's only way of changing what the user sees.

The engine calls these methods and never reads rendered state back.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from ..models.review_summary import ReviewSummary


class DisplayAdapter(Protocol):

    def show_field_error(self, field_id: str, message: str) -> None:
        ...

    def show_field_success(self, field_id: str) -> None:
        ...

    def set_submit_enabled(self, enabled: bool) -> None:
        ...

    def render_review_summary(self, summary: "ReviewSummary") -> None:
        ...

    def scroll_to_review(self) -> None:
        ...

    def clear_review_summary(self) -> None:
        ...

    def show_notice(self, message: str) -> None:
        ...


class NullDisplayAdapter:
    """Display adapter that ignores every notification."""

    def show_field_error(self, field_id: str, message: str) -> None:
        pass

    def show_field_success(self, field_id: str) -> None:
        pass

    def set_submit_enabled(self, enabled: bool) -> None:
        pass

    def render_review_summary(self, summary: "ReviewSummary") -> None:
        pass

    def scroll_to_review(self) -> None:
        pass

    def clear_review_summary(self) -> None:
        pass

    def show_notice(self, message: str) -> None:
        pass


class RecordingDisplayAdapter:
    """
    Display adapter that remembers what it was told.

    Keeps the current per-field status (error message, or None for success),
    the last submit-enabled flag, the rendered review and every notice, plus
    an ordered call log.
    """

    def __init__(self):
        self.field_status: Dict[str, Optional[str]] = {}
        self.submit_enabled: bool = False
        self.review: Optional["ReviewSummary"] = None
        self.review_visible: bool = False
        self.notices: List[str] = []
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def show_field_error(self, field_id: str, message: str) -> None:
        self.calls.append(("show_field_error", (field_id, message)))
        self.field_status[field_id] = message

    def show_field_success(self, field_id: str) -> None:
        self.calls.append(("show_field_success", (field_id,)))
        self.field_status[field_id] = None

    def set_submit_enabled(self, enabled: bool) -> None:
        self.calls.append(("set_submit_enabled", (enabled,)))
        self.submit_enabled = enabled

    def render_review_summary(self, summary: "ReviewSummary") -> None:
        self.calls.append(("render_review_summary", (summary,)))
        self.review = summary
        self.review_visible = True

    def scroll_to_review(self) -> None:
        self.calls.append(("scroll_to_review", ()))

    def clear_review_summary(self) -> None:
        self.calls.append(("clear_review_summary", ()))
        self.review = None
        self.review_visible = False

    def show_notice(self, message: str) -> None:
        self.calls.append(("show_notice", (message,)))
        self.notices.append(message)

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]
