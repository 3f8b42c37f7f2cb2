"""Selection of the active derived view."""

from enum import Enum

from .models import JobSnapshot


class ResultView(Enum):
    TABLE = "Table"
    STAR_HISTOGRAM = "StarHistogram"
    CONFIDENCE_CHART = "ConfidenceChart"


class ViewSelector:
    """Holds which derived view is shown."""
    
    def __init__(self, view: ResultView = ResultView.TABLE):
        self._view = ResultView(view)
    
    @property
    def view(self) -> ResultView:
        return self._view
    
    def select(self, view) -> ResultView:
        """Switch to ``view`` (enum member or its value string)."""
        self._view = view if isinstance(view, ResultView) else ResultView(view)
        return self._view
    
    @staticmethod
    def is_meaningful(snapshot: JobSnapshot) -> bool:
        """A view only makes sense once there are results to show."""
        return snapshot.has_results
