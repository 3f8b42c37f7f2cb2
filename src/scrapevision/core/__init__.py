"""Core modules for ScrapeVision."""

from .models import *
from .config import settings
from .errors import *
from .aggregation import *
from .filters import *
from .views import *

__all__ = [
    "settings",
    "ResultRecord",
    "StarLabel",
    "SentimentLabel",
    "JobState",
    "JobSnapshot",
    "StatusResponse",
    "StarCountBucket",
    "ConfidenceBucket",
    "ResultSummary",
    "parse_results",
    "crawl_params",
    "limit_params",
    "ScrapeVisionError",
    "JobError",
    "SubmissionError",
    "PollingError",
    "JobFailed",
    "JobStateError",
    "compute_star_histogram",
    "compute_average_confidence",
    "summarize",
    "FilterCriteria",
    "filter_records",
    "ResultView",
    "ViewSelector",
]
