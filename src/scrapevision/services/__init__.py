"""Services for ScrapeVision."""

from .job_client import JobApiClient
from .job_controller import JobController
from .scheduler import ScheduledCall, ThreadScheduler

__all__ = [
    "JobApiClient",
    "JobController",
    "ScheduledCall",
    "ThreadScheduler",
]
