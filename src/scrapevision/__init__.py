"""ScrapeVision - crawl and sentiment analysis job client."""

__version__ = "1.0.0"
__author__ = "ScrapeVision Team"

from .core.models import *
from .core.config import settings
from .services.job_client import JobApiClient
from .services.job_controller import JobController

__all__ = [
    "settings",
    "JobApiClient",
    "JobController",
]
