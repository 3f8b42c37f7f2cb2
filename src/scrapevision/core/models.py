"""Data models for ScrapeVision."""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple

from .constants import ApiConstants, CrawlConstants

logger = logging.getLogger(__name__)


class StarLabel(Enum):
    ONE = "1 star"
    TWO = "2 stars"
    THREE = "3 stars"
    FOUR = "4 stars"
    FIVE = "5 stars"

    @property
    def stars(self) -> int:
        return int(self.value.split()[0])

    @classmethod
    def parse(cls, value) -> Optional["StarLabel"]:
        """Return the matching label, or None for anything outside the enumeration."""
        try:
            return cls(normalize_star_label(value))
        except ValueError:
            return None


class SentimentLabel(Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"

    @classmethod
    def parse(cls, value) -> Optional["SentimentLabel"]:
        try:
            return cls(normalize_sentiment_label(value))
        except ValueError:
            return None


class JobState(Enum):
    IDLE = "Idle"
    SUBMITTING = "Submitting"
    POLLING = "Polling"
    COMPLETED = "Completed"
    FAILED = "Failed"
    CANCELED_LOCALLY = "CanceledLocally"

    @property
    def is_active(self) -> bool:
        return self in (JobState.SUBMITTING, JobState.POLLING)

    @property
    def is_terminal(self) -> bool:
        return self in (JobState.COMPLETED, JobState.FAILED, JobState.CANCELED_LOCALLY)


def normalize_star_label(value) -> str:
    """Trim and lower-case a star label ("4 Stars " -> "4 stars")."""
    return " ".join(str(value or "").split()).lower()


def normalize_sentiment_label(value) -> str:
    return str(value or "").strip().upper()


def normalize_score(value) -> float:
    """Coerce a confidence to [0.0, 1.0]; absent or invalid values become 0.0."""
    if isinstance(value, bool):
        return 0.0
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(score) or score < 0.0 or score > 1.0:
        return 0.0
    return score


@dataclass(frozen=True)
class ResultRecord:
    """One crawled page with its sentiment scoring."""
    url: str
    star_label: str
    sentiment_label: str
    sentiment_score: float = 0.0
    summary: str = ""

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ResultRecord":
        """Build a record from the wire shape, normalizing labels and score."""
        summary = payload.get("summary")
        return cls(
            url=str(payload.get("url") or "").strip(),
            star_label=normalize_star_label(payload.get("star_label")),
            sentiment_label=normalize_sentiment_label(payload.get("sentiment_label")),
            sentiment_score=normalize_score(payload.get("sentiment_score")),
            summary="" if summary is None else str(summary),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "star_label": self.star_label,
            "sentiment_label": self.sentiment_label,
            "sentiment_score": self.sentiment_score,
            "summary": self.summary,
        }

    @property
    def star(self) -> Optional[StarLabel]:
        return StarLabel.parse(self.star_label)

    @property
    def sentiment(self) -> Optional[SentimentLabel]:
        return SentimentLabel.parse(self.sentiment_label)

    @property
    def stars(self) -> Optional[int]:
        star = self.star
        return star.stars if star else None

    @property
    def confidence_percent(self) -> float:
        return self.sentiment_score * 100.0

    @property
    def is_recognized(self) -> bool:
        return self.star is not None and self.sentiment is not None


def parse_results(items) -> List[ResultRecord]:
    """Convert a wire result list into records, skipping unusable entries."""
    records = []
    for index, item in enumerate(items or []):
        if not isinstance(item, dict):
            logger.warning(f"Skipping result #{index}: expected an object, got {type(item).__name__}")
            continue
        record = ResultRecord.from_dict(item)
        if not record.url:
            logger.warning(f"Skipping result #{index}: missing url")
            continue
        records.append(record)
    return records


@dataclass(frozen=True)
class StarCountBucket:
    """Histogram row: number of records with a star label."""
    star_label: str
    count: int


@dataclass(frozen=True)
class ConfidenceBucket:
    """Chart row: mean confidence of records with a star label."""
    star_label: str
    average_confidence: float

    @property
    def average_percent(self) -> float:
        return self.average_confidence * 100.0


@dataclass(frozen=True)
class ResultSummary:
    """Headline numbers over a result list."""
    total: int
    recognized: int
    pos: int
    neg: int
    neu: int
    average_confidence: float


@dataclass(frozen=True)
class StatusResponse:
    """Parsed body of a status poll."""
    status: str
    results: List[ResultRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == ApiConstants.STATUS_COMPLETED

    @property
    def is_failed(self) -> bool:
        return self.status == ApiConstants.STATUS_FAILED


@dataclass(frozen=True)
class JobSnapshot:
    """Read-only view of a controller's job and results."""
    state: JobState = JobState.IDLE
    job_id: Optional[str] = None
    last_error: Optional[str] = None
    results: Tuple[ResultRecord, ...] = ()
    generation: int = 0
    poll_count: int = 0

    @property
    def is_active(self) -> bool:
        return self.state.is_active

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    @property
    def has_results(self) -> bool:
        return len(self.results) > 0


def crawl_params(method: str = "bfs", depth: int = 5) -> Dict[str, Any]:
    """Parameter bag for a breadth/depth-first crawl."""
    method = (method or "").strip().lower()
    if method not in CrawlConstants.METHODS:
        raise ValueError(f"Unknown crawl method: {method!r}")
    depth = int(depth)
    if not CrawlConstants.MIN_DEPTH <= depth <= CrawlConstants.MAX_DEPTH:
        raise ValueError(
            f"Depth must be between {CrawlConstants.MIN_DEPTH} and {CrawlConstants.MAX_DEPTH}"
        )
    return {"method": method, "depth": depth}


def limit_params(limit: int) -> Dict[str, Any]:
    """Parameter bag for a page-limited crawl."""
    limit = int(limit)
    if limit < 1:
        raise ValueError("Limit must be positive")
    return {"limit": limit}

