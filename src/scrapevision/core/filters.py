"""Record filtering by star rating and sentiment label."""

from dataclasses import dataclass
from typing import Iterable, List

from .constants import LabelConstants
from .models import (
    ResultRecord, StarLabel, SentimentLabel,
    normalize_star_label, normalize_sentiment_label,
)

ALL = LabelConstants.ALL


@dataclass(frozen=True)
class FilterCriteria:
    """Star and sentiment criteria; ``"all"`` matches everything."""
    star_label: str = ALL
    sentiment_label: str = ALL

    def __post_init__(self):
        star = _normalize_criterion(self.star_label, normalize_star_label, StarLabel)
        sentiment = _normalize_criterion(self.sentiment_label, normalize_sentiment_label, SentimentLabel)
        object.__setattr__(self, "star_label", star)
        object.__setattr__(self, "sentiment_label", sentiment)

    @property
    def is_identity(self) -> bool:
        return self.star_label == ALL and self.sentiment_label == ALL

    def matches(self, record: ResultRecord) -> bool:
        if self.star_label != ALL and normalize_star_label(record.star_label) != self.star_label:
            return False
        if self.sentiment_label != ALL and normalize_sentiment_label(record.sentiment_label) != self.sentiment_label:
            return False
        return True


def _normalize_criterion(value, normalize, labels) -> str:
    if isinstance(value, labels):
        return value.value
    if value is None or str(value).strip().lower() == ALL:
        return ALL
    normalized = normalize(value)
    if normalized not in {label.value for label in labels}:
        raise ValueError(f"Unknown filter value: {value!r}")
    return normalized


def filter_records(records: Iterable[ResultRecord], criteria: FilterCriteria) -> List[ResultRecord]:
    """Records matching both predicates, in their original order."""
    return [r for r in records if criteria.matches(r)]
