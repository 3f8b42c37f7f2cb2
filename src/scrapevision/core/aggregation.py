"""Aggregation of result records into chart buckets."""

from collections import Counter, defaultdict
from typing import Iterable, List

from .models import (
    ResultRecord, StarLabel, SentimentLabel,
    StarCountBucket, ConfidenceBucket, ResultSummary,
)


def compute_star_histogram(records: Iterable[ResultRecord]) -> List[StarCountBucket]:
    """Count records per star label.

    Always returns one bucket per star label, in ascending order. Records
    whose label is outside the enumeration are not counted.
    """
    counts = Counter(r.star for r in records if r.star is not None)
    return [StarCountBucket(star_label=s.value, count=counts.get(s, 0)) for s in StarLabel]


def compute_average_confidence(records: Iterable[ResultRecord]) -> List[ConfidenceBucket]:
    """Mean sentiment score per star label; empty labels report 0.0."""
    scores = defaultdict(list)
    for r in records:
        star = r.star
        if star is not None:
            scores[star].append(r.sentiment_score)
    
    buckets = []
    for s in StarLabel:
        values = scores.get(s)
        average = sum(values) / len(values) if values else 0.0
        buckets.append(ConfidenceBucket(star_label=s.value, average_confidence=average))
    return buckets


def summarize(records: Iterable[ResultRecord]) -> ResultSummary:
    """Totals per sentiment label and the overall mean confidence."""
    records = list(records)
    sentiments = Counter(r.sentiment for r in records)
    total = len(records)
    return ResultSummary(
        total=total,
        recognized=sum(1 for r in records if r.is_recognized),
        pos=sentiments.get(SentimentLabel.POSITIVE, 0),
        neg=sentiments.get(SentimentLabel.NEGATIVE, 0),
        neu=sentiments.get(SentimentLabel.NEUTRAL, 0),
        average_confidence=(sum(r.sentiment_score for r in records) / total) if total else 0.0,
    )
