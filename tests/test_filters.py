"""Tests for star/sentiment filtering."""

import pytest
from scrapevision.core.filters import FilterCriteria, filter_records
from scrapevision.core.models import StarLabel, SentimentLabel


class TestFilterRecords:
    """Test filter predicates over result records."""

    def test_all_is_identity(self, sample_records):
        criteria = FilterCriteria()
        assert criteria.is_identity
        assert filter_records(sample_records, criteria) == sample_records

    def test_star_filter(self, sample_records):
        result = filter_records(sample_records, FilterCriteria(star_label="5 stars"))
        assert [r.url for r in result] == ["http://c", "http://d"]

    def test_sentiment_filter_is_case_insensitive(self, sample_records):
        result = filter_records(sample_records, FilterCriteria(sentiment_label="negative"))
        assert [r.url for r in result] == ["http://b"]

    def test_conjunction(self, sample_records):
        result = filter_records(sample_records, FilterCriteria(star_label="4 stars", sentiment_label="NEGATIVE"))
        assert result == []

    def test_order_is_preserved(self, sample_records):
        result = filter_records(sample_records, FilterCriteria(sentiment_label="POSITIVE"))
        assert [r.url for r in result] == ["http://a", "http://c", "http://d"]

    def test_idempotent(self, sample_records):
        criteria = FilterCriteria(star_label="5 stars", sentiment_label="POSITIVE")
        once = filter_records(sample_records, criteria)
        assert filter_records(once, criteria) == once

    def test_enum_criteria(self, sample_records):
        criteria = FilterCriteria(star_label=StarLabel.ONE, sentiment_label=SentimentLabel.NEGATIVE)
        assert criteria.star_label == "1 star"
        assert len(filter_records(sample_records, criteria)) == 1

    def test_unrecognized_records_only_match_all(self, sample_records):
        for star in [s.value for s in StarLabel]:
            result = filter_records(sample_records, FilterCriteria(star_label=star))
            assert all(r.url != "http://f" for r in result)

    def test_unknown_criterion_rejected(self):
        with pytest.raises(ValueError):
            FilterCriteria(star_label="6 stars")
        with pytest.raises(ValueError):
            FilterCriteria(sentiment_label="MIXED")

    def test_empty_input(self):
        assert filter_records([], FilterCriteria(star_label="1 star")) == []
