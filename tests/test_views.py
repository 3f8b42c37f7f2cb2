"""Tests for the view selector."""

import pytest
from scrapevision.core.models import JobSnapshot, JobState
from scrapevision.core.views import ResultView, ViewSelector

from conftest import make_record


def test_default_view_is_table():
    assert ViewSelector().view == ResultView.TABLE


def test_select_by_enum_and_value():
    selector = ViewSelector()
    assert selector.select(ResultView.CONFIDENCE_CHART) == ResultView.CONFIDENCE_CHART
    assert selector.select("StarHistogram") == ResultView.STAR_HISTOGRAM
    assert selector.view == ResultView.STAR_HISTOGRAM


def test_select_unknown_view():
    with pytest.raises(ValueError):
        ViewSelector().select("PieChart")


def test_meaningful_only_with_results():
    assert not ViewSelector.is_meaningful(JobSnapshot(state=JobState.POLLING))
    assert ViewSelector.is_meaningful(JobSnapshot(state=JobState.POLLING, results=(make_record(),)))
