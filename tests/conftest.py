"""Shared fixtures: a hand-driven scheduler and a scripted job API client."""

import pytest

from scrapevision.core.models import ResultRecord, StatusResponse
from scrapevision.services.scheduler import ScheduledCall


class ManualScheduler:
    """Scheduler whose calls only run when the test asks for them."""

    def __init__(self):
        self.now = 0.0
        self.closed = False
        self._seq = 0
        self._calls = []

    def call_later(self, delay, fn, *args):
        handle = ScheduledCall()
        self._seq += 1
        self._calls.append((self.now + max(0.0, delay), self._seq, handle, fn, args))
        return handle

    def call_detached(self, fn, *args):
        return self.call_later(0, fn, *args)

    def pending(self):
        return [c for c in self._calls if not c[2].cancelled]

    def pending_names(self):
        return [c[3].__name__ for c in sorted(self.pending(), key=lambda c: (c[0], c[1]))]

    def next_due(self):
        pending = self.pending()
        return min(c[0] for c in pending) if pending else None

    def run_next(self):
        """Run the earliest pending call, advancing the clock. Returns False when idle."""
        self._calls = self.pending()
        if not self._calls:
            return False
        call = min(self._calls, key=lambda c: (c[0], c[1]))
        self._calls.remove(call)
        due, _, handle, fn, args = call
        self.now = max(self.now, due)
        fn(*args)
        return True

    def run_all(self, limit=100):
        ran = 0
        while ran < limit and self.run_next():
            ran += 1
        return ran

    def shutdown(self, wait=False):
        self.closed = True


class FakeJobClient:
    """Scripted stand-in for JobApiClient."""

    def __init__(self, job_id="J1", statuses=None, submit_error=None):
        self.job_id = job_id
        self.statuses = list(statuses or [])
        self.submit_error = submit_error
        self.cancel_error = None
        self.on_submit = None
        self.on_status = None
        self.submit_calls = []
        self.status_calls = []
        self.cancel_calls = []
        self.closed = False

    def submit(self, url, params=None):
        self.submit_calls.append((url, params))
        if self.on_submit:
            self.on_submit()
        if self.submit_error:
            raise self.submit_error
        return self.job_id

    def get_status(self, job_id):
        self.status_calls.append(job_id)
        if self.on_status:
            self.on_status()
        item = self.statuses.pop(0) if self.statuses else StatusResponse(status="pending")
        if isinstance(item, Exception):
            raise item
        return item

    def cancel(self, job_id):
        self.cancel_calls.append(job_id)
        if self.cancel_error:
            raise self.cancel_error

    def close(self):
        self.closed = True


def make_record(url="http://a", star="4 stars", sentiment="POSITIVE", score=0.87, summary="Good"):
    return ResultRecord.from_dict({
        "url": url,
        "star_label": star,
        "sentiment_label": sentiment,
        "sentiment_score": score,
        "summary": summary,
    })


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def sample_records():
    return [
        make_record("http://a", "4 stars", "POSITIVE", 0.87, "Good"),
        make_record("http://b", "1 star", "NEGATIVE", 0.91, "Broken checkout, \"awful\" support"),
        make_record("http://c", "5 stars", "POSITIVE", 0.6, "Great"),
        make_record("http://d", "5 stars", "POSITIVE", 0.8, "Line one\nline two"),
        make_record("http://e", "3 stars", "NEUTRAL", 0.5, "Okay, I guess"),
        make_record("http://f", "six stars", "MIXED", 0.4, "Unknown labels"),
    ]
