"""Job lifecycle controller: submit, poll, cancel and reset an analysis job."""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from ..core.config import settings
from ..core.constants import ErrorConstants
from ..core.errors import JobError, JobFailed, JobStateError, PollingError
from ..core.models import JobSnapshot, JobState, StatusResponse
from .job_client import JobApiClient
from .scheduler import ScheduledCall, ThreadScheduler

logger = logging.getLogger(__name__)

Listener = Callable[[JobSnapshot], None]


class JobController:
    """Owns one analysis job and its result list.

    All network work runs on the scheduler. Each unit of work is tagged with
    the generation it was scheduled for; submit, cancel, reset and every
    terminal transition bump the generation, so a response that arrives late
    is dropped instead of being applied. Callers only ever see immutable
    :class:`JobSnapshot` objects.
    """

    def __init__(self, client: JobApiClient, scheduler=None,
                 poll_interval: float = 2.0,
                 poll_backoff: float = 1.0,
                 max_poll_interval: float = 30.0,
                 max_poll_attempts: int = 900):
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if poll_backoff < 1.0:
            raise ValueError("poll_backoff must be at least 1.0")

        self._client = client
        self._owns_client = False
        self._scheduler = scheduler or ThreadScheduler()
        self._owns_scheduler = scheduler is None

        self.poll_interval = poll_interval
        self.poll_backoff = poll_backoff
        self.max_poll_interval = max(poll_interval, max_poll_interval)
        self.max_poll_attempts = max(0, int(max_poll_attempts))

        self._lock = threading.RLock()
        self._changed = threading.Condition(self._lock)
        self._listeners: List[Listener] = []
        self._closed = False

        self._state = JobState.IDLE
        self._job_id: Optional[str] = None
        self._last_error: Optional[str] = None
        self._results = ()
        self._generation = 0
        self._poll_count = 0
        self._delay = poll_interval
        self._pending: Optional[ScheduledCall] = None

    @classmethod
    def from_settings(cls, config=None, scheduler=None) -> "JobController":
        """Build a controller and its HTTP client from application settings."""
        config = config or settings
        controller = cls(
            JobApiClient.from_settings(config),
            scheduler=scheduler,
            poll_interval=config.poll_interval,
            poll_backoff=config.poll_backoff,
            max_poll_interval=config.max_poll_interval,
            max_poll_attempts=config.max_poll_attempts,
        )
        controller._owns_client = True
        return controller

    # --- observation ---

    def observe(self) -> JobSnapshot:
        """Current job state and results."""
        with self._lock:
            return self._snapshot()

    def add_listener(self, listener: Listener) -> None:
        """Call ``listener(snapshot)`` after every state change."""
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def wait(self, timeout: Optional[float] = None) -> JobSnapshot:
        """Block until the job is no longer submitting or polling (or timeout)."""
        with self._changed:
            self._changed.wait_for(lambda: not self._state.is_active, timeout)
            return self._snapshot()

    # --- commands ---

    def submit(self, url: str, params: Optional[Dict[str, Any]] = None) -> JobSnapshot:
        """Start a new job for ``url``; ``params`` is forwarded to the server as-is."""
        url = (url or "").strip()
        if not url:
            raise ValueError("A URL is required")

        with self._lock:
            if self._closed:
                raise JobStateError("Controller is closed")
            if self._state.is_active:
                raise JobStateError(f"Cannot submit while a job is {self._state.value}")

            generation = self._start_generation()
            self._job_id = None
            self._last_error = None
            self._results = ()
            self._poll_count = 0
            self._state = JobState.SUBMITTING
            self._pending = self._scheduler.call_later(
                0, self._run_submit, generation, url, dict(params or {})
            )
            snapshot = self._commit()

        logger.info(f"Submitting analysis job for {url}")
        self._notify(snapshot)
        return snapshot

    def cancel(self) -> bool:
        """Stop the active job locally and tell the server, best effort.

        Returns False when there was no active job.
        """
        with self._lock:
            if not self._state.is_active:
                return False
            job_id = self._job_id
            self._start_generation()
            self._state = JobState.CANCELED_LOCALLY
            self._last_error = None
            self._results = ()
            snapshot = self._commit()

        logger.info(f"Job {job_id or '(not yet created)'} canceled")
        if job_id:
            self._request_remote_cancel(job_id)
        self._notify(snapshot)
        return True

    def reset(self) -> JobSnapshot:
        """Forget the current job and return to Idle."""
        with self._lock:
            job_id = self._job_id if self._state.is_active else None
            self._start_generation()
            self._state = JobState.IDLE
            self._job_id = None
            self._last_error = None
            self._results = ()
            self._poll_count = 0
            snapshot = self._commit()

        if job_id:
            self._request_remote_cancel(job_id)
        self._notify(snapshot)
        return snapshot

    def close(self) -> None:
        """Cancel any active job and release the scheduler and client."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self.cancel()
        if self._owns_client:
            # Queued behind any pending cancel notification.
            self._scheduler.call_detached(self._client.close)
        if self._owns_scheduler:
            self._scheduler.shutdown()

    def __enter__(self) -> "JobController":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --- scheduled work ---

    def _run_submit(self, generation: int, url: str, params: Dict[str, Any]) -> None:
        if not self._is_current(generation, JobState.SUBMITTING):
            return
        try:
            job_id = self._client.submit(url, params)
        except JobError as e:
            self._fail(generation, e)
            return

        with self._lock:
            if not self._is_current(generation, JobState.SUBMITTING):
                stale = True
            else:
                stale = False
                self._job_id = job_id
                self._state = JobState.POLLING
                self._delay = self.poll_interval
                self._pending = self._scheduler.call_later(0, self._run_poll, generation)
                snapshot = self._commit()

        if stale:
            # The job was created after the user gave up on it.
            logger.debug(f"Discarding stale submit response for job {job_id}")
            self._request_remote_cancel(job_id)
            return
        logger.info(f"Job {job_id} accepted; polling every {self.poll_interval}s")
        self._notify(snapshot)

    def _run_poll(self, generation: int) -> None:
        with self._lock:
            if not self._is_current(generation, JobState.POLLING):
                return
            job_id = self._job_id
            self._poll_count += 1
            attempt = self._poll_count

        logger.debug(f"Polling job {job_id} (attempt {attempt})")
        try:
            response = self._client.get_status(job_id)
            if response.error:
                raise PollingError(response.error)
        except JobError as e:
            self._fail(generation, e)
            return

        with self._lock:
            if not self._is_current(generation, JobState.POLLING):
                logger.debug(f"Discarding stale status response for job {job_id}")
                return
            self._apply_status(response, attempt, generation)
            snapshot = self._commit()

        if snapshot.state == JobState.COMPLETED:
            logger.info(f"Job {job_id} completed with {len(snapshot.results)} results")
        elif snapshot.state == JobState.FAILED:
            logger.error(f"Job {job_id} failed: {snapshot.last_error}")
        self._notify(snapshot)

    def _apply_status(self, response: StatusResponse, attempt: int, generation: int) -> None:
        if len(response.results) < len(self._results):
            logger.warning(
                f"Job {self._job_id} result list shrank from {len(self._results)} to {len(response.results)}"
            )
        self._results = tuple(response.results)

        if response.is_completed:
            self._state = JobState.COMPLETED
            self._start_generation()
        elif response.is_failed:
            self._state = JobState.FAILED
            self._last_error = str(JobFailed(ErrorConstants.JOB_FAILED))
            self._start_generation()
        elif self.max_poll_attempts and attempt >= self.max_poll_attempts:
            self._state = JobState.FAILED
            self._last_error = str(PollingError(ErrorConstants.POLL_LIMIT_REACHED))
            self._start_generation()
        else:
            self._pending = self._scheduler.call_later(self._delay, self._run_poll, generation)
            self._delay = min(self._delay * self.poll_backoff, self.max_poll_interval)

    def _fail(self, generation: int, error: JobError) -> None:
        with self._lock:
            if generation != self._generation or not self._state.is_active:
                logger.debug(f"Discarding stale error: {error}")
                return
            if self._state == JobState.SUBMITTING:
                self._results = ()
            job_id = self._job_id
            self._state = JobState.FAILED
            self._last_error = str(error)
            self._start_generation()
            snapshot = self._commit()

        logger.error(f"Job {job_id or '(not created)'} failed: {error}")
        self._notify(snapshot)

    def _request_remote_cancel(self, job_id: str) -> None:
        self._scheduler.call_detached(self._send_cancel, job_id)

    def _send_cancel(self, job_id: str) -> None:
        try:
            self._client.cancel(job_id)
        except Exception as e:
            logger.warning(f"Could not notify server to cancel job {job_id}: {e}")

    # --- helpers (call with the lock held) ---

    def _is_current(self, generation: int, state: JobState) -> bool:
        with self._lock:
            return generation == self._generation and self._state == state

    def _start_generation(self) -> int:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._generation += 1
        return self._generation

    def _commit(self) -> JobSnapshot:
        self._changed.notify_all()
        return self._snapshot()

    def _snapshot(self) -> JobSnapshot:
        return JobSnapshot(
            state=self._state,
            job_id=self._job_id,
            last_error=self._last_error,
            results=self._results,
            generation=self._generation,
            poll_count=self._poll_count,
        )

    def _notify(self, snapshot: JobSnapshot) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Job listener failed")
